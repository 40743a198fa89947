"""Coup rules engine package."""

__version__ = "0.1.0"

from .game import Game
from .player import Player
from .role import Role, RoleAbilities
from .rules import GameRules, DEFAULT_RULES
from .actions import ActionResult, PendingAction
from .types import ActionType, GamePhase, RoleKind
from .exceptions import CoupError, IllegalAction, OutOfCoins, NotYourTurn, GameStillActive

__all__ = [
    "Game",
    "Player",
    "Role",
    "RoleAbilities",
    "GameRules",
    "DEFAULT_RULES",
    "ActionResult",
    "PendingAction",
    "ActionType",
    "GamePhase",
    "RoleKind",
    "CoupError",
    "IllegalAction",
    "OutOfCoins",
    "NotYourTurn",
    "GameStillActive"
]
