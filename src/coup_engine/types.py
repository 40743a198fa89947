"""Type definitions for the Coup engine."""

from enum import Enum


class ActionType(Enum):
    """Actions a player can take on their turn."""
    GATHER = "Gather"
    TAX = "Tax"
    BRIBE = "Bribe"
    ARREST = "Arrest"
    SANCTION = "Sanction"
    ELIMINATE = "Eliminate"


class RoleKind(Enum):
    """Role variants a player can hold."""
    PLAIN = "Plain"
    GOVERNOR = "Governor"
    TAX_VETOER = "Vetoer"
    BARON = "Baron"
    SPY = "Spy"
    GENERAL = "General"
    JUDGE = "Judge"
    MERCHANT = "Merchant"


class GamePhase(Enum):
    """Engine phases as seen by callers."""
    ACCEPTING = "Accepting"
    RESOLVING = "Resolving"
