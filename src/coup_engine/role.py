"""Role variants and what each one is allowed to do."""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, Optional, Set
from .types import ActionType, RoleKind
from .actions import ActionResult
from .exceptions import IllegalAction, OutOfCoins
from .rules import GameRules

if TYPE_CHECKING:
    from .player import Player

logger = logging.getLogger(__name__)


class RoleAbilities:
    """Defines what actions each role can initiate or veto."""

    _ABILITIES = {
        RoleKind.PLAIN: {
            'actions': set(),
            'blocks': set()
        },
        RoleKind.GOVERNOR: {
            'actions': {ActionType.TAX},
            'blocks': {ActionType.TAX}
        },
        RoleKind.TAX_VETOER: {
            'actions': set(),
            'blocks': {ActionType.TAX}
        },
        RoleKind.BARON: {
            'actions': set(),
            'blocks': set()
        },
        RoleKind.SPY: {
            'actions': set(),
            'blocks': {ActionType.ARREST}
        },
        RoleKind.GENERAL: {
            'actions': set(),
            'blocks': {ActionType.ELIMINATE}
        },
        RoleKind.JUDGE: {
            'actions': set(),
            'blocks': {ActionType.BRIBE}
        },
        RoleKind.MERCHANT: {
            'actions': set(),
            'blocks': set()
        }
    }

    # Every role may gather; coups are gated by coins, not by role.
    _UNIVERSAL_ACTIONS = {ActionType.GATHER, ActionType.ELIMINATE}

    @classmethod
    def can_perform_action(cls, kind: RoleKind, action: ActionType) -> bool:
        """Check if a role can initiate a specific action."""
        return action in cls._UNIVERSAL_ACTIONS or action in cls._ABILITIES[kind]['actions']

    @classmethod
    def can_block_action(cls, kind: RoleKind, action: ActionType) -> bool:
        """Check if a role can veto a specific action."""
        return action in cls._ABILITIES[kind]['blocks']

    @classmethod
    def get_actions(cls, kind: RoleKind) -> Set[ActionType]:
        return cls._UNIVERSAL_ACTIONS | cls._ABILITIES[kind]['actions']

    @classmethod
    def get_blocks(cls, kind: RoleKind) -> Set[ActionType]:
        return cls._ABILITIES[kind]['blocks'].copy()


@dataclass(frozen=True)
class Role:
    """A player's role.

    A role holds no game state. ``grants`` lists extra actions the role may
    initiate on top of its table entry, which is how ad-hoc roles are built
    from ``RoleKind.PLAIN``.
    """
    kind: RoleKind = RoleKind.PLAIN
    grants: FrozenSet[ActionType] = field(default_factory=frozenset)

    @classmethod
    def with_grants(cls, *actions: ActionType) -> 'Role':
        """Build a plain role that may initiate the given actions."""
        return cls(RoleKind.PLAIN, frozenset(actions))

    @property
    def name(self) -> str:
        return self.kind.value

    def clone(self) -> 'Role':
        return Role(self.kind, frozenset(self.grants))

    def can_perform(self, action: ActionType) -> bool:
        return action in self.grants or RoleAbilities.can_perform_action(self.kind, action)

    def can_gather(self) -> bool:
        return self.can_perform(ActionType.GATHER)

    def can_tax(self) -> bool:
        return self.can_perform(ActionType.TAX)

    def can_bribe(self) -> bool:
        return self.can_perform(ActionType.BRIBE)

    def can_arrest(self) -> bool:
        return self.can_perform(ActionType.ARREST)

    def can_sanction(self) -> bool:
        return self.can_perform(ActionType.SANCTION)

    def can_block(self, action: ActionType) -> bool:
        return RoleAbilities.can_block_action(self.kind, action)

    def ensure_can_block(self, action: ActionType) -> None:
        """Raise IllegalAction unless this role may veto the action."""
        if not self.can_block(action):
            raise IllegalAction(f"{self.name} cannot block {action.value.lower()}")

    def overrides_sanction_penalty(self) -> bool:
        """Check if the sanctioned hook replaces the standard coin penalty."""
        return self.kind == RoleKind.BARON

    def tax_amount(self, rules: GameRules) -> int:
        if self.kind == RoleKind.GOVERNOR:
            return rules.governor_tax_amount
        return rules.tax_amount

    def arrest_amount(self, rules: GameRules) -> int:
        """Coins taken from a holder of this role when arrested."""
        if self.kind == RoleKind.MERCHANT:
            return rules.merchant_arrest_amount
        return rules.arrest_amount

    def on_arrested(self, player: 'Player') -> None:
        rules = player.game.rules
        if self.kind == RoleKind.GENERAL:
            player.add_coins(rules.general_arrest_refund)
        elif self.kind == RoleKind.MERCHANT:
            lost = min(rules.merchant_arrest_loss, player.coins)
            player.remove_coins(lost)
            player.game.return_to_pool(lost)

    def on_sanctioned(self, player: 'Player') -> None:
        if self.kind == RoleKind.BARON:
            player.add_coins(player.game.rules.baron_sanction_compensation)

    def on_start_turn(self, player: 'Player') -> None:
        rules = player.game.rules
        if self.kind == RoleKind.MERCHANT and player.coins >= rules.merchant_bonus_threshold:
            player.add_coins(rules.merchant_turn_bonus)

    def special_action(self, player: 'Player', target: Optional['Player'] = None) -> ActionResult:
        """Perform the role's own ability outside the standard actions."""
        if self.kind == RoleKind.BARON:
            return self._invest(player)
        if self.kind == RoleKind.SPY:
            return self._reveal(player, target)
        return ActionResult(True, f"{self.name} has no special action")

    def _invest(self, player: 'Player') -> ActionResult:
        rules = player.game.rules
        if player.coins < rules.baron_invest_cost:
            raise OutOfCoins(f"Baron needs {rules.baron_invest_cost} coins to invest")
        player.remove_coins(rules.baron_invest_cost)
        player.add_coins(rules.baron_invest_return)
        gained = rules.baron_invest_return - rules.baron_invest_cost
        return ActionResult(True, f"{player.name} invested and gained {gained} coins",
                            coins_gained=rules.baron_invest_return,
                            coins_lost=rules.baron_invest_cost)

    def _reveal(self, player: 'Player', target: Optional['Player']) -> ActionResult:
        if target is None:
            raise IllegalAction("Spy needs a target to reveal")
        message = f"Spy {player.name} sees that {target.name} has {target.coins} coins"
        logger.info(message)
        return ActionResult(True, message, revealed_coins=target.coins)
