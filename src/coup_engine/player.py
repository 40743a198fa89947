"""Player implementation for the Coup engine."""

from typing import TYPE_CHECKING, List, Optional
from .types import ActionType
from .role import Role
from .actions import ActionResult
from .exceptions import IllegalAction, NotYourTurn, OutOfCoins

if TYPE_CHECKING:
    from .game import Game


class Player:
    """Represents a player in a Coup game.

    The player owns its role and coins. The game it plays in is the single
    source of truth for turn order, the pool and pending actions.
    """

    def __init__(self, name: str, role: Role, game: 'Game') -> None:
        if game is None:
            raise IllegalAction(f"Game is missing for player {name}")
        self._name = name
        self._coins = 0
        self._role = role
        self._game = game
        self.seat: Optional[int] = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def coins(self) -> int:
        return self._coins

    @property
    def role(self) -> Role:
        return self._role

    @property
    def role_name(self) -> str:
        return self._role.name

    @property
    def game(self) -> 'Game':
        return self._game

    def set_role(self, role: Role) -> None:
        self._role = role

    def clone(self) -> 'Player':
        """Duplicate this player with an independent copy of its role.

        The copy is not seated in the game.
        """
        copy = Player(self._name, self._role.clone(), self._game)
        copy._coins = self._coins
        return copy

    def _ensure_my_turn(self) -> None:
        if self._game.current_player() is not self:
            raise NotYourTurn(f"Player {self._name} tried to act out of turn")

    def _ensure_affordable(self, amount: int, action: str) -> None:
        if self._coins < amount:
            raise OutOfCoins(f"Need {amount} coins to {action}")

    # Actions

    def gather(self) -> None:
        """Take 1 coin. Never contestable."""
        self._ensure_my_turn()
        amount = self._game.rules.gather_amount
        self.add_coins(amount)
        self._game.log_action(f"{self._name} gathered {amount} coin")
        self._game.next_turn()

    def tax(self) -> None:
        """Claim tax; coins are granted when the claim resolves."""
        self._ensure_my_turn()
        if not self._role.can_tax():
            raise IllegalAction(f"Role {self.role_name} cannot tax")
        self._game.register_tax(self)
        self._game.next_turn()

    def bribe(self) -> None:
        """Pay for an extra turn. The turn does not advance."""
        self._ensure_my_turn()
        if not self._role.can_bribe():
            raise IllegalAction(f"Role {self.role_name} cannot bribe")
        cost = self._game.rules.bribe_cost
        self._ensure_affordable(cost, "bribe")
        self.remove_coins(cost)
        self._game.register_bribe(self)

    def arrest(self, target: 'Player') -> None:
        self._ensure_my_turn()
        if not self._role.can_arrest():
            raise IllegalAction(f"Role {self.role_name} cannot arrest")
        if target is self:
            raise IllegalAction("Cannot arrest yourself")
        self._game.ensure_active(target)
        self._game.register_arrest(self, target)
        self._game.next_turn()

    def sanction(self, target: 'Player') -> None:
        self._ensure_my_turn()
        if not self._role.can_sanction():
            raise IllegalAction(f"Role {self.role_name} cannot sanction")
        self._game.ensure_active(target)
        cost = self._game.rules.sanction_cost
        self._ensure_affordable(cost, "sanction")
        self.remove_coins(cost)
        self._game.register_sanction(self, target)
        self._game.next_turn()

    def coup(self, target: 'Player') -> None:
        """Stake coins to eliminate the target at the next resolution."""
        self._ensure_my_turn()
        cost = self._game.rules.coup_cost
        self._ensure_affordable(cost, "coup")
        if target is self:
            raise IllegalAction("Cannot coup yourself")
        self._game.ensure_active(target)
        self.remove_coins(cost)
        self._game.register_eliminate(self, target)
        self._game.next_turn()

    eliminate = coup

    def special_action(self, target: Optional['Player'] = None) -> ActionResult:
        result = self._role.special_action(self, target)
        self._game.log_action(result.message)
        return result

    def get_available_actions(self) -> List[ActionType]:
        """Actions this player's role allows and its coins can pay for."""
        rules = self._game.rules
        costs = {
            ActionType.BRIBE: rules.bribe_cost,
            ActionType.SANCTION: rules.sanction_cost,
            ActionType.ELIMINATE: rules.coup_cost,
        }
        return [action for action in ActionType
                if self._role.can_perform(action) and self._coins >= costs.get(action, 0)]

    # Vetoes

    def block_tax(self, target: 'Player') -> None:
        self._role.ensure_can_block(ActionType.TAX)
        self._game.block_tax(self, target)

    def block_bribe(self, target: 'Player') -> None:
        self._role.ensure_can_block(ActionType.BRIBE)
        self._game.block_bribe(self, target)

    def block_arrest(self, target: 'Player') -> None:
        self._role.ensure_can_block(ActionType.ARREST)
        self._game.block_arrest(self, target)

    def block_sanction(self, target: 'Player') -> None:
        self._role.ensure_can_block(ActionType.SANCTION)
        self._game.block_sanction(self, target)

    def block_eliminate(self, target: 'Player') -> None:
        self._role.ensure_can_block(ActionType.ELIMINATE)
        self._game.block_eliminate(self, target)

    block_coup = block_eliminate

    # Hooks fired by the game

    def on_start_turn(self) -> None:
        self._role.on_start_turn(self)

    def handle_arrested(self) -> None:
        self._role.on_arrested(self)

    def handle_sanctioned(self) -> None:
        self._role.on_sanctioned(self)

    # Coins

    def add_coins(self, amount: int) -> None:
        """Add coins to player's total. Negative amounts are ignored."""
        if amount < 0:
            return
        self._coins += amount

    def remove_coins(self, amount: int) -> None:
        if amount > self._coins:
            raise OutOfCoins(f"Player {self._name} cannot remove {amount} coins")
        self._coins -= amount

    def must_coup(self) -> bool:
        """Check if player must coup (10+ coins)."""
        return self._game.must_coup(self)

    def __str__(self) -> str:
        return f"{self._name} ({self.role_name}, {self._coins} coins)"

    def __repr__(self) -> str:
        return f"Player(name='{self._name}', role={self.role_name}, coins={self._coins})"
