"""Main game logic: roster, turn order, coin pool and pending actions."""

import logging
from typing import Any, Dict, List, Optional, Tuple
from .types import ActionType, GamePhase
from .rules import DEFAULT_RULES, GameRules
from .player import Player
from .actions import PendingAction, PendingQueue
from .exceptions import GameStillActive, IllegalAction, OutOfCoins

logger = logging.getLogger(__name__)


class Game:
    """Rules engine for a single match.

    Players are kept in an append-only arena and referred to by seat id;
    the roster lists the seats still in play, in join order. Contestable
    actions wait in the pending queue until a turn boundary resolves them.
    An action registered during one turn stays open to vetoes for the whole
    of the following turn. A bribe resolves at the end of its own turn.
    """

    def __init__(self, rules: GameRules = DEFAULT_RULES) -> None:
        self.rules = rules
        self.phase = GamePhase.ACCEPTING
        self.action_log: List[str] = []
        self._arena: List[Player] = []
        self._roster: List[int] = []
        self._current_index = 0
        self._turn_serial = 0
        self._pool = rules.initial_pool
        self._pending = PendingQueue()

    # Roster

    def add_player(self, player: Player) -> Player:
        """Seat a player at the end of the turn order."""
        if player is None:
            raise IllegalAction("Cannot add a missing player")
        if player.game is not self:
            raise IllegalAction(f"Player {player.name} belongs to another game")
        if player.name in self.players():
            raise IllegalAction(f"Duplicate player name: {player.name}")
        if player.seat is not None:
            raise IllegalAction(f"Player {player.name} has already joined this game")

        player.seat = len(self._arena)
        self._arena.append(player)
        self._roster.append(player.seat)
        logger.debug("Seated %s at %d", player.name, player.seat)
        return player

    def remove_player(self, player: Player) -> None:
        """Take a player out of the turn order.

        The turn pointer keeps referencing the same logical successor: if the
        current player leaves, the next player in order becomes current.
        """
        if not self.is_active(player):
            raise IllegalAction(f"Player to remove not found: {player.name}")

        index = self._roster.index(player.seat)
        del self._roster[index]
        self.log_action(f"{player.name} was removed from the game")
        for entry in self._pending.remove_by_actor(player.seat):
            self.return_to_pool(entry.stake)
            self.log_action(f"{entry.action_type.value} by {player.name} was dropped")

        if not self._roster:
            self._current_index = 0
        elif index < self._current_index:
            self._current_index -= 1
        elif self._current_index >= len(self._roster):
            self._current_index = 0

    def is_active(self, player: Optional[Player]) -> bool:
        return player is not None and self._owns(player) and player.seat in self._roster

    def players(self) -> List[str]:
        """Names of active players in turn order."""
        return [self._arena[seat].name for seat in self._roster]

    def get_player(self, name: str) -> Player:
        for seat in self._roster:
            if self._arena[seat].name == name:
                return self._arena[seat]
        raise IllegalAction(f"No active player named {name}")

    def get_active_players(self) -> List[Player]:
        return [self._arena[seat] for seat in self._roster]

    # Turns

    def turn(self) -> str:
        """Name of the player whose turn it is."""
        if not self._roster:
            raise IllegalAction("No players in game")
        return self._arena[self._roster[self._current_index]].name

    def current_player(self) -> Optional[Player]:
        if not self._roster:
            return None
        return self._arena[self._roster[self._current_index]]

    def next_turn(self) -> None:
        """End the current turn.

        Resolves every pending action whose contest window has closed, moves
        the pointer to the next player and fires their start-of-turn hook.
        """
        ending = self.current_player()

        self.phase = GamePhase.RESOLVING
        try:
            for entry in self._pending.pop_due(self._turn_serial):
                self._resolve(entry)
        finally:
            self.phase = GamePhase.ACCEPTING

        if not self._roster:
            return

        # A removed current player already left the pointer on its successor.
        if self.is_active(ending):
            self._current_index = (self._current_index + 1) % len(self._roster)
        self._turn_serial += 1
        self.current_player().on_start_turn()

    def is_game_over(self) -> bool:
        return len(self._roster) <= 1

    def winner(self) -> str:
        if len(self._roster) == 1:
            return self._arena[self._roster[0]].name
        raise GameStillActive(f"{len(self._roster)} players remain")

    # Coin pool

    def pool_coins(self) -> int:
        return self._pool

    def take_from_pool(self, amount: int) -> None:
        if amount > self._pool:
            raise IllegalAction("Not enough coins in the pool")
        self._pool -= amount

    def return_to_pool(self, amount: int) -> None:
        if amount < 0:
            return
        self._pool += amount

    def must_coup(self, player: Player) -> bool:
        """Check if a player holds enough coins that they ought to coup.

        Advisory only; the engine does not force the coup.
        """
        return player.coins >= self.rules.must_coup_threshold

    # Registration

    def register_tax(self, actor: Player) -> None:
        self._register(ActionType.TAX, actor)

    def register_bribe(self, actor: Player) -> None:
        self._register(ActionType.BRIBE, actor, stake=self.rules.bribe_cost)

    def register_arrest(self, actor: Player, target: Player) -> None:
        self._register(ActionType.ARREST, actor, target)

    def register_sanction(self, actor: Player, target: Player) -> None:
        self._register(ActionType.SANCTION, actor, target, stake=self.rules.sanction_cost)

    def register_eliminate(self, actor: Player, target: Player) -> None:
        self._register(ActionType.ELIMINATE, actor, target, stake=self.rules.coup_cost)

    def ensure_active(self, player: Player) -> None:
        if not self.is_active(player):
            raise IllegalAction(f"{player.name} is not playing in this game")

    def _register(self, action_type: ActionType, actor: Player,
                  target: Optional[Player] = None, stake: int = 0) -> None:
        self.ensure_active(actor)
        if target is not None:
            self.ensure_active(target)

        entry = PendingAction(action_type, actor.seat,
                              target.seat if target is not None else None,
                              stake, self._turn_serial)
        self._pending.push(entry)
        if target is None:
            self.log_action(f"{actor.name} declared {action_type.value.lower()}")
        else:
            self.log_action(f"{actor.name} declared {action_type.value.lower()} on {target.name}")

    def pending_actions(self) -> Tuple[PendingAction, ...]:
        return self._pending.snapshot()

    # Vetoes

    def block_tax(self, blocker: Player, target: Player) -> None:
        entry = self._find_pending(ActionType.TAX, target, by_actor=True)
        self._discard(entry, blocker)

    def block_bribe(self, blocker: Player, target: Player) -> None:
        entry = self._find_pending(ActionType.BRIBE, target, by_actor=True)
        self._discard(entry, blocker)

    def block_arrest(self, blocker: Player, target: Player) -> None:
        entry = self._find_pending(ActionType.ARREST, target)
        self._discard(entry, blocker)

    def block_sanction(self, blocker: Player, target: Player) -> None:
        """Cancel a sanction; the sanctioner pays a penalty to the pool."""
        entry = self._find_pending(ActionType.SANCTION, target)
        sanctioner = self._arena[entry.actor]
        penalty = self.rules.sanction_veto_penalty
        if sanctioner.coins < penalty:
            raise OutOfCoins(f"{sanctioner.name} cannot pay the {penalty} coin sanction penalty")
        sanctioner.remove_coins(penalty)
        self.return_to_pool(penalty)
        self._discard(entry, blocker)

    def block_eliminate(self, blocker: Player, target: Player) -> None:
        """Cancel a coup; the blocker pays for the veto."""
        entry = self._find_pending(ActionType.ELIMINATE, target)
        cost = self.rules.coup_veto_cost
        if blocker.coins < cost:
            raise OutOfCoins(f"Need {cost} coins to block a coup")
        blocker.remove_coins(cost)
        self.return_to_pool(cost)
        self._discard(entry, blocker)

    block_coup = block_eliminate

    def _find_pending(self, action_type: ActionType, target: Player,
                      by_actor: bool = False) -> PendingAction:
        """Oldest pending entry of this type by the target (tax, bribe) or on it."""
        seat = target.seat if self._owns(target) else None
        field = 'actor' if by_actor else 'target'
        entry = None
        if seat is not None:
            entry = self._pending.find(
                lambda e: e.action_type == action_type and getattr(e, field) == seat)
        if entry is None:
            raise IllegalAction(f"No pending {action_type.value} to block on {target.name}")
        return entry

    def _discard(self, entry: PendingAction, blocker: Player) -> None:
        self._pending.remove(entry)
        self.return_to_pool(entry.stake)
        self.log_action(f"{blocker.name} blocked {entry.action_type.value.lower()} "
                        f"by {self._arena[entry.actor].name}")

    def _owns(self, player: Player) -> bool:
        return (player.seat is not None and player.seat < len(self._arena)
                and self._arena[player.seat] is player)

    # Resolution

    def _resolve(self, entry: PendingAction) -> None:
        actor = self._arena[entry.actor]
        target = self._arena[entry.target] if entry.target is not None else None
        action_type = entry.action_type

        if action_type == ActionType.TAX:
            amount = actor.role.tax_amount(self.rules)
            actor.add_coins(amount)
            self.log_action(f"{actor.name} collected {amount} coins in tax")

        elif action_type == ActionType.BRIBE:
            if actor is self.current_player():
                self._current_index = (self._current_index - 1) % len(self._roster)
                self.log_action(f"{actor.name} bribed for an extra turn")

        elif action_type == ActionType.ARREST:
            if self.is_active(actor) and self.is_active(target):
                stolen = min(target.role.arrest_amount(self.rules), target.coins)
                target.remove_coins(stolen)
                actor.add_coins(stolen)
                self.log_action(f"{actor.name} arrested {target.name} and took {stolen} coins")
                target.handle_arrested()

        elif action_type == ActionType.SANCTION:
            if self.is_active(actor) and self.is_active(target):
                if not target.role.overrides_sanction_penalty() and target.coins > 0:
                    fine = min(self.rules.sanction_fine, target.coins)
                    target.remove_coins(fine)
                    self.return_to_pool(fine)
                self.log_action(f"{actor.name} sanctioned {target.name}")
                target.handle_sanctioned()

        elif action_type == ActionType.ELIMINATE:
            if self.is_active(actor) and self.is_active(target):
                self.log_action(f"{actor.name} couped {target.name}")
                self.remove_player(target)

        # Stakes paid up front are spent into the pool.
        self.return_to_pool(entry.stake)

    # Queries

    def log_action(self, message: str) -> None:
        """Log an action to the game log."""
        self.action_log.append(message)
        logger.info(message)

    def get_game_state(self) -> Dict[str, Any]:
        """Get current game state as dictionary."""
        current = self.current_player()
        return {
            'phase': self.phase.value,
            'current_player': current.name if current else None,
            'pool': self._pool,
            'players': [
                {
                    'name': p.name,
                    'role': p.role_name,
                    'coins': p.coins,
                    'must_coup': self.must_coup(p)
                }
                for p in self.get_active_players()
            ],
            'pending': [
                {
                    'action': e.action_type.value,
                    'actor': self._arena[e.actor].name,
                    'target': self._arena[e.target].name if e.target is not None else None
                }
                for e in self._pending
            ],
            'winner': self.winner() if len(self._roster) == 1 else None,
            'action_log': self.action_log[-10:]  # Last 10 actions
        }
