"""Pending actions and the queue that holds them until resolution."""

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple
from .types import ActionType
from .exceptions import IllegalAction


@dataclass
class ActionResult:
    """Outcome of an action that reports back to the caller."""
    success: bool
    message: str
    coins_gained: int = 0
    coins_lost: int = 0
    revealed_coins: Optional[int] = None


@dataclass(frozen=True)
class PendingAction:
    """A contestable action waiting for the next resolution sweep.

    Players are referenced by seat id, the stable index the game assigned
    when the player joined.
    """
    action_type: ActionType
    actor: int
    target: Optional[int] = None
    stake: int = 0
    turn: int = 0

    def is_due(self, current_turn: int) -> bool:
        """Check if the entry has had its full contest window."""
        if self.action_type == ActionType.BRIBE:
            return True
        return self.turn < current_turn


class PendingQueue:
    """FIFO queue of pending actions, owned by a single game."""

    def __init__(self) -> None:
        self._entries: List[PendingAction] = []

    def push(self, entry: PendingAction) -> None:
        if entry.action_type == ActionType.GATHER:
            raise IllegalAction("Gather is never pending")
        self._entries.append(entry)

    def find(self, predicate: Callable[[PendingAction], bool]) -> Optional[PendingAction]:
        """Return the oldest entry matching the predicate."""
        for entry in self._entries:
            if predicate(entry):
                return entry
        return None

    def remove(self, entry: PendingAction) -> None:
        # identity, not equality: two identical registrations are distinct entries
        for i, candidate in enumerate(self._entries):
            if candidate is entry:
                del self._entries[i]
                return
        raise ValueError("Entry is not pending")

    def remove_by_actor(self, actor: int) -> List[PendingAction]:
        """Remove and return every entry the given seat registered."""
        removed = [e for e in self._entries if e.actor == actor]
        self._entries = [e for e in self._entries if e.actor != actor]
        return removed

    def pop_due(self, current_turn: int) -> List[PendingAction]:
        """Remove and return every entry due at this turn boundary, oldest first."""
        due = [e for e in self._entries if e.is_due(current_turn)]
        self._entries = [e for e in self._entries if not e.is_due(current_turn)]
        return due

    def snapshot(self) -> Tuple[PendingAction, ...]:
        return tuple(self._entries)

    def __iter__(self) -> Iterator[PendingAction]:
        return iter(self.snapshot())
