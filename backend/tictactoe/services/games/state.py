from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Mark, Outcome, OutcomeKind


class Phase(str, Enum):
    WAITING_FOR_GUEST = 'waiting_for_guest'
    ACTIVE = 'active'
    FINISHED = 'finished'


@dataclass(frozen=True)
class GameState:
    """Snapshot of one session as read from the store.

    ``version`` is the value the store compares against on commit; a new
    state computed from this snapshot is only written if the row still
    carries the same version.
    """
    id: str
    host_id: int
    guest_id: Optional[int]
    board: Board
    active_mark: Mark
    phase: Phase
    outcome: Optional[Outcome]
    version: int
    created_at: float
    last_updated: float

    def mark_for(self, user_id: int) -> Optional[Mark]:
        if user_id == self.host_id:
            return Mark.X
        if self.guest_id is not None and user_id == self.guest_id:
            return Mark.O
        return None

    def is_participant(self, user_id) -> bool:
        return self.mark_for(user_id) is not None

    def to_dict(self):
        outcome = self.outcome
        return {
            'id': self.id,
            'host_id': self.host_id,
            'guest_id': self.guest_id,
            'size': self.board.size,
            'board': self.board.to_list(),
            'active_mark': self.active_mark.value,
            'phase': self.phase.value,
            'outcome': outcome.to_value() if outcome else None,
            'winner': outcome.mark.value if outcome and outcome.kind == OutcomeKind.WIN else None,
            'is_draw': bool(outcome and outcome.kind == OutcomeKind.DRAW),
            'version': self.version,
            'created_at': self.created_at,
            'last_updated': self.last_updated,
        }
