"""SQL-backed session store with a compare-and-set commit.

A commit is a single ``UPDATE ... WHERE id = :id AND version = :expected``.
If another writer committed first, no row matches and ``StoreConflict`` is
raised; the caller re-reads and re-validates before trying again.
"""

import json
import time
from dataclasses import replace

from tictactoe import db
from tictactoe.models import GameSession
from .board import Board, Mark, Outcome
from .errors import SessionNotFound, StoreConflict
from .state import GameState, Phase


def _to_state(row: GameSession) -> GameState:
    return GameState(
        id=row.id,
        host_id=row.host_id,
        guest_id=row.guest_id,
        board=Board.from_list(json.loads(row.board)),
        active_mark=Mark(row.active_mark),
        phase=Phase(row.phase),
        outcome=Outcome.from_value(row.outcome),
        version=row.version,
        created_at=row.created_at,
        last_updated=row.last_updated,
    )


class SessionStore:

    def read(self, session_id: str) -> GameState:
        stmt = (
            db.select(GameSession)
            .filter_by(id=session_id)
            .execution_options(populate_existing=True)
        )
        row = db.session.execute(stmt).scalar_one_or_none()
        if row is None:
            raise SessionNotFound('Game not found.')
        return _to_state(row)

    def create(self, host_id: int, board: Board) -> GameState:
        now = time.time()
        row = GameSession(
            host_id=host_id,
            size=board.size,
            board=json.dumps(board.to_list()),
            active_mark=Mark.X.value,
            phase=Phase.WAITING_FOR_GUEST.value,
            outcome=None,
            version=1,
            created_at=now,
            last_updated=now,
        )
        db.session.add(row)
        db.session.commit()
        return _to_state(row)

    def commit(self, state: GameState, expected_version: int) -> GameState:
        now = time.time()
        stmt = (
            db.update(GameSession)
            .where(GameSession.id == state.id, GameSession.version == expected_version)
            .values(
                guest_id=state.guest_id,
                size=state.board.size,
                board=json.dumps(state.board.to_list()),
                active_mark=state.active_mark.value,
                phase=state.phase.value,
                outcome=state.outcome.to_value() if state.outcome else None,
                version=expected_version + 1,
                last_updated=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = db.session.execute(stmt)
        if result.rowcount != 1:
            db.session.rollback()
            raise StoreConflict(f'Session {state.id} changed since version {expected_version}')
        db.session.commit()
        return replace(state, version=expected_version + 1, last_updated=now)
