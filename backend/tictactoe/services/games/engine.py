from dataclasses import replace
from typing import Callable, Optional, Tuple, Union

from flask import current_app

from .board import Board, Mark, evaluate
from .errors import (
    AlreadyFull,
    InvalidSize,
    NotActive,
    NotHost,
    SelfJoin,
    StoreConflict,
    Unavailable,
    WrongTurn,
)
from .state import GameState, Phase
from .store import SessionStore


def apply_join(state: GameState, caller_id: int) -> GameState:
    if caller_id == state.host_id:
        raise SelfJoin("You can't join your own game.")
    if state.guest_id is not None:
        raise AlreadyFull('This game is already full.')
    return replace(state, guest_id=caller_id, phase=Phase.ACTIVE)


def apply_move(state: GameState, caller_id: int, cell: Union[int, Tuple[int, int]]) -> GameState:
    """Place the active mark for ``caller_id`` and advance the turn or finish the game.

    ``cell`` is a flat index or a ``(row, col)`` pair; a pair is resolved
    against this snapshot's board so it always addresses the board being
    committed. Host always plays X and guest always plays O, so a caller may
    only act while ``active_mark`` is their mark.
    """
    if state.phase != Phase.ACTIVE:
        raise NotActive('This game is not active.')
    if state.mark_for(caller_id) != state.active_mark:
        raise WrongTurn("It's not your turn.")
    index = state.board.index_of(*cell) if isinstance(cell, tuple) else cell
    board = state.board.place(index, state.active_mark)
    outcome = evaluate(board)
    if outcome.is_terminal:
        return replace(state, board=board, phase=Phase.FINISHED, outcome=outcome)
    return replace(state, board=board, active_mark=state.active_mark.other)


def apply_reset(state: GameState, caller_id: int, board: Board) -> GameState:
    if caller_id != state.host_id:
        raise NotHost('Only the host can reset the game.')
    return replace(state, board=board, active_mark=Mark.X, phase=Phase.ACTIVE, outcome=None)


class SessionEngine:
    """Runs every session mutation as read, validate, compare-and-set commit.

    A ``StoreConflict`` on commit means another request won the race; the
    operation is re-run against a fresh read, up to ``retry_limit`` attempts.
    """

    def __init__(self, store: Optional[SessionStore] = None, default_size: int = 3,
                 max_size: int = 10, retry_limit: int = 5):
        self.store = store or SessionStore()
        self.default_size = default_size
        self.max_size = max_size
        self.retry_limit = max(1, retry_limit)

    @classmethod
    def from_config(cls, config, store: Optional[SessionStore] = None) -> 'SessionEngine':
        return cls(
            store=store,
            default_size=int(config.get('DEFAULT_BOARD_SIZE', 3)),
            max_size=int(config.get('MAX_BOARD_SIZE', 10)),
            retry_limit=int(config.get('STORE_RETRY_LIMIT', 5)),
        )

    def new_board(self, size: Optional[int]) -> Board:
        size = self.default_size if size is None else size
        if isinstance(size, int) and size > self.max_size:
            raise InvalidSize(f'Board size must be at most {self.max_size}, got {size}')
        return Board.empty(size)

    def get(self, session_id: str) -> GameState:
        return self.store.read(session_id)

    def create(self, host_id: int, size: Optional[int] = None) -> GameState:
        state = self.store.create(host_id, self.new_board(size))
        current_app.logger.info(f"[create] session={state.id} host={host_id} size={state.board.size}")
        return state

    def join(self, session_id: str, caller_id: int) -> GameState:
        state = self._transact(session_id, 'join', lambda s: apply_join(s, caller_id))
        current_app.logger.info(f"[join] session={session_id} guest={caller_id}")
        return state

    def move(self, session_id: str, caller_id: int, cell: Union[int, Tuple[int, int]]) -> GameState:
        state = self._transact(session_id, 'move', lambda s: apply_move(s, caller_id, cell))
        current_app.logger.info(
            f"[move] session={session_id} caller={caller_id} cell={cell} "
            f"phase={state.phase.value} outcome={state.outcome.to_value() if state.outcome else 'in_progress'}"
        )
        return state

    def reset(self, session_id: str, caller_id: int, size: Optional[int] = None) -> GameState:
        def _apply(s: GameState) -> GameState:
            board = self.new_board(size if size is not None else s.board.size)
            return apply_reset(s, caller_id, board)

        state = self._transact(session_id, 'reset', _apply)
        current_app.logger.info(f"[reset] session={session_id} host={caller_id} size={state.board.size}")
        return state

    def _transact(self, session_id: str, op: str, apply: Callable[[GameState], GameState]) -> GameState:
        for attempt in range(1, self.retry_limit + 1):
            current = self.store.read(session_id)
            updated = apply(current)
            try:
                return self.store.commit(updated, current.version)
            except StoreConflict:
                current_app.logger.warning(
                    f"[conflict] op={op} session={session_id} version={current.version} attempt={attempt}/{self.retry_limit}"
                )
        current_app.logger.warning(f"[unavailable] op={op} session={session_id} retries exhausted")
        raise Unavailable('The game is busy, please try again.')
