"""Game session error kinds.

Each class carries a stable ``code`` so HTTP and socket clients can tell
"not your turn" apart from "cell taken" without parsing messages.
"""


class GameError(Exception):
    code = 'game_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionNotFound(GameError):
    code = 'not_found'


class AlreadyFull(GameError):
    code = 'already_full'


class SelfJoin(GameError):
    code = 'self_join'


class NotActive(GameError):
    code = 'not_active'


class WrongTurn(GameError):
    code = 'wrong_turn'


class CellOccupied(GameError):
    code = 'cell_occupied'


class OutOfRange(GameError):
    code = 'out_of_range'


class NotHost(GameError):
    code = 'not_host'


class InvalidSize(GameError):
    code = 'invalid_size'


class StoreConflict(GameError):
    """The row changed between read and commit. Retried inside the engine."""
    code = 'store_conflict'


class Unavailable(GameError):
    code = 'unavailable'
