from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from .errors import CellOccupied, InvalidSize, OutOfRange


MIN_BOARD_SIZE = 3


class Mark(str, Enum):
    X = 'X'
    O = 'O'

    @property
    def other(self) -> 'Mark':
        return Mark.O if self is Mark.X else Mark.X


class OutcomeKind(str, Enum):
    IN_PROGRESS = 'in_progress'
    WIN = 'win'
    DRAW = 'draw'


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    mark: Optional[Mark] = None

    @classmethod
    def win(cls, mark: Mark) -> 'Outcome':
        return cls(OutcomeKind.WIN, mark)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS

    def to_value(self) -> Optional[str]:
        """Column value: the winning mark, 'draw', or None while in progress."""
        if self.kind == OutcomeKind.WIN:
            return self.mark.value
        if self.kind == OutcomeKind.DRAW:
            return 'draw'
        return None

    @classmethod
    def from_value(cls, value: Optional[str]) -> Optional['Outcome']:
        if value is None:
            return None
        if value == 'draw':
            return DRAW
        return cls.win(Mark(value))


IN_PROGRESS = Outcome(OutcomeKind.IN_PROGRESS)
DRAW = Outcome(OutcomeKind.DRAW)


@dataclass(frozen=True)
class Board:
    """An N x N grid stored row-major. Boards are values: place() returns a copy."""
    size: int
    cells: Tuple[Optional[Mark], ...]

    @classmethod
    def empty(cls, size: int) -> 'Board':
        if not isinstance(size, int) or size < MIN_BOARD_SIZE:
            raise InvalidSize(f'Board size must be at least {MIN_BOARD_SIZE}, got {size!r}')
        return cls(size, (None,) * (size * size))

    @classmethod
    def from_list(cls, cells) -> 'Board':
        size = int(round(len(cells) ** 0.5))
        if size < MIN_BOARD_SIZE or size * size != len(cells):
            raise InvalidSize(f'Cannot build a square board from {len(cells)} cells')
        return cls(size, tuple(Mark(c) if c is not None else None for c in cells))

    def to_list(self):
        return [c.value if c is not None else None for c in self.cells]

    @property
    def mark_count(self) -> int:
        return sum(1 for c in self.cells if c is not None)

    @property
    def is_full(self) -> bool:
        return all(c is not None for c in self.cells)

    def index_of(self, row: int, col: int) -> int:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfRange(f'Cell ({row}, {col}) is outside a {self.size}x{self.size} board')
        return row * self.size + col

    def place(self, index: int, mark: Mark) -> 'Board':
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.cells):
            raise OutOfRange(f'Index {index!r} is outside [0, {len(self.cells)})')
        if self.cells[index] is not None:
            raise CellOccupied('This position is already taken.')
        cells = list(self.cells)
        cells[index] = mark
        return Board(self.size, tuple(cells))

    def lines(self) -> Iterator[Tuple[int, ...]]:
        """Yield the 2N + 2 candidate winning lines as index tuples."""
        n = self.size
        for i in range(n):
            yield tuple(i * n + j for j in range(n))
        for i in range(n):
            yield tuple(i + j * n for j in range(n))
        yield tuple(j * n + j for j in range(n))
        yield tuple(j * n + (n - 1 - j) for j in range(n))


def evaluate(board: Board) -> Outcome:
    """Return Win(mark) for the first uniform line, Draw on a full board, else InProgress."""
    for line in board.lines():
        first = board.cells[line[0]]
        if first is not None and all(board.cells[i] == first for i in line):
            return Outcome.win(first)
    if board.is_full:
        return DRAW
    return IN_PROGRESS
