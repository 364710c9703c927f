"""Game domain services: board rules and the session engine.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics.
"""

from .board import Board, Mark, Outcome, OutcomeKind, evaluate
from .engine import SessionEngine
from .errors import GameError
from .state import GameState, Phase
from .store import SessionStore
