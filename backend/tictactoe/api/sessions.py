from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from tictactoe import socketio
from tictactoe.services.games.engine import SessionEngine
from tictactoe.services.games.errors import GameError, SessionNotFound
from tictactoe.services.games.state import GameState


sessions = Blueprint('sessions', __name__)

ERROR_STATUS = {
    'not_found': 404,
    'already_full': 409,
    'self_join': 400,
    'not_active': 409,
    'wrong_turn': 403,
    'cell_occupied': 409,
    'out_of_range': 400,
    'not_host': 403,
    'invalid_size': 400,
    'unavailable': 503,
}


class BadRequest(Exception):
    pass


def _engine() -> SessionEngine:
    return SessionEngine.from_config(current_app.config)


def _broadcast(state: GameState) -> None:
    socketio.emit('state_update', state.to_dict(), to=f"session:{state.id}", namespace='/ws')


def _optional_int(data: dict, key: str):
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise BadRequest(f'"{key}" must be an integer')
    return value


@sessions.errorhandler(GameError)
def handle_game_error(err: GameError):
    status = ERROR_STATUS.get(err.code, 400)
    return jsonify({'error': err.message, 'code': err.code}), status


@sessions.errorhandler(BadRequest)
def handle_bad_request(err: BadRequest):
    return jsonify({'error': str(err), 'code': 'bad_request'}), 400


@sessions.route('', methods=['POST'])
@login_required
def create_session():
    data = request.get_json(silent=True) or {}
    size = _optional_int(data, 'size')
    state = _engine().create(current_user.id, size)
    return jsonify(state.to_dict()), 201


@sessions.route('/<string:session_id>', methods=['GET'])
@login_required
def get_session(session_id):
    state = _engine().get(session_id)
    # Non-participants cannot tell a foreign session from a missing one
    if not state.is_participant(current_user.id):
        raise SessionNotFound('Game not found.')
    return jsonify(state.to_dict())


@sessions.route('/<string:session_id>/join', methods=['POST'])
@login_required
def join_session(session_id):
    state = _engine().join(session_id, current_user.id)
    _broadcast(state)
    return jsonify(state.to_dict())


@sessions.route('/<string:session_id>/move', methods=['POST'])
@login_required
def make_move(session_id):
    data = request.get_json(silent=True) or {}
    cell = _optional_int(data, 'index')
    if cell is None:
        row = _optional_int(data, 'row')
        col = _optional_int(data, 'col')
        if row is None or col is None:
            raise BadRequest('Provide "index" or both "row" and "col"')
        cell = (row, col)
    state = _engine().move(session_id, current_user.id, cell)
    _broadcast(state)
    return jsonify(state.to_dict())


@sessions.route('/<string:session_id>/reset', methods=['POST'])
@login_required
def reset_session(session_id):
    data = request.get_json(silent=True) or {}
    size = _optional_int(data, 'size')
    state = _engine().reset(session_id, current_user.id, size)
    _broadcast(state)
    return jsonify(state.to_dict())
