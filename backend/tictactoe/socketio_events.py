from flask_socketio import join_room, leave_room, emit
from flask_login import current_user
from tictactoe.services.games.errors import SessionNotFound
from tictactoe.services.games.store import SessionStore


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    if not current_user.is_authenticated:
        emit('error', {'message': 'Authentication required'})
        return
    try:
        state = SessionStore().read(session_id)
    except SessionNotFound:
        emit('error', {'message': 'Game not found.'})
        return
    if not state.is_participant(current_user.id):
        emit('error', {'message': 'Game not found.'})
        return
    room = f"session:{session_id}"
    join_room(room)
    emit('joined', {'room': room})
    # Late subscribers start from the current snapshot
    emit('state_update', state.to_dict())


def handle_leave_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = f"session:{session_id}"
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from tictactoe import socketio

    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_session', handle_join_session, namespace='/ws')
    socketio.on_event('leave_session', handle_leave_session, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_session', handle_join_session, namespace='/')
        socketio.on_event('leave_session', handle_leave_session, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
