import os
import sys
import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, db, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    BCRYPT_LOG_ROUNDS = 4
    CORS_ORIGINS = []
    DEFAULT_BOARD_SIZE = 3
    MAX_BOARD_SIZE = 10
    STORE_RETRY_LIMIT = 3


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    # Only hold an app context for schema setup and teardown; requests from
    # the test clients must each get their own context (and their own `g`).
    with application.app_context():
        # Ensure models are imported so tables are created
        import tictactoe.models  # noqa: F401
        db.create_all()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_context(flask_app):
    """App context for tests that call the engine directly, without a test client."""
    with flask_app.app_context():
        yield
        db.session.remove()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _register(flask_app, username):
    test_client = flask_app.test_client()
    res = test_client.post('/register', json={'username': username, 'password': 'password'})
    assert res.status_code == 201
    return test_client, res.get_json()['user']


@pytest.fixture()
def host(flask_app):
    """Logged-in test client and user dict for the session host."""
    return _register(flask_app, 'alice')


@pytest.fixture()
def guest(flask_app):
    return _register(flask_app, 'bob')


@pytest.fixture()
def stranger(flask_app):
    return _register(flask_app, 'carol')


@pytest.fixture()
def users(app_context):
    """Ids of three users created directly in the database."""
    from tictactoe.models import User
    ids = []
    for name in ('alice', 'bob', 'carol'):
        user = User(username=name)
        user.set_password('password')
        db.session.add(user)
        db.session.commit()
        ids.append(user.id)
    return ids


@pytest.fixture()
def sio_client(flask_app, host):
    host_client, _ = host
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=host_client,
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
