import os
import sys
import pytest

# Ensure the backend root (containing the `quoridor` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from quoridor import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    PORT = 3000
    HOST = '127.0.0.1'
    CORS_ORIGINS = []
    SOCKETIO_NAMESPACE = '/'
    MAX_ROOM_PLAYERS = 4
    MIN_PLAYERS = 2
    GAME_OVER_TEARDOWN_SEC = 0
    CHAT_MAX_LENGTH = 500
    LOG_LEVEL = 'INFO'


class FixedRandom:
    """Stands in for ``random`` so the first turn is predictable."""

    def __init__(self, value=0):
        self.value = value

    def randrange(self, stop):
        return self.value % stop


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected afterwards."""
    clients = []

    def _connect(nickname=None):
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        if nickname:
            test_client.emit('set-nickname', nickname)
        test_client.get_received()
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def fixed_rng():
    return FixedRandom


@pytest.fixture()
def fixed_first_turn(monkeypatch):
    """Make every game started over Socket.IO begin with seat 0."""
    from quoridor.services import rooms as rooms_module
    monkeypatch.setattr(rooms_module, 'random', FixedRandom(0))

