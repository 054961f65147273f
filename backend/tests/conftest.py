import itertools
import os
import sys
import pytest

# Ensure the backend root (containing the `scoreroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreroom import create_app, socketio
from scoreroom.store import SessionStore


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = []
    SOCKETIO_NAMESPACE = '/'
    SOCKETIO_PATH = 'socket.io'
    SOCKETIO_PING_INTERVAL = 25
    SOCKETIO_PING_TIMEOUT = 20
    LOG_LEVEL = 'DEBUG'


def counting_ids(prefix):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture()
def store():
    return SessionStore(
        id_factory=counting_ids('id'),
        clock=lambda: '2024-05-01T12:00:00+00:00',
    )


@pytest.fixture()
def flask_app(store):
    application = create_app(TestConfig, store=store)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio(flask_app):
    """Factory for extra Socket.IO clients; all are disconnected at teardown."""
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        # Flush the connect greeting
        test_client.get_received()
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


@pytest.fixture()
def sio_client(make_sio):
    return make_sio()
