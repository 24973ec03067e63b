import os
import sys
import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, socketio
from tictactoe.gateway import ConnectionGateway
from tictactoe.registry import RoomRegistry
from tictactoe.services.games.scheduler import RoundTransitionScheduler


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ROUND_RESET_DELAY_SEC = 0
    ROUND_TIMERS_INLINE = True
    SOCKETIO_NAMESPACE = '/'
    CORS_ALLOWED_ORIGINS = '*'
    HOST = '127.0.0.1'
    PORT = 5000


class DeferredSpawner:
    """Collects background tasks so a test decides when timers fire."""

    def __init__(self):
        self.tasks = []

    def __call__(self, fn, *args, **kwargs):
        self.tasks.append((fn, args, kwargs))

    def run_all(self):
        tasks, self.tasks = self.tasks, []
        for fn, args, kwargs in tasks:
            fn(*args, **kwargs)
        return len(tasks)


class RecordingChannel:
    """Stands in for Socket.IO: records every outbound message and group change."""

    def __init__(self):
        self.sent = []
        self.groups = {}

    def broadcast(self, room_code, event, payload):
        self.sent.append((room_code, event, payload))

    def send(self, connection_id, event, payload):
        self.sent.append((connection_id, event, payload))

    def add(self, connection_id, room_code):
        self.groups.setdefault(room_code, set()).add(connection_id)

    def discard(self, connection_id, room_code):
        self.groups.get(room_code, set()).discard(connection_id)

    def events(self, name=None):
        return [(to, ev, payload) for to, ev, payload in self.sent if name is None or ev == name]

    def clear(self):
        self.sent = []


@pytest.fixture()
def spawner():
    return DeferredSpawner()


@pytest.fixture()
def channel():
    return RecordingChannel()


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def gateway(channel, spawner, sleeps):
    scheduler = RoundTransitionScheduler(spawner, sleep=sleeps.append)
    return ConnectionGateway(RoomRegistry(), channel, scheduler)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_sio_client(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except RuntimeError:
            pass
