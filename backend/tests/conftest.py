import itertools
import os
import sys
import pytest

# Ensure the backend root (containing the `territory` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from territory import create_app, socketio
from territory.services.game import GameContext


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = '/'
    GRID_SIZE = 50
    CELL_COOLDOWN_MS = 5000
    VICTORY_THRESHOLD = 1000
    ROUND_DURATION_MS = 600_000
    ROUND_TICK_INTERVAL_MS = 5000
    LEADERBOARD_SIZE = 10
    HOST = '127.0.0.1'
    PORT = 3000


class FakeClock:
    def __init__(self, now=1_000_000):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class ManualScheduler:
    """Runs scheduled callbacks only when the test advances the clock."""

    def __init__(self, clock):
        self.clock = clock
        self._tasks = {}
        self._tokens = itertools.count(1)

    def schedule(self, delay_ms, callback, *args):
        token = next(self._tokens)
        self._tasks[token] = (self.clock.now + delay_ms, callback, args)
        return token

    def cancel(self, token):
        self._tasks.pop(token, None)

    def pending(self):
        return sorted(cb.__name__ for _, cb, _ in self._tasks.values())

    def advance(self, ms):
        target = self.clock.now + ms
        while True:
            due = [(when, tok) for tok, (when, _, _) in self._tasks.items() if when <= target]
            if not due:
                break
            when, tok = min(due)
            _, callback, args = self._tasks.pop(tok)
            self.clock.now = max(self.clock.now, when)
            callback(*args)
        self.clock.now = target


class RecordingBroadcaster:
    def __init__(self):
        self.sent = []

    def send_to_all(self, event, payload, skip_sid=None):
        self.sent.append(('*', event, payload))

    def send_to(self, sid, event, payload):
        self.sent.append((sid, event, payload))

    def events(self, name=None):
        if name is None:
            return [e for _, e, _ in self.sent]
        return [p for _, e, p in self.sent if e == name]

    def clear(self):
        self.sent.clear()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler(clock):
    return ManualScheduler(clock)


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def make_ctx(clock, scheduler, broadcaster):
    def _make(**overrides):
        config = {k: v for k, v in vars(TestConfig).items() if k.isupper()}
        config.update(overrides)
        return GameContext(config, broadcaster, scheduler, clock=clock)
    return _make


@pytest.fixture()
def ctx(make_ctx):
    return make_ctx()


@pytest.fixture()
def make_app(clock, scheduler):
    def _make(**overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        return create_app(config_class, clock=clock, scheduler=scheduler)
    return _make


@pytest.fixture()
def flask_app(make_app):
    application = make_app()
    yield application
    application.extensions['territory'].shutdown()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect(application=None):
        test_client = socketio.test_client(application or flask_app)
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


def owned_cells(ctx, player_id):
    """Count cells owned by ``player_id`` by scanning the board."""
    return sum(1 for c in ctx.grid.snapshot() if c['ownerId'] == player_id)
