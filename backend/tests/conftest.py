import os
import sys
import random
import pytest

# Ensure the backend root (containing the `memorygame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from memorygame import create_app, socketio
from memorygame.models import Card
from memorygame.services.games import MatchEngine, RoomRegistry, standard_pool


class RecordingGateway:
    """Collects published events instead of sending them anywhere."""

    def __init__(self):
        self.events = []
        self.subscriptions = set()

    def publish(self, room_id, event, payload):
        self.events.append((room_id, event, payload))

    def subscribe(self, player_id, room_id):
        self.subscriptions.add((player_id, room_id))

    def unsubscribe(self, player_id, room_id):
        self.subscriptions.discard((player_id, room_id))

    def named(self, event):
        return [payload for _, name, payload in self.events if name == event]

    def clear(self):
        self.events.clear()


class ManualScheduler:
    """Holds scheduled tasks until the test fires them."""

    def __init__(self):
        self.tasks = []

    def schedule(self, room_id, delay, callback, token=None):
        self.tasks.append((room_id, delay, callback))
        return True

    def run_pending(self):
        tasks, self.tasks = self.tasks, []
        for _, _, callback in tasks:
            callback()
        return len(tasks)


@pytest.fixture()
def gateway():
    return RecordingGateway()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def engine(registry, gateway, scheduler):
    return MatchEngine(
        registry=registry,
        gateway=gateway,
        scheduler=scheduler,
        image_pool=standard_pool(45),
        reveal_delay=2.0,
        rng=random.Random(7),
    )


@pytest.fixture()
def started_room(engine, registry):
    """A started two-player room whose deck is fixed to A,B,A,B."""
    engine.create_room('p1', {'roomId': 'r1', 'playerName': 'Alice', 'turnTime': 30, 'pairCount': 2})
    engine.join_room('p2', {'roomId': 'r1', 'playerName': 'Bob'})
    room = registry.get('r1')
    room.cards = [Card(id=i, image=img) for i, img in enumerate(['A', 'B', 'A', 'B'])]
    return room


@pytest.fixture()
def flask_app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = 'test-secret'
        PUBLIC_DIR = str(tmp_path)
        REVEAL_DELAY_SEC = 0
        STANDARD_IMAGE_COUNT = 10

    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for c in clients:
        if c.is_connected():
            c.disconnect()
