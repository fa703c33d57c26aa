import os
import random
import sys
import pytest

# Ensure the backend root (containing the `uno_server` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from uno_server import create_app, rooms, socketio
from uno_server.models import Card, DiscardEntry, Player
from uno_server.services.uno.session import GameSession, IN_PROGRESS


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    MIN_PLAYERS = 2
    HAND_SIZE = 7
    NOTIFY_SCOPE = 'room'
    CORS_ORIGINS = '*'
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    rooms.rng = random.Random(1234)
    with application.app_context():
        yield application
    rooms.clear()
    rooms.rng = None


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


def card(color, value, card_id=None):
    return Card(id=card_id or f'{color}-{value}', color=color, value=value)


def make_session(hands, top, deck=None, order=None):
    """Build an in-progress session with hand-picked cards.

    ``hands`` maps player id to a list of cards; seating follows ``order``
    (or dict order) and player 0 is due to act.
    """
    session = GameSession('test-room', rng=random.Random(7))
    for pid in (order or list(hands)):
        session.players.append(Player(id=pid, name=pid.upper(), hand=list(hands[pid])))
    session.discard = [top if isinstance(top, DiscardEntry) else DiscardEntry(top)]
    session.deck = list(deck or [])
    session.status = IN_PROGRESS
    return session


@pytest.fixture()
def session_factory():
    return make_session


@pytest.fixture()
def card_factory():
    return card
