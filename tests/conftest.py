import os
import sys

import pytest

# Ensure the project root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient

from tictactoe.app import create_app
from tictactoe.config import Config
from tictactoe.services import Services
from tictactoe.state import AppContext


class TestConfig(Config):
    LOG_LEVEL = 'WARNING'
    CORS_ALLOW_ORIGINS = ['*']
    DEFAULT_PAGE_LIMIT = 10
    DEFAULT_SEARCH_LIMIT = 10


@pytest.fixture()
def context():
    return AppContext()


@pytest.fixture()
def services(context):
    return Services(context)


@pytest.fixture()
def alice(services):
    return services.players.create_player('Alice', 'alice@example.com')


@pytest.fixture()
def bob(services):
    return services.players.create_player('Bob', 'bob@example.com')


@pytest.fixture()
def active_game(services, alice, bob):
    """A game with Alice and Bob joined; Alice to move."""
    game = services.games.create_game('TestGame')
    services.games.join_game(game.id, alice.id)
    return services.games.join_game(game.id, bob.id)


@pytest.fixture()
def api_app(context):
    return create_app(TestConfig, context=context)


@pytest.fixture()
def client(api_app):
    return TestClient(api_app)
