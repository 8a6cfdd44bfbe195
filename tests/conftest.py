"""Pytest configuration for EnergyWise tests."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Project root on the path so config.py imports without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config import TestingConfig  # noqa: E402
from energywise import create_app, db  # noqa: E402
from energywise.utils.devices import Appliance, Room  # noqa: E402


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mock_generator():
    """Generator double; replaces the advisor's text generator for the app under test."""
    return Mock()


@pytest.fixture
def advised_app(app, mock_generator):
    app.extensions["savings_advisor"].generator = mock_generator
    return app


def make_room(room_id="room-1", name="Sala", appliances=None):
    """Build a Room from (power, hours) tuples or Appliance objects."""
    items = []
    for index, item in enumerate(appliances or []):
        if isinstance(item, Appliance):
            items.append(item)
        else:
            power, hours = item
            items.append(Appliance(f"{room_id}-app-{index}", f"Aparelho {index}", power, hours))
    return Room(id=room_id, name=name, appliances=items)
