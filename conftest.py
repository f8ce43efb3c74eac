"""Shared pytest fixtures."""

import pytest

from config.settings import Settings
from core.commands import Commands
from core.store import ProjectStore


@pytest.fixture
def store():
    """An empty store with default settings."""
    return ProjectStore(Settings(_env_file=None))


@pytest.fixture
def commands(store):
    return Commands(store)


@pytest.fixture
def demo(commands):
    """Commands bound to a store holding a freshly created 'Demo' project."""
    commands.create_project("Demo")
    return commands
