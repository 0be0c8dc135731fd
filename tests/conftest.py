"""Shared fixtures for the greeting service tests."""

import logging

import pytest
from fastapi.testclient import TestClient

from greeter.models import ServerConfig
from greeter.services.server import create_app


@pytest.fixture
def app():
    return create_app(ServerConfig())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def restore_root_logging():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
