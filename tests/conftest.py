"""Test configuration and fixtures.

Every test gets its own application built on an in-memory SQLite database,
so task ids start at 1 and chat registries never leak between tests.
"""

import os
import time
from typing import Callable, Generator

# Set env flags BEFORE importing application modules
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STATIC_DIR", "./.no-static-in-tests")

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from config import Settings
from main import create_app


def wait_for(predicate: Callable[[], bool], timeout: float = 2.0) -> bool:
    """Poll predicate until it holds; server-side cleanup runs on the app's loop."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


@pytest.fixture()
def make_app() -> Callable[..., FastAPI]:
    def _make(**overrides) -> FastAPI:
        overrides.setdefault("DATABASE_URL", "sqlite://")
        return create_app(Settings(**overrides))
    return _make


@pytest.fixture()
def app(make_app) -> FastAPI:
    return make_app()


@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    # Entering the client runs the lifespan, which starts the broadcast hub
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def wait_until() -> Callable[..., bool]:
    return wait_for
