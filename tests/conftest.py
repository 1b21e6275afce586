"""Shared fixtures for engine and service tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app import create_app
from models import DEFAULT_LIMITS


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app(limits=DEFAULT_LIMITS))
