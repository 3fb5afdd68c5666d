"""Fixtures for API route tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from privacy_guard.api import create_api_app
from privacy_guard.service import PrivacyGuardService
from privacy_guard.store import RecordStore


@pytest.fixture
def service(trees) -> PrivacyGuardService:
    """Service over the default policy with an empty record store."""
    return PrivacyGuardService(RecordStore(), *trees, service_id="test-service", policy_version="v1")


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_api_app(service))


@pytest.fixture
def app_id(service, make_app) -> str:
    return service.store.add_app(make_app()).id


@pytest.fixture
def user_id(service, make_preference) -> str:
    user = service.store.create_user(
        full_name="Ada",
        preference=make_preference().model_dump(exclude={"user_id"}),
    )
    return user.id
