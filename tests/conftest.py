"""
Shared test fixtures — seed-data repository, default form, API test client.
"""

import pytest
from fastapi.testclient import TestClient

from printquote.config import DEFAULT_SEED_DATA_PATH
from printquote.main import app
from printquote.repository import get_repository, load_repository


# Every API test reads the bundled seed data, whatever SEED_DATA_PATH says
test_repository = load_repository(DEFAULT_SEED_DATA_PATH)


def override_get_repository():
    return test_repository


app.dependency_overrides[get_repository] = override_get_repository


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def repository():
    """Repository over the bundled seed data."""
    return test_repository


@pytest.fixture
def default_form():
    """The Business Card starting form: 65×90 sheet, 9×5.5 card, 130 sheets entered."""
    return test_repository.default_form()


@pytest.fixture
def default_form_json(default_form):
    """Default form as a request body."""
    return default_form.model_dump(mode="json")
