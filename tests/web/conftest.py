"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from cli.config_models import HabitCoachConfig
from coach import CoachAdapter
from habits import ActorRegistry, MemoryStateStore


@pytest.fixture(autouse=True)
def isolated_home(tmp_path):
    """Keep config lookup and default paths inside tmp_path."""
    with patch.dict(os.environ, {"HABITCOACH_HOME": str(tmp_path / "home")}):
        yield


@pytest.fixture
def config(tmp_path):
    return HabitCoachConfig.from_dict(
        {
            "paths": {"state_db": str(tmp_path / "state.db")},
            "retry": {"max_attempts": 1},
            "coach": {"timeout_seconds": 5},
        }
    )


@pytest.fixture
def registry(mock_llm):
    return ActorRegistry(MemoryStateStore(), coach=CoachAdapter(provider=mock_llm))


@pytest.fixture
def client(config, registry):
    """Test client over an in-memory store and a mocked LLM."""
    from web.app import create_app

    app = create_app(config, registry=registry)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def create_read(client):
    """POST the canonical 'Read' habit for a user; returns the response JSON."""

    def _create(user_id: str | None = None):
        params = {"userId": user_id} if user_id else None
        res = client.post(
            "/api/habits",
            params=params,
            json={"name": "Read", "frequency": "daily", "targetPerPeriod": 1, "period": "day"},
        )
        assert res.status_code == 200, res.text
        return res.json()

    return _create
