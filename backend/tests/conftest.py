import itertools
import os
import tempfile

# Must be set before the app modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EXPORT_DIR"] = tempfile.mkdtemp(prefix="movement-exports-")
os.environ.pop("OPENAI_API_KEY", None)

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.db.repository import MemoryMovementRepository
from app.main import app
from app.schemas.movement import Movement
from app.services.llm_insights import InsightTask, get_insight_task
from app.services.movement_store import MovementStore, get_movement_store


@pytest.fixture
def make_movement():
    ids = itertools.count(1)

    def _make(**fields):
        fields.setdefault("id", f"m{next(ids)}")
        return Movement(**fields)

    return _make


@pytest.fixture
def repository():
    return MemoryMovementRepository()


@pytest.fixture
def store(repository):
    return MovementStore(repository)


@pytest.fixture
def insight_task():
    return InsightTask()


@pytest.fixture
def client(store, insight_task):
    app.dependency_overrides[get_movement_store] = lambda: store
    app.dependency_overrides[get_insight_task] = lambda: insight_task
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_openai_client():
    def _make(content=None, error=None):
        client = MagicMock()
        if error is not None:
            client.chat.completions.create.side_effect = error
        else:
            client.chat.completions.create.return_value.choices = [
                MagicMock(message=MagicMock(content=content))
            ]
        return client

    return _make
