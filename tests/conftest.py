# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from application.use_cases import TaskUseCases
from infrastructure.database import Database
from interfaces.api import get_task_use_cases
from main import app


@pytest.fixture()
def db(tmp_path: Path) -> Database:
    """A fresh sqlite database per test."""
    return Database(str(tmp_path / "tasks.sqlite3"))


@pytest.fixture()
def use_cases(db: Database) -> TaskUseCases:
    return TaskUseCases(db)


@pytest.fixture()
def client(use_cases: TaskUseCases):
    app.dependency_overrides[get_task_use_cases] = lambda: use_cases
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
