"""Shared fixtures: a store on a temporary SQLite file and an API client."""
import pytest
from fastapi.testclient import TestClient

from string_analyzer.config import Settings
from string_analyzer.main import create_app
from string_analyzer.store import StringStore
from string_analyzer.utils import analyze_string


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "data" / "strings.db")


@pytest.fixture
def store(db_path):
    string_store = StringStore()
    string_store.init(db_path)
    yield string_store
    string_store.close()


@pytest.fixture
def client(db_path):
    app = create_app(Settings(db_path=db_path))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def records():
    values = ["level", "abc", "Racecar", "hello world", "a", "noon noon", "xyz"]
    return [analyze_string(v) for v in values]
