from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from moviedb.config import Settings
from moviedb.domain import SourceMovie
from moviedb.main import create_app
from moviedb.service import MovieService
from moviedb.store import InMemoryStore

SAMPLE_SEED = [
    {"year": 1994, "title": "Pulp Fiction", "info": {"rating": 8.9, "rank": 1}},
    {"year": 1994, "title": "Puppet Master V", "info": {"rating": 5.1}},
    {"year": 1994, "title": "Forrest Gump", "info": {"rating": 8.8, "rank": 3}},
    {"year": 1995, "title": "Pulp", "info": {"rating": 9, "rank": 7}},
    {"title": "Untitled Project", "info": {}},
]


class StubSeed:
    def __init__(self, raw: list[dict]):
        self.movies = [SourceMovie.model_validate(r) for r in raw]
        self.calls = 0

    def fetch(self) -> list[SourceMovie]:
        self.calls += 1
        return self.movies


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def sample_seed():
    return SAMPLE_SEED


@pytest.fixture
def seed(sample_seed):
    return StubSeed(sample_seed)


@pytest.fixture
def store():
    return InMemoryStore.create("movies")


@pytest.fixture
def service(store, seed):
    return MovieService(store=store, seed=seed)


@pytest.fixture
def client(service, tmp_path):
    app = create_app(settings=Settings(web_dir=tmp_path), service=service)
    return TestClient(app)
