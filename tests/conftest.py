"""Shared fixtures: a store on a manual clock and a client wired to it."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from nagrik_seva.main import app
from nagrik_seva.routes.deps import get_store
from nagrik_seva.services.issue_store import IssueStore
from nagrik_seva.services.lifecycle import IssueLifecycleEngine


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def store(clock):
    return IssueStore(clock=clock)


@pytest.fixture
def seeded_store(clock):
    return IssueStore(clock=clock, seed=True)


@pytest.fixture
def lifecycle(store):
    return IssueLifecycleEngine(store)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seeded_client(seeded_store):
    app.dependency_overrides[get_store] = lambda: seeded_store
    yield TestClient(app)
    app.dependency_overrides.clear()
