"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from labclient.mock import EntityStore, MockClient
from labclient.models import AccessLevel, VisibilityLevel


class FakeClock:
    """Deterministic clock; each call returns the next tick."""

    def __init__(self, start: datetime, step: timedelta = timedelta(minutes=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def store(clock):
    """Create an empty in-memory store with a deterministic clock."""
    return EntityStore(clock=clock)


@pytest.fixture
def users(store):
    return {
        "alice": store.add_user("alice", "Alice Liddell"),
        "bob": store.add_user("bob", "Bob Builder"),
        "carol": store.add_user("carol", "Carol Reporter"),
        "mallory": store.add_user("mallory", "Mallory Outsider"),
        "root": store.add_user("root", "Administrator", is_admin=True),
    }


@pytest.fixture
def project(store, users):
    """Private project owned by alice, bob developer, carol reporter."""
    project = store.add_project("demo", owner=users["alice"], visibility=VisibilityLevel.PRIVATE)
    store.add_member(project, users["bob"], AccessLevel.DEVELOPER)
    store.add_member(project, users["carol"], AccessLevel.REPORTER)
    return project


@pytest.fixture
def alice_client(store, users):
    return MockClient(store, users["alice"])
