# tests/conftest.py
import os
import sys

import pytest

# Ensure repository root is on PYTHONPATH for tests
repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

# Ensure placeholder secrets do not trigger validators during tests
os.environ.setdefault("NEO4J_PASSWORD", "test-password")


class FakeResult:
    def __init__(self, records):
        self._records = records

    async def data(self):
        return [dict(record) for record in self._records]


class FakeSession:
    def __init__(self, driver, **kwargs):
        self.driver = driver
        self.kwargs = kwargs
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True

    async def run(self, query, parameters=None):
        self.driver.runs.append((query, parameters))
        if self.driver.run_error is not None:
            raise self.driver.run_error
        return FakeResult(self.driver.records)


class FakeDriver:
    def __init__(self, uri, auth=None):
        self.uri = uri
        self.auth = auth
        self.records = []
        self.runs = []
        self.sessions = []
        self.run_error = None
        self.connect_error = None
        self.close_calls = 0

    def session(self, **kwargs):
        session = FakeSession(self, **kwargs)
        self.sessions.append(session)
        return session

    async def verify_connectivity(self):
        if self.connect_error is not None:
            raise self.connect_error

    async def close(self):
        self.close_calls += 1


@pytest.fixture
def fake_drivers(monkeypatch):
    """Replace the Neo4j driver factory and collect every driver it creates."""
    from core import db_manager

    created = []

    class FakeGraphDatabase:
        @staticmethod
        def driver(uri, auth=None):
            driver = FakeDriver(uri, auth)
            created.append(driver)
            return driver

    monkeypatch.setattr(db_manager, "AsyncGraphDatabase", FakeGraphDatabase)
    return created
