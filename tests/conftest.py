from unittest.mock import MagicMock

import pytest

from tests.fakes import FakeMotorClient


@pytest.fixture
def fake_motor(monkeypatch):
    """Patch motor's client class so connect() hands back an in-memory client."""
    fake = FakeMotorClient()
    factory = MagicMock(return_value=fake)
    monkeypatch.setattr("zmongo_workflow.client.AsyncIOMotorClient", factory)
    fake.factory = factory
    return fake
