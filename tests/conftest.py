"""
Test configuration and fixtures for Algolia client tests
"""
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core_algolia import AlgoliaConfig, AsyncAlgoliaClient, SyncAlgoliaClient
from core_algolia.dispatcher import AsyncRequestDispatcher, RequestDispatcher

from helpers import RecordingHandler

TEST_APPLICATION_ID = "testapp"
TEST_API_KEY = "test-secret-key"


@pytest.fixture
def test_config() -> AlgoliaConfig:
    """Config with fake credentials"""
    return AlgoliaConfig(application_id=TEST_APPLICATION_ID, api_key=TEST_API_KEY)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Algolia credentials from the environment, restoring them afterwards"""
    for name in ("ALGOLIA_APPLICATION_ID", "ALGOLIA_API_KEY"):
        # setenv first so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def sync_client_factory(test_config):
    """Build a sync client whose transport replays the given outcomes"""
    clients = []

    def factory(*outcomes):
        handler = RecordingHandler(list(outcomes))
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        client = SyncAlgoliaClient(config=test_config, http_client=http_client)
        clients.append((client, http_client))
        return client, handler

    yield factory

    for client, http_client in clients:
        client.close()
        http_client.close()


@pytest.fixture
def async_client_factory(test_config):
    """Build an async client whose transport replays the given outcomes"""
    def factory(*outcomes):
        handler = RecordingHandler(list(outcomes))
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = AsyncAlgoliaClient(config=test_config, http_client=http_client)
        return client, handler

    return factory


@pytest.fixture
def dispatcher_factory(test_config):
    """Build a sync dispatcher whose transport replays the given outcomes"""
    def factory(*outcomes, config=None):
        handler = RecordingHandler(list(outcomes))
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return RequestDispatcher(config or test_config, http_client=http_client), handler

    return factory


@pytest.fixture
def async_dispatcher_factory(test_config):
    """Build an async dispatcher whose transport replays the given outcomes"""
    def factory(*outcomes):
        handler = RecordingHandler(list(outcomes))
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return AsyncRequestDispatcher(test_config, http_client=http_client), handler

    return factory
