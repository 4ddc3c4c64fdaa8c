"""Pytest fixtures for the directory client tests."""

import pytest

from railway_directory.integrations import AnalyticsService, ApiClient, ContactsService, DocumentsService
from railway_directory.integrations.clients.mocks import MockDirectoryBackend
from railway_directory.utils.config_loader import ApiConfig

DOCUMENTS_URL = "https://docs.example.test/documents"


@pytest.fixture
def backend():
    """In-memory directory backend seeded with the default contacts."""
    return MockDirectoryBackend()


@pytest.fixture
def api_config():
    return ApiConfig(base_url="http://directory.test", timeout_ms=2000)


@pytest.fixture
def api_client(backend, api_config):
    return ApiClient(api_config, transport=backend.transport())


@pytest.fixture
def contacts_service(api_client):
    return ContactsService(api_client)


@pytest.fixture
def analytics_service(api_client):
    return AnalyticsService(api_client)


@pytest.fixture
def documents_service(api_client):
    return DocumentsService(api_client, DOCUMENTS_URL)
