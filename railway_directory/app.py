"""
Composition root.

Builds the single ApiClient and the services on top of it, and hands out
state containers wired to those services. Nothing else in the package creates
clients or services on its own, so tests can swap the transport in one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import httpx

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import AnalyticsService, ApiClient, ContactsService, DocumentsService
from railway_directory.integrations.clients.mocks import MockDirectoryBackend
from railway_directory.state import (
    AnalyticsDashboardState,
    CategoryBrowserState,
    ContactsCountState,
    ContactsListState,
    ContactsSearchState,
    DebouncedSearch,
    DocumentsState,
    VisitCountState,
)
from railway_directory.utils.config_loader import DirectoryConfig, load_directory_config

logger = logging.getLogger(__name__)

MOCK_DOCUMENTS_URL = "http://documents.mock/documents"


@dataclass
class DirectoryApp:
    config: DirectoryConfig
    api_client: ApiClient
    contacts: ContactsService
    analytics: AnalyticsService
    documents: DocumentsService
    mock_backend: Optional[MockDirectoryBackend] = None
    error_handler: ErrorHandler = field(default_factory=ErrorHandler)

    # --- State containers ----------------------------------------------------

    def contacts_search(self) -> ContactsSearchState:
        return ContactsSearchState(self.contacts, page_size=self.config.search.page_size, error_handler=self.error_handler)

    def debounced_search(self, phone_mode: bool = False) -> DebouncedSearch:
        return DebouncedSearch(
            self.contacts_search(),
            debounce_ms=self.config.search.debounce_ms,
            phone_mode=phone_mode,
        )

    def contacts_list(self, page: int = 1, auto_fetch: bool = True) -> ContactsListState:
        return ContactsListState(
            self.contacts,
            page=page,
            limit=self.config.search.page_size,
            auto_fetch=auto_fetch,
            error_handler=self.error_handler,
        )

    def contacts_count(self, auto_fetch: bool = True) -> ContactsCountState:
        return ContactsCountState(self.contacts, auto_fetch=auto_fetch, error_handler=self.error_handler)

    def visit_count(self, auto_increment: bool = True, auto_fetch: bool = True) -> VisitCountState:
        return VisitCountState(
            self.analytics,
            auto_increment=auto_increment,
            auto_fetch=auto_fetch,
            error_handler=self.error_handler,
        )

    def category_browser(self) -> CategoryBrowserState:
        return CategoryBrowserState(self.contacts, page_size=self.config.search.page_size, error_handler=self.error_handler)

    def documents_list(self) -> DocumentsState:
        return DocumentsState(self.documents, error_handler=self.error_handler)

    def analytics_dashboard(self, growth_days: int = 30, visits_days: int = 30) -> AnalyticsDashboardState:
        return AnalyticsDashboardState(
            self.analytics,
            growth_days=growth_days,
            visits_days=visits_days,
            error_handler=self.error_handler,
        )

    async def aclose(self) -> None:
        await self.api_client.aclose()


def build_directory_app(
    config: Optional[DirectoryConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> DirectoryApp:
    config = config or load_directory_config()
    api_config = config.api

    mock_backend = None
    if transport is None and config.use_mock_backend:
        logger.info("Using in-memory mock directory backend")
        mock_backend = MockDirectoryBackend()
        transport = mock_backend.transport()
        if not api_config.documents_url:
            api_config = api_config.model_copy(update={"documents_url": MOCK_DOCUMENTS_URL})

    api_client = ApiClient(api_config, transport=transport)
    return DirectoryApp(
        config=config,
        api_client=api_client,
        contacts=ContactsService(api_client),
        analytics=AnalyticsService(api_client),
        documents=DocumentsService(
            api_client,
            api_config.documents_url,
            count_url=api_config.documents_count_url or None,
            title_marker=api_config.document_title_marker,
        ),
        mock_backend=mock_backend,
    )
