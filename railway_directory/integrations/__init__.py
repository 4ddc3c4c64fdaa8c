"""
Integrations layer.
This package contains all code used to communicate with external systems:
- The directory backend (contacts, enumerations, filters, analytics)
- The external document source

Key rule:
- State containers MUST NOT call HTTP directly.
- They call the services under railway_directory/integrations/clients/real_http.
- Services are backed by the mock backend during development and tests.

Switching implementations:
- The selection of mock vs real transport happens in ONE place (railway_directory/app.py).
"""

from .clients.real_http import (
    TIMEOUT_STATUS,
    AnalyticsService,
    ApiClient,
    ApiError,
    ContactsService,
    DocumentsService,
    FilterRequiredError,
)
from .contracts import Contact, Document, PaginatedContacts, PaginationMeta
from .response_wrappers import IntegrationResponseError

__all__ = [
    # transport
    "ApiClient", "ApiError", "TIMEOUT_STATUS", "IntegrationResponseError",
    # services
    "AnalyticsService", "ContactsService", "DocumentsService", "FilterRequiredError",
    # contracts
    "Contact", "Document", "PaginatedContacts", "PaginationMeta",
]
