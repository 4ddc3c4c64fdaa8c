"""
Real HTTP integration clients.

These clients communicate with the directory backend and the document
source over HTTP:
- ApiClient: transport (headers, timeout, error translation)
- ContactsService / AnalyticsService / DocumentsService: one class per
  resource family

Important:
- Services share one ApiClient built by the composition root (railway_directory/app.py)
- Services return data shaped according to railway_directory/integrations/contracts
"""

from .api_client import ApiClient, ApiError, TIMEOUT_STATUS
from .analytics import AnalyticsService
from .contacts import ContactsService, FilterRequiredError
from .documents import DocumentsService

__all__ = [
    "ApiClient",
    "ApiError",
    "TIMEOUT_STATUS",
    "AnalyticsService",
    "ContactsService",
    "FilterRequiredError",
    "DocumentsService",
]
