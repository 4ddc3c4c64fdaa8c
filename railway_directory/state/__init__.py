"""
State containers.

Each container binds one UI concern to the service layer and exposes
loading / error / result attributes. Containers are the only place where
errors are caught and turned into user-facing messages.
"""

from .analytics import AnalyticsDashboardState
from .base import AsyncState, RequestSequence
from .category_browser import CATEGORIES, CategoryBrowserState
from .contacts_listing import ContactsCountState, ContactsListState
from .contacts_search import CONTACT_NOT_FOUND, ContactsSearchState, DebouncedSearch
from .documents import DocumentsState
from .scheduling import DebounceTimer
from .visit_count import VisitCountState

__all__ = [
    "AnalyticsDashboardState",
    "AsyncState",
    "RequestSequence",
    "CATEGORIES",
    "CategoryBrowserState",
    "ContactsCountState",
    "ContactsListState",
    "CONTACT_NOT_FOUND",
    "ContactsSearchState",
    "DebouncedSearch",
    "DocumentsState",
    "DebounceTimer",
    "VisitCountState",
]
