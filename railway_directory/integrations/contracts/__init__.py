"""
Contracts (data models).

This folder defines the response shapes of the directory backend and the
external document source:
- Contacts and pagination metadata
- Documents

Why this exists:
- State containers rely on stable models, not on ad-hoc dicts
- Both the real HTTP services and the mock backend produce these shapes

Analytics aggregates are computed server-side and are passed through as
plain dicts.
"""

from .contacts import PLACEHOLDER, Contact, PaginatedContacts, PaginationMeta
from .documents import Document

__all__ = ["PLACEHOLDER", "Contact", "PaginatedContacts", "PaginationMeta", "Document"]
