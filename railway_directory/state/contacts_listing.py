"""Paginated contact listing and total-count state."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import Contact, ContactsService, PaginationMeta
from railway_directory.state.base import AsyncState


class ContactsListState(AsyncState):
    fallback_error = "Failed to fetch contacts. Please try again."

    def __init__(
        self,
        contacts_service: ContactsService,
        page: int = 1,
        limit: int = 50,
        auto_fetch: bool = True,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler, loading=auto_fetch)
        self.contacts_service = contacts_service
        self.page = page
        self.limit = limit
        self.auto_fetch = auto_fetch
        self.contacts: List[Contact] = []
        self.pagination: Optional[PaginationMeta] = None

    async def load(self) -> None:
        """Initial fetch; a no-op unless auto_fetch is set."""
        if self.auto_fetch:
            await self.refetch()

    async def refetch(self) -> None:
        token = self._begin()
        try:
            result = await self.contacts_service.get_all_contacts(self.page, self.limit)
        except Exception as exc:
            if self._fail(token, exc):
                self.contacts = []
                self.pagination = None
            return
        if self._finish(token):
            self.contacts = list(result.data)
            self.pagination = result.pagination

    async def set_page(self, page: int) -> None:
        self.page = page
        await self.load()

    async def set_limit(self, limit: int) -> None:
        self.limit = limit
        await self.load()

    def snapshot(self) -> Dict[str, Any]:
        return {
            **super().snapshot(),
            "page": self.page,
            "limit": self.limit,
            "contacts": [c.model_dump(by_alias=True, exclude_none=True) for c in self.contacts],
            "pagination": self.pagination.model_dump(by_alias=True) if self.pagination else None,
        }


class ContactsCountState(AsyncState):
    fallback_error = "Failed to fetch contacts count. Please try again."

    def __init__(
        self,
        contacts_service: ContactsService,
        auto_fetch: bool = True,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler, loading=auto_fetch)
        self.contacts_service = contacts_service
        self.auto_fetch = auto_fetch
        self.count: Optional[int] = None

    async def load(self) -> None:
        if self.auto_fetch:
            await self.refetch()

    async def refetch(self) -> None:
        token = self._begin()
        try:
            count = await self.contacts_service.get_contacts_count()
        except Exception as exc:
            if self._fail(token, exc):
                self.count = None
            return
        if self._finish(token):
            self.count = count

    def snapshot(self) -> Dict[str, Any]:
        return {**super().snapshot(), "count": self.count}
