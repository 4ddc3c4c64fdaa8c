"""
Contact search state and the debounced search-box binding.

ContactsSearchState runs name and phone searches and keeps the latest
outcome. DebouncedSearch sits in front of it and turns keystrokes into at
most one search per quiet period.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import Contact, ContactsService, PaginatedContacts, PaginationMeta
from railway_directory.state.base import AsyncState
from railway_directory.state.scheduling import DebounceTimer
from railway_directory.validation import validate_name_query, validate_phone_query

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 1500
CONTACT_NOT_FOUND = "Contact not found"

_PHONE_INPUT_RE = re.compile(r"^[0-9+\-\s()]*$")


class ContactsSearchState(AsyncState):
    fallback_error = "Failed to search contacts. Please try again."

    def __init__(
        self,
        contacts_service: ContactsService,
        page_size: int = 50,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler)
        self.contacts_service = contacts_service
        self.page_size = page_size
        self.contacts: List[Contact] = []
        self.pagination: Optional[PaginationMeta] = None
        self.last_query: Optional[str] = None
        self.mode = "name"

    async def search_by_name(self, query: str, page: int = 1) -> None:
        token = self._begin()
        try:
            validated = validate_name_query(query)
            result = await self.contacts_service.search_by_name(validated, page, self.page_size)
        except Exception as exc:
            if self._fail(token, exc):
                self._reset_results()
            return
        if self._finish(token):
            self._apply(result, "name", validated)

    async def search_by_phone(self, phone: str) -> None:
        token = self._begin()
        try:
            validated = validate_phone_query(phone)
            result = await self.contacts_service.search_by_phone(validated)
        except Exception as exc:
            if self._fail(token, exc, not_found_message=CONTACT_NOT_FOUND):
                self._reset_results()
            return
        if self._finish(token):
            self._apply(result, "phone", validated)

    async def go_to_page(self, page: int) -> None:
        """Re-run the last name search on another page."""
        if self.mode != "name" or not self.last_query:
            return
        await self.search_by_name(self.last_query, page)

    def clear_results(self) -> None:
        self.cancel_pending()
        self.error = None
        self._reset_results()
        self.last_query = None

    def _apply(self, result: PaginatedContacts, mode: str, query: str) -> None:
        self.contacts = list(result.data)
        self.pagination = result.pagination
        self.mode = mode
        self.last_query = query

    def _reset_results(self) -> None:
        self.contacts = []
        self.pagination = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            **super().snapshot(),
            "contacts": [c.model_dump(by_alias=True, exclude_none=True) for c in self.contacts],
            "pagination": self.pagination.model_dump(by_alias=True) if self.pagination else None,
        }


class DebouncedSearch:
    """Search-box binding: debounces keystrokes into searches.

    - every value change restarts the quiet period
    - an empty value clears results immediately, without a backend call
    - a value identical to the last one searched is not searched again
    - while a search is still loading, firing is pushed back by another
      quiet period instead of overlapping it
    - constructing the binding never searches
    """

    def __init__(
        self,
        search_state: ContactsSearchState,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        phone_mode: bool = False,
        initial_value: str = "",
    ) -> None:
        self.search_state = search_state
        self.delay_seconds = debounce_ms / 1000.0
        self.phone_mode = phone_mode
        self.value = initial_value
        self.last_searched: Optional[str] = None
        self.timer = DebounceTimer()

    def set_value(self, value: str) -> None:
        if self.phone_mode and not _PHONE_INPUT_RE.match(value or ""):
            # phone box only accepts phone characters; keep the previous value
            return
        self.value = value or ""
        self.timer.cancel()
        if not self.value.strip():
            self.last_searched = None
            self.search_state.clear_results()
            return
        self.timer.schedule(self.delay_seconds, self._on_quiet)

    def set_phone_mode(self, enabled: bool) -> None:
        if enabled == self.phone_mode:
            return
        self.phone_mode = enabled
        self.last_searched = None
        if enabled and self.value and not _PHONE_INPUT_RE.match(self.value):
            self.set_value("")

    async def submit(self) -> None:
        """Search the current value right away (form submit)."""
        self.timer.cancel()
        value = self.value.strip()
        if not value:
            return
        await self._run(value)

    async def _on_quiet(self) -> None:
        value = self.value.strip()
        if not value or value == self.last_searched:
            return
        if self.search_state.loading:
            logger.debug("Search still loading; deferring %r", value)
            self.timer.schedule(self.delay_seconds, self._on_quiet)
            return
        await self._run(value)

    async def _run(self, value: str) -> None:
        self.last_searched = value
        if self.phone_mode:
            await self.search_state.search_by_phone(value)
        else:
            await self.search_state.search_by_name(value)

    def close(self) -> None:
        task = self.timer.task
        in_flight = task is not None and not task.done()
        self.timer.close()
        if in_flight:
            # the cancelled search never reaches its own cleanup
            self.search_state.cancel_pending()
