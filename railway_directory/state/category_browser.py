"""
Category browser state.

Drives the category pages: each category decides which option lists are
needed (blood groups, lobbies, designations) and which service filter fetches
the contacts for the current selection.

Categories:
- all-contacts: unified filter over blood group, lobby and designation
- blood-group: blood group and/or lobby
- division: lobby and/or designation
- hotels / stations: fixed designation filter, no selection needed
- emergency-contacts: static page, nothing to fetch

Changing any selection returns to page 1. An empty selection clears the
results without calling the backend.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import Contact, ContactsService, PaginatedContacts, PaginationMeta
from railway_directory.state.base import AsyncState, RequestSequence

logger = logging.getLogger(__name__)

CATEGORIES: Dict[str, Dict[str, Any]] = {
    "all-contacts": {
        "name": "All Contacts",
        "description": "Filter contacts by blood group, lobby, and/or designation",
        "options": ("blood_groups", "lobbies", "designations"),
    },
    "blood-group": {
        "name": "Blood Group",
        "description": "Blood Group contacts are sorted by blood group",
        "options": ("blood_groups", "lobbies"),
    },
    "division": {
        "name": "Division/Designation",
        "description": "Filter contacts by division (lobby) and/or designation",
        "options": ("lobbies", "designations"),
    },
    "emergency-contacts": {"name": "Emergency Contacts", "description": "Emergency contacts", "options": ()},
    "hotels": {"name": "Hotels", "description": "View all hotel contacts", "options": (), "designation": "HOTEL"},
    "stations": {"name": "Stations", "description": "View all station contacts", "options": (), "designation": "STATION"},
}


class OptionList:
    """One enumeration (e.g. lobbies) with its own loading/error fields."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.values: List[str] = []
        self.loading = False
        self.error: Optional[str] = None
        self.sequence = RequestSequence()


class CategoryBrowserState(AsyncState):
    fallback_error = "Failed to fetch contacts. Please try again."

    def __init__(
        self,
        contacts_service: ContactsService,
        page_size: int = 50,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler)
        self.contacts_service = contacts_service
        self.page_size = page_size
        self.category: Optional[str] = None
        self.page = 1
        self.selected_blood_groups: List[str] = []
        self.selected_lobbies: List[str] = []
        self.selected_designations: List[str] = []
        self.contacts: List[Contact] = []
        self.pagination: Optional[PaginationMeta] = None
        self.options: Dict[str, OptionList] = {
            "blood_groups": OptionList("blood groups"),
            "lobbies": OptionList("lobbies"),
            "designations": OptionList("designations"),
        }
        self._category_sequence = RequestSequence()

    async def select_category(self, category: Optional[str]) -> None:
        if category is not None and category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category}")
        self.category = category
        self.page = 1
        self.selected_blood_groups = []
        self.selected_lobbies = []
        self.selected_designations = []
        self._clear()
        token = self._category_sequence.issue()
        if category is None:
            return
        await asyncio.gather(*(self._load_options(name) for name in CATEGORIES[category]["options"]))
        if not self._category_sequence.is_latest(token):
            # another category was selected while the options loaded
            return
        await self.refresh()

    async def set_blood_groups(self, values: List[str]) -> None:
        self.selected_blood_groups = list(values)
        self.page = 1
        await self.refresh()

    async def set_lobbies(self, values: List[str]) -> None:
        self.selected_lobbies = list(values)
        self.page = 1
        await self.refresh()

    async def set_designations(self, values: List[str]) -> None:
        self.selected_designations = list(values)
        self.page = 1
        await self.refresh()

    async def set_page(self, page: int) -> None:
        self.page = page
        await self.refresh()

    async def refresh(self) -> None:
        request = self._request_for_category()
        if request is None:
            self._clear()
            return
        method, args = request

        token = self._begin()
        try:
            result: PaginatedContacts = await method(*args, page=self.page, limit=self.page_size)
        except Exception as exc:
            if self._fail(token, exc):
                self.contacts = []
                self.pagination = None
            return
        if self._finish(token):
            self.contacts = list(result.data)
            self.pagination = result.pagination

    def _request_for_category(self) -> Optional[Tuple[Any, tuple]]:
        service = self.contacts_service
        category = self.category
        if category == "blood-group":
            if not self.selected_blood_groups and not self.selected_lobbies:
                return None
            return service.get_contacts_by_blood_group, (self.selected_blood_groups, self.selected_lobbies)
        if category == "division":
            if not self.selected_lobbies and not self.selected_designations:
                return None
            return service.get_contacts_by_lobby, (self.selected_lobbies, self.selected_designations)
        if category == "all-contacts":
            if not (self.selected_blood_groups or self.selected_lobbies or self.selected_designations):
                return None
            return service.filter_contacts, (
                self.selected_blood_groups,
                self.selected_lobbies,
                self.selected_designations,
            )
        if category in ("hotels", "stations"):
            return service.filter_contacts, ([], [], [CATEGORIES[category]["designation"]])
        return None

    async def _load_options(self, name: str) -> None:
        option = self.options[name]
        token = option.sequence.issue()
        option.loading = True
        option.error = None
        try:
            values = await getattr(self.contacts_service, f"get_{name}")()
        except Exception as exc:
            if option.sequence.is_latest(token):
                option.values = []
                option.loading = False
                option.error = self.error_handler.message_for(
                    exc, f"Failed to fetch {option.label}. Please try again."
                )
            return
        if option.sequence.is_latest(token):
            option.values = values
            option.loading = False

    def _clear(self) -> None:
        self.cancel_pending()
        self.error = None
        self.contacts = []
        self.pagination = None

    def snapshot(self) -> Dict[str, Any]:
        return {
            **super().snapshot(),
            "category": self.category,
            "page": self.page,
            "contacts": [c.model_dump(by_alias=True, exclude_none=True) for c in self.contacts],
            "pagination": self.pagination.model_dump(by_alias=True) if self.pagination else None,
            "options": {name: option.values for name, option in self.options.items()},
        }
