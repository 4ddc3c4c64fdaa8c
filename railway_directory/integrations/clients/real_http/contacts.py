"""
Contacts service.

Maps each contact operation of the directory backend to one ApiClient call
and shapes the response into the contracts in integrations/contracts.

Errors from the client (ApiError, transport failures) are not caught here.
The only error raised locally is FilterRequiredError, before any I/O.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from railway_directory.integrations.clients.real_http.api_client import ApiClient
from railway_directory.integrations.contracts import Contact, PaginatedContacts, PaginationMeta
from railway_directory.integrations.response_wrappers import (
    normalize_contact,
    normalize_paginated_contacts,
    unwrap_data,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 50

CONTACTS_PATH = "/api/contacts"


class FilterRequiredError(ValueError):
    """A filter operation was called with every filter list empty."""


def build_filter_params(page: int, limit: int, **filters: Optional[Sequence[str]]) -> Dict[str, Any]:
    """Comma-join each non-empty filter list; empty lists are omitted."""
    params: Dict[str, Any] = {}
    for key, values in filters.items():
        if values:
            params[key] = ",".join(values)
    params["page"] = page
    params["limit"] = limit
    return params


class ContactsService:
    def __init__(self, api_client: ApiClient) -> None:
        self.api_client = api_client

    async def get_contacts_count(self) -> int:
        response = await self.api_client.get(f"{CONTACTS_PATH}/count")
        return int(response["count"])

    async def get_all_contacts(self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> PaginatedContacts:
        response = await self.api_client.get(CONTACTS_PATH, params={"page": page, "limit": limit})
        return normalize_paginated_contacts(response)

    async def get_contact_by_id(self, contact_id: str) -> Contact:
        response = await self.api_client.get(f"{CONTACTS_PATH}/{quote(str(contact_id), safe='')}")
        return normalize_contact(_unwrap_contact(response))

    async def create_contact(self, contact: Dict[str, Any]) -> Contact:
        payload = {k: v for k, v in contact.items() if k not in ("id", "createdAt", "updatedAt")}
        response = await self.api_client.post(CONTACTS_PATH, payload)
        return normalize_contact(_unwrap_contact(response))

    async def update_contact(self, contact_id: str, changes: Dict[str, Any]) -> Contact:
        payload = {k: v for k, v in changes.items() if k not in ("id", "createdAt", "updatedAt")}
        response = await self.api_client.put(f"{CONTACTS_PATH}/{quote(str(contact_id), safe='')}", payload)
        return normalize_contact(_unwrap_contact(response))

    async def delete_contact(self, contact_id: str) -> None:
        await self.api_client.delete(f"{CONTACTS_PATH}/{quote(str(contact_id), safe='')}")

    async def search_by_name(self, query: str, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> PaginatedContacts:
        response = await self.api_client.get(
            f"{CONTACTS_PATH}/search/name",
            params={"query": query, "page": page, "limit": limit},
        )
        return normalize_paginated_contacts(response)

    async def search_by_phone(self, phone: str) -> PaginatedContacts:
        """Look up a contact by phone number.

        The backend answers with a single contact; it is wrapped into a
        one-item page so callers handle name and phone results alike.
        """
        response = await self.api_client.get(f"{CONTACTS_PATH}/search/phone", params={"phone": phone})
        if isinstance(response, dict) and isinstance(response.get("pagination"), dict):
            return normalize_paginated_contacts(response)
        contact = normalize_contact(_unwrap_contact(response))
        return PaginatedContacts(data=[contact], pagination=PaginationMeta.single())

    async def get_blood_groups(self) -> List[str]:
        return await self._get_enumeration("blood-groups")

    async def get_lobbies(self) -> List[str]:
        return await self._get_enumeration("lobbies")

    async def get_designations(self) -> List[str]:
        return await self._get_enumeration("designations")

    async def get_contacts_by_blood_group(
        self,
        blood_groups: Optional[Sequence[str]] = None,
        lobbies: Optional[Sequence[str]] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> PaginatedContacts:
        if not blood_groups and not lobbies:
            raise FilterRequiredError("At least one blood group or lobby is required")
        params = build_filter_params(page, limit, bloodGroup=blood_groups, lobby=lobbies)
        response = await self.api_client.get(f"{CONTACTS_PATH}/by-blood-group", params=params)
        return normalize_paginated_contacts(response)

    async def get_contacts_by_lobby(
        self,
        lobbies: Optional[Sequence[str]] = None,
        designations: Optional[Sequence[str]] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> PaginatedContacts:
        if not lobbies and not designations:
            raise FilterRequiredError("At least one lobby or designation is required")
        params = build_filter_params(page, limit, lobby=lobbies, designation=designations)
        response = await self.api_client.get(f"{CONTACTS_PATH}/by-lobby", params=params)
        return normalize_paginated_contacts(response)

    async def filter_contacts(
        self,
        blood_groups: Optional[Sequence[str]] = None,
        lobbies: Optional[Sequence[str]] = None,
        designations: Optional[Sequence[str]] = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> PaginatedContacts:
        if not blood_groups and not lobbies and not designations:
            raise FilterRequiredError("At least one filter (bloodGroup, lobby, or designation) is required")
        params = build_filter_params(
            page, limit, bloodGroup=blood_groups, lobby=lobbies, designation=designations
        )
        response = await self.api_client.get(f"{CONTACTS_PATH}/filter", params=params)
        return normalize_paginated_contacts(response)

    async def _get_enumeration(self, name: str) -> List[str]:
        response = await self.api_client.get(f"{CONTACTS_PATH}/{name}")
        values = unwrap_data(response)
        if not isinstance(values, list):
            logger.warning("Enumeration %s returned %s instead of a list", name, type(values).__name__)
            return []
        return [str(v) for v in values]


def _unwrap_contact(response: Any) -> Any:
    # Single-contact endpoints answer either with the contact or {success, data: contact}
    if isinstance(response, dict) and isinstance(response.get("data"), dict) and "id" not in response:
        return response["data"]
    return response
