"""
Contact contracts.

Shapes returned by the directory backend for contact listings, searches and
filters. Field names follow the backend's camelCase keys through aliases so
that models can be built straight from the JSON payload.
"""

from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from railway_directory.utils.phone_formatter import format_phone_number

PLACEHOLDER = "-"


class Contact(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="allow")

    id: str
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    favorite: Optional[bool] = None
    group: Optional[str] = None
    blood_group: Optional[str] = Field(default=None, alias="bloodGroup")
    lobby: Optional[str] = None
    designation: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")

    def display(self, field: str) -> str:
        """Value for a list cell; absent fields render as a placeholder."""
        value = getattr(self, field, None)
        if value is None or value == "":
            return PLACEHOLDER
        if field == "phone":
            return format_phone_number(str(value))
        return str(value)


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(alias="totalPages")

    @classmethod
    def from_total(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(page=page, limit=limit, total=total, total_pages=total_pages)

    @classmethod
    def single(cls) -> "PaginationMeta":
        """Shape used when a lookup yields exactly one contact."""
        return cls(page=1, limit=1, total=1, total_pages=1)

    @property
    def controls_enabled(self) -> bool:
        return self.total_pages > 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def previous_page(self) -> Optional[int]:
        return self.page - 1 if self.has_previous else None

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None


class PaginatedContacts(BaseModel):
    data: List[Contact] = Field(default_factory=list)
    pagination: PaginationMeta
