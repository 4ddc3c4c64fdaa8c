from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from railway_directory.integrations.contracts import Contact, Document, PaginatedContacts, PaginationMeta


class IntegrationResponseError(ValueError):
    def __init__(self, message: str, *, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload if payload is not None else {}


def normalize_contact(raw: Any) -> Contact:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(f"Expected a contact object, got {type(raw).__name__}.", payload=raw)
    return _build_model(Contact, raw, raw)


def normalize_paginated_contacts(raw: Any) -> PaginatedContacts:
    if not isinstance(raw, dict):
        raise IntegrationResponseError("Paginated response must be an object.", payload=raw)
    items = raw.get("data") if isinstance(raw.get("data"), list) else []
    pagination = raw.get("pagination")
    if not isinstance(pagination, dict):
        raise IntegrationResponseError("Paginated response is missing pagination metadata.", payload=raw)

    return PaginatedContacts(
        data=[normalize_contact(item) for item in items],
        pagination=_build_model(PaginationMeta, pagination, raw),
    )


def normalize_document(raw: Any) -> Document:
    """Coerce an untyped document record into a Document.

    The document source is maintained independently of the directory
    backend, so every field falls back to "" and older key names are
    accepted.
    """
    data = raw if isinstance(raw, dict) else {}
    return Document(
        id=_as_text(_first_present(data, "id", "_id")),
        title=_as_text(_first_present(data, "title", "doc_title")),
        link=_as_text(_first_present(data, "link", "doc_link")),
        uploaded_by=_as_text(_first_present(data, "uploadedBy", "doc_uploaded_by")),
        created_at=_as_text(_first_present(data, "createdAt")),
        updated_at=_as_text(_first_present(data, "updatedAt")),
    )


def unwrap_list(raw: Any) -> List[Any]:
    """Return the item list from a {data: [...]} envelope or a bare list."""
    if isinstance(raw, dict) and "data" in raw:
        return raw["data"] if isinstance(raw["data"], list) else []
    if isinstance(raw, list):
        return raw
    return []


def unwrap_data(raw: Any) -> Any:
    """Return the payload of a {success, data} envelope."""
    if isinstance(raw, dict) and "data" in raw:
        return raw["data"]
    raise IntegrationResponseError("Response is missing the 'data' field.", payload=raw)


def extract_count(raw: Any) -> int:
    # bool is an int subclass, never a count
    if isinstance(raw, dict):
        count = raw.get("count")
        if isinstance(count, int) and not isinstance(count, bool):
            return count
        total = raw.get("total")
        if isinstance(total, int) and not isinstance(total, bool):
            return total
    elif isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    raise IntegrationResponseError("Invalid response format for documents count", payload=raw)


def _first_present(data: Dict[str, Any], *keys: str) -> Optional[Any]:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value)


def _build_model(model_type, payload: Dict[str, Any], raw: Any):
    try:
        return model_type(**payload)
    except (TypeError, ValidationError) as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload=raw) from exc
