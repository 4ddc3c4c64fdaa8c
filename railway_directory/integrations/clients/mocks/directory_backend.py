"""
Mock directory backend.

Purpose:
- Serves the directory API and the document source from in-memory data
- Does NOT make any network calls (plugs into httpx as a MockTransport)
- Records every request it receives so callers can count network calls

Usage:
- Wired in railway_directory/app.py when USE_MOCK_BACKEND is set
- Used by the test-suite to exercise the real services end-to-end

Response envelopes follow the real backend: {success, data}, {success, count}
and {success, data, pagination}; errors are {success: false, message}.
"""

from __future__ import annotations

import copy
import json
import math
import re
import uuid
from collections import Counter
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

DEFAULT_CONTACTS: List[Dict[str, Any]] = [
    {"id": "1", "name": "Anil Kumar", "phone": "+919398263414", "bloodGroup": "O+", "lobby": "BZA", "designation": "LOCO PILOT", "createdAt": "2025-01-04T09:00:00Z"},
    {"id": "2", "name": "Bhavani Rao", "phone": "9848012345", "bloodGroup": "A+", "lobby": "GNT", "designation": "GUARD", "createdAt": "2025-01-09T09:00:00Z"},
    {"id": "3", "name": "Chandra Sekhar", "phone": "9701122334", "bloodGroup": "B+", "lobby": "BZA", "designation": "STATION", "createdAt": "2025-02-11T09:00:00Z"},
    {"id": "4", "name": "D'Souza Mary", "phone": "9440099887", "bloodGroup": "O-", "lobby": "RJY", "designation": "LOCO PILOT", "createdAt": "2025-02-20T09:00:00Z"},
    {"id": "5", "name": "Hotel Manorama", "phone": "08662577777", "lobby": "BZA", "designation": "HOTEL", "createdAt": "2025-03-01T09:00:00Z"},
    {"id": "6", "name": "Kiran Babu", "bloodGroup": "AB+", "lobby": "GNT", "designation": "TRAIN MANAGER", "createdAt": "2025-03-15T09:00:00Z"},
    {"id": "7", "name": "Lakshmi Devi", "phone": "9000011111", "bloodGroup": "A+", "designation": "STATION", "createdAt": "2025-04-02T09:00:00Z"},
]

DEFAULT_DOCUMENTS: List[Dict[str, Any]] = [
    {"id": "d1", "title": "Safety Circular 12/2025", "link": "https://example.org/docs/safety-12.pdf", "uploadedBy": "Sr DEE", "createdAt": "2025-04-01", "updatedAt": "2025-04-01"},
    {"id": "d2", "title": "Crew Roster April", "link": "https://example.org/docs/roster-apr.pdf", "uploadedBy": "CCC", "createdAt": "2025-04-03", "updatedAt": "2025-04-05"},
]

Route = Tuple[str, "re.Pattern[str]", Callable[..., httpx.Response]]


def _json(status_code: int, payload: Any) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


def _error(status_code: int, message: str) -> httpx.Response:
    return _json(status_code, {"success": False, "message": message})


def _split(value: Optional[str]) -> List[str]:
    return [v for v in (value or "").split(",") if v]


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


class MockDirectoryBackend:
    def __init__(
        self,
        contacts: Optional[List[Dict[str, Any]]] = None,
        documents: Optional[Any] = None,
        visit_count: int = 0,
    ) -> None:
        self.contacts: List[Dict[str, Any]] = copy.deepcopy(DEFAULT_CONTACTS if contacts is None else contacts)
        # documents may be a bare list or an envelope, to mimic either source format
        self.documents: Any = copy.deepcopy(DEFAULT_DOCUMENTS if documents is None else documents)
        self.visit_count = visit_count
        self.visits_by_day: Counter = Counter()
        self.requests: List[httpx.Request] = []
        self._routes: List[Route] = [
            ("GET", re.compile(r"^/api/contacts$"), self._list_contacts),
            ("POST", re.compile(r"^/api/contacts$"), self._create_contact),
            ("GET", re.compile(r"^/api/contacts/count$"), self._count_contacts),
            ("GET", re.compile(r"^/api/contacts/search/name$"), self._search_name),
            ("GET", re.compile(r"^/api/contacts/search/phone$"), self._search_phone),
            ("GET", re.compile(r"^/api/contacts/blood-groups$"), lambda r: self._enumeration("bloodGroup")),
            ("GET", re.compile(r"^/api/contacts/lobbies$"), lambda r: self._enumeration("lobby")),
            ("GET", re.compile(r"^/api/contacts/designations$"), lambda r: self._enumeration("designation")),
            ("GET", re.compile(r"^/api/contacts/by-blood-group$"), self._by_blood_group),
            ("GET", re.compile(r"^/api/contacts/by-lobby$"), self._by_lobby),
            ("GET", re.compile(r"^/api/contacts/filter$"), self._filter),
            ("GET", re.compile(r"^/api/contacts/(?P<contact_id>[^/]+)$"), self._get_contact),
            ("PUT", re.compile(r"^/api/contacts/(?P<contact_id>[^/]+)$"), self._update_contact),
            ("DELETE", re.compile(r"^/api/contacts/(?P<contact_id>[^/]+)$"), self._delete_contact),
            ("POST", re.compile(r"^/api/analytics/visits$"), self._increment_visits),
            ("GET", re.compile(r"^/api/analytics/visits$"), self._get_visits),
            ("GET", re.compile(r"^/api/analytics/visits/history$"), self._visits_history),
            ("GET", re.compile(r"^/api/analytics/overview$"), self._overview),
            ("GET", re.compile(r"^/api/analytics/blood-groups$"), lambda r: self._distribution("bloodGroup")),
            ("GET", re.compile(r"^/api/analytics/lobbies$"), lambda r: self._distribution("lobby")),
            ("GET", re.compile(r"^/api/analytics/designations$"), lambda r: self._distribution("designation")),
            ("GET", re.compile(r"^/api/analytics/growth$"), self._growth),
            ("GET", re.compile(r"^/api/analytics/recent$"), self._recent),
            ("GET", re.compile(r"^/documents$"), self._documents),
            ("GET", re.compile(r"^/documents/count$"), self._documents_count),
        ]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        for method, pattern, handler in self._routes:
            match = pattern.match(path)
            if match and request.method == method:
                return handler(request, **match.groupdict())
        return _error(404, f"Route {request.method} {path} not found")

    def request_count(self, method: Optional[str] = None, path: Optional[str] = None) -> int:
        return sum(
            1
            for r in self.requests
            if (method is None or r.method == method) and (path is None or r.url.path == path)
        )

    # --- Contacts ------------------------------------------------------------

    def _paginate(self, request: httpx.Request, items: List[Dict[str, Any]]) -> httpx.Response:
        try:
            page = int(request.url.params.get("page", 1))
            limit = int(request.url.params.get("limit", 50))
        except ValueError:
            return _error(400, "page and limit must be integers")
        if page < 1 or limit < 1 or limit > 100:
            return _error(400, "Invalid pagination parameters")

        total = len(items)
        total_pages = math.ceil(total / limit)
        if total_pages and page > total_pages:
            return _error(400, f"Page {page} is out of range")
        start = (page - 1) * limit
        return _json(
            200,
            {
                "success": True,
                "data": items[start : start + limit],
                "pagination": {"page": page, "limit": limit, "total": total, "totalPages": total_pages},
            },
        )

    def _list_contacts(self, request: httpx.Request) -> httpx.Response:
        return self._paginate(request, self.contacts)

    def _count_contacts(self, request: httpx.Request) -> httpx.Response:
        return _json(200, {"success": True, "count": len(self.contacts)})

    def _find(self, contact_id: str) -> Optional[Dict[str, Any]]:
        return next((c for c in self.contacts if str(c.get("id")) == contact_id), None)

    def _get_contact(self, request: httpx.Request, contact_id: str) -> httpx.Response:
        contact = self._find(contact_id)
        if contact is None:
            return _error(404, "Contact not found")
        return _json(200, contact)

    def _create_contact(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"{}")
        if not str(body.get("name") or "").strip():
            return _error(400, "Name is required")
        now = datetime.utcnow().isoformat() + "Z"
        contact = {**body, "id": uuid.uuid4().hex[:12], "createdAt": now, "updatedAt": now}
        self.contacts.append(contact)
        return _json(201, contact)

    def _update_contact(self, request: httpx.Request, contact_id: str) -> httpx.Response:
        contact = self._find(contact_id)
        if contact is None:
            return _error(404, "Contact not found")
        contact.update(json.loads(request.content or b"{}"))
        contact["updatedAt"] = datetime.utcnow().isoformat() + "Z"
        return _json(200, contact)

    def _delete_contact(self, request: httpx.Request, contact_id: str) -> httpx.Response:
        contact = self._find(contact_id)
        if contact is None:
            return _error(404, "Contact not found")
        self.contacts.remove(contact)
        return httpx.Response(204)

    def _search_name(self, request: httpx.Request) -> httpx.Response:
        query = (request.url.params.get("query") or "").strip().lower()
        if not query:
            return _error(400, "Query parameter is required")
        matches = [c for c in self.contacts if query in str(c.get("name", "")).lower()]
        return self._paginate(request, matches)

    def _search_phone(self, request: httpx.Request) -> httpx.Response:
        wanted = _digits(request.url.params.get("phone") or "")
        if not wanted:
            return _error(400, "Phone parameter is required")
        for contact in self.contacts:
            have = _digits(contact.get("phone") or "")
            if have and (have == wanted or have.endswith(wanted) or wanted.endswith(have)):
                return _json(200, contact)
        return _error(404, "No contact found with this phone number")

    def _enumeration(self, field: str) -> httpx.Response:
        values = sorted({str(c[field]) for c in self.contacts if c.get(field)})
        return _json(200, {"success": True, "data": values})

    def _matching(self, **filters: List[str]) -> List[Dict[str, Any]]:
        out = []
        for contact in self.contacts:
            if all(not wanted or contact.get(field) in wanted for field, wanted in filters.items()):
                out.append(contact)
        return out

    def _by_blood_group(self, request: httpx.Request) -> httpx.Response:
        groups = _split(request.url.params.get("bloodGroup"))
        lobbies = _split(request.url.params.get("lobby"))
        if not groups and not lobbies:
            return _error(400, "At least one blood group or lobby is required")
        return self._paginate(request, self._matching(bloodGroup=groups, lobby=lobbies))

    def _by_lobby(self, request: httpx.Request) -> httpx.Response:
        lobbies = _split(request.url.params.get("lobby"))
        designations = _split(request.url.params.get("designation"))
        if not lobbies and not designations:
            return _error(400, "At least one lobby or designation is required")
        return self._paginate(request, self._matching(lobby=lobbies, designation=designations))

    def _filter(self, request: httpx.Request) -> httpx.Response:
        groups = _split(request.url.params.get("bloodGroup"))
        lobbies = _split(request.url.params.get("lobby"))
        designations = _split(request.url.params.get("designation"))
        if not groups and not lobbies and not designations:
            return _error(400, "At least one filter is required")
        return self._paginate(request, self._matching(bloodGroup=groups, lobby=lobbies, designation=designations))

    # --- Analytics -----------------------------------------------------------

    def _increment_visits(self, request: httpx.Request) -> httpx.Response:
        self.visit_count += 1
        self.visits_by_day[datetime.utcnow().date().isoformat()] += 1
        return _json(200, {"success": True, "data": {"visitCount": self.visit_count}})

    def _get_visits(self, request: httpx.Request) -> httpx.Response:
        return _json(200, {"success": True, "data": {"visitCount": self.visit_count}})

    def _visits_history(self, request: httpx.Request) -> httpx.Response:
        days = int(request.url.params.get("days", 30))
        today = datetime.utcnow().date()
        series = [
            {"date": (today - timedelta(days=offset)).isoformat(), "count": self.visits_by_day[(today - timedelta(days=offset)).isoformat()]}
            for offset in reversed(range(days))
        ]
        return _json(
            200,
            {
                "success": True,
                "data": series,
                "period": f"{days} days",
                "totalVisits": sum(item["count"] for item in series),
            },
        )

    def _overview(self, request: httpx.Request) -> httpx.Response:
        total = len(self.contacts)
        with_bg = sum(1 for c in self.contacts if c.get("bloodGroup"))
        with_lobby = sum(1 for c in self.contacts if c.get("lobby"))
        coverage = lambda n: f"{(n / total * 100) if total else 0:.1f}%"  # noqa: E731
        return _json(
            200,
            {
                "success": True,
                "data": {
                    "totalContacts": total,
                    "contactsWithBloodGroup": with_bg,
                    "contactsWithLobby": with_lobby,
                    "contactsWithoutBloodGroup": total - with_bg,
                    "contactsWithoutLobby": total - with_lobby,
                    "recentContacts7Days": 0,
                    "recentContacts30Days": 0,
                    "visitCount": self.visit_count,
                    "bloodGroupCoverage": coverage(with_bg),
                    "lobbyCoverage": coverage(with_lobby),
                },
            },
        )

    def _distribution(self, field: str) -> httpx.Response:
        counts = Counter(str(c[field]) for c in self.contacts if c.get(field))
        total = sum(counts.values())
        distribution = [
            {field: value, "count": count, "percentage": f"{count / total * 100:.1f}"}
            for value, count in counts.most_common()
        ]
        return _json(200, {"success": True, "data": {"total": total, "distribution": distribution}})

    def _growth(self, request: httpx.Request) -> httpx.Response:
        days = int(request.url.params.get("days", 7))
        return _json(200, {"success": True, "data": {"period": f"{days} days", "totalAdded": 0, "dailyGrowth": []}})

    def _recent(self, request: httpx.Request) -> httpx.Response:
        limit = int(request.url.params.get("limit", 10))
        ordered = sorted(self.contacts, key=lambda c: c.get("createdAt") or "", reverse=True)[:limit]
        return _json(200, {"success": True, "data": {"count": len(ordered), "contacts": ordered}})

    # --- Documents -----------------------------------------------------------

    def _documents(self, request: httpx.Request) -> httpx.Response:
        return _json(200, self.documents)

    def _documents_count(self, request: httpx.Request) -> httpx.Response:
        items = self.documents.get("data", []) if isinstance(self.documents, dict) else self.documents
        return _json(200, {"success": True, "count": len(items)})
