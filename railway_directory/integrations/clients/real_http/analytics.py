"""
Analytics service.

Read-only aggregates computed by the backend (overview, distributions,
growth, recent contacts, visit history) plus the visit counter.

Visit counting has two separate intents that must never be conflated:
- increment_visit_count() mutates the server-side counter
- get_visit_count() only reads it
"""

from __future__ import annotations

from typing import Any, Dict

from railway_directory.integrations.clients.real_http.api_client import ApiClient
from railway_directory.integrations.response_wrappers import IntegrationResponseError, unwrap_data

ANALYTICS_PATH = "/api/analytics"
VISITS_PATH = f"{ANALYTICS_PATH}/visits"


class AnalyticsService:
    def __init__(self, api_client: ApiClient) -> None:
        self.api_client = api_client

    async def increment_visit_count(self) -> int:
        """Increment the visit counter and return the new value."""
        response = await self.api_client.post(VISITS_PATH, {})
        return _visit_count(response)

    async def get_visit_count(self) -> int:
        """Read the visit counter without incrementing it."""
        response = await self.api_client.get(VISITS_PATH)
        return _visit_count(response)

    async def get_overview(self) -> Dict[str, Any]:
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/overview"))

    async def get_blood_group_distribution(self) -> Dict[str, Any]:
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/blood-groups"))

    async def get_lobby_distribution(self) -> Dict[str, Any]:
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/lobbies"))

    async def get_designation_distribution(self) -> Dict[str, Any]:
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/designations"))

    async def get_growth(self, days: int = 7) -> Dict[str, Any]:
        """Contacts added per day over the last `days` days (backend caps at 365)."""
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/growth", params={"days": days}))

    async def get_recent_contacts(self, limit: int = 10) -> Dict[str, Any]:
        """Most recently added contacts (backend caps at 100)."""
        return unwrap_data(await self.api_client.get(f"{ANALYTICS_PATH}/recent", params={"limit": limit}))

    async def get_visits_history(self, days: int = 30) -> Dict[str, Any]:
        """Daily visit counts; the backend returns the series next to period/totalVisits."""
        response = await self.api_client.get(f"{VISITS_PATH}/history", params={"days": days})
        if not isinstance(response, dict):
            raise IntegrationResponseError("Visit history response must be an object.", payload=response)
        return {
            "period": response.get("period", ""),
            "totalVisits": response.get("totalVisits", 0),
            "data": response.get("data") if isinstance(response.get("data"), list) else [],
        }


def _visit_count(response: Any) -> int:
    data = unwrap_data(response)
    if not isinstance(data, dict) or "visitCount" not in data:
        raise IntegrationResponseError("Visit count response is missing 'visitCount'.", payload=response)
    return int(data["visitCount"])
