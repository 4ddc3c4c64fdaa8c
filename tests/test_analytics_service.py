import httpx
import pytest

from railway_directory.integrations import AnalyticsService, ApiClient, IntegrationResponseError
from railway_directory.utils.config_loader import ApiConfig


@pytest.mark.asyncio
async def test_increment_posts_and_returns_new_value(analytics_service, backend):
    backend.visit_count = 41

    assert await analytics_service.increment_visit_count() == 42
    assert backend.request_count("POST", "/api/analytics/visits") == 1
    assert backend.requests[-1].content == b"{}"


@pytest.mark.asyncio
async def test_get_visit_count_never_increments(analytics_service, backend):
    backend.visit_count = 7

    assert await analytics_service.get_visit_count() == 7
    assert await analytics_service.get_visit_count() == 7
    assert backend.request_count("POST") == 0


@pytest.mark.asyncio
async def test_overview(analytics_service):
    overview = await analytics_service.get_overview()

    assert overview["totalContacts"] == 7
    assert overview["contactsWithBloodGroup"] == 6
    assert overview["contactsWithoutLobby"] == 1


@pytest.mark.asyncio
async def test_distributions(analytics_service):
    blood_groups = await analytics_service.get_blood_group_distribution()
    lobbies = await analytics_service.get_lobby_distribution()
    designations = await analytics_service.get_designation_distribution()

    assert blood_groups["total"] == 6
    assert blood_groups["distribution"][0] == {"bloodGroup": "A+", "count": 2, "percentage": "33.3"}
    assert {item["lobby"] for item in lobbies["distribution"]} == {"BZA", "GNT", "RJY"}
    assert designations["total"] == 7


@pytest.mark.asyncio
async def test_growth_and_recent_pass_parameters(analytics_service, backend):
    growth = await analytics_service.get_growth(days=90)
    assert growth["period"] == "90 days"
    assert backend.requests[-1].url.params["days"] == "90"

    recent = await analytics_service.get_recent_contacts(limit=2)
    assert recent["count"] == 2
    assert [c["id"] for c in recent["contacts"]] == ["7", "6"]


@pytest.mark.asyncio
async def test_visits_history_reflects_increments(analytics_service):
    await analytics_service.increment_visit_count()
    await analytics_service.increment_visit_count()

    history = await analytics_service.get_visits_history(days=7)

    assert history["period"] == "7 days"
    assert history["totalVisits"] == 2
    assert len(history["data"]) == 7
    assert history["data"][-1]["count"] == 2


@pytest.mark.asyncio
async def test_malformed_visit_count_response():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"success": True, "data": {}}))
    service = AnalyticsService(ApiClient(ApiConfig(base_url="http://directory.test"), transport=transport))

    with pytest.raises(IntegrationResponseError):
        await service.get_visit_count()
