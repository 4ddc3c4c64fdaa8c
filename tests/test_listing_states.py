import asyncio

import pytest

from railway_directory.integrations import ApiError, DocumentsService
from railway_directory.state import (
    AnalyticsDashboardState,
    CategoryBrowserState,
    ContactsCountState,
    ContactsListState,
    DocumentsState,
)


# --- contacts list / count ----------------------------------------------------


@pytest.mark.asyncio
async def test_contacts_list_loads_and_pages(contacts_service, backend):
    state = ContactsListState(contacts_service, page=1, limit=3)
    assert state.loading is True

    await state.load()
    assert [c.id for c in state.contacts] == ["1", "2", "3"]
    assert state.pagination.total_pages == 3

    await state.set_page(3)
    assert [c.id for c in state.contacts] == ["7"]
    assert state.snapshot()["pagination"] == {"page": 3, "limit": 3, "total": 7, "totalPages": 3}


@pytest.mark.asyncio
async def test_contacts_list_without_auto_fetch_stays_idle(contacts_service, backend):
    state = ContactsListState(contacts_service, auto_fetch=False)

    await state.load()
    await state.set_limit(10)

    assert state.loading is False
    assert backend.requests == []

    await state.refetch()
    assert len(state.contacts) == 7


@pytest.mark.asyncio
async def test_contacts_list_surfaces_backend_error(contacts_service):
    state = ContactsListState(contacts_service, page=1, limit=500)

    await state.load()

    assert state.error == "Invalid pagination parameters"
    assert state.contacts == []
    assert state.loading is False


@pytest.mark.asyncio
async def test_contacts_count(contacts_service):
    state = ContactsCountState(contacts_service)

    await state.load()

    assert state.count == 7
    assert state.snapshot() == {"loading": False, "error": None, "count": 7}


# --- category browser ---------------------------------------------------------


@pytest.mark.asyncio
async def test_blood_group_category_loads_options_without_contacts(contacts_service, backend):
    state = CategoryBrowserState(contacts_service)

    await state.select_category("blood-group")

    assert state.options["blood_groups"].values == ["A+", "AB+", "B+", "O+", "O-"]
    assert state.options["lobbies"].values == ["BZA", "GNT", "RJY"]
    assert state.options["designations"].values == []
    assert state.contacts == []
    assert backend.request_count(path="/api/contacts/by-blood-group") == 0


@pytest.mark.asyncio
async def test_selection_change_resets_page(contacts_service, backend):
    state = CategoryBrowserState(contacts_service, page_size=1)
    await state.select_category("blood-group")

    await state.set_blood_groups(["A+"])
    await state.set_page(2)
    assert state.page == 2
    assert [c.id for c in state.contacts] == ["7"]

    await state.set_lobbies(["GNT"])
    assert state.page == 1
    params = backend.requests[-1].url.params
    assert params["bloodGroup"] == "A+"
    assert params["lobby"] == "GNT"
    assert params["page"] == "1"
    assert [c.id for c in state.contacts] == ["2"]


@pytest.mark.asyncio
async def test_emptying_selection_clears_without_a_call(contacts_service, backend):
    state = CategoryBrowserState(contacts_service)
    await state.select_category("division")
    await state.set_lobbies(["RJY"])
    assert [c.id for c in state.contacts] == ["4"]
    calls = len(backend.requests)

    await state.set_lobbies([])

    assert state.contacts == []
    assert state.pagination is None
    assert len(backend.requests) == calls


@pytest.mark.asyncio
async def test_all_contacts_uses_unified_filter(contacts_service, backend):
    state = CategoryBrowserState(contacts_service)
    await state.select_category("all-contacts")
    await state.set_designations(["STATION"])

    assert backend.requests[-1].url.path == "/api/contacts/filter"
    assert sorted(c.id for c in state.contacts) == ["3", "7"]


@pytest.mark.asyncio
@pytest.mark.parametrize("category, expected", [("hotels", ["5"]), ("stations", ["3", "7"])])
async def test_fixed_designation_categories_load_immediately(contacts_service, category, expected):
    state = CategoryBrowserState(contacts_service)

    await state.select_category(category)

    assert sorted(c.id for c in state.contacts) == expected


@pytest.mark.asyncio
async def test_emergency_category_fetches_nothing(contacts_service, backend):
    state = CategoryBrowserState(contacts_service)
    await state.select_category("emergency-contacts")
    assert backend.requests == []


@pytest.mark.asyncio
async def test_unknown_category_is_rejected(contacts_service):
    with pytest.raises(ValueError):
        await CategoryBrowserState(contacts_service).select_category("airports")


@pytest.mark.asyncio
async def test_option_failure_is_reported_per_list():
    class NoLobbiesService:
        async def get_blood_groups(self):
            return ["O+"]

        async def get_lobbies(self):
            raise ApiError("Lobbies unavailable", 500)

    state = CategoryBrowserState(NoLobbiesService())
    await state.select_category("blood-group")

    assert state.options["blood_groups"].values == ["O+"]
    assert state.options["lobbies"].error == "Lobbies unavailable"
    assert state.options["lobbies"].loading is False
    assert state.error is None


@pytest.mark.asyncio
async def test_stale_option_load_does_not_overwrite_newer_category():
    release_first = asyncio.Event()

    class SlowFirstLobbiesService:
        def __init__(self):
            self.lobby_calls = 0

        async def get_blood_groups(self):
            return ["O+"]

        async def get_lobbies(self):
            self.lobby_calls += 1
            if self.lobby_calls == 1:
                await release_first.wait()
                raise ApiError("Lobbies unavailable", 500)
            return ["BZA", "GNT"]

        async def get_designations(self):
            return ["GUARD"]

    state = CategoryBrowserState(SlowFirstLobbiesService())
    first = asyncio.create_task(state.select_category("blood-group"))
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    assert state.options["lobbies"].loading is True

    await state.select_category("division")
    assert state.options["lobbies"].values == ["BZA", "GNT"]

    release_first.set()
    await first

    assert state.category == "division"
    assert state.options["lobbies"].values == ["BZA", "GNT"]
    assert state.options["lobbies"].error is None
    assert state.options["lobbies"].loading is False
    assert state.options["designations"].values == ["GUARD"]


# --- documents ----------------------------------------------------------------


@pytest.mark.asyncio
async def test_documents_local_filter(documents_service, backend):
    state = DocumentsState(documents_service)
    await state.load()
    calls = len(backend.requests)

    state.set_search_query("  ROSTER ")
    assert [d.id for d in state.filtered_documents] == ["d2"]

    state.set_search_query("")
    assert len(state.filtered_documents) == 2
    assert len(backend.requests) == calls


@pytest.mark.asyncio
async def test_documents_failure_message(api_client):
    state = DocumentsState(DocumentsService(api_client, ""))
    await state.load()

    assert state.error == "Failed to fetch documents. Please try again."
    assert state.documents == []


# --- analytics dashboard ------------------------------------------------------


@pytest.mark.asyncio
async def test_dashboard_loads_every_section(analytics_service, backend):
    state = AnalyticsDashboardState(analytics_service, growth_days=30, visits_days=7)

    await state.load()

    assert state.loading is False
    assert state.overview["totalContacts"] == 7
    assert state.blood_groups["total"] == 6
    assert state.growth["period"] == "30 days"
    assert state.recent["count"] == 7
    assert state.visits_history["period"] == "7 days"
    assert backend.request_count(path="/api/analytics/recent") == 1
    recent_request = next(r for r in backend.requests if r.url.path == "/api/analytics/recent")
    assert recent_request.url.params["limit"] == "10"


@pytest.mark.asyncio
async def test_dashboard_section_error_sets_error(analytics_service):
    async def broken():
        raise ApiError("Analytics offline", 503)

    analytics_service.get_overview = broken
    state = AnalyticsDashboardState(analytics_service)

    await state.load()

    assert state.error == "Analytics offline"
    assert state.loading is False


@pytest.mark.asyncio
async def test_growth_period_change_keeps_latest_only():
    gates = {}

    class SlowGrowthService:
        async def get_growth(self, days):
            gate = gates.setdefault(days, asyncio.Event())
            await gate.wait()
            return {"period": f"{days} days"}

    state = AnalyticsDashboardState(SlowGrowthService())
    first = asyncio.create_task(state.set_growth_days(7))
    second = asyncio.create_task(state.set_growth_days(90))
    await asyncio.sleep(0)

    gates[90].set()
    await second
    gates[7].set()
    await first

    assert state.growth == {"period": "90 days"}
    assert state.growth_days == 90
    assert state.growth_loading is False


@pytest.mark.asyncio
async def test_visits_period_failure_is_logged_only(caplog):
    class BrokenVisitsService:
        async def get_visits_history(self, days):
            raise ApiError("History unavailable", 500)

    state = AnalyticsDashboardState(BrokenVisitsService())

    await state.set_visits_days(90)

    assert state.error is None
    assert state.visits_loading is False
    assert "History unavailable" in caplog.text
