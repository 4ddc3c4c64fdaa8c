"""
Analytics dashboard state.

load() fetches every section concurrently. Growth and visit history have
their own period selectors; changing one refetches only that section, and
each section keeps its own request sequence so a slow earlier period never
overwrites a newer one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import AnalyticsService
from railway_directory.state.base import AsyncState, RequestSequence

logger = logging.getLogger(__name__)

RECENT_CONTACTS_LIMIT = 10


class AnalyticsDashboardState(AsyncState):
    fallback_error = "Failed to fetch analytics. Please try again."

    def __init__(
        self,
        analytics_service: AnalyticsService,
        growth_days: int = 30,
        visits_days: int = 30,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler, loading=True)
        self.analytics_service = analytics_service
        self.growth_days = growth_days
        self.visits_days = visits_days
        self.overview: Optional[Dict[str, Any]] = None
        self.blood_groups: Optional[Dict[str, Any]] = None
        self.lobbies: Optional[Dict[str, Any]] = None
        self.designations: Optional[Dict[str, Any]] = None
        self.growth: Optional[Dict[str, Any]] = None
        self.recent: Optional[Dict[str, Any]] = None
        self.visits_history: Optional[Dict[str, Any]] = None
        self.growth_loading = False
        self.visits_loading = False
        self._growth_sequence = RequestSequence()
        self._visits_sequence = RequestSequence()

    async def load(self) -> None:
        token = self._begin()
        service = self.analytics_service
        growth_token = self._growth_sequence.issue()
        visits_token = self._visits_sequence.issue()
        try:
            results = await asyncio.gather(
                service.get_overview(),
                service.get_blood_group_distribution(),
                service.get_lobby_distribution(),
                service.get_designation_distribution(),
                service.get_growth(self.growth_days),
                service.get_recent_contacts(RECENT_CONTACTS_LIMIT),
                service.get_visits_history(self.visits_days),
            )
        except Exception as exc:
            self._fail(token, exc)
            return
        if not self._finish(token):
            return
        overview, blood_groups, lobbies, designations, growth, recent, visits = results
        self.overview = overview
        self.blood_groups = blood_groups
        self.lobbies = lobbies
        self.designations = designations
        self.recent = recent
        if self._growth_sequence.is_latest(growth_token):
            self.growth = growth
        if self._visits_sequence.is_latest(visits_token):
            self.visits_history = visits

    async def set_growth_days(self, days: int) -> None:
        self.growth_days = days
        token = self._growth_sequence.issue()
        self.growth_loading = True
        try:
            growth = await self.analytics_service.get_growth(days)
        except Exception as exc:
            # section errors are logged only; the rest of the dashboard stays usable
            if self._growth_sequence.is_latest(token):
                self.growth_loading = False
                logger.warning("Error fetching growth data: %s", exc)
            return
        if self._growth_sequence.is_latest(token):
            self.growth = growth
            self.growth_loading = False

    async def set_visits_days(self, days: int) -> None:
        self.visits_days = days
        token = self._visits_sequence.issue()
        self.visits_loading = True
        try:
            visits = await self.analytics_service.get_visits_history(days)
        except Exception as exc:
            if self._visits_sequence.is_latest(token):
                self.visits_loading = False
                logger.warning("Error fetching visits history: %s", exc)
            return
        if self._visits_sequence.is_latest(token):
            self.visits_history = visits
            self.visits_loading = False

    def snapshot(self) -> Dict[str, Any]:
        return {
            **super().snapshot(),
            "overview": self.overview,
            "bloodGroups": self.blood_groups,
            "lobbies": self.lobbies,
            "designations": self.designations,
            "growth": self.growth,
            "recent": self.recent,
            "visitsHistory": self.visits_history,
        }
