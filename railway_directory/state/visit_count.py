"""
Visit counter state.

initialize() mirrors what the page does on mount:
- auto_increment: increment once and adopt the returned value (no extra read)
- otherwise, auto_fetch: read the counter without incrementing

If the increment fails and auto_fetch is also set, the read path runs and
owns the loading flag; without auto_fetch the failure clears loading itself.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from railway_directory.error_handler import ErrorHandler
from railway_directory.integrations import AnalyticsService
from railway_directory.state.base import AsyncState

logger = logging.getLogger(__name__)


class VisitCountState(AsyncState):
    fallback_error = "Failed to fetch visit count. Please try again."
    increment_fallback_error = "Failed to increment visit count. Please try again."

    def __init__(
        self,
        analytics_service: AnalyticsService,
        auto_increment: bool = True,
        auto_fetch: bool = True,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__(error_handler, loading=auto_increment or auto_fetch)
        self.analytics_service = analytics_service
        self.auto_increment = auto_increment
        self.auto_fetch = auto_fetch
        self.visit_count: Optional[int] = None

    async def initialize(self) -> None:
        if self.auto_increment:
            incremented = await self.increment()
            if not incremented and self.auto_fetch:
                logger.info("Visit increment failed; reading the current count instead")
                await self.refetch()
        elif self.auto_fetch:
            await self.refetch()

    async def increment(self) -> bool:
        """Increment the counter; returns False when the increment failed."""
        token = self._begin()
        try:
            count = await self.analytics_service.increment_visit_count()
        except Exception as exc:
            self._fail(token, exc, fallback=self.increment_fallback_error)
            return False
        if self._finish(token):
            self.visit_count = count
        return True

    async def refetch(self) -> None:
        token = self._begin()
        try:
            count = await self.analytics_service.get_visit_count()
        except Exception as exc:
            if self._fail(token, exc):
                self.visit_count = None
            return
        if self._finish(token):
            self.visit_count = count

    def snapshot(self) -> Dict[str, Any]:
        return {**super().snapshot(), "visitCount": self.visit_count}
