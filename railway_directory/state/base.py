"""
Shared plumbing for the state containers.

Each container owns its own loading/error fields and its own
RequestSequence. Requests issued by one container may complete in any order;
only the outcome of the most recently issued one is ever applied.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from railway_directory.error_handler import ErrorHandler

logger = logging.getLogger(__name__)


class RequestSequence:
    """Monotonic request counter used to discard stale completions."""

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_latest(self, token: int) -> bool:
        return token == self._latest


class AsyncState:
    """Base for containers exposing {data, loading, error} to a consumer."""

    fallback_error = "Request failed. Please try again."

    def __init__(self, error_handler: Optional[ErrorHandler] = None, loading: bool = False) -> None:
        self.loading = loading
        self.error: Optional[str] = None
        self.sequence = RequestSequence()
        self.error_handler = error_handler or ErrorHandler()

    def _begin(self) -> int:
        token = self.sequence.issue()
        self.loading = True
        self.error = None
        return token

    def _finish(self, token: int) -> bool:
        """Clear loading if `token` is still current; report whether it is."""
        if not self.sequence.is_latest(token):
            logger.debug("%s: discarding stale result for request %s", type(self).__name__, token)
            return False
        self.loading = False
        return True

    def cancel_pending(self) -> None:
        """Make any in-flight request stale and drop the loading flag."""
        self.sequence.issue()
        self.loading = False

    def _fail(self, token: int, exc: Exception, fallback: Optional[str] = None, not_found_message: Optional[str] = None) -> bool:
        if not self._finish(token):
            return False
        self.error = self.error_handler.message_for(exc, fallback or self.fallback_error, not_found_message)
        return True

    def snapshot(self) -> Dict[str, Any]:
        return {"loading": self.loading, "error": self.error}
