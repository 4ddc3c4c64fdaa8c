"""Error handling helpers for the directory state containers."""
from typing import Optional
import logging

from railway_directory.integrations import ApiError, FilterRequiredError
from railway_directory.validation import QueryValidationError

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Turns any exception caught by a state container into one user-facing string."""

    def message_for(self, exc: Exception, fallback: str, not_found_message: Optional[str] = None) -> str:
        if isinstance(exc, QueryValidationError):
            return exc.message
        if isinstance(exc, ApiError):
            logger.warning("Directory API error (status=%s): %s", exc.status, exc.message)
            if exc.status == 404 and not_found_message:
                return not_found_message
            return exc.message
        if isinstance(exc, FilterRequiredError):
            return str(exc)
        logger.error("Unclassified failure: %s", exc, exc_info=exc)
        return fallback
