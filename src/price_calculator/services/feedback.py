"""User feedback notifications."""

import logging
from typing import Protocol

_logger = logging.getLogger(__name__)


class FeedbackSink(Protocol):
    """Fire-and-forget haptic or toast feedback."""

    def notify(self, kind: str) -> None:
        """Emit feedback of the given kind, e.g. "success" or "expired"."""


class LoggingFeedbackSink(FeedbackSink):
    """Feedback sink that only logs."""

    def notify(self, kind: str) -> None:
        """Log the feedback kind."""
        _logger.info("Feedback: %s", kind)
