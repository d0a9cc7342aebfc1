import logging

from grams.resource_requests.application.ports import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Transient notifications for headless use: they only go to the log."""

    def success(self, message: str) -> None:
        logger.info(f"✅ {message}")

    def error(self, message: str) -> None:
        logger.warning(f"❌ {message}")
