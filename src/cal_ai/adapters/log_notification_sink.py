"""Notification sink that writes reminders to the application log."""

import logging

from cal_ai.services.reminders import NotificationSink

_logger = logging.getLogger(__name__)


class LogNotificationSink(NotificationSink):
    def notify(self, title: str, body: str) -> None:
        _logger.info("Notification: %s %s", title, body)
