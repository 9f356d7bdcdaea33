"""Polling scheduler that turns reminder settings into notifications."""

import asyncio
import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from cal_ai.clock import Clock
from cal_ai.domain.models import UserData
from cal_ai.domain.reminders import ReminderSettings, ReminderType

DEFAULT_POLL_SECONDS = 30.0

_logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Delivers user-facing notifications."""

    def notify(self, title: str, body: str) -> None:
        """Show a notification."""


@dataclass(frozen=True)
class Notification:
    """Title and body for a reminder."""

    title: str
    body: str


def notification_for(reminder_type: ReminderType) -> Notification:
    if reminder_type is ReminderType.WATER:
        return Notification(
            title="💧 Stay Hydrated!", body="Time to log your water intake."
        )
    return Notification(
        title="🍽️ Meal Time!",
        body=f"Don't forget to log your {reminder_type.value}.",
    )


def _always_granted() -> bool:
    return True


@dataclass
class ReminderScheduler:
    """Fires each enabled reminder at most once per calendar day.

    ``tick`` compares the clock's current minute with every enabled reminder
    and remembers, per type, the last day it fired. Those markers live only as
    long as the process and are reset whenever the user or their reminder
    settings change.
    """

    clock: Clock
    sink: NotificationSink
    permission_granted: Callable[[], bool] = _always_granted
    poll_seconds: float = DEFAULT_POLL_SECONDS
    _user_id: str | None = field(init=False, default=None)
    _reminders: ReminderSettings | None = field(init=False, default=None)
    _fired: dict[ReminderType, date] = field(init=False, default_factory=dict)
    _task: "asyncio.Task[None] | None" = field(init=False, default=None)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sync(self, user: UserData | None) -> None:
        """Track the active user's reminders, restarting on any change."""
        user_id = user.profile.id if user else None
        reminders = user.reminders if user else None
        if user_id == self._user_id and reminders == self._reminders:
            return
        self._user_id = user_id
        self._reminders = reminders
        self._fired = {}
        if self._task is not None:
            self.stop()
            self.start()

    def tick(self) -> list[ReminderType]:
        """Send due notifications and return the types that fired."""
        if self._reminders is None or not self.permission_granted():
            return []
        now = self.clock.now()
        today = now.date()
        current_minute = f"{now.hour:02d}:{now.minute:02d}"
        fired: list[ReminderType] = []
        for reminder_type, reminder in self._reminders.items():
            if not reminder.enabled or reminder.time != current_minute:
                continue
            if self._fired.get(reminder_type) == today:
                continue
            notification = notification_for(reminder_type)
            self.sink.notify(notification.title, notification.body)
            self._fired[reminder_type] = today
            fired.append(reminder_type)
        return fired

    def start(self) -> None:
        """Start polling on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run())

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def close(self) -> None:
        """Cancel polling and wait for the task to finish."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.poll_seconds)
            try:
                self.tick()
            except Exception:
                _logger.exception("Reminder tick failed")
