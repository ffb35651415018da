from __future__ import annotations

import asyncio
from abc import ABCMeta, abstractmethod
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from libcountdown.log_utils import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, Protocol

    class Handle(Protocol):
        def cancel(self) -> None: ...


class Scheduler(metaclass=ABCMeta):
    """Where ticks come from: a wall clock and a way to run something later.

    Every call made through a scheduler happens on the one thread that owns
    the user interface, so callers never need locking.
    """

    @abstractmethod
    def now(self) -> datetime:
        """The current time as an aware datetime in UTC"""

    @abstractmethod
    def call_later(self, seconds: float, func: Callable, *args: Any) -> Handle:
        """Run func(*args) once, after the given delay"""


class EventLoopScheduler(Scheduler):
    """Schedules onto an asyncio event loop

    If no loop is given, the running loop is looked up the first time a call
    is scheduled.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def call_later(self, seconds: float, func: Callable, *args: Any) -> asyncio.TimerHandle:
        return self.loop.call_later(seconds, func, *args)


class RepeatingTimer:
    """Fire a callback now, then every ``interval`` seconds while it asks to.

    The callback returns a truthy value to be called again. ``cancel`` sets a
    token which is checked before every firing, so a firing that was already
    queued when the timer was cancelled does nothing.
    """

    def __init__(self, scheduler: Scheduler, interval: float, callback: Callable[[], Any]):
        self.scheduler = scheduler
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.fired = 0
        self._handle: Handle | None = None

    @property
    def active(self) -> bool:
        """True while a firing is pending"""
        return self._handle is not None

    def start(self) -> None:
        if self.fired or self.active:
            raise RuntimeError("RepeatingTimer can only be started once")
        self._fire()

    def cancel(self) -> None:
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        if self.cancelled:
            return

        self.fired += 1
        try:
            again = self.callback()
        except Exception:
            logger.exception("got exception from countdown timer")
            return

        # The callback may have cancelled us
        if again and not self.cancelled:
            self._handle = self.scheduler.call_later(self.interval, self._fire)
