from __future__ import annotations

from typing import TYPE_CHECKING

from libcountdown import configurable
from libcountdown.log_utils import logger
from libcountdown.timer import EventLoopScheduler, RepeatingTimer
from libcountdown.utils import describe_attributes, format_remaining, split_remaining, to_utc

if TYPE_CHECKING:
    from datetime import datetime, timedelta
    from typing import Any

    from libcountdown.timer import Scheduler
    from libcountdown.view import View


class CountdownPresenter(configurable.Configurable):
    """Shows the time left until an expiry instant

    Once an expiry is set the remaining time is written to the text surface
    named by ``sink`` every ``update_interval`` seconds. Updates stop when the
    expiry is reached or when the host view is torn down, whichever comes
    first. The surface is looked up again on every update and is never kept.
    """

    defaults: list[tuple[str, Any, str]] = [
        (
            "format",
            "This temporary code is valid for the next {remaining}",
            "Format of the displayed text. Available variables: {remaining} == the"
            " formatted duration, {D} == days, {H} == hours, {M} == minutes, {S} == seconds.",
        ),
        (
            "duration_format",
            None,
            "Format used for {remaining}, e.g. '{H}:{M}:{S}'. None drops leading zero"
            " units, giving '1m 5s'.",
        ),
        ("update_interval", 1.0, "Seconds between updates"),
        ("sink", "countdown_text", "Identifier of the text surface to write to"),
        ("name", "countdown", "Name used in logs and info()"),
    ]

    def __init__(self, view: View, scheduler: Scheduler | None = None, **config):
        configurable.Configurable.__init__(self, **config)
        self.add_defaults(CountdownPresenter.defaults)
        self.view = view
        self.scheduler = scheduler if scheduler is not None else EventLoopScheduler()
        self.deadline: datetime | None = None
        self.destroyed = False
        self.text: str | None = None
        self._timer: RepeatingTimer | None = None
        view.subscribe_destroy(self.on_destroy)

    def __repr__(self):
        attrs = describe_attributes(self, ["name", "deadline", "destroyed"])
        return f"<CountdownPresenter {attrs}>"

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.active

    def set_expiry(self, deadline: datetime | str | int | float) -> None:
        """Start counting down to deadline, replacing any previous one."""
        self.deadline = to_utc(deadline)
        logger.debug("%s: counting down to %s", self.name, self.deadline.isoformat())

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        if self.destroyed:
            return

        self._timer = RepeatingTimer(self.scheduler, self.update_interval, self.tick)
        self._timer.start()

    def on_destroy(self) -> None:
        """The host view is gone: nothing is written or scheduled from now on."""
        if self.destroyed:
            return
        self.destroyed = True
        if self._timer is not None:
            self._timer.cancel()
        logger.debug("%s: destroyed", self.name)

    def remaining(self) -> timedelta | None:
        if self.deadline is None:
            return None
        return self.deadline - self.scheduler.now()

    def poll(self, remaining: timedelta) -> str:
        total, days, hours, minutes, seconds = split_remaining(remaining)
        return self.format.format(
            remaining=format_remaining(remaining, self.duration_format),
            D=f"{days:02d}",
            H=f"{hours:02d}",
            M=f"{minutes:02d}",
            S=f"{seconds:02d}",
        )

    def tick(self) -> bool:
        """Render the remaining time once. Returns whether to tick again."""
        if self.destroyed:
            return False

        remaining = self.remaining()
        if remaining is None or remaining.total_seconds() <= 0:
            logger.debug("%s: expired", self.name)
            return False

        sink = self.view.find(self.sink)
        if sink is None:
            # The view went away between ticks
            logger.debug("%s: text surface %s is gone", self.name, self.sink)
            return False

        self.text = self.poll(remaining)
        sink.update(self.text)
        return True

    def info(self) -> dict:
        """Info for this object."""
        return dict(
            name=self.name,
            sink=self.sink,
            deadline=self.deadline.isoformat() if self.deadline is not None else None,
            destroyed=self.destroyed,
            active=self.active,
            text=self.text,
        )
