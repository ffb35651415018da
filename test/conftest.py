from datetime import datetime, timedelta, timezone

import pytest

from libcountdown.timer import Scheduler
from libcountdown.view import TextBox, View

START = datetime(2024, 5, 17, 9, 30, 0, tzinfo=timezone.utc)


class FakeHandle:
    def __init__(self, when, func, args):
        self.when = when
        self.func = func
        self.args = args
        self.ran = False
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled

    def run(self):
        self.ran = True
        self.func(*self.args)


class FakeScheduler(Scheduler):
    """A scheduler whose clock only moves when told to

    Calls are run in order of their due time (then in the order they were
    scheduled) as the clock is advanced past them.
    """

    def __init__(self, start=START):
        self.current = start
        self.handles = []

    def now(self):
        return self.current

    def call_later(self, seconds, func, *args):
        handle = FakeHandle(self.current + timedelta(seconds=seconds), func, args)
        self.handles.append(handle)
        return handle

    @property
    def pending(self):
        return [h for h in self.handles if not h.ran and not h.cancelled()]

    def advance(self, seconds):
        target = self.current + timedelta(seconds=seconds)
        while True:
            due = [h for h in self.pending if h.when <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.when)
            self.current = handle.when
            handle.run()
        self.current = target


class RecordingTextBox(TextBox):
    def __init__(self, name="countdown_text", text=""):
        TextBox.__init__(self, name, text)
        self.history = []

    def draw(self):
        self.history.append(self.text)


@pytest.fixture(scope="function")
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture(scope="function")
def fake_sink():
    return RecordingTextBox()


@pytest.fixture(scope="function")
def fake_view(fake_sink):
    return View("fake", [fake_sink])
