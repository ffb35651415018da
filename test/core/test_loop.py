import asyncio
import os
import signal
from datetime import datetime, timedelta, timezone

import pytest

from libcountdown.core.loop import LoopContext
from libcountdown.presenter import CountdownPresenter
from libcountdown.view import View
from test.conftest import RecordingTextBox


def test_sigint_tears_down_countdown():
    sink = RecordingTextBox()
    view = View("terminal", [sink])

    async def run():
        presenter = CountdownPresenter(view, format="{remaining}")
        async with LoopContext() as context:
            presenter.set_expiry(datetime.now(timezone.utc) + timedelta(seconds=30))
            loop = asyncio.get_running_loop()
            loop.call_later(0.05, os.kill, os.getpid(), signal.SIGINT)
            stopped = await context.wait(5)
            view.finalize()
        # Handlers are gone once the context has exited
        assert not loop.remove_signal_handler(signal.SIGINT)
        return stopped, presenter

    stopped, presenter = asyncio.run(run())

    assert stopped
    assert presenter.destroyed
    assert not presenter.active
    assert sink.history == ["30s"]


def test_wait_times_out():
    async def run():
        async with LoopContext() as context:
            stopped = await context.wait(0.01)
            return stopped, context.stopped

    assert asyncio.run(run()) == (False, False)


def test_stop_before_wait():
    async def run():
        async with LoopContext() as context:
            context.stop()
            return await context.wait(5)

    assert asyncio.run(run()) is True


def test_wait_outside_context():
    with pytest.raises(RuntimeError):
        asyncio.run(LoopContext().wait(0.01))


def test_pending_tasks_cancelled_on_exit():
    async def run():
        async with LoopContext():
            task = asyncio.create_task(asyncio.sleep(60))
            await asyncio.sleep(0)
        return task

    assert asyncio.run(run()).cancelled()


def test_message_only_error_is_logged(caplog):
    async def run():
        async with LoopContext():
            asyncio.get_running_loop().call_exception_handler({"message": "x"})

    asyncio.run(run())

    assert "unhandled error in event loop: x" in caplog.text
    assert "Unhandled error in exception handler" not in caplog.text


def test_exception_is_logged(caplog):
    async def run():
        async with LoopContext():
            asyncio.get_running_loop().call_exception_handler(
                {"message": "boom", "exception": ValueError("bad value")}
            )

    asyncio.run(run())

    assert "Exception in event loop:" in caplog.text
    assert "bad value" in caplog.text
