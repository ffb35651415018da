from __future__ import annotations

import asyncio
import contextlib
import signal
from typing import TYPE_CHECKING

from libcountdown.log_utils import logger

if TYPE_CHECKING:
    from collections.abc import Callable


class LoopContext(contextlib.AbstractAsyncContextManager):
    """Installs signal and exception handlers on the running loop

    Without explicit ``signals``, SIGINT and SIGTERM call ``stop``. On exit
    every other pending task is cancelled and awaited.
    """

    def __init__(
        self,
        signals: dict[signal.Signals, Callable] | None = None,
    ) -> None:
        super().__init__()
        if signals is None:
            signals = {signal.SIGINT: self.stop, signal.SIGTERM: self.stop}
        self._signals = signals
        self._stopped: asyncio.Event | None = None

    @property
    def stopped(self) -> bool:
        return self._stopped is not None and self._stopped.is_set()

    def stop(self) -> None:
        if self._stopped is not None:
            logger.debug("Stop requested")
            self._stopped.set()

    async def wait(self, timeout: float | None = None) -> bool:
        """Wait until stop() is called or timeout passes. Returns whether stopped."""
        if self._stopped is None:
            raise RuntimeError("LoopContext not entered")
        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(self._stopped.wait(), timeout)
        return self._stopped.is_set()

    async def __aenter__(self) -> LoopContext:
        self._stopped = asyncio.Event()
        loop = asyncio.get_running_loop()
        loop.set_exception_handler(self._handle_exception)
        for sig, handler in self._signals.items():
            loop.add_signal_handler(sig, handler)

        return self

    async def __aexit__(self, *args) -> None:  # type: ignore
        await self._cancel_all_tasks()

        loop = asyncio.get_running_loop()
        for sig in self._signals:
            loop.remove_signal_handler(sig)
        loop.set_exception_handler(None)

    async def _cancel_all_tasks(self) -> None:
        # we don't want to cancel this task, so filter all_tasks
        # generator to filter in place
        pending = (task for task in asyncio.all_tasks() if task is not asyncio.current_task())
        for task in pending:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    def _handle_exception(
        self,
        loop: asyncio.AbstractEventLoop,
        context: dict,
    ) -> None:
        if "exception" in context:
            exc = context["exception"]
            if not isinstance(exc, asyncio.CancelledError):
                logger.exception("Exception in event loop:", exc_info=exc)  # noqa: G202
        else:
            logger.error("unhandled error in event loop: %s", context.get("message"))
