from __future__ import annotations

import asyncio
import sys
from datetime import timedelta

from libcountdown import confreader
from libcountdown.core.loop import LoopContext
from libcountdown.log_utils import logger
from libcountdown.presenter import CountdownPresenter
from libcountdown.timer import EventLoopScheduler
from libcountdown.view import TerminalTextBox, View


def load_config(options) -> confreader.Config:
    config = confreader.Config(options.configfile)
    config.load()
    if getattr(options, "expires", None) is not None:
        config.expires = options.expires
    if getattr(options, "seconds", None) is not None:
        config.expires = EventLoopScheduler().now() + timedelta(seconds=options.seconds)
    config.validate()
    if getattr(options, "log_level", None) is None:
        logger.setLevel(config.log_level)
    return config


async def countdown(config: confreader.Config, stream=None) -> bool:
    """
    Count down to config.expires on the terminal. Returns False if the
    countdown was interrupted before the expiry.
    """
    view = View("terminal", [TerminalTextBox(config.sink, stream)])
    options = dict(config.countdown_defaults)
    options["sink"] = config.sink
    presenter = CountdownPresenter(view, EventLoopScheduler(), **options)

    async with LoopContext() as loop:
        presenter.set_expiry(config.expires)
        remaining = presenter.remaining()
        timeout = max(remaining.total_seconds(), 0) + presenter.update_interval
        interrupted = await loop.wait(timeout)
        view.finalize()

    logger.info("Countdown %s", "interrupted" if interrupted else "finished")
    return not interrupted


def run(options) -> int:
    try:
        config = load_config(options)
    except confreader.ConfigError as e:
        print(f"countdown: {e}", file=sys.stderr)
        return 1

    if config.expires is None:
        print("countdown: no expiry given, use --expires, --seconds or a config file", file=sys.stderr)
        return 1

    finished = asyncio.run(countdown(config))
    return 0 if finished else 130


def add_subcommand(subparsers, parents):
    parser = subparsers.add_parser(
        "run", parents=parents, help="Count down to an expiry in the terminal."
    )
    parser.add_argument(
        "-c",
        "--config",
        action="store",
        default=None,
        dest="configfile",
        help="Use the specified configuration file.",
    )
    expiry = parser.add_mutually_exclusive_group()
    expiry.add_argument(
        "-e",
        "--expires",
        default=None,
        dest="expires",
        help="Expiry as an ISO 8601 timestamp, UTC if no offset is given.",
    )
    expiry.add_argument(
        "-s",
        "--seconds",
        default=None,
        type=float,
        dest="seconds",
        help="Expire this many seconds from now.",
    )
    parser.set_defaults(func=run)
