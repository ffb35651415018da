# Copyright (c) 2012 Florian Mounier
# Copyright (c) 2013-2014 Tao Sauvage
# Copyright (c) 2014 Sean Vig
# Copyright (c) 2014 roger
# Copyright (c) 2022 Matt Colligan
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

from __future__ import annotations

import os
import sys
import typing
import warnings
from logging import (
    WARNING,
    Formatter,
    Handler,
    StreamHandler,
    captureWarnings,
    getLevelName,
    getLogger,
)
from logging.handlers import RotatingFileHandler
from pathlib import Path

if typing.TYPE_CHECKING:
    from logging import Logger, LogRecord

logger = getLogger(__package__)


class ColorFormatter(Formatter):
    """Expands $COLOR, $BOLD and $RESET markers into ANSI escapes

    $COLOR is picked from the level of the record being formatted.
    """

    level_colors = {
        "DEBUG": 34,
        "INFO": 32,
        "WARNING": 33,
        "ERROR": 31,
        "CRITICAL": 33,
    }
    reset_seq = "\033[0m"
    bold_seq = "\033[1m"

    def format(self, record: LogRecord) -> str:
        color = f"\033[{self.level_colors.get(record.levelname, 37)}m"
        text = Formatter.format(self, record)
        markers = (("$RESET", self.reset_seq), ("$BOLD", self.bold_seq), ("$COLOR", color))
        for marker, seq in markers:
            text = text.replace(marker, seq)
        return text + self.reset_seq


CONSOLE_FORMAT = (
    "$RESET$COLOR%(asctime)s $BOLD$COLOR%(levelname)s $RESET%(name)s "
    "%(module)s.%(funcName)s:%(lineno)d %(message)s"
)
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(module)s.%(funcName)s:%(lineno)d %(message)s"


def get_default_log() -> Path:
    """$XDG_DATA_HOME/countdown/countdown.log, or under ~/.local/share"""
    data_home = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return Path(data_home) / "countdown" / "countdown.log"


def _console_handler() -> Handler:
    # stdout belongs to the countdown line
    handler = StreamHandler(sys.stderr)
    handler.setFormatter(ColorFormatter(CONSOLE_FORMAT))
    return handler


def _file_handler(log_path: Path, log_size: int, log_numbackups: int) -> Handler:
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        sys.exit(f"countdown: cannot create log directory {log_path.parent}: {e}")

    handler = RotatingFileHandler(log_path, maxBytes=log_size, backupCount=log_numbackups)
    handler.setFormatter(Formatter(FILE_FORMAT))
    return handler


def init_log(
    log_level: int = WARNING,
    log_path: Path | None = None,
    log_size: int = 10000000,
    log_numbackups: int = 1,
    logger: Logger = logger,
) -> None:
    """
    Send the package log to log_path, rotating at log_size bytes.

    Without a path, or with COUNTDOWN_DEBUG set in the environment, records
    go to a coloured stderr handler instead.
    """
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    if log_path is None or os.getenv("COUNTDOWN_DEBUG"):
        handler = _console_handler()
    else:
        handler = _file_handler(log_path, log_size, log_numbackups)

    logger.addHandler(handler)
    logger.setLevel(log_level)
    captureWarnings(True)
    warnings.simplefilter("always")
    logger.debug("Logging started at level %s", getLevelName(log_level))
