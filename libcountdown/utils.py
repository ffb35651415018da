# Copyright (c) 2008, Aldo Cortesi. All rights reserved.
# Copyright (c) 2020, Matt Colligan. All rights reserved.
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

import importlib.metadata
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import dateutil.parser

from libcountdown.confreader import ConfigError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

try:
    VERSION = importlib.metadata.version("countdown")
except importlib.metadata.PackageNotFoundError:
    VERSION = "dev"

ONE_SECOND = timedelta(seconds=1)


def to_utc(value: datetime | str | int | float) -> datetime:
    """
    Normalise an absolute timestamp to an aware datetime in UTC.

    Naive datetimes (and strings without an offset) are taken to be UTC
    already. Numbers are seconds since the epoch.
    """
    if isinstance(value, bool):
        raise ConfigError(f"Invalid expiry value: {value!r}")

    if isinstance(value, str):
        try:
            value = dateutil.parser.isoparse(value)
        except (ValueError, OverflowError) as e:
            raise ConfigError(f"Invalid expiry value {value!r}: {e}") from e
    elif isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value, timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            raise ConfigError(f"Invalid expiry value {value!r}: {e}") from e

    if not isinstance(value, datetime):
        raise ConfigError(f"Invalid expiry value: {value!r}")

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def split_remaining(delta: timedelta) -> tuple[int, int, int, int, int]:
    """
    Split a duration into (total, days, hours, minutes, seconds).

    Partial seconds are rounded up so that a positive duration never shows as
    zero. Negative durations count as zero.
    """
    total = max(0, -(-delta // ONE_SECOND))
    days, rem = divmod(total, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, seconds = divmod(rem, 60)
    return total, days, hours, minutes, seconds


def format_remaining(delta: timedelta, fmt: str | None = None) -> str:
    """
    Human readable remaining time.

    Without ``fmt`` leading zero units are dropped: ``1m 5s``, ``5s``,
    ``1h 0m 5s``. A custom ``fmt`` may use {D}, {H}, {M} and {S} (zero padded)
    and {total} (whole seconds).
    """
    total, days, hours, minutes, seconds = split_remaining(delta)

    if fmt is not None:
        return fmt.format(
            D=f"{days:02d}",
            H=f"{hours:02d}",
            M=f"{minutes:02d}",
            S=f"{seconds:02d}",
            total=total,
        )

    units = [("d", days), ("h", hours), ("m", minutes), ("s", seconds)]
    while len(units) > 1 and units[0][1] == 0:
        units.pop(0)
    return " ".join(f"{value}{suffix}" for suffix, value in units)


def describe_attributes(obj: Any, attrs: list[str], func: Callable = lambda x: x) -> str:
    """
    Helper for __repr__ functions to list attributes with truthy values only
    (or values that return a truthy value by func)
    """

    pairs = []

    for attr in attrs:
        value = getattr(obj, attr, None)
        if func(value):
            pairs.append(f"{attr}={value}")

    return ", ".join(pairs)
