# Copyright (c) 2008, Aldo Cortesi <aldo@corte.si>
# Copyright (c) 2011, Andrew Grigorev <andrew@ei-grad.ru>
#
# All rights reserved.
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

import importlib
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class ConfigError(Exception):
    pass


class Config:
    # All configuration options
    expires: Any
    countdown_defaults: dict[str, Any]
    sink: str
    log_level: str

    def __init__(self, file_path=None, **settings):
        """Create a Config() object from settings

        Only attributes found in Config.__annotations__ will be added to object.
        config attribute precedence is 1.) **settings 2.) self 3.) default_config
        """
        self.file_path = file_path
        self.update(**settings)

    def update(self, **settings):
        from libcountdown.resources import default_config

        default = vars(default_config)
        for key in self.__annotations__.keys():
            try:
                value = settings[key]
            except KeyError:
                value = getattr(self, key, default[key])
            setattr(self, key, value)

    def load(self):
        if not self.file_path:
            return

        path = Path(self.file_path)
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")

        name = path.stem
        sys.path.insert(0, path.parent.as_posix())
        try:
            if name in sys.modules:
                config = importlib.reload(sys.modules[name])
            else:
                config = importlib.import_module(name)
        finally:
            sys.path.remove(path.parent.as_posix())

        self.update(**vars(config))

    def validate(self) -> None:
        """
        Check the loaded values and normalise the expiry to an aware UTC
        datetime.
        """
        from libcountdown.utils import to_utc

        if self.expires is not None:
            self.expires = to_utc(self.expires)

        if not isinstance(self.countdown_defaults, dict):
            raise ConfigError("countdown_defaults must be a dict")

        interval = self.countdown_defaults.get("update_interval", 1.0)
        if not isinstance(interval, int | float) or interval <= 0:
            raise ConfigError(f"update_interval must be a positive number, got {interval!r}")

        if not self.sink:
            raise ConfigError("sink must be a non-empty identifier")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigError(f"Invalid log_level: {self.log_level}")
