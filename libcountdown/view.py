from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from libcountdown.confreader import ConfigError
from libcountdown.log_utils import logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from typing import TextIO


class TextBox:
    """A text surface owned by a view

    Only the text is modelled; subclasses decide how it is shown by
    overriding ``draw``.
    """

    def __init__(self, name: str, text: str = "") -> None:
        self.name = name
        self._text = text
        self.finalized = False

    @property
    def text(self) -> str:
        return self._text

    def can_draw(self) -> bool:
        return not self.finalized

    def update(self, text: str | None) -> None:
        """Update the displayed text."""
        # Don't try to update text on a surface the view has already dropped
        if not self.can_draw():
            return

        if text is None:
            text = ""
        if self.text == text:
            return

        self._text = text
        self.draw()

    def draw(self) -> None:
        pass

    def finalize(self) -> None:
        self.finalized = True

    def info(self) -> dict:
        return dict(name=self.name, text=self.text, finalized=self.finalized)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r}>"


class TerminalTextBox(TextBox):
    """Shows its text on a single, continuously rewritten terminal line"""

    def __init__(self, name: str, stream: TextIO | None = None, text: str = "") -> None:
        TextBox.__init__(self, name, text)
        self.stream = stream if stream is not None else sys.stdout
        self._dirty = False

    def draw(self) -> None:
        self.stream.write("\r\033[K" + self.text)
        self.stream.flush()
        self._dirty = True

    def finalize(self) -> None:
        # Leave the last value standing and move off the line
        if self._dirty and not self.finalized:
            self.stream.write("\n")
            self.stream.flush()
        TextBox.finalize(self)


class View:
    """The host of one or more text surfaces

    Surfaces are looked up by identifier at the time they are needed. Once
    the view has been finalized every lookup fails and every teardown
    listener has been told.
    """

    def __init__(self, name: str = "view", sinks: Iterable[TextBox] = ()) -> None:
        self.name = name
        self.sinks_map: dict[str, TextBox] = {}
        self._destroy_subscribers: list[Callable[[], None]] = []
        self.finalized = False
        for sink in sinks:
            self.add(sink)

    def add(self, sink: TextBox) -> TextBox:
        if sink.name in self.sinks_map:
            raise ConfigError(f"Duplicate text surface name: {sink.name}")
        self.sinks_map[sink.name] = sink
        return sink

    def replace(self, sink: TextBox) -> TextBox:
        """Swap in a recreated surface under the same identifier."""
        old = self.sinks_map.get(sink.name)
        if old is not None and old is not sink:
            old.finalize()
        self.sinks_map[sink.name] = sink
        return sink

    def remove(self, identifier: str) -> None:
        sink = self.sinks_map.pop(identifier, None)
        if sink is not None:
            sink.finalize()

    def find(self, identifier: str) -> TextBox | None:
        """The live surface called identifier, or None."""
        if self.finalized:
            return None
        sink = self.sinks_map.get(identifier)
        if sink is None or sink.finalized:
            return None
        return sink

    def subscribe_destroy(self, func: Callable[[], None]) -> Callable[[], None]:
        """Call func once when this view is torn down."""
        if func not in self._destroy_subscribers:
            self._destroy_subscribers.append(func)
        return func

    def unsubscribe_destroy(self, func: Callable[[], None]) -> None:
        try:
            self._destroy_subscribers.remove(func)
        except ValueError:
            pass

    def finalize(self) -> None:
        if self.finalized:
            return
        self.finalized = True

        for sink in self.sinks_map.values():
            sink.finalize()
        self.sinks_map.clear()

        subscribers, self._destroy_subscribers = self._destroy_subscribers, []
        for func in subscribers:
            try:
                func()
            except Exception:
                logger.exception("Error in teardown listener of view %s", self.name)

    def info(self) -> dict:
        return dict(
            name=self.name,
            finalized=self.finalized,
            sinks=sorted(self.sinks_map),
        )
