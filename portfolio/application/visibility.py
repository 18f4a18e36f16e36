"""In-process page visibility signal."""
import logging
from typing import Callable, List


logger = logging.getLogger(__name__)

VisibilityListener = Callable[[bool], None]


class PageVisibility:
    """Tracks whether the hosting page is hidden and notifies listeners.

    Listeners receive the new `hidden` value and are only called when the
    value actually changes.
    """

    def __init__(self, hidden: bool = False):
        self._hidden = hidden
        self._listeners: List[VisibilityListener] = []

    @property
    def hidden(self) -> bool:
        return self._hidden

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: VisibilityListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: VisibilityListener) -> None:
        """Unsubscribe a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_hidden(self, hidden: bool) -> None:
        """Record a visibility change and notify subscribers."""
        if hidden == self._hidden:
            return
        self._hidden = hidden
        logger.debug(f"Page visibility changed: hidden={hidden}")
        for listener in list(self._listeners):
            listener(hidden)
