"""Library change notifications."""

from typing import Callable, List

from ...infrastructure.logging import LoggerMixin
from ..interfaces import ILibraryListener


class LibraryEvents(ILibraryListener, LoggerMixin):
    """Fans a library-changed notification out to subscribed observers.

    Observer errors are logged and do not reach the notifier.
    """

    def __init__(self) -> None:
        self._observers: List[Callable[[], None]] = []
        self.change_count = 0

    def subscribe(self, observer: Callable[[], None]) -> None:
        """Register an observer called after every library change."""
        self._observers.append(observer)

    def unsubscribe(self, observer: Callable[[], None]) -> None:
        """Remove a previously registered observer."""
        if observer in self._observers:
            self._observers.remove(observer)

    def on_library_changed(self) -> None:
        self.change_count += 1
        for observer in list(self._observers):
            try:
                observer()
            except Exception as e:
                self.logger.error(f"Library observer {observer!r} failed: {e}")
