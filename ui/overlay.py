"""Detail overlay lifecycle.

At most one overlay is open at a time, and each open overlay owns exactly one
dismissal key listener. Opening a new overlay closes the previous one first,
and closing always releases the listener.
"""

import logging

from catalog.models import DetailRecord
from search.models import OverlayState
from ui.keys import KeyListenerRegistry
from ui.presenter import Presenter

logger = logging.getLogger(__name__)


class OverlayHandle:
    """One opened overlay. Closing it is idempotent.

    Usable as a context manager; leaving the block closes the overlay.
    """

    def __init__(self, controller: "OverlayController", item: DetailRecord):
        self._controller = controller
        self.item = item
        self.closed = False

    def on_key(self, key: str) -> None:
        if key == self._controller.dismiss_key:
            self.close()

    def close(self) -> None:
        self._controller._release(self)

    def __enter__(self) -> "OverlayHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class OverlayController:
    """Sole owner of the OverlayState and of the dismissal key listener."""

    def __init__(
        self,
        presenter: Presenter,
        keys: KeyListenerRegistry,
        dismiss_key: str = "Escape",
    ):
        self._presenter = presenter
        self._keys = keys
        self.dismiss_key = dismiss_key
        self._active: OverlayHandle | None = None

    @property
    def state(self) -> OverlayState:
        if self._active is None:
            return OverlayState.closed()
        return OverlayState.open(self._active.item)

    @property
    def active(self) -> OverlayHandle | None:
        return self._active

    def open(self, item: DetailRecord) -> OverlayHandle:
        """Show ``item`` in the overlay, replacing any overlay already open."""
        if self._active is not None:
            logger.debug(f"Replacing overlay for {self._active.item.imdb_id}")
            self._active.close()

        handle = OverlayHandle(self, item)
        self._active = handle
        self._presenter.set_overlay(OverlayState.open(item))
        self._keys.add(handle.on_key)
        logger.info(f"Opened overlay for {item.imdb_id} ('{item.title}')")
        return handle

    def close(self) -> None:
        """Close the open overlay, if any."""
        if self._active is None:
            return
        self._active.close()

    def _release(self, handle: OverlayHandle) -> None:
        # Unconditional, including for handles that are already closed
        self._keys.remove(handle.on_key)
        if handle.closed:
            return
        handle.closed = True

        if self._active is handle:
            self._active = None
            self._presenter.set_overlay(OverlayState.closed())
            logger.info(f"Closed overlay for {handle.item.imdb_id}")
