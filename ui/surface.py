"""In-process presentation surface: the HTML currently on screen."""

import logging

from catalog.models import DetailRecord
from ui.background import BackgroundAnimation

logger = logging.getLogger(__name__)


class PresentationSurface:
    """Holds the result-area HTML, the overlay node and the card bindings.

    Content is only ever replaced wholesale, so a reader never sees a mix of
    two renders.
    """

    def __init__(self, background: BackgroundAnimation | None = None) -> None:
        self.content_html = ""
        self.overlay_html: str | None = None
        self.background = background or BackgroundAnimation()
        self._bindings: dict[str, DetailRecord] = {}

    def replace_content(self, html: str, bindings: dict[str, DetailRecord] | None = None) -> None:
        """Swap the result area and the card-to-record bindings in one step."""
        self.content_html = html
        self._bindings = dict(bindings or {})

    def bound_item(self, imdb_id: str) -> DetailRecord | None:
        """The record behind the rendered card with this id, if one is on screen."""
        return self._bindings.get(imdb_id)

    @property
    def bound_ids(self) -> list[str]:
        return list(self._bindings)

    def show_overlay(self, html: str) -> None:
        self.overlay_html = html

    def remove_overlay(self) -> bool:
        """Drop the overlay node. Returns False if there was none."""
        if self.overlay_html is None:
            return False
        self.overlay_html = None
        return True

    @property
    def has_overlay(self) -> bool:
        return self.overlay_html is not None
