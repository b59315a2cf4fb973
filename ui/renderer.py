"""Render UI modes and title details to HTML on the presentation surface."""

import logging
from dataclasses import dataclass

from markupsafe import Markup

from catalog.models import UNAVAILABLE, DetailRecord
from search.models import ModeKind, UIMode
from ui.surface import PresentationSurface
from ui.templates import API_PREFIX, build_environment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CardView:
    """Display strings for one title, with every missing value already substituted."""

    imdb_id: str
    title: str
    year: str
    rating: str
    poster: str
    genre: str
    plot: str


class ResultRenderer:
    """Maps a UIMode to the result area's HTML.

    ``to_html`` is a pure function of the mode, so rendering an equal mode
    twice leaves the surface exactly as one render would.
    """

    def __init__(self, surface: PresentationSurface, placeholder_poster: str):
        self.surface = surface
        self.placeholder_poster = placeholder_poster
        self._env = build_environment()

    def poster_for(self, record: DetailRecord) -> str:
        return record.poster or self.placeholder_poster

    def card_for(self, record: DetailRecord) -> CardView:
        return CardView(
            imdb_id=record.imdb_id,
            title=record.title,
            year=record.year or UNAVAILABLE,
            rating=record.rating_label,
            poster=self.poster_for(record),
            genre=record.genre or UNAVAILABLE,
            plot=record.plot or UNAVAILABLE,
        )

    def to_html(self, mode: UIMode) -> str:
        if mode.kind == ModeKind.IDLE:
            return ""
        if mode.kind == ModeKind.POPULATED:
            records = mode.results.items if mode.results else ()
            return self._env.get_template("grid.html").render(
                cards=[self.card_for(record) for record in records]
            )
        return self._env.get_template("status.html").render(
            message=mode.message or "",
            is_error=mode.kind == ModeKind.ERROR,
        )

    def render(self, mode: UIMode) -> None:
        """Replace the surface content with ``mode`` and rebind the cards."""
        bindings: dict[str, DetailRecord] = {}
        if mode.kind == ModeKind.POPULATED and mode.results:
            bindings = {record.imdb_id: record for record in mode.results.items}
        self.surface.replace_content(self.to_html(mode), bindings)
        logger.debug(f"Rendered {mode.kind} ({len(bindings)} cards)")

    def render_detail(self, record: DetailRecord) -> str:
        """HTML for the detail overlay of one title."""
        return self._env.get_template("detail.html").render(card=self.card_for(record))

    def render_page(self, title: str, mode: UIMode) -> str:
        """Full page: search box, current result area and overlay."""
        overlay = self.surface.overlay_html
        return self._env.get_template("page.html").render(
            title=title,
            mode=str(mode.kind),
            background=self.surface.background.running,
            api_prefix=API_PREFIX,
            content=Markup(self.surface.content_html),
            overlay=Markup(overlay) if overlay else None,
        )
