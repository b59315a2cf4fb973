"""Search session: wires the search core to one presentation surface.

This is the only entry surface the shell talks to. Inbound events map to
one call each; everything they change goes through the state machine or the
overlay controller.
"""

import logging

from posthog import Posthog

from config.settings import Settings
from search.models import ClearSearch, SessionSnapshot, SubmitQuery, UIMode
from search.state_machine import SearchCatalog, SearchStateMachine
from ui.keys import KeyListenerRegistry
from ui.overlay import OverlayController, OverlayHandle
from ui.presenter import SurfacePresenter
from ui.renderer import ResultRenderer
from ui.surface import PresentationSurface

logger = logging.getLogger(__name__)


class SearchSession:
    """State holders and components for one browsing surface."""

    def __init__(
        self,
        catalog: SearchCatalog,
        placeholder_poster: str,
        dismiss_key: str = "Escape",
        posthog_client: Posthog | None = None,
        title: str = "Movie Search",
    ):
        self.title = title
        self.surface = PresentationSurface()
        self.renderer = ResultRenderer(self.surface, placeholder_poster)
        self.presenter = SurfacePresenter(self.surface, self.renderer)
        self.keys = KeyListenerRegistry()
        self.overlay = OverlayController(self.presenter, self.keys, dismiss_key)
        self.search = SearchStateMachine(catalog, self.presenter, posthog_client)

    @classmethod
    def from_settings(
        cls,
        catalog: SearchCatalog,
        settings: Settings,
        posthog_client: Posthog | None = None,
    ) -> "SearchSession":
        return cls(
            catalog,
            placeholder_poster=settings.placeholder_poster_url,
            dismiss_key=settings.dismiss_key,
            posthog_client=posthog_client,
            title=settings.app_name,
        )

    async def on_query_submitted(self, text: str) -> UIMode:
        return await self.search.dispatch(SubmitQuery(text=text))

    async def on_query_cleared(self) -> UIMode:
        return await self.search.dispatch(ClearSearch())

    def on_item_selected(self, imdb_id: str) -> OverlayHandle | None:
        """Open the overlay for a rendered card. Unknown ids are ignored."""
        item = self.surface.bound_item(imdb_id)
        if item is None:
            logger.warning(f"Selected {imdb_id} but no card for it is on screen")
            return None
        return self.overlay.open(item)

    def on_key_pressed(self, key: str) -> int:
        return self.keys.dispatch(key)

    def on_dismiss_key_pressed(self) -> int:
        return self.on_key_pressed(self.overlay.dismiss_key)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self.search.mode,
            overlay=self.overlay.state,
            background_animation=self.surface.background.running,
            content_html=self.surface.content_html,
            overlay_html=self.surface.overlay_html,
            dismiss_listeners=len(self.keys),
        )

    def render_page(self) -> str:
        return self.renderer.render_page(self.title, self.search.mode)
