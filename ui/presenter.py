"""Outbound effects from the search core to the UI shell."""

import logging
from typing import Protocol

from search.models import OverlayState, UIMode
from ui.renderer import ResultRenderer
from ui.surface import PresentationSurface

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    """The three effects the core may ask of the shell."""

    def render_mode(self, mode: UIMode) -> None: ...

    def set_overlay(self, state: OverlayState) -> None: ...

    def set_background_animation(self, active: bool) -> None: ...


class SurfacePresenter:
    """Presenter that draws onto an in-process PresentationSurface."""

    def __init__(self, surface: PresentationSurface, renderer: ResultRenderer):
        self.surface = surface
        self.renderer = renderer

    def render_mode(self, mode: UIMode) -> None:
        self.renderer.render(mode)

    def set_overlay(self, state: OverlayState) -> None:
        if state.item is None:
            self.surface.remove_overlay()
        else:
            self.surface.show_overlay(self.renderer.render_detail(state.item))

    def set_background_animation(self, active: bool) -> None:
        if active:
            self.surface.background.start()
        else:
            self.surface.background.stop()
