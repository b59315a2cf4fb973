"""Start/stop switch for the decorative particle background."""

import logging

logger = logging.getLogger(__name__)


class BackgroundAnimation:
    """Tracks whether the background animation should be running.

    The animation itself is drawn client side; this only records the switch
    so the page can be served with the right state.
    """

    def __init__(self) -> None:
        self.running = False

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        logger.debug("Background animation started")

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        logger.debug("Background animation stopped")
