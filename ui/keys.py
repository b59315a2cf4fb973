"""Process-wide key listener registry.

The shell forwards every key press here; components that care about a key
(currently only the detail overlay) register a listener and must remove it.
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

KeyListener = Callable[[str], None]


class KeyListenerRegistry:
    """Ordered set of key listeners.

    Adding a listener that is already registered does nothing, and removing
    one that is not registered does nothing.
    """

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    def add(self, listener: KeyListener) -> None:
        if listener in self._listeners:
            return
        self._listeners.append(listener)
        logger.debug(f"Key listener added ({len(self._listeners)} registered)")

    def remove(self, listener: KeyListener) -> None:
        if listener not in self._listeners:
            return
        self._listeners.remove(listener)
        logger.debug(f"Key listener removed ({len(self._listeners)} registered)")

    def dispatch(self, key: str) -> int:
        """Deliver ``key`` to every listener registered at call time.

        Returns:
            Number of listeners the key was delivered to
        """
        # Listeners may remove themselves while handling the key
        listeners = list(self._listeners)
        for listener in listeners:
            listener(key)
        return len(listeners)

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return listener in self._listeners
