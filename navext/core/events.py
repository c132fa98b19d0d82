from typing import Callable, List
from loguru import logger


class Signal:
    """
    Synchronous observer list for non-Qt objects.

    Mirrors the connect/disconnect/emit surface of a Qt signal so that
    plain Python services (config, containers) can notify listeners
    without being QObjects.
    """
    def __init__(self, name: str = "Signal"):
        self.name = name
        self._subscribers: List[Callable] = []

    def connect(self, callback: Callable) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def disconnect(self, callback: Callable) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def emit(self, *args, **kwargs) -> None:
        """Call every subscriber in connection order; one failing subscriber does not stop the rest."""
        # Snapshot: subscribers may disconnect themselves while being called
        for callback in list(self._subscribers):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Signal '{self.name}' subscriber {callback!r} failed: {e}")

    def __len__(self) -> int:
        return len(self._subscribers)
