from collections import defaultdict
from typing import Callable

from teamstock.logger import get_logger

logger = get_logger("teamstock.data.change_feed")


class ChangeFeed:
    """
    Publishes the key of every collection that was written.

    Read caches subscribe to the keys they depend on and drop their cached
    view when notified.
    """

    def __init__(self):
        self._subscribers = defaultdict(list)

    def subscribe(self, key: str, callback: Callable[[str], None]) -> None:
        self._subscribers[key].append(callback)

    def unsubscribe(self, key: str, callback: Callable[[str], None]) -> None:
        if callback in self._subscribers.get(key, []):
            self._subscribers[key].remove(callback)

    def notify(self, key: str) -> None:
        callbacks = list(self._subscribers.get(key, []))
        logger.debug(f"Collection '{key}' changed, notifying {len(callbacks)} subscriber(s)")
        for callback in callbacks:
            callback(key)
