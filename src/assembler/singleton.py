"""Process-wide storage for shared assembler instances."""

import threading
from typing import Any, Callable

__all__ = ["SingletonSlot", "shared_instances"]


class SingletonSlot:
    """Holds at most one instance per key for the lifetime of the process.

    The first request for a key creates the instance; every later request
    returns it. Creation uses double-checked locking so that concurrent first
    requests still create a single instance.
    """

    def __init__(self):
        self._instances: dict[Any, Any] = {}
        self._lock = threading.Lock()

    def get_or_create(self, key: Any, factory: Callable[[], Any]) -> Any:
        if key not in self._instances:
            with self._lock:
                if key not in self._instances:
                    self._instances[key] = factory()
        return self._instances[key]

    def __contains__(self, key: Any) -> bool:
        return key in self._instances


shared_instances = SingletonSlot()
