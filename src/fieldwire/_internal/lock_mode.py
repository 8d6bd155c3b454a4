from __future__ import annotations

import threading
from contextlib import AbstractContextManager, nullcontext
from enum import Enum
from typing import Any


class LockMode(Enum):
    """Select locking behavior around registry and singleton-cache access.

    Resolution is synchronous and recursive, so the container is safe without
    locks as long as one thread drives it. Use ``THREAD`` when several threads
    share a container.
    """

    THREAD = "thread"
    """Guard ``register``, ``resolve`` and ``reset`` with a re-entrant ``threading.RLock``.

    The lock is re-entrant because factories and deferred handles call back into
    ``resolve`` while the outer resolution still holds it.
    """

    NONE = "none"
    """Disable locking."""

    def create_lock(self) -> AbstractContextManager[Any]:
        if self is LockMode.THREAD:
            return threading.RLock()
        return nullcontext()


__all__ = ["LockMode"]
