from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for registry access and singleton caching.

    ``make`` checks the instance cache, constructs, then writes the cache. Under
    ``THREAD`` that sequence runs while holding one re-entrant lock, so
    concurrent first resolutions of a shared identifier construct it once and
    every caller observes the first instance written.
    """

    THREAD = "thread"
    """Guard the bindings and the instance cache with ``threading.RLock``."""

    NONE = "none"
    """Disable locking; use for containers confined to a single thread."""
