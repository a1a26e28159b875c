"""
Per-professional serialization point for booking writes.

Holding the lock across read-validate-write means two commits for the
same professional run one after the other, so the second one sees the
first one's appointments when it re-validates. Professionals are
independent; their locks never contend.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)


class ProfessionalLocks:
    """Lazily created ``threading.Lock`` per (business, professional)."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[tuple[str, str], threading.Lock] = {}

    def lock_for(self, business_id: str, professional_id: str) -> threading.Lock:
        key = (business_id, professional_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, business_id: str, professional_id: str) -> Iterator[None]:
        lock = self.lock_for(business_id, professional_id)
        with lock:
            logger.debug("Write lock held for %s/%s", business_id, professional_id)
            yield

    def __len__(self) -> int:
        return len(self._locks)


# Shared by every committer in the process unless a caller passes its own.
default_locks = ProfessionalLocks()
