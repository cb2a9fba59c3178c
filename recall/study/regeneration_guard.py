"""
Regeneration guard.

Automatic content refreshes (e.g. regenerating a due capsule's quiz) must fire
at most once per capsule per review cycle. The cycle is identified by the
idempotency key ``(capsule id, last_reviewed)``: a new review starts a new
cycle and therefore a new key.

The attempt ledger is injected, so callers decide its scope (one UI session,
a process, a shared cache) and tests can use a plain in-memory store.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from loguru import logger

from recall.core.clock import to_epoch_ms
from recall.core.models import Capsule
from recall.core.policy import SchedulingPolicy
from recall.study.due import is_capsule_due

AttemptKey = tuple[str, int | None]


def attempt_key(capsule: Capsule) -> AttemptKey:
    """Idempotency key for the capsule's current review cycle."""
    last = to_epoch_ms(capsule.last_reviewed) if capsule.last_reviewed else None
    return (capsule.id, last)


class AttemptStore(Protocol):
    """Interface for attempt ledgers."""

    def has_attempted(self, key: AttemptKey) -> bool:
        ...

    def mark_attempted(self, key: AttemptKey) -> None:
        ...


class InMemoryAttemptStore:
    """Attempt ledger backed by a set."""

    def __init__(self) -> None:
        self._attempted: set[AttemptKey] = set()

    def has_attempted(self, key: AttemptKey) -> bool:
        return key in self._attempted

    def mark_attempted(self, key: AttemptKey) -> None:
        self._attempted.add(key)

    def clear(self) -> None:
        self._attempted.clear()

    def __len__(self) -> int:
        return len(self._attempted)


class RegenerationGuard:
    """
    Decides whether an automatic regeneration may start for a capsule.

    A capsule qualifies when it is due, is not shared with a group (shared
    content is owned by the group), and its current review cycle has not
    been attempted yet.
    """

    def __init__(
        self,
        store: AttemptStore | None = None,
        policy: SchedulingPolicy | None = None,
    ):
        self.store = store if store is not None else InMemoryAttemptStore()
        self.policy = policy

    def should_regenerate(self, capsule: Capsule, now: datetime | None = None) -> bool:
        """Check eligibility without recording an attempt."""
        if capsule.is_shared:
            return False
        if not is_capsule_due(capsule, now, self.policy):
            return False
        return not self.store.has_attempted(attempt_key(capsule))

    def try_acquire(self, capsule: Capsule, now: datetime | None = None) -> bool:
        """
        Record an attempt if the capsule qualifies.

        The attempt is recorded before the caller starts work, so a failed
        regeneration is not retried within the same cycle.

        Returns:
            True if the caller should regenerate now
        """
        if not self.should_regenerate(capsule, now):
            return False

        key = attempt_key(capsule)
        self.store.mark_attempted(key)
        logger.debug(f"Regeneration attempt recorded for {key}")
        return True
