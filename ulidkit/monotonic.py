"""
Monotonic generator state shared by every caller of one identifier kind.

A mint reads the clock, exchanges the shifted timestamp into
`last_timebits` and either increments the previous payload (same
millisecond) or draws a fresh one (new millisecond).
"""
from __future__ import annotations
import logging
import secrets
import threading
import time
from typing import Optional
from ulidkit.config import settings

logger = logging.getLogger(__name__)

TIMESTAMP_BITS = 48
TIMESTAMP_MASK = (1 << TIMESTAMP_BITS) - 1

LOCK_MODES = ("strict", "timed")

_local = threading.local()


def now_ms() -> int:
    """Wall clock in milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def thread_random() -> secrets.SystemRandom:
    """Cryptographically strong source owned by the calling thread."""
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = secrets.SystemRandom()
        _local.rng = rng
    return rng


class AtomicCell:
    """Holds one int; `exchange` stores a new value and returns the old one atomically."""

    def __init__(self, value: int = 0):
        self._value = value
        self._guard = threading.Lock()

    def exchange(self, value: int) -> int:
        with self._guard:
            previous = self._value
            self._value = value
        return previous

    def load(self) -> int:
        return self._value


class MonotonicGenerator:
    """
    Mints `timestamp << payload_bits | payload` values.

    Within one millisecond each value's payload is the previous payload
    plus one, wrapping silently at `payload_bits`. Across milliseconds the
    payload is fresh randomness and ordering comes from the timestamp.

    lock_mode "strict" serializes the whole update. lock_mode "timed"
    waits at most `lock_timeout_ms` for the lock and then proceeds
    without it, so concurrent same-millisecond calls may read a stale
    payload and emit a duplicate or non-increasing value.
    """

    def __init__(
        self,
        payload_bits: int,
        *,
        lock_mode: Optional[str] = None,
        lock_timeout_ms: Optional[float] = None,
        name: Optional[str] = None,
    ):
        lock_mode = lock_mode or settings.MONOTONIC_LOCK_MODE
        if lock_mode not in LOCK_MODES:
            raise ValueError(f"Unknown lock mode: {lock_mode}")
        if lock_timeout_ms is None:
            lock_timeout_ms = settings.MONOTONIC_LOCK_TIMEOUT_MS

        self.payload_bits = payload_bits
        self.payload_mask = (1 << payload_bits) - 1
        self.lock_mode = lock_mode
        self.lock_timeout_ms = lock_timeout_ms
        self.name = name or f"monotonic{payload_bits}"

        self.last_timebits = AtomicCell(0)
        self.last_random = 0
        self._lock = threading.Lock()

        logger.debug(
            f"Created generator {self.name} payload_bits={payload_bits} lock_mode={lock_mode}",
            extra={"generator": self.name, "lock_mode": lock_mode},
        )

    def timebits(self) -> int:
        return (now_ms() & TIMESTAMP_MASK) << self.payload_bits

    def _advance(self, same_millisecond: bool) -> int:
        if same_millisecond:
            payload = (self.last_random + 1) & self.payload_mask
        else:
            payload = thread_random().getrandbits(self.payload_bits)
        self.last_random = payload
        return payload

    def next_value(self) -> int:
        """Mint the next raw value."""
        timebits = self.timebits()

        if self.lock_mode == "strict":
            with self._lock:
                observed = self.last_timebits.exchange(timebits)
                payload = self._advance(timebits == observed)
            return timebits | payload

        observed = self.last_timebits.exchange(timebits)
        locked = self._lock.acquire(timeout=self.lock_timeout_ms / 1000.0)
        if not locked:
            logger.debug(
                f"Generator {self.name} lock not acquired within {self.lock_timeout_ms}ms, updating unlocked",
                extra={"generator": self.name, "lock_mode": self.lock_mode},
            )
        try:
            payload = self._advance(timebits == observed)
        finally:
            if locked:
                self._lock.release()
        return timebits | payload

    def __repr__(self) -> str:
        return (
            f"MonotonicGenerator(name={self.name!r}, payload_bits={self.payload_bits}, "
            f"lock_mode={self.lock_mode!r})"
        )
