"""Time-ordered unique 64-bit identifiers in the snowflake style."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

ID_WORKERS = 6
"""Worker id the service registers its generator with."""

DEFAULT_BASE_TIME_MS = 1582136402000
"""Epoch, in milliseconds, that the timestamp part counts from."""

DEFAULT_WORKER_ID_BIT_LENGTH = 6
DEFAULT_SEQ_BIT_LENGTH = 6
MIN_SEQ_NUMBER = 5


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Generates strictly increasing ids made of time, worker id and sequence."""

    def __init__(
        self,
        worker_id: int,
        *,
        worker_id_bit_length: int = DEFAULT_WORKER_ID_BIT_LENGTH,
        seq_bit_length: int = DEFAULT_SEQ_BIT_LENGTH,
        base_time_ms: int = DEFAULT_BASE_TIME_MS,
        clock: Callable[[], int] | None = None,
    ) -> None:
        if worker_id_bit_length < 1 or seq_bit_length < 3:
            raise ValueError("bit lengths are too small")
        if worker_id_bit_length + seq_bit_length > 22:
            raise ValueError("worker id and sequence bits must not exceed 22")
        max_worker = (1 << worker_id_bit_length) - 1
        if not 0 <= worker_id <= max_worker:
            raise ValueError(f"worker id must be between 0 and {max_worker}")
        self.worker_id = worker_id
        self.worker_id_bit_length = worker_id_bit_length
        self.seq_bit_length = seq_bit_length
        self.base_time_ms = base_time_ms
        self._clock = clock or _now_ms
        self._max_seq = (1 << seq_bit_length) - 1
        self._last_ms = -1
        self._seq = MIN_SEQ_NUMBER - 1
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Return a new id, greater than every id returned before."""
        with self._lock:
            now = self._clock() - self.base_time_ms
            if now < 0:
                raise ValueError("clock is earlier than the generator's base time")
            if now > self._last_ms:
                self._last_ms = now
                self._seq = MIN_SEQ_NUMBER
            else:
                self._seq += 1
                if self._seq > self._max_seq:
                    # Sequence exhausted for this millisecond: borrow the next one.
                    self._last_ms += 1
                    self._seq = MIN_SEQ_NUMBER
            shift = self.worker_id_bit_length + self.seq_bit_length
            return (self._last_ms << shift) | (self.worker_id << self.seq_bit_length) | self._seq


_generator: IdGenerator | None = None
_generator_lock = threading.Lock()


def set_id_generator(worker_id: int) -> IdGenerator:
    """Install the process-wide generator for the given worker id."""
    global _generator
    generator = IdGenerator(worker_id)
    with _generator_lock:
        _generator = generator
    return generator


def next_id() -> int:
    """Return a new id from the process-wide generator."""
    global _generator
    with _generator_lock:
        if _generator is None:
            _generator = IdGenerator(ID_WORKERS)
        generator = _generator
    return generator.next_id()