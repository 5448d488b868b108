# membership.py

"""Bloom-style membership filter over a fixed bit array and a salted hash family."""

from __future__ import annotations

import math
import threading

from typing import Any, Callable, Iterable, Sequence, Tuple

import structlog

from errors import ConfigurationError

logger = structlog.get_logger(__name__)

HashFunction = Callable[[Any], int]


def optimal_parameters(capacity: int, error_rate: float) -> Tuple[int, int]:
    """
    Bit count m and hash count k for `capacity` elements at `error_rate`:
      m = ceil(-n * ln(p) / ln(2)^2),  k = round(m / n * ln(2)), at least 1.
    """
    if capacity <= 0:
        raise ConfigurationError("capacity", capacity, "must be positive")
    if error_rate <= 0 or error_rate >= 1:
        raise ConfigurationError("error_rate", error_rate, "must be between 0 and 1")

    m = max(1, math.ceil(-(capacity * math.log(error_rate)) / (math.log(2) ** 2)))
    k = max(1, round((m / capacity) * math.log(2)))
    return m, k


class MembershipFilter:
    """
    Probabilistic set: contains() never misses an inserted element,
    but may report elements that were never inserted.

    Bits are only ever set, never cleared. Each bit occupies its own
    bytearray cell, so setting one is a plain store and concurrent
    inserts cannot clobber each other's bits.
    """

    def __init__(self, bits_amount: int, hash_functions: Sequence[HashFunction]):
        if isinstance(bits_amount, bool) or not isinstance(bits_amount, int) or bits_amount <= 0:
            raise ConfigurationError("bits_amount", bits_amount, "must be a positive integer")
        hash_functions = tuple(hash_functions)
        if not hash_functions:
            raise ConfigurationError("hash_functions", hash_functions, "at least one is required")

        self._m = bits_amount
        self._bits = bytearray(bits_amount)
        self._hash_functions = hash_functions
        self._inserted = 0
        self._count_lock = threading.Lock()

        logger.debug(
            "membership_filter_created",
            bits_amount=bits_amount,
            function_count=len(hash_functions),
        )

    @property
    def bits_amount(self) -> int:
        return self._m

    @property
    def function_count(self) -> int:
        return len(self._hash_functions)

    @property
    def hash_functions(self) -> Tuple[HashFunction, ...]:
        return self._hash_functions

    @property
    def inserted_count(self) -> int:
        return self._inserted

    def _indexes(self, element: Any) -> Iterable[int]:
        for h in self._hash_functions:
            yield h(element) % self._m

    def insert(self, element: Any) -> None:
        # all indexes first: a serializer failure must leave no partial bits behind
        indexes = list(self._indexes(element))
        for idx in indexes:
            self._bits[idx] = 1
        with self._count_lock:
            self._inserted += 1

    def insert_all(self, elements: Iterable[Any]) -> int:
        """Insert every element; returns how many insert calls were made."""
        n = 0
        for element in elements:
            self.insert(element)
            n += 1
        return n

    def contains(self, element: Any) -> bool:
        for idx in self._indexes(element):
            if not self._bits[idx]:
                return False
        return True

    def __contains__(self, element: Any) -> bool:
        return self.contains(element)

    def __len__(self) -> int:
        return self._inserted

    def false_positive_probability(self) -> float:
        """
        Closed-form estimate (1 - e^(-k*n/m))^k using the current insert count.
        Not a measured rate.
        """
        k = len(self._hash_functions)
        elements_per_bit = self._inserted / self._m
        return (1.0 - math.exp(-k * elements_per_bit)) ** k

    def fill_ratio(self) -> float:
        return sum(self._bits) / self._m

    def bit_snapshot(self) -> bytes:
        """Copy of the bit cells, one byte (0 or 1) per bit."""
        return bytes(self._bits)

    def __repr__(self) -> str:
        return (
            f"MembershipFilter(bits_amount={self._m}, "
            f"function_count={len(self._hash_functions)}, inserted_count={self._inserted})"
        )
