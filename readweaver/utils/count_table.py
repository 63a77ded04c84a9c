"""
ReadWeaver v0.1.0

Frequency table with a default count of zero.
"""

from collections import Counter


class CountTable(Counter):
    """
    Mapping with a default count of zero.

    get() returns 0 for absent keys; decrement() never goes below zero.
    """

    def get(self, key, default=0):
        return super().get(key, default)

    def increment(self, key, n: int = 1) -> None:
        self[key] += n

    def decrement(self, key, n: int = 1) -> None:
        self[key] = max(0, self[key] - n)


__all__ = ['CountTable']
