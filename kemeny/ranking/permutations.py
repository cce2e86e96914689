"""
Lexicographic permutation enumeration.

Permutations of ``0..n-1`` are visited in strictly increasing
lexicographic order, starting from the identity and ending at the
fully reversed sequence. Every permutation appears exactly once.

The rank/unrank helpers map between a permutation and its 0-based
position in that order (factorial number system), which lets callers
split the space into disjoint contiguous ranges.
"""

from __future__ import annotations

from math import factorial
from typing import Iterator, Optional, Sequence


def identity_permutation(n: int) -> list[int]:
    """The lexicographically smallest permutation, ``[0, 1, ..., n-1]``."""
    return list(range(n))


def next_permutation(perm: list[int]) -> bool:
    """
    Advance ``perm`` in place to its immediate lexicographic successor.

    Returns:
        True if advanced, False if ``perm`` was already the last
        permutation (in which case it is left unchanged)
    """
    n = len(perm)

    # Rightmost pivot with perm[i] < perm[i + 1]
    i = n - 2
    while i >= 0 and perm[i] >= perm[i + 1]:
        i -= 1
    if i < 0:
        return False

    # Rightmost element greater than the pivot; exists because perm[i + 1] is
    j = n - 1
    while perm[j] <= perm[i]:
        j -= 1

    perm[i], perm[j] = perm[j], perm[i]
    perm[i + 1:] = reversed(perm[i + 1:])
    return True


def iter_permutations(
    n: int,
    start: Optional[Sequence[int]] = None,
    count: Optional[int] = None,
) -> Iterator[tuple[int, ...]]:
    """
    Yield permutations of ``0..n-1`` in lexicographic order.

    Args:
        n: Number of elements
        start: First permutation to yield (defaults to the identity)
        count: Stop after this many permutations (defaults to exhaustion)

    Yields:
        Independent tuple copies, so callers may keep them
    """
    perm = list(start) if start is not None else identity_permutation(n)
    produced = 0
    while count is None or produced < count:
        yield tuple(perm)
        produced += 1
        if not next_permutation(perm):
            break


def permutation_count(n: int) -> int:
    return factorial(n)


def permutation_at(n: int, index: int) -> list[int]:
    """
    Return the permutation at 0-based lexicographic ``index``.

    Raises:
        IndexError: If index is outside [0, n!)
    """
    total = factorial(n)
    if index < 0 or index >= total:
        raise IndexError(f"permutation index {index} out of range for n={n}")

    remaining = list(range(n))
    perm = []
    for position in range(n, 0, -1):
        block = factorial(position - 1)
        digit, index = divmod(index, block)
        perm.append(remaining.pop(digit))
    return perm


def permutation_index(perm: Sequence[int]) -> int:
    """Inverse of ``permutation_at``: 0-based lexicographic index of ``perm``."""
    n = len(perm)
    remaining = sorted(perm)
    index = 0
    for position, value in enumerate(perm):
        digit = remaining.index(value)
        index += digit * factorial(n - 1 - position)
        remaining.pop(digit)
    return index
