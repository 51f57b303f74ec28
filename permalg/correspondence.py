"""
Functions for working with correspondence arrays, the flat representation of a permutation.

A correspondence array c of length n is a bijection on the integers [0, n): applying the permutation
moves the value held at index c[i] to index i. Functions here accept any sequence of integers and
return tuples, except for the in-place helpers which act on lists.

The cycle decomposition of a correspondence is stored as a single flat tuple. Each disjoint cycle
c0 -> c1 -> ... -> c(k-1) -> c0 (fixed points excluded) is written as c0, c1, ..., c(k-2), neg(c(k-1)),
where neg(x) = -1 - x marks the final element of the cycle. Applying the permutation walks this tuple
once, swapping consecutive elements of each cycle, so the empty tuple encodes the identity.
"""
from __future__ import annotations

import operator
from typing import Protocol, Sequence

from .errors import DuplicateIndex, InvalidIndex, InvalidPermutation, InvalidSize


class RandomSource(Protocol):
    """The source of randomness for shuffling; random.Random satisfies this protocol."""

    def randrange(self, stop: int) -> int:
        ...


def neg(x: int) -> int:
    """
    The sentinel encoding used to terminate a cycle. It is its own inverse.

    >>> neg(0), neg(3), neg(neg(3))
    (-1, -4, 3)
    """
    return -1 - x


def verify_permutation_array(array: Sequence[int]) -> tuple[int, ...]:
    """
    Check that array is a bijection on [0, len(array)), returning it as a tuple of ints. Raises
    InvalidPermutation on a missing (None) or non-integer entry, an entry out of range, or a duplicate.

    >>> verify_permutation_array([2, 0, 1])
    (2, 0, 1)
    >>> verify_permutation_array([0, 1, 1])
    Traceback (most recent call last):
    ...
    permalg.errors.InvalidPermutation: Duplicate entry 1 in correspondence (0, 1, 1)
    """
    if array is None:
        raise InvalidPermutation("Correspondence may not be None")

    try:
        word = tuple(operator.index(x) for x in array)
    except TypeError as e:
        raise InvalidPermutation(f"Correspondence {array!r} contains a non-integer entry") from e

    n = len(word)
    seen = [False] * n
    for x in word:
        if not 0 <= x < n:
            raise InvalidPermutation(f"Entry {x} of correspondence {word} is outside of [0, {n})")
        if seen[x]:
            raise InvalidPermutation(f"Duplicate entry {x} in correspondence {word}")
        seen[x] = True

    return word


def is_permutation(array: Sequence[int]) -> bool:
    """
    Check that array is a bijection on [0, n) where n = len(array).

    >>> words = [(), (0, 1), (0, 2), (0, 0, 2), (2, 1, 0)]
    >>> [is_permutation(word) for word in words]
    [True, True, False, False, True]
    """
    try:
        verify_permutation_array(array)
    except InvalidPermutation:
        return False
    return True


def identity(n: int) -> tuple[int, ...]:
    """
    >>> [identity(n) for n in [0, 1, 3]]
    [(), (0,), (0, 1, 2)]
    """
    return tuple(range(n))


def inverse(array: Sequence[int]) -> tuple[int, ...]:
    """
    The inverse of a correspondence, which is assumed to be valid.

    >>> inverse((2, 0, 1))
    (1, 2, 0)
    >>> inverse(())
    ()
    """
    inv = [0] * len(array)
    for i, c in enumerate(array):
        inv[c] = i

    return tuple(inv)


def decompose_cycles(array: Sequence[int]) -> tuple[int, ...]:
    """
    Decompose a correspondence into its disjoint cycles, using the flat encoding described in the
    module docstring. Fixed points contribute nothing.

    >>> decompose_cycles((1, 2, 3, 4, 0))
    (1, 2, 3, 4, -1)
    >>> decompose_cycles((2, 1, 0, 4, 3))
    (2, -1, 4, -4)
    >>> decompose_cycles((0, 1, 2))
    ()
    """
    # Slots are overwritten with -1 once consumed, so each index is visited exactly once.
    scratch = list(array)
    cycles: list[int] = []
    for i in range(len(scratch)):
        if scratch[i] == -1:
            continue
        if scratch[i] == i:
            scratch[i] = -1
            continue

        j = i
        while True:
            k = scratch[j]
            if k == -1:
                raise InvalidPermutation(f"Correspondence {tuple(array)} is not a bijection")
            scratch[j] = -1
            if k == i:
                cycles.append(neg(k))
                break
            cycles.append(k)
            j = k

    return tuple(cycles)


def cycle_lengths(cycles: Sequence[int]) -> list[int]:
    """
    The lengths of the cycles in a flat cycle encoding, in encoding order.

    >>> cycle_lengths((2, -1, 4, -4))
    [2, 2]
    >>> cycle_lengths((1, 2, 3, 4, -1))
    [5]
    """
    lengths = []
    length = 0
    for c in cycles:
        length += 1
        if c < 0:
            lengths.append(length)
            length = 0

    return lengths


def shuffle_in_place(array: list[int], rng: RandomSource) -> None:
    """
    Fisher-Yates shuffle of array, consuming exactly len(array) - 1 values from rng (for a non-empty
    array) so that the outcome is wholly determined by the state of rng.
    """
    for i in range(len(array) - 1, 0, -1):
        j = rng.randrange(i + 1)
        array[i], array[j] = array[j], array[i]


def verify_size(size: int) -> None:
    if size < 0:
        raise InvalidSize(f"Size must be non-negative, got {size}")


def verify_index(size: int, i: int) -> None:
    if not 0 <= i < size:
        raise InvalidIndex(f"Index {i} is outside of [0, {size})")


def verify_cycle(size: int, indices: Sequence[int]) -> tuple[int, ...]:
    """
    Check that indices are distinct and lie in [0, size), returning them as a tuple.

    >>> verify_cycle(5, [4, 0, 2])
    (4, 0, 2)
    >>> verify_cycle(5, [0, 0])
    Traceback (most recent call last):
    ...
    permalg.errors.DuplicateIndex: Cycle (0, 0) contains the index 0 more than once
    """
    cycle = tuple(indices)
    seen = set()
    for i in cycle:
        verify_index(size, i)
        if i in seen:
            raise DuplicateIndex(f"Cycle {cycle} contains the index {i} more than once")
        seen.add(i)

    return cycle
