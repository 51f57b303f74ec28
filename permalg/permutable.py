"""
permutable: the containers which permutations act upon.

A permutation only ever needs two things from the object it permutes: its size, and the ability to
swap the elements at two indices. That contract is the Transposable protocol. The Permutable base
class builds the common permutations (rotations, reversals, cycles, shuffles...) on top of it, and
the adapters here wrap the usual Python containers.

>>> PermutableList([1, 2, 3, 4, 5]).rotate(1).permuted()
[5, 1, 2, 3, 4]
>>> PermutableString("time").reverse().permuted()
'emit'
"""
from __future__ import annotations

import abc
from typing import Callable, Generic, MutableSequence, Protocol, Sequence, TypeVar

import numpy as np
import numpy.typing as npt

from .correspondence import RandomSource
from .permutation import Permutation

T = TypeVar('T')


class Transposable(Protocol):
    def size(self) -> int:
        """The number of positions which may be permuted."""

    def transpose(self, i: int, j: int) -> object:
        """Swap the elements at indices i and j; a no-op when i == j."""


class Permutable(abc.ABC, Generic[T]):
    """
    A wrapper through which permutations are applied to an object. Every method returns the
    permutable so that calls can be chained, finishing with permuted() to recover the object.
    """

    @abc.abstractmethod
    def size(self) -> int:
        ...

    @abc.abstractmethod
    def transpose(self, i: int, j: int) -> Permutable[T]:
        ...

    @abc.abstractmethod
    def permuted(self) -> T:
        """The object being permuted."""

    def apply(self, permutation: Permutation) -> Permutable[T]:
        permutation.permute(self)
        return self

    def unapply(self, permutation: Permutation) -> Permutable[T]:
        """Apply the inverse of the permutation."""
        permutation.unpermute(self)
        return self

    def rotate(self, distance: int) -> Permutable[T]:
        return self.apply(Permutation.rotate(self.size(), distance))

    def reverse(self) -> Permutable[T]:
        return self.apply(Permutation.reverse(self.size()))

    def cycle(self, *indices: int) -> Permutable[T]:
        return self.apply(Permutation.cycle(self.size(), *indices))

    def shuffle(self, rng: RandomSource) -> Permutable[T]:
        return self.apply(Permutation.shuffle(self.size(), rng))

    def correspond(self, word: Sequence[int]) -> Permutable[T]:
        return self.apply(Permutation.correspond(word))

    def reorder(self, ordering: Sequence[int]) -> Permutable[T]:
        return self.apply(Permutation.reorder(ordering))


class PermutableList(Permutable[MutableSequence[T]]):
    """Permutes a list (or any mutable sequence) in place."""

    def __init__(self, values: MutableSequence[T]):
        self.values = values

    def size(self) -> int:
        return len(self.values)

    def transpose(self, i: int, j: int) -> PermutableList[T]:
        self.values[i], self.values[j] = self.values[j], self.values[i]
        return self

    def permuted(self) -> MutableSequence[T]:
        return self.values


class PermutableString(Permutable[str]):
    """Permutes the characters of a string; the string itself is immutable, so a copy is permuted."""

    def __init__(self, value: str):
        self.chars = list(value)

    def size(self) -> int:
        return len(self.chars)

    def transpose(self, i: int, j: int) -> PermutableString:
        self.chars[i], self.chars[j] = self.chars[j], self.chars[i]
        return self

    def permuted(self) -> str:
        return ''.join(self.chars)

    def __str__(self):
        return self.permuted()


class PermutableArray(Permutable[npt.NDArray]):
    """
    Permutes a numpy array in place along its first axis, so the rows of a matrix are permuted.

    >>> import numpy as np
    >>> PermutableArray(np.array([[1, 2], [3, 4], [5, 6]])).reverse().permuted().tolist()
    [[5, 6], [3, 4], [1, 2]]
    """

    def __init__(self, array: npt.NDArray):
        if np.ndim(array) == 0:
            raise ValueError("Cannot permute a zero-dimensional array")
        self.array = array

    def size(self) -> int:
        return self.array.shape[0]

    def transpose(self, i: int, j: int) -> PermutableArray:
        if i != j:
            self.array[[i, j]] = self.array[[j, i]]
        return self

    def permuted(self) -> npt.NDArray:
        return self.array


class PermutableTransposable(Permutable[Callable[[int, int], object]]):
    """
    Adapts a bare swap function, for which the size must be supplied, to a permutable.

    >>> cells = ['a', 'b', 'c']
    >>> def swap(i, j):
    ...     cells[i], cells[j] = cells[j], cells[i]
    >>> _ = PermutableTransposable(3, swap).cycle(0, 1, 2)
    >>> cells
    ['b', 'c', 'a']
    """

    def __init__(self, size: int, swap: Callable[[int, int], object]):
        self._size = size
        self.swap = swap

    def size(self) -> int:
        return self._size

    def transpose(self, i: int, j: int) -> PermutableTransposable:
        self.swap(i, j)
        return self

    def permuted(self) -> Callable[[int, int], object]:
        return self.swap
