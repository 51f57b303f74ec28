"""
sequences: stepping a generator through ordered families of permutations.

A sequence does not hold a permutation of its own: it moves the generator it was obtained from,
whose permutation() is the current element. Two orders are provided.

The ordered sequence visits all n! permutations in increasing order of their correspondence arrays:

>>> from permalg import Permutation
>>> g = Permutation.identity(3).generator()
>>> [p.correspondence for p in g.ordered_sequence().first()]
[(0, 1, 2), (0, 2, 1), (1, 0, 2), (1, 2, 0), (2, 0, 1), (2, 1, 0)]

The involution sequence visits the (n - 1)!! involutions of even size n which have no fixed points:

>>> g = Permutation.identity(4).generator()
>>> [p.correspondence for p in g.fix_free_involution_sequence().first()]
[(1, 0, 3, 2), (2, 3, 0, 1), (3, 2, 1, 0)]

The involution sequence keeps its position in a compact form of n/2 values: value i is the offset
of the partner of the lowest index still unmatched after i pairs have been removed, so it lies in
[0, 2(n/2 - 1 - i)]. The generator's array and these values are two views of the same position,
kept consistent by the protocol described on SyncState.
"""
from __future__ import annotations

import abc
import enum
import logging
from typing import TYPE_CHECKING, Iterator

from .errors import NoSuchPermutation, NotAnInvolution

if TYPE_CHECKING:
    from .generator import Generator
    from .permutation import Permutation

logger = logging.getLogger(__name__)


class SyncState(enum.Enum):
    """
    Which side of a generator and its attached sequence holds the current position. Whichever side is
    dirty is brought up to date lazily, when it is next read: the generator before any read or
    change of its array, the sequence before any read of its values.
    """
    CLEAN = enum.auto()
    GENERATOR_DIRTY = enum.auto()  # The generator changed; the sequence must re-index.
    SEQUENCE_DIRTY = enum.auto()   # The sequence stepped; the generator's array is stale.


class Syncer(abc.ABC):
    """A sequence with state of its own, which a generator keeps informed of its changes."""

    @abc.abstractmethod
    def desync(self):
        """Called by the generator after it has changed its array."""

    @abc.abstractmethod
    def resync(self):
        """Called by the generator before it uses its array."""


class PermutationSequence(abc.ABC):
    def __init__(self, generator: Generator):
        self._generator = generator

    @property
    def generator(self) -> Generator:
        """The generator which holds the current permutation of the sequence."""
        return self._generator

    @abc.abstractmethod
    def has_next(self) -> bool:
        ...

    @abc.abstractmethod
    def has_previous(self) -> bool:
        ...

    @abc.abstractmethod
    def first(self) -> PermutationSequence:
        ...

    @abc.abstractmethod
    def last(self) -> PermutationSequence:
        ...

    @abc.abstractmethod
    def next(self) -> PermutationSequence:
        """Move to the next permutation, raising NoSuchPermutation at the end of the sequence."""

    @abc.abstractmethod
    def previous(self) -> PermutationSequence:
        """Move to the previous permutation, raising NoSuchPermutation at the start of the sequence."""

    def __iter__(self) -> Iterator[Permutation]:
        """Iterate from the current permutation to the end of the sequence, moving the generator."""
        yield self._generator.permutation()
        while self.has_next():
            yield self.next()._generator.permutation()

    def __repr__(self):
        return f'{type(self).__name__}({self._generator!r})'


class OrderedSequence(PermutationSequence):
    """All permutations, in increasing lexicographic order of their correspondence arrays."""

    def has_next(self) -> bool:
        word = self._generator._live()
        return any(word[i - 1] < word[i] for i in range(1, len(word)))

    def has_previous(self) -> bool:
        word = self._generator._live()
        return any(word[i - 1] > word[i] for i in range(1, len(word)))

    def first(self) -> OrderedSequence:
        self._generator.identity()
        return self

    def last(self) -> OrderedSequence:
        word = self._generator._live()
        word[:] = range(len(word) - 1, -1, -1)
        self._generator._desync()
        return self

    def next(self) -> OrderedSequence:
        self._step(ascending=True)
        return self

    def previous(self) -> OrderedSequence:
        self._step(ascending=False)
        return self

    def _step(self, ascending: bool):
        word = self._generator._live()
        n = len(word)

        # The rightmost position j whose entry can be exchanged for a larger (smaller) one to its
        # right. Everything after j is then in decreasing (increasing) order.
        j = next((i for i in range(n - 2, -1, -1) if (word[i] < word[i + 1]) == ascending), None)
        if j is None:
            raise NoSuchPermutation(f"There is no {'next' if ascending else 'previous'} permutation from {word}")

        # Exchange with the rightmost, hence nearest in value, such entry and restore the suffix order.
        k = next(i for i in range(n - 1, j, -1) if (word[j] < word[i]) == ascending)
        word[j], word[k] = word[k], word[j]
        word[j + 1:] = word[:j:-1]
        self._generator._desync()


class FixFreeInvolutionSequence(PermutationSequence, Syncer):
    """All involutions without fixed points, in increasing order of their compact values."""

    def __init__(self, generator: Generator):
        super().__init__(generator)
        self._values = [0] * (generator.size() // 2)
        self._state = SyncState.GENERATOR_DIRTY

    @property
    def values(self) -> tuple[int, ...]:
        """
        The compact form of the current involution. Reading it re-indexes the generator if it has
        changed, so it raises NotAnInvolution if the generator no longer holds one.
        """
        return tuple(self._current_values())

    def has_next(self) -> bool:
        values = self._current_values()
        return any(v < self._bound(i) for i, v in enumerate(values))

    def has_previous(self) -> bool:
        return any(v > 0 for v in self._current_values())

    def first(self) -> FixFreeInvolutionSequence:
        self._generator._attach(self)
        word = self._generator._correspondence
        word[:] = [i + 1 if i % 2 == 0 else i - 1 for i in range(len(word))]
        self._values[:] = [0] * len(self._values)
        self._state = SyncState.CLEAN
        return self

    def last(self) -> FixFreeInvolutionSequence:
        self._generator._attach(self)
        word = self._generator._correspondence
        word[:] = range(len(word) - 1, -1, -1)
        self._values[:] = [self._bound(i) for i in range(len(self._values))]
        self._state = SyncState.CLEAN
        return self

    def next(self) -> FixFreeInvolutionSequence:
        if not self.has_next():
            raise NoSuchPermutation(f"There is no fixed point free involution after {self._values}")

        # A mixed-radix increment, with the rightmost value changing fastest.
        values = self._values
        for i in range(len(values) - 1, -1, -1):
            if values[i] < self._bound(i):
                values[i] += 1
                break
            values[i] = 0

        self._state = SyncState.SEQUENCE_DIRTY
        return self

    def previous(self) -> FixFreeInvolutionSequence:
        if not self.has_previous():
            raise NoSuchPermutation(f"There is no fixed point free involution before {self._values}")

        values = self._values
        for i in range(len(values) - 1, -1, -1):
            if values[i] > 0:
                values[i] -= 1
                break
            values[i] = self._bound(i)

        self._state = SyncState.SEQUENCE_DIRTY
        return self

    def desync(self):
        self._state = SyncState.GENERATOR_DIRTY

    def resync(self):
        if self._state is SyncState.SEQUENCE_DIRTY:
            self._correspond()
            self._state = SyncState.CLEAN

    def _bound(self, i: int) -> int:
        return 2 * (len(self._values) - 1 - i)

    def _current_values(self) -> list[int]:
        self._generator._attach(self)
        if self._state is SyncState.GENERATOR_DIRTY:
            self._index()
            self._state = SyncState.CLEAN
        return self._values

    def _index(self):
        """Recover the values from the generator, which must hold a fixed point free involution."""
        logger.debug("Indexing involution sequence from generator of size %d", self._generator.size())
        remaining = list(self._generator._correspondence)
        for i in range(len(self._values)):
            j = remaining[0]
            if j == 0 or remaining[j] != 0:
                raise NotAnInvolution(f"{self._generator._correspondence} is not an involution without fixed points")
            self._values[i] = j - 1

            # Remove the pair (0, j) and renumber what is left down to [0, len(remaining) - 2).
            remaining = [c - 1 if c < j else c - 2 for k, c in enumerate(remaining) if k != 0 and k != j]

    def _correspond(self):
        """Write the involution described by the values into the generator."""
        word = [-1] * len(self._generator._correspondence)
        for offset in self._values:
            unmatched = [i for i, c in enumerate(word) if c == -1]
            a, b = unmatched[0], unmatched[1 + offset]
            word[a], word[b] = b, a

        self._generator._correspondence[:] = word
