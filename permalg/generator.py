"""
generator: a mutable permutation, used to compose permutations efficiently.

A Generator holds a single correspondence array which its methods change in place; each method
returns the generator so that calls can be chained, and permutation() takes an immutable snapshot.

>>> from permalg import Permutation
>>> p = Permutation.reverse(5)
>>> p.generator().apply(p).permutation() == Permutation.identity(5)
True
>>> p.generator().transpose(0, 2).permutation()
Permutation(correspondence=(2, 3, 4, 1, 0))

A generator may also have one sequence attached to it (see `sequences`) which steps the generator
through an ordered family of permutations. Changing the generator moves the sequence, and stepping
the sequence changes the generator.
"""
from __future__ import annotations

import logging
from typing import Sequence

from . import correspondence
from .correspondence import RandomSource
from .errors import InvalidState, SizeMismatch
from .permutable import Permutable
from .permutation import Permutation
from .sequences import FixFreeInvolutionSequence, OrderedSequence, Syncer

logger = logging.getLogger(__name__)


class Generator(Permutable['Generator']):
    def __init__(self, word: Sequence[int]):
        """Starts from a copy of word, which must be a valid correspondence array."""
        self._correspondence = list(correspondence.verify_permutation_array(word))
        self._syncer: Syncer | None = None
        self._ordered_sequence: OrderedSequence | None = None

    # Sequences

    def ordered_sequence(self) -> OrderedSequence:
        """
        The sequence of all permutations of this size in increasing order, from the identity to the
        reversal. Detaches any other sequence.
        """
        self._attach(None)
        if self._ordered_sequence is None:
            self._ordered_sequence = OrderedSequence(self)
        return self._ordered_sequence

    def fix_free_involution_sequence(self) -> FixFreeInvolutionSequence:
        """
        The sequence of all involutions of this size without fixed points, i.e. the perfect matchings
        of the indices. The size must be even. Detaches any other sequence.
        """
        if isinstance(self._syncer, FixFreeInvolutionSequence):
            return self._syncer
        if self.size() % 2 != 0:
            raise InvalidState(f"There are no fixed point free involutions of odd size {self.size()}")

        sequence = FixFreeInvolutionSequence(self)
        self._attach(sequence)
        return sequence

    # Mutators

    def set(self, permutation: Permutation) -> Generator:
        self._check_size(permutation)
        self._correspondence[:] = permutation.correspondence
        self._desync()
        return self

    def identity(self) -> Generator:
        self._correspondence[:] = range(len(self._correspondence))
        self._desync()
        return self

    def invert(self) -> Generator:
        word = self._live()
        word[:] = correspondence.inverse(word)
        self._desync()
        return self

    def transpose(self, i: int, j: int) -> Generator:
        correspondence.verify_index(self.size(), i)
        correspondence.verify_index(self.size(), j)
        if i != j:
            self._live()
            self._swap(i, j)
            self._desync()
        return self

    def rotate(self, distance: int) -> Generator:
        word = self._live()
        if len(word) == 0 or distance % len(word) == 0:
            return self

        distance %= len(word)
        word[:] = word[-distance:] + word[:-distance]
        self._desync()
        return self

    def reverse(self) -> Generator:
        self._live().reverse()
        self._desync()
        return self

    def cycle(self, *indices: int) -> Generator:
        cycle = correspondence.verify_cycle(self.size(), indices)
        if len(cycle) < 2:
            return self

        word = self._live()
        target = cycle[0]
        first = word[target]
        for source in cycle[1:]:
            word[target] = word[source]
            target = source
        word[target] = first
        self._desync()
        return self

    def shuffle(self, rng: RandomSource) -> Generator:
        correspondence.shuffle_in_place(self._live(), rng)
        self._desync()
        return self

    def apply(self, permutation: Permutation) -> Generator:
        """Compose the permutation on top of the current one."""
        self._check_size(permutation)
        self._live()
        permutation._transpositions(self._swap)
        self._desync()
        return self

    def unapply(self, permutation: Permutation) -> Generator:
        self._check_size(permutation)
        self._live()
        permutation._transpositions(self._swap, reverse=True)
        self._desync()
        return self

    def power(self, power: int) -> Generator:
        """
        Raise the current permutation to the given power, which may be negative. This takes a number
        of compositions logarithmic in the power, so very large powers are cheap.
        """
        if power == 0:
            return self.identity()

        if power < 0:
            self.invert()
            power = -power

        if power > 1:
            logger.debug("Raising a permutation of size %d to the power %d", self.size(), power)
            square = self.permutation()
            self.identity()
            while power > 0:
                if power & 1:
                    self.apply(square)
                power >>= 1
                if power > 0:
                    square = square.generator().apply(square).permutation()

        return self

    # Accessors

    def permutation(self) -> Permutation:
        """An immutable snapshot of the current permutation."""
        return Permutation(tuple(self._live()))

    def size(self) -> int:
        return len(self._correspondence)

    def permuted(self) -> Generator:
        return self

    def __len__(self):
        return len(self._correspondence)

    def __repr__(self):
        return f'Generator({self._live()})'

    # Synchronisation with the attached sequence

    def _live(self) -> list[int]:
        """The correspondence array, after any changes made through the attached sequence are applied."""
        if self._syncer is not None:
            self._syncer.resync()
        return self._correspondence

    def _desync(self):
        if self._syncer is not None:
            self._syncer.desync()

    def _attach(self, syncer: Syncer | None):
        if syncer is self._syncer:
            return

        if self._syncer is not None:
            self._syncer.resync()
            logger.debug("Detached %s from generator of size %d", type(self._syncer).__name__, self.size())

        self._syncer = syncer
        if syncer is not None:
            # The new sequence cannot trust its own state until it has read the generator.
            syncer.desync()
            logger.debug("Attached %s to generator of size %d", type(syncer).__name__, self.size())

    def _swap(self, i: int, j: int):
        word = self._correspondence
        word[i], word[j] = word[j], word[i]

    def _check_size(self, permutation: Permutation):
        if permutation.size != self.size():
            raise SizeMismatch(f"Cannot apply a permutation of size {permutation.size} to a generator of size {self.size()}")
