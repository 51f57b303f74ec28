"""
info: structural information about a permutation, derived from its cycle decomposition.

An Info belongs to exactly one Permutation and is created the first time it is requested. The
counts of cycles and transpositions are computed when the Info is created; everything else is
computed on first access and then cached. Since the permutation never changes, neither does its
Info, so nothing is ever invalidated.

>>> from permalg import Permutation
>>> info = Permutation.correspond((4, 2, 1, 0, 3)).info
>>> info.number_of_cycles, info.number_of_transpositions, info.is_odd()
(2, 3, True)
>>> info.length_of_orbit
6
>>> info.cycle_type()
(3, 2)
"""
from __future__ import annotations

import functools
import math
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from .correspondence import cycle_lengths, neg

if TYPE_CHECKING:
    from .permutation import Permutation


class Info:
    def __init__(self, permutation: Permutation):
        self.permutation = permutation

        # Every cycle contributes exactly one terminator and (length - 1) transpositions.
        cycles = permutation.cycles
        self.number_of_cycles = sum(1 for c in cycles if c < 0)
        self.number_of_transpositions = len(cycles) - self.number_of_cycles

    def is_identity(self) -> bool:
        return self.number_of_transpositions == 0

    def is_odd(self) -> bool:
        """Whether the permutation is a product of an odd number of transpositions."""
        return self.number_of_transpositions % 2 == 1

    def is_transposition(self) -> bool:
        return self.number_of_transpositions == 1

    def is_reversal(self) -> bool:
        return self._is_reversal

    def is_rotation(self) -> bool:
        """
        Whether the permutation shifts every index by the same distance. Every permutation of size
        less than three is a rotation.
        """
        return self._is_rotation

    def is_involution(self) -> bool:
        """Whether the permutation is its own inverse (the identity is an involution)."""
        return self.length_of_orbit <= 2

    def rotation_distance(self) -> int | None:
        """
        The distance through which the permutation moves every value, or None if it is not a
        rotation. The identity has distance zero.

        >>> from permalg import Permutation
        >>> Permutation.rotate(7, 3).info.rotation_distance()
        3
        >>> Permutation.transpose(4, 0, 1).info.rotation_distance() is None
        True
        """
        if self.is_identity():
            return 0
        if self.is_rotation():
            word = self.permutation.correspondence
            return len(word) - word[0]
        return None

    def cycle_type(self) -> tuple[int, ...]:
        """The lengths of all disjoint cycles, fixed points included, in decreasing order."""
        cycles = self.permutation.cycles
        fixed = self.permutation.size - len(cycles)
        return tuple(sorted(cycle_lengths(cycles) + [1] * fixed, reverse=True))

    @functools.cached_property
    def _is_reversal(self) -> bool:
        word = self.permutation.correspondence
        last = len(word) - 1
        return all(word[i] == last - i for i in range(len(word)))

    @functools.cached_property
    def _is_rotation(self) -> bool:
        word = self.permutation.correspondence
        n = len(word)
        if n < 3 or self.is_identity():
            return True
        return all(word[i] == (word[0] + i) % n for i in range(n))

    @functools.cached_property
    def fixed_points(self) -> npt.NDArray[np.bool_]:
        """A read-only boolean vector whose entry i is set iff the permutation leaves index i in place."""
        word = np.asarray(self.permutation.correspondence, dtype=np.intp)
        fixed = word == np.arange(len(word))
        fixed.flags.writeable = False
        return fixed

    @functools.cached_property
    def disjoint_cycles(self) -> frozenset[Permutation]:
        """
        The permutation decomposed into disjoint cycles, each given as a permutation which moves only
        the indices of that cycle. The identity has no cycles.
        """
        from .permutation import Permutation

        p = self.permutation
        if self.number_of_cycles == 0:
            return frozenset()
        if self.number_of_cycles == 1:
            return frozenset([p])

        # Each run of the flat encoding up to a terminator is already the encoding of its own cycle.
        result = set()
        start = 0
        word = list(range(p.size))
        for k, c in enumerate(p.cycles):
            i = c if c >= 0 else neg(c)
            word[i] = p.correspondence[i]
            if c < 0:
                result.add(Permutation._with_cycles(tuple(word), p.cycles[start:k + 1]))
                for d in p.cycles[start:k + 1]:
                    j = d if d >= 0 else neg(d)
                    word[j] = j
                start = k + 1

        return frozenset(result)

    @functools.cached_property
    def length_of_orbit(self) -> int:
        """
        The least positive power of the permutation which is the identity: the lowest common multiple
        of its cycle lengths. This may be very large, hence an unbounded int.
        """
        return math.lcm(*cycle_lengths(self.permutation.cycles))

    def __eq__(self, other):
        if isinstance(other, Info):
            return self.permutation == other.permutation
        return NotImplemented

    def __hash__(self):
        return hash(self.permutation)

    def __repr__(self):
        return f'Info({self.permutation!r})'
