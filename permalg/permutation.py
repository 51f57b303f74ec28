"""
permutation: the immutable Permutation value.

A permutation of size n is stored as its correspondence array c (see `correspondence`): applying it
to a container moves the value at index c[i] to index i. Permutations are built by the classmethod
constructors, never change afterwards, and can be freely shared. They are applied to containers by
swapping elements along each disjoint cycle, which uses the fewest possible swaps.

>>> from permalg import PermutableString
>>> Permutation.correspond((1, 2, 3, 4, 0)).permute(PermutableString("smite")).permuted()
'mites'
>>> Permutation.rotate(5, -1) == Permutation.correspond((1, 2, 3, 4, 0))
True
>>> Permutation.transpose(5, 0, 4).permute(PermutableString("smite")).permuted()
'emits'

Permutations of different sizes are ordered by size, and otherwise lexicographically by their
correspondence arrays.

>>> Permutation.identity(5) < Permutation.rotate(5, -1) < Permutation.transpose(5, 0, 4)
True
"""
from __future__ import annotations

import dataclasses
import functools
import math
from typing import TYPE_CHECKING, Any, Callable, Sequence

from . import correspondence
from .correspondence import RandomSource, neg
from .errors import SizeMismatch
from .info import Info

if TYPE_CHECKING:
    from .generator import Generator
    from .permutable import Transposable


def _restore(word: list[int]) -> Permutation:
    # Unpickled data is untrusted: rebuild through full validation, never from cached state.
    return Permutation.correspond(word)


@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class Permutation:
    """
    An immutable permutation of [0, n). Direct construction validates the correspondence, so
    Permutation((2, 0, 1)) is equivalent to Permutation.correspond((2, 0, 1)).
    """
    correspondence: tuple[int, ...]
    _cycles: tuple[int, ...] | None = dataclasses.field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'correspondence', correspondence.verify_permutation_array(self.correspondence))

    @classmethod
    def _with_cycles(cls, word: Sequence[int], cycles: tuple[int, ...]) -> Permutation:
        # cycles must be an encoding of the cycle decomposition of word.
        p = cls(word)
        object.__setattr__(p, '_cycles', cycles)
        return p

    # Constructors

    @classmethod
    def identity(cls, size: int) -> Permutation:
        """
        The permutation which leaves every value in place.

        >>> Permutation.identity(3)
        Permutation(correspondence=(0, 1, 2))
        """
        correspondence.verify_size(size)
        return cls._with_cycles(correspondence.identity(size), ())

    @classmethod
    def reverse(cls, size: int) -> Permutation:
        """
        The permutation which reverses the order of values; it is its own inverse.

        >>> Permutation.reverse(4).cycles
        (0, -4, 1, -3)
        """
        correspondence.verify_size(size)
        word = tuple(range(size - 1, -1, -1))
        cycles = tuple(x for i in range(size // 2) for x in (i, neg(size - 1 - i)))
        return cls._with_cycles(word, cycles)

    @classmethod
    def rotate(cls, size: int, distance: int) -> Permutation:
        """
        The permutation which moves every value from index i to index (i + distance) mod size. The
        distance may be negative or exceed the size.

        >>> from permalg import PermutableString
        >>> Permutation.rotate(4, 1).permute(PermutableString("ABCD")).permuted()
        'DABC'
        >>> Permutation.rotate(6, 2).cycles
        (4, 2, -1, 5, 3, -2)
        """
        correspondence.verify_size(size)
        shift = -distance % size if size >= 2 else 0
        if shift == 0:
            return cls.identity(size)

        word = tuple((i + shift) % size for i in range(size))

        # A rotation splits into gcd(shift, size) interleaved cycles, the kth of which starts at k.
        count = math.gcd(shift, size)
        cycles = []
        for start in range(count):
            j = start
            for _ in range(size // count - 1):
                j = (j + shift) % size
                cycles.append(j)
            cycles.append(neg(start))

        return cls._with_cycles(word, tuple(cycles))

    @classmethod
    def transpose(cls, size: int, i: int, j: int) -> Permutation:
        """The permutation which swaps the values at indices i and j."""
        correspondence.verify_size(size)
        correspondence.verify_index(size, i)
        correspondence.verify_index(size, j)
        if i == j:
            return cls.identity(size)

        word = list(range(size))
        word[i], word[j] = j, i
        return cls._with_cycles(tuple(word), (i, neg(j)))

    @classmethod
    def cycle(cls, size: int, *indices: int) -> Permutation:
        """
        The cyclic permutation through the given distinct indices: the value at indices[k + 1] moves
        to indices[k], and the value at indices[0] moves to the last index. Zero or one indices give
        the identity.

        >>> Permutation.cycle(5, 1, 3, 4)
        Permutation(correspondence=(0, 3, 2, 4, 1))
        """
        correspondence.verify_size(size)
        cycle = correspondence.verify_cycle(size, indices)
        if len(cycle) < 2:
            return cls.identity(size)
        if len(cycle) == 2:
            return cls.transpose(size, *cycle)

        word = list(range(size))
        for a, b in zip(cycle, cycle[1:]):
            word[a] = b
        word[cycle[-1]] = cycle[0]
        return cls._with_cycles(tuple(word), (*cycle[:-1], neg(cycle[-1])))

    @classmethod
    def correspond(cls, word: Sequence[int]) -> Permutation:
        """
        The permutation which moves the value at index word[i] to index i. Any permutation can be
        created this way; word must contain each of 0, ..., len(word) - 1 exactly once.
        """
        word = correspondence.verify_permutation_array(word)
        return cls._with_cycles(word, correspondence.decompose_cycles(word))

    @classmethod
    def reorder(cls, ordering: Sequence[int]) -> Permutation:
        """
        The permutation which moves the value at index i to index ordering[i]; this is the inverse of
        Permutation.correspond(ordering).

        >>> Permutation.reorder((1, 2, 0)) == Permutation.correspond((1, 2, 0)).inverse()
        True
        """
        word = correspondence.inverse(correspondence.verify_permutation_array(ordering))
        return cls._with_cycles(word, correspondence.decompose_cycles(word))

    @classmethod
    def shuffle(cls, size: int, rng: RandomSource) -> Permutation:
        """A uniformly random permutation, determined entirely by the state of rng."""
        correspondence.verify_size(size)
        word = list(range(size))
        correspondence.shuffle_in_place(word, rng)
        return cls(tuple(word))

    @classmethod
    def sort(
        cls,
        values: Sequence[Any],
        key: Callable[[Any], Any] | None = None,
        cmp: Callable[[Any, Any], int] | None = None,
    ) -> Permutation:
        """
        The permutation which, applied to values, would put them in sorted order. The order is the
        natural one unless a key function or a three-way comparison function cmp is supplied. The
        sort is stable: equal values keep the relative order of their indices. values is not modified.

        >>> Permutation.sort("smite")
        Permutation(correspondence=(4, 2, 1, 0, 3))
        >>> Permutation.sort([2, 1, 2, 1], cmp=lambda a, b: b - a)
        Permutation(correspondence=(0, 2, 1, 3))
        """
        if key is not None and cmp is not None:
            raise ValueError("Supply at most one of key and cmp")
        if cmp is not None:
            key = functools.cmp_to_key(cmp)

        if key is None:
            order = sorted(range(len(values)), key=values.__getitem__)
        else:
            order = sorted(range(len(values)), key=lambda i: key(values[i]))

        return cls(tuple(order))

    # Accessors

    @property
    def size(self) -> int:
        return len(self.correspondence)

    @property
    def cycles(self) -> tuple[int, ...]:
        """The flat cycle encoding of the permutation, computed on first use if not already known."""
        if self._cycles is None:
            object.__setattr__(self, '_cycles', correspondence.decompose_cycles(self.correspondence))
        return self._cycles

    @functools.cached_property
    def info(self) -> Info:
        return Info(self)

    # Operations

    def inverse(self) -> Permutation:
        """The permutation which undoes this one."""
        return type(self)(correspondence.inverse(self.correspondence))

    def generator(self) -> Generator:
        """A new generator holding a copy of this permutation."""
        from .generator import Generator

        return Generator(self.correspondence)

    def permute(self, target: Transposable) -> Transposable:
        """
        Apply the permutation to target by swapping its elements, one swap per transposition in the
        cycle decomposition, and return target.
        """
        self._check_target(target)
        self._transpositions(target.transpose)
        return target

    def unpermute(self, target: Transposable) -> Transposable:
        """Apply the inverse of the permutation to target, by the same swaps in the reverse order."""
        self._check_target(target)
        self._transpositions(target.transpose, reverse=True)
        return target

    def _check_target(self, target: Transposable):
        if target.size() != self.size:
            raise SizeMismatch(f"Cannot apply a permutation of size {self.size} to a target of size {target.size()}")

    def _transpositions(self, swap: Callable[[int, int], Any], reverse: bool = False):
        cycles = self.cycles
        steps = range(len(cycles) - 1, 0, -1) if reverse else range(1, len(cycles))
        for k in steps:
            # A negative predecessor terminates the previous cycle, so index k begins a new one.
            if cycles[k - 1] < 0:
                continue
            c = cycles[k]
            swap(cycles[k - 1], c if c >= 0 else neg(c))

    # Dunder methods

    def __len__(self):
        return len(self.correspondence)

    def __call__(self, i: int) -> int:
        return self.correspondence[i]

    def __mul__(self, other):
        """
        The composite which applies self and then other.

        >>> s, t = Permutation.transpose(3, 0, 1), Permutation.transpose(3, 1, 2)
        >>> s * t
        Permutation(correspondence=(1, 2, 0))
        """
        if isinstance(other, Permutation):
            return self.generator().apply(other).permutation()
        return NotImplemented

    def __pow__(self, power: int):
        return self.generator().power(power).permutation()

    def __lt__(self, other):
        if isinstance(other, Permutation):
            return (self.size, self.correspondence) < (other.size, other.correspondence)
        return NotImplemented

    def __reduce__(self):
        return (_restore, (list(self.correspondence),))
