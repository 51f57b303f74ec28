"""
errors: the exceptions raised by permalg.

Every error is raised eagerly at the API boundary (constructors and generator mutators). Each class
also derives from the closest built-in exception, so callers may catch either.
"""


class PermutationError(Exception):
    """Base class of all errors raised by this package."""


class InvalidSize(PermutationError, ValueError):
    """A negative size was supplied."""


class InvalidIndex(PermutationError, IndexError):
    """An index lies outside of [0, size)."""


class DuplicateIndex(PermutationError, ValueError):
    """An index was repeated where the indices must be distinct, e.g. in a cycle."""


class InvalidPermutation(PermutationError, ValueError):
    """An array is not a bijection on [0, len(array))."""


class SizeMismatch(PermutationError, ValueError):
    """A permutation was applied to a generator or container of a different size."""


class NoSuchPermutation(PermutationError, LookupError):
    """A sequence was stepped past its first or last permutation."""


class NotAnInvolution(PermutationError, ValueError):
    """The generator does not currently hold an involution without fixed points."""


class InvalidState(PermutationError, ValueError):
    """The generator cannot support the requested sequence, e.g. an odd size for involutions."""
