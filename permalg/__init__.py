from .errors import (
    DuplicateIndex,
    InvalidIndex,
    InvalidPermutation,
    InvalidSize,
    InvalidState,
    NoSuchPermutation,
    NotAnInvolution,
    PermutationError,
    SizeMismatch,
)
from .generator import Generator
from .info import Info
from .permutable import (
    Permutable,
    PermutableArray,
    PermutableList,
    PermutableString,
    PermutableTransposable,
    Transposable,
)
from .permutation import Permutation
from .sequences import FixFreeInvolutionSequence, OrderedSequence, PermutationSequence, SyncState

__all__ = [
    "DuplicateIndex",
    "FixFreeInvolutionSequence",
    "Generator",
    "Info",
    "InvalidIndex",
    "InvalidPermutation",
    "InvalidSize",
    "InvalidState",
    "NoSuchPermutation",
    "NotAnInvolution",
    "OrderedSequence",
    "Permutable",
    "PermutableArray",
    "PermutableList",
    "PermutableString",
    "PermutableTransposable",
    "Permutation",
    "PermutationError",
    "PermutationSequence",
    "SizeMismatch",
    "SyncState",
    "Transposable",
]
