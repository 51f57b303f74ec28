import random

import pytest

from permalg import InvalidIndex, InvalidPermutation, InvalidSize, DuplicateIndex
from permalg import correspondence


@pytest.mark.parametrize("array", [
    [0, 1, 2, 3, 3],
    [1],
    [-1, 0, -1],
    [1, -1, 0],
    [0, None],
    [0.5, 1],
    None,
])
def test_verify_rejects_non_bijections(array):
    with pytest.raises(InvalidPermutation):
        correspondence.verify_permutation_array(array)
    assert not correspondence.is_permutation(array)


def test_verify_accepts_and_copies():
    array = [2, 0, 1]
    word = correspondence.verify_permutation_array(array)
    assert word == (2, 0, 1)
    array[0] = 5
    assert word == (2, 0, 1)


def test_inverse_is_involutive():
    rand = random.Random(0)
    for _ in range(200):
        word = list(range(rand.randrange(20)))
        correspondence.shuffle_in_place(word, rand)
        inv = correspondence.inverse(word)
        assert all(inv[word[i]] == i for i in range(len(word)))
        assert correspondence.inverse(inv) == tuple(word)


def test_decomposition_skips_fixed_points():
    rand = random.Random(0)
    for _ in range(200):
        word = list(range(rand.randrange(20)))
        correspondence.shuffle_in_place(word, rand)
        cycles = correspondence.decompose_cycles(word)

        fixed = sum(1 for i, c in enumerate(word) if i == c)
        assert len(cycles) == len(word) - fixed
        assert sum(correspondence.cycle_lengths(cycles)) == len(cycles)
        assert all(length >= 2 for length in correspondence.cycle_lengths(cycles))

        # Every moved index appears exactly once, decoded.
        decoded = sorted(c if c >= 0 else correspondence.neg(c) for c in cycles)
        assert decoded == [i for i, c in enumerate(word) if i != c]


def test_decomposition_detects_non_bijection():
    with pytest.raises(InvalidPermutation):
        correspondence.decompose_cycles((0, 0))


def test_shuffle_is_reproducible():
    a, b = list(range(50)), list(range(50))
    correspondence.shuffle_in_place(a, random.Random(1234))
    correspondence.shuffle_in_place(b, random.Random(1234))
    assert a == b
    assert sorted(a) == list(range(50))


def test_verifiers():
    with pytest.raises(InvalidSize):
        correspondence.verify_size(-1)
    with pytest.raises(InvalidIndex):
        correspondence.verify_index(3, 3)
    with pytest.raises(InvalidIndex):
        correspondence.verify_cycle(3, [0, -1])
    with pytest.raises(DuplicateIndex):
        correspondence.verify_cycle(5, [1, 2, 1])
    assert correspondence.verify_cycle(0, []) == ()
