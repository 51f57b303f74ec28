import math
import random
import unittest

from permalg import Generator, Permutation


def shuffled(size: int, rand: random.Random) -> Permutation:
    return Permutation.shuffle(size, rand)


class TestInfoPredicates(unittest.TestCase):
    def test_odd(self):
        self.assertFalse(Permutation.identity(5).info.is_odd())
        self.assertTrue(Permutation.transpose(5, 0, 1).info.is_odd())
        even = Permutation.identity(5).generator().transpose(0, 1).transpose(1, 2).permutation()
        self.assertFalse(even.info.is_odd())

    def test_transposition(self):
        self.assertFalse(Permutation.identity(0).info.is_transposition())
        self.assertFalse(Permutation.identity(1).info.is_transposition())
        self.assertTrue(Permutation.rotate(2, 1).info.is_transposition())
        self.assertTrue(Permutation.transpose(5, 0, 1).info.is_transposition())
        self.assertFalse(Permutation.rotate(5, 1).info.is_transposition())

    def test_reversal(self):
        for size in range(10):
            self.assertTrue(Permutation.reverse(size).info.is_reversal())

        rand = random.Random(0)
        for _ in range(1000):
            size = rand.randrange(30)
            p = shuffled(size, rand)
            self.assertEqual(p == Permutation.reverse(size), p.info.is_reversal())

    def test_rotation(self):
        self.assertTrue(Permutation.identity(0).info.is_rotation())
        self.assertEqual(0, Permutation.identity(0).info.rotation_distance())

        rand = random.Random(0)
        for _ in range(1000):
            size = rand.randrange(1, 30)
            distance = rand.randrange(size)
            info = Permutation.rotate(size, distance).info
            self.assertTrue(info.is_rotation())
            self.assertEqual(distance, info.rotation_distance())

        p = Permutation.transpose(4, 0, 1)
        self.assertFalse(p.info.is_rotation())
        self.assertIsNone(p.info.rotation_distance())

    def test_involution(self):
        self.assertTrue(Permutation.identity(4).info.is_involution())
        self.assertTrue(Permutation.reverse(5).info.is_involution())
        self.assertTrue(Permutation.correspond((1, 0, 3, 2)).info.is_involution())
        self.assertFalse(Permutation.rotate(5, 1).info.is_involution())


class TestInfoStructure(unittest.TestCase):
    def test_number_of_cycles(self):
        self.assertEqual(1, Permutation.correspond((1, 2, 3, 4, 0)).info.number_of_cycles)
        self.assertEqual(0, Permutation.identity(5).info.number_of_cycles)
        self.assertEqual(1, Permutation.correspond((1, 0, 2, 3, 4)).info.number_of_cycles)
        self.assertEqual(2, Permutation.correspond((1, 0, 2, 4, 3)).info.number_of_cycles)
        self.assertEqual(0, Permutation.correspond((0,)).info.number_of_cycles)
        self.assertEqual(0, Permutation.correspond(()).info.number_of_cycles)

    def test_cycle_type(self):
        self.assertEqual((1, 1, 1), Permutation.identity(3).info.cycle_type())
        self.assertEqual((2, 1), Permutation.correspond((1, 0, 2)).info.cycle_type())
        self.assertEqual((3,), Permutation.correspond((2, 0, 1)).info.cycle_type())
        self.assertEqual((), Permutation.identity(0).info.cycle_type())

    def test_disjoint_cycles(self):
        self.assertEqual(frozenset(), Permutation.identity(4).info.disjoint_cycles)

        p = Permutation.correspond((1, 2, 3, 4, 0))
        self.assertEqual(frozenset([p]), p.info.disjoint_cycles)

        self.assertEqual(
            {Permutation((1, 0, 2, 3, 4)), Permutation((0, 1, 2, 4, 3))},
            Permutation.correspond((1, 0, 2, 4, 3)).info.disjoint_cycles,
        )
        self.assertEqual(
            {Permutation((1, 2, 0, 3, 4)), Permutation((0, 1, 2, 4, 3))},
            Permutation.correspond((1, 2, 0, 4, 3)).info.disjoint_cycles,
        )

    def test_disjoint_cycles_rebuild_permutation(self):
        rand = random.Random(0)
        for _ in range(300):
            p = shuffled(rand.randrange(30), rand)
            cycles = p.info.disjoint_cycles
            self.assertEqual(p.info.number_of_cycles, len(cycles))
            self.assertEqual(p.info.number_of_transpositions,
                             sum(c.info.number_of_transpositions for c in cycles))

            g = Permutation.identity(p.size).generator()
            for c in cycles:
                self.assertEqual(1, c.info.number_of_cycles)
                g.apply(c)
            self.assertEqual(p, g.permutation())

    def test_length_of_orbit(self):
        rand = random.Random(0)
        for _ in range(300):
            p = shuffled(rand.randrange(11), rand)
            orbit = p.info.length_of_orbit
            self.assertTrue((p ** orbit).info.is_identity())
            g = p.generator()
            for _ in range(1, orbit):
                self.assertFalse(g.permutation().info.is_identity())
                g.apply(p)
            self.assertTrue(g.permutation().info.is_identity())

    def test_length_of_orbit_exceeds_machine_words(self):
        primes = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53]
        g = Generator(list(range(sum(primes))))
        start = 0
        for prime in primes:
            g.cycle(*range(start, start + prime))
            start += prime

        info = g.permutation().info
        self.assertEqual(math.prod(primes), info.length_of_orbit)
        self.assertGreater(info.length_of_orbit, 2 ** 64)
        self.assertTrue(g.power(info.length_of_orbit).permutation().info.is_identity())

    def test_fixed_points(self):
        self.assertEqual([True, False, True, False, True],
                         Permutation.transpose(5, 1, 3).info.fixed_points.tolist())
        self.assertTrue(Permutation.identity(4).info.fixed_points.all())
        for size in range(2, 10):
            for distance in range(1, size):
                self.assertFalse(Permutation.rotate(size, distance).info.fixed_points.any())

        with self.assertRaises(ValueError):
            Permutation.identity(3).info.fixed_points[0] = False


class TestInfoIdentity(unittest.TestCase):
    def test_memoised(self):
        p = Permutation.rotate(7, 2)
        self.assertIs(p.info, p.info)
        self.assertIs(p.info.disjoint_cycles, p.info.disjoint_cycles)

    def test_equality_follows_permutation(self):
        p = Permutation.rotate(7, 2)
        q = Permutation.correspond(p.correspondence)
        self.assertEqual(p.info, q.info)
        self.assertEqual(hash(p.info), hash(q.info))
        self.assertNotEqual(p.info, Permutation.identity(7).info)


if __name__ == '__main__':
    unittest.main()
