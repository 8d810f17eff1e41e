import io
import random
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

import sympy

from mont32 import harness
from mont32.common import MAX_MODULUS
from mont32.harness import VerificationFailure, check_inverse, check_trial, random_modulus, reference_product, run_trials
from mont32.montgomery import Montgomery
from mont32.utils import timeout


class TestHarness(unittest.TestCase):

    def test_random_modulus(self):
        rng = random.Random(5)
        for bitlen in range(2, 32):
            for _ in range(50):
                n = random_modulus(bitlen, rng)
                self.assertEqual(1, n & 1)
                self.assertEqual(bitlen, n.bit_length())

        self.assertEqual(3, random_modulus(2, rng))

    def test_random_modulus_prime(self):
        rng = random.Random(5)
        for bitlen in range(2, 32):
            n = random_modulus(bitlen, rng, prime=True)
            self.assertTrue(sympy.isprime(n), f'n={n}')
            self.assertEqual(bitlen, n.bit_length())

    def test_random_modulus_seeded(self):
        draws = [random_modulus(20, random.Random(99)) for _ in range(3)]
        self.assertEqual(1, len(set(draws)))

    def test_random_modulus_bounds(self):
        for bitlen in (0, 1, 32):
            with self.assertRaises(ValueError):
                random_modulus(bitlen)

    def test_reference_product(self):
        n = MAX_MODULUS
        self.assertEqual(1, reference_product(n - 1, n - 1, n))
        self.assertEqual(0, reference_product(0, n - 1, n))

        rng = random.Random(8)
        for _ in range(200):
            n = random_modulus(rng.randint(2, 31), rng)
            a, b = rng.randrange(n), rng.randrange(n)
            self.assertEqual(a * b % n, reference_product(a, b, n))

    def test_check_trial(self):
        mont = Montgomery(1280541179)
        self.assertEqual(1115177062 * 95490452 % 1280541179, check_trial(mont, 1115177062, 95490452))

    def test_check_inverse(self):
        mont = Montgomery(13)
        self.assertEqual(11, check_inverse(mont))

    def test_randomized(self):
        out = io.StringIO()
        with timeout(300):
            cnt = run_trials(trials=1000, min_bitlen=2, max_bitlen=31, seed=2024, out=out)

        self.assertEqual(1000 * 30, cnt)
        self.assertEqual([f'bitlen={k}' for k in range(2, 32)], out.getvalue().splitlines())

    def test_randomized_prime_moduli(self):
        cnt = run_trials(trials=20, seed=1, prime_moduli=True, cross_check=False, out=io.StringIO())
        self.assertEqual(20 * 30, cnt)

    def test_bitlen_range(self):
        for lo, hi in ((1, 31), (2, 32), (10, 9)):
            with self.assertRaises(ValueError):
                run_trials(trials=1, min_bitlen=lo, max_bitlen=hi, out=io.StringIO())

    def test_mismatch_is_reported(self):
        with mock.patch.object(Montgomery, 'multiply', lambda self, a, b: self.one):
            with self.assertRaises(VerificationFailure) as ctx:
                run_trials(trials=100, min_bitlen=8, max_bitlen=8, seed=3, cross_check=False,
                           out=io.StringIO())

        e = ctx.exception
        self.assertIsInstance(e, AssertionError)
        self.assertNotEqual(e.expected, e.result)
        self.assertEqual(e.a * e.b % e.n, e.expected)
        self.assertEqual(1, e.result)
        self.assertIn(f'n={e.n}', str(e))

    def test_inverse_mismatch_is_reported(self):
        with mock.patch.object(harness, 'n_inv_by_hensel', lambda n, r: 0):
            with self.assertRaises(VerificationFailure) as ctx:
                run_trials(trials=1, min_bitlen=5, max_bitlen=5, seed=0, out=io.StringIO())

        self.assertIn('Montgomery constant', str(ctx.exception))

    def test_main(self):
        out, err = io.StringIO(), io.StringIO()
        with mock.patch.object(harness, 'run_trials', return_value=42), redirect_stdout(out):
            self.assertEqual(0, harness.main())
        self.assertIn('42 trials', out.getvalue())

        failure = VerificationFailure('Montgomery multiplication', 7, 1, 2, 3, 3)
        with mock.patch.object(harness, 'run_trials', side_effect=failure), redirect_stderr(err):
            self.assertEqual(1, harness.main())
        self.assertIn('res=1, ref=2, a=3, b=3, n=7', err.getvalue())


if __name__ == '__main__':
    unittest.main(verbosity=2)
