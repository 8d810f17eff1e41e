## Randomized verification of the Montgomery domain against plain 64-bit multiply-and-modulo.
# For each bit length in [MIN_BITLEN, MAX_BITLEN], TRIALS random odd moduli of exactly that many bits are drawn,
# each with a random pair of operands a, b in [0, N). The product computed in the Montgomery domain,
#   convert_out(multiply(convert_in(a), convert_in(b))),
# must equal (a*b) % N computed with fixed-width uint64 arithmetic. Defaults come from the mont32.json config.
#
# usage: python -m mont32.harness
import random
import sys

import numpy as np
import sympy

from .common import MAX_R_BIT_LEN, n_inv_by_hensel
from .montgomery import Montgomery
from .utils import load_config

config = load_config()
TRIALS = config['TRIALS']
MIN_BITLEN = config['MIN_BITLEN']
MAX_BITLEN = config['MAX_BITLEN']
SEED = config['SEED']
PRIME_MODULI = config['PRIME_MODULI']
CROSS_CHECK = config['CROSS_CHECK']


class VerificationFailure(AssertionError):
    def __init__(self, what, n, result, expected, a=None, b=None):
        self.n = n
        self.result = result
        self.expected = expected
        self.a = a
        self.b = b
        super().__init__(f'{what} test failed: res={result}, ref={expected}, a={a}, b={b}, n={n}')


def random_modulus(bitlen, rng=random, prime=False):
    ''' A uniformly random odd modulus N with bit_length(N) == bitlen, a prime one if asked for '''
    if bitlen < 2 or bitlen > MAX_R_BIT_LEN:
        raise ValueError(f'Modulus bit length must be within [2, {MAX_R_BIT_LEN}], got {bitlen}')

    min_n = (1 << bitlen - 1) + 1
    max_n = (1 << bitlen) - 1
    while True:
        n = rng.randrange(min_n, max_n + 1, 2)
        if not prime or sympy.isprime(n):
            return n


def reference_product(a, b, n):
    ''' (a*b) % n the conventional way: a 64-bit multiplication followed by a division '''
    return int(np.uint64(a) * np.uint64(b) % np.uint64(n))


def check_trial(mont, a, b):
    c = mont.convert_out(mont.multiply(mont.convert_in(a), mont.convert_in(b)))
    expected = reference_product(a, b, mont.N)
    if c != expected:
        raise VerificationFailure('Montgomery multiplication', mont.N, c, expected, a, b)
    return c


def check_inverse(mont):
    # both inverse algorithms agree on N' with N*N' = -1 mod R
    k = n_inv_by_hensel(mont.N, mont.r_bit_len)
    if k != mont.n_inv_mod:
        raise VerificationFailure('Montgomery constant', mont.N, mont.n_inv_mod, k)
    return k


def run_trials(trials=TRIALS, min_bitlen=MIN_BITLEN, max_bitlen=MAX_BITLEN, seed=SEED,
               prime_moduli=PRIME_MODULI, cross_check=CROSS_CHECK, out=None):
    '''
        Run the randomized verification.
    :param trials: number of random moduli per bit length
    :param seed: seed of the random draws, None for a fresh one
    :param out: text stream for progress output, default to stdout
    :return: total number of trials run
        raises VerificationFailure on the first mismatch
    '''
    if min_bitlen < 2 or max_bitlen > MAX_R_BIT_LEN or min_bitlen > max_bitlen:
        raise ValueError(f'Bit lengths must satisfy 2 <= min_bitlen <= max_bitlen <= {MAX_R_BIT_LEN}, '
                         f'got [{min_bitlen}, {max_bitlen}]')

    out = out or sys.stdout
    rng = random.Random(seed)

    cnt = 0
    for bitlen in range(min_bitlen, max_bitlen + 1):
        print(f'bitlen={bitlen}', file=out)

        for _ in range(trials):
            n = random_modulus(bitlen, rng, prime_moduli)
            mont = Montgomery(n)
            if cross_check:
                check_inverse(mont)

            a, b = rng.randint(0, n - 1), rng.randint(0, n - 1)
            check_trial(mont, a, b)
            cnt += 1

    return cnt


def main():
    try:
        cnt = run_trials()
    except VerificationFailure as e:
        print(e, file=sys.stderr)
        return 1

    print(f'succeeded! ({cnt} trials)')
    return 0


if __name__ == '__main__':
    sys.exit(main())
