## Common arithmetics
## Leaf routines used to set up a Montgomery domain: bit widths, the inverse of R modulo N and the 2-adic
## Montgomery constant N'.
# references:
# [1] [Montgomery reduction algorithm](https://www.nayuki.io/page/montgomery-reduction-algorithm)
# [2] [Topics in Computational Number Theory Inspired by Peter L. Montgomery](https://www.cambridge.org/core/books/topics-in-computational-number-theory-inspired-by-peter-l-montgomery/4F7A9AE2CE219D490B7D253558CF6F00)
from .utils import profiler

# Convenient lambdas
low_bits = lambda n, k: n & ((1 << k) - 1)  # n mod 2^k

# Constants
MIN_MODULUS = 3
MAX_MODULUS = (1 << 31) - 1  # keeps R*N below 2^62, so every REDC intermediate fits a 64-bit word
MAX_R_BIT_LEN = 31


class InvalidModulus(ValueError):
    def __init__(self, modulus, message):
        self.modulus = modulus
        super().__init__(f'{message} (n={modulus})')


class ModulusTooSmall(InvalidModulus):
    def __init__(self, modulus):
        super().__init__(modulus, f'Modulus must be >= {MIN_MODULUS}.')


class ModulusMustBeOdd(InvalidModulus):
    def __init__(self, modulus):
        super().__init__(modulus, 'Modulus must be odd.')


class ModulusTooLarge(InvalidModulus):
    def __init__(self, modulus):
        super().__init__(modulus, 'Modulus must be less than 2^31.')


class InverseDoesNotExist(ValueError):
    def __init__(self, n, r):
        self.n = n
        self.r = r
        super().__init__(f'Reciprocal does not exist. (n={n}, r={r})')


def bit_length(n: int) -> int:
    ''' Smallest k such that n < 2**k; 0 for n = 0 '''
    if n < 0:
        raise ValueError(f'Bit length is defined for unsigned numbers only, got {n}')
    return n.bit_length()


@profiler(num_runs=100, enabled=False)
def reciprocal_mod(n: int, r: int) -> int:
    '''
        r^{-1} mod n by a simplification of the extended Euclidean algorithm: only the Bezout coefficient that
        belongs to r is carried along, the one of n is never needed.
    :param n: the modulus
    :param r: number to invert, usually the radix R
    :return: r^{-1} in [0, n)
    '''
    x, y = n, r % n
    a, b = 0, 1  # invariant: x = a*r (mod n), y = b*r (mod n)

    while y != 0:
        q = x // y
        a, b = b, a - q * b
        x, y = y, x % y

    if x != 1:
        raise InverseDoesNotExist(n, r)

    # a might be negative here; python's % is floored so the result lands in [0, n)
    return a % n


@profiler(num_runs=100, enabled=False)
def hensel_2adic_root(r: int, q: int) -> int:
    '''
        Hensel's lemma over the 2-adic numbers: the root of f(X) = qX + 1 modulo 2^r.
        Start with a_1 = 1 (f(1) = 0 mod 2 since q is odd), then for k = 2..r the root a_k = a_{k-1} + 2^{k-1}*t
        with the smallest t that makes f(a_k) = 0 mod 2^k. t is either 0 or 1.
        refer: [2] p.18, Alg. 2.3
    :param r: bit width of the target modulus 2^r
    :param q: an odd number
    :return: x in [0, 2^r) such that q*x = -1 mod 2^r
    '''
    if r < 1:
        raise ValueError(f'Bit width must be positive, got {r}')
    if not q & 1:
        raise InverseDoesNotExist(1 << r, q)

    a_prev = 1
    for k in range(2, r + 1):
        c = 1 << (k - 1)
        t = 0
        while low_bits(q * (a_prev + c * t) + 1, k):
            t += 1

        a_prev += c * t

    return a_prev


def n_inv_by_euclid(n: int, r_bit_len: int) -> int:
    ''' N' derived from R^{-1} mod N, i.e. the k in R*R^{-1} - 1 = k*N '''
    R = 1 << r_bit_len
    k, rem = divmod(R * reciprocal_mod(n, R) - 1, n)
    assert rem == 0
    return k


def n_inv_by_hensel(n: int, r_bit_len: int) -> int:
    ''' N' lifted bit by bit, N*N' = -1 mod R '''
    return hensel_2adic_root(r_bit_len, n)


INVERSE_METHODS = {
    'euclid': n_inv_by_euclid,
    'hensel': n_inv_by_hensel,
}
