## Montgomery domain over Z_N for an odd modulus 3 <= N < 2^31, with the radix R = 2^n the smallest power of 2 greater
# than N. In the domain x is represented by x*R % N; multiplication becomes a_mul_b := REDC(a*b), where REDC only needs
# masks, one shift and a conditional subtraction.
# Every intermediate value is bounded by 2*R*N < 2^63, i.e. the arithmetic maps 1:1 onto 64-bit words.
# references:
# [1] [Montgomery reduction algorithm](https://www.nayuki.io/page/montgomery-reduction-algorithm)
# [2] [Topics in Computational Number Theory Inspired by Peter L. Montgomery](https://www.cambridge.org/core/books/topics-in-computational-number-theory-inspired-by-peter-l-montgomery/4F7A9AE2CE219D490B7D253558CF6F00)
from .common import (MIN_MODULUS, MAX_MODULUS, MAX_R_BIT_LEN, ModulusTooSmall, ModulusMustBeOdd, ModulusTooLarge,
                     bit_length, reciprocal_mod)
from .typing import MontgomeryDomainType, MontgomeryElementType


class Montgomery(MontgomeryDomainType):
    def __init__(self, mod: int):
        if not isinstance(mod, int):
            raise TypeError(f'Modulus must be an integer, got {type(mod).__name__}')

        # range first, so that 2^31 is reported as too large rather than even
        if mod < MIN_MODULUS:
            raise ModulusTooSmall(mod)
        if mod > MAX_MODULUS:
            raise ModulusTooLarge(mod)
        if not mod & 1:
            raise ModulusMustBeOdd(mod)

        super().__init__(mod)
        self.__pre_calc()

    @classmethod
    def factory(cls, mod: int) -> 'Montgomery':
        return cls(mod)

    @property
    def N(self):
        return self.modulus

    @property
    def R(self):
        return 1 << self.__n

    @property
    def r_bit_len(self):
        # R = 2**r_bit_len
        return self.__n

    @property
    def r_mask(self):
        # (&r_mask) substitutes for (%R) operation
        return self.__RMASK

    @property
    def r_inv_mod(self):
        # R^{-1} % N
        return self.__R_inv

    @property
    def n_inv_mod(self):
        # N' for RR'-NN'=1
        return self.__N_

    @property
    def r2_mod_n(self):
        return self.__R2

    @property
    def one(self):
        # identity of the domain, R % N
        return self.__ONE

    def __pre_calc(self):
        self.__n = bit_length(self.N)
        assert self.__n <= MAX_R_BIT_LEN

        self.__RMASK = self.R - 1
        self.__R_inv = reciprocal_mod(self.N, self.R)

        # exact: R*R^{-1} - 1 is a multiple of N by definition of R^{-1}
        self.__N_ = (self.R * self.__R_inv - 1) // self.N

        self.__R2 = self.__pre_calc_R2()  # R^2 % N
        self.__ONE = self.R % self.N

    def __pre_calc_R2(self):
        # Use n rounds of modulo addition to get R^2 % N, where R = 2^n
        # refer: [2] p.19
        ci = self.R % self.N  # c0 = R
        for _ in range(self.__n):
            ci = ci + ci
            if ci >= self.N:
                ci -= self.N

        return ci

    def __call__(self, v: int) -> 'MontgomeryNumber':
        return MontgomeryNumber(self.convert_in(v), self)

    def REDC(self, u: int) -> int:
        '''
            Montgomery reduction (REDC) of number u
            ref: https://en.wikipedia.org/wiki/Montgomery_modular_multiplication
        :param u: 0 <= u < R*N
        :return: u * R^{-1} mod N
        '''
        if u < 0 or u > self.R * self.N - 1:
            raise ValueError('Given number is out of montgomery reduction range')

        s = (u & self.__RMASK) * self.__N_ & self.__RMASK
        t = u + s * self.N  # t = 0 mod R
        return self.correction(t >> self.__n)

    def correction(self, r: int) -> int:
        if r >= 2 * self.N:
            raise ValueError(f'Only number is ready for Montgomery correction step is allowed, check input')

        return r if r < self.N else r - self.N

    def convert_in(self, x: int) -> int:
        ''' x -> x*R % N, via REDC(x * R^2) so that no division is involved '''
        if x < 0:
            raise ValueError(f'Only unsigned numbers can enter the Montgomery domain, got {x}')
        if x >= self.N:
            x %= self.N

        return self.REDC(x * self.__R2)

    def convert_out(self, x: int) -> int:
        ''' x*R % N -> x '''
        return self.REDC(x)

    def multiply(self, a: int, b: int) -> int:
        return self.REDC(a * b)

    def __repr__(self):
        return f'Montgomery(N={self.N}, R=2^{self.__n})'


class MontgomeryNumber(MontgomeryElementType):
    def __init__(self, value: int, mont: Montgomery):
        self.mont = mont
        self.value = value if 0 <= value < mont.N else value % mont.N

    def __same_domain(self, other):
        if not isinstance(other, MontgomeryNumber):
            # !! Decision choice !!
            # a plain int can't tell whether it is already in Montgomery repr., so it never mixes with one
            return False

        if other.mont is not self.mont and other.mont.N != self.mont.N:
            raise ValueError(f'Cannot mix numbers of different Montgomery domains: '
                             f'mod {self.mont.N} and mod {other.mont.N}')
        return True

    def __mul__(self, other):
        if not self.__same_domain(other):
            return NotImplemented
        return MontgomeryNumber(self.mont.multiply(self.value, other.value), self.mont)

    def __add__(self, other):
        if not self.__same_domain(other):
            return NotImplemented

        t = self.value + other.value
        # eliminate expensive modulo expression
        if t >= self.mont.N:
            t -= self.mont.N
        return MontgomeryNumber(t, self.mont)

    def __sub__(self, other):
        if not self.__same_domain(other):
            return NotImplemented

        t = self.value - other.value
        if t < 0:
            t += self.mont.N
        return MontgomeryNumber(t, self.mont)

    def __pow__(self, exponent: int):
        '''left-to-right square-and-multiply'''
        if not isinstance(exponent, int):
            return NotImplemented
        if exponent < 0:
            raise ValueError('Negative exponents are not supported, N is not necessarily a prime')

        r = self.mont.one
        for i in reversed(range(exponent.bit_length())):
            r = self.mont.multiply(r, r)
            if (exponent >> i) & 1:
                r = self.mont.multiply(r, self.value)

        return MontgomeryNumber(r, self.mont)

    def __eq__(self, other):
        if not isinstance(other, MontgomeryNumber):
            return NotImplemented
        return self.value == other.value and self.mont.N == other.mont.N

    def __hash__(self):
        return hash((self.value, self.mont.N))

    def __repr__(self):
        return f"{self.value} (mod {self.mont.N})"

    def __int__(self):
        # Convert Montgomery representation back to integer, using int(a)
        return self.mont.convert_out(self.value)
