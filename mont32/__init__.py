from .common import (InvalidModulus, ModulusTooSmall, ModulusMustBeOdd, ModulusTooLarge, InverseDoesNotExist,
                     bit_length, reciprocal_mod, hensel_2adic_root, n_inv_by_euclid, n_inv_by_hensel, INVERSE_METHODS)
from .montgomery import Montgomery, MontgomeryNumber

__version__ = '0.1.0'
