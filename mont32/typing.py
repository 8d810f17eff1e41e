from abc import ABC, abstractmethod


class MontgomeryDomainType(ABC):

    def __init__(self, modulus):
        self._modulus = modulus

    @property
    def modulus(self):
        return self._modulus

    @abstractmethod
    def __call__(self, value) -> 'MontgomeryElementType':
        """ Converts value into this domain"""
        pass

    @abstractmethod
    def convert_in(self, x: int) -> int:
        pass

    @abstractmethod
    def convert_out(self, x: int) -> int:
        pass

    @abstractmethod
    def multiply(self, a: int, b: int) -> int:
        pass


class MontgomeryElementType(ABC):
    @abstractmethod
    def __add__(self, other: 'MontgomeryElementType') -> 'MontgomeryElementType':
        pass

    @abstractmethod
    def __sub__(self, other: 'MontgomeryElementType') -> 'MontgomeryElementType':
        pass

    @abstractmethod
    def __mul__(self, other: 'MontgomeryElementType') -> 'MontgomeryElementType':
        pass

    @abstractmethod
    def __pow__(self, exponent: int) -> 'MontgomeryElementType':
        pass

    @abstractmethod
    def __int__(self) -> int:
        pass

    @abstractmethod
    def __eq__(self, other: 'MontgomeryElementType') -> bool:
        pass
