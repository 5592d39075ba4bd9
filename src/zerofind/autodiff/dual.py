from collections.abc import Iterable
from typing import Literal, Self

from zerofind.typing import Scalar


class Dual[T: Scalar](Scalar):
    r"""Dual number for an arbitrary coefficient type.

    Parameters
    ----------
    real : T
    imag : Iterable[T]

    Attributes
    ----------
    real : T
    imag : list[T]

    Warnings
    --------
    All the elements of `imag` must be of the same type as `real`.

    Notes
    -----
    Instances of this class behave like elements of the dual number ring

    .. math::

        T[x_1,x_2,\dotsc,x_n]/(x_ix_j\mid i,j\in\{1,2,\dotsc,n\}),

    where :math:`n` is the length of `imag`. A dual number whose coefficients are
    themselves dual numbers has a higher :attr:`priority`; nesting them yields
    higher-order derivatives.

    Examples
    --------
    >>> (x,) = Dual.variable(3.0)
    >>> y = x**2 + 2 * x
    >>> y.real, y.imag
    (15.0, [8.0])
    """

    __slots__ = ("real", "imag", "_priority")
    real: T
    imag: list[T]
    _priority: int

    def __init__(self, real: T, imag: Iterable[T]):
        self.real = real
        self.imag = list(imag)
        self._priority = (real._priority + 1) if isinstance(real, Dual) else 0

        if len(self.imag) == 0:
            raise ValueError

    @classmethod
    def constant(cls, value: T, n: int) -> Self:
        ZERO = value * 0
        return cls(value, (ZERO,) * n)

    @classmethod
    def variable(cls, *args: T) -> tuple[Self, ...]:
        result: list[Self] = []
        ZERO = args[0] * 0
        ONE = ZERO + 1

        for argnum, arg in enumerate(args):
            imag = (ONE if i == argnum else ZERO for i in range(len(args)))
            result.append(cls(arg, imag))

        return tuple(result)

    @property
    def priority(self) -> int:
        return self._priority

    def _compare(self, other: object) -> Literal[-1, 0, 1]:
        # 1 if `other` acts as a coefficient of `self`, -1 if the converse holds
        if not isinstance(other, Dual) or other._priority < self._priority:
            return 1

        return -1 if other._priority > self._priority else 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(real={self.real!r}, imag={self.imag!r})"

    def __str__(self) -> str:
        imag = (", ").join(str(x) for x in self.imag)
        return f"{type(self).__name__}(real={self.real}, imag=[{imag}])"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.real == self.real and other.imag == self.imag  # type: ignore

    def __add__(self, rhs) -> Self:
        match self._compare(rhs):
            case 1:
                return self.__class__(self.real + rhs, self.imag)

            case -1:
                return NotImplemented

        imag = (x + y for x, y in zip(self.imag, rhs.imag))
        return self.__class__(self.real + rhs.real, imag)

    def __sub__(self, rhs) -> Self:
        match self._compare(rhs):
            case 1:
                return self.__class__(self.real - rhs, self.imag)

            case -1:
                return NotImplemented

        imag = (x - y for x, y in zip(self.imag, rhs.imag))
        return self.__class__(self.real - rhs.real, imag)

    def __mul__(self, rhs) -> Self:
        match self._compare(rhs):
            case 1:
                return self.__class__(self.real * rhs, (x * rhs for x in self.imag))

            case -1:
                return NotImplemented

        imag = (self.real * y + x * rhs.real for x, y in zip(self.imag, rhs.imag))
        return self.__class__(self.real * rhs.real, imag)

    def __truediv__(self, rhs) -> Self:
        match self._compare(rhs):
            case 1:
                return self.__class__(self.real / rhs, (x / rhs for x in self.imag))

            case -1:
                return NotImplemented

        s = rhs.real**2
        imag = ((x * rhs.real - self.real * y) / s for x, y in zip(self.imag, rhs.imag))
        return self.__class__(self.real / rhs.real, imag)

    def __pow__(self, rhs: int) -> Self:
        if isinstance(rhs, Dual):
            return NotImplemented

        if rhs == 0:
            return self.__class__(self.real**0, (x * 0 for x in self.imag))

        tmp = rhs * self.real ** (rhs - 1)
        return self.__class__(self.real**rhs, (tmp * x for x in self.imag))

    def __neg__(self) -> Self:
        return self.__class__(-self.real, (-x for x in self.imag))

    def __pos__(self) -> Self:
        return self.__class__(+self.real, (+x for x in self.imag))

    def __radd__(self, lhs) -> Self:
        if self._compare(lhs) != 1:
            return NotImplemented

        return self.__class__(lhs + self.real, self.imag)

    def __rsub__(self, lhs) -> Self:
        if self._compare(lhs) != 1:
            return NotImplemented

        return self.__class__(lhs - self.real, (-x for x in self.imag))

    def __rmul__(self, lhs) -> Self:
        if self._compare(lhs) != 1:
            return NotImplemented

        return self.__class__(lhs * self.real, (lhs * x for x in self.imag))

    def __rtruediv__(self, lhs) -> Self:
        if self._compare(lhs) != 1:
            return NotImplemented

        s = self.real**2
        imag = (-lhs * x / s for x in self.imag)
        return self.__class__(lhs / self.real, imag)
