from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import mpmath
import mpmath.ctx_mp_python

from zerofind.typing import ComparableScalar


class Arithmetic[T: ComparableScalar](ABC):
    """Provides the capabilities that root finders need from a numeric type.

    Attributes
    ----------
    ZERO : T
    ONE : T
    ordered : bool
        ``False`` if values of the type cannot be compared (e.g. complex numbers).

    Notes
    -----
    Classes that inherit from this must define the class constants `ZERO` and `ONE`.
    """

    __slots__ = ()
    ZERO: T
    ONE: T

    @property
    def ordered(self) -> bool:
        return True

    @property
    @abstractmethod
    def EPSILON(self) -> T:
        """Difference between 1 and the next representable value."""
        raise NotImplementedError

    @property
    @abstractmethod
    def precision(self) -> int:
        """Number of significant bits."""
        raise NotImplementedError

    @abstractmethod
    def coerce(self, value: Any) -> T:
        """Convert `value` to a number of the type.

        Raises
        ------
        TypeError
            If `value` cannot be converted.
        """
        raise NotImplementedError

    @abstractmethod
    def isfinite(self, value: T) -> bool:
        """Return ``True`` if `value` is neither infinite nor NaN."""
        raise NotImplementedError

    @abstractmethod
    def middle(self, a: T, b: T) -> T:
        """Return a value lying between `a` and `b`.

        The result lies strictly between `a` and `b` whenever a representable value
        exists there, so ``not a < middle(a, b) < b`` holds if and only if `a` and `b`
        are adjacent.
        """
        raise NotImplementedError

    @abstractmethod
    def sqrt(self, value: T) -> T:
        """Return the square root of the nonnegative tolerance `value`."""
        raise NotImplementedError

    @abstractmethod
    def cbrt(self, value: T) -> T:
        """Return the cube root of the nonnegative tolerance `value`."""
        raise NotImplementedError

    @property
    def bisection_limit(self) -> int:
        """Upper bound of the number of halvings for closing any bracket.

        This is defined as ``64 + 8 * precision`` if not overloaded.
        """
        return 64 + 8 * self.precision


_registry: dict[type, Callable[[], Arithmetic]] = {}


def register(numtype: type, arithmetic: Callable[[], Arithmetic]) -> None:
    """Register the arithmetic used for values of `numtype`.

    Parameters
    ----------
    numtype : type
        Numeric type, e.g. a third-party arbitrary-precision real.
    arithmetic : Callable[[], Arithmetic]
        Factory of :class:`Arithmetic`, typically the class itself.
    """
    if not isinstance(numtype, type):
        raise TypeError

    _registry[numtype] = arithmetic


def resolve(*values: Any) -> Arithmetic:
    """Return the arithmetic shared by `values`.

    If the values are of several types, the widest one wins: mpmath numbers, then
    registered types (:class:`decimal.Decimal` is registered by default), then
    complex, then float.

    Raises
    ------
    TypeError
        If some value is of an unsupported type, or if the types cannot be mixed.

    Examples
    --------
    >>> resolve(1, 2.5).precision
    53
    >>> import mpmath
    >>> type(resolve(1.0, mpmath.mpf(2))).__name__
    'MPArithmetic'
    """
    from zerofind.number.floatarithmetic import ComplexArithmetic, FloatArithmetic
    from zerofind.number.mparithmetic import MPArithmetic

    if not values:
        raise TypeError("at least one value is required")

    is_mp = is_complex = False
    found: Arithmetic | None = None

    for value in values:
        match value:
            case bool():
                raise TypeError("bool is not a numeric type")

            case float() | int():
                pass

            case complex():
                is_complex = True

            case mpmath.ctx_mp_python.mpnumeric():
                is_mp = True
                is_complex |= isinstance(value, mpmath.mpc)

            case _:
                for numtype, factory in _registry.items():
                    if isinstance(value, numtype):
                        tmp = factory()
                        break
                else:
                    msg = f"unsupported numeric type: {type(value).__name__}"
                    raise TypeError(msg)

                if found is not None and type(found) is not type(tmp):
                    raise TypeError("numeric types cannot be mixed")

                found = tmp

    if is_mp:
        if found is not None:
            raise TypeError("numeric types cannot be mixed")

        return MPArithmetic(ordered=not is_complex)

    if found is not None:
        if is_complex and found.ordered:
            raise TypeError("numeric types cannot be mixed")

        return found

    return ComplexArithmetic() if is_complex else FloatArithmetic()
