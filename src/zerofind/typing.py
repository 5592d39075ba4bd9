"""
###############################
Typing (:mod:`zerofind.typing`)
###############################

This module provides the protocols that number types passed to the solvers satisfy.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

.. autoclass:: ComparableScalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class Scalar(Protocol):
    """Protocol of field elements, like a complex number.

    The four arithmetic operations must be compatible with integers. Dual numbers of
    :mod:`zerofind.autodiff` and coefficients of
    :class:`zerofind.polynomial.Polynomial` satisfy this protocol.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...


class ComparableScalar(Scalar, Protocol):
    """Protocol of ordered :class:`Scalar`, like a real number.

    Brackets and sign changes only make sense for numbers of this kind. Machine
    epsilon is not part of the protocol; it is supplied by
    :class:`zerofind.number.Arithmetic`.
    """

    __slots__ = ()

    @abstractmethod
    def __lt__(self, rhs: Self | int) -> bool: ...

    @abstractmethod
    def __le__(self, rhs: Self | int) -> bool: ...

    @abstractmethod
    def __abs__(self) -> Self: ...
