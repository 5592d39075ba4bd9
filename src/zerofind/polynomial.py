"""
#######################################
Polynomials (:mod:`zerofind.polynomial`)
#######################################

.. currentmodule:: zerofind.polynomial

This module provides univariate polynomials over an arbitrary coefficient type and
their square-free decomposition.

.. autosummary::
    :toctree: generated/

    Polynomial
    gcd
    squarefree

"""

import fractions
import itertools
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Self

from zerofind.number import resolve
from zerofind.typing import Scalar


class Polynomial[T: Scalar]:
    """Univariate polynomial.

    Parameters
    ----------
    coeffs : Iterable[T]
        Coefficients in ascending order of powers, so that ``coeffs[k]`` is the
        coefficient of :math:`x^k`.

    Attributes
    ----------
    coeffs : list[T]
        Coefficients without trailing zeros. The zero polynomial has no
        coefficients.

    Examples
    --------
    >>> p = Polynomial([-2, 0, 1])
    >>> p.degree
    2
    >>> p(3)
    7
    >>> p.deriv()
    Polynomial([0, 2])
    """

    __slots__ = ("coeffs",)
    coeffs: list[T]

    def __init__(self, coeffs: Self | Iterable[T]):
        self.coeffs = list(coeffs)

        while self.coeffs and self.coeffs[-1] == 0:
            self.coeffs.pop()

    @classmethod
    def fromroots(cls, roots: Iterable[T]) -> Self:
        """Return the monic polynomial whose roots are `roots`.

        Examples
        --------
        >>> Polynomial.fromroots([1, 1, 3])
        Polynomial([-3, 7, -5, 1])
        """
        result = cls([1])

        for root in roots:
            result *= cls([-root, 1])

        return result

    @property
    def degree(self) -> int:
        """Degree of the polynomial, which is -1 for the zero polynomial."""
        return len(self.coeffs) - 1

    @property
    def lead(self) -> T:
        """Leading coefficient.

        Raises
        ------
        ValueError
            If the polynomial is zero.
        """
        if not self.coeffs:
            raise ValueError("zero polynomial has no leading coefficient")

        return self.coeffs[-1]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.coeffs!r})"

    def __len__(self) -> int:
        return len(self.coeffs)

    def __iter__(self) -> Iterator[T]:
        return iter(self.coeffs)

    def __getitem__(self, key: int) -> T:
        return self.coeffs[key]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented

        return self.coeffs == other.coeffs

    def __call__(self, x):
        """Evaluate the polynomial at `x` by Horner's rule."""
        if not self.coeffs:
            return x * 0

        result = x * 0 + self.coeffs[-1]

        for c in reversed(self.coeffs[:-1]):
            result = result * x + c

        return result

    def deriv(self) -> Self:
        """Return the derivative."""
        return self.__class__(k * c for k, c in enumerate(self.coeffs) if k != 0)

    def monic(self) -> Self:
        """Return the polynomial divided by its leading coefficient."""
        lead = self.lead
        return self.__class__(c / lead for c in self.coeffs)

    def trim(self, tol: Any = 0) -> Self:
        """Drop leading coefficients whose magnitude is at most `tol` times the largest
        magnitude of the coefficients.
        """
        if not self.coeffs:
            return self.__class__(())

        bound = max(abs(c) for c in self.coeffs) * tol
        coeffs = list(self.coeffs)

        while coeffs and abs(coeffs[-1]) <= bound:
            coeffs.pop()

        return self.__class__(coeffs)

    def cauchy_bound(self) -> Any:
        r"""Return Cauchy's bound of the magnitudes of the roots.

        Every root :math:`z` satisfies :math:`|z| < 1 + \max_k |a_k / a_n|`.

        Raises
        ------
        ValueError
            If the polynomial is constant.
        """
        if self.degree < 1:
            raise ValueError("constant polynomial has no roots")

        lead = self.lead
        return 1 + max(abs(c / lead) for c in self.coeffs[:-1])

    def divide(self, rhs: Self, tol: Any = 0) -> tuple[Self, Self]:
        """Return the quotient and the remainder of division by `rhs`.

        Coefficients of the remainder whose magnitude is at most `tol` times the
        largest magnitude of the coefficients of `self` are regarded as zero.

        Raises
        ------
        ZeroDivisionError
            If `rhs` is zero.
        """
        if not rhs.coeffs:
            raise ZeroDivisionError("polynomial division by zero")

        rem = list(self.coeffs)
        n = rhs.degree
        lead = rhs.lead

        if len(rem) <= n:
            return self.__class__(()), self.__class__(rem)

        quot = [rem[0] * 0] * (len(rem) - n)

        for k in range(len(rem) - n - 1, -1, -1):
            c = rem[k + n] / lead
            quot[k] = c

            for i, d in enumerate(rhs.coeffs):
                rem[k + i] -= c * d

        rem = rem[:n]

        if tol:
            bound = max(abs(c) for c in self.coeffs) * tol
            rem = [c * 0 if abs(c) <= bound else c for c in rem]

        return self.__class__(quot), self.__class__(rem)

    def __add__(self, rhs: Self) -> Self:
        if not isinstance(rhs, Polynomial):
            return self.__add__(self.__class__([rhs]))

        pairs = itertools.zip_longest(self.coeffs, rhs.coeffs, fillvalue=0)
        return self.__class__(x + y for x, y in pairs)

    def __sub__(self, rhs: Self) -> Self:
        if not isinstance(rhs, Polynomial):
            return self.__sub__(self.__class__([rhs]))

        pairs = itertools.zip_longest(self.coeffs, rhs.coeffs, fillvalue=0)
        return self.__class__(x - y for x, y in pairs)

    def __mul__(self, rhs: Self) -> Self:
        if not isinstance(rhs, Polynomial):
            return self.__class__(c * rhs for c in self.coeffs)

        if not self.coeffs or not rhs.coeffs:
            return self.__class__(())

        coeffs: list[Any] = [0] * (len(self.coeffs) + len(rhs.coeffs) - 1)

        for i, x in enumerate(self.coeffs):
            for j, y in enumerate(rhs.coeffs):
                coeffs[i + j] += x * y

        return self.__class__(coeffs)

    def __neg__(self) -> Self:
        return self.__class__(-c for c in self.coeffs)

    def __radd__(self, lhs) -> Self:
        return self.__add__(lhs)

    def __rsub__(self, lhs) -> Self:
        return self.__neg__().__add__(lhs)

    def __rmul__(self, lhs) -> Self:
        return self.__mul__(lhs)

    def __divmod__(self, rhs: Self) -> tuple[Self, Self]:
        return self.divide(rhs)

    def __floordiv__(self, rhs: Self) -> Self:
        return self.divide(rhs)[0]

    def __mod__(self, rhs: Self) -> Self:
        return self.divide(rhs)[1]


def _isexact(coeffs: Sequence) -> bool:
    return all(isinstance(c, int | fractions.Fraction) for c in coeffs)


def _default_tol(p: Polynomial) -> Any:
    if _isexact(p.coeffs):
        return 0

    arith = resolve(*p.coeffs)
    return arith.sqrt(arith.EPSILON)


def gcd[T: Scalar](p: Polynomial[T], q: Polynomial[T], tol: Any = None) -> Polynomial:
    """Return the monic greatest common divisor of two polynomials.

    Parameters
    ----------
    p, q : Polynomial
    tol : optional
        Relative tolerance below which remainder coefficients are regarded as zero.
        The default is 0 if all coefficients are integers or fractions, and the square
        root of machine epsilon otherwise.

    Raises
    ------
    ValueError
        If both polynomials are zero.

    Warnings
    --------
    For inexact coefficients, the degree of the result may be misdetected if the
    roots are close to each other or the degree is high.

    Examples
    --------
    >>> from fractions import Fraction
    >>> p = Polynomial.fromroots([1, 1, 3])
    >>> gcd(p, p.deriv())
    Polynomial([Fraction(-1, 1), Fraction(1, 1)])
    """
    if not p.coeffs and not q.coeffs:
        raise ValueError("gcd of two zero polynomials is undefined")

    if tol is None:
        tol = max(_default_tol(p), _default_tol(q))

    if _isexact(p.coeffs) and _isexact(q.coeffs):
        p = Polynomial(fractions.Fraction(c) for c in p.coeffs)
        q = Polynomial(fractions.Fraction(c) for c in q.coeffs)

    if p.degree < q.degree:
        p, q = q, p

    p = p.monic()

    while q.coeffs and q.trim(tol).coeffs:
        q = q.trim(tol).monic()
        _, r = p.divide(q, tol)
        p, q = q, r

    return p


def squarefree[T: Scalar](
    p: Polynomial[T], tol: Any = None
) -> tuple[Polynomial, Polynomial]:
    """Return the square-free part of `p` and ``gcd(p, p')``.

    The square-free part has the same roots as `p`, each with multiplicity one.

    Raises
    ------
    ValueError
        If `p` is constant.

    Examples
    --------
    >>> q, g = squarefree(Polynomial.fromroots([1, 1, 3]))
    >>> q
    Polynomial([Fraction(3, 1), Fraction(-4, 1), Fraction(1, 1)])
    """
    if p.degree < 1:
        raise ValueError("constant polynomial has no roots")

    if tol is None:
        tol = _default_tol(p)

    if _isexact(p.coeffs):
        p = Polynomial(fractions.Fraction(c) for c in p.coeffs)

    g = gcd(p, p.deriv(), tol)
    q, _ = p.divide(g, tol)
    return q, g
