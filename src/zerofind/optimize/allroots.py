import logging
from collections.abc import Callable, Iterable
from typing import Any

from zerofind.number import resolve
from zerofind.optimize._driver import _Evaluator
from zerofind.optimize.bracketing import bisection
from zerofind.optimize.exceptions import PreconditionError
from zerofind.polynomial import Polynomial, _isexact, squarefree

logger = logging.getLogger(__name__)


def find_roots_naive[T](
    fun: Callable[[T], Any], a: T, b: T, *, intervals: int = 100
) -> list[T]:
    """Find roots of the function by scanning the interval for sign changes.

    The interval is divided into `intervals` subintervals of equal width. Grid nodes
    at which `fun` vanishes are reported directly, and :func:`bisection` is applied
    to every subinterval whose endpoints have opposite signs.

    Parameters
    ----------
    fun : Callable
        Function to find roots of.
    a, b
        Endpoints of the interval.
    intervals : int, default=100
        Number of subintervals.

    Returns
    -------
    list[T]
        Roots in ascending order.

    Raises
    ------
    PreconditionError
        If the interval is empty.

    Warnings
    --------
    Two roots in one subinterval cancel each other and are missed, as are roots at
    which `fun` touches zero without crossing it. Conversely, a pole at which `fun`
    changes sign is reported as if it were a root.

    Examples
    --------
    >>> import math
    >>> [round(x, 12) for x in find_roots_naive(math.sin, -4, 4)]
    [-3.14159265359, 0.0, 3.14159265359]
    """
    if isinstance(intervals, bool) or not isinstance(intervals, int):
        raise TypeError

    if intervals <= 0:
        raise ValueError("intervals must be positive")

    arith = resolve(a, b)

    if not arith.ordered:
        raise TypeError("scanning requires an ordered numeric type")

    a = arith.coerce(a)
    b = arith.coerce(b)

    if a > b:
        a, b = b, a

    if not a < b:
        raise PreconditionError("interval must have a nonempty interior")

    f = _Evaluator(fun)
    nodes = [a + (b - a) * k / intervals for k in range(intervals)] + [b]
    values = [f(x) for x in nodes]
    result = [x for x, y in zip(nodes, values) if y == 0]

    for k in range(intervals):
        fl, fr = values[k], values[k + 1]

        if fl == 0 or fr == 0 or fl != fl or fr != fr:
            continue

        if (fl < 0) != (fr < 0):
            result.append(bisection(fun, nodes[k], nodes[k + 1]))

    logger.debug("found %d roots in [%r, %r]", len(result), a, b)
    return sorted(result)


def find_roots_polynomial(
    p: Polynomial | Iterable, *, intervals: int | None = None, tol: Any = None
) -> list:
    """Find the distinct real roots of the polynomial.

    The polynomial is first reduced to its square-free part ``p / gcd(p, p')``, which
    has the same roots, each with multiplicity one. The real roots of the square-free
    part are then isolated on ``[-B, B]`` by :func:`find_roots_naive`, where `B` is
    Cauchy's bound.

    Parameters
    ----------
    p : Polynomial | Iterable
        Polynomial, or its coefficients in ascending order of powers.
    intervals : int, optional
        Number of subintervals of the scan (the default is ``max(100, 20 * n)``,
        where `n` is the degree of the square-free part).
    tol : optional
        Tolerance of the square-free decomposition (see
        :func:`zerofind.polynomial.gcd`).

    Returns
    -------
    list
        Distinct real roots in ascending order.

    Raises
    ------
    PreconditionError
        If the degree of `p` is less than one.

    Warnings
    --------
    For inexact coefficients, roots that are close to each other may be merged by
    the square-free decomposition. Integer and :class:`fractions.Fraction`
    coefficients are decomposed exactly.

    See Also
    --------
    zerofind.polynomial.squarefree, find_roots_with_multiplicity

    Examples
    --------
    >>> find_roots_polynomial([-3, 7, -5, 1])
    [1.0, 3.0]
    """
    if not isinstance(p, Polynomial):
        p = Polynomial(p)

    if p.degree < 1:
        raise PreconditionError("polynomial must have degree at least one")

    q, _ = squarefree(p, tol)

    if _isexact(q.coeffs):
        q = Polynomial(float(c) for c in q.coeffs)

    if not resolve(*q.coeffs).ordered:
        raise TypeError("coefficients must be real")

    bound = q.cauchy_bound()

    if intervals is None:
        intervals = max(100, 20 * q.degree)

    logger.debug("square-free part of degree %d, bound %r", q.degree, bound)
    return find_roots_naive(q, -bound, bound, intervals=intervals)
