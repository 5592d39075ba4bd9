import dataclasses
from collections.abc import Callable
from typing import Any

from zerofind.optimize.allroots import find_roots_naive, find_roots_polynomial
from zerofind.optimize.bracketing import find_root_bracketed
from zerofind.optimize.classical import halley, newton, secant
from zerofind.optimize.derivativefree import find_root_free
from zerofind.polynomial import Polynomial


@dataclasses.dataclass(frozen=True, slots=True)
class Bracket[T]:
    """Problem posed by an interval whose endpoints have opposite signs.

    Attributes
    ----------
    a, b : T
    """

    a: T
    b: T


@dataclasses.dataclass(frozen=True, slots=True)
class Guess[T]:
    """Problem posed by a single initial guess.

    Attributes
    ----------
    x0 : T
    """

    x0: T


@dataclasses.dataclass(frozen=True, slots=True)
class GuessInBracket[T]:
    """Problem posed by an initial guess confined to an interval.

    Attributes
    ----------
    x0 : T
    a, b : T
    """

    x0: T
    a: T
    b: T


type Problem[T] = Bracket[T] | Guess[T] | GuessInBracket[T]


def _asproblem(problem: Any) -> Problem:
    match problem:
        case Bracket() | Guess() | GuessInBracket():
            return problem

        case (x0, (a, b)):
            return GuessInBracket(x0, a, b)

        case (a, b):
            return Bracket(a, b)

        case str():
            raise TypeError

        case _:
            return Guess(problem)


_CLASSICAL = {"newton": newton, "halley": halley, "secant": secant}


def find_zero(
    fun: Callable, problem: Any, method: str | int | None = None, **options: Any
) -> Any:
    """Find a root of the function with the method matching the shape of the problem.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    problem : Bracket | Guess | GuessInBracket
        Problem. A pair ``(a, b)`` is read as :class:`Bracket`, a pair ``(x0, (a,
        b))`` as :class:`GuessInBracket`, and anything else as :class:`Guess`.
    method : str | int, optional
        For :class:`Bracket`, ``"bisection"`` (default) or ``"falseposition"``. For
        the other problems, an order accepted by :func:`find_root_free` (the default
        is 0), or one of ``"newton"``, ``"halley"`` and ``"secant"``.
    **options
        Keyword arguments passed to the solver.

    Returns
    -------
    Any
        Output of the solver.

    Examples
    --------
    >>> import math
    >>> f = lambda x: math.exp(x) - x**4
    >>> print(format(find_zero(f, Bracket(8, 9)), ".12f"))
    8.613169456441
    >>> print(format(find_zero(f, (8, 9), "falseposition"), ".12f"))
    8.613169456441
    >>> print(format(find_zero(f, Guess(3)), ".12f"))
    1.429611824726
    """
    match _asproblem(problem):
        case Bracket(a, b):
            if method is None:
                method = "bisection"

            return find_root_bracketed(fun, a, b, method=method, **options)

        case Guess(x0):
            bracket = None

        case GuessInBracket(x0, a, b):
            bracket = (a, b)

    if isinstance(method, str):
        if method not in _CLASSICAL:
            raise ValueError(f"unknown method: {method!r}")

        return _CLASSICAL[method](fun, x0, bracket=bracket, **options)

    order = 0 if method is None else method
    return find_root_free(fun, x0, order, bracket=bracket, **options)  # type: ignore


def find_zeros(
    fun: Callable | Polynomial, a: Any = None, b: Any = None, **options: Any
) -> list:
    """Find all roots of the function in the interval, or the real roots of the
    polynomial.

    Parameters
    ----------
    fun : Callable | Polynomial
        Function or polynomial.
    a, b : optional
        Endpoints of the interval. These can be omitted only for polynomials.
    **options
        Keyword arguments passed to :func:`find_roots_naive` or
        :func:`find_roots_polynomial`.

    Returns
    -------
    list
        Roots in ascending order.

    Examples
    --------
    >>> from zerofind.polynomial import Polynomial
    >>> find_zeros(Polynomial.fromroots([1, 1, 3]))
    [1.0, 3.0]
    """
    if a is None and b is None:
        if not isinstance(fun, Polynomial):
            raise TypeError("an interval is required unless fun is a polynomial")

        return find_roots_polynomial(fun, **options)

    if a is None or b is None:
        raise TypeError("both endpoints are required")

    return find_roots_naive(fun, a, b, **options)
