import logging
from collections.abc import Callable
from typing import Any, Literal

from zerofind.number import Arithmetic, resolve
from zerofind.optimize._driver import _Evaluator
from zerofind.optimize.convergence import (
    ConvergencePolicy,
    Diverged,
    IterationState,
    NotConverged,
    Tolerance,
    _conclude,
)
from zerofind.optimize.exceptions import AbortSolving, PreconditionError

logger = logging.getLogger(__name__)


def _state(a, b, fa, fb, iteration: int, evaluations: int) -> IterationState:
    if abs(fa) <= abs(fb):
        x, fx, xprev, fxprev = a, fa, b, fb
    else:
        x, fx, xprev, fxprev = b, fb, a, fa

    bracket = (a, b, fa, fb)
    return IterationState(
        x, fx, xprev, fxprev, x, fx, iteration, evaluations, bracket, True
    )


def _prepare(
    fun: Callable, a, b
) -> tuple[Arithmetic, _Evaluator, Any, Any, Any, Any]:
    arith = resolve(a, b)

    if not arith.ordered:
        raise TypeError("bracketing requires an ordered numeric type")

    a = arith.coerce(a)
    b = arith.coerce(b)

    if a > b:
        a, b = b, a

    if not a < b:
        raise PreconditionError("bracket must have a nonempty interior")

    if not (arith.isfinite(a) and arith.isfinite(b)):
        raise PreconditionError("endpoints of the bracket must be finite")

    f = _Evaluator(fun)
    fa = f(a)
    fb = f(b)

    if fa != fa or fb != fb:
        raise PreconditionError("function value at an endpoint is NaN")

    if fa != 0 and fb != 0 and (fa < 0) == (fb < 0):
        msg = f"f(a) and f(b) must have opposite signs (f({a})={fa}, f({b})={fb})"
        raise PreconditionError(msg)

    return arith, f, a, b, fa, fb


def bisection[T](
    fun: Callable[[T], Any],
    a: T,
    b: T,
    *,
    xatol: Any = None,
    maxiters: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function by bisection.

    The bracket is halved until its endpoints are adjacent representable values or an
    exact zero is found. For floats, halving acts on bit patterns, so that any
    bracket closes in at most 64 steps.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It need not be continuous.
    a, b
        Endpoints of the bracket. ``f(a)`` and ``f(b)`` must have opposite signs, or
        one of them must be zero.
    xatol : optional
        If given, the iteration also stops once the width of the bracket is at most
        `xatol`.
    maxiters : int, optional
        Safety cap on the number of iterations (the default is derived from the
        precision of the numeric type).
    callback : Callable[[IterationState], None], optional
        Function called once per iteration. The solver can be aborted by raising
        :class:`AbortSolving`.
    full_output : bool, default=False
        If ``True``, return :class:`RootResult` instead of the root.

    Returns
    -------
    T | RootResult

    Raises
    ------
    PreconditionError
        If the bracket is empty, or ``f(a)`` and ``f(b)`` have the same sign.
    NonConvergenceError
        If the solver is aborted or `maxiters` is exhausted.

    Examples
    --------
    >>> import math
    >>> r = bisection(lambda x: math.exp(x) - x**4, 8, 9)
    >>> print(format(r, ".12f"))
    8.613169456441

    Even at a jump discontinuity, the result is a point at which the sign changes.

    >>> step = lambda x: -1.0 if x < 0.5 else 1.0
    >>> r = bisection(step, 0, 1)
    >>> step(r) != step(math.nextafter(r, 1))
    True
    """
    arith, f, a, b, fa, fb = _prepare(fun, a, b)
    limit = maxiters if maxiters is not None else arith.bisection_limit
    policy = ConvergencePolicy(arith, Tolerance.default(arith, maxiters=limit))
    iteration = 0

    while (
        verdict := policy.assess_bracket(a, b, fa, fb, iteration, xatol)
    ) is None:
        logger.debug("bisection: iteration %d, bracket=[%r, %r]", iteration, a, b)

        if callback is not None:
            try:
                callback(_state(a, b, fa, fb, iteration, f.count))
            except AbortSolving as exc:
                verdict = NotConverged(a if abs(fa) <= abs(fb) else b, exc.message)
                break

        m = arith.middle(a, b)
        fm = f(m)

        if fm != fm:
            verdict = Diverged(a if abs(fa) <= abs(fb) else b, "f(x) is NaN")
            break

        if (fm < 0) == (fa < 0):
            a, fa = m, fm
        else:
            b, fb = m, fm

        iteration += 1

    logger.debug("bisection: %r after %d iterations", verdict, iteration)
    state = _state(a, b, fa, fb, iteration, f.count)
    return _conclude(verdict, state, "bisection", full_output)


def falseposition[T](
    fun: Callable[[T], Any],
    a: T,
    b: T,
    *,
    xatol: Any = None,
    maxiters: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function by the Illinois variant of false position.

    Whenever the same endpoint is kept twice in a row, its function value is halved
    before interpolating. If three steps fail to halve the bracket, a bisection step
    is taken. The stopping conditions are those of :func:`bisection`.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    a, b
        Endpoints of the bracket.
    xatol : optional
    maxiters : int, optional
    callback : Callable[[IterationState], None], optional
    full_output : bool, default=False

    Returns
    -------
    T | RootResult

    See Also
    --------
    bisection

    Examples
    --------
    >>> r = falseposition(lambda x: x**2 - 2, 0, 2, full_output=True)
    >>> print(format(r.root, ".15f"))
    1.414213562373095
    >>> r.iterations < 64
    True
    """
    arith, f, a, b, fa, fb = _prepare(fun, a, b)
    limit = maxiters if maxiters is not None else 3 * arith.bisection_limit
    policy = ConvergencePolicy(arith, Tolerance.default(arith, maxiters=limit))
    iteration = 0
    ga, gb = fa, fb
    side: Literal[-1, 0, 1] = 0
    width = b - a

    while (
        verdict := policy.assess_bracket(a, b, fa, fb, iteration, xatol)
    ) is None:
        logger.debug(
            "falseposition: iteration %d, bracket=[%r, %r]", iteration, a, b
        )

        if callback is not None:
            try:
                callback(_state(a, b, fa, fb, iteration, f.count))
            except AbortSolving as exc:
                verdict = NotConverged(a if abs(fa) <= abs(fb) else b, exc.message)
                break

        if iteration % 3 == 0:
            stalled = iteration != 0 and b - a > width / 2
            width = b - a
        else:
            stalled = False

        c = b - gb * (b - a) / (gb - ga)

        if stalled or not a < c < b:
            c = arith.middle(a, b)
            side = 0

        fc = f(c)

        if fc != fc:
            verdict = Diverged(a if abs(fa) <= abs(fb) else b, "f(x) is NaN")
            break

        if (fc < 0) == (fa < 0) and fc != 0:
            a, fa, ga = c, fc, fc

            if side == -1:
                gb /= 2

            side = -1
        else:
            b, fb, gb = c, fc, fc

            if side == 1:
                ga /= 2

            side = 1

        iteration += 1

    logger.debug("falseposition: %r after %d iterations", verdict, iteration)
    state = _state(a, b, fa, fb, iteration, f.count)
    return _conclude(verdict, state, "falseposition", full_output)


def find_root_bracketed[T](
    fun: Callable[[T], Any],
    a: Any,
    b: Any = None,
    *,
    method: Literal["bisection", "falseposition"] = "bisection",
    xatol: Any = None,
    maxiters: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function in the bracket.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    a
        Left endpoint of the bracket, or a pair of endpoints if `b` is omitted.
    b : optional
        Right endpoint of the bracket.
    method : Literal["bisection", "falseposition"], default="bisection"
    xatol : optional
    maxiters : int, optional
    callback : Callable[[IterationState], None], optional
    full_output : bool, default=False

    Returns
    -------
    T | RootResult

    Raises
    ------
    PreconditionError
        If the bracket is empty, or the signs at the endpoints are not opposite.

    See Also
    --------
    bisection, falseposition

    Examples
    --------
    >>> import math
    >>> r = find_root_bracketed(lambda x: math.exp(x) - x**4, [8, 9])
    >>> print(format(r, ".12f"))
    8.613169456441
    """
    if b is None:
        match a:
            case (a, b):
                pass

            case _:
                raise TypeError("bracket must be a pair of numbers")

    match method:
        case "bisection":
            solver = bisection

        case "falseposition":
            solver = falseposition

        case _:
            raise ValueError(f"unknown method: {method!r}")

    return solver(
        fun,
        a,
        b,
        xatol=xatol,
        maxiters=maxiters,
        callback=callback,
        full_output=full_output,
    )
