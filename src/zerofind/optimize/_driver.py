import logging
from collections.abc import Callable, Sequence
from typing import Any

from zerofind.number import Arithmetic, resolve
from zerofind.optimize.convergence import (
    ConvergencePolicy,
    Converged,
    Diverged,
    IterationState,
    NotConverged,
    Tolerance,
    _conclude,
)
from zerofind.optimize.exceptions import (
    AbortSolving,
    PreconditionError,
    SingularityError,
)

logger = logging.getLogger(__name__)


class _Evaluator:
    """Wrap a function so that calls are counted and the last value is cached.

    If `fun` returns a tuple ``(f, f', ...)``, calling the evaluator yields `f`, and
    :meth:`raw` yields the whole tuple.
    """

    __slots__ = ("fun", "count", "_last")
    fun: Callable
    count: int
    _last: tuple[Any, Any] | None

    def __init__(self, fun: Callable):
        if not callable(fun):
            raise TypeError

        self.fun = fun
        self.count = 0
        self._last = None

    def raw(self, x):
        if self._last is not None:
            y, value = self._last

            if y is x or (type(y) is type(x) and y == x):
                return value

        value = self.fun(x)
        self.count += 1
        self._last = (x, value)
        return value

    def __call__(self, x):
        value = self.raw(x)
        return value[0] if isinstance(value, tuple) else value


type _Step = Callable[[_Evaluator, IterationState, Arithmetic], Any]


def _interpolate(xs: Sequence, fs: Sequence) -> Any:
    """Evaluate at zero the polynomial through ``(fs[i], xs[i])``.

    This is inverse interpolation in Newton's divided-difference form. A repeated
    value in `fs` raises :exc:`ZeroDivisionError`.
    """
    n = len(xs)
    coeffs = list(xs)

    for j in range(1, n):
        for i in range(n - 1, j - 1, -1):
            denom = fs[i] - fs[i - j]

            if denom == 0:
                raise ZeroDivisionError

            coeffs[i] = (coeffs[i] - coeffs[i - 1]) / denom

    result = coeffs[-1]

    for i in range(n - 2, -1, -1):
        result = coeffs[i] - result * fs[i]

    return result


def _previous(f: _Evaluator, state: IterationState, arith: Arithmetic):
    # the first step of a two-point method perturbs the initial guess
    if state.iteration != 0 or state.xprev != state.x:
        return state.xprev, state.fxprev

    h = arith.cbrt(arith.EPSILON)
    xprev = state.x + (h + abs(state.x) * h * h)
    return xprev, f(xprev)


def _secant(x, fx, xprev, fxprev):
    if fx == fxprev:
        raise ZeroDivisionError

    return x - fx * (x - xprev) / (fx - fxprev)


def _parse_bracket(bracket: Any) -> tuple[Any, Any]:
    match bracket:
        case (a, b):
            return a, b

        case _:
            raise TypeError("bracket must be a pair of numbers")


def _initial(
    f: _Evaluator, arith: Arithmetic, x0, x1, bracket
) -> IterationState:
    lo = hi = flo = fhi = None
    encloses = False

    if bracket is not None:
        if not arith.ordered:
            raise TypeError("brackets require an ordered numeric type")

        lo, hi = (arith.coerce(x) for x in _parse_bracket(bracket))

        if lo > hi:
            lo, hi = hi, lo

        if not lo < hi:
            raise PreconditionError("bracket must have a nonempty interior")

        if not lo <= x0 <= hi:
            raise PreconditionError("initial guess must lie in the bracket")

        if x1 is not None and not lo <= x1 <= hi:
            raise PreconditionError("second guess must lie in the bracket")

        flo = f(lo)
        fhi = f(hi)

        if flo == 0:
            x0, x1 = lo, None
        elif fhi == 0:
            x0, x1 = hi, None

        encloses = flo != 0 and fhi != 0 and (flo < 0) != (fhi < 0)

    fx0 = f(x0)
    tmp = (lo, hi, flo, fhi) if bracket is not None else None

    if x1 is None:
        return IterationState(x0, fx0, x0, fx0, x0, fx0, 0, f.count, tmp, encloses)

    fx1 = f(x1)
    best, fbest = (x1, fx1) if abs(fx1) <= abs(fx0) else (x0, fx0)
    return IterationState(x1, fx1, x0, fx0, best, fbest, 0, f.count, tmp, encloses)


def _midpoint(a, b):
    """Return the arithmetic midpoint of `a` and `b` without overflowing."""
    return a / 2 + b / 2


def _constrain(state: IterationState, x1):
    lo, hi, _, _ = state.bracket  # type: ignore

    if state.encloses:
        return x1 if lo < x1 < hi else _midpoint(lo, hi)

    if lo <= x1 <= hi:
        return x1

    if x1 < lo:
        return _midpoint(lo, state.x)

    if x1 > hi:
        return _midpoint(state.x, hi)

    # NaN
    return _midpoint(lo, hi)


def _propose(step: _Step, f: _Evaluator, state: IterationState, arith: Arithmetic):
    """Return the next iterate, kept inside the bracket if there is one.

    A step that cannot be formed falls back to bisection while the bracket encloses
    a sign change.
    """
    try:
        x1 = step(f, state, arith)
    except ZeroDivisionError:
        if not state.encloses:
            raise

        lo, hi, _, _ = state.bracket  # type: ignore
        logger.debug("step failed, bisecting [%r, %r]", lo, hi)
        return _midpoint(lo, hi)

    if state.bracket is not None:
        x1 = _constrain(state, x1)

    return x1



def _advance(
    arith: Arithmetic,
    state: IterationState,
    x1,
    fx1,
    evaluations: int,
    discover: bool,
) -> IterationState:
    bracket = state.bracket
    encloses = state.encloses

    if bracket is not None and encloses and fx1 != 0:
        lo, hi, flo, fhi = bracket

        if (fx1 < 0) == (flo < 0):
            bracket = (x1, hi, fx1, fhi)
        else:
            bracket = (lo, x1, flo, fx1)

    elif bracket is None and discover:
        x, fx = state.x, state.fx

        if fx != 0 and fx1 != 0 and (fx < 0) != (fx1 < 0):
            bracket = (x, x1, fx, fx1) if x < x1 else (x1, x, fx1, fx)
            encloses = True

    best, fbest = state.best, state.fbest

    if abs(fx1) < abs(fbest) or not arith.isfinite(fbest):
        best, fbest = x1, fx1

    return IterationState(
        x1,
        fx1,
        state.x,
        state.fx,
        best,
        fbest,
        state.iteration + 1,
        evaluations,
        bracket,
        encloses,
    )


def _iterate(
    fun: Callable,
    x0: Any,
    step: _Step,
    *,
    method: str,
    x1: Any = None,
    bracket: Any = None,
    discover: bool = False,
    callback: Callable[[IterationState], None] | None = None,
    full_output: bool = False,
    **options: Any,
) -> Any:
    values = (x0,) if x1 is None else (x0, x1)

    if bracket is not None:
        values += _parse_bracket(bracket)

    arith = resolve(*values)
    policy = ConvergencePolicy(arith, Tolerance.default(arith, **options))
    f = _Evaluator(fun)
    x0 = arith.coerce(x0)

    if x1 is not None:
        x1 = arith.coerce(x1)

    state = _initial(f, arith, x0, x1, bracket)
    discover = discover and arith.ordered

    while (verdict := policy.assess(state)) is None:
        logger.debug(
            "%s: iteration %d, x=%r, f(x)=%r",
            method,
            state.iteration,
            state.x,
            state.fx,
        )

        if callback is not None:
            try:
                callback(state)
            except AbortSolving as exc:
                verdict = NotConverged(state.best, exc.message)
                break

        try:
            x1 = _propose(step, f, state, arith)
            fx1 = f(x1)
        except SingularityError as exc:
            verdict = policy.stalled(state, str(exc))

            if not isinstance(verdict, Converged):
                raise

            break
        except ZeroDivisionError:
            verdict = policy.stalled(state, "divided difference vanished")
            break
        except OverflowError:
            verdict = Diverged(state.best, "overflow")
            break

        state = _advance(arith, state, x1, fx1, f.count, discover)

    logger.debug("%s: %r after %d iterations", method, verdict, state.iteration)
    return _conclude(verdict, state, method, full_output)
