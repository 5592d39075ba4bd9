from collections.abc import Callable
from typing import Any

from zerofind.autodiff import derivs
from zerofind.number import Arithmetic
from zerofind.optimize._driver import _Evaluator, _iterate, _previous, _Step
from zerofind.optimize.convergence import IterationState
from zerofind.optimize.exceptions import SingularityError


def _value(fun: Callable) -> Callable:
    def result(x):
        value = fun(x)
        return value[0] if isinstance(value, tuple) else value

    return result


class _Derivatives:
    """Supply ``(f(x), f'(x), ...)`` up to the given order.

    Derivatives are taken, in order of preference, from the tuple returned by `fun`,
    from the explicit functions, and from automatic differentiation.
    """

    __slots__ = ("order", "explicit", "_auto")
    order: int
    explicit: tuple[Callable | None, ...]
    _auto: Callable

    def __init__(self, fun: Callable, order: int, *explicit: Callable | None):
        self.order = order
        self.explicit = explicit
        self._auto = derivs(_value(fun), order)

    def __call__(self, f: _Evaluator, x) -> list:
        raw = f.raw(x)
        result = list(raw[: self.order + 1]) if isinstance(raw, tuple) else [raw]
        auto = None

        for k in range(len(result), self.order + 1):
            if (fun := self.explicit[k - 1]) is not None:
                result.append(fun(x))
                continue

            if auto is None:
                auto = self._auto(x)

            result.append(auto[k])

        return result


def _newton(derivatives: _Derivatives) -> _Step:
    def step(f: _Evaluator, state: IterationState, arith: Arithmetic):
        _, d1 = derivatives(f, state.x)

        if d1 == 0:
            raise SingularityError("derivative vanished", state.x, state.iteration)

        return state.x - state.fx / d1

    return step


def _halley(derivatives: _Derivatives) -> _Step:
    def step(f: _Evaluator, state: IterationState, arith: Arithmetic):
        _, d1, d2 = derivatives(f, state.x)
        fx = state.fx
        denom = 2 * d1 * d1 - fx * d2

        if denom == 0:
            msg = "denominator of Halley's update vanished"
            raise SingularityError(msg, state.x, state.iteration)

        return state.x - 2 * fx * d1 / denom

    return step


def _secant(f: _Evaluator, state: IterationState, arith: Arithmetic):
    x, fx = state.x, state.fx
    xprev, fxprev = _previous(f, state, arith)

    if fx == fxprev:
        raise SingularityError("secant slope vanished", x, state.iteration)

    return x - fx * (x - xprev) / (fx - fxprev)


def newton[T](
    fun: Callable[[T], Any],
    x0: T,
    fprime: Callable[[T], T] | None = None,
    *,
    bracket: tuple[Any, Any] | None = None,
    xatol: Any = None,
    xrtol: Any = None,
    atol: Any = None,
    rtol: Any = None,
    maxiters: int = 100,
    maxevals: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function by Newton's method.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It may return the tuple ``(f(x), f'(x))``.
    x0
        Initial guess. Complex numbers are also accepted.
    fprime : Callable, optional
        Derivative of `fun` (the default is ``deriv(fun)``).
    bracket : tuple[T, T], optional
        Interval that contains `x0`. Steps leaving it are replaced by bisection, and
        so are singular steps while the bracket encloses a sign change.
    xatol, xrtol, atol, rtol : optional
        Tolerances (see :func:`find_root_free`).
    maxiters : int, default=100
    maxevals : int, optional
    callback : Callable[[IterationState], None], optional
    full_output : bool, default=False

    Returns
    -------
    T | RootResult

    Raises
    ------
    SingularityError
        If the derivative vanishes at an iterate that is not a root, and no
        enclosing bracket is left to bisect.
    NonConvergenceError
    DivergenceError

    Warnings
    --------
    If neither `fprime` is given nor `fun` returns derivatives, `fun` must be composed
    of arithmetic operations and functions in :mod:`zerofind.function`.

    See Also
    --------
    zerofind.autodiff.deriv

    Examples
    --------
    >>> r = newton(lambda x: x**2 - 2 * x - 1, 3.0, lambda x: 2 * x - 2)
    >>> print(format(r, ".12f"))
    2.414213562373

    The derivative is computed automatically if omitted.

    >>> from zerofind import function as zff
    >>> r = newton(lambda x: zff.exp(x) - 2, 1.0)
    >>> print(format(r, ".12f"))
    0.693147180560
    """
    derivatives = _Derivatives(fun, 1, fprime)
    return _iterate(
        fun,
        x0,
        _newton(derivatives),
        method="newton",
        bracket=bracket,
        callback=callback,
        full_output=full_output,
        xatol=xatol,
        xrtol=xrtol,
        atol=atol,
        rtol=rtol,
        maxiters=maxiters,
        maxevals=maxevals,
    )


def halley[T](
    fun: Callable[[T], Any],
    x0: T,
    fprime: Callable[[T], T] | None = None,
    fpprime: Callable[[T], T] | None = None,
    *,
    bracket: tuple[Any, Any] | None = None,
    xatol: Any = None,
    xrtol: Any = None,
    atol: Any = None,
    rtol: Any = None,
    maxiters: int = 100,
    maxevals: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function by Halley's method.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It may return the tuple ``(f(x), f'(x),
        f''(x))``.
    x0
        Initial guess.
    fprime, fpprime : Callable, optional
        First and second derivatives of `fun`. Missing derivatives are computed by
        automatic differentiation.
    bracket : tuple[T, T], optional
    xatol, xrtol, atol, rtol : optional
    maxiters : int, default=100
    maxevals : int, optional
    callback : Callable[[IterationState], None], optional
    full_output : bool, default=False

    Returns
    -------
    T | RootResult

    Raises
    ------
    SingularityError
        If the denominator of the update vanishes at an iterate that is not a root.
    NonConvergenceError
    DivergenceError

    See Also
    --------
    newton

    Examples
    --------
    >>> from zerofind import function as zff
    >>> r = halley(lambda x: zff.exp(x) - zff.cos(x), 3.0)
    >>> abs(r) < 1e-14
    True
    """
    derivatives = _Derivatives(fun, 2, fprime, fpprime)
    return _iterate(
        fun,
        x0,
        _halley(derivatives),
        method="halley",
        bracket=bracket,
        callback=callback,
        full_output=full_output,
        xatol=xatol,
        xrtol=xrtol,
        atol=atol,
        rtol=rtol,
        maxiters=maxiters,
        maxevals=maxevals,
    )


def secant[T](
    fun: Callable[[T], Any],
    x0: T,
    x1: T | None = None,
    *,
    bracket: tuple[Any, Any] | None = None,
    xatol: Any = None,
    xrtol: Any = None,
    atol: Any = None,
    rtol: Any = None,
    maxiters: int = 100,
    maxevals: int | None = None,
    callback: Callable[[IterationState[T]], None] | None = None,
    full_output: bool = False,
) -> Any:
    """Find a root of the function by the secant method.

    Parameters
    ----------
    fun : Callable
        Function to find a root of.
    x0, x1
        Initial points. If `x1` is omitted, it is a small perturbation of `x0`.
    bracket : tuple[T, T], optional
        Interval that contains both `x0` and `x1`.
    xatol, xrtol, atol, rtol : optional
    maxiters : int, default=100
    maxevals : int, optional
    callback : Callable[[IterationState], None], optional
    full_output : bool, default=False

    Returns
    -------
    T | RootResult

    Raises
    ------
    PreconditionError
        If `x0` or `x1` lies outside `bracket`.
    SingularityError
        If two successive function values coincide away from a root.
    NonConvergenceError
    DivergenceError

    Examples
    --------
    >>> r = secant(lambda x: x**3 - 2 * x - 5, 2.0, 3.0)
    >>> print(format(r, ".12f"))
    2.094551481542
    """
    return _iterate(
        fun,
        x0,
        _secant,
        method="secant",
        x1=x1,
        bracket=bracket,
        callback=callback,
        full_output=full_output,
        xatol=xatol,
        xrtol=xrtol,
        atol=atol,
        rtol=rtol,
        maxiters=maxiters,
        maxevals=maxevals,
    )
