from collections.abc import Callable
from typing import Any, Literal

from zerofind.number import Arithmetic
from zerofind.optimize._driver import (
    _Evaluator,
    _interpolate,
    _iterate,
    _midpoint,
    _previous,
    _secant,
    _Step,
)
from zerofind.optimize.convergence import IterationState


def _order0(f: _Evaluator, state: IterationState, arith: Arithmetic):
    x, fx = state.x, state.fx
    xprev, fxprev = _previous(f, state, arith)

    if state.bracket is not None and state.encloses:
        lo, hi, _, _ = state.bracket

        try:
            x1 = _secant(x, fx, xprev, fxprev)
        except ZeroDivisionError:
            return _midpoint(lo, hi)

        # bisect unless the last step halved the residual
        if lo < x1 < hi and (state.iteration == 0 or abs(fx) <= abs(fxprev) / 2):
            return x1

        return _midpoint(lo, hi)

    x1 = _secant(x, fx, xprev, fxprev)

    for _ in range(3):
        fx1 = f(x1)

        if abs(fx1) < abs(fx):
            break

        if arith.ordered and fx1 != 0 and (fx1 < 0) != (fx < 0):
            break

        x1 = x + (x1 - x) / 2

    return x1


def _order1(f: _Evaluator, state: IterationState, arith: Arithmetic):
    xprev, fxprev = _previous(f, state, arith)
    return _secant(state.x, state.fx, xprev, fxprev)


def _order2(f: _Evaluator, state: IterationState, arith: Arithmetic):
    if state.iteration == 0:
        return _order1(f, state, arith)

    x, fx = state.x, state.fx
    w = x + fx
    return _interpolate((x, w), (fx, f(w)))


def _multipoint(
    f: _Evaluator, state: IterationState, nodes: int
) -> tuple[list, list, bool]:
    xs = [state.x]
    fs = [state.fx]
    y = state.x + state.fx

    while True:
        fy = f(y)
        # no interpolation through a repeated value
        stop = fy == 0 or fy in fs
        xs.append(y)
        fs.append(fy)

        if stop or len(xs) == nodes:
            return xs, fs, stop

        y = _interpolate(xs, fs)


def _order5(f: _Evaluator, state: IterationState, arith: Arithmetic):
    xs, fs, stop = _multipoint(f, state, 3)

    if stop:
        return xs[-1]

    z = _interpolate(xs, fs)
    fz = f(z)

    if fz == 0:
        return z

    # reuse the divided difference f[x, w] as the slope
    return z - fz * (xs[1] - xs[0]) / (fs[1] - fs[0])


def _order8(f: _Evaluator, state: IterationState, arith: Arithmetic):
    xs, fs, stop = _multipoint(f, state, 4)
    return xs[-1] if stop else _interpolate(xs, fs)


def _order16(f: _Evaluator, state: IterationState, arith: Arithmetic):
    xs, fs, stop = _multipoint(f, state, 5)
    return xs[-1] if stop else _interpolate(xs, fs)


_STEPS: dict[int, _Step] = {
    0: _order0,
    1: _order1,
    2: _order2,
    5: _order5,
    8: _order8,
    16: _order16,
}


def find_root_free[T](
    fun: Callable[[T], Any],
    x0: T,
    order: Literal[0, 1, 2, 5, 8, 16] = 0,
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
    r"""Find a root of the function near the initial guess without derivatives.

    Parameters
    ----------
    fun : Callable
        Function to find a root of. It may return a tuple whose first entry is the
        function value.
    x0
        Initial guess.
    order : Literal[0, 1, 2, 5, 8, 16], default=0
        Convergence order of the method.

        * ``0``: secant steps safeguarded by bisection once a sign change is seen,
          and by step halving while the residual does not decrease.
        * ``1``: secant method.
        * ``2``: Steffensen's method, with a secant step first.
        * ``5``: a two-step Kung-Traub update followed by a frozen-slope step.
        * ``8`` and ``16``: Kung-Traub inverse interpolation through 4 and 5 nodes.

    bracket : tuple[T, T], optional
        Interval that contains `x0`. Steps leaving it are replaced by bisection.
    xatol, xrtol : optional
        Absolute and relative tolerances of the step size (the default is machine
        epsilon).
    atol, rtol : optional
        Absolute and relative tolerances of the residual (the default is four times
        machine epsilon).
    maxiters : int, default=100
        Maximum number of iterations.
    maxevals : int, optional
        Maximum number of function evaluations (the default is ``5 * maxiters +
        10``).
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
    ValueError
        If `order` is not supported.
    NonConvergenceError
        If the budget is exhausted, or the step size converges while the residual
        does not.
    DivergenceError
        If an iterate or a function value is not finite.

    Notes
    -----
    The higher the order, the more function evaluations are spent per step. Orders
    8 and 16 pay off for arbitrary-precision numbers, whereas order 0 is the most
    robust choice for poor initial guesses.

    Examples
    --------
    >>> import math
    >>> r = find_root_free(lambda x: math.exp(x) - x**4, 3)
    >>> print(format(r, ".12f"))
    1.429611824726
    >>> r = find_root_free(math.sin, 3.0, 16)
    >>> print(format(r, ".12f"))
    3.141592653590
    """
    if isinstance(order, bool) or order not in _STEPS:
        raise ValueError(f"unsupported order: {order!r}")

    return _iterate(
        fun,
        x0,
        _STEPS[order],
        method=f"order{order}",
        bracket=bracket,
        discover=order == 0,
        callback=callback,
        full_output=full_output,
        xatol=xatol,
        xrtol=xrtol,
        atol=atol,
        rtol=rtol,
        maxiters=maxiters,
        maxevals=maxevals,
    )
