import functools
from collections.abc import Callable
from typing import Any

from zerofind.autodiff.dual import Dual


def deriv[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    """Return a function that evaluates the derivative of the univariate scalar-valued
    function.

    Parameters
    ----------
    fun : Callable
        Differentiated function.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Warnings
    --------
    `fun` must not contain conditional branches, and must be composed of arithmetic
    operations and functions in :mod:`zerofind.function`.

    Examples
    --------
    >>> from zerofind import function as zff
    >>> f = lambda x: x**2 + zff.sqrt(x + 3)
    >>> df = deriv(f)
    >>> print(format(df(1.2), ".6g"))
    2.64398

    The second-order derivative can be obtained in the same manner.

    >>> ddf = deriv(df)
    >>> print(format(ddf(1.2), ".6g"))
    1.97096
    """

    def result(*args, **kwargs):
        var = Dual.variable(*args)
        tmp: Any = fun(*var, **kwargs)  # type: ignore

        # `fun` is constant with respect to the variable
        if not isinstance(tmp, Dual) or tmp.priority < var[0].priority:
            return args[0] * 0

        return tmp.imag[0]

    return result


def derivs[T](fun: Callable[[T], T], order: int) -> Callable[[T], tuple[T, ...]]:
    """Return a function that evaluates the derivatives of `fun` up to `order`.

    Parameters
    ----------
    fun : Callable
        Differentiated function.
    order : int
        Highest order of derivatives.

    Returns
    -------
    Callable
        Function mapping `x` to ``(f(x), f'(x), ..., f^(order)(x))``.

    See Also
    --------
    deriv, derive

    Examples
    --------
    >>> derivs(lambda x: x**3, 2)(2.0)
    (8.0, 12.0, 12.0)
    """
    if order < 0:
        raise ValueError

    funs = [fun]

    for _ in range(order):
        funs.append(deriv(funs[-1]))

    def result(x):
        return tuple(f(x) for f in funs)

    return result


def derive[T](fun: Callable[[T], T], x: T, order: int = 1) -> T:
    """Evaluate the derivative of `fun` of the given order at `x`.

    Examples
    --------
    >>> derive(lambda x: x**3, 2.0, 2)
    12.0
    """
    return derivs(fun, order)(x)[-1]


def _defderiv[**P](
    fun: Callable[P, Any], deriv: Callable[P, Any], *, argnum: int = 0
) -> None:
    if "_zerofind_is_primitive" not in fun.__dict__:
        raise ValueError

    fun.__dict__["_zerofind_derivs"][argnum] = deriv


def _primitive[T, **P](fun: Callable[P, T]) -> Callable[P, T]:
    derivs: dict[int, Callable] = {}

    @functools.wraps(fun)
    def wrapper(*args, **kwargs):
        if not any(isinstance(x, Dual) for x in args):
            return fun(*args, **kwargs)

        max_priority = max(x.priority for x in args if isinstance(x, Dual))
        args_real: list = []
        args_dual: list[tuple[int, Dual]] = []

        for argnum, arg in enumerate(args):
            if not isinstance(arg, Dual) or arg.priority < max_priority:
                args_real.append(arg)
                continue

            args_real.append(arg.real)
            args_dual.append((argnum, arg))

        head = args_dual[0]
        imag = [derivs[head[0]](*args_real, **kwargs) * x for x in head[1].imag]

        for argnum, arg in args_dual[1:]:
            tmp = derivs[argnum](*args_real, **kwargs)

            for i in range(len(imag)):
                imag[i] += tmp * arg.imag[i]

        return head[1].__class__(wrapper(*args_real, **kwargs), imag)

    wrapper.__dict__["_zerofind_is_primitive"] = True
    wrapper.__dict__["_zerofind_derivs"] = derivs
    return wrapper  # type: ignore
