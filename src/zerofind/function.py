"""
################################################
Mathematical functions (:mod:`zerofind.function`)
################################################

.. currentmodule:: zerofind.function

This module provides mathematical functions that accept floats, complex numbers,
mpmath numbers, and dual numbers of :mod:`zerofind.autodiff`. Functions built from
them can be differentiated automatically, so Newton's and Halley's methods need no
explicit derivatives.

Constant functions
==================

.. autosummary::
    :toctree: generated/

    e
    pi

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    exp
    log
    pow
    sqrt

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    cos
    sin
    tan

"""

import cmath
import decimal
import math
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python

from zerofind.autodiff.autodiff import _defderiv, _primitive

_mpnumeric = mpmath.ctx_mp_python.mpnumeric


@overload
def e(x: float | int, /) -> float: ...


@overload
def e(x: Any, /) -> Any: ...


@_primitive
def e(x, /):
    """Napier's constant.

    Examples
    --------
    >>> print(format(e(1.0), ".6f"))
    2.718282
    """
    match x:
        case _mpnumeric():
            return +mpmath.e

        case float() | int() | complex():
            return math.e

        case _:
            raise TypeError


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


@_primitive
def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    """
    match x:
        case _mpnumeric():
            return mpmath.exp(x)

        case decimal.Decimal():
            return x.exp()

        case float() | int():
            return math.exp(x)

        case complex():
            return cmath.exp(x)

        case _:
            raise TypeError


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


@_primitive
def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    """
    match x:
        case _mpnumeric():
            return mpmath.log(x)

        case decimal.Decimal():
            return x.ln()

        case float() | int():
            return math.log(x)

        case complex():
            return cmath.log(x)

        case _:
            raise TypeError


@overload
def pi(x: float | int, /) -> float: ...


@overload
def pi(x: Any, /) -> Any: ...


@_primitive
def pi(x, /):
    """Pi.

    Examples
    --------
    >>> print(format(pi(1.0), ".6f"))
    3.141593
    """
    match x:
        case _mpnumeric():
            return +mpmath.pi

        case float() | int() | complex():
            return math.pi

        case _:
            raise TypeError


@overload
def pow(x: float | int, y: float | int, /) -> float: ...


@overload
def pow(x: Any, y: Any, /) -> Any: ...


@_primitive
def pow(x, y, /):
    """`x` raised to the power `y`.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    """
    match x, y:
        case (_mpnumeric(), _) | (_, _mpnumeric()):
            return mpmath.power(x, y)

        case (decimal.Decimal(), decimal.Decimal() | int()):
            return x**y

        case (float() | int(), float() | int()):
            return math.pow(x, y)

        case (complex() | float() | int(), complex() | float() | int()):
            return complex(x) ** y

        case _:
            raise TypeError


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


@_primitive
def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    """
    match x:
        case _mpnumeric():
            return mpmath.sqrt(x)

        case decimal.Decimal():
            return x.sqrt()

        case float() | int():
            return math.sqrt(x)

        case complex():
            return cmath.sqrt(x)

        case _:
            raise TypeError


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


@_primitive
def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    """
    match x:
        case _mpnumeric():
            return mpmath.sin(x)

        case float() | int():
            return math.sin(x)

        case complex():
            return cmath.sin(x)

        case _:
            raise TypeError


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


@_primitive
def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    match x:
        case _mpnumeric():
            return mpmath.cos(x)

        case float() | int():
            return math.cos(x)

        case complex():
            return cmath.cos(x)

        case _:
            raise TypeError


@overload
def tan(x: float | int, /) -> float: ...


@overload
def tan(x: Any, /) -> Any: ...


@_primitive
def tan(x, /):
    """Tangent.

    Examples
    --------
    >>> print(format(tan(1.0), ".6f"))
    1.557408
    """
    match x:
        case _mpnumeric():
            return mpmath.tan(x)

        case float() | int():
            return math.tan(x)

        case complex():
            return cmath.tan(x)

        case _:
            raise TypeError


_defderiv(e, lambda x: x * 0)
_defderiv(exp, exp)
_defderiv(log, lambda x: 1 / x)
_defderiv(pi, lambda x: x * 0)
_defderiv(pow, lambda x, y: y * pow(x, y) / x, argnum=0)
_defderiv(pow, lambda x, y: log(x) * pow(x, y), argnum=1)
_defderiv(sqrt, lambda x: 1 / (2 * sqrt(x)))
_defderiv(sin, cos)
_defderiv(cos, lambda x: -sin(x))
_defderiv(tan, lambda x: 1 + tan(x) ** 2)
