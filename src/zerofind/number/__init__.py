"""
#############################################
Numeric capabilities (:mod:`zerofind.number`)
#############################################

.. currentmodule:: zerofind.number

This module provides the capabilities (machine epsilon, adjacency of representable
values, and so on) that root finders require from a numeric type. Algorithms are
written once against :class:`Arithmetic`, and the arithmetic is chosen from the
operands by :func:`resolve`.

Arithmetics
===========

.. autosummary::
    :toctree: generated/

    Arithmetic
    FloatArithmetic
    ComplexArithmetic
    MPArithmetic
    DecimalArithmetic

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    register
    resolve

"""

import decimal

from .arithmetic import Arithmetic, register, resolve
from .decarithmetic import DecimalArithmetic
from .floatarithmetic import ComplexArithmetic, FloatArithmetic
from .mparithmetic import MPArithmetic

register(decimal.Decimal, DecimalArithmetic)

__all__ = [
    "Arithmetic",
    "ComplexArithmetic",
    "DecimalArithmetic",
    "FloatArithmetic",
    "MPArithmetic",
    "register",
    "resolve",
]
