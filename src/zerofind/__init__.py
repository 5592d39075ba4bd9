import logging

from .function import cos, exp, log, pow, sin, sqrt, tan
from .optimize import (
    find_root_bracketed,
    find_root_free,
    find_roots_naive,
    find_roots_polynomial,
    find_roots_with_multiplicity,
    find_zero,
    find_zeros,
    halley,
    newton,
    secant,
)
from .polynomial import Polynomial

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "cos",
    "exp",
    "log",
    "pow",
    "sin",
    "sqrt",
    "tan",
    "find_root_bracketed",
    "find_root_free",
    "find_roots_naive",
    "find_roots_polynomial",
    "find_roots_with_multiplicity",
    "find_zero",
    "find_zeros",
    "halley",
    "newton",
    "secant",
    "Polynomial",
]
