"""
############################################
Root finding (:mod:`zerofind.optimize`)
############################################

.. currentmodule:: zerofind.optimize

This module provides solvers for roots of univariate functions and polynomials.

Bracketing methods
==================

.. autosummary::
    :toctree: generated/

    find_root_bracketed
    bisection
    falseposition

Iterative methods
=================

.. autosummary::
    :toctree: generated/

    find_root_free
    newton
    halley
    secant

All roots
=========

.. autosummary::
    :toctree: generated/

    find_roots_naive
    find_roots_polynomial
    find_roots_with_multiplicity
    agcd

Dispatch
========

.. autosummary::
    :toctree: generated/

    find_zero
    find_zeros
    Bracket
    Guess
    GuessInBracket

Convergence
===========

.. autosummary::
    :toctree: generated/

    ConvergencePolicy
    Tolerance
    IterationState
    RootResult
    MultRootResult
    Converged
    NotConverged
    Diverged

Exceptions
==========

.. autosummary::
    :toctree: generated/

    RootFindingError
    PreconditionError
    SingularityError
    NonConvergenceError
    DivergenceError
    IllConditionedError
    AbortSolving

"""

from .allroots import find_roots_naive, find_roots_polynomial
from .bracketing import bisection, falseposition, find_root_bracketed
from .classical import halley, newton, secant
from .convergence import (
    ConvergencePolicy,
    Converged,
    Diverged,
    IterationState,
    NotConverged,
    RootResult,
    Tolerance,
    Verdict,
)
from .derivativefree import find_root_free
from .dispatch import Bracket, Guess, GuessInBracket, find_zero, find_zeros
from .exceptions import (
    AbortSolving,
    DivergenceError,
    IllConditionedError,
    NonConvergenceError,
    PreconditionError,
    RootFindingError,
    SingularityError,
)
from .multroot import MultRootResult, agcd, find_roots_with_multiplicity

__all__ = [
    "find_root_bracketed",
    "bisection",
    "falseposition",
    "find_root_free",
    "newton",
    "halley",
    "secant",
    "find_roots_naive",
    "find_roots_polynomial",
    "find_roots_with_multiplicity",
    "agcd",
    "find_zero",
    "find_zeros",
    "Bracket",
    "Guess",
    "GuessInBracket",
    "ConvergencePolicy",
    "Tolerance",
    "IterationState",
    "RootResult",
    "MultRootResult",
    "Converged",
    "NotConverged",
    "Diverged",
    "Verdict",
    "RootFindingError",
    "PreconditionError",
    "SingularityError",
    "NonConvergenceError",
    "DivergenceError",
    "IllConditionedError",
    "AbortSolving",
]
