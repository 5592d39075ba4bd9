"""
###################################################
Automatic differentiation (:mod:`zerofind.autodiff`)
###################################################

.. currentmodule:: zerofind.autodiff

This module provides forward-mode automatic differentiation. Root finders that need
derivatives call into this module only when the caller does not supply them.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    deriv
    derivs
    derive

Number systems containing infinitesimals
----------------------------------------

.. autosummary::
    :toctree: generated/

    Dual

"""

from .autodiff import deriv, derive, derivs
from .dual import Dual

__all__ = [
    "deriv",
    "derive",
    "derivs",
    "Dual",
]
