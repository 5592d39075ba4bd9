from typing import Any


class RootFindingError(ArithmeticError):
    """Base class of errors raised by root finders."""


class PreconditionError(RootFindingError, ValueError):
    """Raised if the problem does not satisfy the precondition of the solver, e.g. the
    function values at the endpoints of a bracket do not have opposite signs.
    """


class SingularityError(RootFindingError, ZeroDivisionError):
    """Raised if a derivative-based method encounters a vanishing denominator.

    Attributes
    ----------
    x
        Iterate at which the singularity was encountered.
    iterations : int
    """

    x: Any
    iterations: int

    def __init__(self, message: str, x: Any, iterations: int):
        super().__init__(message)
        self.x = x
        self.iterations = iterations


class _IterationError(RootFindingError):
    best: Any
    value: Any
    iterations: int
    evaluations: int
    reason: str

    def __init__(
        self, reason: str, best: Any, value: Any, iterations: int, evaluations: int
    ):
        super().__init__(f"{reason} (best={best!r}, iterations={iterations})")
        self.reason = reason
        self.best = best
        self.value = value
        self.iterations = iterations
        self.evaluations = evaluations


class NonConvergenceError(_IterationError):
    """Raised if a solver stops without convergence.

    Attributes
    ----------
    reason : str
    best
        Iterate with the smallest residual found.
    value
        Function value at `best`.
    iterations : int
    evaluations : int
    """


class DivergenceError(_IterationError):
    """Raised if an iterate or a function value is not finite.

    Attributes
    ----------
    reason : str
    best
        Last finite iterate with the smallest residual.
    value
        Function value at `best`.
    iterations : int
    evaluations : int
    """


class IllConditionedError(RootFindingError):
    """Raised if multiplicities of roots cannot be determined reliably.

    Attributes
    ----------
    reason : str
    estimate : dict | None
        Tentative mapping from roots to multiplicities, if any.
    """

    reason: str
    estimate: dict | None

    def __init__(self, reason: str, estimate: dict | None = None):
        super().__init__(reason)
        self.reason = reason
        self.estimate = estimate


class AbortSolving(Exception):
    """Raised by a callback function to abort solvers.

    Parameters
    ----------
    message : str, default="aborted"
    """

    message: str

    def __init__(self, message="aborted", *args, **kwargs):
        super().__init__(message, *args, **kwargs)
        self.message = message
