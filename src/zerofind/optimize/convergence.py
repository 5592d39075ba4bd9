import dataclasses
from typing import Any

from zerofind.number import Arithmetic
from zerofind.optimize.exceptions import DivergenceError, NonConvergenceError


@dataclasses.dataclass(frozen=True, slots=True)
class Converged[T]:
    """The solver found a root.

    Attributes
    ----------
    x
        Root.
    reason : str
        Stopping condition that was met.
    """

    x: T
    reason: str


@dataclasses.dataclass(frozen=True, slots=True)
class NotConverged[T]:
    """The solver stopped without convergence.

    Attributes
    ----------
    x
        Best iterate found.
    reason : str
    """

    x: T
    reason: str


@dataclasses.dataclass(frozen=True, slots=True)
class Diverged[T]:
    """The solver produced a non-finite iterate or function value.

    Attributes
    ----------
    x
        Best finite iterate found.
    reason : str
    """

    x: T
    reason: str


type Verdict[T] = Converged[T] | NotConverged[T] | Diverged[T]


@dataclasses.dataclass(frozen=True, slots=True)
class Tolerance[T]:
    """Tolerances and budgets of iterative solvers.

    Attributes
    ----------
    xatol, xrtol
        Absolute and relative tolerances of the step size.
    atol, rtol
        Absolute and relative tolerances of the residual.
    maxiters : int
        Maximum number of iterations.
    maxevals : int
        Maximum number of function evaluations.
    """

    xatol: T
    xrtol: T
    atol: T
    rtol: T
    maxiters: int
    maxevals: int

    @classmethod
    def default(
        cls,
        arith: Arithmetic[T],
        *,
        xatol: Any = None,
        xrtol: Any = None,
        atol: Any = None,
        rtol: Any = None,
        maxiters: int = 100,
        maxevals: int | None = None,
    ) -> "Tolerance[T]":
        """Return tolerances derived from machine epsilon of `arith`.

        Unless specified, ``xatol = xrtol = EPSILON`` and ``atol = rtol = 4 * EPSILON``,
        and `maxevals` is ``5 * maxiters + 10``.

        Examples
        --------
        >>> from zerofind.number import FloatArithmetic
        >>> tol = Tolerance.default(FloatArithmetic(), maxiters=10)
        >>> tol.xatol, tol.maxevals
        (2.220446049250313e-16, 60)
        """
        if maxiters <= 0:
            raise ValueError("maxiters must be positive")

        if maxevals is None:
            maxevals = 5 * maxiters + 10

        if maxevals <= 0:
            raise ValueError("maxevals must be positive")

        eps = arith.EPSILON

        def ensure(value, default):
            if value is None:
                return default

            if value < 0:
                raise ValueError("tolerances must be nonnegative")

            return arith.coerce(value) if arith.ordered else value

        return cls(
            ensure(xatol, eps),
            ensure(xrtol, eps),
            ensure(atol, 4 * eps),
            ensure(rtol, 4 * eps),
            maxiters,
            maxevals,
        )


@dataclasses.dataclass(frozen=True, slots=True)
class IterationState[T]:
    """Snapshot of an iterative solver, passed to callback functions.

    Attributes
    ----------
    x, fx
        Current iterate and its function value.
    xprev, fxprev
        Previous iterate and its function value.
    best, fbest
        Iterate with the smallest residual so far and its function value.
    iteration : int
    evaluations : int
    bracket : tuple | None
        ``(lo, hi, f(lo), f(hi))`` if the iteration is confined to an interval.
    encloses : bool
        ``True`` if `bracket` is known to enclose a sign change.
    """

    x: T
    fx: T
    xprev: T
    fxprev: T
    best: T
    fbest: T
    iteration: int = 0
    evaluations: int = 0
    bracket: tuple[T, T, T, T] | None = None
    encloses: bool = False


@dataclasses.dataclass(frozen=True, slots=True)
class RootResult[T]:
    """Output of single-root solvers when `full_output` is ``True``.

    Attributes
    ----------
    root
    value
        Function value at `root`.
    iterations : int
    evaluations : int
    verdict : Converged
    method : str
    """

    root: T
    value: T
    iterations: int
    evaluations: int
    verdict: Converged[T]
    method: str

    @property
    def converged(self) -> bool:
        return isinstance(self.verdict, Converged)


class ConvergencePolicy[T]:
    """Decide when iterative solvers stop.

    Stopping conditions are checked in the following order:

    1. a non-finite iterate or function value (divergence);
    2. an exact zero;
    3. a residual below ``max(atol, |x| * rtol)``;
    4. adjacent endpoints of an enclosing bracket;
    5. a step below ``max(xatol, max(|x|, |xprev|) * xrtol)``, accepted only if the
       residual is below the cube root of the residual tolerance. Without an
       enclosing bracket, such a step with a large residual ends the iteration;
    6. an exhausted budget of iterations or function evaluations.

    Parameters
    ----------
    arith : Arithmetic
    tol : Tolerance
    """

    __slots__ = ("arith", "tol")
    arith: Arithmetic[T]
    tol: Tolerance[T]

    def __init__(self, arith: Arithmetic[T], tol: Tolerance[T]):
        self.arith = arith
        self.tol = tol

    def residual_tol(self, x: T) -> Any:
        return max(self.tol.atol, abs(x) * self.tol.rtol)

    def adjacent(self, a: T, b: T) -> bool:
        """Return ``True`` if no representable value lies strictly between `a` and
        `b`, where ``a <= b``.
        """
        m = self.arith.middle(a, b)
        return not a < m < b

    def assess(self, state: IterationState[T]) -> Verdict[T] | None:
        """Return the verdict, or ``None`` if the iteration should continue."""
        x, fx = state.x, state.fx
        isfinite = self.arith.isfinite

        if not (isfinite(x) and isfinite(fx)):
            return Diverged(state.best, "non-finite iterate or function value")

        if fx == 0:
            return Converged(x, "exact zero")

        ftol = self.residual_tol(x)

        if abs(fx) <= ftol:
            return Converged(x, "residual below tolerance")

        if state.bracket is not None and state.encloses:
            lo, hi, flo, fhi = state.bracket

            if self.adjacent(lo, hi):
                x = lo if abs(flo) <= abs(fhi) else hi
                return Converged(x, "bracket endpoints are adjacent")

        if state.iteration > 0:
            xprev = state.xprev
            xtol = max(self.tol.xatol, max(abs(x), abs(xprev)) * self.tol.xrtol)

            if abs(x - xprev) <= xtol:
                if abs(fx) <= self.arith.cbrt(ftol):
                    return Converged(x, "step size below tolerance")

                # an enclosing bracket still shrinks towards a sign change
                if not state.encloses:
                    reason = "step size converged but |f(x)| is not small"
                    return NotConverged(state.best, reason)

        if state.iteration >= self.tol.maxiters:
            return NotConverged(state.best, "iteration budget exhausted")

        if state.evaluations >= self.tol.maxevals:
            return NotConverged(state.best, "evaluation budget exhausted")

        return None

    def assess_bracket(
        self, lo: T, hi: T, flo: T, fhi: T, iteration: int, xatol: Any = None
    ) -> Verdict[T] | None:
        """Return the verdict of a bracketing solver, or ``None`` if the bracket
        should be narrowed further.
        """
        if flo == 0:
            return Converged(lo, "exact zero")

        if fhi == 0:
            return Converged(hi, "exact zero")

        best = lo if abs(flo) <= abs(fhi) else hi

        if xatol is not None and hi - lo <= xatol:
            return Converged(best, "bracket width below tolerance")

        if self.adjacent(lo, hi):
            return Converged(best, "bracket endpoints are adjacent")

        if iteration >= self.tol.maxiters:
            return NotConverged(best, "iteration budget exhausted")

        return None

    def stalled(self, state: IterationState[T], reason: str) -> Verdict[T]:
        """Return the verdict when no further step can be formed.

        The current iterate is accepted if its residual is below the cube root of the
        residual tolerance.
        """
        if abs(state.fx) <= self.arith.cbrt(self.residual_tol(state.x)):
            return Converged(state.x, f"{reason}; residual is small")

        return NotConverged(state.best, reason)


def _conclude[T](
    verdict: Verdict[T], state: IterationState[T], method: str, full_output: bool
) -> Any:
    match verdict:
        case Converged(x, _):
            if not full_output:
                return x

            value = state.fx

            if x == state.best:
                value = state.fbest
            elif state.bracket is not None and x in state.bracket[:2]:
                value = state.bracket[2] if x == state.bracket[0] else state.bracket[3]

            return RootResult(
                x, value, state.iteration, state.evaluations, verdict, method
            )

        case NotConverged(x, reason):
            raise NonConvergenceError(
                reason, x, state.fbest, state.iteration, state.evaluations
            )

        case Diverged(x, reason):
            raise DivergenceError(
                reason, x, state.fbest, state.iteration, state.evaluations
            )
