import math

import pytest

from zerofind.number import ComplexArithmetic, FloatArithmetic
from zerofind.optimize import (
    ConvergencePolicy,
    Converged,
    Diverged,
    IterationState,
    NotConverged,
    Tolerance,
)

EPS = 2.0**-52


def _policy(**options):
    arith = FloatArithmetic()
    return ConvergencePolicy(arith, Tolerance.default(arith, **options))


def _state(x, fx, xprev, fxprev, iteration=1, **kwargs):
    return IterationState(x, fx, xprev, fxprev, x, fx, iteration, 2, **kwargs)


def test_tolerance():
    tol = Tolerance.default(FloatArithmetic())
    assert tol.xatol == tol.xrtol == EPS
    assert tol.atol == tol.rtol == 4 * EPS
    assert tol.maxiters == 100 and tol.maxevals == 510

    tol = Tolerance.default(FloatArithmetic(), atol=1, maxevals=7)
    assert tol.atol == 1.0 and isinstance(tol.atol, float)
    assert tol.maxevals == 7

    tol = Tolerance.default(ComplexArithmetic(), rtol=1e-3)
    assert tol.rtol == 1e-3

    with pytest.raises(ValueError):
        Tolerance.default(FloatArithmetic(), maxiters=0)

    with pytest.raises(ValueError):
        Tolerance.default(FloatArithmetic(), maxevals=-1)

    with pytest.raises(ValueError):
        Tolerance.default(FloatArithmetic(), xatol=-1e-3)


def test_assess():
    policy = _policy()
    assert policy.assess(_state(1.0, 0.5, 2.0, 1.0)) is None

    match policy.assess(_state(1.0, math.nan, 2.0, 1.0)):
        case Diverged():
            pass

        case verdict:
            pytest.fail(f"unexpected verdict {verdict!r}")

    assert policy.assess(_state(1.0, 0.0, 2.0, 1.0)) == Converged(1.0, "exact zero")
    verdict = policy.assess(_state(1.0, 1e-16, 2.0, 1.0))
    assert verdict == Converged(1.0, "residual below tolerance")


def test_assess_step():
    policy = _policy()
    x = 1.0
    xprev = math.nextafter(x, 2.0)

    verdict = policy.assess(_state(x, 1e-8, xprev, 2e-8))
    assert verdict == Converged(x, "step size below tolerance")

    verdict = policy.assess(_state(x, 1e-2, xprev, 2e-2))
    assert isinstance(verdict, NotConverged)
    assert verdict.reason == "step size converged but |f(x)| is not small"

    # the step is not checked before the first iteration
    assert policy.assess(_state(x, 1e-2, x, 1e-2, iteration=0)) is None


def test_assess_bracket():
    policy = _policy()
    lo = 1.0
    hi = math.nextafter(lo, 2.0)
    state = _state(0.5, 0.3, 0.0, 0.9, bracket=(lo, hi, -0.1, 0.2), encloses=True)
    assert policy.assess(state) == Converged(lo, "bracket endpoints are adjacent")

    state = _state(0.5, 0.3, 0.0, 0.9, bracket=(lo, hi, -0.1, 0.2))
    assert policy.assess(state) is None

    assert policy.assess_bracket(1.0, 2.0, 0.0, 1.0, 0) == Converged(1.0, "exact zero")
    assert policy.assess_bracket(1.0, 2.0, -1.0, 0.5, 0) is None

    verdict = policy.assess_bracket(1.0, 2.0, -1.0, 0.5, 0, xatol=1.0)
    assert verdict == Converged(2.0, "bracket width below tolerance")


def test_budget():
    policy = _policy(maxiters=3, maxevals=100)
    verdict = policy.assess(_state(1.0, 0.5, 2.0, 1.0, iteration=3))
    assert verdict == NotConverged(1.0, "iteration budget exhausted")

    policy = _policy(maxevals=2)
    verdict = policy.assess(_state(1.0, 0.5, 2.0, 1.0))
    assert verdict == NotConverged(1.0, "evaluation budget exhausted")


def test_stalled():
    policy = _policy()
    verdict = policy.stalled(_state(1.0, 1e-8, 2.0, 1.0), "slope vanished")
    assert isinstance(verdict, Converged)
    assert verdict.reason.startswith("slope vanished")

    verdict = policy.stalled(_state(1.0, 0.5, 2.0, 1.0), "slope vanished")
    assert verdict == NotConverged(1.0, "slope vanished")
