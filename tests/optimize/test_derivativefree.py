import decimal
import math

import mpmath
import pytest

from zerofind.optimize import (
    AbortSolving,
    DivergenceError,
    NonConvergenceError,
    RootFindingError,
    bisection,
    find_root_free,
)

ORDERS = [0, 1, 2, 5, 8, 16]


def test_find_root_free():
    x = find_root_free(lambda x: math.exp(x) - x**4, 3)
    assert pytest.approx(x, rel=1e-14) == 1.4296118247255558

    x = find_root_free(math.sin, 3.0, 16)
    assert pytest.approx(x, rel=1e-15) == math.pi


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize(
    "fun, x0, root",
    [
        (math.sin, 3.0, math.pi),
        (lambda x: math.cos(x) - x, 0.5, 0.7390851332151607),
        (lambda x: (math.sin(x), math.cos(x)), 3.0, math.pi),
    ],
)
def test_orders(fun, x0, root, order):
    x = find_root_free(fun, x0, order)
    assert abs(x - root) <= 1e-14


def test_complex():
    for order in (0, 1, 2):
        x = find_root_free(lambda z: z**2 + 1, 0.1 + 1.05j, order)
        assert abs(x - 1j) <= 1e-14


def test_unsupported_order():
    for order in (3, True, "1"):
        with pytest.raises(ValueError):
            find_root_free(math.sin, 3.0, order)  # type: ignore


def test_bracket():
    x = find_root_free(math.atan, 2.0, 1, bracket=(-1.0, 3.0))
    assert abs(x) <= 1e-15

    with pytest.raises(ValueError):
        find_root_free(math.atan, 5.0, 1, bracket=(-1.0, 3.0))


@pytest.mark.parametrize("order", [0, 1, 2])
@pytest.mark.parametrize("x0", [0.01, 0.05, 0.1])
def test_bracket_fallback(x0, order):
    # the first step leaves the bracket, whose lower end is 0
    x = find_root_free(lambda x: x**3 - 0.3, x0, order, bracket=(0.0, 1.0))
    assert abs(x - 0.3 ** (1 / 3)) <= 1e-14


def test_bracket_discontinuity():
    step = lambda x: -1.0 if x < 1 / 3 else 1.0  # noqa: E731
    x = find_root_free(step, 0.3, bracket=(0.0, 1.0))
    assert x == bisection(step, 0.0, 1.0)
    assert step(x) == -1.0 and step(math.nextafter(x, 1)) == 1.0


def test_discover_bracket():
    states = []
    x = find_root_free(math.atan, 1.0, callback=states.append)
    assert abs(x) <= 1e-15
    assert any(s.encloses for s in states)


def test_nonconvergence():
    with pytest.raises(NonConvergenceError) as excinfo:
        find_root_free(lambda x: x**2 + 1, 0.5, 1, maxiters=3)

    assert excinfo.value.reason == "iteration budget exhausted"
    assert excinfo.value.iterations == 3

    # there is no real root
    with pytest.raises(RootFindingError):
        find_root_free(lambda x: x**2 + 1, 0.5, 1)


def test_divergence():
    fun = lambda x: math.nan if x > 1 else x - 2  # noqa: E731

    with pytest.raises(DivergenceError) as excinfo:
        find_root_free(fun, 0.5, 1)

    assert excinfo.value.best <= 1


def test_callback():
    def abort(state):
        raise AbortSolving("stop")

    with pytest.raises(NonConvergenceError) as excinfo:
        find_root_free(math.sin, 3.0, 1, callback=abort)

    assert excinfo.value.reason == "stop"
    assert excinfo.value.best == 3.0
    assert excinfo.value.iterations == 0


def test_full_output():
    r = find_root_free(math.sin, 3.0, 2, full_output=True)
    assert r.converged and r.method == "order2"
    assert r.value == math.sin(r.root)
    assert r.evaluations >= r.iterations


@pytest.mark.parametrize("order", [8, 16])
def test_mpmath(order):
    fun = lambda x: mpmath.cos(x) - x  # noqa: E731

    with mpmath.workprec(256):
        x = find_root_free(fun, mpmath.mpf(1), order)
        assert isinstance(x, mpmath.mpf)
        assert abs(fun(x)) <= mpmath.mpf("1e-70")


def test_order_speedup():
    fun = lambda x: mpmath.cos(x) - x  # noqa: E731

    with mpmath.workprec(256):
        r0, r1, r8, r16 = (
            find_root_free(fun, mpmath.mpf(1), order, full_output=True)
            for order in (0, 1, 8, 16)
        )

    assert r16.iterations <= r8.iterations < r1.iterations <= r0.iterations


def test_decimal():
    with decimal.localcontext() as ctx:
        ctx.prec = 30
        x = find_root_free(lambda x: x * x - 2, decimal.Decimal(1), 2)
        assert isinstance(x, decimal.Decimal)
        assert abs(x - decimal.Decimal(2).sqrt()) <= decimal.Decimal("1e-27")
