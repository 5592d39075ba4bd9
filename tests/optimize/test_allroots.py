import math
from fractions import Fraction

import mpmath
import pytest

from zerofind.optimize import PreconditionError, find_roots_naive, find_roots_polynomial
from zerofind.polynomial import Polynomial


def test_find_roots_naive():
    roots = find_roots_naive(math.sin, -4, 4)
    assert roots == pytest.approx([-math.pi, 0.0, math.pi], abs=1e-15)
    assert find_roots_naive(math.sin, 4, -4) == roots

    roots = find_roots_naive(lambda x: math.cos(x) - x, 0, 1, intervals=1)
    assert roots == pytest.approx([0.7390851332151607], rel=1e-15)


def test_blind_spots():
    # a double root does not change sign
    assert find_roots_naive(lambda x: (x - 1) ** 2, 0, 3) == []

    # two roots in one subinterval cancel each other
    fun = lambda x: (x - 1.01) * (x - 1.02)  # noqa: E731
    assert find_roots_naive(fun, 0, 3, intervals=3) == []
    assert find_roots_naive(fun, 0, 3, intervals=1000) == pytest.approx([1.01, 1.02])

    # a pole with a sign change looks like a root
    roots = find_roots_naive(math.tan, 1, 2, intervals=10)
    assert roots == pytest.approx([math.pi / 2], rel=1e-15)


def test_find_roots_naive_invalid():
    with pytest.raises(PreconditionError):
        find_roots_naive(math.sin, 1, 1)

    with pytest.raises(TypeError):
        find_roots_naive(math.sin, 1, 2, intervals=1.5)  # type: ignore

    with pytest.raises(TypeError):
        find_roots_naive(math.sin, 1, 2, intervals=True)

    with pytest.raises(ValueError):
        find_roots_naive(math.sin, 1, 2, intervals=0)

    with pytest.raises(TypeError):
        find_roots_naive(lambda z: z, 1j, 2j)


def test_find_roots_naive_mpmath():
    with mpmath.workprec(100):
        roots = find_roots_naive(mpmath.sin, mpmath.mpf(1), 7)
        assert len(roots) == 2
        assert all(isinstance(x, mpmath.mpf) for x in roots)
        assert abs(roots[0] - mpmath.pi) <= 4 * mpmath.mp.eps
        assert abs(roots[1] - 2 * mpmath.pi) <= 8 * mpmath.mp.eps


def test_find_roots_polynomial():
    assert find_roots_polynomial([-3, 7, -5, 1]) == [1.0, 3.0]

    p = Polynomial.fromroots([Fraction(1, 3), Fraction(1, 3), Fraction(-5, 2)])
    roots = find_roots_polynomial(p)
    assert roots == pytest.approx([-2.5, 1 / 3], rel=1e-14)

    p = Polynomial.fromroots([-2, -2, -2, 0, 4, 4])
    assert find_roots_polynomial(p) == pytest.approx([-2.0, 0.0, 4.0], abs=1e-14)

    # no real roots
    assert find_roots_polynomial([1, 0, 1]) == []


def test_find_roots_polynomial_inexact():
    p = Polynomial.fromroots([0.5, 0.5, 3.0])
    roots = find_roots_polynomial(p)
    assert roots == pytest.approx([0.5, 3.0], abs=1e-8)


def test_find_roots_polynomial_invalid():
    with pytest.raises(PreconditionError):
        find_roots_polynomial([5])

    with pytest.raises(PreconditionError):
        find_roots_polynomial(Polynomial([]))

    with pytest.raises(TypeError):
        find_roots_polynomial([1j, 1])
