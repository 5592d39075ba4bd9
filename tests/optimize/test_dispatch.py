import math

import pytest

from zerofind.optimize import (
    Bracket,
    Guess,
    GuessInBracket,
    NonConvergenceError,
    PreconditionError,
    find_zero,
    find_zeros,
)
from zerofind.polynomial import Polynomial


def fun(x):
    return math.exp(x) - x**4


def test_bracket():
    for problem in (Bracket(8, 9), (8, 9), [8, 9]):
        x = find_zero(fun, problem)
        assert pytest.approx(x, rel=1e-15) == 8.613169456441398

    x = find_zero(fun, (8, 9), "falseposition")
    assert pytest.approx(x, rel=1e-15) == 8.613169456441398

    with pytest.raises(PreconditionError):
        find_zero(lambda x: x**2 + 1, (1, 2))


def test_guess():
    for problem in (Guess(3), 3, 3.0):
        x = find_zero(fun, problem)
        assert pytest.approx(x, rel=1e-14) == 1.4296118247255558

    x = find_zero(math.sin, 3, 16)
    assert pytest.approx(x, rel=1e-15) == math.pi


@pytest.mark.parametrize("method", ["newton", "halley", "secant"])
def test_classical(method):
    x = find_zero(lambda x: x**2 - 2 * x - 1, 3.0, method)
    assert pytest.approx(x, rel=1e-15) == 2.414213562373095


def test_guess_in_bracket():
    for problem in (GuessInBracket(2.0, -1.0, 3.0), (2.0, (-1.0, 3.0))):
        x = find_zero(math.atan, problem, 1)
        assert abs(x) <= 1e-15

    x = find_zero(lambda x: (x**2 - 2, 2 * x), (1.0, (1, 2)), "newton")
    assert pytest.approx(x, rel=1e-15) == math.sqrt(2)


def test_options():
    r = find_zero(fun, Bracket(8, 9), full_output=True)
    assert r.method == "bisection"

    with pytest.raises(NonConvergenceError):
        find_zero(fun, Guess(3), 1, maxiters=2)


def test_invalid():
    with pytest.raises(ValueError):
        find_zero(fun, 3.0, "brent")

    with pytest.raises(ValueError):
        find_zero(fun, 3.0, 3)

    with pytest.raises(TypeError):
        find_zero(fun, "3.0")


def test_find_zeros():
    roots = find_zeros(math.sin, -4, 4)
    assert roots == pytest.approx([-math.pi, 0.0, math.pi], abs=1e-15)

    # too coarse a grid misses roots
    assert find_zeros(math.sin, -4, 4, intervals=2) == [0.0]

    assert find_zeros(Polynomial.fromroots([1, 1, 3])) == [1.0, 3.0]

    # a polynomial is also a function
    roots = find_zeros(Polynomial.fromroots([1, 3]), 0, 2)
    assert roots == pytest.approx([1.0])

    with pytest.raises(TypeError):
        find_zeros(math.sin)

    with pytest.raises(TypeError):
        find_zeros(math.sin, -4)
