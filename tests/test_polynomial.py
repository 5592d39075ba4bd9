from fractions import Fraction

import pytest

from zerofind.autodiff import deriv
from zerofind.polynomial import Polynomial, gcd, squarefree


def test_arithmetic():
    p = Polynomial([1, 2, 3])
    q = Polynomial([-1, 1])
    assert p + q == Polynomial([0, 3, 3])
    assert p - p == Polynomial([])
    assert p * q == Polynomial([-1, -1, -1, 3])
    assert 2 * q == Polynomial([-2, 2])
    assert (p * q) // q == p
    assert (p * q + 5) % q == Polynomial([5])
    assert Polynomial([0, 0]).degree == -1


def test_call():
    p = Polynomial.fromroots([1, 2])
    assert p(1) == 0 and p(3) == 2
    assert deriv(p)(3.0) == 3.0
    assert p.deriv() == Polynomial([-3, 2])


def test_divide():
    with pytest.raises(ZeroDivisionError):
        divmod(Polynomial([1, 1]), Polynomial([]))

    q, r = Polynomial([1.0, 2.0, 1.0 + 1e-14]).divide(Polynomial([1.0, 1.0]), 1e-10)
    assert q.degree == 1
    assert r.degree == -1


def test_cauchy_bound():
    p = Polynomial.fromroots([-4, 1, 2])
    assert all(abs(z) < p.cauchy_bound() for z in (-4, 1, 2))

    with pytest.raises(ValueError):
        Polynomial([3]).cauchy_bound()


def test_gcd():
    p = Polynomial.fromroots([1, 1, 1, 2, 5])
    q = Polynomial.fromroots([1, 1, 5, 7])
    assert gcd(p, q) == Polynomial.fromroots([Fraction(1), Fraction(1), Fraction(5)])

    g = gcd(Polynomial.fromroots([0.5, 0.5, 3.0]), Polynomial.fromroots([0.5, 2.0]))
    assert g.degree == 1
    assert pytest.approx(-g[0]) == 0.5


@pytest.mark.parametrize(
    "roots",
    [
        [1, 1, 3],
        [-2, -2, -2, 0, 4, 4],
        [Fraction(1, 3), Fraction(1, 3), Fraction(-5, 2)],
    ],
)
def test_squarefree(roots):
    p = Polynomial.fromroots(roots)
    q, g = squarefree(p)
    _, r = divmod(p, g)
    assert r.degree == -1
    assert q == Polynomial.fromroots(sorted(set(Fraction(x) for x in roots)))
    assert gcd(q, q.deriv()).degree == 0


def test_squarefree_constant():
    with pytest.raises(ValueError):
        squarefree(Polynomial([2]))
