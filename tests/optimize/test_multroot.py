import numpy as np
import pytest

from zerofind.optimize import (
    IllConditionedError,
    MultRootResult,
    PreconditionError,
    agcd,
    find_roots_with_multiplicity,
)
from zerofind.polynomial import Polynomial


def _rounded(roots):
    return {(round(complex(z).real, 8), round(complex(z).imag, 8), m) for z, m in roots}


def test_find_roots_with_multiplicity():
    roots = find_roots_with_multiplicity([-3, 7, -5, 1])
    assert [(round(z, 10), m) for z, m in roots.items()] == [(1.0, 2), (3.0, 1)]

    roots = find_roots_with_multiplicity(Polynomial.fromroots([-1, 2, 2, 2]))
    assert [(round(z, 10), m) for z, m in roots.items()] == [(-1.0, 1), (2.0, 3)]


@pytest.mark.parametrize(
    "expected",
    [
        {1.0: 2, 3.0: 1},
        {-1.0: 1, 2.0: 3},
        {0.5: 2, -1.5: 2},
        {1.0: 1, 2.0: 1, 3.0: 1},
        {-0.25: 1, 1.5: 4},
    ],
)
def test_multiplicity(expected):
    p = Polynomial.fromroots(z for z, m in expected.items() for _ in range(m))
    roots = find_roots_with_multiplicity(p)
    assert sum(roots.values()) == p.degree
    assert _rounded(roots.items()) == _rounded(expected.items())


def test_complex_roots():
    # (x^2 + 1)^2 (x - 2)
    roots = find_roots_with_multiplicity([-2, 1, -4, 2, -2, 1])
    assert _rounded(roots.items()) == {(0.0, -1.0, 2), (0.0, 1.0, 2), (2.0, 0.0, 1)}
    assert isinstance(list(roots)[-1], float)


def test_full_output():
    r = find_roots_with_multiplicity(Polynomial.fromroots([1, 1, 3]), full_output=True)
    assert isinstance(r, MultRootResult)
    assert _rounded(r.roots.items()) == {(1.0, 0.0, 2), (3.0, 0.0, 1)}
    assert r.backward_error <= 1e-8
    assert 0 < r.condition <= 1e8


def test_ill_conditioned():
    # without a GCD, the triple root splits into a cluster of simple roots
    p = Polynomial.fromroots([0.1, 0.1, 0.1])

    with pytest.raises(IllConditionedError) as excinfo:
        find_roots_with_multiplicity(p, rho=0.0)

    assert excinfo.value.estimate is not None
    assert sum(excinfo.value.estimate.values()) == 3


def test_precondition():
    with pytest.raises(PreconditionError):
        find_roots_with_multiplicity([5])

    with pytest.raises(PreconditionError):
        find_roots_with_multiplicity([0, 0])


def test_agcd():
    # (x - 1)^2 (x - 3) and its derivative
    u, v, w = agcd([-3, 7, -5, 1], [7, -10, 3])
    assert len(u) == 2 and len(v) == 3 and len(w) == 2
    assert -u[0] / u[1] == pytest.approx(1.0)
    assert np.convolve(u, v).tolist() == pytest.approx([-3, 7, -5, 1])
    assert np.convolve(u, w).tolist() == pytest.approx([7, -10, 3])

    # coprime
    u, v, w = agcd([2, -3, 1], [1, 1])
    assert len(u) == 1

    with pytest.raises(ValueError):
        agcd([1], [])

    with pytest.raises(ValueError):
        agcd([1, 2, 1], [1, 2, 3])
