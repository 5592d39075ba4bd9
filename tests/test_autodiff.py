import pytest

from zerofind import function as zff
from zerofind.autodiff import autodiff
from zerofind.autodiff.dual import Dual


def test_deriv():
    deriv1 = autodiff.deriv(lambda x: (x + zff.sin(x**2)) / x)
    deriv2 = autodiff.deriv(deriv1)
    assert pytest.approx(deriv1(1.4), 1e-5) == -1.23095
    assert pytest.approx(deriv2(1.4), 1e-5) == -3.96476


def test_deriv_constant():
    assert autodiff.deriv(lambda x: 3.0)(2.0) == 0
    assert autodiff.deriv(autodiff.deriv(lambda x: 2 * x))(5.0) == 0


def test_derivs():
    fun = autodiff.derivs(lambda x: zff.exp(x) - zff.cos(x), 2)
    assert pytest.approx(fun(0.0)) == (0.0, 1.0, 2.0)

    assert autodiff.derivs(lambda x: x**3, 3)(2.0) == (8.0, 12.0, 12.0, 6.0)


def test_derive():
    assert pytest.approx(autodiff.derive(zff.tan, 0.5), 1e-5) == 1.29845
    assert pytest.approx(autodiff.derive(zff.log, 2.0, 2)) == -0.25

    with pytest.raises(ValueError):
        autodiff.derive(zff.log, 2.0, -1)


def test_dual():
    (x,) = Dual.variable(3.0)
    y = 1 / x + x**2
    assert pytest.approx(y.real) == 9.0 + 1 / 3
    assert pytest.approx(y.imag[0]) == 6.0 - 1 / 9

    x, y = Dual.variable(2.0, 5.0)
    z = x * y - y
    assert z.real == 5.0
    assert z.imag == [5.0, 1.0]


def test_deriv_complex():
    df = autodiff.deriv(lambda x: x**3 - 1)
    assert df(1 + 1j) == pytest.approx(6j)
