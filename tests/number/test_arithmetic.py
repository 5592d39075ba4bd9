import decimal
import math

import mpmath
import pytest

from zerofind.number import (
    ComplexArithmetic,
    DecimalArithmetic,
    FloatArithmetic,
    MPArithmetic,
    register,
    resolve,
)


def test_resolve():
    assert isinstance(resolve(1, 2.0), FloatArithmetic)
    assert isinstance(resolve(1.0, 2j), ComplexArithmetic)
    assert isinstance(resolve(mpmath.mpf(1), 2), MPArithmetic)
    assert not resolve(mpmath.mpc(1, 1)).ordered
    assert isinstance(resolve(decimal.Decimal(1), 3), DecimalArithmetic)

    with pytest.raises(TypeError):
        resolve(True)

    with pytest.raises(TypeError):
        resolve("1.0")

    with pytest.raises(TypeError):
        resolve(decimal.Decimal(1), mpmath.mpf(1))


def test_register():
    class Real:
        pass

    register(Real, FloatArithmetic)
    assert isinstance(resolve(Real()), FloatArithmetic)

    with pytest.raises(TypeError):
        resolve(Real(), decimal.Decimal(1))

    with pytest.raises(TypeError):
        register(1.0, FloatArithmetic)  # type: ignore


@pytest.mark.parametrize(
    "a, b",
    [(1.0, 2.0), (-3.5, -1e-300), (0.0, 5e-324), (1.0, math.nextafter(1.0, 2.0))],
)
def test_float_middle(a, b):
    arith = FloatArithmetic()
    m = arith.middle(a, b)
    adjacent = math.nextafter(a, b) == b

    if adjacent:
        assert m in (a, b)
    else:
        assert a < m < b


def test_float_middle_closes():
    arith = FloatArithmetic()
    a, b = -1e300, 1e300
    count = 0

    while a < (m := arith.middle(a, b)) < b:
        a, b = (m, b) if m < 1.5 else (a, m)
        count += 1

    assert count <= 64
    assert math.nextafter(a, b) == b


def test_float_epsilon():
    arith = FloatArithmetic()
    assert arith.EPSILON == 2.0**-52
    assert arith.bisection_limit == 128
    assert arith.cbrt(8.0) == 2.0
    assert not arith.isfinite(math.nan)


def test_mp():
    arith = MPArithmetic()

    with mpmath.workprec(200):
        assert arith.EPSILON == mpmath.mpf(2) ** -199
        assert arith.precision == 200
        m = arith.middle(mpmath.mpf(1), mpmath.mpf(2))
        assert m == mpmath.mpf(1.5)

        # endpoints far apart are split by magnitude
        assert arith.middle(mpmath.mpf(1), mpmath.mpf(100)) == 10
        assert arith.middle(mpmath.mpf(-100), mpmath.mpf(-1)) == -10
        assert arith.middle(mpmath.mpf(0), mpmath.mpf(1)) == mpmath.mp.eps

    with pytest.raises(TypeError):
        arith.coerce(1j)


def test_decimal():
    arith = DecimalArithmetic()

    with decimal.localcontext() as ctx:
        ctx.prec = 10
        assert arith.EPSILON == decimal.Decimal("1e-9")
        assert arith.coerce(0.5) == decimal.Decimal("0.5")
        assert arith.middle(decimal.Decimal(-1), decimal.Decimal(3)) == 0

        a = decimal.Decimal(1)
        b = a + arith.EPSILON
        assert arith.middle(a, b) in (a, b)

        assert arith.middle(decimal.Decimal(1), decimal.Decimal(100)) == 10
        assert arith.middle(decimal.Decimal(0), decimal.Decimal(1)) == arith.EPSILON


def test_complex():
    arith = ComplexArithmetic()
    assert not arith.ordered
    assert arith.coerce(2) == 2 + 0j

    with pytest.raises(TypeError):
        arith.middle(1j, 2j)
