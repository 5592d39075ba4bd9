import cmath
import math
import struct
import sys

from zerofind.number.arithmetic import Arithmetic


def _tobits(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", value))[0]


def _frombits(value: int) -> float:
    return struct.unpack("<d", struct.pack("<q", value))[0]


class FloatArithmetic(Arithmetic[float]):
    """Arithmetic of IEEE 754 binary64 numbers.

    Integers are converted to floats.
    """

    __slots__ = ()
    ZERO = 0.0
    ONE = 1.0

    @property
    def EPSILON(self):
        return sys.float_info.epsilon

    @property
    def precision(self):
        return sys.float_info.mant_dig

    @property
    def bisection_limit(self):
        return 128

    def coerce(self, value):
        match value:
            case float():
                return value

            case int() | str():
                return float(value)

            case _:
                raise TypeError(f"cannot convert {type(value).__name__} to float")

    def isfinite(self, value):
        return math.isfinite(value)

    def middle(self, a, b):
        """Return the midpoint of `a` and `b` with respect to their bit patterns.

        Bisecting bit patterns instead of values closes any finite bracket in at most
        64 halvings. If `a` and `b` have opposite signs, zero is returned.

        Examples
        --------
        >>> FloatArithmetic().middle(-1.0, 2.0)
        0.0
        >>> FloatArithmetic().middle(1.0, 4.0)
        2.0
        """
        if not (math.isfinite(a) and math.isfinite(b)):
            return a + b

        if (a < 0.0 < b) or (b < 0.0 < a):
            return 0.0

        negate = a < 0.0 or b < 0.0
        tmp = _frombits((_tobits(abs(a)) + _tobits(abs(b))) >> 1)
        return -tmp if negate else tmp

    def sqrt(self, value):
        return math.sqrt(value)

    def cbrt(self, value):
        return math.copysign(abs(value) ** (1.0 / 3.0), value)


class ComplexArithmetic(Arithmetic[complex]):
    """Arithmetic of complex numbers whose parts are binary64 numbers.

    Complex numbers are not ordered, so only the iterative methods can be used with
    them.
    """

    __slots__ = ()
    ZERO = 0j
    ONE = 1 + 0j

    @property
    def ordered(self):
        return False

    @property
    def EPSILON(self):
        return sys.float_info.epsilon

    @property
    def precision(self):
        return sys.float_info.mant_dig

    def coerce(self, value):
        match value:
            case complex():
                return value

            case float() | int() | str():
                return complex(value)

            case _:
                raise TypeError(f"cannot convert {type(value).__name__} to complex")

    def isfinite(self, value):
        return cmath.isfinite(value)

    def middle(self, a, b):
        raise TypeError("complex numbers are not ordered")

    def sqrt(self, value):
        return math.sqrt(abs(value))

    def cbrt(self, value):
        return abs(value) ** (1.0 / 3.0)
