import mpmath
import mpmath.ctx_mp_python

from zerofind.number.arithmetic import Arithmetic


class MPArithmetic(Arithmetic[mpmath.mpf]):
    """Arithmetic of mpmath numbers.

    Epsilon and precision follow the global context ``mpmath.mp``, so they change
    with ``mp.prec`` and ``mp.dps``.

    Parameters
    ----------
    ordered : bool, default=True
        ``False`` for complex (:class:`mpmath.mpc`) operands.
    """

    __slots__ = ("_ordered",)
    ZERO = mpmath.mpf(0)
    ONE = mpmath.mpf(1)
    _ordered: bool

    def __init__(self, ordered: bool = True):
        self._ordered = ordered

    @property
    def ordered(self):
        return self._ordered

    @property
    def EPSILON(self):
        return mpmath.mp.eps

    @property
    def precision(self):
        return mpmath.mp.prec

    def coerce(self, value):
        match value:
            case mpmath.ctx_mp_python.mpnumeric():
                return value

            case complex() if self._ordered:
                raise TypeError("cannot convert complex to mpf")

            case float() | int() | str() | complex():
                return mpmath.mpmathify(value)

            case _:
                raise TypeError(f"cannot convert {type(value).__name__} to mpf")

    def isfinite(self, value):
        return mpmath.isfinite(value)

    def middle(self, a, b):
        """Return a value lying between `a` and `b`.

        If `a` and `b` have opposite signs, zero is returned. Endpoints of the same
        sign that differ by more than a factor of two are split at their geometric
        mean, and a zero endpoint is approached ``precision`` bits at a time. Thus a
        bracket spanning many binades closes as fast as a float bracket does.

        Examples
        --------
        >>> arith = MPArithmetic()
        >>> arith.middle(mpmath.mpf(1), mpmath.mpf(2))
        mpf('1.5')
        >>> arith.middle(mpmath.mpf(1), mpmath.mpf(100))
        mpf('10.0')
        """
        if (a < 0 < b) or (b < 0 < a):
            return self.ZERO

        lo, hi = sorted((abs(a), abs(b)))

        if hi > 2 * lo:
            if lo == 0:
                m = hi * mpmath.mp.eps
            else:
                m = mpmath.sqrt(lo) * mpmath.sqrt(hi)

            if a < 0 or b < 0:
                m = -m

            if min(a, b) < m < max(a, b):
                return m

        return (a + b) / 2

    def sqrt(self, value):
        return mpmath.sqrt(abs(value))

    def cbrt(self, value):
        return mpmath.cbrt(abs(value))
