import decimal

from zerofind.number.arithmetic import Arithmetic


class DecimalArithmetic(Arithmetic[decimal.Decimal]):
    """Arithmetic of :class:`decimal.Decimal`.

    Epsilon and precision follow the current decimal context.

    Examples
    --------
    >>> import decimal
    >>> with decimal.localcontext(prec=10):
    ...     DecimalArithmetic().EPSILON
    Decimal('1E-9')
    """

    __slots__ = ()
    ZERO = decimal.Decimal(0)
    ONE = decimal.Decimal(1)

    @property
    def EPSILON(self):
        return decimal.Decimal(1).scaleb(1 - decimal.getcontext().prec)

    @property
    def precision(self):
        # digits to bits, rounded up
        return (decimal.getcontext().prec * 3322 + 999) // 1000

    def coerce(self, value):
        match value:
            case decimal.Decimal():
                return value

            case float() | int() | str():
                return decimal.Decimal(value)

            case _:
                raise TypeError(f"cannot convert {type(value).__name__} to Decimal")

    def isfinite(self, value):
        return value.is_finite()

    def middle(self, a, b):
        # same splitting rule as MPArithmetic.middle
        if (a < 0 < b) or (b < 0 < a):
            return self.ZERO

        lo, hi = sorted((abs(a), abs(b)))

        if hi > 2 * lo:
            m = hi * self.EPSILON if lo == 0 else lo.sqrt() * hi.sqrt()

            if a < 0 or b < 0:
                m = -m

            if min(a, b) < m < max(a, b):
                return m

        return (a + b) / 2

    def sqrt(self, value):
        return abs(value).sqrt()

    def cbrt(self, value):
        value = abs(value)

        if value == 0:
            return value

        return (value.ln() / 3).exp()
