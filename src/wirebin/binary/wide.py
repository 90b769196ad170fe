from __future__ import annotations
from decimal import (
    Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow, ROUND_HALF_EVEN,
)
from typing import Callable, Union

# Enough digits for any intermediate of 70-bit group assembly (2^70 ~ 1.2e21).
# Inexact is trapped: a result that would need rounding raises instead.
_CTX = Context(prec=60, rounding=ROUND_HALF_EVEN, traps=[DivisionByZero, Inexact, InvalidOperation, Overflow])

WideLike = Union[int, str, Decimal, "WideInt"]


def _to_decimal(value: WideLike) -> Decimal:
    if isinstance(value, WideInt):
        return value._d
    if isinstance(value, bool):
        raise TypeError("bool is not a WideInt operand")
    if isinstance(value, int):
        return _exact(_CTX.add, Decimal(value), 0)
    if isinstance(value, str):
        try:
            d = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"not an integer: {value!r}") from e
    elif isinstance(value, Decimal):
        d = value
    else:
        raise TypeError(f"unsupported WideInt operand: {type(value).__name__}")
    if not d.is_finite() or d != d.to_integral_value():
        raise ValueError(f"not an integer: {value!r}")
    return _exact(_CTX.add, d.to_integral_value(), 0)


def _exact(op: Callable[..., Decimal], *args: Decimal | int) -> Decimal:
    try:
        return op(*args)
    except (Inexact, InvalidOperation) as e:
        raise OverflowError(f"WideInt result exceeds {_CTX.prec} digits") from e


class WideInt:
    """Integer arithmetic on decimal digits rather than machine words.

    Only add, subtract, multiply, divide-with-remainder and compare are
    primitive; shifts and ``&`` are derived from them, so nothing here
    depends on the width of a native integer. ``str()`` gives the decimal
    representation callers receive from wide-path reads.

    Values are exact up to 60 decimal digits; an operand or result that
    needs more raises OverflowError rather than being rounded.
    """

    __slots__ = ("_d",)

    def __init__(self, value: WideLike = 0):
        self._d = _to_decimal(value)

    # arithmetic
    def __add__(self, other: WideLike) -> "WideInt": return WideInt(_exact(_CTX.add, self._d, _to_decimal(other)))
    def __radd__(self, other: WideLike) -> "WideInt": return self + other
    def __sub__(self, other: WideLike) -> "WideInt": return WideInt(_exact(_CTX.subtract, self._d, _to_decimal(other)))
    def __rsub__(self, other: WideLike) -> "WideInt": return WideInt(other) - self
    def __mul__(self, other: WideLike) -> "WideInt": return WideInt(_exact(_CTX.multiply, self._d, _to_decimal(other)))
    def __rmul__(self, other: WideLike) -> "WideInt": return self * other
    def __neg__(self) -> "WideInt": return WideInt(_exact(_CTX.minus, self._d))

    def __divmod__(self, other: WideLike) -> tuple["WideInt", "WideInt"]:
        """Floor division, remainder takes the divisor's sign (as for int)."""
        b = _to_decimal(other)
        if b == 0:
            raise ZeroDivisionError("WideInt division by zero")
        q = _exact(_CTX.divide_int, self._d, b)
        r = _exact(_CTX.subtract, self._d, _exact(_CTX.multiply, q, b))
        if r != 0 and (r < 0) != (b < 0):
            q = _exact(_CTX.subtract, q, 1)
            r = _exact(_CTX.add, r, b)
        return WideInt(q), WideInt(r)

    def __floordiv__(self, other: WideLike) -> "WideInt": return divmod(self, other)[0]
    def __mod__(self, other: WideLike) -> "WideInt": return divmod(self, other)[1]

    # bitwise, expressed arithmetically
    def __lshift__(self, n: int) -> "WideInt":
        return self * (WideInt(2) ** n)

    def __rshift__(self, n: int) -> "WideInt":
        return self // (WideInt(2) ** n)

    def __pow__(self, n: int) -> "WideInt":
        if n < 0:
            raise ValueError("negative exponent")
        out = WideInt(1)
        for _ in range(n):
            out = out * self
        return out

    def __and__(self, other: WideLike) -> "WideInt":
        a, b = self, WideInt(other)
        if a < 0 or b < 0:
            raise ValueError("WideInt & is defined for non-negative operands only")
        out, bit = WideInt(0), WideInt(1)
        while a > 0 and b > 0:
            a, ra = divmod(a, 2)
            b, rb = divmod(b, 2)
            if ra == 1 and rb == 1:
                out = out + bit
            bit = bit * 2
        return out

    # comparison
    def _cmp(self, other: WideLike) -> int:
        return int(_CTX.compare(self._d, _to_decimal(other)))

    def __eq__(self, other: object) -> bool:
        try:
            return self._cmp(other) == 0  # type: ignore[arg-type]
        except TypeError:
            return NotImplemented

    def __lt__(self, other: WideLike) -> bool: return self._cmp(other) < 0
    def __le__(self, other: WideLike) -> bool: return self._cmp(other) <= 0
    def __gt__(self, other: WideLike) -> bool: return self._cmp(other) > 0
    def __ge__(self, other: WideLike) -> bool: return self._cmp(other) >= 0
    def __hash__(self) -> int: return hash(self._d)

    # conversion
    def __int__(self) -> int: return int(self._d)
    def __index__(self) -> int: return int(self._d)
    def __str__(self) -> str: return format(self._d, "f")
    def __repr__(self) -> str: return f"WideInt('{self}')"


WideInt.TWO_64 = WideInt("18446744073709551616")
WideInt.INT64_MAX = WideInt("9223372036854775807")
WideInt.INT64_MIN = WideInt("-9223372036854775808")
WideInt.UINT64_MAX = WideInt("18446744073709551615")
