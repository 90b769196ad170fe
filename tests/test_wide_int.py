from decimal import Decimal

import pytest

from wirebin.binary.wide import WideInt


def test_arithmetic_matches_int():
    a, b = 2**64 - 1, 12345
    wa = WideInt(a)
    assert int(wa + b) == a + b
    assert int(wa - b) == a - b
    assert int(wa * b) == a * b
    assert int(b - wa) == b - a
    assert int(-wa) == -a


@pytest.mark.parametrize("a,b", [(17, 5), (-17, 5), (17, -5), (-17, -5), (2**70, 128)])
def test_divmod_floor_semantics(a, b):
    q, r = divmod(WideInt(a), b)
    assert (int(q), int(r)) == divmod(a, b)


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        WideInt(1) // 0


def test_shifts_and_and():
    assert int(WideInt(1) << 63) == 2**63
    assert int(WideInt(2**64 - 1) >> 57) == 127
    assert int(WideInt(0b1101_0110) & 0b0111_1111) == 0b0101_0110
    assert int(WideInt(2**64 - 1) & (2**32 - 1)) == 2**32 - 1
    with pytest.raises(ValueError):
        WideInt(-1) & 1


def test_compare_and_str():
    assert WideInt("18446744073709551616") == WideInt.TWO_64
    assert WideInt(-1) < 0 < WideInt(1)
    assert WideInt("  42 ") == 42
    assert str(WideInt(-(2**63))) == "-9223372036854775808"
    assert str(WideInt(1) - 1) == "0"
    assert str(-WideInt(0)) == "0"
    assert WideInt(Decimal("1E+3")) == 1000
    assert repr(WideInt(5)) == "WideInt('5')"


def test_rejects_non_integers():
    with pytest.raises(ValueError):
        WideInt("1.5")
    with pytest.raises(ValueError):
        WideInt("abc")
    with pytest.raises(TypeError):
        WideInt(1.0)
    with pytest.raises(TypeError):
        WideInt(True)


def test_precision_is_bounded_not_rounded():
    big = 10**59 + 1
    assert int(WideInt(big)) == big
    with pytest.raises(OverflowError):
        WideInt(10**70 + 1)
    with pytest.raises(OverflowError):
        WideInt("1" * 61)
    with pytest.raises(OverflowError):
        WideInt(10**40 + 1) * 10**30
