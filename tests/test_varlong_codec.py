import pytest

from wirebin.binary.codecs import varlong
from wirebin.binary.codecs.cursor import Cursor
from wirebin.binary.errors import EncodingOverflow, MalformedVarInt, OutOfData
from wirebin.models.config import CodecConfig, IntBackend

NATIVE = CodecConfig(backend=IntBackend.NATIVE)
WIDE = CodecConfig(backend=IntBackend.WIDE)

SIGNED_VALUES = [
    0, 1, -1, 2, -2, 63, -64, 64, 300, -300,
    2**31 - 1, -(2**31), 2**32, -(2**32) - 7,
    2**62, -(2**62), 2**63 - 1, -(2**63),
    1234567890123456789, -1234567890123456789,
]
UNSIGNED_VALUES = [0, 1, 127, 128, 300, 2**32, 2**35 - 1, 2**56, 2**63, 2**64 - 1]


@pytest.mark.parametrize("value", SIGNED_VALUES)
def test_signed_paths_agree(value):
    native = varlong.write_var_long(value, NATIVE)
    wide = varlong.write_var_long(value, WIDE)
    assert native == wide
    assert varlong.read_var_long(Cursor(native), NATIVE) == value
    assert varlong.read_var_long(Cursor(native), WIDE) == str(value)


@pytest.mark.parametrize("value", UNSIGNED_VALUES)
def test_unsigned_paths_agree(value):
    native = varlong.write_unsigned_var_long(value, NATIVE)
    assert native == varlong.write_unsigned_var_long(value, WIDE)
    assert varlong.write_unsigned_var_long(str(value), WIDE) == native
    assert varlong.read_unsigned_var_long(Cursor(native), NATIVE) == value
    assert varlong.read_unsigned_var_long(Cursor(native), WIDE) == str(value)


def test_zigzag_table():
    for cfg in (NATIVE, WIDE):
        assert varlong.write_var_long(0, cfg) == b"\x00"
        assert varlong.write_var_long(-1, cfg) == b"\x01"
        assert varlong.write_var_long(1, cfg) == b"\x02"
        assert varlong.write_var_long(-2, cfg) == b"\x03"


def test_extremes_use_ten_bytes():
    assert varlong.write_var_long(-(2**63), NATIVE) == b"\xff" * 9 + b"\x01"
    assert varlong.write_var_long(2**63 - 1, NATIVE) == b"\xfe" + b"\xff" * 8 + b"\x01"
    assert varlong.write_unsigned_var_long(2**64 - 1, WIDE) == b"\xff" * 9 + b"\x01"


def test_minimal_length():
    for cfg in (NATIVE, WIDE):
        assert len(varlong.write_unsigned_var_long(2**7 - 1, cfg)) == 1
        assert len(varlong.write_unsigned_var_long(2**7, cfg)) == 2
        assert len(varlong.write_unsigned_var_long(2**63 - 1, cfg)) == 9
        assert len(varlong.write_unsigned_var_long(2**63, cfg)) == 10


def test_unsigned_above_signed_max_is_twos_complement_pattern():
    for cfg in (NATIVE, WIDE):
        assert varlong.write_var_long(2**64 - 1, cfg) == varlong.write_var_long(-1, cfg)
        assert varlong.write_unsigned_var_long(-1, cfg) == varlong.write_unsigned_var_long(2**64 - 1, cfg)


def test_wide_reads_accept_decimal_strings_in_writes():
    assert varlong.write_var_long("-9223372036854775808", WIDE) == varlong.write_var_long(-(2**63), NATIVE)


@pytest.mark.parametrize("cfg", [NATIVE, WIDE])
def test_out_of_range_writes(cfg):
    with pytest.raises(EncodingOverflow):
        varlong.write_var_long(2**64, cfg)
    with pytest.raises(EncodingOverflow):
        varlong.write_unsigned_var_long(-(2**63) - 1, cfg)


@pytest.mark.parametrize("cfg", [NATIVE, WIDE])
def test_read_errors(cfg):
    with pytest.raises(OutOfData):
        varlong.read_var_long(Cursor(b""), cfg)
    cur = Cursor(b"\x80" * 10 + b"\x01")
    with pytest.raises(MalformedVarInt):
        varlong.read_unsigned_var_long(cur, cfg)
    assert cur.tell() == 0
    cur = Cursor(b"\x80\x80")
    with pytest.raises(OutOfData):
        varlong.read_var_long(cur, cfg)
    assert cur.tell() == 0


@pytest.mark.parametrize("cfg", [NATIVE, WIDE])
def test_sequential_reads(cfg):
    data = b"".join(varlong.write_var_long(v, cfg) for v in (-1, 2**40, -(2**63)))
    cur = Cursor(data)
    got = [varlong.read_var_long(cur, cfg) for _ in range(3)]
    assert [int(g) for g in got] == [-1, 2**40, -(2**63)]
    assert cur.eof()


def test_auto_backend_follows_word_size():
    assert CodecConfig(native_int_bits=64).resolved_backend() is IntBackend.NATIVE
    assert CodecConfig(native_int_bits=32).resolved_backend() is IntBackend.WIDE
    data = varlong.write_var_long(-5)
    assert varlong.read_var_long(Cursor(data), CodecConfig(native_int_bits=32)) == "-5"


@pytest.mark.parametrize("write", [
    varlong.write_var_long_native,
    varlong.write_unsigned_var_long_native,
    varlong.write_var_long_wide,
    varlong.write_unsigned_var_long_wide,
])
@pytest.mark.parametrize("value", [2**64 + 5, 10**70, -(2**63) - 1])
def test_per_path_writers_reject_out_of_range(write, value):
    with pytest.raises(EncodingOverflow):
        write(value)


def test_per_path_writers_do_not_truncate():
    with pytest.raises(EncodingOverflow):
        varlong.write_var_long_wide(str(2**64 + 5))
    assert varlong.write_var_long_native(2**64 - 1) == varlong.write_var_long(-1)
