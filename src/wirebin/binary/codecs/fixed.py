from __future__ import annotations
import re
import struct
import sys

from ..errors import EncodingOverflow, OutOfData
from ..wide import WideInt
from ...models.common import Endianness

ENDIANNESS = Endianness.BIG if sys.byteorder == "big" else Endianness.LITTLE

# Width of the word the double-shift sign extension operates on.
NATIVE_BITS = 64
_NATIVE_MASK = (1 << NATIVE_BITS) - 1

# bits -> (big-endian fmt, little-endian fmt) of the unsigned struct code
_UNSIGNED_FMT = {
    8: (">B", "<B"),
    16: (">H", "<H"),
    32: (">I", "<I"),
    64: (">Q", "<Q"),
}
WIDTHS = (8, 16, 24, 32, 64)


def _unpack(fmt: str, data: bytes | bytearray | memoryview):
    size = struct.calcsize(fmt)
    if len(data) < size:
        raise OutOfData(f"need {size} bytes, got {len(data)}")
    return struct.unpack_from(fmt, data)[0]


def _check_int(value: int, bits: int) -> int:
    if not (-(1 << (bits - 1)) <= value < (1 << bits)):
        raise EncodingOverflow(f"{value} does not fit in {bits} bits")
    return value & ((1 << bits) - 1)


# -----------------------------
# Sign / unsign
# -----------------------------

def sign(value: int, bits: int) -> int:
    """Sign-extend the low `bits` bits of a native word.

    Shifts the field's sign bit up to bit 63, then arithmetic-shifts it back down.
    """
    shift = NATIVE_BITS - bits
    word = (value << shift) & _NATIVE_MASK
    if word >> (NATIVE_BITS - 1):
        word -= 1 << NATIVE_BITS
    return word >> shift


def unsign(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def sign_byte(value: int) -> int: return sign(value, 8)
def unsign_byte(value: int) -> int: return unsign(value, 8)
def sign_short(value: int) -> int: return sign(value, 16)
def unsign_short(value: int) -> int: return unsign(value, 16)
def sign_triad(value: int) -> int: return sign(value, 24)
def unsign_triad(value: int) -> int: return unsign(value, 24)
def sign_int(value: int) -> int: return sign(value, 32)
def unsign_int(value: int) -> int: return unsign(value, 32)
def sign_long(value: int) -> int: return sign(value, 64)
def unsign_long(value: int) -> int: return unsign(value, 64)


# -----------------------------
# Generic width access (unsigned magnitude)
# -----------------------------

def _fmt(bits: int, endianness: Endianness) -> str:
    if bits not in _UNSIGNED_FMT:
        raise ValueError(f"unsupported width: {bits} bits")
    return _UNSIGNED_FMT[bits][endianness]


def read_be(data: bytes, bits: int) -> int:
    if bits == 24:
        return read_triad(data)
    return _unpack(_fmt(bits, Endianness.BIG), data)


def read_le(data: bytes, bits: int) -> int:
    if bits == 24:
        return read_ltriad(data)
    return _unpack(_fmt(bits, Endianness.LITTLE), data)


def write_be(value: int, bits: int) -> bytes:
    if bits == 24:
        return write_triad(value)
    return struct.pack(_fmt(bits, Endianness.BIG), _check_int(value, bits))


def write_le(value: int, bits: int) -> bytes:
    if bits == 24:
        return write_ltriad(value)
    return struct.pack(_fmt(bits, Endianness.LITTLE), _check_int(value, bits))


# -----------------------------
# Bool / byte
# -----------------------------

def read_bool(data: bytes) -> bool:
    return _unpack(">B", data) != 0


def write_bool(value: bool) -> bytes:
    return b"\x01" if value else b"\x00"


def read_byte(data: bytes) -> int: return _unpack(">B", data)
def read_signed_byte(data: bytes) -> int: return sign_byte(read_byte(data))
def write_byte(value: int) -> bytes: return write_be(value, 8)


# -----------------------------
# Short (16)
# -----------------------------

def read_short(data: bytes) -> int: return _unpack(">H", data)
def read_signed_short(data: bytes) -> int: return sign_short(read_short(data))
def write_short(value: int) -> bytes: return write_be(value, 16)
def read_lshort(data: bytes) -> int: return _unpack("<H", data)
def read_signed_lshort(data: bytes) -> int: return sign_short(read_lshort(data))
def write_lshort(value: int) -> bytes: return write_le(value, 16)


# -----------------------------
# Triad (24): there is no 24-bit struct code, go through 32 bits
# -----------------------------

def read_triad(data: bytes) -> int:
    if len(data) < 3:
        raise OutOfData(f"need 3 bytes, got {len(data)}")
    return struct.unpack(">I", b"\x00" + bytes(data[:3]))[0]


def write_triad(value: int) -> bytes:
    return struct.pack(">I", _check_int(value, 24))[1:]


def read_ltriad(data: bytes) -> int:
    if len(data) < 3:
        raise OutOfData(f"need 3 bytes, got {len(data)}")
    return struct.unpack("<I", bytes(data[:3]) + b"\x00")[0]


def write_ltriad(value: int) -> bytes:
    return struct.pack("<I", _check_int(value, 24))[:-1]


# -----------------------------
# Int (32), signed on read
# -----------------------------

def read_int(data: bytes) -> int: return sign_int(_unpack(">I", data))
def write_int(value: int) -> bytes: return write_be(value, 32)
def read_lint(data: bytes) -> int: return sign_int(_unpack("<I", data))
def write_lint(value: int) -> bytes: return write_le(value, 32)


# -----------------------------
# Long (64), signed on read
# -----------------------------

def read_long(data: bytes) -> int: return _unpack(">q", data)
def write_long(value: int) -> bytes: return write_be(value, 64)
def read_llong(data: bytes) -> int: return _unpack("<q", data)
def write_llong(value: int) -> bytes: return write_le(value, 64)


def read_long_wide(data: bytes) -> str:
    """Big-endian signed 64-bit read using only WideInt arithmetic.

    Assembles four 16-bit groups, then folds magnitudes above 2^63-1 back
    into the negative range. Returns a decimal string.
    """
    if len(data) < 8:
        raise OutOfData(f"need 8 bytes, got {len(data)}")
    value = WideInt(0)
    for i in range(0, 8, 2):
        value = value * 65536 + read_short(data[i:i + 2])
    if value > WideInt.INT64_MAX:
        value = value - WideInt.TWO_64
    return str(value)


def write_long_wide(value: int | str) -> bytes:
    try:
        v = WideInt(value)
    except OverflowError as e:
        raise EncodingOverflow(f"{value} does not fit in 64 bits") from e
    if v < WideInt.INT64_MIN or v > WideInt.UINT64_MAX:
        raise EncodingOverflow(f"{value} does not fit in 64 bits")
    if v < 0:
        v = v + WideInt.TWO_64
    out = bytearray()
    for divisor in (281474976710656, 4294967296, 65536, 1):
        out += write_short(int((v // divisor) % 65536))
    return bytes(out)


def read_llong_wide(data: bytes) -> str:
    if len(data) < 8:
        raise OutOfData(f"need 8 bytes, got {len(data)}")
    return read_long_wide(bytes(data[:8])[::-1])


def write_llong_wide(value: int | str) -> bytes:
    return write_long_wide(value)[::-1]


def flip_short_endianness(value: int) -> int: return read_lshort(write_short(value))
def flip_int_endianness(value: int) -> int: return read_lint(write_int(value))
def flip_long_endianness(value: int) -> int: return read_llong(write_long(value))


# -----------------------------
# Floating point
# -----------------------------

def _pack_float(fmt: str, value: float) -> bytes:
    try:
        return struct.pack(fmt, value)
    except OverflowError as e:
        raise EncodingOverflow(f"{value} does not fit a {struct.calcsize(fmt) * 8}-bit float") from e


def read_float(data: bytes) -> float: return _unpack(">f", data)
def read_rounded_float(data: bytes, accuracy: int) -> float: return round(read_float(data), accuracy)
def write_float(value: float) -> bytes: return _pack_float(">f", value)
def read_lfloat(data: bytes) -> float: return _unpack("<f", data)
def read_rounded_lfloat(data: bytes, accuracy: int) -> float: return round(read_lfloat(data), accuracy)
def write_lfloat(value: float) -> bytes: return _pack_float("<f", value)

def read_double(data: bytes) -> float: return _unpack(">d", data)
def write_double(value: float) -> bytes: return _pack_float(">d", value)
def read_ldouble(data: bytes) -> float: return _unpack("<d", data)
def write_ldouble(value: float) -> bytes: return _pack_float("<d", value)


_TRAILING_ZEROS = re.compile(r"(\.\d+?)0+$")


def print_float(value: float) -> str:
    """Fixed-point text with trailing zeros removed, keeping one decimal: 1.5 -> "1.5", 2.0 -> "2.0"."""
    return _TRAILING_ZEROS.sub(r"\1", "%F" % value)
