from __future__ import annotations
from typing import Optional, Union

from .cursor import Cursor
from .fixed import sign_long
from .varint import zigzag_decode
from ..errors import EncodingOverflow, MalformedVarInt
from ..wide import WideInt
from ...models.config import CodecConfig, IntBackend

MAX_VARLONG_BYTES = 10
_U64_MASK = 0xFFFFFFFFFFFFFFFF
_MIN = -(1 << 63)
_MAX = (1 << 64) - 1

LongValue = Union[int, str]


def _check_range(value: LongValue) -> None:
    # Both paths accept the same inputs so that their output never differs.
    try:
        v = WideInt(value)
    except OverflowError as e:
        raise EncodingOverflow(f"{value} is outside the 64-bit range") from e
    if not (WideInt(_MIN) <= v <= WideInt(_MAX)):
        raise EncodingOverflow(f"{value} is outside the 64-bit range")


def _use_native(config: Optional[CodecConfig]) -> bool:
    return (config or CodecConfig()).resolved_backend() is IntBackend.NATIVE


# -----------------------------
# Native path: 64-bit words, shifts and masks
# -----------------------------

def read_unsigned_var_long_native(cur: Cursor) -> int:
    with cur.rewind_on_error():
        value = 0
        for i in range(0, 7 * MAX_VARLONG_BYTES, 7):
            b = cur.consume_byte()
            value |= (b & 0x7F) << i
            if not b & 0x80:
                return value & _U64_MASK
        raise MalformedVarInt(f"VarLong did not terminate after {MAX_VARLONG_BYTES} bytes")


def read_var_long_native(cur: Cursor) -> int:
    return zigzag_decode(read_unsigned_var_long_native(cur))


def write_unsigned_var_long_native(value: int) -> bytes:
    _check_range(value)
    out = bytearray()
    value &= _U64_MASK
    for _ in range(MAX_VARLONG_BYTES):
        if value >> 7:
            out.append((value & 0x7F) | 0x80)
        else:
            out.append(value)
            return bytes(out)
        value >>= 7
    raise EncodingOverflow("Value too large to be encoded as a VarLong")


def write_var_long_native(value: int) -> bytes:
    _check_range(value)
    value = sign_long(value)
    return write_unsigned_var_long_native((value << 1) ^ (value >> 63))


# -----------------------------
# Wide path: WideInt arithmetic only, decimal strings out
# -----------------------------

def read_unsigned_var_long_wide(cur: Cursor) -> str:
    with cur.rewind_on_error():
        value = WideInt(0)
        weight = WideInt(1)
        for _ in range(MAX_VARLONG_BYTES):
            b = cur.consume_byte()
            value = value + weight * (b & 0x7F)
            if not b & 0x80:
                return str(value % WideInt.TWO_64)
            weight = weight * 128
        raise MalformedVarInt(f"VarLong did not terminate after {MAX_VARLONG_BYTES} bytes")


def read_var_long_wide(cur: Cursor) -> str:
    raw = WideInt(read_unsigned_var_long_wide(cur))
    result, odd = divmod(raw, 2)
    if odd == 1:
        result = -result - 1
    return str(result)


def write_unsigned_var_long_wide(value: LongValue) -> bytes:
    _check_range(value)
    v = WideInt(value)
    if v < 0:
        v = v + WideInt.TWO_64
    out = bytearray()
    for _ in range(MAX_VARLONG_BYTES):
        v, byte = divmod(v, 128)
        if v != 0:
            out.append(int(byte) | 0x80)
        else:
            out.append(int(byte))
            return bytes(out)
    raise EncodingOverflow("Value too large to be encoded as a VarLong")


def write_var_long_wide(value: LongValue) -> bytes:
    _check_range(value)
    v = WideInt(value)
    if v > WideInt.INT64_MAX:
        v = v - WideInt.TWO_64
    zigzag = v * 2 if v >= 0 else -v * 2 - 1
    return write_unsigned_var_long_wide(zigzag)


# -----------------------------
# Dispatch
# -----------------------------

def read_unsigned_var_long(cur: Cursor, config: Optional[CodecConfig] = None) -> LongValue:
    """Read an unsigned VarLong (1..10 bytes). The wide path returns a decimal string."""
    if _use_native(config):
        return read_unsigned_var_long_native(cur)
    return read_unsigned_var_long_wide(cur)


def read_var_long(cur: Cursor, config: Optional[CodecConfig] = None) -> LongValue:
    """Read a zigzag-encoded signed VarLong. The wide path returns a decimal string."""
    if _use_native(config):
        return read_var_long_native(cur)
    return read_var_long_wide(cur)


def write_unsigned_var_long(value: LongValue, config: Optional[CodecConfig] = None) -> bytes:
    _check_range(value)
    if _use_native(config):
        return write_unsigned_var_long_native(int(WideInt(value)))
    return write_unsigned_var_long_wide(value)


def write_var_long(value: LongValue, config: Optional[CodecConfig] = None) -> bytes:
    """Zigzag-encode a 64-bit value. Inputs above 2^63-1 are taken as their two's-complement pattern."""
    _check_range(value)
    if _use_native(config):
        return write_var_long_native(int(WideInt(value)))
    return write_var_long_wide(value)
