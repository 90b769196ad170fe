from __future__ import annotations

from .cursor import Cursor
from .fixed import sign_int, sign_long
from ..errors import EncodingOverflow, MalformedVarInt

MAX_VARINT_BYTES = 5
_U32_MASK = 0xFFFFFFFF


def read_unsigned_var_int(cur: Cursor) -> int:
    """
    Read a 32-bit unsigned VarInt: 7 payload bits per byte, low group first,
    bit 7 set when another byte follows. The offset only moves on success.
    """
    with cur.rewind_on_error():
        value = 0
        for i in range(0, 7 * MAX_VARINT_BYTES, 7):
            b = cur.consume_byte()
            value |= (b & 0x7F) << i
            if not b & 0x80:
                return value & _U32_MASK
        raise MalformedVarInt(f"VarInt did not terminate after {MAX_VARINT_BYTES} bytes")


def write_unsigned_var_int(value: int) -> bytes:
    """Encode the low 32 bits of `value` in 1..5 bytes."""
    out = bytearray()
    value &= _U32_MASK
    for _ in range(MAX_VARINT_BYTES):
        if value >> 7:
            out.append((value & 0x7F) | 0x80)
        else:
            out.append(value)
            return bytes(out)
        value >>= 7
    raise EncodingOverflow("Value too large to be encoded as a VarInt")


def zigzag_decode(raw: int) -> int:
    """Inverse zigzag on a 64-bit word.

    Bit 0 is stretched across the word by the double shift, xor'd with the raw
    value and shifted down; the top bit is then restored from the raw value.
    """
    raw = sign_long(raw)
    temp = ((sign_long(raw << 63) >> 63) ^ raw) >> 1
    return sign_long(temp ^ (raw & (1 << 63)))


def zigzag_encode32(value: int) -> int:
    value = sign_int(value)
    return ((value << 1) ^ (value >> 31)) & _U32_MASK


def read_var_int(cur: Cursor) -> int:
    """Read a zigzag-encoded signed 32-bit VarInt."""
    return zigzag_decode(read_unsigned_var_int(cur))


def write_var_int(value: int) -> bytes:
    """Zigzag-encode the low 32 bits of `value` (as a signed int) and write it."""
    return write_unsigned_var_int(zigzag_encode32(value))
