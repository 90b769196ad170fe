from __future__ import annotations
from enum import Enum, IntEnum
from pydantic import BaseModel, Field


class Endianness(IntEnum):
    BIG = 0
    LITTLE = 1


class FieldKind(str, Enum):
    BOOL = "bool"
    BYTE = "byte"
    SIGNED_BYTE = "sbyte"
    SHORT = "short"
    SIGNED_SHORT = "sshort"
    LSHORT = "lshort"
    SIGNED_LSHORT = "slshort"
    TRIAD = "triad"
    LTRIAD = "ltriad"
    INT = "int"
    LINT = "lint"
    LONG = "long"
    LLONG = "llong"
    FLOAT = "float"
    LFLOAT = "lfloat"
    DOUBLE = "double"
    LDOUBLE = "ldouble"
    VARINT = "varint"
    UNSIGNED_VARINT = "uvarint"
    VARLONG = "varlong"
    UNSIGNED_VARLONG = "uvarlong"


class DecodedField(BaseModel):
    kind: FieldKind
    offset: int = Field(..., ge=0)
    size: int = Field(..., ge=1, le=10)
    # wide-path 64-bit reads come back as decimal strings
    value: bool | int | float | str
