from __future__ import annotations
from typing import Any, Callable, Dict, NamedTuple, Optional

from .codecs import fixed, varint, varlong
from .codecs.cursor import Cursor
from ..models.common import FieldKind
from ..models.config import CodecConfig, IntBackend


class FieldCodec(NamedTuple):
    size: Optional[int]                                  # None for variable-length kinds
    read: Callable[[Cursor, CodecConfig], Any]
    write: Callable[[Any, CodecConfig], bytes]


def _fixed(size: int, read: Callable[[bytes], Any], write: Callable[[Any], bytes]) -> FieldCodec:
    return FieldCodec(size, lambda cur, cfg: read(cur.take(size)), lambda v, cfg: write(v))


def _float(size: int, read: Callable[[bytes], float], write: Callable[[float], bytes]) -> FieldCodec:
    def _read(cur: Cursor, cfg: CodecConfig) -> float:
        v = read(cur.take(size))
        return v if cfg.float_accuracy is None else round(v, cfg.float_accuracy)
    return FieldCodec(size, _read, lambda v, cfg: write(float(v)))


def _long(
    read_native: Callable[[bytes], int],
    read_wide: Callable[[bytes], str],
    write_native: Callable[[int], bytes],
    write_wide: Callable[[int | str], bytes],
) -> FieldCodec:
    def _read(cur: Cursor, cfg: CodecConfig) -> int | str:
        data = cur.take(8)
        return read_native(data) if cfg.resolved_backend() is IntBackend.NATIVE else read_wide(data)

    def _write(v: int | str, cfg: CodecConfig) -> bytes:
        if cfg.resolved_backend() is IntBackend.NATIVE:
            return write_native(int(v))
        return write_wide(v)
    return FieldCodec(8, _read, _write)


CODECS: Dict[FieldKind, FieldCodec] = {
    FieldKind.BOOL: _fixed(1, fixed.read_bool, fixed.write_bool),
    FieldKind.BYTE: _fixed(1, fixed.read_byte, fixed.write_byte),
    FieldKind.SIGNED_BYTE: _fixed(1, fixed.read_signed_byte, fixed.write_byte),
    FieldKind.SHORT: _fixed(2, fixed.read_short, fixed.write_short),
    FieldKind.SIGNED_SHORT: _fixed(2, fixed.read_signed_short, fixed.write_short),
    FieldKind.LSHORT: _fixed(2, fixed.read_lshort, fixed.write_lshort),
    FieldKind.SIGNED_LSHORT: _fixed(2, fixed.read_signed_lshort, fixed.write_lshort),
    FieldKind.TRIAD: _fixed(3, fixed.read_triad, fixed.write_triad),
    FieldKind.LTRIAD: _fixed(3, fixed.read_ltriad, fixed.write_ltriad),
    FieldKind.INT: _fixed(4, fixed.read_int, fixed.write_int),
    FieldKind.LINT: _fixed(4, fixed.read_lint, fixed.write_lint),
    FieldKind.LONG: _long(fixed.read_long, fixed.read_long_wide, fixed.write_long, fixed.write_long_wide),
    FieldKind.LLONG: _long(fixed.read_llong, fixed.read_llong_wide, fixed.write_llong, fixed.write_llong_wide),
    FieldKind.FLOAT: _float(4, fixed.read_float, fixed.write_float),
    FieldKind.LFLOAT: _float(4, fixed.read_lfloat, fixed.write_lfloat),
    FieldKind.DOUBLE: _float(8, fixed.read_double, fixed.write_double),
    FieldKind.LDOUBLE: _float(8, fixed.read_ldouble, fixed.write_ldouble),
    FieldKind.VARINT: FieldCodec(None, lambda cur, cfg: varint.read_var_int(cur),
                                 lambda v, cfg: varint.write_var_int(int(v))),
    FieldKind.UNSIGNED_VARINT: FieldCodec(None, lambda cur, cfg: varint.read_unsigned_var_int(cur),
                                          lambda v, cfg: varint.write_unsigned_var_int(int(v))),
    FieldKind.VARLONG: FieldCodec(None, varlong.read_var_long, varlong.write_var_long),
    FieldKind.UNSIGNED_VARLONG: FieldCodec(None, varlong.read_unsigned_var_long, varlong.write_unsigned_var_long),
}


def codec_for(kind: FieldKind | str) -> FieldCodec:
    return CODECS[FieldKind(kind)]
