from __future__ import annotations
from typing import Any, Iterable, Optional, Tuple

from .fields import codec_for
from ..models.common import FieldKind
from ..models.config import CodecConfig


def write_field(kind: FieldKind | str, value: Any, config: Optional[CodecConfig] = None) -> bytes:
    return codec_for(kind).write(value, config or CodecConfig())


def write_fields(fields: Iterable[Tuple[FieldKind | str, Any]], config: Optional[CodecConfig] = None) -> bytes:
    """Concatenate the encodings of (kind, value) pairs."""
    config = config or CodecConfig()
    out = bytearray()
    for kind, value in fields:
        out += write_field(kind, value, config)
    return bytes(out)
