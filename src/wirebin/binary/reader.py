from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .codecs.cursor import Cursor
from .fields import codec_for
from ..models.common import DecodedField, FieldKind
from ..models.config import CodecConfig

BytesLike = Union[str, Path, bytes, bytearray, memoryview]


def _load_bytes(inp: BytesLike) -> bytes:
    if isinstance(inp, (bytes, bytearray, memoryview)):
        return bytes(inp)
    p = Path(str(inp))
    return p.read_bytes()


def read_field(cur: Cursor, kind: FieldKind | str, config: Optional[CodecConfig] = None) -> DecodedField:
    """Decode one field at the cursor. On failure the cursor is left where it was."""
    config = config or CodecConfig()
    kind = FieldKind(kind)
    start = cur.tell()
    value = codec_for(kind).read(cur, config)
    return DecodedField(kind=kind, offset=start, size=cur.tell() - start, value=value)


def iter_fields(
    data: BytesLike,
    kinds: Iterable[FieldKind | str],
    config: Optional[CodecConfig] = None,
) -> Iterator[DecodedField]:
    """Stream fields in order. Errors (OutOfData, MalformedVarInt) propagate to the caller."""
    cur = Cursor(_load_bytes(data))
    for kind in kinds:
        yield read_field(cur, kind, config)


def read_fields(
    data: BytesLike,
    kinds: Iterable[FieldKind | str],
    config: Optional[CodecConfig] = None,
) -> List[DecodedField]:
    return list(iter_fields(data, kinds, config))
