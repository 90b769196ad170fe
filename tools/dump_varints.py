#!/usr/bin/env python3
# Walk a capture as back-to-back VarInts (or VarLongs) and print each with its raw bytes.
import sys
from pathlib import Path
from wirebin.binary.reader import _load_bytes
from wirebin.binary.codecs.cursor import Cursor
from wirebin.binary.codecs.varint import read_unsigned_var_int, zigzag_decode
from wirebin.binary.codecs.varlong import read_unsigned_var_long
from wirebin.binary.errors import BinaryDataError
from wirebin.models.config import CodecConfig

def main(path: Path, long_mode: bool = False):
    cur = Cursor(_load_bytes(str(path)))
    cfg = CodecConfig()
    while not cur.eof():
        start = cur.tell()
        try:
            raw = read_unsigned_var_long(cur, cfg) if long_mode else read_unsigned_var_int(cur)
        except BinaryDataError as e:
            print(f"@{start}: stopped: {e} (next bytes {cur.peek(min(10, cur.remaining())).hex()})")
            return 1
        raw_bytes = cur.buf[start:cur.tell()].tobytes().hex()
        print(f"@{start:6d} {raw_bytes:<20} unsigned={raw} zigzag={zigzag_decode(int(raw))}")
    return 0

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: dump_varints.py FILE [--long]", file=sys.stderr)
        raise SystemExit(2)
    raise SystemExit(main(Path(sys.argv[1]), "--long" in sys.argv[2:]))
