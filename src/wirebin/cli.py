from __future__ import annotations
import argparse, json, sys
from typing import Any

from .binary.codecs.cursor import Cursor
from .binary.reader import _load_bytes, read_field, read_fields
from .binary.writer import write_field
from .models.common import FieldKind
from .models.config import CodecConfig, IntBackend

_FLOAT_KINDS = {FieldKind.FLOAT, FieldKind.LFLOAT, FieldKind.DOUBLE, FieldKind.LDOUBLE}


def _parse_value(kind: FieldKind, text: str) -> Any:
    if kind in _FLOAT_KINDS:
        return float(text)
    if kind is FieldKind.BOOL:
        return text.strip().lower() in ("1", "true", "yes", "on")
    return int(text, 0)


def _parse_hex(text: str) -> bytes:
    return bytes.fromhex(text.replace(":", " "))


def _config(args) -> CodecConfig:
    return CodecConfig(backend=args.backend, float_accuracy=args.accuracy)


def cmd_encode(args):
    kind = FieldKind(args.kind)
    data = write_field(kind, _parse_value(kind, args.value), _config(args))
    print(data.hex(args.sep) if args.sep else data.hex())


def cmd_decode(args):
    cur = Cursor(_parse_hex(args.data))
    field = read_field(cur, args.kind, _config(args))
    out = field.model_dump(mode="json")
    out["remaining"] = cur.remaining()
    print(json.dumps(out, indent=2))


def cmd_scan(args):
    raw = _parse_hex(args.input) if args.hex else _load_bytes(args.input)
    kinds = [k.strip() for k in args.fields.split(",") if k.strip()]
    fields = read_fields(raw, kinds, _config(args))
    print(json.dumps([f.model_dump(mode="json") for f in fields], indent=2))
    consumed = sum(f.size for f in fields)
    if consumed < len(raw):
        print(f"Warning: {len(raw) - consumed} trailing bytes not decoded", file=sys.stderr)


def build_parser():
    p = argparse.ArgumentParser(prog="wirebin", description="Fixed-width and VarInt/VarLong binary codec utilities")
    kinds = [k.value for k in FieldKind]

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--backend", default=IntBackend.AUTO.value, choices=[b.value for b in IntBackend],
                        help="64-bit integer path: native words or wide decimal arithmetic")
    common.add_argument("--accuracy", type=int, default=None, help="Round decoded floats to N decimal places")

    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("encode", parents=[common], help="encode one value and print it as hex")
    sp.add_argument("kind", choices=kinds)
    sp.add_argument("value")
    sp.add_argument("--sep", default=None, help="Separator between hex bytes, e.g. ' '")
    sp.set_defaults(func=cmd_encode)

    sp = sub.add_parser("decode", parents=[common], help="decode one value from hex and print it as JSON")
    sp.add_argument("kind", choices=kinds)
    sp.add_argument("data", help="Hex bytes, e.g. 'ac 02' or 'ac02'")
    sp.set_defaults(func=cmd_decode)

    sp = sub.add_parser("scan", parents=[common], help="decode a sequence of fields from a file or hex")
    sp.add_argument("input", help="Path to a binary file (or hex bytes with --hex)")
    sp.add_argument("--fields", required=True, help="Comma-separated field kinds, e.g. varint,lshort,float")
    sp.add_argument("--hex", action="store_true", help="Treat INPUT as hex bytes rather than a path")
    sp.set_defaults(func=cmd_scan)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    try:
        ns.func(ns)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
