from __future__ import annotations


class BinaryDataError(ValueError):
    """Raised when a byte sequence cannot be decoded."""


class OutOfData(BinaryDataError):
    """A read needed more bytes than remain. Retry once more input arrives."""


class MalformedVarInt(BinaryDataError):
    """A VarInt/VarLong did not terminate within its maximum byte count."""


class EncodingOverflow(ValueError):
    """A value does not fit the width or format it was asked to encode into."""
