from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator

from ..errors import OutOfData


class Cursor:
    """A byte sequence with a read offset.

    Every read is bounds-checked; a read that fails leaves the offset where it was.
    """

    __slots__ = ("buf", "pos")

    def __init__(self, data: bytes | bytearray | memoryview, pos: int = 0):
        self.buf = memoryview(bytes(data))
        self.pos = 0
        self.seek(pos)

    def __len__(self) -> int: return len(self.buf)
    def remaining(self) -> int: return len(self.buf) - self.pos
    def tell(self) -> int: return self.pos
    def eof(self) -> bool: return self.pos >= len(self.buf)

    def seek(self, pos: int) -> None:
        if not (0 <= pos <= len(self.buf)): raise ValueError(f"seek out of bounds: {pos}")
        self.pos = pos

    def skip(self, n: int) -> None:
        if n < 0: raise ValueError(f"negative skip: {n}")
        if self.pos + n > len(self.buf):
            raise OutOfData(f"cannot skip {n} bytes at offset {self.pos}, {self.remaining()} left")
        self.seek(self.pos + n)

    def peek_byte(self) -> int:
        if self.pos >= len(self.buf):
            raise OutOfData(f"no bytes left in buffer at offset {self.pos}")
        return self.buf[self.pos]

    def consume_byte(self) -> int:
        b = self.peek_byte()
        self.pos += 1
        return b

    def peek(self, n: int) -> bytes:
        if n < 0: raise ValueError(f"negative length: {n}")
        end = self.pos + n
        if end > len(self.buf):
            raise OutOfData(f"need {n} bytes at offset {self.pos}, {self.remaining()} left")
        return self.buf[self.pos:end].tobytes()

    def take(self, n: int) -> bytes:
        out = self.peek(n)
        self.pos += n
        return out

    @contextmanager
    def rewind_on_error(self) -> Iterator["Cursor"]:
        """Restore the offset if the enclosed multi-byte read raises."""
        start = self.pos
        try:
            yield self
        except Exception:
            self.pos = start
            raise
