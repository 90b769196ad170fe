from __future__ import annotations
import sys
from enum import Enum
from pydantic import BaseModel, Field, field_validator


def _interpreter_int_bits() -> int:
    # sys.maxsize is 2**63-1 on 64-bit builds, 2**31-1 on 32-bit ones
    return sys.maxsize.bit_length() + 1


class IntBackend(str, Enum):
    AUTO = "auto"
    NATIVE = "native"
    WIDE = "wide"


class CodecConfig(BaseModel):
    backend: IntBackend = IntBackend.AUTO
    native_int_bits: int = Field(default_factory=_interpreter_int_bits)
    float_accuracy: int | None = Field(default=None, ge=0, le=17)

    @field_validator("native_int_bits")
    @classmethod
    def _known_word_size(cls, v: int) -> int:
        if v not in (32, 64):
            raise ValueError("native_int_bits must be 32 or 64")
        return v

    def resolved_backend(self) -> IntBackend:
        """`auto` becomes `native` on a 64-bit word and `wide` otherwise."""
        if self.backend is not IntBackend.AUTO:
            return self.backend
        return IntBackend.NATIVE if self.native_int_bits >= 64 else IntBackend.WIDE
