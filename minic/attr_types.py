"""Attribute records passed from the lexer to the parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

_UINT32_MAX = 0xFFFFFFFF


class BasicType(IntEnum):
    """Basic value types known to the front end."""

    NONE = 0  # the node has no type
    VOID = 1  # only for function return values
    INT = 2
    FLOAT = 3
    MAX = 4  # unknown type


@dataclass(frozen=True)
class DigitIntAttr:
    """An unsigned 32-bit integer literal and the line it appears on."""

    val: int
    lineno: int

    def __post_init__(self) -> None:
        if not 0 <= self.val <= _UINT32_MAX:
            raise ValueError(f"integer literal {self.val} does not fit in 32 bits")


@dataclass(frozen=True)
class DigitRealAttr:
    """A real literal and the line it appears on."""

    val: float
    lineno: int


@dataclass(frozen=True)
class VarIdAttr:
    """An identifier (variable or function name) and the line it appears on."""

    name: str
    lineno: int


@dataclass(frozen=True)
class TypeAttr:
    """A type keyword and the line it appears on."""

    type: BasicType
    lineno: int