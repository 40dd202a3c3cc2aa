"""ARM32 platform facts: register names, immediates and displacements."""

from __future__ import annotations

MAX_REG_NUM = 16
"""Number of registers, r0 to r15."""

MAX_USABLE_REG_NUM = 11
"""Number of general purpose registers the allocator hands out, r0 to r10."""

TMP_REG_NO = 10
"""Register borrowed for temporary values."""

FP_REG_NO = 11
SP_REG_NO = 13
LX_REG_NO = 14

REG_NAMES = (
    "r0",
    "r1",
    "r2",
    "r3",
    "r4",
    "r5",
    "r6",
    "r7",
    "r8",
    "r9",
    "r10",
    "fp",
    "ip",
    "sp",
    "lr",
    "pc",
)

_REG_NAME_SET = frozenset(REG_NAMES)
_MASK32 = 0xFFFFFFFF


def _rotate_left_two(num: int) -> int:
    return ((num << 2) | (num >> 30)) & _MASK32


def _encodable(num: int) -> bool:
    value = num & _MASK32
    for _ in range(16):
        if value <= 0xFF:
            return True
        value = _rotate_left_two(value)
    return False


def const_expr(num: int) -> bool:
    """Whether ``num`` or its negation is an 8-bit value rotated by an even amount."""
    return _encodable(num) or _encodable(-num)


def is_disp(num: int) -> bool:
    """Whether ``num`` is a valid load/store displacement."""
    return -4096 < num < 4096


def is_reg(name: str) -> bool:
    """Whether ``name`` is an ARM32 register name."""
    return name in _REG_NAME_SET


def reg_name(reg_no: int) -> str:
    """Assembly name of register ``reg_no``."""
    if not 0 <= reg_no < MAX_REG_NUM:
        raise ValueError(f"no such register: {reg_no}")
    return REG_NAMES[reg_no]