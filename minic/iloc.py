"""ARM32 instruction sequences (ILOC) and their assembly text.

The values handed to the loading and storing helpers are duck typed:

* ``reg_id``: register number held by the value, -1 when it lives elsewhere;
* ``memory_addr``: ``(base_reg_no, offset)`` of a stack slot, or ``None``;
* ``const_value``: the integer of a constant, absent or ``None`` otherwise;
* ``is_global``: true for global variables, which are addressed by ``name``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, TextIO, Tuple

from minic.platform_arm32 import FP_REG_NO, SP_REG_NO, const_expr, is_disp, reg_name

_LABEL_MARK = ":"


@dataclass(eq=False)
class ArmInst:
    """One ARM32 assembly instruction, label, comment or placeholder."""

    opcode: str
    result: str = ""
    arg1: str = ""
    arg2: str = ""
    cond: str = ""
    addition: str = ""
    dead: bool = False

    @property
    def is_label(self) -> bool:
        """Whether this instruction is a label definition."""
        return self.result == _LABEL_MARK

    def replace(
        self,
        opcode: str,
        result: str = "",
        arg1: str = "",
        arg2: str = "",
        cond: str = "",
        addition: str = "",
    ) -> None:
        """Overwrite the contents of the instruction."""
        self.opcode = opcode
        self.result = result
        self.arg1 = arg1
        self.arg2 = arg2
        self.cond = cond
        self.addition = addition

    def set_dead(self) -> None:
        """Mark the instruction as dead so that it produces no text."""
        self.dead = True

    def output(self) -> str:
        """Assembly text of the instruction; empty for dead or empty ones."""
        if self.dead or not self.opcode:
            return ""

        text = self.opcode + self.cond
        if self.result:
            text += self.result if self.result == _LABEL_MARK else " " + self.result
        for operand in (self.arg1, self.arg2, self.addition):
            if operand:
                text += "," + operand
        return text


def _memory_addr(var: Any) -> Tuple[int, int]:
    addr = getattr(var, "memory_addr", None)
    if addr is None:
        name = getattr(var, "name", "")
        raise ValueError(f"value {name!r} has neither a register nor a memory address")
    return addr


class ILocArm32:
    """An ordered sequence of ARM32 instructions for one function."""

    def __init__(self, module: Any = None) -> None:
        self.module = module
        self.code: List[ArmInst] = []

    def _emit(self, *fields: str) -> None:
        self.code.append(ArmInst(*fields))

    def comment(self, text: str) -> None:
        """Append an assembly comment."""
        self._emit("@", text)

    def to_str(self, num: int, flag: bool = True) -> str:
        """Decimal text of ``num``, prefixed with ``#`` as an immediate if ``flag``."""
        return ("#" if flag else "") + str(num)

    def label(self, name: str) -> None:
        """Append a label definition."""
        self._emit(name, _LABEL_MARK)

    def inst(self, op: str, rs: str, *args: str) -> None:
        """Append an instruction with a result operand and up to two sources."""
        if len(args) > 2:
            raise TypeError(f"an instruction takes at most two source operands, got {len(args)}")
        self._emit(op, rs, *args)

    def load_imm(self, rs_reg_no: int, constant: int) -> None:
        """Load an immediate: movw, plus movt when the upper half is not zero."""
        rs = reg_name(rs_reg_no)
        self._emit("movw", rs, "#:lower16:" + str(constant))
        if (constant >> 16) & 0xFFFF:
            self._emit("movt", rs, "#:upper16:" + str(constant))

    def load_symbol(self, rs_reg_no: int, name: str) -> None:
        """Load the address of symbol ``name``."""
        rs = reg_name(rs_reg_no)
        self._emit("movw", rs, "#:lower16:" + name)
        self._emit("movt", rs, "#:upper16:" + name)

    def load_base(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        """Load from ``[base, offset]``, going through ``rs`` when the offset is too big."""
        rs = reg_name(rs_reg_no)
        base = reg_name(base_reg_no)
        if is_disp(offset):
            if offset:
                base += "," + self.to_str(offset)
        else:
            self.load_imm(rs_reg_no, offset)
            base += "," + rs
        self._emit("ldr", rs, f"[{base}]")

    def store_base(self, src_reg_no: int, base_reg_no: int, disp: int, tmp_reg_no: int) -> None:
        """Store to ``[base, disp]``, going through ``tmp`` when the offset is too big."""
        base = reg_name(base_reg_no)
        if is_disp(disp):
            if disp:
                base += "," + self.to_str(disp)
        else:
            self.load_imm(tmp_reg_no, disp)
            base += "," + reg_name(tmp_reg_no)
        self._emit("str", reg_name(src_reg_no), f"[{base}]")

    def mov_reg(self, rs_reg_no: int, src_reg_no: int) -> None:
        """Copy one register into another."""
        self._emit("mov", reg_name(rs_reg_no), reg_name(src_reg_no))

    def load_var(self, rs_reg_no: int, src_var: Any) -> None:
        """Make sure the value of ``src_var`` ends up in register ``rs_reg_no``."""
        constant = getattr(src_var, "const_value", None)
        src_reg = getattr(src_var, "reg_id", -1)
        if constant is not None:
            self.load_imm(rs_reg_no, constant)
        elif src_reg != -1:
            if src_reg != rs_reg_no:
                self._emit("mov", reg_name(rs_reg_no), reg_name(src_reg))
        elif getattr(src_var, "is_global", False):
            self.load_symbol(rs_reg_no, src_var.name)
            rs = reg_name(rs_reg_no)
            self._emit("ldr", rs, f"[{rs}]")
        else:
            base_reg_no, offset = _memory_addr(src_var)
            self.load_base(rs_reg_no, base_reg_no, offset)

    def lea_var(self, rs_reg_no: int, var: Any) -> None:
        """Load the stack address of ``var`` into register ``rs_reg_no``."""
        base_reg_no, offset = _memory_addr(var)
        self._lea_stack(rs_reg_no, base_reg_no, offset)

    def store_var(self, src_reg_no: int, dest_var: Any, tmp_reg_no: int) -> None:
        """Store register ``src_reg_no`` into ``dest_var``, using ``tmp`` if needed."""
        dest_reg = getattr(dest_var, "reg_id", -1)
        if dest_reg != -1:
            if dest_reg != src_reg_no:
                self._emit("mov", reg_name(dest_reg), reg_name(src_reg_no))
        elif getattr(dest_var, "is_global", False):
            self.load_symbol(tmp_reg_no, dest_var.name)
            self._emit("str", reg_name(src_reg_no), f"[{reg_name(tmp_reg_no)}]")
        else:
            base_reg_no, offset = _memory_addr(dest_var)
            self.store_base(src_reg_no, base_reg_no, offset, tmp_reg_no)

    def _lea_stack(self, rs_reg_no: int, base_reg_no: int, offset: int) -> None:
        rs = reg_name(rs_reg_no)
        base = reg_name(base_reg_no)
        if const_expr(offset):
            self._emit("add", rs, base, self.to_str(offset))
        else:
            self.load_imm(rs_reg_no, offset)
            self._emit("add", rs, base, rs)

    def alloc_stack(self, frame_size: int, tmp_reg_no: int) -> None:
        """Set up a stack frame of ``frame_size`` bytes; nothing for an empty frame."""
        if frame_size == 0:
            return
        self.mov_reg(FP_REG_NO, SP_REG_NO)
        if const_expr(frame_size):
            self._emit("sub", "sp", "sp", self.to_str(frame_size))
        else:
            self.load_imm(tmp_reg_no, frame_size)
            self._emit("sub", "sp", "sp", reg_name(tmp_reg_no))

    def call_fun(self, name: str) -> None:
        """Call function ``name``; its result comes back in r0."""
        self._emit("bl", name)

    def nop(self) -> None:
        """Append an empty placeholder instruction."""
        self._emit("")

    def jump(self, label: str) -> None:
        """Append an unconditional branch to ``label``."""
        self._emit("b", label)

    def delete_unused_label(self) -> None:
        """Mark labels that no live branch targets as dead."""
        labels: List[ArmInst] = [
            arm for arm in self.code if not arm.dead and arm.opcode.startswith(".") and arm.is_label
        ]
        targets = {
            arm.result for arm in self.code if not arm.dead and arm.opcode.startswith("b")
        }
        for label_arm in labels:
            if label_arm.opcode not in targets:
                label_arm.set_dead()

    def output(self, file: TextIO, output_empty: bool = False) -> None:
        """Write the instructions to ``file``, one per line; labels are not indented."""
        for arm in self.code:
            text = arm.output()
            if arm.is_label:
                file.write(text + "\n")
            elif text:
                file.write("\t" + text + "\n")
            elif output_empty:
                file.write("\n")

    def instructions(self) -> Optional[List[str]]:
        """Text of all live, non-empty instructions in order."""
        return [text for text in (arm.output() for arm in self.code) if text]