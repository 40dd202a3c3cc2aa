"""A simple register allocator for the scratch registers r0 to r10."""

from __future__ import annotations

from typing import Any, List, Optional, Set

from minic.platform_arm32 import MAX_USABLE_REG_NUM


class SimpleRegisterAllocator:
    """Hands out load registers to values, spilling the earliest holder when full.

    A value takes part through its ``load_reg_id`` attribute, which is -1 while
    it holds no register.
    """

    def __init__(self) -> None:
        self._occupied: Set[int] = set()
        self._used: Set[int] = set()
        self._holders: List[Any] = []

    @staticmethod
    def _check(no: int) -> None:
        if not 0 <= no < MAX_USABLE_REG_NUM:
            raise ValueError(f"register {no} is not allocatable")

    def _mark(self, no: int) -> None:
        self._occupied.add(no)
        self._used.add(no)

    def _drop_holder(self, var: Any) -> None:
        for index, holder in enumerate(self._holders):
            if holder is var:
                del self._holders[index]
                return

    def is_occupied(self, no: int) -> bool:
        """Whether register ``no`` is currently taken."""
        self._check(no)
        return no in self._occupied

    def was_used(self, no: int) -> bool:
        """Whether register ``no`` has ever been taken."""
        self._check(no)
        return no in self._used

    def allocate(self, var: Optional[Any] = None, no: int = -1) -> int:
        """Give a register to ``var``, preferring ``no``, else the lowest free one.

        A value that already holds a register keeps it. When every register is
        taken, the value that has held its register longest gives it up.
        """
        if var is not None and var.load_reg_id != -1:
            return var.load_reg_id

        regno = -1
        if no != -1 and not self.is_occupied(no):
            regno = no
        else:
            regno = next(
                (k for k in range(MAX_USABLE_REG_NUM) if k not in self._occupied), -1
            )

        if regno != -1:
            self._mark(regno)
        else:
            if not self._holders:
                raise RuntimeError("no register free and none can be spilled")
            oldest = self._holders.pop(0)
            regno = oldest.load_reg_id
            oldest.load_reg_id = -1

        if var is not None:
            var.load_reg_id = regno
            self._holders.append(var)

        return regno

    def allocate_register(self, no: int) -> None:
        """Take register ``no``, spilling whichever value holds it."""
        if self.is_occupied(no):
            self.free_register(no)
        self._mark(no)

    def free(self, var: Optional[Any]) -> None:
        """Release the register held by ``var``, if any."""
        if var is None or var.load_reg_id == -1:
            return
        self._occupied.discard(var.load_reg_id)
        self._drop_holder(var)
        var.load_reg_id = -1

    def free_register(self, no: int) -> None:
        """Release register ``no``; -1 is ignored."""
        if no == -1:
            return
        self._check(no)
        self._occupied.discard(no)
        holder = next((val for val in self._holders if val.load_reg_id == no), None)
        if holder is not None:
            holder.load_reg_id = -1
            self._drop_holder(holder)