"""Common drivers for code generators that write their output to a file."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional, Protocol, TextIO, Union
import os


class FunctionLike(Protocol):
    """What the assembly driver needs to know about a function."""

    is_builtin: bool


class ModuleLike(Protocol):
    """What the assembly driver needs to know about a compilation unit."""

    functions: Iterable[Any]


class CodeGenerator(ABC):
    """Base of all code generators: one generator works on one module.

    While :meth:`run` is active, ``fp`` is the text stream that output goes to.
    """

    def __init__(self, module: Any) -> None:
        self.module = module
        self.fp: Optional[TextIO] = None
        self.show_linear_ir = False

    def run(self, out_file_name: Union[str, "os.PathLike[str]", None] = "") -> bool:
        """Generate code into ``out_file_name``, or to standard output if it is empty.

        Raises ``OSError`` when the file cannot be created.
        """
        if out_file_name:
            with open(out_file_name, "w", encoding="utf-8") as out:
                self.fp = out
                try:
                    return self.generate()
                finally:
                    self.fp = None

        self.fp = sys.stdout
        try:
            return self.generate()
        finally:
            self.fp = None

    @abstractmethod
    def generate(self) -> bool:
        """Write the generated code to ``fp``; return whether it succeeded."""


class CodeGeneratorAsm(CodeGenerator):
    """Base of generators that emit assembly: header, data section, code section.

    The module must expose ``functions``; each function must expose
    ``is_builtin``. Built-in functions produce no code.
    """

    def __init__(self, module: Any) -> None:
        super().__init__(module)
        # Label numbering is unique across the whole file, not per function.
        self.label_index = 0

    @abstractmethod
    def gen_header(self) -> None:
        """Write the assembly file header."""

    @abstractmethod
    def gen_data_section(self) -> None:
        """Write the global variables, initialised and uninitialised."""

    @abstractmethod
    def gen_function_code(self, func: Any) -> None:
        """Write the instructions of one function into the text section."""

    @abstractmethod
    def register_allocation(self, func: Any) -> None:
        """Assign registers and stack slots for one function."""

    def gen_code_section(self) -> None:
        """Write the code of every function that is not built in."""
        self.label_index = 0
        for func in self.module.functions:
            if not func.is_builtin:
                self.gen_function_code(func)

    def generate(self) -> bool:
        """Write header, data section and code section, in that order."""
        self.gen_header()
        self.gen_data_section()
        self.gen_code_section()
        return True