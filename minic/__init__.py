"""Compiler building blocks for a small C subset: AST nodes, DOT export, ARM32 emission helpers and code generator bases."""

__version__ = "1.0.1"