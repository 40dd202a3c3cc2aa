"""Graphviz DOT rendering of the abstract syntax tree."""

from __future__ import annotations

import itertools
import os
import struct
from typing import Iterator, List, Optional, Union

from minic.astnodes import AstNode, AstOperatorType
from minic.attr_types import BasicType

_OPERATOR_LABELS = {
    AstOperatorType.BLOCK: "block",
    AstOperatorType.RETURN: "return",
    AstOperatorType.FUNC_DEF: "func-def",
    AstOperatorType.COMPILE_UNIT: "compile-unit",
    AstOperatorType.FUNC_FORMAL_PARAMS: "formal-params",
    AstOperatorType.VAR_DECL: "var-decl",
    AstOperatorType.DECL_STMT: "decl-stmt",
    AstOperatorType.ADD: "+",
    AstOperatorType.SUB: "-",
    AstOperatorType.MUL: "*",
    AstOperatorType.DIV: "/",
    AstOperatorType.MOD: "%",
    AstOperatorType.NEG: "-",
    AstOperatorType.ASSIGN: "=",
    AstOperatorType.FUNC_CALL: "func-call",
    AstOperatorType.FUNC_REAL_PARAMS: "real-params",
}

_TYPE_NAMES = {
    BasicType.INT: "int",
    BasicType.VOID: "void",
    BasicType.FLOAT: "float",
}

_LEAF_ATTRS = (
    ("fontcolor", "black"),
    ("fontname", "SimSun"),
    ("shape", "record"),
    ("style", "filled"),
    ("fillcolor", "yellow"),
)

_RECORD_SPECIALS = "{}|<>"


def _as_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - (1 << 32) if value & 0x80000000 else value


def _as_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def node_label(node: AstNode) -> str:
    """Text shown for ``node`` in the rendered tree."""
    kind = node.node_type
    if kind is AstOperatorType.LEAF_LITERAL_UINT:
        return str(_as_int32(node.integer_val))
    if kind is AstOperatorType.LEAF_LITERAL_FLOAT:
        return f"{_as_float32(node.float_val):f}"
    if kind is AstOperatorType.LEAF_VAR_ID:
        return node.name
    if kind is AstOperatorType.LEAF_TYPE:
        return _TYPE_NAMES.get(node.type, "unknown")
    return _OPERATOR_LABELS.get(kind, "unknown")


def _escape(text: str, record: bool) -> str:
    out = []
    for ch in text:
        if ch == "\\":
            out.append("\\\\")
        elif ch == '"':
            out.append('\\"')
        elif record and ch in _RECORD_SPECIALS:
            out.append("\\" + ch)
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def _format_attrs(attrs) -> str:
    return ", ".join(f"{key}={value}" for key, value in attrs)


class _DotBuilder:
    def __init__(self) -> None:
        self._ids: Iterator[int] = itertools.count()
        self.lines: List[str] = []

    def _new_id(self) -> str:
        return f"n{next(self._ids)}"

    def visit(self, node: Optional[AstNode]) -> Optional[str]:
        if node is None:
            return None
        if node.is_leaf_node():
            return self._leaf(node)
        return self._internal(node)

    def _leaf(self, node: AstNode) -> str:
        node_id = self._new_id()
        attrs = [("label", _escape(node_label(node), record=True))]
        attrs.extend((key, _escape(value, record=False)) for key, value in _LEAF_ATTRS)
        self.lines.append(f"  {node_id} [{_format_attrs(attrs)}];")
        return node_id

    def _internal(self, node: AstNode) -> str:
        son_ids = [son_id for son_id in map(self.visit, node.sons) if son_id is not None]
        node_id = self._new_id()
        attrs = [
            ("label", _escape(node_label(node), record=False)),
            ("shape", _escape("ellipse", record=False)),
        ]
        self.lines.append(f"  {node_id} [{_format_attrs(attrs)}];")
        self.lines.extend(f"  {node_id} -> {son_id};" for son_id in son_ids)
        return node_id


def to_dot(root: Optional[AstNode]) -> str:
    """Describe the tree under ``root`` as a directed Graphviz graph."""
    builder = _DotBuilder()
    builder.visit(root)
    body = "\n".join(builder.lines)
    parts = ["digraph ast {", '  dpi="600";']
    if body:
        parts.append(body)
    parts.append("}")
    return "\n".join(parts) + "\n"


def output_ast(root: Optional[AstNode], file_path: Union[str, "os.PathLike[str]"]) -> None:
    """Write the DOT description of the tree under ``root`` to ``file_path``."""
    with open(file_path, "w", encoding="utf-8") as out:
        out.write(to_dot(root))