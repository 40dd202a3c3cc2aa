"""Abstract syntax tree nodes and the helpers the parser builds them with."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from minic.attr_types import BasicType, DigitIntAttr, TypeAttr, VarIdAttr


class AstOperatorType(Enum):
    """Kinds of AST nodes."""

    # leaves
    LEAF_LITERAL_UINT = 0
    LEAF_LITERAL_FLOAT = 1
    LEAF_VAR_ID = 2
    LEAF_TYPE = 3

    # internal nodes
    COMPILE_UNIT = 4
    FUNC_DEF = 5
    FUNC_FORMAL_PARAMS = 6
    FUNC_FORMAL_PARAM = 7
    FUNC_CALL = 8
    FUNC_REAL_PARAMS = 9
    BLOCK = 10
    COMPOUNDSTMT = 10  # another name for BLOCK
    RETURN = 11
    ASSIGN = 12
    DECL_STMT = 13
    VAR_DECL = 14
    ADD = 15
    SUB = 16
    MUL = 17
    DIV = 18
    MOD = 19
    NEG = 20

    # marks an invalid operator
    MAX = 21


_LEAF_TYPES = frozenset(
    {
        AstOperatorType.LEAF_LITERAL_UINT,
        AstOperatorType.LEAF_LITERAL_FLOAT,
        AstOperatorType.LEAF_VAR_ID,
        AstOperatorType.LEAF_TYPE,
    }
)


@dataclass(eq=False)
class AstNode:
    """A node of the abstract syntax tree."""

    node_type: AstOperatorType
    type: BasicType = BasicType.VOID
    line_no: int = -1
    integer_val: int = 0
    float_val: float = 0.0
    name: str = ""
    parent: Optional[AstNode] = field(default=None, repr=False)
    sons: List[AstNode] = field(default_factory=list)
    block_insts: List[Any] = field(default_factory=list, repr=False)
    val: Any = field(default=None, repr=False)
    need_scope: bool = True

    def is_leaf_node(self) -> bool:
        """Whether this node is a leaf of the tree."""
        return self.node_type in _LEAF_TYPES

    def insert_son_node(self, node: Optional[AstNode]) -> AstNode:
        """Append ``node`` as the last child; ``None`` is ignored. Returns self."""
        if node is not None:
            node.parent = self
            self.sons.append(node)
        return self

    @classmethod
    def new(cls, node_type: AstOperatorType, *args: Optional[AstNode]) -> AstNode:
        """Create a node of ``node_type`` with the given children, left to right."""
        parent = cls(node_type)
        for child in args:
            parent.insert_son_node(child)
        return parent

    @classmethod
    def from_int(cls, attr: DigitIntAttr) -> AstNode:
        """Create an unsigned integer literal leaf."""
        node = cls(AstOperatorType.LEAF_LITERAL_UINT, BasicType.INT, attr.lineno)
        node.integer_val = attr.val
        return node

    @classmethod
    def from_var_id(cls, attr: VarIdAttr) -> AstNode:
        """Create an identifier leaf from a lexer attribute."""
        return cls.from_id(attr.name, attr.lineno)

    @classmethod
    def from_id(cls, name: str, line_no: int) -> AstNode:
        """Create an identifier leaf."""
        node = cls(AstOperatorType.LEAF_VAR_ID, BasicType.VOID, line_no)
        node.name = name
        return node

    @classmethod
    def from_type(cls, value_type: BasicType) -> AstNode:
        """Create a type leaf."""
        return cls(AstOperatorType.LEAF_TYPE, value_type)


def create_contain_node(
    node_type: AstOperatorType,
    first_child: Optional[AstNode] = None,
    second_child: Optional[AstNode] = None,
    third_child: Optional[AstNode] = None,
) -> AstNode:
    """Create an internal node with up to three children."""
    return AstNode.new(node_type, first_child, second_child, third_child)


def create_func_def(
    type_node: AstNode,
    name_node: AstNode,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition node: type, name, params, body."""
    node = AstNode(AstOperatorType.FUNC_DEF, type_node.type, name_node.line_no)
    node.name = name_node.name
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_FORMAL_PARAMS)
    if block_node is None:
        block_node = AstNode(AstOperatorType.BLOCK)
    for child in (type_node, name_node, params_node, block_node):
        node.insert_son_node(child)
    return node


def create_func_def_from_attrs(
    type_attr: TypeAttr,
    id_attr: VarIdAttr,
    block_node: Optional[AstNode] = None,
    params_node: Optional[AstNode] = None,
) -> AstNode:
    """Create a function definition from the return type and name attributes."""
    type_node = create_type_node(type_attr)
    id_node = AstNode.from_id(id_attr.name, id_attr.lineno)
    return create_func_def(type_node, id_node, block_node, params_node)


def create_func_call(funcname_node: AstNode, params_node: Optional[AstNode] = None) -> AstNode:
    """Create a function call node: name, real params."""
    node = AstNode(AstOperatorType.FUNC_CALL)
    node.name = funcname_node.name
    if params_node is None:
        params_node = AstNode(AstOperatorType.FUNC_REAL_PARAMS)
    node.insert_son_node(funcname_node)
    node.insert_son_node(params_node)
    return node


def type_attr_to_type(attr: TypeAttr) -> BasicType:
    """Map a type keyword to a value type: int stays int, anything else is void."""
    return BasicType.INT if attr.type == BasicType.INT else BasicType.VOID


def create_type_node(attr: TypeAttr) -> AstNode:
    """Create a type leaf from a type attribute."""
    return AstNode.from_type(type_attr_to_type(attr))


def create_var_decl_node(var_type: BasicType | TypeAttr, id_attr: VarIdAttr) -> AstNode:
    """Create a single variable declaration node: type, name."""
    if isinstance(var_type, TypeAttr):
        var_type = type_attr_to_type(var_type)
    type_node = AstNode.from_type(var_type)
    id_node = AstNode.from_id(id_attr.name, id_attr.lineno)
    decl_node = create_contain_node(AstOperatorType.VAR_DECL, type_node, id_node)
    decl_node.type = var_type
    return decl_node


def create_var_decl_stmt_node(first_child: Optional[AstNode] = None) -> AstNode:
    """Create a declaration statement holding ``first_child``, taking its type."""
    stmt_node = create_contain_node(AstOperatorType.DECL_STMT)
    if first_child is not None:
        stmt_node.type = first_child.type
        stmt_node.insert_son_node(first_child)
    return stmt_node


def create_var_decl_stmt_from_attrs(type_attr: TypeAttr, id_attr: VarIdAttr) -> AstNode:
    """Create a declaration statement with one variable."""
    return create_var_decl_stmt_node(create_var_decl_node(type_attr, id_attr))


def add_var_decl_node(stmt_node: AstNode, id_attr: VarIdAttr) -> AstNode:
    """Append another variable of the statement's type to a declaration statement."""
    stmt_node.insert_son_node(create_var_decl_node(stmt_node.type, id_attr))
    return stmt_node