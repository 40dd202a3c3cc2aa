import pytest

from minic.astnodes import (
    AstNode,
    AstOperatorType,
    add_var_decl_node,
    create_contain_node,
    create_func_call,
    create_func_def,
    create_func_def_from_attrs,
    create_type_node,
    create_var_decl_node,
    create_var_decl_stmt_from_attrs,
    create_var_decl_stmt_node,
    type_attr_to_type,
)
from minic.attr_types import BasicType, DigitIntAttr, TypeAttr, VarIdAttr

Op = AstOperatorType


@pytest.mark.parametrize(
    "node_type, leaf",
    [
        (Op.LEAF_LITERAL_UINT, True),
        (Op.LEAF_LITERAL_FLOAT, True),
        (Op.LEAF_VAR_ID, True),
        (Op.LEAF_TYPE, True),
        (Op.ADD, False),
        (Op.BLOCK, False),
        (Op.FUNC_DEF, False),
    ],
)
def test_is_leaf_node(node_type, leaf):
    assert AstNode(node_type).is_leaf_node() is leaf


def test_compoundstmt_is_block():
    node = AstNode(Op.COMPOUNDSTMT)
    assert node.node_type is Op.BLOCK
    assert node.is_leaf_node() is False


def test_insert_son_node_sets_parent_and_ignores_none():
    parent = AstNode(Op.BLOCK)
    child = AstNode(Op.RETURN)
    assert parent.insert_son_node(child) is parent
    assert parent.insert_son_node(None) is parent
    assert parent.sons == [child]
    assert child.parent is parent


def test_new_keeps_children_in_order():
    a = AstNode.from_id("a", 1)
    b = AstNode.from_int(DigitIntAttr(2, 1))
    node = AstNode.new(Op.ADD, a, None, b)
    assert node.node_type is Op.ADD
    assert node.sons == [a, b]
    assert all(son.parent is node for son in node.sons)


def test_from_int_is_int_literal():
    node = AstNode.from_int(DigitIntAttr(0x80000000, 5))
    assert node.node_type is Op.LEAF_LITERAL_UINT
    assert node.type is BasicType.INT
    assert node.integer_val == 0x80000000
    assert node.line_no == 5


def test_from_var_id_is_void_identifier():
    node = AstNode.from_var_id(VarIdAttr("main", 1))
    assert node.node_type is Op.LEAF_VAR_ID
    assert node.type is BasicType.VOID
    assert node.name == "main"
    assert node.is_leaf_node()


def test_from_type_makes_type_leaf():
    node = AstNode.from_type(BasicType.INT)
    assert node.node_type is Op.LEAF_TYPE
    assert node.type is BasicType.INT
    assert node.sons == []


def test_create_contain_node_skips_missing_children():
    x = AstNode.from_id("x", 1)
    node = create_contain_node(Op.NEG, x)
    assert node.sons == [x]
    assert create_contain_node(Op.BLOCK).sons == []


def test_create_func_def_fills_defaults():
    type_node = AstNode.from_type(BasicType.INT)
    name_node = AstNode.from_id("main", 1)
    node = create_func_def(type_node, name_node)
    assert node.node_type is Op.FUNC_DEF
    assert node.name == "main"
    assert node.type is BasicType.INT
    assert node.line_no == name_node.line_no
    assert [s.node_type for s in node.sons] == [
        Op.LEAF_TYPE,
        Op.LEAF_VAR_ID,
        Op.FUNC_FORMAL_PARAMS,
        Op.BLOCK,
    ]


def test_create_func_def_uses_given_block():
    block = AstNode(Op.BLOCK)
    block.insert_son_node(AstNode(Op.RETURN))
    node = create_func_def(AstNode.from_type(BasicType.VOID), AstNode.from_id("f", 2), block)
    assert node.sons[3] is block
    assert block.parent is node


def test_create_func_def_from_attrs():
    node = create_func_def_from_attrs(TypeAttr(BasicType.INT, 1), VarIdAttr("main", 1))
    assert node.name == "main"
    assert node.type is BasicType.INT
    assert node.sons[1].name == "main"
    assert node.sons[0].type is BasicType.INT


def test_create_func_call_defaults_params():
    name = AstNode.from_id("putint", 3)
    node = create_func_call(name)
    assert node.node_type is Op.FUNC_CALL
    assert node.name == "putint"
    assert node.sons[0] is name
    assert node.sons[1].node_type is Op.FUNC_REAL_PARAMS
    assert node.sons[1].sons == []


@pytest.mark.parametrize(
    "basic, expected",
    [
        (BasicType.INT, BasicType.INT),
        (BasicType.VOID, BasicType.VOID),
        (BasicType.FLOAT, BasicType.VOID),
        (BasicType.NONE, BasicType.VOID),
    ],
)
def test_type_attr_to_type(basic, expected):
    assert type_attr_to_type(TypeAttr(basic, 1)) is expected
    assert create_type_node(TypeAttr(basic, 1)).type is expected


def test_create_var_decl_node():
    decl = create_var_decl_node(BasicType.INT, VarIdAttr("a", 3))
    assert decl.node_type is Op.VAR_DECL
    assert decl.type is BasicType.INT
    assert [s.node_type for s in decl.sons] == [Op.LEAF_TYPE, Op.LEAF_VAR_ID]
    assert decl.sons[1].name == "a"


def test_var_decl_stmt_takes_child_type():
    decl = create_var_decl_node(BasicType.INT, VarIdAttr("a", 3))
    stmt = create_var_decl_stmt_node(decl)
    assert stmt.node_type is Op.DECL_STMT
    assert stmt.type is BasicType.INT
    assert stmt.sons == [decl]


def test_var_decl_stmt_without_child():
    stmt = create_var_decl_stmt_node(None)
    assert stmt.sons == []
    assert stmt.type is BasicType.VOID


def test_add_var_decl_node_extends_statement():
    stmt = create_var_decl_stmt_from_attrs(TypeAttr(BasicType.INT, 4), VarIdAttr("c", 4))
    result = add_var_decl_node(stmt, VarIdAttr("d", 4))
    assert result is stmt
    assert [decl.sons[1].name for decl in stmt.sons] == ["c", "d"]
    assert all(decl.type is BasicType.INT for decl in stmt.sons)
    assert all(decl.parent is stmt for decl in stmt.sons)