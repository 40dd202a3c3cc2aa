# minic

Building blocks for a compiler of a small subset of C, as a plain Python
library with no third-party dependencies.

## Modules

- `minic.attr_types`: the attribute records handed from a lexer to a parser.
  `BasicType` (`NONE`, `VOID`, `INT`, `FLOAT`, `MAX`), `DigitIntAttr`
  (an unsigned 32-bit literal; values outside 0 to 0xFFFFFFFF raise
  `ValueError`), `DigitRealAttr`, `VarIdAttr` and `TypeAttr`.
- `minic.astnodes`: the abstract syntax tree. `AstOperatorType` lists the node
  kinds; `AstNode` holds one node, with `is_leaf_node()`, `insert_son_node()`
  and the constructors `new()`, `from_int()`, `from_var_id()`, `from_id()` and
  `from_type()`. The helper functions `create_contain_node`, `create_func_def`,
  `create_func_def_from_attrs`, `create_func_call`, `type_attr_to_type`,
  `create_type_node`, `create_var_decl_node`, `create_var_decl_stmt_node`,
  `create_var_decl_stmt_from_attrs` and `add_var_decl_node` build the usual
  shapes. A function definition has the children type, name, formal params
  and block; missing params or block are filled with empty nodes.
- `minic.graph`: Graphviz DOT text for a tree. `node_label(node)` gives the
  text shown for a node, `to_dot(root)` returns a `digraph ast { ... }`
  description, and `output_ast(root, file_path)` writes that DOT text to a
  file.
- `minic.platform_arm32`: ARM32 facts. `REG_NAMES`, `reg_name(reg_no)`,
  `is_reg(name)`, `const_expr(num)` (whether `num` or `-num` is an 8-bit
  value rotated by an even amount), `is_disp(num)` (strictly between -4096
  and 4096), and the register numbers `TMP_REG_NO`, `FP_REG_NO`, `SP_REG_NO`
  and `LX_REG_NO`.
- `minic.register_allocator`: `SimpleRegisterAllocator` hands out the
  registers r0 to r10 to values through their `load_reg_id` attribute (-1
  while they hold none). `allocate(var, no)` prefers register `no`, else takes
  the lowest free one, and when all are taken spills the value that has held
  its register longest. `allocate_register(no)`, `free(var)`,
  `free_register(no)`, `is_occupied(no)` and `was_used(no)` complete it.
- `minic.iloc`: `ArmInst` is one instruction, label or comment, with
  `replace()`, `set_dead()` and `output()`. `ILocArm32` builds an instruction
  sequence: `label`, `inst`, `comment`, `load_imm`, `load_symbol`,
  `load_base`, `store_base`, `mov_reg`, `load_var`, `lea_var`, `store_var`,
  `alloc_stack`, `call_fun`, `nop`, `jump`, `to_str`, `delete_unused_label`
  (marks `.`-labels that no live branch targets as dead), `instructions()`
  (the text of live instructions) and `output(file, output_empty)`, which
  writes one instruction per line, tab-indented, labels unindented.
  The values given to `load_var`, `lea_var` and `store_var` are duck typed:
  `reg_id`, `memory_addr` (`(base_reg_no, offset)` or `None`), `const_value`,
  `is_global` and `name`.
- `minic.codegen`: abstract bases for code generators. `CodeGenerator.run(out_file_name)`
  opens the file (or uses standard output when the name is empty), points
  `fp` at it and calls `generate()`. `CodeGeneratorAsm.generate()` calls
  `gen_header()`, `gen_data_section()` and `gen_code_section()`; the last
  resets `label_index` and calls `gen_function_code(func)` for every entry of
  `module.functions` whose `is_builtin` is false.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from minic.attr_types import BasicType, TypeAttr, VarIdAttr
from minic.astnodes import create_func_def_from_attrs, create_var_decl_stmt_from_attrs
from minic.graph import to_dot
from minic.iloc import ILocArm32

decl = create_var_decl_stmt_from_attrs(TypeAttr(BasicType.INT, 3), VarIdAttr("a", 3))
func = create_func_def_from_attrs(TypeAttr(BasicType.INT, 1), VarIdAttr("main", 1))
func.sons[3].insert_son_node(decl)
print(to_dot(func))

iloc = ILocArm32()
iloc.load_imm(0, 100)
iloc.inst("bx", "lr")
print(iloc.instructions())  # ['movw r0,#:lower16:100', 'bx lr']
```

## What the package does not do

There is no lexer or parser, no intermediate representation, no symbol table
and no concrete ARM32 code generator or instruction selector: `CodeGenerator`
and `CodeGeneratorAsm` are abstract and must be subclassed. There is no
command-line compiler. `output_ast` writes DOT text only; turning it into an
image is left to a separate Graphviz installation.