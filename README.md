# sysyback

Building blocks for the back end of a small compiler. Everything works on
a Python list of three-address instructions.

## Modules

- `sysyback.ir`: the instruction model. `OpType` lists the operations.
  `Symbol` is a named value, and two symbols are equal only when they are
  the same object. `Instruction` holds an operation and up to three
  operands `a`, `b` and `c`. Its `defined_symbol()` and `used_symbols()`
  methods say which symbol it writes and which symbols it reads.
- `sysyback.cfg`: `ControlFlowGraph(instructions, begin, end)` builds one
  node per instruction of `instructions[begin:end]`. The range must start
  with the function's `LABEL` and end with its `FUNCTION_END`, otherwise
  `ValueError` is raised. The graph numbers the reachable nodes in
  depth-first preorder (`node_dfn`, starting at 1). It lists the positions
  of unreachable instructions in `unreachable` and detaches those nodes.
  `to_dot()` returns the graph as Graphviz DOT text and `write_dot(path)`
  writes that text to a file.
- `sysyback.liveness`: `LiveAnalyzer(cfg)` computes, for each node, the
  symbols live on entry and on exit (`node_info(node)`). For each symbol
  it computes a `SymbolLiveInfo` (`symbol_info(symbol)`), which holds the
  merged live intervals over depth-first numbers and the definition and
  use counts. `SymbolIndex` maps symbols to dense integer indices and back.
- `sysyback.optimizer`: `DeadCodeOptimizer(instructions, begin, end)`.
  Its `optimize()` deletes, in place, every definition whose result is not
  live afterwards. Definitions of global symbols and `CALL` and
  `PARAMETER` instructions are kept. `optimize()` returns the removed
  instructions and moves `end` back by the number removed.
- `sysyback.regalloc`: the bookkeeping a linear-scan allocator needs:
  - `StoreType` and `SymAttribute`, which record where a value is stored;
  - `UsedRegisters`;
  - `RegisterSlot`, whose `conflicts()` and `allocate()` handle live
    ranges;
  - `spill_cost(def_count, use_count)`, which saturates at 2**64 - 1.
- `sysyback.armhelper`: ARM immediate-operand checks:
  - `is_immediate`;
  - `divide_into_immediates`, which splits a value into encodable parts
    whose sum is the value;
  - `is_ldr_str_immediate`;
  - `emit_immediate_with_check`, which emits an `add`/`sub` with an
    immediate and uses the opposite operation for a negated immediate;
  - `bitcast_to_uint`, `is_power_of_two`, `log2` and `count_lines`.
- `sysyback.bits`: 32-bit mask helpers (`is_set`, `set_bit`, `clear_bit`,
  `all_bits`).
- `sysyback.context`: `FunctionContext` and `GlobalContext` hold the state
  of code generation, and `ArgRecord` describes an outgoing argument.
  `scoped(context)` is a context manager. It resets the context on entry
  and again on exit, including when an error is raised.
- `sysyback.enumreflect`: name and value reflection for integer-valued
  `enum.Enum` classes:
  - `enum_names`, `enum_values`, `enum_entries`, `enum_count`;
  - `enum_index`, `enum_name`, `enum_value`;
  - `enum_cast` and `enum_contains`, which take an optional per-character
    predicate such as `case_insensitive`;
  - `is_sparse`, `enum_type_name`, `pretty_name`.

  Only members with values in -128..128 are reflected.
- `sysyback.enumflags`: the same reflection for flag enumerations:
  `is_flags`, `flags_or`, `enum_flags_name` (names joined with `|`) and
  `enum_flags_cast`.
- `sysyback.enumswitch`: dispatch and conversion for enumerations:
  - `enum_switch` and `enum_for_each` for dispatch;
  - `enum_fuse`, which combines several members bijectively into one
    integer;
  - `format_enum` and `parse_enum` for text;
  - the string hashes `crc32_hash` and `fnv1a_hash`.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from sysyback.ir import Instruction, OpType, Symbol
from sysyback.cfg import ControlFlowGraph
from sysyback.liveness import LiveAnalyzer
from sysyback.optimizer import DeadCodeOptimizer

f, x, y, t = Symbol("f"), Symbol("x"), Symbol("y"), Symbol("t")
instructions = [
    Instruction(OpType.LABEL, f),
    Instruction(OpType.FUNCTION_BEGIN),
    Instruction(OpType.PARAMETER, x),
    Instruction(OpType.ADD, y, x, x),
    Instruction(OpType.MUL, t, x, x),   # t is never used
    Instruction(OpType.RETURN, y),
    Instruction(OpType.FUNCTION_END),
]

cfg = ControlFlowGraph(instructions, 0, len(instructions))
print(cfg.to_dot())

live = LiveAnalyzer(cfg)
print(live.symbol_info(y).intervals)

removed = DeadCodeOptimizer(instructions, 0, len(instructions)).optimize()
# removed holds the multiplication that defines t
```

The ARM immediate helpers can check an immediate and split a value into
encodable parts:

```python
from sysyback.armhelper import is_immediate, divide_into_immediates

is_immediate(0xFF000000)          # True
divide_into_immediates(0x12345)   # encodable parts that sum to 0x12345
```

## What it does not do

The package has no front end. It does not read source files or
three-address text, so instructions must be built in Python. It does not
assign registers to a whole function. It does not produce complete ARM
assembly programs: it provides the analyses and helpers such a generator
would use. There is no command-line program.