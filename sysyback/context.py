"""Per-function and whole-program state kept while emitting ARM code."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, Iterator, TypeVar

from .ir import Symbol
from .regalloc import SymAttribute

USE_INT_REG_NUM = 12
USE_FLOAT_REG_NUM = 32


@dataclass
class ArgRecord:
    """An outgoing call argument waiting to be placed.

    ``position`` is a register number when ``in_register`` is true,
    otherwise a byte offset on the stack in steps of 4.
    """

    symbol: Symbol
    is_address: bool = False
    in_register: bool = True
    position: int = 0


def _restore_defaults(obj: Any) -> None:
    for f in fields(obj):
        if f.default_factory is not MISSING:
            setattr(obj, f.name, f.default_factory())
        else:
            setattr(obj, f.name, f.default)


@dataclass
class FunctionContext:
    """State of the function currently being translated."""

    int_regs: int = 0
    float_regs: int = 0
    int_freereg1: Symbol | None = None
    int_freereg2: Symbol | None = None
    last_int_freereg: int = 0
    float_freereg1: Symbol | None = None
    float_freereg2: Symbol | None = None
    last_float_freereg: int = 0
    func_attr: SymAttribute = field(default_factory=SymAttribute)
    arg_nintregs: int = 0
    arg_nfloatregs: int = 0
    arg_stacksize: int = 0
    arg_records: list[ArgRecord] = field(default_factory=list)
    var_stack_immvals: list[int] = field(default_factory=list)
    save_float_regs: list[tuple[int, int]] = field(default_factory=list)
    save_int_regs: list[int] = field(default_factory=list)
    stack_size_for_regsave: int = 0
    stack_size_for_args: int = 0
    stack_size_for_vars: int = 0
    stack_size_for_params: int = 0
    nint_param: int = 0
    nfloat_param: int = 0
    nparam: int = 0
    reg_alloc: Any = None
    parameter_head: bool = True

    def reset(self) -> None:
        """Return every field to its initial value."""
        _restore_defaults(self)


def _int_slots() -> list[Symbol | None]:
    return [None] * USE_INT_REG_NUM


def _float_slots() -> list[Symbol | None]:
    return [None] * USE_FLOAT_REG_NUM


@dataclass
class GlobalContext:
    """State of the code that runs outside every function."""

    USE_INT_REG_NUM = USE_INT_REG_NUM
    USE_FLOAT_REG_NUM = USE_FLOAT_REG_NUM

    var_stack_pos: dict[Symbol, int] = field(default_factory=dict)
    stack_size_for_regsave: int = 0
    stack_size_for_args: int = 0
    stack_size_for_vars: int = 0
    int_regs: list[Symbol | None] = field(default_factory=_int_slots)
    int_regs_ranks: list[int] = field(default_factory=lambda: [0] * USE_INT_REG_NUM)
    float_regs: list[Symbol | None] = field(default_factory=_float_slots)
    float_regs_ranks: list[int] = field(default_factory=lambda: [0] * USE_FLOAT_REG_NUM)
    arg_nintregs: int = 0
    arg_nfloatregs: int = 0
    arg_stacksize: int = 0
    arg_records: list[ArgRecord] = field(default_factory=list)

    def reset(self) -> None:
        """Return every field to its initial value."""
        _restore_defaults(self)


_Context = TypeVar("_Context", FunctionContext, GlobalContext)


@contextmanager
def scoped(context: _Context) -> Iterator[_Context]:
    """Reset ``context`` on entry and again on exit, even after an error."""
    context.reset()
    try:
        yield context
    finally:
        context.reset()