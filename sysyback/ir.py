"""Three-address instructions consumed by the back end."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class OpType(enum.Enum):
    LABEL = "label"
    FUNCTION_BEGIN = "fbegin"
    FUNCTION_END = "fend"
    GOTO = "goto"
    IF_ZERO = "ifz"
    RETURN = "return"
    CALL = "call"
    CALL_AND_RETURN = "callret"
    PARAMETER = "param"
    ARGUMENT = "arg"
    CONSTANT = "const"
    VARIABLE = "var"
    ASSIGN = "="
    NEG = "neg"
    NOT = "not"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    LESS = "<"
    LESS_EQUAL = "<="
    GREATER = ">"
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="
    AND = "&&"
    OR = "||"


_BINARY = {
    OpType.ADD, OpType.SUB, OpType.MUL, OpType.DIV, OpType.MOD,
    OpType.LESS, OpType.LESS_EQUAL, OpType.GREATER, OpType.GREATER_EQUAL,
    OpType.EQUAL, OpType.NOT_EQUAL, OpType.AND, OpType.OR,
}
_UNARY = {OpType.ASSIGN, OpType.NEG, OpType.NOT}
_DEFINING = _BINARY | _UNARY | {
    OpType.CALL, OpType.PARAMETER, OpType.CONSTANT, OpType.VARIABLE,
}


@dataclass(eq=False)
class Symbol:
    """A named value; two symbols are the same only if they are one object."""

    name: str
    is_global: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Instruction:
    """One three-address instruction: ``a`` is usually the result."""

    op: OpType
    a: Symbol | None = None
    b: Symbol | None = None
    c: Symbol | None = None

    def defined_symbol(self) -> Symbol | None:
        """The symbol this instruction assigns, if any."""
        return self.a if self.op in _DEFINING else None

    def used_symbols(self) -> list[Symbol]:
        """The symbols whose values this instruction reads."""
        if self.op in _BINARY:
            operands = (self.b, self.c)
        elif self.op in _UNARY or self.op is OpType.IF_ZERO:
            operands = (self.b,)
        elif self.op in (OpType.RETURN, OpType.ARGUMENT):
            operands = (self.a,)
        else:
            operands = ()
        return [sym for sym in operands if sym is not None]

    def __str__(self) -> str:
        a, b, c = (str(s) if s is not None else "" for s in (self.a, self.b, self.c))
        op = self.op
        if op in _BINARY:
            return f"{a} = {b} {op.value} {c}"
        if op is OpType.ASSIGN:
            return f"{a} = {b}"
        if op is OpType.NEG:
            return f"{a} = - {b}"
        if op is OpType.NOT:
            return f"{a} = ! {b}"
        if op is OpType.IF_ZERO:
            return f"ifz {b} goto {a}"
        if op is OpType.CALL:
            return f"{a} = call {b}" if self.a is not None else f"call {b}"
        if op is OpType.CALL_AND_RETURN:
            return f"return call {b}"
        if op in (OpType.FUNCTION_BEGIN, OpType.FUNCTION_END):
            return op.value
        return f"{op.value} {a}".rstrip()