"""Storage attributes and register bookkeeping for linear-scan allocation."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from itertools import product
from typing import Iterable

SIZE_MAX = 2**64 - 1

INT_REG_POOL_SIZE = 13
FLOAT_REG_POOL_SIZE = 32
INT_REG_PARAM_USABLE = 4
FLOAT_REG_PARAM_USABLE = 16

LiveInterval = tuple[int, int]


class StoreType(enum.Enum):
    INT_REG = enum.auto()
    FLOAT_REG = enum.auto()
    STACK_VAR = enum.auto()
    STACK_PARAM = enum.auto()


@dataclass
class UsedRegisters:
    """Register masks a function uses, plus its reserved scratch registers."""

    int_regs: int = 0
    float_regs: int = 0
    int_reserved: int = 0
    float_reserved: int = 0


@dataclass
class SymAttribute:
    """Where a variable lives, or the frame needs of a function.

    For a function ``value`` is the local stack size; for a variable it
    is the register number or stack offset.
    """

    value: int = 0
    store_type: StoreType | None = None
    used_regs: UsedRegisters = field(default_factory=UsedRegisters)


def spill_cost(def_count: int, use_count: int) -> int:
    """Cost of keeping a variable on the stack, saturating at SIZE_MAX."""
    if (SIZE_MAX - use_count) // 2 < def_count:
        return SIZE_MAX
    return 2 * def_count + use_count


class RegisterSlot:
    """A physical register and the live ranges already placed in it."""

    def __init__(self, reg_id: int) -> None:
        self.reg_id = reg_id
        self.occupied: list[LiveInterval] = []

    def conflicts(self, ranges: Iterable[LiveInterval]) -> bool:
        """Whether any of ``ranges`` overlaps an occupied range."""
        return any(
            lo <= o_hi and o_lo <= hi
            for (lo, hi), (o_lo, o_hi) in product(ranges, self.occupied)
        )

    def allocate(self, ranges: Iterable[LiveInterval]) -> bool:
        """Occupy ``ranges``; return False and change nothing on conflict."""
        ranges = list(ranges)
        if self.conflicts(ranges):
            return False
        self.occupied = sorted(self.occupied + ranges)
        return True