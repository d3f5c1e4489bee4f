"""Dead-code elimination over one function's instructions."""

from __future__ import annotations

from typing import MutableSequence

from .cfg import ControlFlowGraph
from .ir import Instruction, OpType, Symbol
from .liveness import LiveAnalyzer


class DeadCodeOptimizer:
    """Removes definitions whose result is never used afterwards.

    Works on ``instructions[begin:end]``, which must hold one whole
    function. The label and ``fend`` are never removed; after
    :meth:`optimize` ``end`` is moved back by the number of removed
    instructions so the range still covers the function.
    """

    def __init__(
        self,
        instructions: MutableSequence[Instruction],
        begin: int = 0,
        end: int | None = None,
    ) -> None:
        self.instructions = instructions
        self.begin = begin
        self.end = len(instructions) if end is None else end

    def optimize(self) -> list[Instruction]:
        """Delete dead definitions in place and return them in order."""
        cfg = ControlFlowGraph(self.instructions, self.begin, self.end)
        live = LiveAnalyzer(cfg)
        dead: list[int] = []
        for node in range(cfg.node_count):
            instruction = cfg.node_instruction(node)
            defined = instruction.defined_symbol()
            if defined is None:
                continue
            if defined not in live.node_info(node).live_out and not self._has_side_effect(
                defined, instruction
            ):
                dead.append(cfg.node_position(node))

        dead.sort()
        removed = [self.instructions[pos] for pos in dead]
        for pos in reversed(dead):
            del self.instructions[pos]
        self.end -= len(dead)
        return removed

    @staticmethod
    def _has_side_effect(defined: Symbol, instruction: Instruction) -> bool:
        if defined.is_global:
            return True
        return instruction.op in (OpType.CALL, OpType.PARAMETER)