"""Instruction-level control-flow graph of a single function."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .ir import Instruction, OpType


@dataclass
class _Node:
    instruction: Instruction
    ins: list[int] = field(default_factory=list)
    outs: list[int] = field(default_factory=list)
    dfn: int = 0


class ControlFlowGraph:
    """One node per instruction of ``instructions[begin:end]``.

    The range must start with the function's label and end with its
    ``fend``. Node 0 is the label, node 1 the ``fend``; the rest follow in
    program order. Positions are indices into ``instructions``.
    """

    START_NODE = 0
    END_NODE = 1

    def __init__(
        self,
        instructions: Sequence[Instruction],
        begin: int = 0,
        end: int | None = None,
    ) -> None:
        if end is None:
            end = len(instructions)
        if begin >= end:
            raise ValueError("ControlFlowGraph error: empty tac list")
        last = end - 1
        if (
            instructions[begin].op is not OpType.LABEL
            or instructions[last].op is not OpType.FUNCTION_END
        ):
            raise ValueError("ControlFLowGraph error: unrecognized function TAClist")

        self.begin = begin
        self.end = last
        self._nodes = [_Node(instructions[begin]), _Node(instructions[last])]
        self._positions = [begin, last]
        self.unreachable: list[int] = []

        labels: dict[str, int] = {}
        jumps: list[int] = []
        cur = self.START_NODE
        for pos in range(begin, last):
            nxt = pos + 1
            if nxt == last:
                nxt_node = self.END_NODE
            else:
                self._nodes.append(_Node(instructions[nxt]))
                self._positions.append(nxt)
                nxt_node = len(self._nodes) - 1
            instruction = instructions[pos]
            op = instruction.op
            if op is OpType.GOTO:
                jumps.append(cur)
            elif op is OpType.IF_ZERO:
                jumps.append(cur)
                self._link(cur, nxt_node)
            elif op is OpType.RETURN:
                self._link(cur, self.END_NODE)
            else:
                self._link(cur, nxt_node)
                if op is OpType.LABEL:
                    labels.setdefault(instruction.a.name, cur)
            cur = nxt_node

        for node in jumps:
            target = self._nodes[node].instruction.a.name
            self._link(node, labels.get(target, self.START_NODE))

        self._number_nodes()

        for index, node in enumerate(self._nodes):
            if node.dfn == 0:
                self.unreachable.append(self._positions[index])
                self._detach(index)

    def _link(self, src: int, dst: int) -> None:
        self._nodes[src].outs.append(dst)
        self._nodes[dst].ins.append(src)

    def _detach(self, u: int) -> None:
        node = self._nodes[u]
        for v in node.ins:
            self._nodes[v].outs = [w for w in self._nodes[v].outs if w != u]
        for v in node.outs:
            self._nodes[v].ins = [w for w in self._nodes[v].ins if w != u]

    def _number_nodes(self) -> None:
        counter = 1
        self._nodes[self.START_NODE].dfn = counter
        visited = {self.START_NODE}
        stack = [iter(self._nodes[self.START_NODE].outs)]
        while stack:
            v = next(stack[-1], None)
            if v is None:
                stack.pop()
            elif v not in visited:
                visited.add(v)
                counter += 1
                self._nodes[v].dfn = counter
                stack.append(iter(self._nodes[v].outs))

    def _node(self, node: int, what: str) -> _Node:
        if not 0 <= node < len(self._nodes):
            raise IndexError(f"cfg get index out of range: {what}")
        return self._nodes[node]

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def in_nodes(self, node: int) -> list[int]:
        return self._node(node, "in_nodes").ins

    def out_nodes(self, node: int) -> list[int]:
        return self._node(node, "out_nodes").outs

    def node_instruction(self, node: int) -> Instruction:
        return self._node(node, "node_instruction").instruction

    def node_dfn(self, node: int) -> int:
        """Depth-first preorder number, from 1; 0 means unreachable."""
        return self._node(node, "node_dfn").dfn

    def node_position(self, node: int) -> int:
        self._node(node, "node_position")
        return self._positions[node]

    def to_dot(self) -> str:
        """Render the reachable graph in Graphviz dot syntax."""
        parts = ["digraph CFG {\n"]
        visited: set[int] = set()

        def enter(n: int):
            visited.add(n)
            node = self._nodes[n]
            parts.append(f'{node.dfn} [label="{node.dfn}\\n{node.instruction}"];\n')
            return iter(node.outs)

        stack = [(self.START_NODE, enter(self.START_NODE))]
        while stack:
            n, edges = stack[-1]
            u = next(edges, None)
            if u is None:
                stack.pop()
                continue
            parts.append(f"{self._nodes[n].dfn} -> {self._nodes[u].dfn} ;\n")
            if u not in visited:
                stack.append((u, enter(u)))
        parts.append("}")
        return "".join(parts)

    def write_dot(self, path: str | Path) -> None:
        Path(path).write_text(self.to_dot())