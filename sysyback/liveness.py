"""Live-variable analysis over an instruction-level control-flow graph."""

from __future__ import annotations

from bisect import bisect_left
from collections import deque
from dataclasses import dataclass, field

from .cfg import ControlFlowGraph
from .ir import Symbol

LiveInterval = tuple[int, int]


class SymbolIndex:
    """A two-way mapping between symbols and dense integer indices."""

    def __init__(self) -> None:
        self._indices: dict[Symbol, int] = {}
        self._symbols: list[Symbol] = []

    def __len__(self) -> int:
        return len(self._symbols)

    def insert(self, symbol: Symbol) -> bool:
        """Give ``symbol`` the next index; False if it already has one."""
        if symbol in self._indices:
            return False
        self._indices[symbol] = len(self._symbols)
        self._symbols.append(symbol)
        return True

    def index_of(self, symbol: Symbol) -> int | None:
        return self._indices.get(symbol)

    def symbol_at(self, index: int) -> Symbol | None:
        if 0 <= index < len(self._symbols):
            return self._symbols[index]
        return None


@dataclass
class SymbolLiveInfo:
    """Live ranges of one symbol, as sorted intervals of dfn numbers.

    Adjacent intervals are merged, so neighbouring intervals in
    ``intervals`` always have a gap between them.
    """

    intervals: list[LiveInterval] = field(default_factory=list)
    end_points: LiveInterval = (0, 0)
    def_count: int = 0
    use_count: int = 0

    def add_interval(self, interval: LiveInterval) -> None:
        """Add an interval that must not overlap any existing one."""
        interval = (interval[0], interval[1])
        idx = bisect_left(self.intervals, interval)
        if idx < len(self.intervals) and self.intervals[idx] == interval:
            return
        lo, hi = interval
        if idx > 0 and self.intervals[idx - 1][1] >= lo:
            raise ValueError("LiveInterval cover fault")
        if idx < len(self.intervals) and self.intervals[idx][0] <= hi:
            raise ValueError("LiveInterval cover fault")

        self.intervals.insert(idx, interval)
        if idx > 0 and self.intervals[idx - 1][1] + 1 == lo:
            self.intervals[idx - 1 : idx + 1] = [(self.intervals[idx - 1][0], hi)]
            idx -= 1
        cur_lo, cur_hi = self.intervals[idx]
        if idx + 1 < len(self.intervals) and cur_hi + 1 == self.intervals[idx + 1][0]:
            self.intervals[idx : idx + 2] = [(cur_lo, self.intervals[idx + 1][1])]

    def update_end_points(self) -> None:
        """Record the lowest and highest dfn covered by the intervals."""
        if not self.intervals:
            raise ValueError("LiveAnalyzer logic error: liveIntervalSet of sym is empty")
        self.end_points = (self.intervals[0][0], self.intervals[-1][1])


@dataclass
class NodeLiveInfo:
    """Symbols live on entry to and on exit from one graph node."""

    live_in: set[Symbol] = field(default_factory=set)
    live_out: set[Symbol] = field(default_factory=set)


class LiveAnalyzer:
    """Computes per-node live sets and per-symbol live intervals."""

    def __init__(self, cfg: ControlFlowGraph) -> None:
        self.cfg = cfg
        self._nodes = [NodeLiveInfo() for _ in range(cfg.node_count)]
        self._symbols: dict[Symbol, None] = {}
        self._defs: dict[Symbol, dict[int, None]] = {}
        self._uses: dict[Symbol, dict[int, None]] = {}
        self._infos: dict[Symbol, SymbolLiveInfo] = {}

        self._collect()
        for sym in self._symbols:
            self._infos[sym] = self._analyse(sym)

    def _collect(self) -> None:
        cfg = self.cfg
        visited: set[int] = set()
        queue = deque([cfg.START_NODE])
        while queue:
            n = queue.popleft()
            if n in visited:
                continue
            visited.add(n)
            instruction = cfg.node_instruction(n)
            defined = instruction.defined_symbol()
            if defined is not None:
                self._symbols.setdefault(defined)
                self._defs.setdefault(defined, {})[n] = None
            for sym in instruction.used_symbols():
                self._symbols.setdefault(sym)
                self._uses.setdefault(sym, {})[n] = None
            queue.extend(u for u in cfg.out_nodes(n) if u not in visited)

    def _analyse(self, sym: Symbol) -> SymbolLiveInfo:
        cfg = self.cfg
        uses = self._uses.get(sym, {})
        defs = self._defs.get(sym, {})
        info = SymbolLiveInfo()
        visited: set[int] = set()
        starts = deque([*uses, *defs])

        while starts:
            cur = starts.popleft()
            if cur in visited:
                continue
            hi = cfg.node_dfn(cur)
            while True:
                visited.add(cur)
                lo = cfg.node_dfn(cur)
                following = None
                if cur not in defs or cur in uses:
                    self._nodes[cur].live_in.add(sym)
                    for u in cfg.in_nodes(cur):
                        self._nodes[u].live_out.add(sym)
                        if cfg.node_dfn(u) + 1 == cfg.node_dfn(cur):
                            if u not in visited:
                                following = u
                        elif u not in visited:
                            starts.append(u)
                if following is None:
                    break
                cur = following
            info.add_interval((lo, hi))

        info.def_count = len(defs)
        info.use_count = len(uses)
        return info

    @property
    def begin(self) -> int:
        return self.cfg.begin

    @property
    def end(self) -> int:
        return self.cfg.end

    @property
    def symbols(self) -> set[Symbol]:
        """Every symbol that occurs in a reachable instruction."""
        return set(self._symbols)

    def symbol_info(self, symbol: Symbol) -> SymbolLiveInfo | None:
        return self._infos.get(symbol)

    def node_info(self, node: int) -> NodeLiveInfo:
        return self._nodes[node]