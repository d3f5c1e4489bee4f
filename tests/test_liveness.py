import pytest

from sysyback.cfg import ControlFlowGraph
from sysyback.ir import Instruction, OpType, Symbol
from sysyback.liveness import LiveAnalyzer, NodeLiveInfo, SymbolIndex, SymbolLiveInfo


def _function(body):
    return [
        Instruction(OpType.LABEL, Symbol("f")),
        Instruction(OpType.FUNCTION_BEGIN),
        *body,
        Instruction(OpType.FUNCTION_END),
    ]


def _node_at(cfg, position):
    return next(n for n in range(cfg.node_count) if cfg.node_position(n) == position)


def test_symbol_index_round_trip():
    index = SymbolIndex()
    a, b = Symbol("a"), Symbol("b")
    assert index.insert(a) is True
    assert index.insert(b) is True
    assert index.insert(a) is False
    assert index.index_of(a) == 0
    assert index.index_of(b) == 1
    assert index.symbol_at(index.index_of(b)) is b
    assert len(index) == 2


def test_symbol_index_missing():
    index = SymbolIndex()
    index.insert(Symbol("a"))
    assert index.index_of(Symbol("a")) is None
    assert index.symbol_at(5) is None
    assert index.symbol_at(-1) is None


def test_add_interval_merges_adjacent():
    info = SymbolLiveInfo()
    info.add_interval((1, 3))
    info.add_interval((4, 6))
    assert info.intervals == [(1, 6)]


def test_add_interval_merges_both_sides():
    info = SymbolLiveInfo()
    info.add_interval((1, 2))
    info.add_interval((5, 6))
    info.add_interval((3, 4))
    assert info.intervals == [(1, 6)]


def test_add_interval_keeps_gaps():
    info = SymbolLiveInfo()
    info.add_interval((4, 5))
    info.add_interval((1, 2))
    assert info.intervals == [(1, 2), (4, 5)]


@pytest.mark.parametrize("second", [(2, 5), (0, 1), (3, 3)])
def test_add_interval_overlap_raises(second):
    info = SymbolLiveInfo()
    info.add_interval((1, 3))
    with pytest.raises(ValueError, match="cover fault"):
        info.add_interval(second)
    assert info.intervals == [(1, 3)]


def test_update_end_points():
    info = SymbolLiveInfo()
    info.add_interval((7, 9))
    info.add_interval((2, 3))
    info.update_end_points()
    assert info.end_points == (2, 9)


def test_update_end_points_empty_raises():
    with pytest.raises(ValueError):
        SymbolLiveInfo().update_end_points()


def test_straight_line_liveness():
    a, x = Symbol("a"), Symbol("x")
    code = _function(
        [
            Instruction(OpType.PARAMETER, a),
            Instruction(OpType.ADD, x, a, a),
            Instruction(OpType.RETURN, x),
        ]
    )
    cfg = ControlFlowGraph(code)
    live = LiveAnalyzer(cfg)
    param, add, ret = (_node_at(cfg, p) for p in (2, 3, 4))

    assert live.symbols == {a, x}
    info = live.symbol_info(a)
    assert info.intervals == [(cfg.node_dfn(param), cfg.node_dfn(add))]
    assert (info.def_count, info.use_count) == (1, 1)
    assert live.symbol_info(x).intervals == [(cfg.node_dfn(add), cfg.node_dfn(ret))]

    assert a in live.node_info(param).live_out
    assert a not in live.node_info(param).live_in
    assert a in live.node_info(add).live_in
    assert live.node_info(add).live_out == {x}
    assert live.node_info(ret).live_in == {x}
    assert live.symbol_info(Symbol("a")) is None
    assert (live.begin, live.end) == (0, len(code) - 1)


def _loop():
    n, one = Symbol("n"), Symbol("one")
    top, done = Symbol("L"), Symbol("E")
    code = _function(
        [
            Instruction(OpType.PARAMETER, n),
            Instruction(OpType.CONSTANT, one),
            Instruction(OpType.LABEL, top),
            Instruction(OpType.IF_ZERO, done, n),
            Instruction(OpType.SUB, n, n, one),
            Instruction(OpType.GOTO, top),
            Instruction(OpType.LABEL, done),
            Instruction(OpType.RETURN, n),
        ]
    )
    return code, n, one


def test_loop_back_edge_keeps_values_live():
    code, n, one = _loop()
    cfg = ControlFlowGraph(code)
    live = LiveAnalyzer(cfg)
    const, goto, ret = _node_at(cfg, 3), _node_at(cfg, 7), _node_at(cfg, 9)

    assert live.symbol_info(one).intervals == [(cfg.node_dfn(const), cfg.node_dfn(goto))]
    assert {n, one} <= live.node_info(goto).live_out
    assert n in live.node_info(ret).live_in
    assert one not in live.node_info(ret).live_in
    assert live.symbol_info(n).def_count == 2
    assert live.symbol_info(n).use_count == 3


def test_dataflow_invariants_hold():
    code, _, _ = _loop()
    cfg = ControlFlowGraph(code)
    live = LiveAnalyzer(cfg)
    for node in range(cfg.node_count):
        if cfg.node_dfn(node) == 0:
            continue
        info = live.node_info(node)
        assert set(cfg.node_instruction(node).used_symbols()) <= info.live_in
        for succ in cfg.out_nodes(node):
            assert live.node_info(succ).live_in <= info.live_out


def test_node_live_info_defaults_are_independent():
    first, second = NodeLiveInfo(), NodeLiveInfo()
    first.live_in.add(Symbol("a"))
    assert second.live_in == set()