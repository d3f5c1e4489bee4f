from sysyback.ir import Instruction, OpType, Symbol


def test_binary_defines_result_and_uses_operands():
    t, x, y = Symbol("t"), Symbol("x"), Symbol("y")
    ins = Instruction(OpType.ADD, t, x, y)
    assert ins.defined_symbol() is t
    assert ins.used_symbols() == [x, y]


def test_binary_text():
    ins = Instruction(OpType.ADD, Symbol("t"), Symbol("x"), Symbol("y"))
    assert str(ins) == "t = x + y"


def test_label_defines_and_uses_nothing():
    ins = Instruction(OpType.LABEL, Symbol("L1"))
    assert ins.defined_symbol() is None
    assert ins.used_symbols() == []


def test_return_without_value():
    ins = Instruction(OpType.RETURN)
    assert ins.used_symbols() == []
    assert str(ins) == "return"


def test_if_zero_uses_condition_not_label():
    label, cond = Symbol("L"), Symbol("c")
    ins = Instruction(OpType.IF_ZERO, label, cond)
    assert ins.used_symbols() == [cond]
    assert ins.defined_symbol() is None


def test_call_defines_result_only():
    res, func = Symbol("r"), Symbol("f")
    ins = Instruction(OpType.CALL, res, func)
    assert ins.defined_symbol() is res
    assert ins.used_symbols() == []


def test_symbols_compare_by_identity():
    first, second = Symbol("x"), Symbol("x")
    assert len({first, second}) == 2
    assert str(first) == "x"