import pytest

from pushgp import (
    INT_MAX,
    INT_MIN,
    BoolInstruction,
    ExecInstruction,
    FloatInstruction,
    InstructionFailure,
    IntInstruction,
    Overflow,
    PushLiteral,
    PushState,
    StackOverflow,
    StackType,
    StackUnderflow,
    perform,
)


def int_state(*values, max_stack_size=100):
    """State whose integer stack holds `values`, last one on top."""
    state = PushState(max_stack_size)
    for value in values:
        state.int_stack.push(value)
    return state


def run_int(op, *values):
    return perform(op, int_state(*values)).int_stack.items()


def test_add_pops_two_and_pushes_sum():
    assert run_int(IntInstruction.ADD, 409, 512) == [921]


def test_binary_operands_use_top_as_x():
    # x is the top item, y the one beneath it
    assert run_int(IntInstruction.SUBTRACT, 10, 3) == [-7]
    assert run_int(IntInstruction.MULTIPLY, -6, 7) == [-42]
    assert run_int(IntInstruction.PROTECTED_DIVIDE, -2, 7) == [-3]
    assert run_int(IntInstruction.MOD, -2, -7) == [-1]


def test_add_overflow_is_recoverable_and_leaves_state_untouched():
    state = int_state(4_098_586_571_925_584_936, 5_124_785_464_929_190_872)
    with pytest.raises(InstructionFailure) as info:
        perform(IntInstruction.ADD, state)
    failure = info.value
    assert failure.error == Overflow(IntInstruction.ADD)
    assert failure.is_recoverable()
    assert failure.state.int_stack.items() == [
        4_098_586_571_925_584_936,
        5_124_785_464_929_190_872,
    ]
    assert failure.state.int_stack.top() == 5_124_785_464_929_190_872


@pytest.mark.parametrize(
    "op, value",
    [
        (IntInstruction.INC, INT_MAX),
        (IntInstruction.DEC, INT_MIN),
        (IntInstruction.NEGATE, INT_MIN),
        (IntInstruction.ABS, INT_MIN),
        (IntInstruction.SQUARE, 2 ** 32),
    ],
)
def test_unary_overflow(op, value):
    with pytest.raises(InstructionFailure) as info:
        perform(op, int_state(value))
    assert info.value.error == Overflow(op)
    assert info.value.state.int_stack.items() == [value]


def test_unary_in_range():
    assert run_int(IntInstruction.INC, INT_MAX - 1) == [INT_MAX]
    assert run_int(IntInstruction.NEGATE, INT_MAX) == [-INT_MAX]
    assert run_int(IntInstruction.ABS, -5) == [5]
    assert run_int(IntInstruction.SQUARE, -9) == [81]


def test_divide_and_mod_by_zero():
    assert run_int(IntInstruction.PROTECTED_DIVIDE, 0, 7) == [1]
    assert run_int(IntInstruction.MOD, 0, 7) == [0]


def test_min_by_minus_one_overflows():
    for op in (IntInstruction.PROTECTED_DIVIDE, IntInstruction.MOD):
        with pytest.raises(InstructionFailure) as info:
            perform(op, int_state(-1, INT_MIN))
        assert info.value.error == Overflow(op)
        assert info.value.state.int_stack.items() == [-1, INT_MIN]


def test_underflow_keeps_existing_items():
    with pytest.raises(InstructionFailure) as info:
        perform(IntInstruction.ADD, int_state(3))
    assert info.value.error == StackUnderflow(StackType.INTEGER, 2)
    assert info.value.is_recoverable()
    assert info.value.state.int_stack.items() == [3]


def test_stack_manipulation():
    assert run_int(IntInstruction.DUP, 1, 2) == [1, 2, 2]
    assert run_int(IntInstruction.SWAP, 1, 2) == [2, 1]
    assert run_int(IntInstruction.POP, 1, 2) == [1]


def test_predicates_and_comparisons_push_booleans():
    state = perform(IntInstruction.IS_NEGATIVE, int_state(-3))
    assert state.int_stack.is_empty()
    assert state.bool_stack.items() == [True]

    state = perform(IntInstruction.LESS_THAN, int_state(5, 2))
    assert state.bool_stack.items() == [True]

    state = perform(IntInstruction.EQUAL, int_state(4, 4))
    assert state.bool_stack.items() == [True]


def test_capacity_overflow_is_fatal():
    state = int_state(1, 2, max_stack_size=2)
    with pytest.raises(InstructionFailure) as info:
        perform(IntInstruction.DUP, state)
    assert info.value.error == StackOverflow(StackType.INTEGER, 2)
    assert info.value.is_fatal()
    assert state.int_stack.items() == [1, 2]


def test_bool_instructions():
    state = PushState()
    state.bool_stack.push(True)
    state.bool_stack.push(False)
    assert perform(BoolInstruction.XOR, state).bool_stack.items() == [True]

    state = int_state(0)
    assert perform(BoolInstruction.FROM_INT, state).bool_stack.items() == [False]


def test_float_divide_by_zero_and_overflow():
    state = PushState()
    state.float_stack.push(0.0)
    state.float_stack.push(2.5)
    assert perform(FloatInstruction.PROTECTED_DIVIDE, state).float_stack.items() == [1.0]

    state = PushState()
    state.float_stack.push(1e308)
    state.float_stack.push(10.0)
    with pytest.raises(InstructionFailure) as info:
        perform(FloatInstruction.MULTIPLY, state)
    assert info.value.error == Overflow(FloatInstruction.MULTIPLY)
    assert state.float_stack.items() == [1e308, 10.0]


def test_exec_if_without_condition_underflows():
    state = PushState()
    state.exec_stack.push_all([PushLiteral.from_int(1), PushLiteral.from_int(2)])
    with pytest.raises(InstructionFailure) as info:
        perform(ExecInstruction.IF, state)
    assert info.value.error == StackUnderflow(StackType.BOOLEAN, 1)
    assert len(state.exec_stack) == 2


def test_literal_outside_int_range_is_rejected():
    with pytest.raises(OverflowError):
        PushLiteral.from_int(INT_MAX + 1)


def test_literal_constructor_checks_value():
    with pytest.raises(OverflowError):
        PushLiteral(StackType.INTEGER, 2 ** 70)
    with pytest.raises(TypeError):
        PushLiteral(StackType.INTEGER, 2.5)
    assert PushLiteral(StackType.FLOAT, 3).value == 3.0
    assert PushLiteral(StackType.INTEGER, 4) == PushLiteral.from_int(4)
