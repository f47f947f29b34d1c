import numpy as np
import pytest

from pushgp import (
    INT_MAX,
    Block,
    ExecInstruction,
    InputTypeMismatch,
    InstructionFailure,
    IntInstruction,
    Overflow,
    PushExecutor,
    PushInput,
    PushLiteral,
    PushState,
    StackOverflow,
    StackType,
    StateBuildError,
    StepLimitExceeded,
    UnknownInput,
)


def lit(value):
    return PushLiteral.from_int(value)


def test_builder_places_first_instruction_on_top():
    state = PushState.builder().with_program([lit(1), lit(2)]).build()
    assert state.exec_stack.top() == lit(1)
    assert state.total_size() == 2


def test_builder_rejects_program_longer_than_capacity():
    with pytest.raises(StateBuildError):
        PushState.builder().with_max_stack_size(2).with_program([lit(1), lit(2), lit(3)])
    with pytest.raises(StateBuildError):
        PushState.builder().with_program([lit(1), lit(2), lit(3)]).with_max_stack_size(2)


def test_builder_rejects_duplicate_inputs():
    builder = PushState.builder().with_int_input("x", 1)
    with pytest.raises(StateBuildError):
        builder.with_bool_input("x", True)


def test_state_copy_is_independent():
    state = PushState.builder().with_int_input("x", 4).build()
    state.int_stack.push(7)
    clone = state.copy()
    clone.int_stack.push(8)
    assert state.int_stack.items() == [7]
    assert clone.int_stack.items() == [7, 8]
    assert clone.inputs == {"x": 4}
    clone.int_stack.pop()
    assert clone == state


def test_pop_n_returns_top_first():
    state = PushState()
    for value in (1, 2, 3):
        state.int_stack.push(value)
    assert state.int_stack.pop_n(2) == [3, 2]
    assert state.int_stack.items() == [1]


def test_execute_adds_literals():
    state = PushExecutor().execute([lit(409), lit(512), IntInstruction.ADD])
    assert state.int_stack.items() == [921]
    assert state.exec_stack.is_empty()


def test_recoverable_failure_is_skipped():
    executor = PushExecutor()
    program = [
        lit(4_098_586_571_925_584_936),
        lit(5_124_785_464_929_190_872),
        IntInstruction.ADD,
        IntInstruction.POP,
    ]
    state = executor.execute(program)
    assert state.int_stack.items() == [4_098_586_571_925_584_936]
    assert [f.error for f in executor.recovered] == [Overflow(IntInstruction.ADD)]


def test_inputs_dispatch_by_value_type():
    program = [
        PushInput("x"),
        PushInput("flag", StackType.BOOLEAN),
        PushInput("r", StackType.FLOAT),
    ]
    state = PushExecutor().execute(program, {"x": 3, "flag": True, "r": 1.5})
    assert state.int_stack.items() == [3]
    assert state.bool_stack.items() == [True]
    assert state.float_stack.items() == [1.5]


def test_unknown_input_is_fatal():
    with pytest.raises(InstructionFailure) as info:
        PushExecutor().execute([PushInput("y")], {"x": 1})
    assert info.value.error == UnknownInput("y")
    assert info.value.is_fatal()


def test_step_limit():
    executor = PushExecutor(max_steps=3)
    with pytest.raises(InstructionFailure) as info:
        executor.execute([lit(i) for i in range(5)])
    assert info.value.error == StepLimitExceeded(3)
    assert info.value.state.int_stack.items() == [0, 1, 2]


def test_block_unpacking_past_capacity_is_fatal():
    block = Block((lit(1), IntInstruction.DUP, IntInstruction.DUP))
    with pytest.raises(InstructionFailure) as info:
        PushExecutor(max_stack_size=2).execute([block])
    assert info.value.error == StackOverflow(StackType.EXEC, 2)


def test_exec_if_picks_branch():
    for condition, expected in ((True, [1]), (False, [2])):
        program = [PushLiteral.from_bool(condition), ExecInstruction.IF, lit(1), lit(2)]
        state = PushExecutor().execute(program)
        assert state.int_stack.items() == expected
        assert state.bool_stack.is_empty()


def test_exec_dup_runs_block_twice():
    program = [lit(1), ExecInstruction.DUP, Block((IntInstruction.INC,))]
    state = PushExecutor().execute(program)
    assert state.int_stack.items() == [3]


def test_output_reads_top_or_none():
    state = PushExecutor().execute([lit(5), lit(6)])
    assert PushExecutor.output(state) == 6
    assert PushExecutor.output(state, StackType.BOOLEAN) is None


def test_input_read_onto_other_stack_is_fatal():
    program = [PushInput("r"), IntInstruction.INC]
    with pytest.raises(InstructionFailure) as info:
        PushExecutor().execute(program, {"r": 1.5})
    assert info.value.error == InputTypeMismatch("r", StackType.FLOAT, StackType.INTEGER)
    assert info.value.is_fatal()
    assert info.value.state.int_stack.is_empty()


def test_numpy_scalar_inputs_land_on_matching_stack():
    program = [
        PushInput("x"),
        PushInput("r", StackType.FLOAT),
        PushInput("flag", StackType.BOOLEAN),
    ]
    inputs = {"x": np.int64(7), "r": np.float64(0.25), "flag": np.bool_(True)}
    state = PushExecutor().execute(program, inputs)
    assert state.int_stack.items() == [7]
    assert type(state.int_stack.top()) is int
    assert state.float_stack.items() == [0.25]
    assert state.bool_stack.items() == [True]


def test_builder_records_input_stack_types():
    state = (
        PushState.builder()
        .with_int_input("n", 3)
        .with_float_input("w", 2)
        .with_input("b", False)
        .build()
    )
    assert state.input_types == {
        "n": StackType.INTEGER,
        "w": StackType.FLOAT,
        "b": StackType.BOOLEAN,
    }
    assert state.copy().input_types == state.input_types


def test_builder_rejects_unusable_inputs():
    with pytest.raises(StateBuildError):
        PushState.builder().with_int_input("big", INT_MAX + 1)
    with pytest.raises(StateBuildError):
        PushState.builder().with_input("name", "text")
