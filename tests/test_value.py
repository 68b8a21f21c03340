import numpy as np
import pytest

from scalargrad import (
    OpTag, ScalarGradError, StaleValueError, Tape, TapeMismatchError, Value,
    current_tape, use_tape,
)


def test_leaf_starts_with_zero_grad(tape):
    v = Value(3.0)
    assert v.data == 3.0
    assert v.grad == 0.0
    assert v.op is OpTag.NONE
    assert v.operands == ()
    assert v.index == 0
    assert v.tape is tape
    assert len(tape) == 1


def test_leaf_accepts_ints_and_numpy_scalars():
    assert Value(2).data == 2.0
    assert Value(np.float32(1.5)).data == 1.5
    assert Value(np.int64(7)).data == 7.0


@pytest.mark.parametrize("bad", ["1.0", True, [1.0], None])
def test_leaf_rejects_non_numeric(bad):
    with pytest.raises(TypeError):
        Value(bad)


def test_leaf_on_explicit_tape(tape):
    t = Tape()
    v = Value(1.0, tape=t)
    assert v.tape is t
    assert len(t) == 1
    assert len(tape) == 0


def test_reset_invalidates_handles(tape):
    v = Value(1.0)
    tape.reset()
    Value(5.0)  # index 0 is taken again by a new node
    with pytest.raises(StaleValueError):
        v.data
    with pytest.raises(StaleValueError):
        v.grad
    with pytest.raises(StaleValueError):
        v + 1.0


def test_stale_error_is_programmer_error():
    assert issubclass(StaleValueError, ScalarGradError)
    assert issubclass(TapeMismatchError, ScalarGradError)
    assert issubclass(ScalarGradError, RuntimeError)


def test_operands_on_different_tapes_are_rejected():
    a = Value(1.0, tape=Tape())
    b = Value(2.0, tape=Tape())
    with pytest.raises(TapeMismatchError):
        a + b
    with pytest.raises(TapeMismatchError):
        a * b


def test_use_tape_swaps_and_restores(tape):
    assert current_tape() is tape
    with use_tape() as inner:
        assert inner is not tape
        assert current_tape() is inner
        v = Value(1.0)
        assert v.tape is inner
    assert current_tape() is tape
    assert len(tape) == 0


def test_use_tape_keeps_given_empty_tape():
    t = Tape()
    with use_tape(t) as active:
        assert active is t


def test_repr():
    assert repr(Value(2.0)) == "Value(data=2.0, grad=0.0)"
