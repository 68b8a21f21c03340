# scalargrad/ops/arithmetic.py
import numpy as np

from ..core.errors import TapeMismatchError
from ..core.node import OpTag
from ..core.value import Value
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility


def _as_value(x, tape):
    """Ensure x is a Value; otherwise wrap it as a constant leaf on `tape`."""
    return x if isinstance(x, Value) else Value(x, tape=tape)


def _operands(x, y):
    """
    Resolve a binary operator's operands onto one shared tape.

    Plain numbers are recorded as constant leaves on the tape of the Value
    operand. Two Values must already share a tape.
    """
    if isinstance(x, Value):
        tape = x.tape
    elif isinstance(y, Value):
        tape = y.tape
    else:
        tape = tape_mod.global_tape
    x = _as_value(x, tape)
    y = _as_value(y, tape)
    if x.tape is not y.tape:
        raise TapeMismatchError("operands are recorded on different tapes")
    return tape, x, y


def add(x, y):
    """
    out.val = x.val + y.val
    Backward: x.grad += out.grad ; y.grad += out.grad
    """
    tape, x, y = _operands(x, y)
    with np.errstate(invalid="ignore", over="ignore"):
        out_val = x.data + y.data
    idx = tape.push_node(op_tag=OpTag.ADD, value=out_val,
                         operands=(x.index, y.index))
    return Value._from_index(tape, idx)


def mul(x, y):
    """
    out.val = x.val * y.val
    Backward: x.grad += y.val * out.grad ; y.grad += x.val * out.grad
    """
    tape, x, y = _operands(x, y)
    with np.errstate(invalid="ignore", over="ignore"):
        out_val = x.data * y.data
    idx = tape.push_node(op_tag=OpTag.MUL, value=out_val,
                         operands=(x.index, y.index))
    return Value._from_index(tape, idx)


def pow(x, p):
    """
    Power by a constant exponent:
      out.val = x.val ** p
    Backward: x.grad += p * x.val ** (p - 1) * out.grad

    The exponent is not part of the graph. Negative bases with non-integer
    exponents give nan and zero bases with negative exponents give inf,
    following float64 semantics.
    """
    if isinstance(p, Value):
        raise TypeError("pow() only supports constant (int/float) exponents, not Value")
    if isinstance(p, bool) or not isinstance(p, (int, float, np.integer, np.floating)):
        raise TypeError(f"pow() exponent must be int or float, but got {type(p)}")
    if not isinstance(x, Value):
        x = Value(x)
    p = float(p)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out_val = np.float64(x.data) ** p
    idx = x.tape.push_node(op_tag=OpTag.POW, value=out_val,
                           operands=(x.index,), exponent=p)
    return Value._from_index(x.tape, idx)


def neg(x):
    """Unary negation, recorded as multiplication by the constant -1.0."""
    return mul(x, -1.0)


def sub(x, y):
    """x - y, recorded as x + (-y) with a fresh negation node."""
    _, x, y = _operands(x, y)
    return add(x, neg(y))


def div(x, y):
    """
    x / y, recorded as x * y ** -1.0.
    Division by zero yields +/-inf (or nan for 0/0); nothing is raised.
    """
    _, x, y = _operands(x, y)
    return mul(x, pow(y, -1.0))
