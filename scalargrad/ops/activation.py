# scalargrad/ops/activation.py
import numpy as np

from ..core.node import OpTag
from ..core.value import Value


def relu(x):
    """
    Rectified linear unit:
      out.val = max(x.val, 0)
    Backward: x.grad += (out.val > 0) * out.grad

    The backward rule tests the sign of the output, not of the input.
    """
    if not isinstance(x, Value):
        x = Value(x)
    out_val = np.float64(0.0) if x.data < 0.0 else x.data
    idx = x.tape.push_node(op_tag=OpTag.RELU, value=out_val, operands=(x.index,))
    return Value._from_index(x.tape, idx)
