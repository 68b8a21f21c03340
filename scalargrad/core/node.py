# scalargrad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class OpTag(Enum):
    """Operator that produced a node. Neg/Sub/Div are built from these."""
    NONE = ""
    ADD = "+"
    MUL = "*"
    POW = "**"
    RELU = "ReLU"


@dataclass(frozen=True)
class Node:
    """
    One node on the tape produced by a leaf constructor or a primitive operation.

    Attributes
    ----------
    op_tag   : OpTag
        Operator that produced the node (``OpTag.NONE`` for leaves).
    value    : float
        Forward (primal) value, a numpy float64.
    operands : Tuple[int, ...]
        Tape indices of the input nodes, in argument order. Always smaller
        than this node's own index.
    exponent : Optional[float]
        Constant exponent of a ``POW`` node; ``None`` otherwise.

    The gradient is not stored here: it lives in ``Tape.grads`` so that nodes
    stay immutable after construction.
    """
    op_tag: OpTag
    value: float
    operands: Tuple[int, ...] = ()
    exponent: Optional[float] = None
