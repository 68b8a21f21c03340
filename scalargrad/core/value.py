# scalargrad/core/value.py
from __future__ import annotations
import numbers
from typing import Optional, Tuple

import numpy as np

from . import tape as tape_mod  # Use module access for use_tape() compatibility
from .errors import StaleValueError
from .node import Node, OpTag


def _check_real(data):
    # bool is an int subclass but never a meaningful scalar here
    if isinstance(data, bool) or not isinstance(data, (numbers.Real, np.floating, np.integer)):
        raise TypeError(
            f"Value only accepts real numeric scalars (int, float, numpy scalar), "
            f"but got {type(data)}"
        )


class Value:
    """
    Handle to one scalar node on a tape.

    A Value does not own its data: it is a (tape, index, generation) triple,
    and ``data`` / ``grad`` are read through the tape on every access. Many
    handles may refer to the same node, and nodes may be shared as operands of
    any number of later operations.

    Attributes
    ----------
    data : float
        Forward (primal) value of the node.
    grad : float
        Accumulated d(root)/d(this node) after a backward pass.
    op : OpTag
        Operator that produced the node.
    operands : tuple of Value
        Handles to the nodes this one was computed from.
    """

    __slots__ = ("_tape", "_idx", "_generation")

    def __init__(self, data, *, tape: Optional[tape_mod.Tape] = None):
        _check_real(data)
        tape = tape if tape is not None else tape_mod.global_tape
        self._tape = tape
        self._idx = tape.push_node(op_tag=OpTag.NONE, value=data)
        self._generation = tape.generation

    @classmethod
    def _from_index(cls, tape: tape_mod.Tape, idx: int) -> "Value":
        """Wrap an existing tape index without pushing a node."""
        obj = cls.__new__(cls)
        obj._tape = tape
        obj._idx = idx
        obj._generation = tape.generation
        return obj

    def _node(self) -> Node:
        if self._generation != self._tape.generation or self._idx >= len(self._tape.nodes):
            raise StaleValueError(
                f"Value #{self._idx} belongs to tape generation {self._generation}, "
                f"but the tape is now at generation {self._tape.generation}"
            )
        return self._tape.nodes[self._idx]

    @property
    def tape(self) -> tape_mod.Tape:
        return self._tape

    @property
    def index(self) -> int:
        self._node()
        return self._idx

    @property
    def data(self) -> float:
        return self._node().value

    @property
    def grad(self) -> float:
        self._node()
        return self._tape.grads[self._idx]

    @property
    def op(self) -> OpTag:
        return self._node().op_tag

    @property
    def operands(self) -> Tuple["Value", ...]:
        return tuple(Value._from_index(self._tape, p) for p in self._node().operands)

    def __repr__(self):
        return f"Value(data={self.data}, grad={self.grad})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, exponent):
        from ..ops.arithmetic import pow
        return pow(self, exponent)

    def relu(self):
        from ..ops.activation import relu
        return relu(self)

    def backward(self):
        """Run a reverse pass seeded at this value; see ``engine.run_backward``."""
        from .engine import run_backward
        run_backward(self)
