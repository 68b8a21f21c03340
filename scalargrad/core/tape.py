# scalargrad/core/tape.py
from __future__ import annotations
import logging
from typing import List, Optional, Sequence
from contextlib import contextmanager

import numpy as np

from .node import Node, OpTag

logger = logging.getLogger(__name__)


class Tape:
    """
    Arena of graph nodes, recorded in construction order.

    Nodes are addressed by their index in ``nodes``; ``grads[i]`` is the
    gradient accumulator of ``nodes[i]``. Because an operator can only refer
    to nodes that already exist, the recording order is itself a valid
    topological order of the whole tape.

    ``generation`` is bumped on every ``reset`` so that handles created before
    the reset can detect that their index no longer means anything.
    """
    def __init__(self):
        self.nodes: List[Node] = []
        self.grads: List[np.float64] = []
        self.generation = 0

    def __len__(self):
        return len(self.nodes)

    def reset(self):
        logger.debug("resetting tape (generation %d, %d nodes)", self.generation, len(self.nodes))
        self.nodes.clear()
        self.grads.clear()
        self.generation += 1

    def push_node(self, *, op_tag: OpTag, value, operands: Sequence[int] = (),
                  exponent: Optional[float] = None) -> int:
        """
        Append a Node(op_tag, value, operands, exponent) with a zero gradient.
        Returns the new node's index.
        """
        idx = len(self.nodes)
        operands = tuple(operands)
        for p in operands:
            if not 0 <= p < idx:
                raise IndexError(f"operand index {p} does not precede node {idx}")
        self.nodes.append(Node(op_tag=op_tag, value=np.float64(value),
                               operands=operands, exponent=exponent))
        self.grads.append(np.float64(0.0))
        return idx


# Global default tape; operators record onto the tape their operands live on,
# new leaves go here unless a tape is given explicitly.
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily make another tape (a fresh one by default)
    the active tape:
        with use_tape():
            x = Value(3.0)
            ... build computation ...
            run_backward(y)
    """
    from . import tape as _tape_mod  # module access so callers see the swap
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev


def current_tape() -> Tape:
    """Return the tape new leaves are recorded on."""
    return global_tape
