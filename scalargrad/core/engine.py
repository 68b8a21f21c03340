# scalargrad/core/engine.py
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

import numpy as np

from . import tape as tape_mod  # Use module access for use_tape() compatibility
from .node import OpTag
from .tape import Tape
from .value import Value

logger = logging.getLogger(__name__)


def _topo_indices(tape: Tape, root_idx: int) -> List[int]:
    """
    Post-order depth-first traversal of the operand graph below `root_idx`.

    Uses an explicit stack instead of recursion, so the depth of the graph is
    not limited by the interpreter's recursion limit. A node is emitted only
    after all of its operands; shared operands are visited once.
    """
    order: List[int] = []
    visited = set()
    stack = [(root_idx, False)]
    while stack:
        idx, expanded = stack.pop()
        if expanded:
            order.append(idx)
            continue
        if idx in visited:
            continue
        visited.add(idx)
        stack.append((idx, True))
        # reversed so that operands are expanded left to right
        for p in reversed(tape.nodes[idx].operands):
            if p not in visited:
                stack.append((p, False))
    return order


def build_order(root: Value) -> List[Value]:
    """
    Topological order of every node reachable from `root`, root last.

    Each node appears exactly once and strictly after all of its operands.
    """
    tape = root.tape
    return [Value._from_index(tape, i) for i in _topo_indices(tape, root.index)]


def _backward_step(tape: Tape, idx: int):
    """
    Apply the local chain-rule step of node `idx`: read its own (already fully
    accumulated) gradient and add its contribution to each operand's gradient.
    """
    node = tape.nodes[idx]
    tag = node.op_tag
    if tag is OpTag.NONE:
        return
    grads = tape.grads
    out_grad = grads[idx]

    if tag is OpTag.ADD:
        a, b = node.operands
        grads[a] += out_grad
        grads[b] += out_grad

    elif tag is OpTag.MUL:
        a, b = node.operands
        a_val = tape.nodes[a].value
        b_val = tape.nodes[b].value
        grads[a] += b_val * out_grad
        grads[b] += a_val * out_grad

    elif tag is OpTag.POW:
        (a,) = node.operands
        p = node.exponent
        grads[a] += p * tape.nodes[a].value ** (p - 1.0) * out_grad

    elif tag is OpTag.RELU:
        (a,) = node.operands
        grads[a] += float(node.value > 0.0) * out_grad

    else:
        raise ValueError(f"no backward rule for operator {tag!r}")


def run_backward(root: Value):
    """
    Run a single reverse pass from `root`.

    1) topologically order every node reachable from `root`;
    2) seed root.grad = 1.0 (d root / d root);
    3) run each node's local backward step once, in reverse order.

    Afterwards every reachable node holds d(root)/d(node) in its gradient,
    provided gradients were zero beforehand. Repeated calls without
    `zero_grad` accumulate.
    """
    tape = root.tape
    root_idx = root.index
    order = _topo_indices(tape, root_idx)
    logger.debug("backward from node %d over %d nodes", root_idx, len(order))

    tape.grads[root_idx] = np.float64(1.0)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for idx in reversed(order):
            _backward_step(tape, idx)


def zero_grad(values: Optional[Iterable[Value]] = None):
    """
    Set gradients back to zero.

    With no argument every gradient on the active tape is cleared; otherwise
    only the given values' gradients are.
    """
    if values is None:
        tape = tape_mod.global_tape
        tape.grads[:] = [np.float64(0.0)] * len(tape.grads)
        return
    for v in values:
        v.tape.grads[v.index] = np.float64(0.0)
