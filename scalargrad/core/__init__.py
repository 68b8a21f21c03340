# scalargrad/core/__init__.py

"""
Core public API for the scalargrad package.

Exports:
    Value          : Handle to one scalar node on a tape.
    Tape           : Arena holding the nodes and their gradients.
    global_tape    : The default tape new leaves are recorded on.
    use_tape       : Context manager to temporarily switch the active tape.
    current_tape   : The tape currently active.
    build_order    : Topological order of the graph below a value.
    run_backward   : Run a single reverse pass to accumulate gradients.
    zero_grad      : Reset gradients to zero.
    grad, grads,
    grads_list     : Convenience: gradients of plain functions on a fresh tape.
    value          : Convenience: extract the primal value from a Value.
"""

from .node import Node, OpTag
from .value import Value
from .tape import Tape, global_tape, use_tape, current_tape
from .engine import build_order, run_backward, zero_grad
from .errors import ScalarGradError, StaleValueError, TapeMismatchError
from .seeds import grad, grads, grads_list, value
from .graph_utils import graph_summary

__all__ = [
    "Node", "OpTag",
    "Value",
    "Tape", "global_tape", "use_tape", "current_tape",
    "build_order", "run_backward", "zero_grad",
    "ScalarGradError", "StaleValueError", "TapeMismatchError",
    "grad", "grads", "grads_list", "value",
    "graph_summary",
]
