# scalargrad/__init__.py
# Scalar reverse-mode automatic differentiation with a small MLP on top

from .core.value import Value
from .core.node import OpTag
from .core.tape import Tape, global_tape, use_tape, current_tape
from .core.engine import build_order, run_backward, zero_grad
from .core.errors import ScalarGradError, StaleValueError, TapeMismatchError
from .core.seeds import grad, grads, grads_list
from .core.graph_utils import graph_summary

# Neural-network layer
from . import nn
from .nn import InitConfig, Module, Neuron, Layer, MLP

__all__ = [
    # Core
    'Value',
    'OpTag',
    'Tape',
    'global_tape',
    'use_tape',
    'current_tape',
    # Engine
    'build_order',
    'run_backward',
    'zero_grad',
    # Errors
    'ScalarGradError',
    'StaleValueError',
    'TapeMismatchError',
    # Helpers
    'grad',
    'grads',
    'grads_list',
    'graph_summary',
    # NN
    'nn',
    'InitConfig',
    'Module',
    'Neuron',
    'Layer',
    'MLP',
]
