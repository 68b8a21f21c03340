# scalargrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape. Each helper builds its graph on a fresh tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
import numbers
from typing import Any, Callable, Dict, Iterable, List

from .value import Value
from .tape import use_tape
from .engine import run_backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Value) else x


def _as_output(y: Any, fname: str) -> Value:
    if isinstance(y, Value):
        return y
    if isinstance(y, numbers.Real) and not isinstance(y, bool):
        # constant output: every partial is zero
        return Value(y)
    raise ValueError(f"{fname} expects f to return a scalar Value or number, got {type(y)}")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> float:
    """
    Derivative of a scalar function y = f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = Value(x0)
        y = _as_output(f(x), "grad(f, x0)")
        run_backward(y)
        return float(x.grad)


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y = f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all dy/dvar simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a scalar Value
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        vars_v = {k: Value(v) for k, v in inputs.items()}
        y = _as_output(f(vars_v), "grads(f, inputs)")
        run_backward(y)
        return {k: float(vars_v[k].grad) for k in inputs.keys()}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a
    list of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = [Value(v) for v in x0_list]
        y = _as_output(f(xs), "grads_list(f, x0_list)")
        run_backward(y)
        return [float(x.grad) for x in xs]
