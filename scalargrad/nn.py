# scalargrad/nn.py
"""
Feed-forward network building blocks on top of the scalar engine.

Neuron  : act(w . x + b), act = ReLU or identity
Layer   : nout neurons sharing the same inputs
MLP     : a chain of layers; every layer but the last uses ReLU

Forward evaluation only: there is no loss, optimizer or training loop here.
Weights are drawn uniformly from [low, high) and biases start at 0.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .core.engine import zero_grad
from .core.tape import Tape
from .core.value import Value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitConfig:
    """
    Weight initialisation settings.

    Attributes:
        low (float): Lower bound of the uniform weight distribution
        high (float): Upper bound of the uniform weight distribution
        seed (Optional[int]): Seed for the random generator; None draws fresh entropy
    """
    low: float = -1.0
    high: float = 1.0
    seed: Optional[int] = None

    def __post_init__(self):
        if not self.low < self.high:
            raise ValueError(f"InitConfig requires low < high, got [{self.low}, {self.high})")

    def make_rng(self) -> np.random.Generator:
        return np.random.default_rng(self.seed)


class Module:
    """Base class: anything that owns trainable Values."""

    def zero_grad(self):
        """Reset the gradients of all parameters to zero."""
        zero_grad(self.parameters())

    def parameters(self) -> List[Value]:
        return []


def _check_size(name: str, n: int):
    if n <= 0:
        raise ValueError(f"{name} must be a positive integer, got {n}")


class Neuron(Module):

    def __init__(self, nin: int, nonlin: bool = True, *,
                 config: Optional[InitConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 tape: Optional[Tape] = None):
        """
        Args:
            nin: Number of inputs
            nonlin: Apply ReLU to the weighted sum if True, identity otherwise
            config: Initialisation range and seed (defaults to InitConfig())
            rng: Generator to draw weights from; overrides config.seed when given
            tape: Tape the parameters are recorded on (active tape by default)
        """
        _check_size("nin", nin)
        config = config or InitConfig()
        rng = rng if rng is not None else config.make_rng()
        self.w = [Value(float(wi), tape=tape) for wi in rng.uniform(config.low, config.high, size=nin)]
        self.b = Value(0.0, tape=tape)
        self.nonlin = nonlin

    def __call__(self, x: Sequence) -> Value:
        if len(x) != len(self.w):
            raise ValueError(f"Neuron expects {len(self.w)} inputs, got {len(x)}")
        act = self.b
        for wi, xi in zip(self.w, x):
            act = act + wi * xi
        return act.relu() if self.nonlin else act

    def parameters(self) -> List[Value]:
        return self.w + [self.b]

    def __repr__(self):
        return f"{'ReLU' if self.nonlin else 'Linear'}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin: int, nout: int, nonlin: bool = True, *,
                 config: Optional[InitConfig] = None,
                 rng: Optional[np.random.Generator] = None,
                 tape: Optional[Tape] = None):
        _check_size("nout", nout)
        config = config or InitConfig()
        rng = rng if rng is not None else config.make_rng()
        self.neurons = [Neuron(nin, nonlin, config=config, rng=rng, tape=tape) for _ in range(nout)]

    def __call__(self, x: Sequence) -> List[Value]:
        # always a list, even for a single neuron
        return [n(x) for n in self.neurons]

    def parameters(self) -> List[Value]:
        return [p for n in self.neurons for p in n.parameters()]

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


class MLP(Module):

    def __init__(self, nin: int, nouts: Sequence[int], *,
                 config: Optional[InitConfig] = None,
                 tape: Optional[Tape] = None):
        """
        Args:
            nin: Number of input features
            nouts: Output size of each layer, e.g. [16, 16, 1]
            config: Initialisation range and seed, shared by all layers
            tape: Tape the parameters are recorded on (active tape by default)
        """
        if not nouts:
            raise ValueError("MLP needs at least one layer")
        config = config or InitConfig()
        # one generator for the whole network so a seed fixes every weight
        rng = config.make_rng()
        sz = [nin] + list(nouts)
        self.layers = [
            Layer(sz[i], sz[i + 1], nonlin=i != len(nouts) - 1, config=config, rng=rng, tape=tape)
            for i in range(len(nouts))
        ]
        logger.debug("built MLP %s with %d parameters", sz, len(self.parameters()))

    def __call__(self, x: Sequence) -> List[Value]:
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self) -> List[Value]:
        return [p for layer in self.layers for p in layer.parameters()]

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
