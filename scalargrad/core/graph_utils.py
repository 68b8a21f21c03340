"""
Graph statistics helpers.

Summarise the structure of a tape (node/edge counts, fan-in/fan-out, operator
breakdown) for debugging and tests.
"""

import logging
from collections import Counter
from typing import Dict, Optional

import numpy as np

from . import tape as tape_mod
from .tape import Tape

logger = logging.getLogger(__name__)


def graph_summary(tape: Optional[Tape] = None) -> Dict:
    """
    Collect summary statistics of a computation graph.

    Args:
        tape: tape to inspect; the active tape when omitted

    Returns:
        dict with keys 'nodes', 'edges', 'max_fan_in', 'avg_fan_in',
        'max_fan_out', 'avg_fan_out' and 'operations' (count per operator
        name, leaves counted under 'NONE')
    """
    tape = tape if tape is not None else tape_mod.global_tape
    n_nodes = len(tape.nodes)
    if n_nodes == 0:
        return {
            'nodes': 0, 'edges': 0,
            'max_fan_in': 0, 'avg_fan_in': 0.0,
            'max_fan_out': 0, 'avg_fan_out': 0.0,
            'operations': {},
        }

    fan_ins = [len(node.operands) for node in tape.nodes]
    n_edges = sum(fan_ins)

    # Fan-out: how many later nodes reference each node as an operand
    fan_outs = [0] * n_nodes
    for node in tape.nodes:
        for p in node.operands:
            fan_outs[p] += 1

    op_counter = Counter(node.op_tag.name for node in tape.nodes)

    summary = {
        'nodes': n_nodes,
        'edges': n_edges,
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter),
    }
    logger.debug("graph summary: %s", summary)
    return summary
