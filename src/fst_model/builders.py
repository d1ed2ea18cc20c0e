"""
Small automaton builders.
"""

from typing import Sequence

from .base import Automaton, WEIGHT_ONE


def make_linear_automaton(labels: Sequence[int], olabels: Sequence[int] = None) -> Automaton:
    """
    Build a chain 0 -> 1 -> ... -> n accepting exactly ``labels``.

    Args:
        labels: Input labels, one arc each
        olabels: Output labels (defaults to the input labels)

    Returns:
        Automaton whose last state is final
    """
    if olabels is None:
        olabels = labels
    if len(olabels) != len(labels):
        raise ValueError(f"Got {len(labels)} input labels but {len(olabels)} output labels")

    arcs = [(i, i + 1, p, o) for i, (p, o) in enumerate(zip(labels, olabels))]
    return Automaton.from_arcs(arcs, finals={len(labels): WEIGHT_ONE}, num_states=len(labels) + 1)
