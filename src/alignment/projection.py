"""
Read-only views of a found trace.

- on_path_arcs: which arc positions of each state the path uses
- compress_trace: consecutive repeats of an entry merged with a count
- path_states: states the path visits, in first-visit order
- trace_labels / verify_trace: the labels a trace consumes
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set, Any
import itertools

from fst_model import Automaton, EPSILON

from .base import Trace


@dataclass(frozen=True)
class TraceRun:
    """
    A run of identical consecutive trace entries.

    Attributes:
        state: Source state
        arc_index: Arc position at ``state``
        count: Number of consecutive traversals (>= 1)
    """
    state: int
    arc_index: int
    count: int = 1


@dataclass
class TraceProjection:
    """
    Everything a renderer needs from a trace.

    Attributes:
        on_path: state -> set of arc positions used anywhere in the trace
        runs: Run-length compressed trace
        states: States on the path in first-visit order (end state included)
    """
    on_path: Dict[int, Set[int]] = field(default_factory=dict)
    runs: List[TraceRun] = field(default_factory=list)
    states: List[int] = field(default_factory=list)

    def is_on_path(self, state: int, arc_index: int) -> bool:
        return arc_index in self.on_path.get(state, ())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "on_path": {str(s): sorted(arcs) for s, arcs in self.on_path.items()},
            "runs": [[r.state, r.arc_index, r.count] for r in self.runs],
            "states": list(self.states),
        }


def on_path_arcs(trace: Trace) -> Dict[int, Set[int]]:
    """
    Map each state to the arc positions the trace takes from it.

    Args:
        trace: A found trace

    Returns:
        Dict state -> set of arc positions
    """
    on_path: Dict[int, Set[int]] = {}
    for state, arc_index in trace:
        on_path.setdefault(state, set()).add(arc_index)
    return on_path


def compress_trace(trace: Trace) -> List[TraceRun]:
    """
    Merge consecutive identical entries into runs.

    A self-loop taken three times in a row becomes one run with count 3.
    Non-consecutive repeats stay separate runs.

    Example:
        >>> compress_trace(Trace([(0, 0), (1, 0), (1, 0), (1, 1)]))
        [TraceRun(state=0, arc_index=0, count=1), TraceRun(state=1, arc_index=0, count=2), TraceRun(state=1, arc_index=1, count=1)]
    """
    return [
        TraceRun(state, arc_index, sum(1 for _ in group))
        for (state, arc_index), group in itertools.groupby(trace)
    ]


def path_states(automaton: Automaton, trace: Trace) -> List[int]:
    """States visited by the trace in first-visit order, end state included."""
    states = []
    seen = set()
    for state, _ in trace:
        if state not in seen:
            seen.add(state)
            states.append(state)
    end = trace.end_state(automaton)
    if end is not None and end not in seen:
        states.append(end)
    return states


def trace_labels(automaton: Automaton, trace: Trace) -> List[int]:
    """Non-epsilon input labels along the trace, in order."""
    labels = []
    for state, arc_index in trace:
        ilabel = automaton.arc(state, arc_index).ilabel
        if ilabel != EPSILON:
            labels.append(ilabel)
    return labels


def verify_trace(automaton: Automaton, alignment: Sequence[int], trace: Trace) -> bool:
    """
    Check that a trace is a valid path consuming ``alignment`` exactly.

    The first entry must leave the start state, each entry must leave the
    state the previous arc entered, and the path must end in a final state.
    """
    if automaton.start is None:
        return False
    state = automaton.start
    for src, arc_index in trace:
        if src != state or not 0 <= arc_index < automaton.num_arcs_at(src):
            return False
        state = automaton.arc(src, arc_index).dst
    if not automaton.is_final(state):
        return False
    return trace_labels(automaton, trace) == [int(label) for label in alignment]


def project_trace(automaton: Automaton, trace: Trace) -> TraceProjection:
    """
    Build all projections of a trace at once.

    Args:
        automaton: Automaton the trace was found in
        trace: A found trace

    Returns:
        TraceProjection
    """
    return TraceProjection(
        on_path=on_path_arcs(trace),
        runs=compress_trace(trace),
        states=path_states(automaton, trace),
    )
