"""
Trace search: find a path that consumes an alignment exactly.

The search is a depth-first walk over an explicit stack of hypotheses.
Each hypothesis remembers how long the shared trace was when it was
created; popping it rewinds the trace to that length before extending it,
which is all the backtracking there is.

A visited set of (state, consumed) pairs bounds the work by
num_states * (len(alignment) + 1) expansions, so epsilon cycles cannot
make the search diverge.
"""

from typing import List, Optional, Sequence, Set, Tuple
import logging
import time

from fst_model import Automaton, EPSILON

from .base import (
    Hypothesis,
    Trace,
    SearchConfig,
    SearchAbortedError,
    SearchInvariantError,
    validate_alignment,
)

logger = logging.getLogger(__name__)


def _expand(
    automaton: Automaton,
    alignment: List[int],
    state: int,
    consumed: int,
    depth: int,
    stack: List[Hypothesis],
) -> None:
    """Push a hypothesis for every arc of ``state`` that can be taken next."""
    expected = alignment[consumed] if consumed < len(alignment) else None
    for arc_index, arc in automaton.arcs_from(state):
        if arc.ilabel == EPSILON or arc.ilabel == expected:
            stack.append(Hypothesis(state, arc_index, consumed, depth))


def find_trace(
    automaton: Automaton,
    alignment: Sequence[int],
    config: Optional[SearchConfig] = None,
) -> Optional[Trace]:
    """
    Find a path consuming ``alignment`` exactly and ending in a final state.

    Arcs of a state are pushed in position order and popped last-in
    first-out, so later arcs are explored first. The first accepting path
    found is returned; it is not necessarily the shortest or the best.

    Args:
        automaton: Automaton to search
        alignment: Non-zero input labels to consume, in order
        config: Optional expansion budget / deadline

    Returns:
        Trace on success, None if no such path exists

    Raises:
        ValueError: If the alignment contains label 0
        SearchAbortedError: If the configured budget runs out
        SearchInvariantError: If a hypothesis disagrees with the alignment

    Example:
        >>> trace = find_trace(fst, [5, 5, 7])
        >>> if trace is None:
        ...     print("alignment does not match the graph")
    """
    alignment = validate_alignment(alignment)
    config = config or SearchConfig()

    start = automaton.start
    if start is None:
        logger.debug("Automaton has no start state")
        return None

    trace = Trace()
    if not alignment and automaton.is_final(start):
        return trace

    deadline = time.monotonic() + config.timeout if config.timeout is not None else None
    num_labels = len(alignment)
    visited: Set[Tuple[int, int]] = {(start, 0)}
    stack: List[Hypothesis] = []
    _expand(automaton, alignment, start, 0, 0, stack)

    expansions = 0
    while stack:
        if config.max_expansions is not None and expansions >= config.max_expansions:
            raise SearchAbortedError(
                f"Search exceeded {config.max_expansions} expansions "
                f"({len(visited)} states visited)"
            )
        if deadline is not None and time.monotonic() > deadline:
            raise SearchAbortedError(f"Search exceeded timeout of {config.timeout}s")

        hyp = stack.pop()
        expansions += 1

        arc = automaton.arc(hyp.state, hyp.arc_index)
        consumed = hyp.consumed
        if arc.ilabel != EPSILON:
            if consumed >= num_labels or arc.ilabel != alignment[consumed]:
                raise SearchInvariantError(
                    f"Arc {hyp.arc_index} of state {hyp.state} has label {arc.ilabel}, "
                    f"which does not match the alignment at position {consumed}"
                )
            consumed += 1

        trace.truncate(hyp.depth)
        trace.append(hyp.state, hyp.arc_index)

        next_state = arc.dst
        if consumed == num_labels and automaton.is_final(next_state):
            logger.debug(
                f"Found trace of {len(trace)} arcs after {expansions} expansions "
                f"({len(visited)} states visited)"
            )
            return trace

        key = (next_state, consumed)
        if key in visited:
            continue
        visited.add(key)
        _expand(automaton, alignment, next_state, consumed, len(trace), stack)

    logger.debug(f"No trace found after {expansions} expansions ({len(visited)} states visited)")
    return None
