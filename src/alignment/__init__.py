"""
Alignment tracing: find the path through an automaton that an alignment took.

An alignment is a sequence of non-zero input labels (e.g. Kaldi
transition-ids, one per frame). Tracing finds a path that consumes the
labels in order, taking epsilon arcs for free, and ends in a final state.

Main entry point:
    >>> from fst_model import read_fst_text
    >>> from alignment import trace_alignment

    >>> fst = read_fst_text("graph.txt")
    >>> result = trace_alignment(fst, [2, 2, 4, 4, 4, 7])
    >>> if result.found:
    ...     for run in result.projection.runs:
    ...         print(run.state, run.arc_index, run.count)

Lower level:
    >>> from alignment import find_trace, compress_trace
    >>> trace = find_trace(fst, [2, 2, 4])
    >>> runs = compress_trace(trace)
"""

from .base import (
    Hypothesis,
    Trace,
    SearchConfig,
    SearchInvariantError,
    SearchAbortedError,
    validate_alignment,
)
from .search import find_trace
from .projection import (
    TraceRun,
    TraceProjection,
    on_path_arcs,
    compress_trace,
    path_states,
    trace_labels,
    verify_trace,
    project_trace,
)
from .loaders import (
    read_alignment_archive,
    parse_alignment_line,
    AlignmentArchive,
)
from .api import TraceResult, trace_alignment, trace_alignment_by_key

__all__ = [
    # Data classes
    "Hypothesis",
    "Trace",
    "TraceRun",
    "TraceProjection",
    "TraceResult",
    "SearchConfig",
    # Errors
    "SearchInvariantError",
    "SearchAbortedError",
    # Search
    "find_trace",
    "validate_alignment",
    # Projection
    "on_path_arcs",
    "compress_trace",
    "path_states",
    "trace_labels",
    "verify_trace",
    "project_trace",
    # Loading
    "read_alignment_archive",
    "parse_alignment_line",
    "AlignmentArchive",
    # Main API
    "trace_alignment",
    "trace_alignment_by_key",
]
