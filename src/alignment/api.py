"""
High-level API for alignment tracing.

This module provides the main entry points:
- trace_alignment(): Search + projection for one automaton/alignment pair
- trace_alignment_by_key(): Same, looking both up in keyed archives
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union, Dict, Any, List
import json
import logging

from fst_model import Automaton, FstArchive

from .base import Trace, SearchConfig
from .loaders import AlignmentArchive
from .projection import TraceProjection, project_trace
from .search import find_trace

logger = logging.getLogger(__name__)


@dataclass
class TraceResult:
    """
    Outcome of tracing one alignment.

    Attributes:
        alignment: The labels that were traced
        trace: The found path, or None
        projection: Projections of the trace, or None
        key: Archive key, when looked up by key

    Example:
        >>> result = trace_alignment(fst, [5, 5, 7])
        >>> if result.found:
        ...     print(result.summary())
    """
    alignment: List[int]
    trace: Optional[Trace] = None
    projection: Optional[TraceProjection] = None
    key: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.trace is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (JSON-serializable)."""
        d = {
            "found": self.found,
            "alignment": list(self.alignment),
        }
        if self.key is not None:
            d["key"] = self.key
        if self.found:
            d["trace"] = self.trace.to_list()
            d["projection"] = self.projection.to_dict()
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def summary(self) -> str:
        """Get a summary string."""
        name = f" '{self.key}'" if self.key is not None else ""
        if not self.found:
            return f"Alignment{name}: no matching path ({len(self.alignment)} labels)"
        lines = [
            f"Alignment{name}:",
            f"  Labels: {len(self.alignment)}",
            f"  Path arcs: {len(self.trace)}",
            f"  Runs: {len(self.projection.runs)}",
            f"  States on path: {len(self.projection.states)}",
        ]
        return "\n".join(lines)

    def __repr__(self):
        if not self.found:
            return "TraceResult(not found)"
        return f"TraceResult({len(self.trace)} arcs)"


def trace_alignment(
    automaton: Automaton,
    alignment: Sequence[int],
    config: Optional[SearchConfig] = None,
) -> TraceResult:
    """
    Trace an alignment through an automaton.

    A missing path is not an error: the result has ``found == False``.

    Args:
        automaton: Automaton to search
        alignment: Non-zero labels to consume
        config: SearchConfig

    Returns:
        TraceResult
    """
    alignment = list(alignment)
    trace = find_trace(automaton, alignment, config)
    if trace is None:
        return TraceResult(alignment=alignment)
    return TraceResult(
        alignment=alignment,
        trace=trace,
        projection=project_trace(automaton, trace),
    )


def trace_alignment_by_key(
    key: str,
    fst_archive: Union[str, Path, FstArchive],
    ali_archive: Union[str, Path, AlignmentArchive],
    config: Optional[SearchConfig] = None,
) -> TraceResult:
    """
    Look up an automaton and an alignment by key and trace them.

    Args:
        key: Archive key shared by both archives
        fst_archive: FstArchive or path to a text FST archive
        ali_archive: AlignmentArchive or path to a text alignment archive
        config: SearchConfig

    Returns:
        TraceResult with ``key`` set

    Raises:
        KeyError: If either archive lacks ``key``
    """
    if not isinstance(ali_archive, AlignmentArchive):
        ali_archive = AlignmentArchive(ali_archive)
    if not isinstance(fst_archive, FstArchive):
        fst_archive = FstArchive(fst_archive)

    alignment = ali_archive[key]
    automaton = fst_archive[key]

    result = trace_alignment(automaton, alignment, config)
    result.key = key
    if not result.found:
        logger.warning(f"Couldn't match the alignment '{key}' with the graph")
    return result
