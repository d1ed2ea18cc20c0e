"""
Base classes and data structures for alignment tracing.

Design Philosophy:
- A Trace is a single shared buffer; branches rewind it by truncation
- Hypotheses only hold ids and counters, never automaton data
- Everything here is private to one search call except the config
"""

from dataclasses import dataclass, field
from typing import Optional, List, Tuple, Iterator, Sequence

from fst_model import Automaton, EPSILON


# =============================================================================
# Errors
# =============================================================================

class SearchInvariantError(RuntimeError):
    """A popped hypothesis does not agree with the alignment (programming defect)."""


class SearchAbortedError(RuntimeError):
    """The search exceeded its expansion budget or deadline."""


# =============================================================================
# Alignment sequence
# =============================================================================

def validate_alignment(alignment: Sequence[int]) -> List[int]:
    """
    Check an alignment and return it as a list of ints.

    Raises:
        ValueError: If a label is 0 (reserved for epsilon)
    """
    labels = [int(label) for label in alignment]
    for i, label in enumerate(labels):
        if label == EPSILON:
            raise ValueError(f"Alignment label at position {i} is 0, which is reserved for epsilon")
    return labels


# =============================================================================
# Search state
# =============================================================================

@dataclass(frozen=True)
class Hypothesis:
    """
    One pending search branch.

    Attributes:
        state: State the arc leaves from
        arc_index: Position of the arc to try at ``state``
        consumed: Number of alignment labels consumed before the arc
        depth: Trace length when the hypothesis was created
    """
    state: int
    arc_index: int
    consumed: int
    depth: int


TraceEntry = Tuple[int, int]  # (state, arc_index)


@dataclass
class Trace:
    """
    A path through an automaton as (state, arc_index) entries.

    Example:
        >>> trace = find_trace(fst, [5])
        >>> for state, arc_index in trace:
        ...     print(state, fst.arc(state, arc_index).dst)
    """
    entries: List[TraceEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[TraceEntry]:
        return iter(self.entries)

    def __getitem__(self, idx):
        return self.entries[idx]

    def append(self, state: int, arc_index: int) -> None:
        self.entries.append((state, arc_index))

    def truncate(self, length: int) -> None:
        """Rewind the trace to its first ``length`` entries."""
        del self.entries[length:]

    def end_state(self, automaton: Automaton) -> Optional[int]:
        """
        State the path ends in.

        The start state for an empty trace, otherwise the target of the
        last arc.
        """
        if not self.entries:
            return automaton.start
        state, arc_index = self.entries[-1]
        return automaton.arc(state, arc_index).dst

    def to_list(self) -> List[List[int]]:
        return [[state, arc_index] for state, arc_index in self.entries]

    def __repr__(self):
        return f"Trace({len(self.entries)} arcs)"


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class SearchConfig:
    """
    Configuration for the trace search.

    Attributes:
        max_expansions: Abort after popping this many hypotheses (None = no limit)
        timeout: Abort after this many seconds (None = no limit)
    """
    max_expansions: Optional[int] = None
    timeout: Optional[float] = None

    def __post_init__(self):
        if self.max_expansions is not None and self.max_expansions < 0:
            raise ValueError(f"max_expansions must be >= 0, got {self.max_expansions}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")
