"""
Automaton model for alignment tracing.

The automaton is a read-only arena: arcs are addressed by (state, position)
and positions never change, so a search can seek to any arc in O(1).

Modules:
- base: Arc, Automaton, label/weight constants
- loaders: OpenFST text files and keyed text archives
- builders: linear chains
"""

from .base import (
    Arc,
    Automaton,
    EPSILON,
    WEIGHT_ZERO,
    WEIGHT_ONE,
)
from .loaders import (
    read_fst_text,
    read_fst_archive,
    strip_rspecifier,
    FstArchive,
)
from .builders import (
    make_linear_automaton,
)

__all__ = [
    # Data structures
    "Arc",
    "Automaton",
    "EPSILON",
    "WEIGHT_ZERO",
    "WEIGHT_ONE",
    # Loaders
    "read_fst_text",
    "read_fst_archive",
    "strip_rspecifier",
    "FstArchive",
    # Builders
    "make_linear_automaton",
]
