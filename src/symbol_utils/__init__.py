"""
Symbol tables and label decoration.

Labels are opaque integers to the search; these helpers turn them into
display text for rendering:
- SymbolTable: OpenFST text symbol tables (words, phones)
- TransitionTable: transition-id -> phone / HMM state / pdf / transition index
- make_transition_symbols: symbol table naming every transition-id

Any object with a ``decorate(label) -> str`` method can act as a decorator
for the renderer.
"""

from .symbol_table import SymbolTable
from .transitions import (
    TransitionInfo,
    TransitionTable,
    make_transition_symbols,
)

__all__ = [
    "SymbolTable",
    "TransitionInfo",
    "TransitionTable",
    "make_transition_symbols",
]
