"""
WFST Alignment Tracer

Find and draw the path an alignment took through a weighted automaton.

Usage:
    from fst_model import read_fst_text
    from alignment import trace_alignment
    from visualization_utils import render_trace_dot

    fst = read_fst_text("graph.txt")
    result = trace_alignment(fst, [2, 2, 4, 4, 7])
    if result.found:
        print(render_trace_dot(fst, result.projection))

Modules:
- fst_model: Automaton arena, loaders, builders
- alignment: Trace search, projections, alignment archives
- symbol_utils: Symbol tables, transition-id decoration
- visualization_utils: GraphViz DOT rendering
- trace_tools: Command-line drivers (draw-ali, make-tid-syms)
"""

# Version
__version__ = "0.1.0"
