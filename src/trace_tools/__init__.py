"""
Command-line drivers.

Commands:
    draw-ali        Render an alignment on its graph as GraphViz DOT
    make-tid-syms   Write a symbol table naming every transition-id

Examples:
    python -m trace_tools draw-ali --key utt1 trans.txt phones.txt words.txt ali.txt graphs.txt
    python -m trace_tools make-tid-syms phones.txt trans.txt tid_syms.txt
"""

from . import draw_ali, make_tid_syms

COMMANDS = {
    "draw-ali": draw_ali.main,
    "make-tid-syms": make_tid_syms.main,
}

__all__ = ["COMMANDS", "draw_ali", "make_tid_syms"]
