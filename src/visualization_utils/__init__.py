"""
Visualization utilities for traced alignments.

Usage:
    from visualization_utils import render_trace_dot, save_dot

    dot = render_trace_dot(fst, result.projection, input_decorator=transitions)
    save_dot(dot, "ali.dot")
"""

from .dot import (
    RenderConfig,
    make_arc_label,
    render_trace_dot,
    render_result_dot,
    save_dot,
)

__all__ = [
    "RenderConfig",
    "make_arc_label",
    "render_trace_dot",
    "render_result_dot",
    "save_dot",
]
