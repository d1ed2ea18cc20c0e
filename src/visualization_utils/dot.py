"""
GraphViz DOT rendering of a traced alignment.

The path found for an alignment is drawn in red on top of the automaton:
path states and arcs first (runs of a repeated arc become one edge labelled
``(Nx)``), then the unused arcs of path states and all remaining states in
black. Render with e.g. ``dot -Tpdf ali.dot -o ali.pdf``.

Rendering is a pure function returning the DOT text; callers pick the sink.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union, List
import logging

from fst_model import Arc, Automaton, EPSILON, WEIGHT_ONE
from alignment import TraceProjection, TraceResult

logger = logging.getLogger(__name__)

DOT_HEADER = [
    "digraph FST {",
    "rankdir = LR;",
    'size = "8.5,11";',
    'label = "";',
    "center = 1;",
    "orientation = Portrait;",
    'ranksep = "0.4";',
    'nodesep = "0.25";',
]


@dataclass
class RenderConfig:
    """
    Display options for the DOT renderer.

    Attributes:
        show_tids: Append the raw input label as ``[tid]`` to arc labels
        show_non_path: Also draw arcs and states not on the path
        path_color: Color of path states and arcs
        other_color: Color of everything else
        font_size: Font size of states and arcs
        epsilon_symbol: Display text for input label 0
    """
    show_tids: bool = False
    show_non_path: bool = True
    path_color: str = "red"
    other_color: str = "black"
    font_size: int = 14
    epsilon_symbol: str = "<eps>"

    def __post_init__(self):
        if self.font_size <= 0:
            raise ValueError(f"font_size must be > 0, got {self.font_size}")


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def make_arc_label(
    arc: Arc,
    count: int = 1,
    config: Optional[RenderConfig] = None,
    input_decorator=None,
    output_symbols=None,
) -> str:
    """
    Display text for an arc: ``[(Nx)]input[[tid]]:output[/weight]``.

    Args:
        arc: The arc
        count: Number of consecutive traversals
        config: RenderConfig
        input_decorator: Object with ``decorate(label) -> str`` for input labels
        output_symbols: Object with ``decorate(label) -> str`` for output labels

    Returns:
        Label text (unescaped)
    """
    config = config or RenderConfig()
    parts = []
    if count > 1:
        parts.append(f"({count}x)")

    if arc.ilabel != EPSILON:
        parts.append(input_decorator.decorate(arc.ilabel) if input_decorator else str(arc.ilabel))
    else:
        parts.append(config.epsilon_symbol)

    if config.show_tids:
        parts.append(f"[{arc.ilabel}]")

    parts.append(":")
    parts.append(output_symbols.decorate(arc.olabel) if output_symbols else str(arc.olabel))

    if arc.weight != WEIGHT_ONE:
        parts.append(f"/{arc.weight:g}")
    return "".join(parts)


def _state_line(automaton: Automaton, state: int, color: str, config: RenderConfig) -> str:
    style = "bold" if automaton.is_start(state) else "solid"
    shape = "circle"
    label = f"{state}"
    if automaton.is_final(state):
        shape = "doublecircle"
        label += f" / {automaton.final_weight(state):g}"
    return (
        f'{state} [label = "{label}", shape = {shape}, style = {style}, '
        f"color = {color}, fontsize = {config.font_size}]"
    )


def _arc_line(label: str, arc: Arc, color: str, config: RenderConfig) -> str:
    return (
        f'\t{arc.src} -> {arc.dst} [ label = "{_escape(label)}", '
        f"color = {color}, fontcolor = {color}, fontsize = {config.font_size} ];"
    )


def render_trace_dot(
    automaton: Automaton,
    projection: TraceProjection,
    config: Optional[RenderConfig] = None,
    input_decorator=None,
    output_symbols=None,
) -> str:
    """
    Render an automaton with a traced path highlighted.

    Args:
        automaton: The automaton the trace was found in
        projection: Projection of a found trace
        config: RenderConfig
        input_decorator: ``decorate(label)`` provider for input labels
            (e.g. TransitionTable); raw ids when None
        output_symbols: ``decorate(label)`` provider for output labels
            (e.g. a word SymbolTable); raw ids when None

    Returns:
        DOT description as a string

    Example:
        >>> result = trace_alignment(fst, ali)
        >>> if result.found:
        ...     dot = render_trace_dot(fst, result.projection, input_decorator=table)
    """
    config = config or RenderConfig()

    def label_for(arc, count=1):
        return make_arc_label(arc, count, config, input_decorator, output_symbols)

    lines: List[str] = list(DOT_HEADER)
    drawn = set()

    for run in projection.runs:
        if run.state not in drawn:
            lines.append(_state_line(automaton, run.state, config.path_color, config))
            drawn.add(run.state)
        arc = automaton.arc(run.state, run.arc_index)
        lines.append(_arc_line(label_for(arc, run.count), arc, config.path_color, config))

    # End state, or the start state of an empty trace
    for state in projection.states:
        if state not in drawn:
            lines.append(_state_line(automaton, state, config.path_color, config))
            drawn.add(state)

    if config.show_non_path:
        for state in projection.states:
            for arc_index, arc in automaton.arcs_from(state):
                if not projection.is_on_path(state, arc_index):
                    lines.append(_arc_line(label_for(arc), arc, config.other_color, config))

        for state in automaton.states():
            if state in drawn:
                continue
            lines.append(_state_line(automaton, state, config.other_color, config))
            for _, arc in automaton.arcs_from(state):
                lines.append(_arc_line(label_for(arc), arc, config.other_color, config))

    lines.append("}")
    logger.debug(f"Rendered {len(drawn)} path states, {len(projection.runs)} path edges")
    return "\n".join(lines) + "\n"


def render_result_dot(
    automaton: Automaton,
    result: TraceResult,
    config: Optional[RenderConfig] = None,
    input_decorator=None,
    output_symbols=None,
) -> str:
    """
    Render a TraceResult; refuses results without a trace.

    Raises:
        ValueError: If no path was found for the alignment
    """
    if not result.found:
        raise ValueError("Cannot render an alignment that does not match the graph")
    return render_trace_dot(automaton, result.projection, config, input_decorator, output_symbols)


def save_dot(dot: str, output_path: Union[str, Path]) -> str:
    """
    Save DOT text to a file.

    Returns:
        Path to the saved file
    """
    output_path = Path(output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(dot)
    return str(output_path)
