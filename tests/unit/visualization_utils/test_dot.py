"""
Tests for DOT rendering of traced alignments.
"""

import pytest


def _trace(fst, alignment):
    from alignment import trace_alignment

    result = trace_alignment(fst, alignment)
    assert result.found
    return result


class TestMakeArcLabel:
    """Tests for make_arc_label."""

    def test_plain(self):
        from fst_model import Arc
        from visualization_utils import make_arc_label

        assert make_arc_label(Arc(0, 1, 5, 7)) == "5:7"

    def test_epsilon_and_count(self):
        from fst_model import Arc
        from visualization_utils import make_arc_label

        assert make_arc_label(Arc(0, 1, 0, 0), count=3) == "(3x)<eps>:0"

    def test_weight(self):
        from fst_model import Arc
        from visualization_utils import make_arc_label

        assert make_arc_label(Arc(0, 1, 5, 7, 0.5)) == "5:7/0.5"

    def test_show_tids(self):
        from fst_model import Arc
        from visualization_utils import make_arc_label, RenderConfig

        label = make_arc_label(Arc(0, 1, 5, 7), config=RenderConfig(show_tids=True))
        assert label == "5[5]:7"

    def test_decorators(self):
        from conftest import SHOW_TRANSITIONS_TXT, WORDS_TXT
        from fst_model import Arc
        from symbol_utils import SymbolTable, TransitionTable
        from visualization_utils import make_arc_label

        table = TransitionTable.from_show_transitions(SHOW_TRANSITIONS_TXT)
        words = SymbolTable.from_str(WORDS_TXT)

        label = make_arc_label(Arc(1, 1, 5, 0), count=2, input_decorator=table, output_symbols=words)
        assert label == "(2x)B_0_2_0:<eps>"


class TestRenderTraceDot:
    """Tests for render_trace_dot."""

    def test_header_and_footer(self, epsilon_tail_fst):
        from visualization_utils import render_trace_dot

        result = _trace(epsilon_tail_fst, [5])
        lines = render_trace_dot(epsilon_tail_fst, result.projection).splitlines()

        assert lines[0] == "digraph FST {"
        assert lines[1] == "rankdir = LR;"
        assert lines[-1] == "}"

    def test_path_in_red(self, epsilon_tail_fst):
        from visualization_utils import render_trace_dot

        result = _trace(epsilon_tail_fst, [5])
        dot = render_trace_dot(epsilon_tail_fst, result.projection)

        assert '0 [label = "0", shape = circle, style = bold, color = red, fontsize = 14]' in dot
        assert '2 [label = "2 / 0", shape = doublecircle, style = solid, color = red, fontsize = 14]' in dot
        assert '\t0 -> 1 [ label = "5:5", color = red, fontcolor = red, fontsize = 14 ];' in dot
        assert "black" not in dot

    def test_self_loop_run_drawn_once(self, self_loop_fst):
        from visualization_utils import render_trace_dot

        result = _trace(self_loop_fst, [3, 3, 3])
        dot = render_trace_dot(self_loop_fst, result.projection)

        assert dot.count("1 -> 1 ") == 1
        assert 'label = "(3x)3:30"' in dot

    def test_non_path_in_black(self, backtracking_fst):
        from visualization_utils import render_trace_dot

        result = _trace(backtracking_fst, [4, 6])
        lines = render_trace_dot(backtracking_fst, result.projection).splitlines()

        assert '\t0 -> 2 [ label = "4:4", color = black, fontcolor = black, fontsize = 14 ];' in lines
        assert '2 [label = "2", shape = circle, style = solid, color = black, fontsize = 14]' in lines
        assert '\t2 -> 4 [ label = "6:6", color = black, fontcolor = black, fontsize = 14 ];' in lines
        # Path elements come before everything else
        assert lines.index("\t0 -> 1 [ label = \"4:4\", color = red, fontcolor = red, fontsize = 14 ];") < \
            lines.index('\t0 -> 2 [ label = "4:4", color = black, fontcolor = black, fontsize = 14 ];')

    def test_every_state_and_arc_drawn_once(self, backtracking_fst):
        from visualization_utils import render_trace_dot

        result = _trace(backtracking_fst, [4, 6])
        lines = render_trace_dot(backtracking_fst, result.projection).splitlines()

        assert sum(1 for line in lines if " -> " in line) == backtracking_fst.num_arcs
        assert sum(1 for line in lines if "shape = " in line) == backtracking_fst.num_states

    def test_hide_non_path(self, backtracking_fst):
        from visualization_utils import render_trace_dot, RenderConfig

        result = _trace(backtracking_fst, [4, 6])
        dot = render_trace_dot(backtracking_fst, result.projection, RenderConfig(show_non_path=False))

        assert "black" not in dot
        assert "0 -> 2" not in dot

    def test_custom_colors(self, epsilon_tail_fst):
        from visualization_utils import render_trace_dot, RenderConfig

        result = _trace(epsilon_tail_fst, [5])
        dot = render_trace_dot(epsilon_tail_fst, result.projection, RenderConfig(path_color="blue", font_size=10))

        assert "color = blue, fontcolor = blue, fontsize = 10" in dot
        assert "red" not in dot

    def test_empty_trace(self):
        """An accepting start state is drawn alone in the path color."""
        from fst_model import Automaton
        from visualization_utils import render_trace_dot

        fst = Automaton.from_arcs([(0, 1, 1, 1)], finals={0: 0.0})
        result = _trace(fst, [])
        dot = render_trace_dot(fst, result.projection)

        assert '0 [label = "0 / 0", shape = doublecircle, style = bold, color = red, fontsize = 14]' in dot
        assert '\t0 -> 1 [ label = "1:1", color = black' in dot

    def test_invalid_font_size(self):
        from visualization_utils import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(font_size=0)


class TestRenderResult:
    """Tests for render_result_dot and save_dot."""

    def test_not_found_rejected(self, epsilon_tail_fst):
        from alignment import trace_alignment
        from visualization_utils import render_result_dot

        result = trace_alignment(epsilon_tail_fst, [7])

        with pytest.raises(ValueError):
            render_result_dot(epsilon_tail_fst, result)

    def test_save(self, epsilon_tail_fst, tmp_path):
        from visualization_utils import render_result_dot, save_dot

        dot = render_result_dot(epsilon_tail_fst, _trace(epsilon_tail_fst, [5]))
        path = save_dot(dot, tmp_path / "ali.dot")

        assert (tmp_path / "ali.dot").read_text() == dot
        assert path.endswith("ali.dot")
