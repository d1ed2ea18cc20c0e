"""
draw-ali: visualize an alignment on its graph using GraphViz DOT.

Usage:
    draw-ali --key utt1 transitions.txt phones.txt words.txt ali.txt graphs.txt > utt1.dot
    dot -Tpdf utt1.dot -o utt1.pdf

Exit status:
    0   DOT written, or the alignment does not match the graph (warning logged)
    1   the key is missing from the alignment or FST archive
    2   bad command-line arguments
    -1  unexpected failure
"""

import sys
import logging
from typing import List, Optional

from fst_model import FstArchive
from alignment import AlignmentArchive, trace_alignment
from symbol_utils import SymbolTable, TransitionTable
from visualization_utils import RenderConfig, render_trace_dot, save_dot

from .common import make_parser, setup_logging

logger = logging.getLogger(__name__)


def build_parser():
    parser = make_parser(
        description="Visualizes an alignment using GraphViz DOT language",
        usage="draw-ali --key KEY [options] <transitions> <phone-syms> <word-syms> <ali-rspec> <fst-rspec>",
    )
    parser.add_argument("--key", required=True, help="The key of the alignment/fst we want to render")
    parser.add_argument("--show-tids", action="store_true", help="Also shows the transition-ids")
    parser.add_argument(
        "--hide-non-path",
        action="store_true",
        help="Only draw the states and arcs on the alignment path",
    )
    parser.add_argument("--separator", default="_", help="Separator between transition-id fields")
    parser.add_argument("-o", "--output", default=None, help="Write DOT here instead of stdout")
    parser.add_argument("transitions", help="show-transitions output or transition table")
    parser.add_argument("phone_syms", help="Phone symbol table")
    parser.add_argument("word_syms", help="Word symbol table")
    parser.add_argument("ali_rspec", help="Text alignment archive")
    parser.add_argument("fst_rspec", help="Text FST archive")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        phones = SymbolTable.from_file(args.phone_syms)
        words = SymbolTable.from_file(args.word_syms)
        transitions = TransitionTable.from_file(args.transitions, phones=phones, sep=args.separator)

        alignments = AlignmentArchive(args.ali_rspec)
        fsts = FstArchive(args.fst_rspec)

        if args.key not in alignments:
            logger.error(f"No alignment with key '{args.key}' has been found in '{args.ali_rspec}'")
            return 1
        if args.key not in fsts:
            logger.error(f"No FST with key '{args.key}' has been found in '{args.fst_rspec}'")
            return 1

        graph = fsts[args.key]
        result = trace_alignment(graph, alignments[args.key])
        if not result.found:
            logger.warning(f"Couldn't match the alignment '{args.key}' with the graph")
            return 0

        config = RenderConfig(
            show_tids=args.show_tids,
            show_non_path=not args.hide_non_path,
            epsilon_symbol=phones.find(0) or "<eps>",
        )
        dot = render_trace_dot(
            graph,
            result.projection,
            config=config,
            input_decorator=transitions,
            output_symbols=words,
        )

        if args.output:
            save_dot(dot, args.output)
            logger.info(f"DOT written to {args.output}")
        else:
            sys.stdout.write(dot)
    except Exception as e:
        logger.error(f"draw-ali failed: {e}")
        return -1

    return 0


if __name__ == "__main__":
    sys.exit(main())
