"""
make-tid-syms: output symbolic names for all transition-ids.

The names can be used as an input symbol table in graph visualizations.
Each transition-id is named phone_hmm-state_pdf_transition-index (with the
default '_' separator).

Usage:
    make-tid-syms phones.txt transitions.txt [tid_syms.txt]
"""

import sys
import logging
from typing import List, Optional

from symbol_utils import SymbolTable, TransitionTable, make_transition_symbols

from .common import make_parser, setup_logging

logger = logging.getLogger(__name__)


def build_parser():
    parser = make_parser(
        description="Outputs symbolic names for all transition ids "
                    "(can be used in graph visualizations)",
        usage="make-tid-syms [options] <phones> <transitions> [<out-tid-symtab>]",
    )
    parser.add_argument("--separator", default="_", help="The symbol to be used as separator b/w tid's constituents")
    parser.add_argument("phones", help="Phone symbol table")
    parser.add_argument("transitions", help="show-transitions output or transition table")
    parser.add_argument("output", nargs="?", default=None, help="Output symbol table (default: stdout)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        phones = SymbolTable.from_file(args.phones)
        table = TransitionTable.from_file(args.transitions, phones=phones, sep=args.separator)
        logger.debug(f"#phones: {len(phones)}")

        tid_syms = make_transition_symbols(table, phones=phones, sep=args.separator)
        if args.output:
            tid_syms.write(args.output)
            logger.info(f"Wrote {len(tid_syms)} symbols to {args.output}")
        else:
            sys.stdout.write(tid_syms.to_str() + "\n")
    except Exception as e:
        logger.error(f"make-tid-syms failed: {e}")
        return -1

    return 0


if __name__ == "__main__":
    sys.exit(main())
