"""
Shared command-line helpers.
"""

import argparse
import logging

# Configure logging format
logfmt = "%(asctime)s (%(module)s:%(lineno)d) %(levelname)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure the root logger for a command-line run."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=logfmt)


def make_parser(description: str, usage: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=description,
        usage=usage,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser
