"""Runs a minipas program from a file: prints the scope-table dump, then the final run-time memory. Also uses the error
handling context manager. Called from the minipas console script and from `python -m minipas`.
"""

import argparse
import logging

from minipas.lang.error import ErrorHandler
from minipas.lang.session import Session


def setup_logging(verbose):
    """Sends package log records to stderr. Scope tracing is logged at INFO, so it only shows when verbose."""
    logger = logging.getLogger("minipas")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("{message}", style="{"))
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


def main(argv=None):
    """Runs the minipas interpreter. Exits with status 1 on any error."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minipas", description="minipas interpreter")
        parser.add_argument("file", help="program to analyze and run")
        parser.add_argument("--scope", action="store_true", help="trace scope entry, exit, inserts and lookups")
        parser.add_argument("--tree", action="store_true", help="print the syntax tree before running")
        args = parser.parse_args(argv)

        setup_logging(args.scope)

        sess = Session.from_file(args.file, error_handler)
        sess.run()

        if args.tree:
            print(sess.tree.display())
            print()
        print(sess.format_scopes())
        print()
        print(sess.format_results())


if __name__ == "__main__":
    main()
