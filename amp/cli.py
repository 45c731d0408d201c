"""
Command line front end for Amp.

With no files, reads lines interactively and parses each one as an
independent program. With files, parses each file and reports the result.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ParserConfiguration
from .lexer import Lexer, AmpError
from .logging_config import setup_logging
from .parser import Parser


logger = logging.getLogger(__name__)

PROMPT = "=> "


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="amp",
        description="Parse Amp source and print its syntax tree",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    amp                        # Interactive prompt
    amp program.amp            # Parse a file
    amp --tokens program.amp   # Show the token stream
    amp --recover a.amp b.amp  # Report every broken statement
        """
    )

    parser.add_argument('files', nargs='*', metavar='FILE',
                        help='Source files to parse (interactive when omitted)')
    parser.add_argument('--recover', action='store_true',
                        help='Keep parsing after errors and report all of them')
    parser.add_argument('--tokens', action='store_true',
                        help='Print the token stream instead of the syntax tree')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every parser step at DEBUG')
    parser.add_argument('--log-json', action='store_true',
                        help='Write log records as JSON')
    parser.add_argument('--max-depth', type=int, metavar='N',
                        help='Maximum nesting depth of expressions and blocks')
    parser.add_argument('--version', action='version', version=f"amp v{__version__}")

    return parser


def run_source(source: str, args: argparse.Namespace, config: ParserConfiguration) -> bool:
    """
    Parse one unit of input and print the outcome.

    Returns:
        True if the source parsed without errors
    """
    if args.tokens:
        for token in Lexer(source):
            print(repr(token))
            if token.is_error:
                return False
        return True

    parser = Parser(source, config)

    if args.recover:
        result = parser.parse_with_recovery()
        for statement in result.statements:
            print(repr(statement))
        for error in result.errors:
            print(error.describe(), file=sys.stderr)
        return result.ok

    try:
        statements = parser.parse()
    except AmpError as e:
        print(e.describe(), file=sys.stderr)
        return False

    for statement in statements:
        print(repr(statement))
    return True


def run_files(paths: List[str], args: argparse.Namespace, config: ParserConfiguration) -> int:
    """Parse each file in turn. Returns the process exit status."""
    failed = 0

    for path in paths:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                source = f.read()
        except OSError as e:
            print(f"amp: cannot read {path}: {e.strerror or e}", file=sys.stderr)
            failed += 1
            continue

        logger.info("parsing %s", path)
        if not run_source(source, args, config):
            failed += 1

    if failed:
        logger.info("%d of %d files failed", failed, len(paths))
    return 1 if failed else 0


def run_interactive(args: argparse.Namespace, config: ParserConfiguration) -> int:
    """Read, parse and print lines until end of input."""
    print(f"amp v{__version__}")

    while True:
        try:
            line = input(PROMPT)
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line.strip():
            continue
        run_source(line, args, config)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the amp command."""
    args = build_argument_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING,
                  json_format=args.log_json)

    try:
        config = ParserConfiguration.from_env()
        if args.max_depth is not None:
            config = ParserConfiguration(
                max_nesting_depth=args.max_depth,
                debug_mode=config.debug_mode,
            )
    except ValueError as e:
        print(f"amp: {e}", file=sys.stderr)
        return 2

    if args.verbose:
        config.debug_mode = True

    if args.files:
        return run_files(args.files, args, config)
    return run_interactive(args, config)


if __name__ == "__main__":
    sys.exit(main())
