#!/usr/bin/env python3
"""
bfi — strict Brainfuck interpreter CLI

Usage:
    python bfi.py -f <program.bf> [--check] [-v|-vv] [-q] [--log-file PATH]

Program output goes to stdout and program input is read from stdin, one byte
per ',' instruction. Logs and error messages go to stderr.

Exit codes:
    0    program ran to completion (or --check passed)
    1    file error, unbalanced brackets, or a runtime fault
         (tape bounds, cell range, input exhausted)
    2    internal interpreter error
    130  interrupted

Examples:
    python bfi.py -f examples/hello_world.bf
    echo -n hi | python bfi.py --file cat.bf
    python bfi.py -f big.bf --check -v
"""

import argparse
import logging
import sys

from brainfuck_interpreter import __version__, load_program, run_program
from brainfuck_interpreter.errors import ValidationError, ExecutionError, InternalError
from brainfuck_interpreter.log_setup import setup_logging, verbosity_to_level

log = logging.getLogger("brainfuck_interpreter.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bfi",
        description="Allows to interpret a brainfuck program.",
    )
    parser.add_argument("-f", "--file", required=True,
                        help="Brainfuck source file to load")
    parser.add_argument("--check", action="store_true",
                        help="Validate the program and exit without running it")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase log verbosity on stderr (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"bfi {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(verbosity_to_level(args.verbose, args.quiet), args.log_file)

    # Output cells are written as code points 0..255
    if hasattr(sys.stdout, "reconfigure") and sys.stdout.encoding \
            and sys.stdout.encoding.lower() not in ("utf-8", "utf8"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    # Read input
    try:
        with open(args.file, "r", encoding="utf-8", errors="replace") as f:
            source = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error reading {args.file}: {e}", file=sys.stderr)
        sys.exit(1)

    log.info("Input: %s (%d characters)", args.file, len(source))

    try:
        program = load_program(source)
        log.info("Program: %d instructions, %d loops", len(program), program.loop_count)

        if args.check:
            print(f"{args.file}: OK ({len(program)} instructions, "
                  f"{program.loop_count} loops)")
            sys.exit(0)

        try:
            interpreter = run_program(program, stdin=sys.stdin.buffer, stdout=sys.stdout)
        finally:
            sys.stdout.flush()
        log.info("Executed %d instructions", interpreter.steps)

    except ValidationError as e:
        log.debug("Validation failed", exc_info=True)
        print(f"Validation error: {e}", file=sys.stderr)
        sys.exit(1)
    except InternalError as e:
        log.debug("Internal error", exc_info=True)
        print(f"Internal interpreter error: {e}", file=sys.stderr)
        sys.exit(2)
    except ExecutionError as e:
        log.debug("Run aborted", exc_info=True)
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
