"""
Brainfuck Interpreter
=====================
A strict interpreter for the eight-instruction tape language.

Unlike most implementations there is no wrap-around: cells are bytes that
must stay in 0..255 and the data pointer must stay on the 30,000-cell tape.
Leaving either range, running out of input, or unbalanced brackets are all
fatal errors.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌─────────────┐
    │ Source   │───>│  Loader  │───>│ Program  │───>│ Interpreter │───> stdout
    │ (.bf)    │    │ (filter, │    │ (instrs, │    │ (tape, ip,  │<─── stdin
    └──────────┘    │ validate)│    │  jumps)  │    │  dispatch)  │
                    └──────────┘    └──────────┘    └─────────────┘

    - loader.py:      symbol filter, bracket validator, Instruction/Program
    - memory.py:      30,000-cell bounds-checked tape
    - interpreter.py: fetch/dispatch loop, loop jumps, byte I/O
    - errors.py:      one exception class per fatal cause
    - log_setup.py:   rich console + optional file logging for the CLI
"""

__version__ = "0.1.0"

from .errors import (
    BrainfuckError, ValidationError, UnmatchedLoopStartError, UnmatchedLoopEndError,
    ExecutionError, TapeError, PointerOverflowError, PointerUnderflowError,
    CellOverflowError, CellUnderflowError, InputError, InternalError,
)
from .loader import (
    Instruction, Program, load_program,
    lexical_analysis, syntactic_analysis, generate_internal_representation,
)
from .memory import Tape, TAPE_SIZE
from .interpreter import Interpreter, run_program


def run_source(source: str, *, stdin=None, stdout=None) -> Interpreter:
    """Load and run Brainfuck source text.

    Full pipeline: lexical filter -> bracket validation -> Program -> Interpreter.
    Validation errors are raised before any instruction executes.

    Args:
        source: program text; non-instruction characters are ignored.
        stdin: input stream (default sys.stdin.buffer).
        stdout: output text stream (default sys.stdout).

    Returns:
        The Interpreter after the program ran to completion, for inspection.
    """
    program = load_program(source)
    return run_program(program, stdin=stdin, stdout=stdout)
