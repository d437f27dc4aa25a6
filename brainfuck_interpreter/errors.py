"""
Fatal error taxonomy for the Brainfuck interpreter.

Every error is terminal: nothing inside the interpreter catches these.
Callers (the bfi CLI, tests, embedding code) branch on the class, never on
the message text.

    BrainfuckError
    ├── ValidationError            raised by the loader, before execution
    │   ├── UnmatchedLoopStartError     '[' with no ']'
    │   └── UnmatchedLoopEndError       ']' with no '['
    └── ExecutionError             raised by the interpreter while running
        ├── TapeError
        │   ├── PointerOverflowError    '>' on the last cell
        │   ├── PointerUnderflowError   '<' on the first cell
        │   ├── CellOverflowError       '+' on 255
        │   └── CellUnderflowError      '-' on 0
        ├── InputError                  ',' with no byte available
        └── InternalError               ip/dp out of range (interpreter bug)
"""

from __future__ import annotations
from typing import Optional


class BrainfuckError(Exception):
    """Base class for every fatal interpreter error."""


# ──────────────────────────────────────────────
# Load-time errors
# ──────────────────────────────────────────────

class ValidationError(BrainfuckError):
    """Loop brackets are unbalanced; the program never runs."""

    reason = "invalid loop structure"

    def __init__(self, index: int, line: int, col: int):
        self.index = index
        self.line = line
        self.col = col
        super().__init__(
            f"{self.reason} at L{line}:{col} (instruction {index}), "
            f"fix loop enclosure and rerun"
        )


class UnmatchedLoopStartError(ValidationError):
    reason = "unmatched '['"


class UnmatchedLoopEndError(ValidationError):
    reason = "unmatched ']'"


# ──────────────────────────────────────────────
# Run-time errors
# ──────────────────────────────────────────────

class ExecutionError(BrainfuckError):
    """A fault while executing; carries where it happened."""

    def __init__(self, message: str, instruction_index: Optional[int] = None,
                 pointer: Optional[int] = None):
        self.instruction_index = instruction_index
        self.pointer = pointer
        where = []
        if instruction_index is not None:
            where.append(f"instruction {instruction_index}")
        if pointer is not None:
            where.append(f"cell {pointer}")
        if where:
            message = f"{message} ({', '.join(where)})"
        super().__init__(message)


class TapeError(ExecutionError):
    """Data pointer or cell value would leave its range."""


class PointerOverflowError(TapeError):
    pass


class PointerUnderflowError(TapeError):
    pass


class CellOverflowError(TapeError):
    pass


class CellUnderflowError(TapeError):
    pass


class InputError(ExecutionError):
    """The input source is exhausted or failed to deliver a byte."""


class InternalError(ExecutionError):
    """Instruction or data pointer computed out of range."""
