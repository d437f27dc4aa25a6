"""
Program loader for the Brainfuck interpreter.

Turns raw source text into a validated, immutable Program in three passes:

    1. lexical_analysis     keep only the eight instruction symbols
    2. syntactic_analysis   check loop brackets with a stack; build jump table
    3. generate_internal_representation   symbols -> Instruction members

Everything that is not one of ``> < + - . , [ ]`` is commentary, including
whitespace and newlines, so the filter never fails. Validation is the only
step that can reject a program, and it does so before anything executes.
"""

from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .errors import UnmatchedLoopStartError, UnmatchedLoopEndError

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Instruction set
# ──────────────────────────────────────────────

class Instruction(enum.Enum):
    """The eight instructions; the value is the source symbol."""

    POINTER_INCREMENT = ">"
    POINTER_DECREMENT = "<"
    CELL_INCREMENT = "+"
    CELL_DECREMENT = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_START = "["
    LOOP_END = "]"

    @property
    def symbol(self) -> str:
        return self.value


SYMBOLS: Dict[str, Instruction] = {ins.value: ins for ins in Instruction}


# ──────────────────────────────────────────────
# Program
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Program:
    """Validated instruction sequence plus its loop jump table.

    ``jumps`` maps every LOOP_START index to its matching LOOP_END index and
    every LOOP_END index back to its LOOP_START.
    """
    instructions: Tuple[Instruction, ...]
    jumps: Dict[int, int] = field(default_factory=dict, compare=False)

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __iter__(self):
        return iter(self.instructions)

    @property
    def loop_count(self) -> int:
        return len(self.jumps) // 2

    def to_source(self) -> str:
        """Inverse mapping back to the filtered symbol stream."""
        return "".join(ins.symbol for ins in self.instructions)

    def __repr__(self):
        return f"Program({len(self)} instructions, {self.loop_count} loops)"


# ──────────────────────────────────────────────
# Passes
# ──────────────────────────────────────────────

def lexical_analysis(source: str) -> str:
    """Retain only instruction symbols, in order."""
    return "".join(ch for ch in source if ch in SYMBOLS)


def syntactic_analysis(symbols: str) -> Dict[int, int]:
    """Check loop enclosure and return the jump table.

    Single left-to-right pass; indices are positions in ``symbols``.
    Raises UnmatchedLoopEndError / UnmatchedLoopStartError with the
    position of the offending bracket. Line/col are relative to the
    filtered stream (one line); load_program() relocates them into the
    original source.
    """
    stack: List[int] = []
    jumps: Dict[int, int] = {}

    for index, ch in enumerate(symbols):
        if ch == "[":
            stack.append(index)
        elif ch == "]":
            if not stack:
                raise UnmatchedLoopEndError(index, 1, index + 1)
            start = stack.pop()
            jumps[start] = index
            jumps[index] = start

    if stack:
        # innermost unclosed bracket is the most useful one to report
        index = stack[-1]
        raise UnmatchedLoopStartError(index, 1, index + 1)

    return jumps


def generate_internal_representation(symbols: str) -> Tuple[Instruction, ...]:
    """Map each filtered symbol to its Instruction, 1:1."""
    return tuple(SYMBOLS[ch] for ch in symbols)


def locate(source: str, index: int) -> Tuple[int, int]:
    """Line and column (1-based) of the index-th instruction symbol in source."""
    line, col = 1, 1
    seen = 0
    for ch in source:
        if ch in SYMBOLS:
            if seen == index:
                return line, col
            seen += 1
        if ch == "\n":
            line += 1
            col = 1
        else:
            col += 1
    return line, col


def load_program(source: str) -> Program:
    """Filter, validate and translate source text into a Program."""
    symbols = lexical_analysis(source)
    log.debug("Lexical analysis: %d of %d characters are instructions",
              len(symbols), len(source))

    try:
        jumps = syntactic_analysis(symbols)
    except (UnmatchedLoopStartError, UnmatchedLoopEndError) as e:
        line, col = locate(source, e.index)
        raise type(e)(e.index, line, col) from None

    program = Program(generate_internal_representation(symbols), jumps)
    log.debug("Loaded %r", program)
    return program
