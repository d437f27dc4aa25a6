"""
Brainfuck Interpreter — 30,000 Cell Tape

Memory model:
  cells 0 .. 29999   unsigned 8-bit, all zero at start
  data pointer       starts at cell 0

Closed-world model: there is no wrap-around anywhere. Moving the pointer off
either end of the tape, or taking a cell above 255 or below 0, is a fatal
TapeError. The tape is a flat bytearray and never grows.
"""

from typing import Optional

from .errors import (
    PointerOverflowError, PointerUnderflowError,
    CellOverflowError, CellUnderflowError, InternalError,
)


TAPE_SIZE = 30000
CELL_MIN = 0
CELL_MAX = 255


class Tape:
    """Fixed-size byte tape with a bounds-checked data pointer.

    ``where`` arguments are the instruction index being executed; they are
    only used to annotate errors.
    """

    def __init__(self):
        self._cells = bytearray(TAPE_SIZE)
        self.pointer = 0

    def __len__(self) -> int:
        return TAPE_SIZE

    # --- Cell access ---

    def read(self) -> int:
        """Value of the current cell."""
        if not 0 <= self.pointer < TAPE_SIZE:
            raise InternalError("Cannot access memory", pointer=self.pointer)
        return self._cells[self.pointer]

    def write(self, value: int, where: Optional[int] = None):
        """Store a byte in the current cell (used by Input)."""
        if not CELL_MIN <= value <= CELL_MAX:
            raise InternalError(f"Cell value {value} out of byte range",
                                where, self.pointer)
        self.read()  # checks pointer range
        self._cells[self.pointer] = value

    def increment(self, where: Optional[int] = None):
        value = self.read()
        if value == CELL_MAX:
            raise CellOverflowError(f"Cell overflow: cannot exceed value {CELL_MAX}",
                                    where, self.pointer)
        self._cells[self.pointer] = value + 1

    def decrement(self, where: Optional[int] = None):
        value = self.read()
        if value == CELL_MIN:
            raise CellUnderflowError(f"Cell underflow: cannot go below value {CELL_MIN}",
                                     where, self.pointer)
        self._cells[self.pointer] = value - 1

    # --- Pointer movement ---

    def move_right(self, where: Optional[int] = None):
        if self.pointer == TAPE_SIZE - 1:
            raise PointerOverflowError(
                f"Pointer overflow: cannot move past cell {TAPE_SIZE - 1}",
                where, self.pointer)
        self.pointer += 1

    def move_left(self, where: Optional[int] = None):
        if self.pointer == 0:
            raise PointerUnderflowError(
                "Pointer underflow: cannot move below cell 0", where, self.pointer)
        self.pointer -= 1

    # --- Inspection ---

    def peek(self, addr: int) -> int:
        """Read any cell without moving the pointer."""
        return self._cells[addr]

    def dump(self, start: int = 0, count: int = 16) -> bytes:
        """Copy of a window of cells."""
        return bytes(self._cells[start:start + count])
