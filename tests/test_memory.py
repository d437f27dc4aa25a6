"""
Tape tests — strict bounds at both ends of the tape and both ends of a byte.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from brainfuck_interpreter.memory import Tape, TAPE_SIZE, CELL_MAX
from brainfuck_interpreter.errors import (
    TapeError, PointerOverflowError, PointerUnderflowError,
    CellOverflowError, CellUnderflowError, InternalError,
)


class TestTapeInit:
    def test_size_and_zeroed(self):
        tape = Tape()
        assert TAPE_SIZE == 30000
        assert len(tape) == TAPE_SIZE
        assert tape.pointer == 0
        assert tape.dump(0, 32) == bytes(32)
        assert tape.peek(TAPE_SIZE - 1) == 0


class TestCells:
    def test_increment_and_decrement(self):
        tape = Tape()
        tape.increment()
        tape.increment()
        tape.decrement()
        assert tape.read() == 1

    def test_increment_to_max(self):
        tape = Tape()
        for _ in range(CELL_MAX):
            tape.increment()
        assert tape.read() == 255

    def test_increment_past_max_is_fatal(self):
        tape = Tape()
        tape.write(255)
        with pytest.raises(CellOverflowError) as exc:
            tape.increment(where=7)
        assert exc.value.instruction_index == 7
        assert exc.value.pointer == 0
        assert tape.read() == 255

    def test_decrement_below_zero_is_fatal(self):
        tape = Tape()
        with pytest.raises(CellUnderflowError):
            tape.decrement()
        assert tape.read() == 0

    def test_write_rejects_non_byte(self):
        tape = Tape()
        with pytest.raises(InternalError):
            tape.write(256)

    def test_cells_are_independent(self):
        tape = Tape()
        tape.increment()
        tape.move_right()
        assert tape.read() == 0
        tape.move_left()
        assert tape.read() == 1


class TestPointer:
    def test_move_left_at_start_is_fatal(self):
        tape = Tape()
        with pytest.raises(PointerUnderflowError):
            tape.move_left()
        assert tape.pointer == 0

    def test_move_right_at_end_is_fatal(self):
        tape = Tape()
        for _ in range(TAPE_SIZE - 1):
            tape.move_right()
        assert tape.pointer == TAPE_SIZE - 1
        with pytest.raises(PointerOverflowError):
            tape.move_right()
        assert tape.pointer == TAPE_SIZE - 1

    def test_last_cell_usable(self):
        tape = Tape()
        tape.pointer = TAPE_SIZE - 1
        tape.increment()
        assert tape.peek(TAPE_SIZE - 1) == 1

    def test_all_bound_errors_are_tape_errors(self):
        for cls in (PointerOverflowError, PointerUnderflowError,
                    CellOverflowError, CellUnderflowError):
            assert issubclass(cls, TapeError)

    def test_out_of_range_pointer_is_internal_error(self):
        tape = Tape()
        tape.pointer = TAPE_SIZE
        with pytest.raises(InternalError):
            tape.read()
