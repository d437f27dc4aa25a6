"""
Brainfuck Interpreter — Execution Engine

Execution model:
  1. Fetch the instruction at the instruction pointer (ip)
  2. Dispatch on it through the handler table
  3. The handler performs its effect and sets the next ip
  4. Stop when ip == len(program) (normal end) or a handler raises

Loops use the jump table the loader built while validating brackets:
  '['  cell == 0  -> ip = matching ']' + 1   (body skipped)
       cell != 0  -> ip + 1                  (enter body)
  ']'             -> ip = matching '['       (re-check the cell)

So the cell is tested once on entry and once after every full pass through
the body. Nested loops finish their own passes before control gets back to
the outer ']', and no recursion is involved, so nesting depth is unbounded.

Termination:
  - normal:  ip reached the end of the program
  - fatal:   any ExecutionError subclass (see errors.py)
"""

import logging
import sys
from typing import Callable, Dict, Optional

from .errors import InputError, InternalError
from .loader import Instruction, Program
from .memory import Tape, CELL_MAX

log = logging.getLogger(__name__)


class Interpreter:
    """Runs one Program against one Tape.

    Usage:
        program = load_program(source)
        Interpreter(program, stdin=io.BytesIO(b"hi"), stdout=out).run()

    stdin:  stream read one unit at a time; bytes (binary stream) or a
            single character with code point <= 255 (text stream).
            Default: sys.stdin.buffer
    stdout: text stream; each Output writes chr(cell). Default: sys.stdout
    """

    def __init__(self, program: Program, stdin=None, stdout=None):
        self.program = program
        self.tape = Tape()
        self.ip = 0
        self.steps = 0
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout
        self._dispatch = self._build_dispatch()

    @property
    def finished(self) -> bool:
        return self.ip == len(self.program)

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self):
        """Interpret instructions until the end of the program.

        Raises the first ExecutionError encountered; nothing is retried.
        """
        log.debug("Run started: %r", self.program)
        end = len(self.program)
        while self.ip < end:
            self._exec_instruction()
        log.debug("Run finished after %d instructions", self.steps)

    def _fetch(self) -> Instruction:
        if not 0 <= self.ip < len(self.program):
            raise InternalError("Cannot obtain next instruction",
                                self.ip, self.tape.pointer)
        return self.program[self.ip]

    def _exec_instruction(self):
        handler = self._dispatch[self._fetch()]
        handler()
        self.steps += 1

    def _jump(self, target: int):
        if not 0 <= target <= len(self.program):
            raise InternalError(f"Jump target {target} out of bounds",
                                self.ip, self.tape.pointer)
        self.ip = target

    # ══════════════════════════════════════════════
    # Instruction handlers
    # ══════════════════════════════════════════════

    def _build_dispatch(self) -> Dict[Instruction, Callable[[], None]]:
        return {
            Instruction.POINTER_INCREMENT: self._op_pointer_increment,
            Instruction.POINTER_DECREMENT: self._op_pointer_decrement,
            Instruction.CELL_INCREMENT:    self._op_cell_increment,
            Instruction.CELL_DECREMENT:    self._op_cell_decrement,
            Instruction.OUTPUT:            self._op_output,
            Instruction.INPUT:             self._op_input,
            Instruction.LOOP_START:        self._op_loop_start,
            Instruction.LOOP_END:          self._op_loop_end,
        }

    def _op_pointer_increment(self):
        self.tape.move_right(self.ip)
        self.ip += 1

    def _op_pointer_decrement(self):
        self.tape.move_left(self.ip)
        self.ip += 1

    def _op_cell_increment(self):
        self.tape.increment(self.ip)
        self.ip += 1

    def _op_cell_decrement(self):
        self.tape.decrement(self.ip)
        self.ip += 1

    def _op_output(self):
        self.stdout.write(chr(self.tape.read()))
        self.ip += 1

    def _op_input(self):
        self.tape.write(self._read_byte(), self.ip)
        self.ip += 1

    def _op_loop_start(self):
        if self.tape.read() == 0:
            self._jump(self.program.jumps[self.ip] + 1)
        else:
            self.ip += 1

    def _op_loop_end(self):
        self._jump(self.program.jumps[self.ip])

    # ══════════════════════════════════════════════
    # I/O
    # ══════════════════════════════════════════════

    def _read_byte(self) -> int:
        """Read exactly one byte from stdin; end of stream is fatal."""
        flush = getattr(self.stdout, "flush", None)
        if flush is not None:
            flush()

        try:
            data = self.stdin.read(1)
        except (OSError, ValueError) as e:
            raise InputError(f"Cannot obtain input: {e}",
                             self.ip, self.tape.pointer) from e

        if not data:
            raise InputError("Cannot obtain input: input exhausted",
                             self.ip, self.tape.pointer)

        value = data[0] if isinstance(data, (bytes, bytearray)) else ord(data)
        if value > CELL_MAX:
            raise InputError(f"Cannot obtain input: {data!r} is not a single byte",
                             self.ip, self.tape.pointer)
        return value


def run_program(program: Program, stdin=None, stdout=None) -> Interpreter:
    """Run a loaded Program on a fresh tape and return the finished engine."""
    interpreter = Interpreter(program, stdin=stdin, stdout=stdout)
    interpreter.run()
    return interpreter
