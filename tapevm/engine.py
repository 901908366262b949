#!/usr/bin/env python3
"""
Execution engine for the tape VM.

A run decodes the source with the engine's instruction set, checks bracket
balance, then executes operations until the instruction pointer passes the
end of the program. Loops are resolved at run time from a stack of loop
entry positions rather than a precomputed jump table.

Loop stack behaviour:
    - LOOP_START with a nonzero cell pushes its own position.
    - LOOP_END with a nonzero cell jumps to the position on top of the stack
      without popping it. Entries accumulate for the rest of the run.
    - LOOP_START with a zero cell scans forward for its loop end, starting
      the depth count at the current stack size.
"""

import logging
from typing import Callable, List, Optional

from tapevm.config import EngineConfig
from tapevm.console import ConsoleInput
from tapevm.errors import MalformedJumpTarget, TapeIndexOutOfBounds
from tapevm.instructions import InstructionSet, Operation
from tapevm.program import Program, load_program
from tapevm.tape import Tape

logger = logging.getLogger(__name__)


class ExecutionEngine:
    def __init__(self, config: Optional[EngineConfig] = None,
                 input_fn: Optional[Callable[[], str]] = None,
                 trace: bool = False):
        config = config or EngineConfig()
        self.instruction_set = InstructionSet(config.custom_instructions)
        self.tape = Tape(config.tape_size)
        self.input_fn = input_fn or ConsoleInput()
        self.trace = trace

        self.program = Program()
        self.instruction_pointer = 0
        self.loop_stack: List[int] = []
        self.output: List[str] = []
        self.step_count = 0

    def run(self, source: str) -> str:
        """Execute source and return everything it emitted."""
        self._init(source)
        logger.debug("Running %d operations on a %d-cell tape", len(self.program), len(self.tape))

        while self.instruction_pointer < len(self.program):
            self._step()

        logger.debug("Run finished after %d steps, %d chars emitted", self.step_count, len(self.output))
        return ''.join(self.output)

    def _init(self, source: str) -> None:
        self.instruction_pointer = 0
        self.loop_stack = []
        self.output = []
        self.step_count = 0
        self.tape.reset()
        self.program = Program()
        self.program = load_program(source, self.instruction_set)

    def _step(self) -> None:
        """Execute the operation at the instruction pointer, then advance past it."""
        op = self.program[self.instruction_pointer]

        if self.trace:
            logger.debug("Step %d: IP=%d OP=%s PTR=%d", self.step_count,
                         self.instruction_pointer, op.name, self.tape.pointer)

        if op is Operation.MOVE_POINTER_FORWARD:
            self.tape.move_forward()
        elif op is Operation.MOVE_POINTER_BACKWARD:
            self.tape.move_backward()
        elif op is Operation.INCREMENT_CELL:
            self.tape.increment_cell()
        elif op is Operation.DECREMENT_CELL:
            self.tape.decrement_cell()
        elif op is Operation.EMIT_CELL:
            self.output.append(chr(self.tape.read_cell()))
        elif op is Operation.READ_CELL:
            self.tape.write_cell(ord(self._read_char()))
        elif op is Operation.LOOP_START:
            if self.tape.read_cell() != 0:
                self.loop_stack.append(self.instruction_pointer)
            else:
                self.instruction_pointer = self._find_loop_end()
        elif op is Operation.LOOP_END:
            if self.tape.read_cell() != 0:
                if not self.loop_stack:
                    raise MalformedJumpTarget(
                        f"Loop end at {self.instruction_pointer} has no loop start to return to"
                    )
                self.instruction_pointer = self.loop_stack[-1]

        self.instruction_pointer += 1
        self.step_count += 1

    def _find_loop_end(self) -> int:
        """Position of the loop end that closes the loop start at the instruction pointer."""
        # At depth 0 the loop start itself is returned and the body is entered.
        depth = len(self.loop_stack)
        position = self.instruction_pointer
        while depth > 0:
            position += 1
            if position >= len(self.program):
                raise TapeIndexOutOfBounds(
                    f"No loop end found for loop start at {self.instruction_pointer}"
                )
            op = self.program[position]
            if op is Operation.LOOP_START:
                depth += 1
            elif op is Operation.LOOP_END:
                depth -= 1

        return position

    def _read_char(self) -> str:
        # Retried until a non-empty line arrives.
        while True:
            try:
                line = self.input_fn()
            except (EOFError, OSError) as e:
                logger.debug("Input read failed (%s), retrying", e)
                continue
            if line:
                return line[0]
            logger.debug("Empty input line, retrying")
