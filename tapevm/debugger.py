#!/usr/bin/env python3
"""
Step-by-step debugger for the tape VM.

DebugEngine runs programs exactly like ExecutionEngine but records the
machine state after each executed operation, so a run can be replayed as a
sequence of snapshots showing the program position, the memory tape around
the data pointer and the output so far.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from tapevm.config import EngineConfig
from tapevm.engine import ExecutionEngine
from tapevm.instructions import Operation


@dataclass
class StepSnapshot:
    """Machine state right after one operation."""
    step: int
    instruction_pointer: int
    operation: Optional[Operation]
    pointer: int
    window_start: int
    cells: List[int]
    output: str


class DebugEngine(ExecutionEngine):
    """Execution engine that records a snapshot after every step."""

    def __init__(self, config: Optional[EngineConfig] = None,
                 input_fn: Optional[Callable[[], str]] = None,
                 show_memory_range: int = 10,
                 max_snapshots: int = 50):
        super().__init__(config, input_fn)
        self.show_memory_range = show_memory_range
        self.max_snapshots = max_snapshots
        self.snapshots: List[StepSnapshot] = []

    def _init(self, source: str) -> None:
        self.snapshots = []
        super()._init(source)
        self._record(None)

    def program_text(self) -> str:
        """Loaded program in the engine's own symbols."""
        return self.program.to_source(self.instruction_set)

    def _step(self) -> None:
        op = self.program[self.instruction_pointer]
        super()._step()
        self._record(op)

    def _record(self, op: Optional[Operation]) -> None:
        # Snapshots are capped, execution is not.
        if len(self.snapshots) >= self.max_snapshots:
            return
        start, cells = self.tape.window(self.show_memory_range // 2)
        self.snapshots.append(StepSnapshot(
            step=self.step_count,
            instruction_pointer=self.instruction_pointer,
            operation=op,
            pointer=self.tape.pointer,
            window_start=start,
            cells=cells.tolist(),
            output=''.join(self.output),
        ))


def render_state(snapshot: StepSnapshot, program_text: str) -> str:
    """Multi-line view of one snapshot."""
    label = "INITIAL" if snapshot.operation is None else f"AFTER STEP {snapshot.step}"
    lines = [f"{label}:"]

    program_display = ""
    for i, symbol in enumerate(program_text):
        program_display += f"[{symbol}]" if i == snapshot.instruction_pointer else symbol
    if snapshot.instruction_pointer >= len(program_text):
        program_display += "[END]"
    lines.append(f"Program:  {program_display}")

    addresses = range(snapshot.window_start, snapshot.window_start + len(snapshot.cells))
    lines.append("Memory:   [" + "|".join(f"{v:3d}" for v in snapshot.cells) + "]")
    lines.append("Pointer:   " + " ".join(" ^ " if a == snapshot.pointer else "   " for a in addresses))
    lines.append("Address:   " + " ".join(f"{a:3d}" for a in addresses))
    if snapshot.pointer >= snapshot.window_start + len(snapshot.cells):
        lines.append(f"Pointer at {snapshot.pointer}, past the populated tape")

    if snapshot.output:
        lines.append(f"Output:   {snapshot.output!r} -> {[ord(c) for c in snapshot.output]}")
    else:
        lines.append("Output:   (empty)")
    return "\n".join(lines)
