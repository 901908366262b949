"""
Byte tape with a movable data pointer.

Cells are unsigned 8-bit values held in a numpy buffer. Increment and
decrement wrap modulo 256 and treat cells past the end of the buffer as 0,
growing the buffer on first touch. Direct reads and writes have no such
tolerance and fail past the end.
"""

from typing import Tuple

import numpy as np

from tapevm.errors import PointerUnderflow, TapeIndexOutOfBounds

DEFAULT_TAPE_SIZE = 1024


class Tape:
    """Fixed-capacity byte tape plus data pointer."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size <= 0:
            raise ValueError(f"Tape size must be positive, got {size}")
        self.size = size
        self.cells = np.zeros(size, dtype=np.uint8)
        self.pointer = 0

    def reset(self) -> None:
        """Zero every cell at the configured capacity and rewind the pointer."""
        self.cells = np.zeros(self.size, dtype=np.uint8)
        self.pointer = 0

    def __len__(self) -> int:
        return len(self.cells)

    def move_forward(self) -> None:
        # No upper bound here; the access that indexes the tape checks it.
        self.pointer += 1

    def move_backward(self) -> None:
        if self.pointer == 0:
            raise PointerUnderflow("Pointer moved before start of tape")
        self.pointer -= 1

    def increment_cell(self) -> None:
        self._ensure_populated()
        self.cells[self.pointer] = (int(self.cells[self.pointer]) + 1) % 256

    def decrement_cell(self) -> None:
        self._ensure_populated()
        self.cells[self.pointer] = (int(self.cells[self.pointer]) - 1) % 256

    def read_cell(self) -> int:
        self._check_bounds()
        return int(self.cells[self.pointer])

    def write_cell(self, value: int) -> None:
        self._check_bounds()
        self.cells[self.pointer] = value % 256

    def window(self, radius: int = 5) -> Tuple[int, np.ndarray]:
        """Start address and copy of the cells around the pointer, clipped to the buffer."""
        start = max(0, min(self.pointer, len(self.cells)) - radius)
        end = min(len(self.cells), self.pointer + radius + 1)
        return start, self.cells[start:end].copy()

    def _check_bounds(self) -> None:
        if self.pointer >= len(self.cells):
            raise TapeIndexOutOfBounds(
                f"Cell {self.pointer} is outside the tape (length {len(self.cells)})"
            )

    def _ensure_populated(self) -> None:
        missing = self.pointer + 1 - len(self.cells)
        if missing > 0:
            self.cells = np.concatenate([self.cells, np.zeros(missing, dtype=np.uint8)])
