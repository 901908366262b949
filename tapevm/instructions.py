"""
Instruction set for the tape VM.

The language has 8 operations:
    >   Move the data pointer forward
    <   Move the data pointer backward
    +   Increment the cell at the pointer
    -   Decrement the cell at the pointer
    .   Emit the cell at the pointer as a character
    ,   Read one character into the cell at the pointer
    [   Skip past the matching loop end if the cell is 0
    ]   Jump back into the loop body if the cell is nonzero

Any symbol can be bound to any operation through a custom table. Symbols
that are not bound are an error when a program is loaded.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from tapevm.errors import InvalidInstruction


class Operation(Enum):
    """Closed set of VM operations."""
    MOVE_POINTER_FORWARD = "move_pointer_forward"
    MOVE_POINTER_BACKWARD = "move_pointer_backward"
    INCREMENT_CELL = "increment_cell"
    DECREMENT_CELL = "decrement_cell"
    EMIT_CELL = "emit_cell"
    READ_CELL = "read_cell"
    LOOP_START = "loop_start"
    LOOP_END = "loop_end"

    @classmethod
    def from_name(cls, name: str) -> "Operation":
        """Look up an operation by member name or value, ignoring case."""
        key = name.strip().lower()
        for op in cls:
            if key in (op.value, op.name.lower()):
                return op
        raise ValueError(f"Unknown operation name: {name!r}")


DEFAULT_INSTRUCTIONS: Mapping[str, Operation] = MappingProxyType({
    '>': Operation.MOVE_POINTER_FORWARD,
    '<': Operation.MOVE_POINTER_BACKWARD,
    '+': Operation.INCREMENT_CELL,
    '-': Operation.DECREMENT_CELL,
    '.': Operation.EMIT_CELL,
    ',': Operation.READ_CELL,
    '[': Operation.LOOP_START,
    ']': Operation.LOOP_END,
})


class InstructionSet:
    """Immutable symbol -> Operation table."""

    def __init__(self, mapping: Optional[Mapping[str, Operation]] = None):
        table: Dict[str, Operation] = {}
        source = DEFAULT_INSTRUCTIONS if mapping is None else mapping
        for symbol, op in source.items():
            if not isinstance(symbol, str) or len(symbol) != 1:
                raise ValueError(f"Instruction symbol must be a single character, got {symbol!r}")
            if not isinstance(op, Operation):
                raise ValueError(f"Symbol {symbol!r} is bound to {op!r}, not an Operation")
            table[symbol] = op
        self._table = MappingProxyType(table)

    @property
    def table(self) -> Mapping[str, Operation]:
        return self._table

    def decode(self, symbol: str, position: int = -1) -> Operation:
        try:
            return self._table[symbol]
        except KeyError:
            raise InvalidInstruction(symbol, position) from None

    def symbol_for(self, op: Operation) -> Optional[str]:
        """First symbol bound to op, or None when op is unreachable."""
        for symbol, bound in self._table.items():
            if bound is op:
                return symbol
        return None

    def __contains__(self, symbol) -> bool:
        return symbol in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        symbols = ''.join(self._table)
        return f"InstructionSet({symbols!r})"
