from dataclasses import dataclass
from typing import Iterator, Tuple

from tapevm.errors import UnbalancedBrackets
from tapevm.instructions import InstructionSet, Operation


@dataclass(frozen=True)
class Program:
    """Decoded, immutable sequence of operations."""
    operations: Tuple[Operation, ...] = ()

    def __len__(self) -> int:
        return len(self.operations)

    def __getitem__(self, index: int) -> Operation:
        return self.operations[index]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def count(self, op: Operation) -> int:
        return sum(1 for o in self.operations if o is op)

    def to_source(self, instruction_set: InstructionSet) -> str:
        """Render back to text; operations with no bound symbol show as '?'."""
        return ''.join(instruction_set.symbol_for(op) or '?' for op in self.operations)


def load_program(source: str, instruction_set: InstructionSet) -> Program:
    """Decode source into a Program and check that loop brackets balance."""
    program = Program(tuple(
        instruction_set.decode(symbol, position) for position, symbol in enumerate(source)
    ))
    validate_balance(program)
    return program


def validate_balance(program: Program) -> None:
    # Only the counts are compared; nesting order is not checked here.
    opening = program.count(Operation.LOOP_START)
    closing = program.count(Operation.LOOP_END)
    if opening != closing:
        raise UnbalancedBrackets(opening, closing)
