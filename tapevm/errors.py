"""
Fatal errors raised by the tape VM.

None of these are recovered from inside the engine. They propagate to the
caller of ExecutionEngine.run and any output gathered so far is dropped.
"""


class VMError(RuntimeError):
    """Base class for every fatal VM error."""


class InvalidInstruction(VMError):
    """A program character has no entry in the active instruction set."""

    def __init__(self, symbol: str, position: int = -1):
        self.symbol = symbol
        self.position = position
        where = f" at position {position}" if position >= 0 else ""
        super().__init__(f"Invalid instruction {symbol!r}{where}")


class UnbalancedBrackets(VMError):
    """Loop-start and loop-end counts differ."""

    def __init__(self, opening: int, closing: int):
        self.opening = opening
        self.closing = closing
        super().__init__(f"Unbalanced brackets: {opening} opening, {closing} closing")


class PointerUnderflow(VMError, IndexError):
    """The data pointer was moved below cell 0."""


class TapeIndexOutOfBounds(VMError, IndexError):
    """A direct cell access or the loop-end scan went past the end."""


class MalformedJumpTarget(VMError):
    """A jump needed a loop stack entry and there was none."""
