import pytest

from tapevm.errors import InvalidInstruction, UnbalancedBrackets
from tapevm.instructions import InstructionSet, Operation
from tapevm.program import Program, load_program


class TestLoadProgram:
    def test_decodes_one_operation_per_symbol(self) -> None:
        program = load_program("+>.", InstructionSet())
        assert list(program) == [
            Operation.INCREMENT_CELL,
            Operation.MOVE_POINTER_FORWARD,
            Operation.EMIT_CELL,
        ]

    def test_empty_source(self) -> None:
        assert len(load_program("", InstructionSet())) == 0

    def test_invalid_symbol_names_character_and_position(self) -> None:
        with pytest.raises(InvalidInstruction) as exc:
            load_program("++ +", InstructionSet())
        assert exc.value.symbol == ' '
        assert exc.value.position == 2

    def test_comments_are_not_ignored(self) -> None:
        with pytest.raises(InvalidInstruction):
            load_program("+ add one", InstructionSet())

    @pytest.mark.parametrize("source", ["[", "]", "[[]", "[]]"])
    def test_unbalanced_counts(self, source) -> None:
        with pytest.raises(UnbalancedBrackets):
            load_program(source, InstructionSet())

    def test_unbalanced_reports_counts(self) -> None:
        with pytest.raises(UnbalancedBrackets) as exc:
            load_program("[[]", InstructionSet())
        assert (exc.value.opening, exc.value.closing) == (2, 1)

    def test_only_counts_are_checked(self) -> None:
        program = load_program("][", InstructionSet())
        assert len(program) == 2


class TestProgram:
    def test_is_immutable(self) -> None:
        program = Program((Operation.EMIT_CELL,))
        with pytest.raises(AttributeError):
            program.operations = ()  # type: ignore

    def test_to_source_with_custom_symbols(self) -> None:
        iset = InstructionSet({'W': Operation.INCREMENT_CELL, 'O': Operation.EMIT_CELL})
        program = load_program("WWO", iset)
        assert program.to_source(iset) == "WWO"
        assert program.to_source(InstructionSet()) == "++."
