"""
Instruction Set Tests.
"""
import pytest

from tapevm.errors import InvalidInstruction
from tapevm.instructions import DEFAULT_INSTRUCTIONS, InstructionSet, Operation


class TestOperation:
    def test_closed_set_of_eight(self) -> None:
        assert len(Operation) == 8

    @pytest.mark.parametrize("name", ["loop_start", "LOOP_START", " Loop_Start "])
    def test_from_name_ignores_case(self, name) -> None:
        assert Operation.from_name(name) is Operation.LOOP_START

    def test_from_name_unknown(self) -> None:
        with pytest.raises(ValueError):
            Operation.from_name("jump")


class TestDefaultSet:
    def test_default_symbols(self) -> None:
        iset = InstructionSet()
        assert ''.join(iset.table) == "><+-.,[]"
        assert iset.decode('>') is Operation.MOVE_POINTER_FORWARD
        assert iset.decode(']') is Operation.LOOP_END

    def test_every_operation_bound_once(self) -> None:
        assert set(DEFAULT_INSTRUCTIONS.values()) == set(Operation)

    def test_unknown_symbol_raises(self) -> None:
        with pytest.raises(InvalidInstruction) as exc:
            InstructionSet().decode('x', 4)
        assert exc.value.symbol == 'x'
        assert exc.value.position == 4

    def test_table_is_read_only(self) -> None:
        iset = InstructionSet()
        with pytest.raises(TypeError):
            iset.table['x'] = Operation.EMIT_CELL  # type: ignore


class TestCustomSet:
    def test_custom_replaces_default(self) -> None:
        iset = InstructionSet({'W': Operation.INCREMENT_CELL})
        assert 'W' in iset
        assert '+' not in iset
        assert len(iset) == 1

    def test_partial_mapping_is_legal(self) -> None:
        iset = InstructionSet({'a': Operation.EMIT_CELL})
        assert iset.symbol_for(Operation.EMIT_CELL) == 'a'
        assert iset.symbol_for(Operation.READ_CELL) is None

    def test_caller_mapping_not_shared(self) -> None:
        mapping = {'a': Operation.EMIT_CELL}
        iset = InstructionSet(mapping)
        mapping['b'] = Operation.READ_CELL
        assert 'b' not in iset

    def test_multi_character_symbol_rejected(self) -> None:
        with pytest.raises(ValueError):
            InstructionSet({'ab': Operation.EMIT_CELL})

    def test_non_operation_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            InstructionSet({'a': "emit_cell"})  # type: ignore
