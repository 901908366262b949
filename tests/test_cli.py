import json

import pytest

from tapevm import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TAPEVM_TAPE_SIZE", "TAPEVM_INSTRUCTIONS", "TAPEVM_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestMain:
    def test_inline_program(self, capsys) -> None:
        assert cli.main(["-e", cli.HEARTS]) == 0
        assert capsys.readouterr().out == "\x03" * 3

    def test_program_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "hello.bf"
        path.write_text(cli.HELLO_WORLD + "\n")
        assert cli.main([str(path)]) == 0
        assert capsys.readouterr().out == "Hello World!\n"

    def test_custom_instruction_file(self, tmp_path, capsys) -> None:
        table = {symbol: op.value for symbol, op in cli.CUSTOM_INSTRUCTIONS.items()}
        path = tmp_path / "wasd.json"
        path.write_text(json.dumps(table))
        assert cli.main(["--instructions", str(path), "-e", cli.CUSTOM_HEARTS]) == 0
        assert capsys.readouterr().out == "\x03" * 3

    def test_scripted_input(self, capsys) -> None:
        assert cli.main(["--input", "A", "-e", ",+."]) == 0
        assert capsys.readouterr().out == "B"

    def test_fatal_error_exits_nonzero(self, capsys) -> None:
        assert cli.main(["-e", "<"]) == 1
        assert capsys.readouterr().out == ""

    def test_tape_size_option(self, capsys) -> None:
        assert cli.main(["--tape-size", "2", "-e", ">>."]) == 1

    def test_missing_program(self) -> None:
        with pytest.raises(SystemExit):
            cli.main([])

    def test_debug_prints_states(self, capsys) -> None:
        assert cli.main(["--debug", "-e", "+."]) == 0
        out = capsys.readouterr().out
        assert "INITIAL:" in out
        assert "AFTER STEP 2" in out
        assert out.endswith("\x01")

    def test_debug_prints_states_of_failed_run(self, capsys) -> None:
        assert cli.main(["--debug", "-e", "+<<"]) == 1
        out = capsys.readouterr().out
        assert "INITIAL:" in out
        assert "AFTER STEP 1" in out
        assert "Program:  +[<]<" in out

    def test_debug_with_custom_symbols(self, tmp_path, capsys) -> None:
        table = {symbol: op.value for symbol, op in cli.CUSTOM_INSTRUCTIONS.items()}
        path = tmp_path / "wasd.json"
        path.write_text(json.dumps(table))
        assert cli.main(["--debug", "--instructions", str(path), "-e", "WO"]) == 0
        assert "Program:  [W]O" in capsys.readouterr().out

    def test_demo(self, capsys) -> None:
        assert cli.main(["--demo"]) == 0
        out = capsys.readouterr().out
        assert out.count("\x03" * 3) == 2
        assert "Hello World!" in out
