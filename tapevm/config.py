"""
Engine configuration.

Values can come from code, from the environment, or from a local .env
file merged into the environment by python-dotenv:

    TAPEVM_TAPE_SIZE      tape capacity in cells (default 1024)
    TAPEVM_INSTRUCTIONS   path to a JSON file mapping symbols to operation names
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from tapevm.instructions import Operation
from tapevm.tape import DEFAULT_TAPE_SIZE


def load_env_file() -> bool:
    """Merge a .env file from the working directory into os.environ, without overriding."""
    return load_dotenv(find_dotenv(usecwd=True))


@dataclass
class EngineConfig:
    """Construction options for ExecutionEngine."""
    tape_size: int = DEFAULT_TAPE_SIZE
    custom_instructions: Optional[Mapping[str, Operation]] = None

    def __post_init__(self):
        if isinstance(self.tape_size, bool) or not isinstance(self.tape_size, int):
            raise ValueError(f"tape_size must be an integer, got {self.tape_size!r}")
        if self.tape_size <= 0:
            raise ValueError(f"tape_size must be positive, got {self.tape_size}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        """Build a config from TAPEVM_* variables, defaulting anything unset."""
        if environ is None:
            load_env_file()
        env = os.environ if environ is None else environ

        raw_size = env.get("TAPEVM_TAPE_SIZE", "").strip()
        try:
            tape_size = int(raw_size) if raw_size else DEFAULT_TAPE_SIZE
        except ValueError:
            raise ValueError(f"TAPEVM_TAPE_SIZE must be an integer, got {raw_size!r}") from None

        instructions_path = env.get("TAPEVM_INSTRUCTIONS", "").strip()
        custom = load_instruction_file(instructions_path) if instructions_path else None

        return cls(tape_size=tape_size, custom_instructions=custom)


def parse_instruction_names(data: Mapping[str, str]) -> Dict[str, Operation]:
    """Turn {"D": "move_pointer_forward", ...} into a symbol -> Operation dict."""
    if not isinstance(data, dict):
        raise ValueError("Instruction table must be a JSON object")
    table: Dict[str, Operation] = {}
    for symbol, name in data.items():
        if len(symbol) != 1:
            raise ValueError(f"Instruction symbol must be a single character, got {symbol!r}")
        if not isinstance(name, str):
            raise ValueError(f"Operation name for {symbol!r} must be a string")
        table[symbol] = Operation.from_name(name)
    return table


def load_instruction_file(path: str) -> Dict[str, Operation]:
    """Load a custom instruction table from a JSON file."""
    with open(Path(path), 'r') as f:
        data = json.load(f)
    return parse_instruction_names(data)
