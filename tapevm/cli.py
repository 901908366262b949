#!/usr/bin/env python3
"""
Command line entry point for the tape VM.

Examples:
    tapevm hello.bf
    tapevm -e '+++>+++<[>.<-]'
    tapevm --demo
    tapevm --debug -e ',+.' --input A
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from tapevm.config import EngineConfig, load_env_file, load_instruction_file
from tapevm.console import ConsoleInput, ScriptedInput
from tapevm.debugger import DebugEngine, render_state
from tapevm.engine import ExecutionEngine
from tapevm.errors import VMError
from tapevm.instructions import Operation

logger = logging.getLogger(__name__)

HEARTS = "+++>+++<[>.<-]"
CUSTOM_HEARTS = "WWWDWWWA(DOAS)"
HELLO_WORLD = (
    "++++++++++[>+++++++>++++++++++>+++>+<<<<-]>++.>+.+++++++..+++.>++."
    "<<+++++++++++++++.>.+++.------.--------.>+.>."
)

CUSTOM_INSTRUCTIONS = {
    'D': Operation.MOVE_POINTER_FORWARD,
    'A': Operation.MOVE_POINTER_BACKWARD,
    'W': Operation.INCREMENT_CELL,
    'S': Operation.DECREMENT_CELL,
    'O': Operation.EMIT_CELL,
    'I': Operation.READ_CELL,
    '(': Operation.LOOP_START,
    ')': Operation.LOOP_END,
}


def print_header(title):
    print(f"\n{'='*60}")
    print(f" {title}")
    print(f"{'='*60}")


def run_demos() -> None:
    """The three demonstration programs: hearts, remapped hearts, hello world."""
    interpreter = ExecutionEngine()

    print_header("Three hearts, default instructions")
    print(f"Program: {HEARTS}")
    print(interpreter.run(HEARTS))

    print_header("Three hearts, custom instructions")
    custom = ExecutionEngine(EngineConfig(tape_size=100, custom_instructions=CUSTOM_INSTRUCTIONS))
    print(f"Program: {CUSTOM_HEARTS}")
    print(custom.run(CUSTOM_HEARTS))

    print_header("Hello World")
    print(interpreter.run(HELLO_WORLD), end="")


def print_snapshots(engine: DebugEngine) -> None:
    """Print every recorded state, including those leading up to a failed step."""
    program_text = engine.program_text()
    for snapshot in engine.snapshots:
        print(render_state(snapshot, program_text))
        print()
    if len(engine.snapshots) <= engine.step_count:
        print(f"(showing {len(engine.snapshots)} of {engine.step_count + 1} states)")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tapevm", description="Run tape VM programs")
    ap.add_argument("file", nargs="?", help="program source file")
    ap.add_argument("-e", "--execute", help="program source given inline")
    ap.add_argument("--tape-size", type=int, default=None, help="tape capacity in cells")
    ap.add_argument("--instructions", default=None,
                    help="JSON file mapping symbols to operation names")
    ap.add_argument("--input", default=None,
                    help="characters fed to read operations before falling back to the console")
    ap.add_argument("--demo", action="store_true", help="run the demonstration programs")
    ap.add_argument("--debug", action="store_true", help="print machine state after each step")
    ap.add_argument("--max-snapshots", type=int, default=50,
                    help="number of steps shown with --debug")
    ap.add_argument("--log-level", default=os.environ.get("TAPEVM_LOG_LEVEL", "WARNING"),
                    help="logging level (default from TAPEVM_LOG_LEVEL or WARNING)")
    return ap


def read_source(args) -> Optional[str]:
    if args.execute is not None:
        return args.execute
    if args.file:
        with open(args.file, 'r') as f:
            code = f.read()
        # Only the trailing newline is dropped; any other stray character is an error.
        return code[:-1] if code.endswith("\n") else code
    return None


def build_config(args) -> EngineConfig:
    config = EngineConfig.from_env()
    if args.tape_size is not None:
        config = EngineConfig(tape_size=args.tape_size,
                              custom_instructions=config.custom_instructions)
    if args.instructions:
        config = EngineConfig(tape_size=config.tape_size,
                              custom_instructions=load_instruction_file(args.instructions))
    return config


def main(argv: Optional[List[str]] = None) -> int:
    load_env_file()
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    if args.demo:
        run_demos()
        return 0

    try:
        source = read_source(args)
        if source is None:
            ap.error("a program file, -e CODE or --demo is required")
        config = build_config(args)

        input_fn = ConsoleInput()
        if args.input is not None:
            input_fn = ScriptedInput(list(args.input))

        if args.debug:
            engine = DebugEngine(config, input_fn, max_snapshots=args.max_snapshots)
            try:
                output = engine.run(source)
            finally:
                print_snapshots(engine)
        else:
            output = ExecutionEngine(config, input_fn).run(source)
    except (VMError, ValueError, OSError) as e:
        logger.error("Run failed: %s", e)
        return 1

    sys.stdout.write(output)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
