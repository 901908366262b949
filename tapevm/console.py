"""Input collaborators for the READ_CELL operation."""

from typing import Callable, Iterable, Optional

DEFAULT_PROMPT = "Enter a char: "


class ConsoleInput:
    """Line-oriented stdin reader; one call per requested character."""

    def __init__(self, prompt: str = DEFAULT_PROMPT):
        self.prompt = prompt

    def __call__(self) -> str:
        return input(self.prompt)


class ScriptedInput:
    """Feeds prepared lines in order, then hands over to a fallback reader.

    The fallback defaults to the console; an exhausted script never raises.
    """

    def __init__(self, lines: Iterable[str], fallback: Optional[Callable[[], str]] = None):
        self._lines = iter(lines)
        self.fallback = fallback or ConsoleInput()

    def __call__(self) -> str:
        try:
            return next(self._lines)
        except StopIteration:
            return self.fallback()
