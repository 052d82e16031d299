"""Line-based terminal input and output with validation."""

from __future__ import annotations

import re
import sys
from typing import Callable, TextIO

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_WHITESPACE = " \t\n\r\f\v"
_CLEAR_SCREEN = "\033[2J\033[H"


class Console:
    """Prompts the user and checks what comes back."""

    def __init__(
        self,
        input_func: Callable[[], str] | None = None,
        output: TextIO | None = None,
    ) -> None:
        self._input = input_func or input
        self._output = output

    @property
    def output(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    def _write(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _read(self) -> str:
        return self._input()

    def say(self, text: str = "") -> None:
        """Write a line."""
        self._write(f"{text}\n")

    def ask_int(self, prompt: str, min_value: int = _INT_MIN, max_value: int = _INT_MAX) -> int:
        """Ask until a whole number within ``min_value..max_value`` is given.

        Trailing text after the number is ignored; blank lines are skipped.
        ``EOFError`` propagates when input runs out.
        """
        self._write(prompt)
        while True:
            line = self._read()
            if not line.strip(_WHITESPACE):
                continue
            match = _INT_PREFIX.match(line)
            if match is not None:
                value = int(match.group(1))
                if _INT_MIN <= value <= _INT_MAX and min_value <= value <= max_value:
                    return value
            self._write(
                f"Invalid input. Please enter a number between {min_value} and {max_value}: "
            )

    def ask_string(self, prompt: str) -> str:
        """Ask until a non-empty answer without semicolons is given; return it stripped."""
        self._write(prompt)
        value = self._read().strip(_WHITESPACE)
        while not value or ";" in value:
            if not value:
                self._write("Input cannot be empty. ")
            else:
                self._write("Input cannot contain semicolons (;). ")
            self._write(f"Please try again: {prompt}")
            value = self._read().strip(_WHITESPACE)
        return value

    def pause(self, prompt: str = "Press Enter to continue...") -> None:
        """Show a prompt and wait for one line; end of input is accepted."""
        self._write(prompt)
        try:
            self._read()
        except EOFError:
            pass

    def clear(self) -> None:
        """Clear the screen when writing to a terminal."""
        isatty = getattr(self.output, "isatty", None)
        if isatty is not None and isatty():
            self._write(_CLEAR_SCREEN)