"""Input sources for the READ instruction."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Iterable, TextIO

from . import constants


class InputSource(ABC):
    """Supplies one raw line of input per READ."""

    @abstractmethod
    def read_value(self, name: str) -> str: ...


class StreamInputSource(InputSource):
    """Prompts on an output stream and reads a line from an input stream."""

    def __init__(
        self,
        input_stream: TextIO | None = None,
        output_stream: TextIO | None = None,
    ):
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout

    def read_value(self, name: str) -> str:
        self._output.write(constants.READ_PROMPT_TEMPLATE.format(name=name))
        self._output.flush()
        return self._input.readline()


class ScriptedInputSource(InputSource):
    """Replays preset lines; behaves like end of input once exhausted."""

    def __init__(self, lines: Iterable[str]):
        self._lines = list(lines)
        self._pos = 0

    def read_value(self, name: str) -> str:
        if self._pos >= len(self._lines):
            return ""
        line = self._lines[self._pos]
        self._pos += 1
        return str(line)
