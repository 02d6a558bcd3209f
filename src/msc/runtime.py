## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterable

from .types import Program
from .parser import parse
from .interpreter import Engine, ReadInput, WriteOutput


class Runtime:
    """Minimal runtime facade focused on embedding."""

    def __init__(self, read_input: ReadInput | None = None, write_output: WriteOutput | None = None):
        self.read_input = read_input
        self.write_output = write_output

    # Loading ─────────────────────────────────────────────────────────────────────────────────
    def parse(self, source: str, filename: str | None = None) -> Program:
        return parse(source, filename=filename)

    def new_engine(self, source: str | Program, filename: str | None = None,
                   read_input: ReadInput | None = None, write_output: WriteOutput | None = None,
                   verbosity: int = 0, stats: dict | None = None) -> Engine:
        program = source if isinstance(source, Program) else self.parse(source, filename=filename)
        return Engine(program, read_input=read_input or self.read_input,
                      write_output=write_output or self.write_output, verbosity=verbosity, stats=stats)

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def run(self, source: str | Program, inputs: Iterable[int] | None = None, filename: str | None = None,
            verbosity: int = 0, stats: dict | None = None, max_steps: int | None = None) -> list[int]:
        """Run to completion and return every printed value; `inputs` feed the `i` instruction.

        With neither `inputs` nor a runtime `read_input`, the input stream is empty and
        the first `i` raises `MscInputExhausted`.
        """
        read_input = self.read_input
        if inputs is not None or read_input is None:
            it = iter(inputs if inputs is not None else ())
            read_input = lambda: next(it, None)
        outputs: list[int] = []
        engine = self.new_engine(source, filename=filename, read_input=read_input,
                                 write_output=outputs.append, verbosity=verbosity, stats=stats)
        engine.run(max_steps=max_steps)
        return outputs
