## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘
#
# msc — MatrixStack-Code, a two-dimensional stack language with one stack per 4x4 block.
#

import sys
import time
import traceback
from dataclasses import dataclass
from importlib import metadata

import click

from .types import State
from .errors import MscParseError, MscInputExhausted
from .parser import format_parse_error_context
from .formatting import write_without_ansi

from . import api


AUTHOR_TEXT = """\
https://github.com/tomboddaert/msc
This program was created by:

  Tom Boddaert
    https://tomboddaert.com/
"""


def _version() -> str:
    try:
        return metadata.version('msc')
    except metadata.PackageNotFoundError:
        return 'unknown'


@dataclass(frozen=True)
class RuntimeConfig:
    verbose: int
    suppress: bool
    stats: bool
    plain: bool
    max_steps: int | None


@dataclass
class ExecutionItem:
    source: str
    filename: str
    from_stdin: bool = False


class MscRunner:
    def __init__(self, config: RuntimeConfig):
        self.verbose = config.verbose
        self.suppress = config.suppress
        self.stats_enabled = config.stats
        self.max_steps = config.max_steps
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0
        self._program_from_stdin = False

    def _read_input(self) -> int | None:
        while True:
            if not self.suppress:
                print('> ', end='', flush=True)
            line = sys.stdin.readline()
            if not line: return None
            text = line.strip()
            # A piped program has already consumed stdin, so a blank answer means no terminal.
            if not text and self._program_from_stdin: return None
            try:
                return int(text)
            except ValueError:
                if not self.suppress:
                    print(f"\033[33m{text!r} is not an integer, try again.\033[0m", file=sys.stderr)

    def _write_output(self, value: int) -> None:
        print(value, flush=True)

    def _report(self, message: str, detail: str, exc_type: str = None, context: str = '') -> None:
        self.failure = True
        if self.suppress: return
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)

    def _handle_exception(self, exc: Exception, filename: str, source: str) -> None:
        if isinstance(exc, MscParseError):
            context = format_parse_error_context(filename, exc.line, exc.column, exc.token, source=source)
            context += f"\n\033[90m{str(exc)}\033[0m\n"
            self._report("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context)
        elif isinstance(exc, MscInputExhausted):
            x, y = exc.msc_position
            hint = ("Inputs cannot be used when the program is piped into the interpreter; "
                    "pass the file path as an argument instead.") if self._program_from_stdin else str(exc)
            self._report("INPUT ERROR.", f"Instruction `\033[1;97mi\033[0m` at ({x}, {y}) in `\033[97m{filename}\033[0m` got no value.",
                         type(exc).__name__, f"\033[90m{hint}\033[0m\n")
        else:
            self._report("RUNTIME ERROR.", f"Running `\033[97m{filename}\033[0m` failed!", type(exc).__name__,
                         ''.join(traceback.format_exception(exc)))

    def execute_items(self, items) -> None:
        for item in items:
            if self.failure: break
            self._execute_script(item)

    def _execute_script(self, item: ExecutionItem) -> None:
        self._program_from_stdin = item.from_stdin
        try:
            engine = self.runtime.new_engine(item.source, filename=item.filename, read_input=self._read_input,
                                             write_output=self._write_output, verbosity=self.verbose,
                                             stats=self.total_stats)
            state = engine.run(max_steps=self.max_steps)
        except Exception as exc:
            self._handle_exception(exc, item.filename, item.source)
        else:
            if state is not State.STOPPED and not self.suppress:
                print(f"\033[90mStopped after {self.max_steps} steps without halting.\033[0m", file=sys.stderr)
            self.executed_items += 1

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


def _show_author(ctx: click.Context, _param, value: bool) -> None:
    if not value or ctx.resilient_parsing: return
    click.echo(AUTHOR_TEXT, nl=False)
    ctx.exit()


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('files', nargs=-1, type=click.File('r', encoding='utf-8'))
@click.option('--suppress', '-s', is_flag=True, help='Suppress errors and input prompts.')
@click.option('--stdin', '-S', 'force_stdin', is_flag=True, help='Force reading the program from stdin.')
@click.option('--verbose', '-v', default=0, count=True, help='Trace every step; twice to also draw the grid.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes, and send stderr writes through stdout without color.')
@click.option('--max-steps', type=click.IntRange(min=0), default=None, help='Stop a program after this many steps.')
@click.option('--author', '-a', is_flag=True, expose_value=False, is_eager=True, callback=_show_author,
              help='Information about the author.')
@click.version_option(_version(), '--version', '-V', prog_name='msc', message='MSC version %(version)s')
@click.pass_context
def cli(ctx: click.Context, files, suppress: bool, force_stdin: bool, verbose: int, stats: bool,
        plain: bool, max_steps: int | None) -> None:
    config = RuntimeConfig(verbose=verbose, suppress=suppress, stats=stats, plain=plain, max_steps=max_steps)
    runner = MscRunner(config)

    if not files or force_stdin:
        if files and not suppress:
            print("\033[90mReading from stdin, ignoring the files given.\033[0m", file=sys.stderr)
        items = (ExecutionItem(sys.stdin.read(), '<STDIN>', from_stdin=True),)
    else:
        items = (ExecutionItem(f.read(), f.name or '<STDIN>', from_stdin=(f.name == '<stdin>')) for f in files)

    runner.execute_items(items)
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    cli.main(args=argv, prog_name='msc')


if __name__ == "__main__":
    main()
