## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

import re

from .types import Instruction, Pointer, Program


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_stack(values: list[int], limit=8) -> str:
    if not values: return '∅'
    shown = values[-limit:]
    prefix = '… ' if len(values) > limit else ''
    return '<' + prefix + ' '.join(str(v) for v in shown) + '>'


def format_step(step: int, pointer: Pointer, instruction: Instruction, stack: list[int]) -> str:
    x, y = pointer.position
    return (f"\033[90m{step:>4} :\033[0m ({x:>3},{y:>3}) \033[1;97m{instruction.char!r:<4}\033[0m"
            f" {pointer.velocity.name.lower():<5}  R=\033[97m{pointer.register}\033[0m"
            f"  \033[36m{format_stack(stack)}\033[0m")


def format_grid(program: Program, pointer: Pointer) -> str:
    """Draw the program body with the pointer's cell highlighted."""
    lines = []
    for y in range(program.height):
        row = ''
        for x in range(program.width):
            char = program[(x, y)].char
            row += f"\033[48;5;30m\033[1;97m{char}\033[0m" if (x, y) == pointer.position else char
        lines.append('      | ' + row)
    return '\n'.join(lines)


def show_step(step, pointer, instruction, stack, program=None, file=None):
    print(format_step(step, pointer, instruction, stack), file=file)
    if program is not None:
        print(format_grid(program, pointer), file=file)
