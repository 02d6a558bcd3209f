## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

import lark

from .types import Coord, Instruction, Program, WORD_MIN, WORD_MAX
from .errors import MscParseError


COMMENT = '#'
HEADER = 's'

# Stack headers are the only structured lines; body lines are read cell by cell.
# A value must fill its whole whitespace-separated word, so `1-2` is one bad token.
HEADER_GRAMMAR = r"""start: "s" VALUE VALUE VALUE*

VALUE: /[+-]?\d+(?!\S)/

%import common.WS
%ignore WS
"""

_header_parser = None

def _get_header_parser() -> lark.Lark:
    global _header_parser
    if _header_parser is None:
        _header_parser = lark.Lark(HEADER_GRAMMAR, parser="lalr", lexer="contextual")
    return _header_parser


def split_lines(source: str) -> list[str]:
    """Split on `\\n` only, dropping a trailing `\\r` and the empty piece after a final newline."""
    lines = source.split('\n')
    if lines[-1] == '':
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def strip_comment(line: str) -> str:
    head, _, _ = line.partition(COMMENT)
    return head


def parse_header(text: str, *, line: int, filename=None) -> tuple[Coord, list[int]]:
    """Parse `s bx by v1 ... vn` into the block coordinate and its values, `vn` last."""
    try:
        tree = _get_header_parser().parse(text)
    except lark.exceptions.UnexpectedInput as exc:
        token = getattr(exc, 'token', None)
        token_val = '' if token is None or token.type == '$END' else str(token)
        if isinstance(exc, lark.exceptions.UnexpectedCharacters):
            token_val = text[exc.pos_in_stream:].split(None, 1)[0]
        # Running out of tokens is reported just past the end of the line.
        column = exc.column if token_val and isinstance(exc.column, int) and exc.column > 0 else len(text) + 1
        what = f"unexpected `{token_val}`" if token_val else "missing block coordinates or values"
        raise MscParseError(f"Stack header on line {line}, column {column}: {what}.",
                            filename=filename, line=line, column=column, token=token_val) from None

    tokens = [t for t in tree.children if isinstance(t, lark.Token)]
    x, y, *values = tokens
    for tok in values:
        if not WORD_MIN <= int(tok) <= WORD_MAX:
            raise MscParseError(f"Stack header on line {line}, column {tok.column}: value `{tok}` does not fit in 64 bits.",
                                filename=filename, line=line, column=tok.column, token=str(tok))
    return (int(x), int(y)), [int(t) for t in values]


def parse_body_line(text: str, row: int, *, line: int, filename=None) -> dict[Coord, Instruction]:
    cells = {}
    for column, char in enumerate(text):
        instruction = Instruction.from_char(char)
        if instruction is None:
            raise MscParseError(f"Unknown instruction `{char}` on line {line}, column {column + 1}.",
                                filename=filename, line=line, column=column + 1, token=char)
        if instruction is not Instruction.SPACE:
            cells[(column, row)] = instruction
    return cells


def parse(source: str, filename=None) -> Program:
    body: dict[Coord, Instruction] = {}
    stacks: dict[Coord, list[int]] = {}
    width, row = 0, 0

    for number, raw in enumerate(split_lines(source), start=1):
        if raw.startswith(COMMENT): continue
        text = strip_comment(raw)

        if text.startswith(HEADER):
            block, values = parse_header(text, line=number, filename=filename)
            # Repeated headers for the same block keep stacking on top.
            stacks.setdefault(block, []).extend(values)
            continue

        body.update(parse_body_line(text, row, line=number, filename=filename))
        width = max(width, len(text))
        row += 1

    return Program(body=body, initial_stacks=stacks, width=width, height=row, filename=filename)


def format_parse_error_context(filename, line, column, token_value, source=None):
    if source is None:
        with open(filename, 'r', encoding='utf-8', newline='') as f:
            source = f.read()
    lines = split_lines(source)
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]
    width = max(len(token_value or ''), 1)

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if column and 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+width-1]}\033[0m" +
                    line_content[column+width-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
