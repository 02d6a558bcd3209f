## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

import pytest

from msc.types import Instruction, Pointer, Program, Velocity, block_of, wrap, WORD_MAX, WORD_MIN


def test_wrap_folds_into_signed_range():
    assert wrap(WORD_MAX + 1) == WORD_MIN
    assert wrap(WORD_MIN - 1) == WORD_MAX
    assert wrap(-1) == -1
    assert wrap(1 << 64) == 0


@pytest.mark.parametrize("x, y, block", [(0, 0, (0, 0)), (3, 3, (0, 0)), (4, 7, (1, 1)), (-1, 0, (-1, 0)), (-4, -5, (-1, -2))])
def test_block_of_uses_floor_division(x, y, block):
    assert block_of(x, y) == block


def test_turns_form_cycles():
    for v in Velocity:
        assert v.turn_left().turn_right() is v
        assert v.opposite().opposite() is v
    v = Velocity.EAST
    assert [v := v.turn_left() for _ in range(4)] == [Velocity.NORTH, Velocity.WEST, Velocity.SOUTH, Velocity.EAST]


def test_instruction_lookup_and_kinds():
    assert Instruction.from_char('~') is Instruction.DIVIDE
    assert Instruction.from_char('x') is None
    assert Instruction.from_char('\\').kind == 'deflector'
    assert Instruction.COMPARE_STACK.kind == 'comparator'
    assert Instruction.INPUT.kind == 'io'
    assert {i.kind for i in Instruction} == {'space', 'deflector', 'operator', 'comparator', 'io'}


def test_pointer_starts_at_origin_heading_east():
    ptr = Pointer()
    assert (ptr.position, ptr.velocity, ptr.register) == ((0, 0), Velocity.EAST, 0)
    ptr.velocity = Velocity.NORTH
    ptr.advance()
    assert ptr.position == (0, -1)
    assert ptr.block == (0, -1)


def test_program_bounds():
    program = Program(body={}, initial_stacks={}, width=3, height=2)
    assert program.contains(2, 1)
    assert not program.contains(3, 0)
    assert not program.contains(0, -1)
    assert program[(1, 1)] is Instruction.SPACE
