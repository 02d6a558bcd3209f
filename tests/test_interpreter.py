## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from pathlib import Path

import pytest

from msc.parser import parse
from msc.interpreter import Engine
from msc.types import Instruction, State, Velocity, WORD_MAX, WORD_MIN
from msc.errors import MscInputExhausted


def engine_for(source: str, inputs=None) -> Engine:
    read_input = None
    if inputs is not None:
        it = iter(inputs)
        read_input = lambda: next(it, None)
    return Engine(parse(source), read_input=read_input)


def run_output(source: str, inputs=None) -> list[int]:
    engine = engine_for(source, inputs)
    assert engine.run() is State.STOPPED
    return engine.output


def fixture(name: str) -> str:
    return (Path(__file__).resolve().parent / name).read_text(encoding="utf-8")


@pytest.mark.parametrize("source", ["", "\n\n", "# only a comment", "s 0 0 1 2"])
def test_empty_area_halts_without_executing(source):
    engine = engine_for(source)
    assert engine.step() is False
    assert engine.halted and engine.steps == 0


def test_spaces_walk_off_the_east_edge():
    engine = engine_for("   ")
    assert engine.run() is State.STOPPED
    assert engine.steps == 3
    assert engine.position == (3, 0)


def test_direction_change_applies_to_the_following_move():
    engine = engine_for(" v\n  \n p")
    engine.step()
    assert engine.position == (1, 0) and engine.velocity is Velocity.EAST
    engine.step()
    assert engine.position == (1, 1) and engine.velocity is Velocity.SOUTH


def test_mirrors_steer_the_pointer():
    engine = engine_for("/")
    engine.step()
    assert engine.velocity is Velocity.NORTH and engine.position == (0, -1)
    assert engine.step() is False and engine.halted

    engine = engine_for("\\")
    engine.step()
    assert engine.velocity is Velocity.SOUTH

    # East into `o` bounces straight back off the west edge.
    engine = engine_for(" o")
    assert engine.run() is State.STOPPED
    assert engine.velocity is Velocity.WEST and engine.position == (-1, 0)


def test_stack_header_seeds_block():
    assert run_output(fixture("pop-print.msc")) == [1]


def test_push_pop_roundtrip_in_one_block():
    # R := 0, push 0, NOT → -1, pop → 0, print.
    assert run_output(",!.p") == [0]
    assert run_output("!,.p") == [-1]


def test_divide_by_zero_leaves_register():
    assert run_output("s 0 0 0 7\n.~p") == [7]
    assert run_output("s 0 0 2 7\n.~~p") == [3]


def test_empty_stack_pop_and_duplicate():
    engine = engine_for("d")
    engine.run()
    assert engine.stacks.contents((0, 0)) == [0]
    assert run_output("s 1 0 9\n!.p") == [0]


def test_register_wraps_on_add():
    assert run_output(f"s 0 0 1 {WORD_MAX}\n.+p") == [WORD_MIN]


def test_bitwise_operators():
    assert run_output("s 0 0 12 10\n.&p") == [8]
    assert run_output("s 0 0 12 10\n.|p") == [14]
    assert run_output("s 0 0 12 10\n.:p") == [6]


def test_each_block_has_its_own_stack():
    # Push 5 in block (0,0), then pop from block (1,0), which is still empty.
    assert run_output("s 0 0 5\n., .p") == [5]
    assert run_output("s 0 0 5\n.,   .p") == [0]


@pytest.mark.parametrize("seed, heading", [(0, Velocity.EAST), (5, Velocity.NORTH), (-5, Velocity.SOUTH)])
def test_compare_zero_from_east(seed, heading):
    engine = engine_for(f"s 0 0 {seed}\n.z")
    engine.step(); engine.step()
    assert engine.velocity is heading


def test_compare_zero_while_heading_south():
    engine = engine_for("s 0 0 5\nv\n.\nz")
    for _ in range(3): engine.step()
    assert engine.velocity is Velocity.EAST   # left of south


def test_compare_stack_pops_value():
    engine = engine_for("s 0 0 3 4\n.c")
    engine.step(); engine.step()
    # Register 4 is greater than the popped 3.
    assert engine.velocity is Velocity.NORTH
    assert engine.stacks.depth((0, 0)) == 0


def test_input_feeds_register():
    assert run_output("i!p", inputs=[41]) == [-42]


def test_input_exhausted_is_fatal():
    engine = engine_for(" i", inputs=[])
    with pytest.raises(MscInputExhausted) as info:
        engine.run()
    assert info.value.msc_position == (1, 0)
    assert engine.position == (1, 0)


def test_input_waiting_without_collaborator():
    engine = engine_for("ip")
    assert engine.run() is State.INPUT_WAITING
    assert engine.run() is State.INPUT_WAITING
    engine.provide_input(12)
    assert engine.run() is State.STOPPED
    assert engine.output == [12]


def test_max_steps_budget():
    engine = engine_for(">o")
    assert engine.run(max_steps=10) is State.RUNNING
    assert engine.steps == 10
    assert engine.run(max_steps=5) is State.RUNNING
    assert engine.steps == 15


def test_stats_counts_steps():
    stats = {}
    engine = Engine(parse("   "), stats=stats)
    engine.run()
    assert stats['steps'] == 3


def test_write_output_collaborator():
    seen = []
    Engine(parse("s 0 0 3\n.pp"), write_output=seen.append).run()
    assert seen == [3, 3]


@pytest.mark.parametrize("limit, expected", [
    (0, []),
    (1, [1, 1]),
    (10, [1, 1, 2, 3, 5, 8]),
    (100, [1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89]),
])
def test_fibonacci_program(limit, expected):
    assert run_output(fixture("fibonacci.msc"), inputs=[limit]) == expected


def test_verbose_trace_prints_steps(capsys):
    Engine(parse("s 0 0 2\n.p"), verbosity=2).run()
    out = re.sub(r"\033\[[0-9;]*m", "", capsys.readouterr().out)
    assert "R=2" in out
    assert "'p'" in out


@pytest.mark.parametrize("instruction", list(Instruction))
def test_every_instruction_has_semantics(instruction):
    engine = engine_for("s 0 0 3 4\n.", inputs=[1])
    engine.execute(instruction)
    assert engine.state in (State.RUNNING, State.STOPPED)
