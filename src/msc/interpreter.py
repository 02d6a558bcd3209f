## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Callable, assert_never

from . import operators as O
from .types import Instruction, Pointer, Program, State, Velocity, wrap
from .errors import MscInputExhausted
from .stacks import StackStore
from .formatting import show_step


ReadInput = Callable[[], int | None]
WriteOutput = Callable[[int], None]


class Engine:
    """Runs one program with a single pointer, one instruction per `step()`.

    Without a `read_input` collaborator, `i` parks the engine in INPUT_WAITING
    until `provide_input()` is called.  Without `write_output`, printed values
    are collected in `self.output`.
    """

    def __init__(self, program: Program, read_input: ReadInput | None = None,
                 write_output: WriteOutput | None = None, verbosity=0, stats=None):
        self.program = program
        self.stacks = StackStore(program.initial_stacks)
        self.pointer = Pointer()
        self.state = State.RUNNING
        self.steps = 0
        self.output: list[int] = []

        self.read_input = read_input
        self.write_output = write_output if write_output is not None else self.output.append
        self.verbosity = verbosity
        self.stats = stats

    # Accessors ───────────────────────────────────────────────────────────────────────────────
    @property
    def position(self) -> tuple[int, int]:
        return self.pointer.position

    @property
    def velocity(self) -> Velocity:
        return self.pointer.velocity

    @property
    def register(self) -> int:
        return self.pointer.register

    @property
    def halted(self) -> bool:
        return self.state is State.STOPPED

    # Execution ───────────────────────────────────────────────────────────────────────────────
    def step(self) -> bool:
        """Execute the instruction under the pointer, then move.  False if nothing ran."""
        if self.state is not State.RUNNING:
            return False
        ptr = self.pointer
        if not self.program.contains(ptr.x, ptr.y):
            self.state = State.STOPPED
            return False

        instruction = self.program[ptr.position]
        if self.verbosity > 0:
            show_step(self.steps, ptr, instruction, self.stacks.contents(ptr.block),
                      program=self.program if self.verbosity > 1 else None)

        self.execute(instruction)
        ptr.advance()
        self.steps += 1
        return True

    def execute(self, instruction: Instruction) -> None:
        ptr, stacks, block = self.pointer, self.stacks, self.pointer.block

        match instruction:
            case Instruction.SPACE:
                pass

            case Instruction.RIGHT_ARROW: ptr.velocity = Velocity.EAST
            case Instruction.LEFT_ARROW: ptr.velocity = Velocity.WEST
            case Instruction.UP_ARROW: ptr.velocity = Velocity.NORTH
            case Instruction.DOWN_ARROW: ptr.velocity = Velocity.SOUTH
            case Instruction.OMNI_MIRROR: ptr.velocity = ptr.velocity.opposite()
            case Instruction.FORWARD_MIRROR: ptr.velocity = O.reflect_forward(ptr.velocity)
            case Instruction.BACK_MIRROR: ptr.velocity = O.reflect_back(ptr.velocity)

            case Instruction.PUSH: stacks.push(block, ptr.register)
            case Instruction.POP: ptr.register = stacks.pop(block)
            case Instruction.DUPLICATE: stacks.duplicate(block)
            case Instruction.ADD: ptr.register = O.op_add(ptr.register, stacks.pop(block))
            case Instruction.SUBTRACT: ptr.register = O.op_sub(ptr.register, stacks.pop(block))
            case Instruction.MULTIPLY: ptr.register = O.op_mul(ptr.register, stacks.pop(block))
            case Instruction.DIVIDE: ptr.register = O.op_div(ptr.register, stacks.pop(block))
            case Instruction.NOT: ptr.register = O.op_not(ptr.register)
            case Instruction.OR: ptr.register = O.op_or(ptr.register, stacks.pop(block))
            case Instruction.AND: ptr.register = O.op_and(ptr.register, stacks.pop(block))
            case Instruction.XOR: ptr.register = O.op_xor(ptr.register, stacks.pop(block))

            case Instruction.COMPARE_ZERO:
                ptr.velocity = O.compare(ptr.register, 0, ptr.velocity)
            case Instruction.COMPARE_STACK:
                ptr.velocity = O.compare(ptr.register, stacks.pop(block), ptr.velocity)

            case Instruction.PRINT:
                self.write_output(ptr.register)
            case Instruction.INPUT:
                if self.read_input is None:
                    self.state = State.INPUT_WAITING
                else:
                    ptr.register = self._pull_input()

            case _:
                assert_never(instruction)

    def _pull_input(self) -> int:
        try:
            value = self.read_input()
        except EOFError:
            value = None
        if value is None:
            raise MscInputExhausted(f"Input ran out while `i` at {self.pointer.position} was waiting for a value.",
                                    msc_position=self.pointer.position, msc_instruction=Instruction.INPUT.char)
        return wrap(value)

    def provide_input(self, value: int) -> None:
        """Satisfy a pending `i` when running without an input collaborator."""
        if self.state is State.INPUT_WAITING:
            self.pointer.register = wrap(value)
            self.state = State.RUNNING

    def run(self, max_steps: int | None = None) -> State:
        """Step until the pointer leaves the grid, input is awaited, or `max_steps` is used up."""
        start = self.steps
        try:
            while self.state is State.RUNNING:
                if max_steps is not None and self.steps - start >= max_steps:
                    break
                self.step()
        finally:
            if self.stats is not None:
                self.stats['steps'] = self.stats.get('steps', 0) + (self.steps - start)
        return self.state
