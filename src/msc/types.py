## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from enum import Enum
from types import MappingProxyType
from typing import Mapping
from dataclasses import dataclass


# Register and stack cells are 64-bit two's complement; all arithmetic wraps.
WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
WORD_MIN = -(1 << (WORD_BITS - 1))
WORD_MAX = (1 << (WORD_BITS - 1)) - 1

# Each stack owns a square of BLOCK_SIZE x BLOCK_SIZE grid cells.
BLOCK_SIZE = 4

Coord = tuple[int, int]


def wrap(value: int) -> int:
    """Fold an arbitrary Python int into the signed 64-bit range."""
    value &= WORD_MASK
    return value - (1 << WORD_BITS) if value > WORD_MAX else value


def block_of(x: int, y: int) -> Coord:
    # Floor division, so negative coordinates land in negative blocks.
    return (x // BLOCK_SIZE, y // BLOCK_SIZE)


class Velocity(Enum):
    EAST = (1, 0)
    WEST = (-1, 0)
    NORTH = (0, -1)
    SOUTH = (0, 1)

    @property
    def dx(self) -> int: return self.value[0]
    @property
    def dy(self) -> int: return self.value[1]

    def opposite(self) -> "Velocity": return _OPPOSITE[self]
    def turn_left(self) -> "Velocity": return _LEFT[self]
    def turn_right(self) -> "Velocity": return _RIGHT[self]

    def __repr__(self):
        return self.name.lower()


_OPPOSITE = {Velocity.EAST: Velocity.WEST, Velocity.WEST: Velocity.EAST,
             Velocity.NORTH: Velocity.SOUTH, Velocity.SOUTH: Velocity.NORTH}
# Anticlockwise as drawn on screen: east → north → west → south → east.
_LEFT = {Velocity.EAST: Velocity.NORTH, Velocity.NORTH: Velocity.WEST,
         Velocity.WEST: Velocity.SOUTH, Velocity.SOUTH: Velocity.EAST}
_RIGHT = {v: k for k, v in _LEFT.items()}


class Instruction(Enum):
    """Every character that may appear in a program body."""
    SPACE = ' '
    # Deflectors
    RIGHT_ARROW = '>'
    LEFT_ARROW = '<'
    UP_ARROW = '^'
    DOWN_ARROW = 'v'
    OMNI_MIRROR = 'o'
    FORWARD_MIRROR = '/'
    BACK_MIRROR = '\\'
    # Operators
    PUSH = ','
    POP = '.'
    DUPLICATE = 'd'
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '~'
    NOT = '!'
    OR = '|'
    AND = '&'
    XOR = ':'
    # Comparators
    COMPARE_ZERO = 'z'
    COMPARE_STACK = 'c'
    # Input / output
    PRINT = 'p'
    INPUT = 'i'

    @classmethod
    def from_char(cls, char: str) -> "Instruction | None":
        """Return the matching instruction, or None for unknown characters."""
        return cls._value2member_map_.get(char)

    @property
    def char(self) -> str:
        return self.value

    @property
    def kind(self) -> str:
        return _KIND[self]

    def __repr__(self):
        return repr(self.value)


_KIND: dict[Instruction, str] = {Instruction.SPACE: 'space'}
_KIND.update({i: 'deflector' for i in (Instruction.RIGHT_ARROW, Instruction.LEFT_ARROW, Instruction.UP_ARROW,
                                       Instruction.DOWN_ARROW, Instruction.OMNI_MIRROR,
                                       Instruction.FORWARD_MIRROR, Instruction.BACK_MIRROR)})
_KIND.update({i: 'operator' for i in (Instruction.PUSH, Instruction.POP, Instruction.DUPLICATE,
                                      Instruction.ADD, Instruction.SUBTRACT, Instruction.MULTIPLY,
                                      Instruction.DIVIDE, Instruction.NOT, Instruction.OR,
                                      Instruction.AND, Instruction.XOR)})
_KIND.update({i: 'comparator' for i in (Instruction.COMPARE_ZERO, Instruction.COMPARE_STACK)})
_KIND.update({i: 'io' for i in (Instruction.PRINT, Instruction.INPUT)})


class State(Enum):
    RUNNING = 'running'
    STOPPED = 'stopped'
    INPUT_WAITING = 'input-waiting'


@dataclass(frozen=True)
class Program:
    body: Mapping[Coord, Instruction]              # sparse, spaces are absent
    initial_stacks: Mapping[Coord, tuple[int, ...]]  # last item is top of stack
    width: int
    height: int
    filename: str | None = None

    def __post_init__(self):
        # Read-only views, so a Program can be shared between engines.
        object.__setattr__(self, 'body', MappingProxyType(dict(self.body)))
        object.__setattr__(self, 'initial_stacks', MappingProxyType(
            {k: tuple(v) for k, v in self.initial_stacks.items()}))

    def __getitem__(self, coord: Coord) -> Instruction:
        return self.body.get(coord, Instruction.SPACE)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def render(self) -> str:
        """Rebuild the body as text, one line per row, without trailing spaces."""
        rows = []
        for y in range(self.height):
            rows.append(''.join(self[(x, y)].char for x in range(self.width)).rstrip())
        return '\n'.join(rows)


@dataclass
class Pointer:
    x: int = 0
    y: int = 0
    velocity: Velocity = Velocity.EAST
    register: int = 0

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    @property
    def block(self) -> Coord:
        return block_of(self.x, self.y)

    def advance(self) -> None:
        self.x += self.velocity.dx
        self.y += self.velocity.dy
