## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Velocity, wrap


# Register arithmetic: `r` is the register, `v` the value popped from the block's stack.
## ARITHMETIC
def op_add(r: int, v: int) -> int: return wrap(r + v)
def op_sub(r: int, v: int) -> int: return wrap(r - v)
def op_mul(r: int, v: int) -> int: return wrap(r * v)
def op_div(r: int, v: int) -> int:
    if v == 0: return r
    # Truncate toward zero, unlike Python's floor division.
    q = abs(r) // abs(v)
    return wrap(q if (r < 0) == (v < 0) else -q)
## BITWISE
def op_not(r: int) -> int: return wrap(~r)
def op_or(r: int, v: int) -> int: return wrap(r | v)
def op_and(r: int, v: int) -> int: return wrap(r & v)
def op_xor(r: int, v: int) -> int: return wrap(r ^ v)


## COMPARATORS
def compare(r: int, v: int, velocity: Velocity) -> Velocity:
    """Keep heading when equal, turn left when the register is greater, right when smaller."""
    if r == v: return velocity
    return velocity.turn_left() if r > v else velocity.turn_right()


## DEFLECTORS
_FORWARD_MIRROR = {Velocity.EAST: Velocity.NORTH, Velocity.NORTH: Velocity.EAST,
                   Velocity.WEST: Velocity.SOUTH, Velocity.SOUTH: Velocity.WEST}
_BACK_MIRROR = {Velocity.EAST: Velocity.SOUTH, Velocity.SOUTH: Velocity.EAST,
                Velocity.WEST: Velocity.NORTH, Velocity.NORTH: Velocity.WEST}

def reflect_forward(velocity: Velocity) -> Velocity: return _FORWARD_MIRROR[velocity]
def reflect_back(velocity: Velocity) -> Velocity: return _BACK_MIRROR[velocity]
