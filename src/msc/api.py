## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Program, Velocity, Instruction, State
from .errors import *
from .interpreter import Engine
from .runtime import Runtime

_RUNTIME = Runtime()

def __getattr__(name):
    return getattr(_RUNTIME, name)
