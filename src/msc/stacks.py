## msc — Copyright © 2025, Tom Boddaert.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Iterable
from collections import defaultdict

from .types import Coord, wrap


class StackStore:
    """One LIFO stack per 4x4 block, created on first use.

    Popping or peeking an empty stack gives 0 rather than failing, and
    duplicating an empty stack leaves a single 0 behind.
    """

    def __init__(self, initial: dict[Coord, Iterable[int]] | None = None):
        self._stacks: defaultdict[Coord, list[int]] = defaultdict(list)
        for block, values in (initial or {}).items():
            self.seed(block, values)

    def seed(self, block: Coord, values: Iterable[int]) -> None:
        """Push values in order, so the last one ends up on top."""
        self._stacks[block].extend(wrap(v) for v in values)

    def push(self, block: Coord, value: int) -> None:
        self._stacks[block].append(wrap(value))

    def pop(self, block: Coord) -> int:
        stack = self._stacks[block]
        return stack.pop() if stack else 0

    def peek(self, block: Coord) -> int:
        stack = self._stacks[block]
        return stack[-1] if stack else 0

    def duplicate(self, block: Coord) -> None:
        stack = self._stacks[block]
        stack.append(stack[-1] if stack else 0)

    def depth(self, block: Coord) -> int:
        return len(self._stacks.get(block, ()))

    def contents(self, block: Coord) -> list[int]:
        return list(self._stacks.get(block, ()))

    def snapshot(self) -> dict[Coord, list[int]]:
        # Copies of every non-empty stack, bottom item first.
        return {block: list(stack) for block, stack in self._stacks.items() if stack}

    def __contains__(self, block: Coord) -> bool:
        return bool(self._stacks.get(block))
