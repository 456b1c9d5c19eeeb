## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Mutable, exclusively-owned linked stack.  Kept as the baseline to compare
# against `PersistentList`: no sharing, so no reference counts are needed.
#

from typing import Any, Callable, Iterator


class _Cell:
    __slots__ = ('element', 'next')

    def __init__(self, element, next):
        self.element = element
        self.next = next


class LinkedStack:
    __slots__ = ('_top', '_size')

    def __init__(self, values=()):
        self._top: _Cell | None = None
        self._size = 0
        for value in values:
            self.push(value)

    def push(self, value) -> None:
        self._top = _Cell(value, self._top)
        self._size += 1

    def pop(self):
        cell = self._top
        if cell is None:
            return None
        self._top, cell.next = cell.next, None
        self._size -= 1
        return cell.element

    def peek(self):
        return None if self._top is None else self._top.element

    def replace_top(self, value) -> bool:
        if self._top is None:
            return False
        self._top.element = value
        return True

    def update_each(self, fn: Callable[[Any], Any]) -> None:
        cell = self._top
        while cell is not None:
            cell.element = fn(cell.element)
            cell = cell.next

    def iter(self) -> Iterator:
        cell = self._top
        while cell is not None:
            yield cell.element
            cell = cell.next

    def __iter__(self):
        return self.iter()

    def drain(self) -> Iterator:
        """Pop every element, top first, leaving the stack empty."""
        while self._top is not None:
            yield self.pop()

    def clear(self) -> None:
        # Unlink one cell at a time so long stacks never free recursively.
        cell, self._top, self._size = self._top, None, 0
        while cell is not None:
            link, cell.next = cell.next, None
            cell = link

    def is_empty(self) -> bool:
        return self._top is None

    def __len__(self):
        return self._size

    def __repr__(self):
        return "[" + " ".join(repr(it) for it in self) + "]"

    def __del__(self):
        self.clear()
