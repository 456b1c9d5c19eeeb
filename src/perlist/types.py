## perlist — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from typing import Any, Callable, Iterator

from .errors import ListReleasedError


class Node:
    """One cell of a chain.  `refs` counts the handles and nodes linking here."""
    __slots__ = ('element', 'next', 'refs')

    def __init__(self, element, next: 'Node | None'):
        self.element = element
        self.next = next
        self.refs = 1

    def __repr__(self):
        return f"Node({self.element!r}, refs={self.refs})"


def _share(node: Node | None) -> Node | None:
    if node is not None:
        node.refs += 1
    return node


class PersistentList:
    """Immutable singly linked list; derived lists share their tail nodes.

    Handles own one reference to their first node.  Releasing a handle walks
    down the chain in a loop, reclaiming nodes until it meets one that is
    still referenced elsewhere.
    """
    __slots__ = ('_head', '_released')
    _nil_singleton = None

    # Called with each element as its node is reclaimed, in release order.
    _reclaim_hooks: list[Callable[[Any], None]] = []

    def __new__(cls, _head: Node | None = None):
        if _head is None:
            # Every empty handle is the canonical `nil`, created on first use.
            if cls._nil_singleton is None:
                cls._nil_singleton = super(PersistentList, cls).__new__(cls)
            return cls._nil_singleton
        return super(PersistentList, cls).__new__(cls)

    def __init__(self, _head: Node | None = None):
        # Takes over a reference that the caller already counted.
        self._head = _head
        self._released = False

    @classmethod
    def new(cls) -> 'PersistentList':
        return cls()

    def _check(self) -> Node | None:
        if self._released:
            raise ListReleasedError("List handle was used after being released.")
        return self._head

    # Derivation ──────────────────────────────────────────────────────────────────────────────
    def prepend(self, value) -> 'PersistentList':
        return PersistentList(Node(value, _share(self._check())))

    def prepended(self, *values) -> 'PersistentList':
        """Prepend values in order, so the last one given becomes the head."""
        lst = self.clone()
        for value in values:
            lst = lst.prepend(value)
        return lst

    def tail(self) -> 'PersistentList':
        head = self._check()
        if head is None:
            return nil
        return PersistentList(_share(head.next))

    def head(self, default=None):
        head = self._check()
        return default if head is None else head.element

    def clone(self) -> 'PersistentList':
        return PersistentList(_share(self._check()))

    __copy__ = clone

    # Inspection ──────────────────────────────────────────────────────────────────────────────
    def iter(self) -> 'ListIter':
        self._check()
        return ListIter(self)

    def __iter__(self) -> Iterator:
        return self.iter()

    def is_empty(self) -> bool:
        return self._check() is None

    def refcount(self) -> int:
        head = self._check()
        return 0 if head is None else head.refs

    def __len__(self):
        count, node = 0, self._check()
        while node is not None:
            count, node = count + 1, node.next
        return count

    def __bool__(self):
        raise TypeError("List truth value is ambiguous; compare with `is nil` or call `is_empty()`.")

    def __eq__(self, other):
        if not isinstance(other, PersistentList):
            return NotImplemented
        a, b = self._check(), other._check()
        while a is not b:
            if a is None or b is None or a.element != b.element:
                return False
            a, b = a.next, b.next
        return True

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        if self._released:
            return "< released >"
        if self._head is None:
            return "< nil >"
        return "< " + " ".join(repr(it) for it in self) + " >"

    # Release ─────────────────────────────────────────────────────────────────────────────────
    def release(self) -> int:
        """Give up this handle's reference and reclaim what nothing else holds.

        Returns the number of nodes reclaimed.  The canonical `nil` owns no node
        and is never marked as released.  A hook that raises does not stop the
        walk; the first such error is raised once the chain is settled.
        """
        if self._released or self._head is None:
            return 0
        node, self._head, self._released = self._head, None, True
        hooks = type(self)._reclaim_hooks

        reclaimed, error = 0, None
        while node is not None:
            node.refs -= 1
            if node.refs > 0:
                break
            element, link = node.element, node.next
            node.element = node.next = None
            for hook in hooks:
                try:
                    hook(element)
                except Exception as exc:
                    error = error or exc
            del element
            node = link
            reclaimed += 1

        if error is not None:
            raise error
        return reclaimed

    def __enter__(self) -> 'PersistentList':
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()

    def __del__(self):
        self.release()


class ListIter:
    """Forward iterator that pins the chain it walks with its own handle."""
    __slots__ = ('_pin', '_next')

    def __init__(self, lst: PersistentList):
        self._pin = lst.clone()
        self._next = self._pin._head

    def __iter__(self):
        return self

    def __next__(self):
        node = self._next
        if node is None:
            self._pin.release()
            raise StopIteration
        self._next = node.next
        return node.element


def add_reclaim_hook(fn: Callable[[Any], None]) -> Callable[[Any], None]:
    PersistentList._reclaim_hooks.append(fn)
    return fn

def remove_reclaim_hook(fn: Callable[[Any], None]) -> None:
    if fn in PersistentList._reclaim_hooks:
        PersistentList._reclaim_hooks.remove(fn)


# All empty lists are this one handle; it owns no node.
nil = PersistentList()
