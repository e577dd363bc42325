"""A singly linked list of arbitrary values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Iterator, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class Node(Generic[T]):
    """One cell of a :class:`LinkedList`."""

    content: T
    next: Optional["Node[T]"] = None


class LinkedList(Generic[T]):
    """Singly linked list with constant-time insertion at both ends."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.head: Optional[Node[T]] = None
        self._tail: Optional[Node[T]] = None
        self._size = 0
        for item in items:
            self.push_back(item)

    def push_front(self, content: T) -> Node[T]:
        """Insert ``content`` at the start and return its node."""
        node = Node(content, self.head)
        self.head = node
        if self._tail is None:
            self._tail = node
        self._size += 1
        return node

    def push_back(self, content: T) -> Node[T]:
        """Append ``content`` at the end and return its node."""
        node = Node(content)
        if self._tail is None:
            self.head = node
        else:
            self._tail.next = node
        self._tail = node
        self._size += 1
        return node

    def last(self) -> Optional[Node[T]]:
        """The last node, or ``None`` for an empty list."""
        return self._tail

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        node = self.head
        while node is not None:
            yield node.content
            node = node.next

    def clear(self, on_delete: Optional[Callable[[T], Any]] = None) -> None:
        """Remove every element, passing each one to ``on_delete`` first."""
        node = self.head
        while node is not None:
            following = node.next
            if on_delete is not None:
                on_delete(node.content)
            node.next = None
            node = following
        self.head = None
        self._tail = None
        self._size = 0

    def for_each(self, func: Callable[[T], Any]) -> None:
        """Call ``func`` on every element, front to back."""
        for content in self:
            func(content)

    def map(self, func: Callable[[T], U]) -> "LinkedList[U]":
        """A new list holding ``func`` applied to every element."""
        return LinkedList(func(content) for content in self)

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"