"""Private name scopes.

One frame pair per class nesting level. Declared frames are ChainMaps, so a
nested class sees every name its enclosing classes declare, while duplicate
checks only look at the frame's own map. Unresolved frames are plain dicts of
name -> offset of the earliest use; they do not inherit.

Resolution is deferred: a use may precede its declaration anywhere in the
same class body, and an inner class may use a name an outer class declares
later. Names still unresolved when a class ends move to the enclosing class;
at the outermost class the earliest one is an error.
"""

from __future__ import annotations

from collections import ChainMap
from contextlib import contextmanager
from typing import Callable, Iterator

from .errors import DuplicatePrivateElement, ParseError, UndeclaredPrivateName

# Builds the error to raise: (kind, offset) -> exception.
ErrorFactory = Callable[[type[ParseError], int], ParseError]


class PrivateNameScope:
    """Stacks of declared and unresolved private names for one parse."""

    def __init__(self, error: ErrorFactory):
        self.error: ErrorFactory = error
        self.declared: list[ChainMap[str, bool]] = []
        self.unresolved: list[dict[str, int]] = []

    def enter_class(self) -> None:
        if self.declared:
            self.declared.append(self.declared[-1].new_child())
        else:
            self.declared.append(ChainMap())
        self.unresolved.append({})

    def exit_class(self) -> None:
        declared = self.declared.pop()
        unresolved = self.unresolved.pop()
        if self.unresolved:
            parent = self.unresolved[-1]
            for name, pos in unresolved.items():
                if name not in declared.maps[0] and name not in parent:
                    parent[name] = pos
            return
        if unresolved:
            first = min(unresolved.values())
            raise self.error(UndeclaredPrivateName, first)

    def discard_class(self) -> None:
        """Pop the innermost frames without reporting anything."""
        self.declared.pop()
        self.unresolved.pop()

    @contextmanager
    def class_scope(self) -> Iterator[None]:
        """Frames for one class body, popped on every exit path."""
        self.enter_class()
        try:
            yield
        except BaseException:
            self.discard_class()
            raise
        self.exit_class()

    def declare(self, name: str, pos: int) -> None:
        frame = self.declared[-1]
        if name in frame.maps[0]:
            raise self.error(DuplicatePrivateElement, pos)
        frame.maps[0][name] = True
        self.unresolved[-1].pop(name, None)

    def record_use(self, name: str, pos: int) -> None:
        if not self.declared:
            raise self.error(UndeclaredPrivateName, pos)
        if name in self.declared[-1]:
            return
        unresolved = self.unresolved[-1]
        if name not in unresolved:
            unresolved[name] = pos
