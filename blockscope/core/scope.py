"""
Scope -- Lexical scope stack for block-level name tracking

Frames are sets of declared names, innermost last. The stack is an
ordinary object owned by one analysis pass; nothing here is shared
across files or threads.
"""

from typing import Iterable, List, Set

from ..errors import ScopeStackError


ScopeFrame = Set[str]


class ScopeStack:
    """
    Ordered sequence of scope frames.

    Invariant: len(stack) equals the current block nesting depth plus
    the ambient frame seeded by reset().
    """

    def __init__(self):
        self._frames: List[ScopeFrame] = []

    def reset(self, ambient_names: Iterable[str] = ()) -> None:
        """Drop all frames and seed a single ambient frame."""
        self._frames = [set(ambient_names)]

    def push(self) -> None:
        """Open a new, empty innermost frame."""
        self._frames.append(set())

    def pop(self) -> ScopeFrame:
        """
        Close the innermost frame.

        Raises:
            ScopeStackError: If there is no frame to close
        """
        if not self._frames:
            raise ScopeStackError(
                "Scope stack underflow",
                details="exit event received without a matching enter",
            )
        return self._frames.pop()

    def declare(self, names: Iterable[str]) -> None:
        """
        Add names to the innermost frame. Redeclaration is allowed.

        Raises:
            ScopeStackError: If no frame is open
        """
        if not self._frames:
            raise ScopeStackError(
                "Cannot declare names on an empty scope stack",
                details="declaration seen before the program was entered",
            )
        self._frames[-1].update(names)

    def resolves(self, name: str) -> bool:
        """Check whether any open frame declares name, innermost first."""
        for frame in reversed(self._frames):
            if name in frame:
                return True
        return False

    @property
    def depth(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __contains__(self, name: str) -> bool:
        return self.resolves(name)
