from __future__ import annotations

from typing import Optional


UNMATCHED_BRACKETS_MESSAGE = (
    "Error: Unmatched square braces.",
    "Cannot continue.  Please review source.",
)


class BfJavaError(Exception):
    pass


class UsageError(BfJavaError, ValueError):
    pass


class MissingSource(BfJavaError, FileNotFoundError):
    """Raised when the Brainfuck source path does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Source file not found: {path}")
        self.path = path


class UnmatchedBrackets(BfJavaError):
    """Raised when the loop brackets of a program do not balance.

    ``position`` is the index of the ``]`` that closed more loops than were
    open, or ``None`` when the program ended with loops still open.
    """

    def __init__(self, depth: int, position: Optional[int] = None) -> None:
        if position is None:
            detail = f"{depth} loop(s) left open at end of program"
        else:
            detail = f"']' at position {position} has no matching '['"
        super().__init__(detail)
        self.depth = depth
        self.position = position

    @property
    def diagnostic(self) -> str:
        return "\n".join(UNMATCHED_BRACKETS_MESSAGE)


class ToolchainError(BfJavaError):
    pass


__all__ = [
    "BfJavaError",
    "MissingSource",
    "ToolchainError",
    "UNMATCHED_BRACKETS_MESSAGE",
    "UnmatchedBrackets",
    "UsageError",
]
