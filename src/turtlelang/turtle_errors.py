"""
Error taxonomy for the turtle language front end.

Every failure raised while lexing or parsing is a `TurtleSyntaxError`, which is
itself a `SyntaxError`, so callers that only care about "the program is bad"
can catch the builtin. The subclasses name what went wrong:

    UnexpectedToken       a token of the wrong kind for the grammar position
    UnexpectedEndOfInput  the token stream ran out mid-construct
    UnmatchedCloser       `]` or `end` without a matching opener on the stack
    UnclosedBlock         `[` or `to` still open after all input was consumed
    LexError              strict lexing met a character no pattern accepts
    NestingTooDeep        blocks nested deeper than the interpreter stack allows
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from turtlelang.turtle_lexer import Token


class TurtleSyntaxError(SyntaxError):
    """Base class for turtle language errors.

    Attributes:
        message (str): Human-readable description without position prefix.
        token (Token | None): The offending token, when there is one.
        expected (str | None): The construct the grammar required.
        line (int): 1-based line of the offending token (0 if unknown).
        col (int): 1-based column of the offending token (0 if unknown).
    """

    def __init__(
        self,
        message: str,
        token: Token | None = None,
        expected: str | None = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        self.expected = expected
        self.line = token.line if token is not None else line
        self.col = token.col if token is not None else col

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.line:
            return f"{self.line}:{self.col}: {self.message}"
        return self.message


class UnexpectedToken(TurtleSyntaxError):
    pass


class UnexpectedEndOfInput(TurtleSyntaxError):
    pass


class UnmatchedCloser(TurtleSyntaxError):
    pass


class UnclosedBlock(TurtleSyntaxError):
    pass


class NestingTooDeep(TurtleSyntaxError):
    pass


class LexError(TurtleSyntaxError):
    pass


__all__ = [
    "LexError",
    "NestingTooDeep",
    "TurtleSyntaxError",
    "UnclosedBlock",
    "UnexpectedEndOfInput",
    "UnexpectedToken",
    "UnmatchedCloser",
]
