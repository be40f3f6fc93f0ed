"""
Lexical analyzer for the turtle command language.

The lexer scans program text with a single regular expression
(`TOKEN_PATTERN`) and classifies every match into a `Token`:

    1. exact keyword (`forward`, `repeat`, `[`, `end`, `>` ...)
    2. user alias of a keyword, when an alias table is supplied
    3. signed 32-bit integer -> NUMBER
    4. text starting with `:` -> VAR
    5. anything else -> IDENT

Characters between matches are skipped. In strict mode a skipped character
that is not whitespace raises `LexError` instead.

Example:
    >>> [t.type for t in tokenize("repeat 4 [ forward :size ]")]
    ['REPEAT', 'NUMBER', 'LBRACKET', 'FORWARD', 'VAR', 'RBRACKET']

Exports:
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from turtlelang.turtle_constants import INT32_MAX, TOKEN_PATTERN, token_hashmap
from turtlelang.turtle_errors import LexError

if TYPE_CHECKING:  # pragma: no cover
    from turtlelang.turtle_aliases import KeywordAliases


class Token:
    """A single immutable lexical token.

    Attributes:
        type (str): Token type (e.g. 'FORWARD', 'NUMBER', 'VAR', 'EOF').
        value (str | int): Matched text; an int for NUMBER tokens.
        line (int): 1-based line where the token starts.
        col (int): 1-based column where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    def __init__(self, type_: str, value: str | int, line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set '{name}'")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


def is_int32(text: str) -> bool:
    """True if `text` is an ASCII digit run that fits a signed 32-bit integer."""
    return text.isascii() and text.isdigit() and int(text) <= INT32_MAX


class Lexer:
    """Turns program text into tokens, one `next_token()` call at a time.

    Attributes:
        source (str): The program text.
        strict (bool): Reject unrecognized non-whitespace characters.
        aliases (KeywordAliases | None): Optional alias table consulted for words.
        position (int): Offset of the next unread character.
        line (int): Current 1-based line.
        column (int): Current 1-based column.
    """

    def __init__(
        self,
        source: str,
        strict: bool = False,
        aliases: KeywordAliases | None = None,
    ) -> None:
        self.source = source
        self.strict = strict
        self.aliases = aliases
        self.position = 0
        self.line = 1
        self.column = 1

    def advance_to(self, offset: int, check: bool = False) -> None:
        """Moves the cursor to `offset`, keeping line and column in step.

        Raises:
            LexError: If `check` is set and a skipped character is not whitespace.
        """
        while self.position < offset:
            ch = self.source[self.position]
            if check and not ch.isspace():
                raise LexError(
                    f"Unrecognized character {ch!r}",
                    expected="token",
                    line=self.line,
                    col=self.column,
                )
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.position += 1

    def classify(self, text: str, line: int = 0, col: int = 0) -> Token:
        """Assigns a token type to one matched substring."""
        if text in token_hashmap:
            return Token(token_hashmap[text], text, line, col)
        if self.aliases is not None:
            keyword = self.aliases.resolve(text)
            if keyword is not None:
                return Token(token_hashmap[keyword], text, line, col)
        if is_int32(text):
            return Token("NUMBER", int(text), line, col)
        if text.startswith(":"):
            return Token("VAR", text, line, col)
        return Token("IDENT", text, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next token, or an EOF token at the end.

        Raises:
            LexError: In strict mode, on an unrecognized character.
        """
        match = TOKEN_PATTERN.search(self.source, self.position)
        gap_end = match.start() if match else len(self.source)
        self.advance_to(gap_end, check=self.strict)

        if match is None:
            return Token("EOF", "EOF", self.line, self.column)

        line, col = self.line, self.column
        self.advance_to(match.end())
        return self.classify(match.group(0), line, col)


def tokenize(
    source: str, strict: bool = False, aliases: KeywordAliases | None = None
) -> list[Token]:
    """Lexes the whole program, returning every token except the trailing EOF."""
    lexer = Lexer(source, strict=strict, aliases=aliases)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        if tok.type == "EOF":
            break
        tokens.append(tok)
    return tokens


__all__ = ["Lexer", "Token", "is_int32", "token_hashmap", "tokenize"]
