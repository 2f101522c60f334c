"""
Lexical analyzer for the minipas teaching language.

This module provides core components for converting raw source text into a lazy
stream of classified tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single immutable token with kind, text, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens, one call at a time.

Features:
    - Strips a leading byte-order mark before scanning
    - Skips whitespace and brace-delimited comments (`{ ... }`)
    - Recognizes:
        * Identifiers and keywords (case-sensitive)
        * Unsigned integer literals
        * Single-character operators and punctuation
        * Two-character operators `:=`, `<=`, `<>`, `>=`, `!=`

The lexer never raises on source content. Characters it cannot classify come back
as `UNKNOWN` tokens and are rejected later by the parser. An unterminated comment
simply runs to the end of input.

Example:
    >>> lexer = Lexer(CharacterStream("x := 42"))
    >>> lexer.next_token()
    Token(ID, x)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - keyword_map
"""

import logging
import string
from collections.abc import Iterator
from typing import Any

from minipas.minipas_constants import (
    ASSIGN,
    BOM,
    EOF,
    ID,
    NUM,
    RELOP,
    UNKNOWN,
    keyword_map,
    relational_operators,
    single_char_tokens,
)

log = logging.getLogger(__name__)

LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
IDENT_CHARS = LETTERS | DIGITS | {"_"}


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    A byte-order mark at the very start of the source is dropped on construction,
    so it never shows up in token text or shifts reported columns.

    Attributes:
        source (str): The input source string, without a leading BOM.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        if source.startswith(BOM):
            source = source[len(BOM) :]
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns an empty string when the offset falls outside the source.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token of a minipas program.

    Tokens are immutable: the lexer creates them and nothing else may change them.

    Attributes:
        kind (str): The token kind (e.g. 'ID', 'NUM', 'RELOP', 'EOF').
        text (str): The literal source text of the token ('' for EOF).
        line (int): The 1-based line number of the token's first character.
        col (int): The 1-based column number of the token's first character.
    """

    __slots__ = ("kind", "text", "line", "col")

    kind: str
    text: str
    line: int
    col: int

    def __init__(self, kind: str, text: str, line: int = 0, col: int = 0):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "text", text)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.text})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.text == other.text
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.line, self.col))


class Lexer:
    """Lexical analyzer for minipas.

    The Lexer pulls characters from a CharacterStream and hands out one Token per
    `next_token()` call. Once the input is exhausted every further call returns an
    EOF token at the end-of-input position.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens lazily, ending with (and including) the first EOF token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == EOF:
                return

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == "{":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances past a `{ ... }` comment, closing brace included.

        A comment left open at end of input is not an error; scanning just stops.
        """
        line, col = self.stream.line, self.stream.column
        self.advance()  # {
        while not self.stream.end_of_file() and self.peek() != "}":
            self.advance()
        if self.stream.end_of_file():
            log.debug("Unterminated comment opened at line %d, col %d", line, col)
        else:
            self.advance()  # }

    def match_operator(self, line: int, col: int) -> Token:
        """Matches an operator or punctuation character, looking one character ahead
        for the two-character forms.

        Characters that start no known operator yield an UNKNOWN token.
        """
        ch = self.advance()

        if ch in single_char_tokens:
            return Token(single_char_tokens[ch], ch, line, col)

        nxt = self.peek()
        if ch == ":":
            if nxt == "=":
                self.advance()
                return Token(ASSIGN, ":=", line, col)
            return Token(UNKNOWN, ch, line, col)
        if nxt and ch + nxt in relational_operators:
            self.advance()
            return Token(RELOP, ch + nxt, line, col)
        if ch in relational_operators:
            return Token(RELOP, ch, line, col)

        return Token(UNKNOWN, ch, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; EOF (with empty text) once the input is exhausted.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch in LETTERS:
            ident = ""
            while not self.stream.end_of_file() and self.peek() in IDENT_CHARS:
                ident += self.advance()
            return Token(keyword_map.get(ident, ID), ident, line, col)

        # 2. Unsigned integer
        if ch in DIGITS:
            num = ""
            while not self.stream.end_of_file() and self.peek() in DIGITS:
                num += self.advance()
            return Token(NUM, num, line, col)

        # 3. Operators, punctuation, anything else
        return self.match_operator(line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes a whole source string, returning every token up to and including EOF."""
    return list(Lexer(CharacterStream(source)))


__all__ = ["CharacterStream", "Lexer", "Token", "keyword_map", "tokenize"]
