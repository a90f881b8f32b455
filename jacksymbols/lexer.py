"""Tokeniser for JACK source files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import List, Optional, Union

KEYWORDS = frozenset(
    {
        "class", "constructor", "method", "function", "int", "boolean",
        "char", "void", "var", "static", "field", "let", "do", "if",
        "else", "while", "return", "true", "false", "null", "this",
    }
)

SYMBOLS = frozenset("{}()[].,;+-*/&|<>=~")

# Characters the C locale treats as white space.
_SPACE = frozenset(" \t\n\v\f\r")
_MAX_LEXEME = 127

EOF_LEXEME = "End of file"
EOF_IN_COMMENT_MESSAGE = "Error: unexpected eof in comment"
EOF_IN_STRING_MESSAGE = "Error: unexpected eof in string constant"
NEW_LINE_IN_STRING_MESSAGE = "Error: new line in string constant"
ILLEGAL_SYMBOL_MESSAGE = "Error: illegal symbol in source file"


class TokenType(Enum):
    """Kinds of token found in a JACK program; ERR marks a lexical error."""

    RESWORD = 0
    ID = 1
    INT = 2
    SYMBOL = 3
    STRING = 4
    EOFILE = 5
    ERR = 6


class LexError(Enum):
    """Lexical error codes carried by ERR tokens."""

    EOF_IN_COMMENT = 0
    NEW_LINE_IN_STRING = 1
    EOF_IN_STRING = 2
    ILLEGAL_SYMBOL = 3


@dataclass(frozen=True)
class Token:
    """A single token; for errors the lexeme holds the error message."""

    type: TokenType
    lexeme: str
    line: int
    file: str
    error: Optional[LexError] = None


def is_keyword(word: str) -> bool:
    """Return True if *word* is a JACK reserved word."""
    return word in KEYWORDS


def _is_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_digit(c: str) -> bool:
    return c.isascii() and c.isdigit()


class _Scanner:
    """Character-level reader that builds one token at a time."""

    def __init__(self, text: str, filename: str) -> None:
        self.text = text
        self.filename = filename
        self.pos = 0
        self.line = 1

    def getc(self) -> str:
        if self.pos >= len(self.text):
            return ""
        c = self.text[self.pos]
        self.pos += 1
        return c

    def ungetc(self, c: str) -> None:
        if c:
            self.pos -= 1

    def skip_blank(self) -> Optional[str]:
        """Skip white space and comments.

        Returns the next significant character, "" at end of input, or
        None when the input ends inside a comment.
        """
        c = self.getc()
        while c:
            if c == "\n":
                self.line += 1
            if c == "/":
                c = self.getc()
                if c == "/":
                    while c != "\n":
                        if not c:
                            return None
                        c = self.getc()
                    self.line += 1
                elif c == "*":
                    while True:
                        c = self.getc()
                        if not c:
                            return None
                        if c == "*":
                            if self.getc() == "/":
                                break
                        elif c == "\n":
                            self.line += 1
                else:
                    self.ungetc(c)
                    return "/"
            elif c not in _SPACE:
                return c
            c = self.getc()
        return ""

    def token(self, kind: TokenType, lexeme: str,
              error: Optional[LexError] = None) -> Token:
        return Token(kind, lexeme[:_MAX_LEXEME], self.line, self.filename, error)

    def error(self, code: LexError, message: str) -> Token:
        return self.token(TokenType.ERR, message, code)

    def read_while(self, first: str, accept) -> str:
        chars = []
        c = first
        while c and accept(c):
            chars.append(c)
            c = self.getc()
        self.ungetc(c)
        return "".join(chars)

    def next(self) -> Token:
        c = self.skip_blank()
        if c == "":
            return self.token(TokenType.EOFILE, EOF_LEXEME)
        if c is None or c == "\0":
            return self.error(LexError.EOF_IN_COMMENT, EOF_IN_COMMENT_MESSAGE)
        if c == '"':
            chars = []
            c = self.getc()
            while c != '"':
                chars.append(c)
                c = self.getc()
                if not c:
                    return self.error(LexError.EOF_IN_STRING, EOF_IN_STRING_MESSAGE)
                if c == "\n":
                    return self.error(
                        LexError.NEW_LINE_IN_STRING, NEW_LINE_IN_STRING_MESSAGE
                    )
            return self.token(TokenType.STRING, "".join(chars))
        if _is_alpha(c) or c == "_":
            word = self.read_while(c, lambda ch: _is_alnum(ch) or ch == "_")
            kind = TokenType.RESWORD if is_keyword(word) else TokenType.ID
            return self.token(kind, word)
        if _is_digit(c):
            return self.token(TokenType.INT, self.read_while(c, _is_digit))
        if c in SYMBOLS:
            return self.token(TokenType.SYMBOL, c)
        return self.error(LexError.ILLEGAL_SYMBOL, ILLEGAL_SYMBOL_MESSAGE)


def tokenize(text: str, filename: str = "") -> List[Token]:
    """Split *text* into tokens; the list always ends with an EOFILE token."""
    scanner = _Scanner(text, filename)
    tokens = []
    while True:
        tok = scanner.next()
        tokens.append(tok)
        if tok.type is TokenType.EOFILE:
            return tokens


class Lexer:
    """Token stream over one JACK source file, read in full on creation."""

    def __init__(self, path: Union[str, "PathLike[str]"]) -> None:
        self.filename = str(path)
        with open(path, encoding="latin-1", newline="") as handle:
            text = handle.read()
        self.tokens: List[Token] = tokenize(text, self.filename)
        self._position = 0

    def _current(self) -> Token:
        if self._position < len(self.tokens):
            return self.tokens[self._position]
        return self.tokens[-1]

    def next_token(self) -> Token:
        """Return the next token and move past it; EOFILE repeats at the end."""
        tok = self._current()
        if self._position < len(self.tokens):
            self._position += 1
        return tok

    def peek_token(self) -> Token:
        """Return the next token without consuming it."""
        return self._current()