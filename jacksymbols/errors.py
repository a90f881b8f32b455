"""Parser error kinds and the result record returned by parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from jacksymbols.lexer import Token, TokenType


class ErrorKind(Enum):
    """Syntax and semantic errors the parser can report."""

    NONE = 0
    LEXER_ERR = 1
    CLASS_EXPECTED = 2
    ID_EXPECTED = 3
    OPEN_BRACE_EXPECTED = 4
    CLOSE_BRACE_EXPECTED = 5
    MEMBER_DECLAR_ERR = 6
    CLASS_VAR_ERR = 7
    ILLEGAL_TYPE = 8
    SEMICOLON_EXPECTED = 9
    SUBROUTINE_DECLAR_ERR = 10
    OPEN_PAREN_EXPECTED = 11
    CLOSE_PAREN_EXPECTED = 12
    CLOSE_BRACKET_EXPECTED = 13
    EQUAL_EXPECTED = 14
    SYNTAX_ERROR = 15
    UNDEC_IDENTIFIER = 16
    REDEC_IDENTIFIER = 17
    NO_LEX_ERR = 18


_MESSAGES = {
    ErrorKind.NONE: "no errors",
    ErrorKind.LEXER_ERR: "lexer error",
    ErrorKind.CLASS_EXPECTED: "keyword class expected",
    ErrorKind.ID_EXPECTED: "identifier expected",
    ErrorKind.OPEN_BRACE_EXPECTED: "{ expected",
    ErrorKind.CLOSE_BRACE_EXPECTED: "} expected",
    ErrorKind.MEMBER_DECLAR_ERR: (
        "class member declaration must begin with static, field, "
        "constructor , function , or method"
    ),
    ErrorKind.CLASS_VAR_ERR: "class variables must begin with field or static",
    ErrorKind.ILLEGAL_TYPE: "a type must be int, char, boolean, or identifier",
    ErrorKind.SEMICOLON_EXPECTED: "; expected",
    ErrorKind.SUBROUTINE_DECLAR_ERR: (
        "subrouting declaration must begin with constructor, function, or method"
    ),
    ErrorKind.OPEN_PAREN_EXPECTED: "( expected",
    ErrorKind.CLOSE_PAREN_EXPECTED: ") expected",
    ErrorKind.CLOSE_BRACKET_EXPECTED: "] expected",
    ErrorKind.EQUAL_EXPECTED: "= expected",
    ErrorKind.SYNTAX_ERROR: "syntax error",
    ErrorKind.UNDEC_IDENTIFIER: "undeclared identifier",
    ErrorKind.REDEC_IDENTIFIER: "redeclaration of identifier",
}

INVALID_ERROR_MESSAGE = "not a valid error code"


def error_string(kind: ErrorKind) -> str:
    """Return the human-readable description of an error kind."""
    return _MESSAGES.get(kind, INVALID_ERROR_MESSAGE)


def _blank_token() -> Token:
    return Token(TokenType.ERR, "", 0, "")


@dataclass
class ParserInfo:
    """Outcome of parsing: the error found and the token at or near it."""

    error: ErrorKind = ErrorKind.NONE
    token: Token = field(default_factory=_blank_token)

    def ok(self) -> bool:
        """Return True when no error was recorded."""
        return self.error is ErrorKind.NONE