import pytest

from jacksymbols.errors import ErrorKind, ParserInfo, error_string
from jacksymbols.lexer import Token, TokenType


@pytest.mark.parametrize(
    "kind, message",
    [
        (ErrorKind.NONE, "no errors"),
        (ErrorKind.LEXER_ERR, "lexer error"),
        (ErrorKind.CLASS_EXPECTED, "keyword class expected"),
        (ErrorKind.ID_EXPECTED, "identifier expected"),
        (ErrorKind.OPEN_BRACE_EXPECTED, "{ expected"),
        (ErrorKind.CLOSE_BRACE_EXPECTED, "} expected"),
        (ErrorKind.SEMICOLON_EXPECTED, "; expected"),
        (ErrorKind.CLOSE_BRACKET_EXPECTED, "] expected"),
        (ErrorKind.EQUAL_EXPECTED, "= expected"),
        (ErrorKind.SYNTAX_ERROR, "syntax error"),
        (ErrorKind.UNDEC_IDENTIFIER, "undeclared identifier"),
        (ErrorKind.REDEC_IDENTIFIER, "redeclaration of identifier"),
    ],
)
def test_error_strings(kind, message):
    assert error_string(kind) == message


def test_no_lex_err_is_not_a_valid_code():
    assert error_string(ErrorKind.NO_LEX_ERR) == "not a valid error code"


def test_every_other_kind_has_its_own_message():
    kinds = [k for k in ErrorKind if k is not ErrorKind.NO_LEX_ERR]
    messages = {error_string(k) for k in kinds}
    assert len(messages) == len(kinds)
    assert "not a valid error code" not in messages


def test_error_kind_order_matches_messages():
    kinds = list(ErrorKind)
    assert error_string(kinds[0]) == "no errors"
    assert error_string(kinds[-1]) == "not a valid error code"
    assert kinds.index(ErrorKind.UNDEC_IDENTIFIER) < kinds.index(
        ErrorKind.REDEC_IDENTIFIER
    )


def test_default_parser_info_is_ok():
    info = ParserInfo()
    assert info.ok()
    assert info.token.type is TokenType.ERR
    assert info.token.lexeme == ""


def test_parser_info_with_error():
    tok = Token(TokenType.ID, "t", 8, "UNDECLAR_VAR/Main.jack")
    info = ParserInfo(ErrorKind.UNDEC_IDENTIFIER, tok)
    assert not info.ok()
    assert info.token is tok
    assert info.error is ErrorKind.UNDEC_IDENTIFIER


def test_default_tokens_are_independent_and_equal():
    first, second = ParserInfo(), ParserInfo()
    assert first == second
    first.error = ErrorKind.SYNTAX_ERROR
    assert second.ok()