"""Recursive-descent parsing of JACK expressions and subroutine calls."""

from __future__ import annotations

from jacksymbols.errors import ErrorKind, ParserInfo
from jacksymbols.lexer import Token, TokenType
from jacksymbols.symbols import IdentifierStack, SpecialIdStack, SymbolTable

_OPERAND_TYPES = frozenset(
    {TokenType.INT, TokenType.ID, TokenType.STRING, TokenType.SYMBOL, TokenType.RESWORD}
)
_KEYWORD_CONSTANTS = frozenset({"true", "false", "null", "this"})


class ExpressionParser:
    """Parses expressions, recording every identifier it meets.

    Only the first error is kept; once one is recorded the parsing loops
    stop early and later errors are ignored.
    """

    def __init__(self, lexer, program_scope: SymbolTable,
                 identifiers: IdentifierStack,
                 special_identifiers: SpecialIdStack) -> None:
        self.lexer = lexer
        self.program_scope = program_scope
        self.identifiers = identifiers
        self.special_identifiers = special_identifiers
        self.info = ParserInfo()
        self.failed = False

    def error(self, kind: ErrorKind, token: Token) -> None:
        """Record an error at *token* unless one has already been recorded."""
        if self.failed:
            return
        self.info.error = kind
        self.info.token = token
        self.failed = True

    def _peek(self) -> Token:
        return self.lexer.peek_token()

    def _next(self) -> Token:
        return self.lexer.next_token()

    def _binary(self, operand, operators: frozenset, scope: SymbolTable) -> None:
        operand(scope)
        while not self.failed:
            if self._peek().lexeme in operators:
                self._next()
                operand(scope)
            else:
                break

    def expression(self, scope: SymbolTable) -> None:
        """expression: relational {(& | |) relational}."""
        self._binary(self.relational_expression, frozenset("&|"), scope)

    def relational_expression(self, scope: SymbolTable) -> None:
        """relational: arithmetic {(< | > | =) arithmetic}."""
        self._binary(self.arithmetic_expression, frozenset("<>="), scope)

    def arithmetic_expression(self, scope: SymbolTable) -> None:
        """arithmetic: term {(+ | -) term}."""
        self._binary(self.term, frozenset("+-"), scope)

    def term(self, scope: SymbolTable) -> None:
        """term: factor {(* | /) factor}."""
        self._binary(self.factor, frozenset("*/"), scope)

    def factor(self, scope: SymbolTable) -> None:
        """factor: [- | ~] operand."""
        token = self._peek()
        if token.lexeme in ("-", "~"):
            self._next()
            self.operand(scope)
        elif token.type in _OPERAND_TYPES:
            self.operand(scope)
        else:
            self.error(ErrorKind.SYNTAX_ERROR, token)

    def _expect(self, lexeme: str, kind: ErrorKind) -> bool:
        token = self._next()
        if token.lexeme != lexeme:
            self.error(kind, token)
            return False
        return True

    def operand(self, scope: SymbolTable) -> None:
        """Parse a constant, a name with optional member, index or call, or (expression)."""
        token = self._peek()
        if token.type is TokenType.INT:
            self._next()
        elif token.type is TokenType.ID:
            name_token = token
            self._next()
            token = self._peek()
            self.identifiers.push(name_token.lexeme, scope, name_token, 0,
                                  token.lexeme == ".")
            if token.type is not TokenType.SYMBOL:
                return
            if token.lexeme == "[":
                self._next()
                self.expression(scope)
                self._expect("]", ErrorKind.CLOSE_BRACKET_EXPECTED)
            elif token.lexeme == "(":
                self._next()
                self.expression_list(scope)
                self._expect(")", ErrorKind.CLOSE_BRACKET_EXPECTED)
            elif token.lexeme == ".":
                self._next()
                token = self._next()
                if token.type is not TokenType.ID:
                    self.error(ErrorKind.ID_EXPECTED, token)
                    return
                self.identifiers.push(token.lexeme, scope, token, 1, False)
                token = self._peek()
                if token.lexeme == "(":
                    self._next()
                    self.expression_list(scope)
                    self._expect(")", ErrorKind.CLOSE_BRACKET_EXPECTED)
                elif token.lexeme == "[":
                    self._next()
                    self.expression(scope)
                    self._expect("]", ErrorKind.CLOSE_BRACKET_EXPECTED)
        elif token.type is TokenType.SYMBOL:
            self._next()
            if token.lexeme == "(":
                self.expression(scope)
                self._expect(")", ErrorKind.CLOSE_PAREN_EXPECTED)
        elif token.type is TokenType.STRING:
            self._next()
        elif token.type is TokenType.RESWORD:
            if token.lexeme in _KEYWORD_CONSTANTS:
                self._next()
        else:
            self.error(ErrorKind.SYNTAX_ERROR, token)

    def expression_list(self, scope: SymbolTable) -> None:
        """Parse zero or more comma-separated expressions ending before ')'."""
        if self._peek().lexeme == ")":
            return
        self.expression(scope)
        while not self.failed:
            if self._peek().lexeme == ",":
                self._next()
                self.expression(scope)
            else:
                break

    def subroutine_call(self, scope: SymbolTable) -> None:
        """Parse name(args) or name.name(args)."""
        token = self._peek()
        if token.type is not TokenType.ID:
            self.error(ErrorKind.ID_EXPECTED, token)
            return
        self.identifiers.push(token.lexeme, scope, token, 0, True)
        self._next()
        token = self._peek()
        if token.lexeme == "(":
            self._next()
            self.expression_list(scope)
            self._expect(")", ErrorKind.CLOSE_PAREN_EXPECTED)
        elif token.lexeme == ".":
            self._next()
            token = self._next()
            if token.type is not TokenType.ID:
                self.error(ErrorKind.ID_EXPECTED, token)
                return
            self.identifiers.push(token.lexeme, scope, token, 1, True)
            token = self._peek()
            if token.lexeme == "(":
                self._next()
                self.expression_list(scope)
                self._expect(")", ErrorKind.CLOSE_PAREN_EXPECTED)
            else:
                self.error(ErrorKind.OPEN_PAREN_EXPECTED, token)