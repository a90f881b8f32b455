"""Recursive-descent parser for JACK classes, declarations and statements.

While parsing, declared names go into scoped symbol tables and every
identifier met goes onto the identifier stacks, so that undeclared names
can be found once all files have been parsed.
"""

from __future__ import annotations

from typing import List

from jacksymbols.errors import ErrorKind, ParserInfo
from jacksymbols.expressions import ExpressionParser
from jacksymbols.lexer import TokenType
from jacksymbols.symbols import Kind, SymbolTable, Type, get_kind, get_type

_PRIMITIVE_TYPES = frozenset({"int", "char", "boolean"})
_CLASS_VAR_KINDS = frozenset({"static", "field"})
_SUBROUTINE_KINDS = frozenset({"constructor", "function", "method"})
_MEMBER_KEYWORDS = _CLASS_VAR_KINDS | _SUBROUTINE_KINDS
_STATEMENT_KEYWORDS = frozenset({"var", "let", "if", "while", "do", "return"})

# A while body is read for at most this many statements.
MAX_WHILE_STATEMENTS = 10


class Parser(ExpressionParser):
    """Parses one JACK source file into the shared program scope.

    Only the first error is kept; :meth:`parse` returns it as a
    :class:`ParserInfo`.
    """

    def __init__(self, lexer, program_scope, identifiers, special_identifiers) -> None:
        super().__init__(lexer, program_scope, identifiers, special_identifiers)
        self._names: List[str] = []

    def _push_name(self, name: str) -> None:
        self._names.append(name)

    def _pop_name(self) -> str:
        return self._names.pop() if self._names else ""

    def parse(self) -> ParserInfo:
        """Parse the whole file and return the first error found, if any."""
        token = self._peek()
        if token.type in (TokenType.ERR, TokenType.EOFILE):
            self.error(ErrorKind.LEXER_ERR, token)
            return self.info
        while not self.failed and self.info.error is ErrorKind.NONE:
            token = self._peek()
            if token.type is TokenType.EOFILE:
                break
            if token.type is TokenType.ERR:
                self.error(ErrorKind.LEXER_ERR, token)
                break
            if token.lexeme == "class":
                self.class_declar()
            elif token.lexeme in _MEMBER_KEYWORDS:
                self.member_declar(self.program_scope)
            elif token.lexeme in _STATEMENT_KEYWORDS:
                self.statement(self.program_scope)
            else:
                self.error(ErrorKind.CLASS_EXPECTED, token)
                break
        return self.info

    def class_declar(self) -> None:
        """class Name { member* }"""
        token = self._peek()
        if token.lexeme != "class":
            self.error(ErrorKind.CLASS_EXPECTED, token)
            return
        self._next()
        token = self._peek()
        if token.type is not TokenType.ID:
            self.error(ErrorKind.ID_EXPECTED, token)
            return
        if self.program_scope.index(token.lexeme) is not None:
            self.error(ErrorKind.REDEC_IDENTIFIER, token)
            return
        self.identifiers.push(token.lexeme, self.program_scope, token, 0, True)
        self._push_name(token.lexeme)
        self._next()
        token = self._peek()
        if token.lexeme != "{":
            self.error(ErrorKind.OPEN_BRACE_EXPECTED, token)
            return
        self._next()
        self.program_scope.insert(self._pop_name(), Type.IDENTIFIER, Kind.CLASS)
        class_scope = SymbolTable()
        self.program_scope.add_child(class_scope)
        while not self.failed:
            token = self._peek()
            if token.lexeme == "}":
                self._next()
                break
            if token.type is TokenType.EOFILE:
                self.error(ErrorKind.CLOSE_BRACE_EXPECTED, token)
                return
            self.member_declar(class_scope)

    def member_declar(self, scope: SymbolTable) -> None:
        """A class variable or a subroutine declaration."""
        token = self._peek()
        if token.lexeme in _CLASS_VAR_KINDS:
            self.class_var_declar(scope)
        elif token.lexeme in _SUBROUTINE_KINDS:
            self.subroutine_declar(scope)
        else:
            self.error(ErrorKind.MEMBER_DECLAR_ERR, token)

    def class_var_declar(self, scope: SymbolTable) -> None:
        """(static | field) type name {, name} ;"""
        token = self._peek()
        if token.lexeme not in _CLASS_VAR_KINDS:
            self.error(ErrorKind.MEMBER_DECLAR_ERR, token)
            return
        self._push_name(token.lexeme)
        self._next()
        self.type(scope)
        type_name = self._pop_name()
        kind_name = self._pop_name()
        while not self.failed:
            token = self._peek()
            if token.type is not TokenType.ID:
                self.error(ErrorKind.ID_EXPECTED, token)
                return
            self._next()
            if scope.index(token.lexeme) is not None:
                self.error(ErrorKind.REDEC_IDENTIFIER, token)
                return
            self.identifiers.push(token.lexeme, scope, token, 0, True)
            scope.insert(token.lexeme, get_type(type_name), get_kind(kind_name))
            token = self._peek()
            if token.lexeme == ",":
                self._next()
            else:
                break
        token = self._peek()
        if token.lexeme != ";":
            self.error(ErrorKind.SEMICOLON_EXPECTED, token)
            self._next()
            return
        self._next()

    def type(self, scope: SymbolTable) -> None:
        """int | char | boolean | ClassName; records class-typed names."""
        token = self._peek()
        if token.lexeme in _PRIMITIVE_TYPES:
            self._push_name(token.lexeme)
            self._next()
        elif token.type is TokenType.ID:
            self.identifiers.push(token.lexeme, scope, token, 0, True)
            self._push_name("identifier")
            self._next()
            type_token = token
            token = self._peek()
            if token.type is TokenType.ID:
                self.special_identifiers.push(token.lexeme, scope, token, 0)
                self.special_identifiers.push(type_token.lexeme, scope, type_token, 1)
        else:
            self.error(ErrorKind.ILLEGAL_TYPE, token)

    def subroutine_declar(self, scope: SymbolTable) -> None:
        """(constructor | function | method) (void | type) name ( params ) body"""
        token = self._peek()
        if token.lexeme not in _SUBROUTINE_KINDS:
            self.error(ErrorKind.SUBROUTINE_DECLAR_ERR, token)
            return
        self._push_name(token.lexeme)
        self._next()
        token = self._peek()
        if token.lexeme == "void":
            self._push_name(token.lexeme)
            self._next()
        else:
            self.type(scope)
        token = self._peek()
        if token.type is not TokenType.ID:
            self.error(ErrorKind.ID_EXPECTED, token)
            return
        name_token = token
        self._next()
        self._push_name(token.lexeme)
        token = self._peek()
        if token.lexeme != "(":
            self.error(ErrorKind.OPEN_PAREN_EXPECTED, token)
            return
        self._next()
        subroutine_scope = SymbolTable()
        scope.add_child(subroutine_scope)
        self.param_list(subroutine_scope)
        token = self._peek()
        if token.lexeme != ")":
            self.error(ErrorKind.CLOSE_PAREN_EXPECTED, token)
            return
        name = self._pop_name()
        type_name = self._pop_name()
        kind_name = self._pop_name()
        if subroutine_scope.index(name) is not None:
            self.error(ErrorKind.REDEC_IDENTIFIER, name_token)
            return
        self.identifiers.push(name, scope, name_token, 0, True)
        scope.insert(name, get_type(type_name), get_kind(kind_name))
        self._next()
        self.subroutine_body(subroutine_scope)

    def param_list(self, scope: SymbolTable) -> None:
        """Empty, or type name {, type name}."""
        token = self._peek()
        if token.lexeme == ")":
            return
        if token.lexeme == "{":
            self.error(ErrorKind.CLOSE_PAREN_EXPECTED, token)
            return
        while not self.failed:
            self.type(scope)
            token = self._peek()
            if token.type is not TokenType.ID:
                self.error(ErrorKind.ID_EXPECTED, token)
                return
            self._push_name(token.lexeme)
            if scope.index(token.lexeme) is not None:
                self.error(ErrorKind.REDEC_IDENTIFIER, token)
                return
            self.identifiers.push(token.lexeme, scope, token, 0, True)
            self._next()
            name = self._pop_name()
            type_name = self._pop_name()
            if scope.index(name) is not None and scope.index_parents(name) is not None:
                self.error(ErrorKind.REDEC_IDENTIFIER, token)
                return
            scope.insert(name, get_type(type_name), Kind.VAR)
            token = self._peek()
            if token.lexeme == ",":
                self._next()
            else:
                break

    def _block(self, scope: SymbolTable) -> None:
        """Statements up to and including the closing brace."""
        while not self.failed:
            token = self._peek()
            if token.lexeme == "}":
                self._next()
                break
            if token.type is TokenType.EOFILE:
                self.error(ErrorKind.CLOSE_BRACE_EXPECTED, token)
                return
            self.statement(scope)

    def subroutine_body(self, scope: SymbolTable) -> None:
        """{ statement* }"""
        token = self._peek()
        if token.lexeme != "{":
            self.error(ErrorKind.OPEN_BRACE_EXPECTED, token)
            return
        self._next()
        self._block(scope)

    def statement(self, scope: SymbolTable) -> None:
        """Dispatch on the statement keyword."""
        token = self._peek()
        handlers = {
            "let": self.let_statement,
            "if": self.if_statement,
            "while": self.while_statement,
            "do": self.do_statement,
            "return": self.return_statement,
            "var": self.var_declar_statement,
        }
        handler = handlers.get(token.lexeme)
        if handler is not None:
            handler(scope)
        elif self.info.error is ErrorKind.NONE:
            self.error(ErrorKind.SYNTAX_ERROR, token)

    def var_declar_statement(self, scope: SymbolTable) -> None:
        """var type name {, name} ;"""
        token = self._peek()
        if token.lexeme != "var":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        self.type(scope)
        type_name = self._pop_name()
        token = self._peek()
        if token.type is not TokenType.ID:
            self.error(ErrorKind.ID_EXPECTED, token)
            return
        self._push_name(token.lexeme)
        self.identifiers.push(token.lexeme, scope, token, 0, True)
        self._next()
        while not self.failed:
            name = self._pop_name()
            if scope.index(name) is not None:
                self.error(ErrorKind.REDEC_IDENTIFIER, token)
                return
            scope.insert(name, get_type(type_name), Kind.VAR)
            token = self._peek()
            if token.lexeme != ",":
                break
            self._next()
            token = self._peek()
            if token.type is not TokenType.ID:
                self.error(ErrorKind.ID_EXPECTED, token)
                return
            self._push_name(token.lexeme)
            self.identifiers.push(token.lexeme, scope, token, 0, True)
            self._next()
        if token.lexeme != ";":
            self.error(ErrorKind.SEMICOLON_EXPECTED, token)
            self._next()
            return
        self._next()

    def let_statement(self, scope: SymbolTable) -> None:
        """let name [ [expression] ] = expression ;"""
        token = self._peek()
        if token.lexeme != "let":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        token = self._peek()
        if token.type is not TokenType.ID:
            self.error(ErrorKind.ID_EXPECTED, token)
            return
        self.identifiers.push(token.lexeme, scope, token, 0, True)
        self._next()
        token = self._peek()
        if token.lexeme == "[":
            self._next()
            self.expression(scope)
            token = self._peek()
            if token.lexeme != "]":
                self.error(ErrorKind.CLOSE_BRACKET_EXPECTED, token)
                return
            self._next()
            token = self._peek()
        if token.lexeme != "=":
            self.error(ErrorKind.EQUAL_EXPECTED, token)
            return
        self._next()
        token = self._peek()
        if token.lexeme == ";":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self.expression(scope)
        token = self._peek()
        if token.lexeme != ";":
            self.error(ErrorKind.SEMICOLON_EXPECTED, token)
            self._next()
            return
        self._next()

    def _condition(self, scope: SymbolTable) -> bool:
        """( expression ) {  -- consumes through the opening brace."""
        token = self._peek()
        if token.lexeme != "(":
            self.error(ErrorKind.OPEN_PAREN_EXPECTED, token)
            return False
        self._next()
        self.expression(scope)
        token = self._peek()
        if token.lexeme != ")":
            self.error(ErrorKind.CLOSE_PAREN_EXPECTED, token)
            return False
        self._next()
        token = self._peek()
        if token.lexeme != "{":
            self.error(ErrorKind.OPEN_BRACE_EXPECTED, token)
            return False
        self._next()
        return True

    def if_statement(self, scope: SymbolTable) -> None:
        """if ( expression ) { statement* } [else { statement* }]"""
        token = self._peek()
        if token.lexeme != "if":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        if not self._condition(scope):
            return
        self._block(scope)
        if self._peek().lexeme == "else":
            self._next()
            token = self._peek()
            if token.lexeme != "{":
                self.error(ErrorKind.OPEN_BRACE_EXPECTED, token)
                return
            self._next()
            self._block(scope)

    def while_statement(self, scope: SymbolTable) -> None:
        """while ( expression ) { statement* }"""
        token = self._peek()
        if token.lexeme != "while":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        if not self._condition(scope):
            return
        token = self._peek()
        count = 0
        while token.lexeme != "}" and count < MAX_WHILE_STATEMENTS:
            if self.failed:
                break
            if token.type is TokenType.EOFILE:
                self.error(ErrorKind.CLOSE_BRACE_EXPECTED, token)
                return
            self.statement(scope)
            token = self._peek()
            count += 1
        self._next()

    def do_statement(self, scope: SymbolTable) -> None:
        """do subroutineCall ;"""
        token = self._peek()
        if token.lexeme != "do":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        self.subroutine_call(scope)
        token = self._peek()
        if token.lexeme != ";":
            self.error(ErrorKind.SEMICOLON_EXPECTED, token)
            return
        self._next()

    def return_statement(self, scope: SymbolTable) -> None:
        """return [expression] ;"""
        token = self._peek()
        if token.lexeme != "return":
            self.error(ErrorKind.SYNTAX_ERROR, token)
            return
        self._next()
        token = self._peek()
        if token.lexeme == ";":
            self._next()
        elif token.lexeme == "}" or token.type is TokenType.EOFILE:
            self.error(ErrorKind.SEMICOLON_EXPECTED, token)
        else:
            self.expression(scope)
            token = self._next()
            if token.lexeme != ";":
                self.error(ErrorKind.SEMICOLON_EXPECTED, token)
                self._next()