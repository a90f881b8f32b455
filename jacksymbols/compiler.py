"""Compile a directory of JACK files and check that every name is declared."""

from __future__ import annotations

import os
from typing import Iterator, Optional, Union

from jacksymbols.errors import ErrorKind, ParserInfo
from jacksymbols.lexer import Lexer
from jacksymbols.parser import Parser
from jacksymbols.symbols import Identifier, IdentifierStack, SpecialIdStack, SymbolTable

PathType = Union[str, "os.PathLike[str]"]


def _jack_files(directory: str) -> Iterator[str]:
    """Paths of the JACK source files in *directory*, in name order."""
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if ".jack" in name and os.path.isfile(path):
            yield path


class Compiler:
    """Parses JACK sources into one program scope and checks name use."""

    def __init__(self) -> None:
        self.program_scope = SymbolTable()
        self.identifiers = IdentifierStack()
        self.special_identifiers = SpecialIdStack()

    def _parse_file(self, path: str) -> ParserInfo:
        parser = Parser(
            Lexer(path),
            self.program_scope,
            self.identifiers,
            self.special_identifiers,
        )
        return parser.parse()

    def _parse_directory(self, directory: str, info: ParserInfo) -> ParserInfo:
        for path in _jack_files(directory):
            info = self._parse_file(path)
            if not info.ok():
                break
        return info

    def compile(self, dir_name: PathType) -> ParserInfo:
        """Parse the JACK files beside and inside *dir_name*, then check names.

        Files in the parent directory (libraries) are parsed first, then
        those in *dir_name*. An undeclared identifier overrides any other
        result. A directory that cannot be opened yields a lexer error.
        """
        directory = os.fspath(dir_name)
        parent = os.path.join(directory, os.pardir)
        if not (os.path.isdir(directory) and os.path.isdir(parent)):
            return ParserInfo(ErrorKind.LEXER_ERR)
        info = ParserInfo()
        info = self._parse_directory(parent, info)
        info = self._parse_directory(directory, info)
        undeclared = self.find_undeclared()
        if undeclared is not None:
            info = ParserInfo(ErrorKind.UNDEC_IDENTIFIER, undeclared.token)
        return info

    def _class_scope(self, position: int) -> Optional[SymbolTable]:
        children = self.program_scope.children
        return children[position] if position < len(children) else None

    def _has_member(self, class_position: int, name: str) -> bool:
        scope = self._class_scope(class_position)
        return scope is not None and scope.index(name) is not None

    def _declared_type(self, ident: Identifier) -> Optional[Identifier]:
        """The class type of a variable declared in ident's scope or above."""
        scope = ident.scope
        position = self.special_identifiers.index(ident.name, scope)
        while position is None and scope.parent is not None:
            scope = scope.parent
            position = self.special_identifiers.index(ident.name, scope)
        if position is None:
            return None
        return self.special_identifiers[position][1]

    def find_undeclared(self) -> Optional[Identifier]:
        """Return the first identifier used without a declaration, or None."""
        for row in self.identifiers:
            first, second = row[0], row[1]
            if first is None:
                continue
            in_scope = first.scope.index(first.name) is not None
            in_parents = first.scope.index_parents(first.name) is not None
            if not in_scope and not in_parents:
                return first
            if second is None:
                continue
            class_position = self.program_scope.index(first.name)
            if class_position is not None:
                if self._has_member(class_position, second.name):
                    continue
                return second
            type_ident = self._declared_type(first)
            if type_ident is None:
                return second
            class_position = self.program_scope.index(type_ident.name)
            if class_position is None:
                return type_ident
            if self._has_member(class_position, second.name):
                continue
            return second
        return None


def compile_directory(dir_name: PathType) -> ParserInfo:
    """Compile *dir_name* with a fresh compiler."""
    return Compiler().compile(dir_name)