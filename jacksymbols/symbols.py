"""Scoped symbol tables and the identifier stacks used for name checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional

from jacksymbols.lexer import Token

MAX_SYMBOLS = 1280
MAX_CHILDREN = 128
MAX_IDENTIFIERS = 1280
ROW_SLOTS = 3


class Kind(Enum):
    """The kind of a declared symbol."""

    STATIC = 0
    FIELD = 1
    ARG = 2
    VAR = 3
    METHOD = 4
    FUNCTION = 5
    CONSTRUCTOR = 6
    CLASS = 7


class Type(Enum):
    """The type of a declared symbol."""

    INTEGER = 0
    CHAR = 1
    BOOLEAN = 2
    ARRAY = 3
    IDENTIFIER = 4


_TYPE_NAMES = {
    "int": Type.INTEGER,
    "char": Type.CHAR,
    "boolean": Type.BOOLEAN,
    "identifier": Type.IDENTIFIER,
}

_KIND_NAMES = {
    "static": Kind.STATIC,
    "field": Kind.FIELD,
    "arg": Kind.ARG,
    "var": Kind.VAR,
    "method": Kind.METHOD,
    "function": Kind.FUNCTION,
    "constructor": Kind.CONSTRUCTOR,
    "class": Kind.CLASS,
}


def get_type(name: str) -> Type:
    """Map a type keyword to a Type; anything unknown is an IDENTIFIER."""
    return _TYPE_NAMES.get(name, Type.IDENTIFIER)


def get_kind(name: str) -> Kind:
    """Map a kind keyword to a Kind; anything unknown is a CLASS."""
    return _KIND_NAMES.get(name, Kind.CLASS)


@dataclass
class Symbol:
    """A declared name with its type and kind."""

    name: str
    type: Type
    kind: Kind
    calls: int = 0


class SymbolTable:
    """One scope: its own symbols, a parent scope and nested child scopes."""

    def __init__(self) -> None:
        self.symbols: List[Symbol] = []
        self.parent: Optional[SymbolTable] = None
        self.children: List[SymbolTable] = []

    def __len__(self) -> int:
        return len(self.symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self.symbols)
        return f"SymbolTable([{names}], children={len(self.children)})"

    def insert(self, name: str, type: Type, kind: Kind) -> Symbol:
        """Add a symbol to this scope and return it."""
        if len(self.symbols) >= MAX_SYMBOLS:
            raise OverflowError("Symbol table is full. Cannot insert new symbol.")
        symbol = Symbol(name, type, kind)
        self.symbols.append(symbol)
        return symbol

    def index(self, name: str) -> Optional[int]:
        """Position of *name* in this scope only, or None."""
        for position, symbol in enumerate(self.symbols):
            if symbol.name == name:
                return position
        return None

    def index_parents(self, name: str) -> Optional[int]:
        """Position of *name* in the nearest enclosing scope holding it, or None."""
        scope = self.parent
        while scope is not None:
            position = scope.index(name)
            if position is not None:
                return position
            scope = scope.parent
        return None

    def index_children(self, name: str) -> Optional[int]:
        """Index of the first child whose subtree declares *name*, or None."""
        for position, child in enumerate(self.children):
            if child.index(name) is not None or child.index_children(name) is not None:
                return position
        return None

    def locate(self, name: str) -> bool:
        """True if *name* is declared here, in an ancestor or in a descendant."""
        return (
            self.index(name) is not None
            or self.index_parents(name) is not None
            or self.index_children(name) is not None
        )

    def get(self, name: str) -> Optional[Symbol]:
        """The symbol called *name* in this scope only, or None."""
        position = self.index(name)
        return None if position is None else self.symbols[position]

    def get_global(self, name: str) -> Optional[Symbol]:
        """Find *name* here, then among ancestors, then among descendants."""
        position = self.index(name)
        if position is not None:
            return self.symbols[position]
        if self.index_parents(name) is not None:
            return self.parent.get_global(name)
        child = self.index_children(name)
        if child is not None:
            return self.children[child].get_global(name)
        return None

    def table_of(self, symbol: Symbol) -> Optional[SymbolTable]:
        """The scope, this one or an ancestor, that holds this very symbol."""
        scope: Optional[SymbolTable] = self
        while scope is not None:
            if any(entry is symbol for entry in scope.symbols):
                return scope
            scope = scope.parent
        return None

    def add_child(self, child: SymbolTable) -> None:
        """Nest *child* in this scope; ignored once the child limit is reached."""
        if len(self.children) >= MAX_CHILDREN:
            return
        self.children.append(child)
        child.parent = self

    def dump(self) -> str:
        """Text listing of this scope and, recursively, its children."""
        lines = [
            f"Name: {s.name}, Type: {s.type.value}, Kind: {s.kind.value}\n"
            for s in self.symbols
        ]
        for position, child in enumerate(self.children):
            lines.append(f"Child Table {position}:\n")
            lines.append(child.dump())
        return "".join(lines)


@dataclass(eq=False)
class Identifier:
    """A use or declaration of a name, the scope it appears in and its token."""

    name: str
    scope: SymbolTable
    token: Token


@dataclass
class _RowStack:
    """Stack of rows; each row holds a name and optional qualifying names."""

    rows: List[List[Optional[Identifier]]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[List[Optional[Identifier]]]:
        return iter(self.rows)

    def __getitem__(self, position: int) -> List[Optional[Identifier]]:
        return self.rows[position]

    def _store(self, identifier: Identifier, slot: int) -> None:
        if slot == 0:
            self.rows.append([None] * ROW_SLOTS)
        elif not self.rows:
            raise IndexError("no row to attach the identifier to")
        self.rows[-1][slot] = identifier

    def _find(self, name: str, scope: SymbolTable) -> Optional[int]:
        for position, row in enumerate(self.rows):
            first = row[0]
            if first is not None and first.name == name and first.scope is scope:
                return position
        return None


class IdentifierStack(_RowStack):
    """Every identifier met while parsing, with its scope and token."""

    def push(self, name: str, scope: SymbolTable, token: Token,
             slot: int, check: bool) -> None:
        """Record *name*; slot 0 starts a new row, other slots fill the top row.

        When *check* is false, a name already recorded for the same scope
        is skipped.
        """
        if len(self.rows) >= MAX_IDENTIFIERS:
            raise OverflowError("Identifier stack overflow. Cannot push new identifier.")
        if not check and self.index(name, scope) is not None:
            return
        self._store(Identifier(name, scope, token), slot)

    def pop(self, slot: int) -> Optional[Identifier]:
        """Remove the top row and return what it held in *slot*."""
        if not self.rows:
            raise IndexError("Identifier stack underflow. Cannot pop identifier.")
        return self.rows.pop()[slot]

    def index(self, name: str, scope: SymbolTable) -> Optional[int]:
        """Row whose first name is *name* used in exactly *scope*, or None."""
        return self._find(name, scope)


class SpecialIdStack(_RowStack):
    """Variables declared with a class type: row slot 0 the name, 1 the type."""

    def push(self, name: str, scope: SymbolTable, token: Token, slot: int) -> None:
        """Record *name*; slot 0 starts a new row, other slots fill the top row."""
        if len(self.rows) >= MAX_IDENTIFIERS:
            raise OverflowError(
                "Special identifier stack overflow. Cannot push new identifier."
            )
        self._store(Identifier(name, scope, token), slot)

    def index(self, name: str, scope: SymbolTable) -> Optional[int]:
        """Row whose first name is *name* declared in exactly *scope*, or None."""
        return self._find(name, scope)