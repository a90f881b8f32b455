import pytest

from jacksymbols.errors import ErrorKind
from jacksymbols.lexer import Lexer, TokenType
from jacksymbols.parser import MAX_WHILE_STATEMENTS, Parser
from jacksymbols.symbols import IdentifierStack, Kind, SpecialIdStack, SymbolTable, Type


def run(tmp_path, source, scope=None, name="Main.jack"):
    path = tmp_path / name
    path.write_text(source)
    if scope is None:
        scope = SymbolTable()
    parser = Parser(Lexer(path), scope, IdentifierStack(), SpecialIdStack())
    return parser, parser.parse()


VALID = """class Main {
  field int x, y;
  static boolean flag;
  function void main(int a, char b) {
    var int i;
    let i = a + 1;
    if (i < 10) { let i = i + 1; } else { let i = 0; }
    while (i > 0) { let i = i - 1; }
    do Output.printInt(i);
    return;
  }
}
"""


def test_valid_program_has_no_error(tmp_path):
    _, info = run(tmp_path, VALID)
    assert info.ok()
    assert info.error is ErrorKind.NONE


def test_valid_program_builds_scopes(tmp_path):
    parser, _ = run(tmp_path, VALID)
    program = parser.program_scope
    main = program.get("Main")
    assert main.kind is Kind.CLASS
    assert main.type is Type.IDENTIFIER
    class_scope = program.children[0]
    assert class_scope.parent is program
    assert [s.name for s in class_scope] == ["x", "y", "flag", "main"]
    assert class_scope.get("x").kind is Kind.FIELD
    assert class_scope.get("x").type is Type.INTEGER
    assert class_scope.get("flag").kind is Kind.STATIC
    assert class_scope.get("flag").type is Type.BOOLEAN
    assert class_scope.get("main").kind is Kind.FUNCTION
    sub = class_scope.children[0]
    assert sub.parent is class_scope
    assert [s.name for s in sub] == ["a", "b", "i"]
    assert all(s.kind is Kind.VAR for s in sub)
    assert sub.get("b").type is Type.CHAR


def test_do_call_records_qualified_identifier(tmp_path):
    parser, _ = run(tmp_path, VALID)
    rows = [row for row in parser.identifiers if row[1] is not None]
    assert any(row[0].name == "Output" and row[1].name == "printInt" for row in rows)


def test_redeclared_field(tmp_path):
    source = "class A {\n  field int v;\n  field int v;\n}\n"
    _, info = run(tmp_path, source)
    assert info.error is ErrorKind.REDEC_IDENTIFIER
    assert info.token.lexeme == "v"
    assert info.token.line == 3


def test_redeclared_class_across_files(tmp_path):
    scope = SymbolTable()
    _, first = run(tmp_path, "class A {}\n", scope, "A.jack")
    _, second = run(tmp_path, "class A {}\n", scope, "B.jack")
    assert first.ok()
    assert second.error is ErrorKind.REDEC_IDENTIFIER
    assert second.token.lexeme == "A"
    assert len(scope) == 1


def test_class_expected(tmp_path):
    _, info = run(tmp_path, "foo bar\n")
    assert info.error is ErrorKind.CLASS_EXPECTED
    assert info.token.lexeme == "foo"


def test_empty_file_is_lexer_error(tmp_path):
    _, info = run(tmp_path, "")
    assert info.error is ErrorKind.LEXER_ERR
    assert info.token.type is TokenType.EOFILE


def test_illegal_symbol_first_is_lexer_error(tmp_path):
    _, info = run(tmp_path, "# class A {}\n")
    assert info.error is ErrorKind.LEXER_ERR
    assert info.token.type is TokenType.ERR


def test_missing_semicolon_after_field(tmp_path):
    _, info = run(tmp_path, "class A { field int x }\n")
    assert info.error is ErrorKind.SEMICOLON_EXPECTED
    assert info.token.lexeme == "}"


def test_bad_member(tmp_path):
    _, info = run(tmp_path, "class A { int x; }\n")
    assert info.error is ErrorKind.MEMBER_DECLAR_ERR
    assert info.token.lexeme == "int"


def test_illegal_type(tmp_path):
    _, info = run(tmp_path, "class A { field 5 x; }\n")
    assert info.error is ErrorKind.ILLEGAL_TYPE
    assert info.token.lexeme == "5"


def test_missing_close_brace(tmp_path):
    _, info = run(tmp_path, "class A { field int x;\n")
    assert info.error is ErrorKind.CLOSE_BRACE_EXPECTED
    assert info.token.type is TokenType.EOFILE


def body(statements):
    return "class A { function void f() { " + statements + " } }\n"


@pytest.mark.parametrize(
    "statements, kind, lexeme",
    [
        ("var int x; let x 1;", ErrorKind.EQUAL_EXPECTED, "1"),
        ("var int x; let x = ;", ErrorKind.SYNTAX_ERROR, ";"),
        ("return", ErrorKind.SEMICOLON_EXPECTED, "}"),
        ("if x) { }", ErrorKind.OPEN_PAREN_EXPECTED, "x"),
        ("while (1 { }", ErrorKind.CLOSE_PAREN_EXPECTED, "{"),
        ("do f(1) return;", ErrorKind.SEMICOLON_EXPECTED, "return"),
        ("var int x, 3;", ErrorKind.ID_EXPECTED, "3"),
    ],
)
def test_statement_errors(tmp_path, statements, kind, lexeme):
    _, info = run(tmp_path, body(statements))
    assert info.error is kind
    assert info.token.lexeme == lexeme


def test_redeclared_local(tmp_path):
    _, info = run(tmp_path, body("var int x; var char x;"))
    assert info.error is ErrorKind.REDEC_IDENTIFIER
    assert info.token.lexeme == "x"


def test_parameter_named_like_subroutine(tmp_path):
    _, info = run(tmp_path, "class A { function void f(int f) { return; } }\n")
    assert info.error is ErrorKind.REDEC_IDENTIFIER
    assert info.token.lexeme == "f"


def test_class_typed_variable_recorded(tmp_path):
    parser, info = run(tmp_path, body("var Foo thing; return;"))
    assert info.ok()
    rows = list(parser.special_identifiers)
    assert len(rows) == 1
    assert rows[0][0].name == "thing"
    assert rows[0][1].name == "Foo"
    sub = parser.program_scope.children[0].children[0]
    assert sub.get("thing").type is Type.IDENTIFIER


def test_while_body_limit(tmp_path):
    within = "let x = 1; " * MAX_WHILE_STATEMENTS
    beyond = "let x = 1; " * (MAX_WHILE_STATEMENTS + 1)
    _, ok = run(tmp_path, body("var int x; while (x) { " + within + "} return;"), name="A.jack")
    _, bad = run(tmp_path, body("var int x; while (x) { " + beyond + "} return;"), name="B.jack")
    assert ok.ok()
    assert bad.error is ErrorKind.SYNTAX_ERROR
    assert bad.token.lexeme == "x"


def test_top_level_statement_uses_program_scope(tmp_path):
    parser, info = run(tmp_path, "var int z;\n")
    assert info.ok()
    assert parser.program_scope.get("z").kind is Kind.VAR


def test_only_first_error_kept(tmp_path):
    parser, info = run(tmp_path, "class A { field int x }\nclass\n")
    assert info.error is ErrorKind.SEMICOLON_EXPECTED
    assert parser.failed is True


def test_identifiers_carry_scope(tmp_path):
    parser, _ = run(tmp_path, body("var int x; let x = y;"))
    sub = parser.program_scope.children[0].children[0]
    names = {row[0].name for row in parser.identifiers if row[0].scope is sub}
    assert {"x", "y"} <= names