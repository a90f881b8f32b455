from pathlib import Path

from jacksymbols.compiler import Compiler, compile_directory
from jacksymbols.errors import ErrorKind
from jacksymbols.lexer import TokenType


def write(directory: Path, name: str, lines):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text("\n".join(lines) + "\n")


def main_class(body):
    return [
        "class Main {",
        "  function void main() {",
        *body,
        "    return;",
        "  }",
        "}",
    ]


OTHER = [
    "class Other {",
    "  function void run() {",
    "    return;",
    "  }",
    "}",
]


def test_valid_program_has_no_errors(tmp_path):
    write(tmp_path / "prog", "Main.jack", main_class(["    var int x;", "    let x = 1;"]))
    info = compile_directory(tmp_path / "prog")
    assert info.ok()
    assert info.error is ErrorKind.NONE


def test_undeclared_variable(tmp_path):
    write(tmp_path / "prog", "Main.jack", main_class(["    var int x;", "    let y = 1;"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.UNDEC_IDENTIFIER
    assert info.token.lexeme == "y"
    assert info.token.line == 4
    assert info.token.type is TokenType.ID
    assert info.token.file.endswith("Main.jack")


def test_redeclared_variable(tmp_path):
    write(tmp_path / "prog", "Main.jack", main_class(["    var int x;", "    var int x;"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.REDEC_IDENTIFIER
    assert info.token.lexeme == "x"
    assert info.token.line == 4


def test_syntax_error_is_reported(tmp_path):
    write(tmp_path / "prog", "Main.jack", main_class(["    var int x;", "    let x 1;"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.EQUAL_EXPECTED
    assert info.token.lexeme == "1"


def test_undeclared_class_type(tmp_path):
    write(tmp_path / "prog", "Main.jack", main_class(["    var Foo f;"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.UNDEC_IDENTIFIER
    assert info.token.lexeme == "Foo"


def test_function_of_class_in_parent_directory(tmp_path):
    write(tmp_path, "Other.jack", OTHER)
    write(tmp_path / "prog", "Main.jack", main_class(["    do Other.run();"]))
    assert compile_directory(tmp_path / "prog").ok()


def test_missing_function_of_known_class(tmp_path):
    write(tmp_path, "Other.jack", OTHER)
    write(tmp_path / "prog", "Main.jack", main_class(["    do Other.walk();"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.UNDEC_IDENTIFIER
    assert info.token.lexeme == "walk"


def test_method_through_class_typed_variable(tmp_path):
    write(tmp_path, "Other.jack", OTHER)
    write(tmp_path / "prog", "Main.jack",
          main_class(["    var Other o;", "    do o.run();"]))
    assert compile_directory(tmp_path / "prog").ok()


def test_missing_method_through_class_typed_variable(tmp_path):
    write(tmp_path, "Other.jack", OTHER)
    write(tmp_path / "prog", "Main.jack",
          main_class(["    var Other o;", "    do o.jump();"]))
    info = compile_directory(tmp_path / "prog")
    assert info.error is ErrorKind.UNDEC_IDENTIFIER
    assert info.token.lexeme == "jump"


def test_missing_directory_is_lexer_error(tmp_path):
    info = compile_directory(tmp_path / "absent")
    assert info.error is ErrorKind.LEXER_ERR


def test_fresh_compiler_finds_nothing_undeclared():
    assert Compiler().find_undeclared() is None


def test_compile_fills_program_scope(tmp_path):
    write(tmp_path, "Other.jack", OTHER)
    write(tmp_path / "prog", "Main.jack", main_class([]))
    compiler = Compiler()
    compiler.compile(tmp_path / "prog")
    assert [symbol.name for symbol in compiler.program_scope] == ["Other", "Main"]
    assert len(compiler.program_scope.children) == 2
    assert compiler.find_undeclared() is None