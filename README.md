# jacksymbols

A front end for the JACK language. It tokenises and parses `.jack`
source files, builds nested symbol tables, and reports the first
syntax or semantic error it finds. There are two semantic checks:

- **undeclared identifier**: a variable, subroutine, class, or
  `Class.member` reference that has no matching declaration.
- **redeclaration of identifier**: a name declared twice in the same scope.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Compiling a program directory

`compile_directory` first parses every `.jack` file in the parent
directory of the path you give it. It then parses every `.jack` file in
the directory itself. Files are taken in name order, and parsing stops
at the first file with an error. Library classes such as `Math` or
`Output` can therefore sit next to the program directories.

When parsing is done, every identifier that was met is checked against
the declarations. An undeclared identifier takes the place of any other
result. If the directory or its parent cannot be opened, the result is a
lexer error.

The function returns a `ParserInfo`. It has an `error` (an `ErrorKind`),
a `token` (the `Token` at or near the error), and an `ok()` method.

```python
from jacksymbols.compiler import compile_directory
from jacksymbols.errors import error_string

info = compile_directory("programs/Pong")
if info.ok():
    print("no errors")
else:
    print(f"{info.token.file}:{info.token.line}: "
          f"{error_string(info.error)} at or near {info.token.lexeme}")
```

To inspect the symbol tables and identifier stacks afterwards, use the
`Compiler` class directly:

```python
from jacksymbols.compiler import Compiler

compiler = Compiler()
info = compiler.compile("programs/Square")
print(compiler.program_scope.dump())
```

`Compiler.find_undeclared()` returns the first undeclared `Identifier`,
or `None` if there is none.

## Lower-level pieces

- `jacksymbols.lexer`
  - `tokenize(text, filename)` returns a list of `Token` objects that
    always ends with a `TokenType.EOFILE` token.
  - `Lexer(path)` reads and tokenises a whole file. It provides
    `next_token()` and `peek_token()`.
  - A lexical error appears as a `TokenType.ERR` token. Its `lexeme` is
    the error message and its `error` is a `LexError` code.
- `jacksymbols.errors`: the `ErrorKind` enumeration, `ParserInfo`, and
  `error_string(kind)`, which returns a readable message for each kind.
- `jacksymbols.symbols`: `SymbolTable` scopes form a tree, linked through
  `add_child`. Names are declared with `insert` and looked up with
  `index`, `index_parents`, `index_children`, `locate`, `get`,
  `get_global` and `table_of`. `dump()` returns a text listing of a
  scope and its children. The module also defines `IdentifierStack` and
  `SpecialIdStack`, which record identifier uses and class-typed
  variables.
- `jacksymbols.expressions` and `jacksymbols.parser`:
  `ExpressionParser` and `Parser` are the recursive-descent parsers.
  `Parser.parse()` parses a single file and returns a `ParserInfo`.
- `jacksymbols.grader`: the grading run. It also provides the formatting
  helpers `format_error`, `format_info`, `format_token` and
  `token_type_string`, and a `GraderReport` that renders scores as a
  JSON results document.

## Grading a set of test programs

The `jacksymbols-grade` command compiles a fixed suite of test program
directories under a root directory: `UNDECLAR_VAR`, `REDECLAR_VAR`,
`Pong`, `Square` and the rest. It compares each result with the expected
error and prints pass or fail for each one. Each failure costs half a
mark. At the end it prints a total out of 10.

```
jacksymbols-grade path/to/tests
```

Without an argument, it uses the current directory. With `--report`, it
also prints a JSON results document.

## What this package does not do

- It only checks programs. It does not generate VM code or any other
  output.
- It does not ship the test program directories that
  `jacksymbols-grade` expects. You must supply them.