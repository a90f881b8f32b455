"""Grade the compiler's name checking against a fixed set of JACK programs."""

from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from jacksymbols.compiler import Compiler
from jacksymbols.errors import ErrorKind, ParserInfo, error_string
from jacksymbols.lexer import Token, TokenType

MAX_SCORE = 10


def _expect(kind: ErrorKind, name: str, line: int) -> ParserInfo:
    return ParserInfo(kind, Token(TokenType.ID, name, line, ""))


_OK = ParserInfo()

EXPECTED: Tuple[Tuple[str, ParserInfo], ...] = (
    ("UNDECLAR_VAR", _expect(ErrorKind.UNDEC_IDENTIFIER, "t", 8)),
    ("REDECLAR_VAR", _expect(ErrorKind.REDEC_IDENTIFIER, "v", 5)),
    ("UNDECLAR_SUB", _expect(ErrorKind.UNDEC_IDENTIFIER, "Sub", 11)),
    ("DECLARED_SUB", _OK),
    ("DECLARED_VAR", _OK),
    ("DECLAR_EXT_FUN", _OK),
    ("UNDECLAR_EXT_FUN", _expect(ErrorKind.UNDEC_IDENTIFIER, "N", 7)),
    ("UNDECLAR_EXT_METH", _expect(ErrorKind.UNDEC_IDENTIFIER, "N", 9)),
    ("DECLAR_EXT_METH", _OK),
    ("UNDECLAR_CLASS", _expect(ErrorKind.UNDEC_IDENTIFIER, "T", 4)),
    ("USES_MATH_LIB", _OK),
    ("ERR_MATH_LIB", _expect(ErrorKind.UNDEC_IDENTIFIER, "mult", 8)),
    ("Pong", _OK),
    ("Square", _OK),
    ("StringTest", _OK),
    ("Square1", _expect(ErrorKind.UNDEC_IDENTIFIER, "nev", 12)),
    ("Square2", _expect(ErrorKind.UNDEC_IDENTIFIER, "moveRigh", 45)),
    ("Square3", _expect(ErrorKind.UNDEC_IDENTIFIER, "squar", 35)),
    ("ComplexArrays", _OK),
    ("Pong1", _expect(ErrorKind.UNDEC_IDENTIFIER, "bas", 26)),
)

_TOKEN_TYPE_NAMES = {
    TokenType.RESWORD: "RESWORD",
    TokenType.ID: "ID",
    TokenType.INT: "INT",
    TokenType.SYMBOL: "SYMBOL",
    TokenType.STRING: "STRING",
    TokenType.EOFILE: "EOFile",
    TokenType.ERR: "ERR",
}


def token_type_string(token_type) -> str:
    """Name of a token type as shown in reports."""
    return _TOKEN_TYPE_NAMES.get(token_type, "Not a recognised token type")


def format_error(info: ParserInfo) -> str:
    """One-line description of a parse result, naming file and line."""
    if info.ok():
        return "No errors"
    token = info.token
    return (
        f"Error in file {token.file} line {token.line} at or near "
        f"{token.lexeme}: {error_string(info.error)}"
    )


def format_info(info: ParserInfo) -> str:
    """Short description of a parse result used in grading output."""
    if info.ok():
        return "none"
    return (
        f"error type: {error_string(info.error)}, line: {info.token.line},"
        f"token: {info.token.lexeme}, "
    )


def format_token(token: Token) -> str:
    """Text form of a token: <file, line, lexeme, type>."""
    return (
        f"<{token.file}, {token.line}, {token.lexeme}, "
        f"{token_type_string(token.type)}>"
    )


def _matches(actual: ParserInfo, expected: ParserInfo) -> bool:
    if actual.error is not expected.error:
        return False
    if expected.error is ErrorKind.NONE:
        return True
    if actual.token.type is not expected.token.type:
        return False
    if actual.token.line != expected.token.line:
        return False
    return (expected.error is ErrorKind.LEXER_ERR
            or actual.token.lexeme == expected.token.lexeme)


def grade(root) -> int:
    """Compile each test program under *root*, print the outcome, return the mark."""
    marks = 2 * MAX_SCORE
    print("\nTesting your compiler on various JACK programs (1/2 mark each)")
    for name, expected in EXPECTED:
        print(f"JACK Program {name}:")
        actual = Compiler().compile(os.path.join(os.fspath(root), name))
        if _matches(actual, expected):
            print("\t$$ Great PASSED :-)")
            continue
        print("** Oops: your compiler returned the following info:")
        print(format_info(actual))
        print("It should have returned:")
        print(format_info(expected))
        print("Sorry, -1 mark")
        marks -= 1
    return int(marks / 2.0)


@dataclass
class GraderReport:
    """Collects test scores and renders them as a JSON results document."""

    tests: List[Tuple[int, int, str]] = field(default_factory=list)

    def add_test(self, score: int, max_score: int, output: str) -> None:
        """Record one scored test."""
        self.tests.append((score, max_score, output))

    def to_json(self) -> str:
        """The results document as JSON text."""
        parts = [
            "{\n",
            '\t"output": "Graded by CAutoGrader",\n',
            '\t"std_visibility": "visible",\n',
            '\t"tests":\n',
            "\t[\n",
        ]
        for position, (score, max_score, output) in enumerate(self.tests):
            parts.append("\t\t{\n")
            parts.append(f'\t\t\t"score": {score},\n')
            parts.append(f'\t\t\t"max_score": {max_score},\n')
            parts.append(f'\t\t\t"output": {json.dumps(output)}\n')
            parts.append("\t\t}")
            if position != len(self.tests) - 1:
                parts.append(",")
            parts.append("\n")
        parts.append("\t]\n")
        parts.append("}\n")
        return "".join(parts)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the grader over the test programs and print the total mark."""
    parser = argparse.ArgumentParser(
        prog="jacksymbols-grade",
        description="Grade symbol-table checking on the JACK test programs.",
    )
    parser.add_argument("root", nargs="?", default=".",
                        help="directory holding the test program directories")
    parser.add_argument("--report", action="store_true",
                        help="also print a JSON results report")
    args = parser.parse_args(argv)

    print("\t$$$ Checking your lexer, behold $$$")
    print("\t=========================================")
    print("Started ...")
    total = grade(args.root)
    print("\n---------------------------------------------------")
    print(f"\t\tTotal mark = {total}/{MAX_SCORE}")
    print("---------------------------------------------------\n")
    print("Finished")

    if args.report:
        report = GraderReport()
        report.add_test(total, MAX_SCORE, f"{total}/{MAX_SCORE} for the symbol table")
        print(report.to_json(), end="")
    return 0