"""Lexer, parser and symbol-table checking for JACK programs."""

__version__ = "0.1.0"
__all__ = ["lexer", "errors", "symbols", "expressions", "parser", "compiler", "grader"]