[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jacksymbols"
version = "0.1.0"
description = "Lexer, parser and symbol-table checker for JACK programs that reports undeclared and redeclared identifiers"
requires-python = ">=3.10"
dependencies = []
keywords = ["jack", "nand2tetris", "compiler", "symbol table", "parser", "lexer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jacksymbols-grade = "jacksymbols.grader:main"

[tool.hatch.build.targets.wheel]
packages = ["jacksymbols"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
