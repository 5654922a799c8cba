"""Parser Module — Turns source text into tree-sitter units the metrics engine walks.

Supported languages:
    - Python (via tree-sitter-python)
    - Java   (via tree-sitter-java)

Each parser describes, for its grammar:
    - Which node types are conditionals, loops, exception blocks, switches, traps
    - Which nodes open a nested scope (lambdas, nested functions, class bodies)
    - How leaves map to token kinds (comments, logical operators, braces)
    - Where functions/methods and classes are declared

Usage:
    from codegauge.parser import load_source

    unit = load_source("if a and b:\\n    go()\\n", "python")
"""

from codegauge.parser.base import (
    CodeParser,
    ConstructKind,
    SourceUnit,
    Token,
    TokenKind,
)
from codegauge.parser.java_parser import JavaParser
from codegauge.parser.python_parser import PythonParser
from codegauge.parser.registry import (
    get_parser,
    load_file,
    load_source,
    parser_for_path,
    sub_unit,
)

__all__ = [
    "CodeParser",
    "ConstructKind",
    "JavaParser",
    "PythonParser",
    "SourceUnit",
    "Token",
    "TokenKind",
    "get_parser",
    "load_file",
    "load_source",
    "parser_for_path",
    "sub_unit",
]
