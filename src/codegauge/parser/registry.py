"""Parser lookup and SourceUnit construction."""

import logging
from pathlib import Path
from typing import Optional

from tree_sitter import Node

from .base import CodeParser, SourceUnit
from .java_parser import JavaParser
from .python_parser import PythonParser

logger = logging.getLogger(__name__)

# Parsers hold only an immutable tree-sitter Language, so one per language is shared.
_parsers: dict[str, CodeParser] = {}

_PARSER_CLASSES = {
    "python": PythonParser,
    "java": JavaParser,
}


def get_parser(language: str) -> CodeParser:
    """Get or create the parser for the given language."""
    language = language.lower()
    if language not in _parsers:
        if language not in _PARSER_CLASSES:
            raise ValueError(f"Unsupported language: {language}")
        _parsers[language] = _PARSER_CLASSES[language]()
    return _parsers[language]


def parser_for_path(file_path: Path) -> CodeParser:
    """Pick the parser whose file extensions match ``file_path``."""
    for language in _PARSER_CLASSES:
        parser = get_parser(language)
        if parser.can_parse(file_path):
            return parser
    raise ValueError(f"Unsupported language for file: {file_path}")


def load_source(
    text: str,
    language: str,
    name: str = "<source>",
    line_offset: int = 0,
) -> SourceUnit:
    """Parse ``text`` as a whole script unit."""
    parser = get_parser(language)
    source = text.encode("utf-8")
    tree = parser.parse(source)
    logger.debug("Parsed %s (%s, %d bytes)", name, parser.language, len(source))
    return SourceUnit(
        name=name,
        parser=parser,
        root=tree.root_node,
        source=source,
        line_offset=line_offset,
        tree=tree,
    )


def load_file(file_path: Path, language: Optional[str] = None) -> SourceUnit:
    """Parse a whole file as one unit; the language follows the extension."""
    file_path = Path(file_path)
    parser = get_parser(language) if language else parser_for_path(file_path)
    text = file_path.read_text(encoding="utf-8")
    return load_source(text, parser.language, name=file_path.name)


def sub_unit(unit: SourceUnit, node: Node, name: str) -> SourceUnit:
    """A unit rooted at ``node`` that shares the parse of ``unit``."""
    return SourceUnit(
        name=name,
        parser=unit.parser,
        root=node,
        source=unit.source,
        line_offset=unit.line_offset,
        tree=unit.tree,
    )
