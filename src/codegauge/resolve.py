"""Resolvers — turn a function name into a SourceUnit.

Two lookups are provided:

    NamespaceResolver   Python callables already loaded in a module or
                        mapping; source comes from ``inspect``.
    SourceFileResolver  functions and methods declared in a Python or Java
                        file, by plain or qualified (``Class.method``) name.

Usage:
    import mymodule
    report = analyze("parse_header", resolver=NamespaceResolver(mymodule))
"""

import inspect
import logging
import textwrap
from pathlib import Path
from types import ModuleType
from typing import Any, Mapping, Optional, Protocol, Union

from tree_sitter import Node

from codegauge.errors import InvalidKindError, NotFoundError, ParseError
from codegauge.parser import SourceUnit, load_file, load_source, sub_unit

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    def resolve(self, name: str) -> SourceUnit:
        """Return the unit for ``name`` or raise NotFoundError / InvalidKindError."""
        ...


# ---------------------------------------------------------------------------
# Python callables
# ---------------------------------------------------------------------------

def _kind_name(obj: Any) -> str:
    if inspect.isbuiltin(obj) or inspect.ismethoddescriptor(obj):
        return "builtin function"
    if inspect.isclass(obj):
        return "class"
    if inspect.ismodule(obj):
        return "module"
    return type(obj).__name__


def _definition_node(root: Node) -> Optional[Node]:
    for child in root.named_children:
        if child.type == "function_definition":
            return child
        if child.type == "decorated_definition":
            definition = child.child_by_field_name("definition")
            if definition is not None and definition.type == "function_definition":
                return definition
    return None


def unit_from_callable(obj: Any, name: Optional[str] = None) -> SourceUnit:
    """
    Build a unit from a Python function's source.

    Raises:
        InvalidKindError: ``obj`` is a builtin, class, lambda or has no source
        ParseError: the recovered source holds no function definition
    """
    name = name or getattr(obj, "__qualname__", repr(obj))

    if isinstance(obj, (staticmethod, classmethod)) or inspect.ismethod(obj):
        obj = obj.__func__
    obj = inspect.unwrap(obj)

    if not inspect.isfunction(obj):
        raise InvalidKindError(name, _kind_name(obj))
    if obj.__name__ == "<lambda>":
        raise InvalidKindError(name, "lambda")

    try:
        lines, first_line = inspect.getsourcelines(obj)
    except (OSError, TypeError) as e:
        raise InvalidKindError(name, "function without source") from e

    text = textwrap.dedent("".join(lines))
    script = load_source(text, "python", name=name, line_offset=max(first_line - 1, 0))
    node = _definition_node(script.root)
    if node is None:
        raise ParseError(name, first_line, "no function definition in recovered source")

    logger.debug("Resolved %s from %s:%d", name, inspect.getsourcefile(obj), first_line)
    return sub_unit(script, node, name)


class NamespaceResolver:
    """Look functions up by (dotted) name in a module or a mapping."""

    def __init__(self, namespace: Union[ModuleType, Mapping[str, Any]]):
        if isinstance(namespace, ModuleType):
            self._namespace = vars(namespace)
            self._where = f"module {namespace.__name__}"
        else:
            self._namespace = namespace
            self._where = "namespace"

    def resolve(self, name: str) -> SourceUnit:
        head, *rest = name.split(".")
        if head not in self._namespace:
            raise NotFoundError(name, self._where)

        obj = self._namespace[head]
        for part in rest:
            try:
                obj = inspect.getattr_static(obj, part)
            except AttributeError as e:
                raise NotFoundError(name, self._where) from e
        return unit_from_callable(obj, name)


# ---------------------------------------------------------------------------
# Declarations in source files
# ---------------------------------------------------------------------------

class SourceFileResolver:
    """Look functions and methods up in one Python or Java file."""

    def __init__(self, file_path: Path, language: Optional[str] = None):
        self.file_path = Path(file_path)
        self._script = load_file(self.file_path, language)

    @property
    def script(self) -> SourceUnit:
        """The whole file as a single unit."""
        return self._script

    def units(self) -> list[SourceUnit]:
        """One unit per function/method in the file, in source order."""
        parser = self._script.parser
        return [
            sub_unit(self._script, node, qualified)
            for qualified, node in parser.iter_functions(self._script.root)
        ]

    def resolve(self, name: str) -> SourceUnit:
        parser = self._script.parser
        functions = list(parser.iter_functions(self._script.root))

        # Exact qualified name first, then the bare function name
        for qualified, node in functions:
            if qualified == name:
                return sub_unit(self._script, node, qualified)
        for qualified, node in functions:
            if qualified.rsplit(".", 1)[-1] == name:
                return sub_unit(self._script, node, qualified)

        for qualified, kind, _ in parser.iter_types(self._script.root):
            if name in (qualified, qualified.rsplit(".", 1)[-1]):
                raise InvalidKindError(name, kind)

        raise NotFoundError(name, str(self.file_path))
