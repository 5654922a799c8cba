"""Java grammar adapter using tree-sitter."""

from typing import Iterator, Optional

import tree_sitter_java as tsjava
from tree_sitter import Node

from .base import CodeParser, ConstructKind, TokenKind, node_text

# A handler for Throwable accepts every exception, like an untyped catch
CATCH_ALL_TYPES = {"Throwable", "java.lang.Throwable"}

_TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
}


def _strip_parens(text: str) -> str:
    text = text.strip()
    if text.startswith("(") and text.endswith(")"):
        return text[1:-1].strip()
    return text


class JavaParser(CodeParser):
    """Describe Java source structure from tree-sitter-java trees."""

    construct_types = {
        ConstructKind.CONDITIONAL: frozenset({"if_statement"}),
        ConstructKind.FOREACH: frozenset({"enhanced_for_statement"}),
        ConstructKind.FOR: frozenset({"for_statement"}),
        ConstructKind.WHILE: frozenset({"while_statement", "do_statement"}),
        ConstructKind.EXCEPTION_BLOCK: frozenset(
            {"try_statement", "try_with_resources_statement"}
        ),
        ConstructKind.MULTI_WAY_BRANCH: frozenset({"switch_expression", "switch_statement"}),
    }
    scope_types = frozenset({
        "lambda_expression",
        "method_declaration",
        "constructor_declaration",
        "class_body",
        "interface_body",
        "enum_body",
    })
    call_types = frozenset({"method_invocation"})
    comment_types = frozenset({"line_comment", "block_comment", "comment"})

    _TOKEN_KINDS = {
        "&&": TokenKind.LOGICAL_AND,
        "||": TokenKind.LOGICAL_OR,
        "^": TokenKind.LOGICAL_XOR,
        "}": TokenKind.GROUP_END,
    }

    @property
    def language(self) -> str:
        return "java"

    @property
    def file_extensions(self) -> list[str]:
        return [".java"]

    def _grammar(self):
        return tsjava.language()

    def matches(self, node: Node, kind: ConstructKind) -> bool:
        if not super().matches(node, kind):
            return False
        if kind is ConstructKind.CONDITIONAL:
            # "else if" belongs to the chain of the if that owns it
            parent = node.parent
            if parent is not None and parent.type == "if_statement":
                alternative = parent.child_by_field_name("alternative")
                if alternative is not None and alternative.id == node.id:
                    return False
        return True

    def token_kind(self, leaf: Node) -> TokenKind:
        if leaf.type in self.comment_types:
            return TokenKind.COMMENT
        if leaf.type == "{":
            parent = leaf.parent
            if parent is not None and parent.type in ("block", "constructor_body"):
                return TokenKind.BLOCK_START
            return TokenKind.GROUP_START
        return self._TOKEN_KINDS.get(leaf.type, TokenKind.OTHER)

    # ── Construct structure ────────────────────────────────────

    def conditional_parts(self, node: Node) -> tuple[list[Node], Optional[Node]]:
        clauses = []
        else_clause = None
        current = node
        while True:
            clauses.append(current.child_by_field_name("consequence") or current)
            alternative = current.child_by_field_name("alternative")
            if alternative is None:
                break
            if alternative.type == "if_statement":
                current = alternative
                continue
            else_clause = alternative
            break
        return clauses, else_clause

    def foreach_parts(self, node: Node) -> tuple[str, str]:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        return (
            node_text(name) if name else "",
            node_text(value) if value else "",
        )

    def for_parts(self, node: Node) -> tuple[str, Optional[str], str]:
        init = ", ".join(
            node_text(n).rstrip(";").strip() for n in node.children_by_field_name("init")
        )
        update = ", ".join(node_text(n) for n in node.children_by_field_name("update"))
        condition = node.child_by_field_name("condition")
        return init, (node_text(condition) if condition else None), update

    def while_parts(self, node: Node) -> tuple[str, bool]:
        condition = node.child_by_field_name("condition")
        text = _strip_parens(node_text(condition)) if condition else ""
        return text, node.type == "do_statement"

    def catch_clauses(self, node: Node) -> list[Node]:
        return [c for c in node.children if c.type == "catch_clause"]

    def is_catch_all(self, clause: Node) -> bool:
        for param in clause.named_children:
            if param.type != "catch_formal_parameter":
                continue
            for child in param.named_children:
                if child.type == "catch_type":
                    return node_text(child).strip() in CATCH_ALL_TYPES
        return False

    def branch_clauses(self, node: Node) -> list[Node]:
        body = node.child_by_field_name("body")
        if body is None:
            body = next((c for c in node.children if c.type == "switch_block"), None)
        if body is None:
            return []

        labels = []
        for group in body.named_children:
            if group.type in ("switch_block_statement_group", "switch_rule"):
                labels.extend(c for c in group.children if c.type == "switch_label")
        return labels

    def is_default_clause(self, clause: Node) -> bool:
        return any(c.type == "default" for c in clause.children)

    def invocation_target(self, node: Node) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node:
            return node_text(name_node)
        return None

    # ── Declarations ───────────────────────────────────────────

    def iter_functions(self, root: Node) -> Iterator[tuple[str, Node]]:
        for name, kind, node in self._walk_tree(root):
            if kind in ("method", "constructor"):
                yield name, node

    def iter_types(self, root: Node) -> Iterator[tuple[str, str, Node]]:
        for name, kind, node in self._walk_tree(root):
            if kind in _TYPE_DECLARATIONS.values():
                yield name, kind, node

    def _walk_tree(
        self,
        node: Node,
        current_class: Optional[str] = None,
    ) -> Iterator[tuple[str, str, Node]]:
        """Recursively walk the tree for type and method declarations."""

        # Track current class context
        if node.type in _TYPE_DECLARATIONS:
            class_name_node = node.child_by_field_name("name")
            if class_name_node:
                class_name = node_text(class_name_node)
                if current_class:
                    class_name = f"{current_class}.{class_name}"
                yield class_name, _TYPE_DECLARATIONS[node.type], node
                current_class = class_name

        # Found a method or constructor
        if node.type in ("method_declaration", "constructor_declaration"):
            name_node = node.child_by_field_name("name")
            if name_node:
                method_name = node_text(name_node)
                if current_class:
                    method_name = f"{current_class}.{method_name}"
                kind = "method" if node.type == "method_declaration" else "constructor"
                yield method_name, kind, node

        # Recurse into children
        for child in node.children:
            yield from self._walk_tree(child, current_class)
