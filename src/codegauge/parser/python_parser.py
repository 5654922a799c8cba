"""Python grammar adapter using tree-sitter."""

from typing import Iterator, Optional

import tree_sitter_python as tspython
from tree_sitter import Node

from .base import CodeParser, ConstructKind, TokenKind, node_text

# Context managers that swallow the listed exception types
_SUPPRESSORS = {"suppress", "contextlib.suppress"}


class PythonParser(CodeParser):
    """Describe Python source structure from tree-sitter-python trees."""

    construct_types = {
        ConstructKind.CONDITIONAL: frozenset({"if_statement"}),
        ConstructKind.FOREACH: frozenset({"for_statement"}),
        ConstructKind.WHILE: frozenset({"while_statement"}),
        ConstructKind.EXCEPTION_BLOCK: frozenset({"try_statement"}),
        ConstructKind.MULTI_WAY_BRANCH: frozenset({"match_statement"}),
        ConstructKind.TRAP: frozenset({"with_item"}),
    }
    scope_types = frozenset({"function_definition", "lambda", "class_definition"})
    call_types = frozenset({"call"})
    comment_types = frozenset({"comment"})

    _TOKEN_KINDS = {
        "comment": TokenKind.COMMENT,
        "and": TokenKind.LOGICAL_AND,
        "or": TokenKind.LOGICAL_OR,
        "{": TokenKind.GROUP_START,
        "}": TokenKind.GROUP_END,
    }

    @property
    def language(self) -> str:
        return "python"

    @property
    def file_extensions(self) -> list[str]:
        return [".py"]

    def _grammar(self):
        return tspython.language()

    def matches(self, node: Node, kind: ConstructKind) -> bool:
        if not super().matches(node, kind):
            return False
        if kind is ConstructKind.TRAP:
            return self._suppressor_call(node) is not None
        return True

    def token_kind(self, leaf: Node) -> TokenKind:
        # f-string replacement fields delimit an expression, not a group
        if leaf.parent is not None and leaf.parent.type == "interpolation":
            return TokenKind.OTHER
        return self._TOKEN_KINDS.get(leaf.type, TokenKind.OTHER)

    def opens_block(self, node: Node) -> bool:
        # Indented suites have no brace tokens; the block node stands in for them.
        return node.type == "block" and node.child_count > 0

    # ── Construct structure ────────────────────────────────────

    def conditional_parts(self, node: Node) -> tuple[list[Node], Optional[Node]]:
        clauses = [node.child_by_field_name("consequence") or node]
        else_clause = None
        for child in node.children:
            if child.type == "elif_clause":
                clauses.append(child)
            elif child.type == "else_clause":
                else_clause = child
        return clauses, else_clause

    def foreach_parts(self, node: Node) -> tuple[str, str]:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        return (
            node_text(left) if left else "",
            node_text(right) if right else "",
        )

    def while_parts(self, node: Node) -> tuple[str, bool]:
        condition = node.child_by_field_name("condition")
        return (node_text(condition) if condition else ""), False

    def catch_clauses(self, node: Node) -> list[Node]:
        return [
            c for c in node.children
            if c.type in ("except_clause", "except_group_clause")
        ]

    def is_catch_all(self, clause: Node) -> bool:
        # A bare "except:" has nothing but its suite.
        if clause.type != "except_clause":
            return False
        return not any(
            c.type not in ("block", "comment") for c in clause.named_children
        )

    def branch_clauses(self, node: Node) -> list[Node]:
        clauses = []
        for child in node.children:
            if child.type == "case_clause":
                clauses.append(child)
            elif child.type == "block":
                clauses.extend(c for c in child.children if c.type == "case_clause")
        return clauses

    def is_default_clause(self, clause: Node) -> bool:
        patterns = [c for c in clause.named_children if c.type == "case_pattern"]
        guarded = clause.child_by_field_name("guard") is not None or any(
            c.type == "if_clause" for c in clause.named_children
        )
        return len(patterns) == 1 and node_text(patterns[0]).strip() == "_" and not guarded

    def trap_parts(self, node: Node) -> tuple[Node, str]:
        call = self._suppressor_call(node)
        condition = ""
        if call is not None:
            arguments = call.child_by_field_name("arguments")
            if arguments is not None:
                condition = node_text(arguments).strip()[1:-1].strip()

        scope = node
        while scope.parent is not None and scope.type != "with_statement":
            scope = scope.parent
        if scope.type != "with_statement":
            scope = node
        return scope, condition

    def _suppressor_call(self, item: Node) -> Optional[Node]:
        value = item.child_by_field_name("value")
        if value is None and item.named_children:
            value = item.named_children[0]
        if value is not None and value.type == "as_pattern" and value.named_children:
            value = value.named_children[0]
        if value is None or value.type != "call":
            return None
        function = value.child_by_field_name("function")
        if function is not None and node_text(function) in _SUPPRESSORS:
            return value
        return None

    def invocation_target(self, node: Node) -> Optional[str]:
        func_node = node.child_by_field_name("function")
        if func_node is None:
            return None
        # Handle simple calls and attribute calls (obj.method)
        if func_node.type == "identifier":
            return node_text(func_node)
        if func_node.type == "attribute":
            attr_node = func_node.child_by_field_name("attribute")
            if attr_node:
                return node_text(attr_node)
        return None

    # ── Declarations ───────────────────────────────────────────

    def iter_functions(self, root: Node) -> Iterator[tuple[str, Node]]:
        for name, kind, node in self._walk_tree(root):
            if kind == "function":
                yield name, node

    def iter_types(self, root: Node) -> Iterator[tuple[str, str, Node]]:
        for name, kind, node in self._walk_tree(root):
            if kind == "class":
                yield name, kind, node

    def _walk_tree(
        self,
        node: Node,
        current_class: Optional[str] = None,
    ) -> Iterator[tuple[str, str, Node]]:
        """Recursively walk the tree for class and function definitions."""

        # Track current class context
        if node.type == "class_definition":
            class_name_node = node.child_by_field_name("name")
            if class_name_node:
                class_name = node_text(class_name_node)
                if current_class:
                    class_name = f"{current_class}.{class_name}"
                yield class_name, "class", node
                current_class = class_name

        # Found a function
        if node.type == "function_definition":
            name_node = node.child_by_field_name("name")
            if name_node:
                func_name = node_text(name_node)
                if current_class:
                    func_name = f"{current_class}.{func_name}"
                yield func_name, "function", node

        # Recurse into children
        for child in node.children:
            yield from self._walk_tree(child, current_class)
