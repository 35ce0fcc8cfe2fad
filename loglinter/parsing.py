"""
Go source parsing.

Parses a file with tree-sitter, resolves declarations while walking
the tree, and converts every call expression into the syntax model
the analyzer reads. Files with syntax errors are rejected, since a
partial tree would produce misleading diagnostics.
"""
import logging
from pathlib import Path
from typing import Dict, List, Tuple

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from .binding import TypeInfo
from .resolver import SCOPE_NODES, Resolver, named_children
from .syntax import (
    BasicLit,
    BinaryExpr,
    CallExpr,
    Expr,
    File,
    Ident,
    OtherExpr,
    ParenExpr,
    SelectorExpr,
    Token,
    UnaryExpr,
)

logger = logging.getLogger(__name__)

GO_LANGUAGE = Language(tree_sitter_go.language())

_LITERAL_KINDS = {
    "interpreted_string_literal": Token.STRING,
    "raw_string_literal":         Token.STRING,
    "int_literal":                Token.INT,
    "float_literal":              Token.FLOAT,
    "imaginary_literal":          Token.IMAG,
    "rune_literal":               Token.CHAR,
}


_TYPE_NODES = frozenset({
    "type_declaration",
    "function_type",
    "interface_type",
})


class _FileWalker:
    """
    Single pre-order pass over one tree.

    Declarations update the resolver's scopes as they are met, so each
    identifier is resolved against what is visible at its position.
    """

    def __init__(self, source: bytes, package: str):
        self.resolver = Resolver(source, package)
        self.calls: List[CallExpr] = []
        self.uses: Dict[Ident, object] = {}
        self._converted: Dict[Tuple[int, int, str], Expr] = {}

    def declare_package_scope(self, root: Node) -> None:
        """Package-level names are visible everywhere, regardless of order."""
        for child in named_children(root):
            if child.type == "import_declaration":
                self.resolver.declare_imports(child)
            elif child.type == "var_declaration":
                for spec in _var_specs(child):
                    self.resolver.declare_var_spec(spec)

    def visit(self, node: Node) -> None:
        kind = node.type

        # Parameter names inside type expressions declare nothing
        if kind == "import_declaration" or kind in _TYPE_NODES:
            return

        if kind in SCOPE_NODES:
            self.resolver.push()
            try:
                if kind in ("type_case", "default_case"):
                    self._declare_case_alias(node)
                self._visit_children(node)
            finally:
                self.resolver.pop()
            return

        if kind in ("parameter_declaration", "variadic_parameter_declaration"):
            self.resolver.declare_parameter(node)
            return

        if kind == "short_var_declaration":
            right = node.child_by_field_name("right")
            if right is not None:
                self.visit(right)
            self.resolver.declare_short_var(node)
            return

        if kind == "var_spec":
            value = node.child_by_field_name("value")
            if value is not None:
                self.visit(value)
            self.resolver.declare_var_spec(node)
            return

        if kind == "range_clause" and any(c.type == ":=" for c in node.children):
            right = node.child_by_field_name("right")
            if right is not None:
                self.visit(right)
            self.resolver.declare_range(node)
            return

        if kind == "call_expression":
            self.calls.append(self.convert(node))

        self._visit_children(node)

    def _visit_children(self, node: Node) -> None:
        for child in node.children:
            self.visit(child)

    def _declare_case_alias(self, case: Node) -> None:
        """Bind `v` of `switch v := x.(type)` inside one clause of that switch."""
        switch = case.parent
        if switch is None or switch.type != "type_switch_statement":
            return
        alias = switch.child_by_field_name("alias")
        if alias is None:
            return
        names = named_children(alias)
        if len(names) == 1 and names[0].type == "identifier":
            self.resolver.declare_type_case(case, self.resolver.text(names[0]))

    def convert(self, node: Node) -> Expr:
        key = (node.start_byte, node.end_byte, node.type)
        if key not in self._converted:
            self._converted[key] = self._convert(node)
        return self._converted[key]

    def _convert(self, node: Node) -> Expr:
        kind = node.type
        text = self.resolver.text

        if kind == "identifier":
            ident = Ident(text(node), node.start_byte)
            obj = self.resolver.lookup(ident.name)
            if obj is not None:
                self.uses[ident] = obj
            return ident

        if kind in _LITERAL_KINDS:
            return BasicLit(_LITERAL_KINDS[kind], text(node), node.start_byte)

        if kind == "binary_expression":
            left = node.child_by_field_name("left")
            operator = node.child_by_field_name("operator")
            right = node.child_by_field_name("right")
            if left is not None and operator is not None and right is not None:
                return BinaryExpr(
                    self.convert(left),
                    Token.from_operator(operator.type),
                    self.convert(right),
                )

        if kind == "unary_expression":
            operator = node.child_by_field_name("operator")
            operand = node.child_by_field_name("operand")
            if operator is not None and operand is not None:
                return UnaryExpr(
                    Token.from_operator(operator.type),
                    self.convert(operand),
                    node.start_byte,
                )

        if kind == "parenthesized_expression":
            inner = named_children(node)
            if inner:
                return ParenExpr(self.convert(inner[0]), node.start_byte, node.end_byte - 1)

        if kind == "selector_expression":
            operand = node.child_by_field_name("operand")
            field = node.child_by_field_name("field")
            if operand is not None and field is not None:
                return SelectorExpr(self.convert(operand), Ident(text(field), field.start_byte))

        if kind == "call_expression":
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            if function is not None and arguments is not None:
                args = tuple(self.convert(arg) for arg in named_children(arguments))
                return CallExpr(self.convert(function), args, arguments.end_byte - 1)

        return OtherExpr(kind, node.start_byte, node.end_byte)


def _var_specs(decl: Node) -> List[Node]:
    specs = []
    for child in named_children(decl):
        if child.type == "var_spec":
            specs.append(child)
        elif child.type == "var_spec_list":
            specs.extend(c for c in named_children(child) if c.type == "var_spec")
    return specs


def _package_name(root: Node, source: bytes) -> str:
    for child in named_children(root):
        if child.type == "package_clause":
            for ident in named_children(child):
                return source[ident.start_byte:ident.end_byte].decode("utf-8")
    return ""


def parse_source(source: bytes, path: Path = Path("<source>")) -> File:
    """
    Parse Go source into an analysis unit.

    Raises ValueError if the source does not parse cleanly.
    """
    tree = Parser(GO_LANGUAGE).parse(source)
    root = tree.root_node
    if root.has_error:
        raise ValueError(f"Syntax error in Go source: {path}")

    package = _package_name(root, source)
    walker = _FileWalker(source, package)
    walker.declare_package_scope(root)
    walker.visit(root)

    logger.debug("Parsed %s: package %s, %d calls", path, package, len(walker.calls))

    return File(
        path=path,
        source=source,
        package=package,
        calls=walker.calls,
        type_info=TypeInfo(uses=walker.uses),
    )


def parse_file(path: Path) -> File:
    """Read and parse a Go file. Raises OSError or ValueError."""
    return parse_source(Path(path).read_bytes(), Path(path))
