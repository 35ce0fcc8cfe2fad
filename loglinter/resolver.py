"""
Declaration resolution over a tree-sitter Go syntax tree.

This is a best-effort stand-in for a type checker. It binds:
- import names (explicit alias or the name derived from the path)
- variables declared with an explicit type (var specs, parameters,
  receivers)
- variables initialized from a composite literal, another variable,
  a basic literal, or a well-known constructor of the supported
  logging libraries
- type switch aliases, per case clause

Scoping follows Go's block structure with innermost-first lookup.
A variable whose type cannot be inferred is still bound with an
unknown type, so it shadows outer declarations.
"""
import re
from typing import Dict, List, Optional, Tuple

from tree_sitter import Node

from .binding import Basic, Named, Object, Package, PkgName, Pointer, Type, Var
from .config import SLOG_PACKAGE, ZAP_PACKAGE

# Node types that open a new lexical scope
SCOPE_NODES = frozenset({
    "function_declaration",
    "method_declaration",
    "func_literal",
    "block",
    "if_statement",
    "for_statement",
    "expression_switch_statement",
    "type_switch_statement",
    "select_statement",
    "expression_case",
    "type_case",
    "default_case",
    "communication_case",
})

PREDECLARED_BASIC = frozenset({
    "bool", "string", "byte", "rune", "uintptr",
    "int", "int8", "int16", "int32", "int64",
    "uint", "uint8", "uint16", "uint32", "uint64",
    "float32", "float64", "complex64", "complex128",
})

_LITERAL_TYPES = {
    "interpreted_string_literal": Basic("string"),
    "raw_string_literal":         Basic("string"),
    "int_literal":                Basic("int"),
    "float_literal":              Basic("float64"),
    "imaginary_literal":          Basic("complex128"),
    "rune_literal":               Basic("rune"),
}

_SLOG = Package(SLOG_PACKAGE, "slog")
_ZAP  = Package(ZAP_PACKAGE, "zap")

_ERROR         = Named(None, "error")
_SLOG_LOGGER   = Pointer(Named(_SLOG, "Logger"))
_ZAP_LOGGER    = Pointer(Named(_ZAP, "Logger"))
_ZAP_SUGARED   = Pointer(Named(_ZAP, "SugaredLogger"))

# (package path, function) -> result types
KNOWN_FUNCS: Dict[Tuple[str, str], Tuple[Type, ...]] = {
    (SLOG_PACKAGE, "New"):            (_SLOG_LOGGER,),
    (SLOG_PACKAGE, "Default"):        (_SLOG_LOGGER,),
    (SLOG_PACKAGE, "With"):           (_SLOG_LOGGER,),
    (ZAP_PACKAGE,  "New"):            (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "NewNop"):         (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "NewExample"):     (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "NewProduction"):  (_ZAP_LOGGER, _ERROR),
    (ZAP_PACKAGE,  "NewDevelopment"): (_ZAP_LOGGER, _ERROR),
    (ZAP_PACKAGE,  "Must"):           (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "L"):              (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "S"):              (_ZAP_SUGARED,),
}

# (package path, type name, method) -> result types
KNOWN_METHODS: Dict[Tuple[str, str, str], Tuple[Type, ...]] = {
    (SLOG_PACKAGE, "Logger",        "With"):        (_SLOG_LOGGER,),
    (SLOG_PACKAGE, "Logger",        "WithGroup"):   (_SLOG_LOGGER,),
    (ZAP_PACKAGE,  "Logger",        "With"):        (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "Logger",        "WithOptions"): (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "Logger",        "Named"):       (_ZAP_LOGGER,),
    (ZAP_PACKAGE,  "Logger",        "Sugar"):       (_ZAP_SUGARED,),
    (ZAP_PACKAGE,  "SugaredLogger", "With"):        (_ZAP_SUGARED,),
    (ZAP_PACKAGE,  "SugaredLogger", "Named"):       (_ZAP_SUGARED,),
    (ZAP_PACKAGE,  "SugaredLogger", "Desugar"):     (_ZAP_LOGGER,),
}

_MAJOR_VERSION = re.compile(r"v[0-9]+")
_GOPKG_VERSION = re.compile(r"\.v[0-9]+$")


def default_package_name(path: str) -> str:
    """
    Guess the name an import binds when it has no alias.

    Examples:
        log/slog                     -> slog
        go.uber.org/zap              -> zap
        github.com/jackc/pgx/v5      -> pgx
        gopkg.in/yaml.v3             -> yaml
        github.com/mattn/go-sqlite3  -> sqlite3
    """
    parts = [p for p in path.split("/") if p]
    if not parts:
        return ""
    name = parts[-1]
    if len(parts) > 1 and _MAJOR_VERSION.fullmatch(name):
        name = parts[-2]
    name = _GOPKG_VERSION.sub("", name)
    if name.startswith("go-"):
        name = name[3:]
    if name.endswith("-go"):
        name = name[:-3]
    return name.replace("-", "_").replace(".", "_")


def named_children(node: Node) -> List[Node]:
    return [c for c in node.named_children if c.type != "comment"]


class Scope:
    def __init__(self, parent: Optional["Scope"] = None):
        self.parent = parent
        self.objects: Dict[str, Object] = {}

    def insert(self, obj: Object) -> None:
        if obj.name != "_":
            self.objects[obj.name] = obj

    def lookup(self, name: str) -> Optional[Object]:
        scope = self
        while scope is not None:
            if name in scope.objects:
                return scope.objects[name]
            scope = scope.parent
        return None


class Resolver:
    """
    Tracks the scope chain while a tree is walked and answers which
    object a name refers to at the current point.
    """

    def __init__(self, source: bytes, package: str):
        self.source = source
        self.local_package = Package(package, package)
        self.scope = Scope()

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    # Scope handling

    def push(self) -> None:
        self.scope = Scope(self.scope)

    def pop(self) -> None:
        if self.scope.parent is not None:
            self.scope = self.scope.parent

    def lookup(self, name: str) -> Optional[Object]:
        return self.scope.lookup(name)

    # Declarations

    def declare_imports(self, decl: Node) -> None:
        """Bind the names introduced by an import_declaration."""
        specs = []
        for child in named_children(decl):
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(c for c in named_children(child) if c.type == "import_spec")

        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            path = self.text(path_node).strip('"`')
            alias = spec.child_by_field_name("name")
            if alias is not None and alias.type in ("dot", "blank_identifier"):
                continue
            name = self.text(alias) if alias is not None else default_package_name(path)
            self.scope.insert(PkgName(name, Package(path, default_package_name(path))))

    def declare_var_spec(self, spec: Node) -> None:
        names = spec.children_by_field_name("name")
        type_node = spec.child_by_field_name("type")
        if type_node is not None:
            typ = self.type_of(type_node)
            types: List[Optional[Type]] = [typ] * len(names)
        else:
            types = self._value_types(spec.child_by_field_name("value"), len(names))
        for name, typ in zip(names, types):
            self.scope.insert(Var(self.text(name), typ))

    def declare_short_var(self, decl: Node) -> None:
        left = decl.child_by_field_name("left")
        if left is None:
            return
        names = named_children(left)
        types = self._value_types(decl.child_by_field_name("right"), len(names))
        for name, typ in zip(names, types):
            if name.type == "identifier":
                self.scope.insert(Var(self.text(name), typ))

    def declare_range(self, clause: Node) -> None:
        """Bind `k, v := range x` variables; element types are not tracked."""
        left = clause.child_by_field_name("left")
        if left is None:
            return
        for name in named_children(left):
            if name.type == "identifier":
                self.scope.insert(Var(self.text(name)))

    def declare_type_case(self, case: Node, alias: str) -> None:
        """
        Bind a type switch alias for one clause. A single-type case
        narrows it to that type; other clauses leave the type unknown.
        """
        types = case.children_by_field_name("type") if case.type == "type_case" else []
        typ = None
        if len(types) == 1 and self.text(types[0]) != "nil":
            typ = self.type_of(types[0])
        self.scope.insert(Var(alias, typ))

    def declare_parameter(self, param: Node) -> None:
        type_node = param.child_by_field_name("type")
        typ = None
        if type_node is not None and param.type == "parameter_declaration":
            typ = self.type_of(type_node)
        for name in param.children_by_field_name("name"):
            self.scope.insert(Var(self.text(name), typ))

    # Types

    def type_of(self, node: Node) -> Optional[Type]:
        """Resolve a type expression."""
        kind = node.type

        if kind == "qualified_type":
            pkg_node = node.child_by_field_name("package")
            name_node = node.child_by_field_name("name")
            if pkg_node is None or name_node is None:
                return None
            obj = self.lookup(self.text(pkg_node))
            if not isinstance(obj, PkgName):
                return None
            return Named(obj.imported, self.text(name_node))

        if kind == "pointer_type":
            inner = named_children(node)
            elem = self.type_of(inner[0]) if inner else None
            return Pointer(elem) if elem is not None else None

        if kind == "parenthesized_type":
            inner = named_children(node)
            return self.type_of(inner[0]) if inner else None

        if kind == "type_identifier":
            name = self.text(node)
            if name in PREDECLARED_BASIC:
                return Basic(name)
            if name == "error":
                return _ERROR
            return Named(self.local_package, name)

        return None

    def _value_types(self, values: Optional[Node], count: int) -> List[Optional[Type]]:
        """Match the types of an expression_list to `count` names."""
        if values is None:
            return [None] * count
        exprs = named_children(values)
        if len(exprs) == count:
            return [self.types_of(e)[0] for e in exprs]
        if len(exprs) == 1:
            results = list(self.types_of(exprs[0]))
            return (results + [None] * count)[:count]
        return [None] * count

    def types_of(self, expr: Node) -> Tuple[Optional[Type], ...]:
        """Infer the result type(s) of a value expression."""
        kind = expr.type

        if kind in _LITERAL_TYPES:
            return (_LITERAL_TYPES[kind],)

        if kind == "parenthesized_expression":
            inner = named_children(expr)
            return self.types_of(inner[0]) if inner else (None,)

        if kind == "identifier":
            obj = self.lookup(self.text(expr))
            if isinstance(obj, Var):
                return (obj.type,)
            return (None,)

        if kind == "composite_literal":
            type_node = expr.child_by_field_name("type")
            return (self.type_of(type_node) if type_node is not None else None,)

        if kind == "unary_expression":
            operator = expr.child_by_field_name("operator")
            operand = expr.child_by_field_name("operand")
            if operator is None or operand is None:
                return (None,)
            typ = self.types_of(operand)[0]
            if operator.type == "&" and typ is not None:
                return (Pointer(typ),)
            if operator.type == "*" and isinstance(typ, Pointer):
                return (typ.elem,)
            return (None,)

        if kind == "call_expression":
            return self._call_types(expr)

        return (None,)

    def _call_types(self, call: Node) -> Tuple[Optional[Type], ...]:
        function = call.child_by_field_name("function")
        if function is None or function.type != "selector_expression":
            return (None,)
        operand = function.child_by_field_name("operand")
        field = function.child_by_field_name("field")
        if operand is None or field is None:
            return (None,)
        method = self.text(field)

        if operand.type == "identifier":
            obj = self.lookup(self.text(operand))
            if isinstance(obj, PkgName):
                return KNOWN_FUNCS.get((obj.imported.path, method), (None,))

        typ = self.types_of(operand)[0]
        if isinstance(typ, Pointer):
            typ = typ.elem
        if isinstance(typ, Named) and typ.package is not None:
            return KNOWN_METHODS.get((typ.package.path, typ.name, method), (None,))
        return (None,)
