"""
Stateless helpers shared by the checks.

These are pure functions over the expression tree, not methods.
Ambiguous shapes give "not applicable" (None or an empty list), never
an exception.
"""
from typing import List, Optional

from ..literals import unquote
from ..syntax import BasicLit, BinaryExpr, CallExpr, Expr, Ident, Token


# Literal decoding

def first_string_literal(call: CallExpr) -> Optional[BasicLit]:
    """Return the first argument if it is a string literal, else None."""
    if not call.args:
        return None
    arg = call.args[0]
    if not isinstance(arg, BasicLit) or arg.kind != Token.STRING:
        return None
    return arg


def string_literal(call: CallExpr) -> Optional[str]:
    """
    Decode the string literal passed as the first argument.

    Returns None when the argument is not a string literal, when the
    literal is malformed, or when it decodes to the empty string.
    """
    lit = first_string_literal(call)
    if lit is None:
        return None

    try:
        text = unquote(lit.value)
    except ValueError:
        return None

    return text or None


# Concatenation trees

def is_concatenation(expr: Optional[Expr]) -> bool:
    return isinstance(expr, BinaryExpr) and expr.op == Token.ADD


def collect_idents(expr: Optional[Expr]) -> List[Ident]:
    """
    Collect variable references from a tree of `+` expressions.

    Both operands of every `+` node are descended into. Identifiers are
    recorded left to right; literals and other operators are ignored.

    Examples:
        "a" + tok            -> [tok]
        ("x" + a) + b        -> [a, b]
        secret * count       -> []
    """
    idents: List[Ident] = []

    def walk(node: Optional[Expr]) -> None:
        if isinstance(node, BinaryExpr):
            if node.op == Token.ADD:
                walk(node.x)
                walk(node.y)
        elif isinstance(node, Ident):
            idents.append(node)

    walk(expr)
    return idents
