"""
Sensitive data check.

Flags variables concatenated into a log message whose names look like
they hold secrets (tokens, passwords, keys, ...). Works on the argument
expression itself, not on literal content.
"""
from typing import List

from ..config import Config
from ..diagnostics import Diagnostic
from ..literals import quote
from ..syntax import CallExpr
from .utils import collect_idents, is_concatenation


def check_sensitive_data(call: CallExpr, config: Config) -> List[Diagnostic]:
    """
    Report every identifier in a `+` chain matching a sensitive pattern.

    One diagnostic per identifier, however many patterns it matches.
    A first argument that is not a `+` expression is not checked.
    """
    if not call.args:
        return []

    expr = call.args[0]
    if not is_concatenation(expr):
        return []

    diagnostics = []
    for ident in collect_idents(expr):
        name = ident.name.lower()
        for pattern in config.sensitive_patterns:
            if pattern in name:
                diagnostics.append(Diagnostic(
                    pos=ident.pos,
                    end=ident.end,
                    message=(
                        f"potentially sensitive data {quote(ident.name)} "
                        "is concatenated into log message"
                    ),
                ))
                break

    return diagnostics
