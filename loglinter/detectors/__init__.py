"""
Logging call checks.

Checks are pure functions that answer: "What is wrong with this call?"

Design principles:
- Stateless: (call, config) -> list of diagnostics
- Independent: no check depends on another's outcome
- Ambiguity is skipped, never guessed: non-literal, empty or
  malformed messages produce nothing

Classification (is_linted) runs first and gates all checks.
"""
from typing import Callable, List

from ..config import Config
from ..diagnostics import Diagnostic
from ..syntax import CallExpr

# Check type signature
# Pure function: (call, config) -> diagnostics
Check = Callable[[CallExpr, Config], List[Diagnostic]]


from .casing import check_starts_with_upper
from .charset import check_not_allowed_symbols
from .classifier import is_linted, package_path
from .sensitive import check_sensitive_data

# Order matters for report order only
CHECKS: List[Check] = [
    check_starts_with_upper,
    check_not_allowed_symbols,
    check_sensitive_data,
]

__all__ = [
    'Check',
    'CHECKS',
    'is_linted',
    'package_path',
    'check_starts_with_upper',
    'check_not_allowed_symbols',
    'check_sensitive_data',
]
