"""
Message casing check.

Log messages must start with a lowercase letter. Letter case follows
Unicode categories, so "Über" is flagged just like "Hello".
"""
import unicodedata
from typing import List

from ..config import Config
from ..diagnostics import Diagnostic, single_edit_fix
from ..literals import first_char_source
from ..syntax import CallExpr
from .utils import first_string_literal, string_literal

MESSAGE = "log messages must start with lowercase letter"


def check_starts_with_upper(call: CallExpr, config: Config) -> List[Diagnostic]:
    """
    Flag a message literal whose first code point is an uppercase letter.

    The fix rewrites only that code point, so escapes and the rest of
    the literal are left untouched.
    """
    text = string_literal(call)
    if text is None:
        return []

    first = text[0]
    if unicodedata.category(first) != "Lu":
        return []

    lit = first_string_literal(call)
    # Skip the opening quote (always a single byte)
    start = lit.pos + 1
    end = start + len(first_char_source(lit.value).encode("utf-8"))

    # Multi-character lowercase forms (U+0130) keep their base letter only
    lowered = first.lower()[0]

    return [
        Diagnostic(
            pos=lit.pos,
            end=lit.end,
            message=MESSAGE,
            suggested_fixes=single_edit_fix(
                f"letter {first} must be lowercase", start, end, lowered,
            ),
        )
    ]
