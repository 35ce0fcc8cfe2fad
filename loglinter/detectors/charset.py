"""
Message character-set check.

Every code point of a message falls in one of three classes:
- allowed: ASCII letters, ASCII digits, space
- non-Latin letter: any other Unicode letter (Cyrillic, Greek, ...)
- special: everything else (punctuation, symbols, emoji, controls)

Non-Latin letters and special symbols are reported separately. Both
diagnostics may fire on the same literal; each carries its own fix for
the whole literal, and the two fixes are not meant to be combined.
"""
from typing import List

from ..config import Config
from ..diagnostics import Diagnostic, single_edit_fix
from ..literals import quote
from ..syntax import CallExpr
from .utils import first_string_literal, string_literal

NON_LATIN_MESSAGE = "log messages must only contains latin letters"
SPECIAL_MESSAGE   = "log messages must not contains any special symbols"


def is_allowed(ch: str) -> bool:
    return (
        "a" <= ch <= "z"
        or "A" <= ch <= "Z"
        or "0" <= ch <= "9"
        or ch == " "
    )


def remove_non_latin(text: str) -> str:
    """Keep only ASCII letters, ASCII digits and spaces."""
    return "".join(ch for ch in text if is_allowed(ch))


def remove_special_symbols(text: str) -> str:
    """Keep only letters and digits of any script, and spaces."""
    return "".join(ch for ch in text if ch.isalpha() or ch.isdecimal() or ch == " ")


def check_not_allowed_symbols(call: CallExpr, config: Config) -> List[Diagnostic]:
    text = string_literal(call)
    if text is None:
        return []

    has_non_latin = False
    has_special = False
    for ch in text:
        if is_allowed(ch):
            continue
        if ch.isalpha():
            has_non_latin = True
        else:
            has_special = True

    lit = first_string_literal(call)
    diagnostics = []

    if has_non_latin:
        diagnostics.append(Diagnostic(
            pos=lit.pos,
            end=lit.end,
            message=NON_LATIN_MESSAGE,
            suggested_fixes=single_edit_fix(
                "remove non-latin characters",
                lit.pos, lit.end, quote(remove_non_latin(text)),
            ),
        ))

    if has_special:
        diagnostics.append(Diagnostic(
            pos=lit.pos,
            end=lit.end,
            message=SPECIAL_MESSAGE,
            suggested_fixes=single_edit_fix(
                "remove special symbols",
                lit.pos, lit.end, quote(remove_special_symbols(text)),
            ),
        ))

    return diagnostics
