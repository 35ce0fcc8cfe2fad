"""
Diagnostics produced by the checks.

A Diagnostic covers a byte range of the file and may carry suggested
fixes; each fix is an ordered list of text edits. Everything here is
immutable: diagnostics are produced once and handed to the reporter.
"""
from dataclasses import dataclass
from typing import Callable, Tuple


@dataclass(frozen=True)
class TextEdit:
    pos: int
    end: int
    new_text: bytes


@dataclass(frozen=True)
class SuggestedFix:
    message: str
    text_edits: Tuple[TextEdit, ...]


@dataclass(frozen=True)
class Diagnostic:
    pos: int
    end: int
    message: str
    suggested_fixes: Tuple[SuggestedFix, ...] = ()


# Reporting sink supplied by the host
Reporter = Callable[[Diagnostic], None]


def single_edit_fix(message: str, pos: int, end: int, new_text: str) -> Tuple[SuggestedFix, ...]:
    """Build the one-fix, one-edit tuple that every check attaches."""
    edit = TextEdit(pos=pos, end=end, new_text=new_text.encode("utf-8"))
    return (SuggestedFix(message=message, text_edits=(edit,)),)
