"""
Applying suggested fixes.

Only the first suggested fix of each diagnostic is used. Edits are
accepted in diagnostic order; an edit overlapping one already accepted
is dropped. Fixes competing for the same literal therefore resolve to
the one reported first, and the rest show up again on the next run.
"""
import logging
from pathlib import Path
from typing import Iterable, List, Tuple

from .diagnostics import Diagnostic, TextEdit

logger = logging.getLogger(__name__)


def _overlaps(a: TextEdit, b: TextEdit) -> bool:
    if a.pos == b.pos:
        return True
    return a.pos < b.end and b.pos < a.end


def select_edits(diagnostics: Iterable[Diagnostic]) -> List[TextEdit]:
    """Pick a conflict-free set of edits, sorted by position."""
    accepted: List[TextEdit] = []
    for diagnostic in diagnostics:
        if not diagnostic.suggested_fixes:
            continue
        fix = diagnostic.suggested_fixes[0]
        if any(_overlaps(edit, other) for edit in fix.text_edits for other in accepted):
            logger.warning(
                "Skipping fix %r at offset %d: conflicts with an earlier fix",
                fix.message, diagnostic.pos,
            )
            continue
        accepted.extend(fix.text_edits)
    return sorted(accepted, key=lambda e: e.pos)


def apply_fixes(source: bytes, diagnostics: Iterable[Diagnostic]) -> Tuple[bytes, int]:
    """
    Return the fixed source and the number of edits applied.
    """
    edits = select_edits(diagnostics)
    out = []
    cursor = 0
    for edit in edits:
        out.append(source[cursor:edit.pos])
        out.append(edit.new_text)
        cursor = edit.end
    out.append(source[cursor:])
    return b"".join(out), len(edits)


def fix_file(path: Path, source: bytes, diagnostics: List[Diagnostic]) -> int:
    """Rewrite a file in place. Returns the number of edits applied."""
    fixed, count = apply_fixes(source, diagnostics)
    if count:
        Path(path).write_bytes(fixed)
        logger.info("Applied %d fix(es) to %s", count, path)
    return count
