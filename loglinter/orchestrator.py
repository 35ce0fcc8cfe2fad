"""
Orchestrator

Glue layer. Finds Go files, parses them, runs the analyzer and
collects diagnostics per file. No checking logic lives here.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .analyzer import Analyzer
from .config import Config
from .diagnostics import Diagnostic
from .git_changes import changed_go_files
from .parsing import parse_file
from .syntax import File

logger = logging.getLogger(__name__)

# Directories the go tool ignores
_SKIPPED_DIRS = {"vendor", "testdata"}


@dataclass(frozen=True)
class FileReport:
    file: File
    diagnostics: List[Diagnostic]

    def location(self, diagnostic: Diagnostic) -> str:
        line, column = self.file.position(diagnostic.pos)
        return f"{self.file.path}:{line}:{column}"


def _is_skipped(path: Path, root: Path) -> bool:
    parts = path.relative_to(root).parts[:-1]
    return any(p.startswith(".") or p.startswith("_") or p in _SKIPPED_DIRS for p in parts)


def discover_go_files(paths: Iterable[Path]) -> List[Path]:
    """
    Expand paths into Go source files.

    Directories are searched recursively, skipping hidden, vendor and
    testdata directories. Files given explicitly are always kept. A file
    reached through several paths is listed once, at its first position.
    """
    found: Dict[Path, Path] = {}
    for path in paths:
        path = Path(path)
        if path.is_file():
            found.setdefault(path.resolve(), path)
            continue
        for file_path in sorted(path.rglob("*.go")):
            if not _is_skipped(file_path, path):
                found.setdefault(file_path.resolve(), file_path)
    return list(found.values())


def analyze_file(path: Path, analyzer: Analyzer) -> Optional[FileReport]:
    """Analyze one file. Unreadable or unparseable files give None."""
    try:
        file = parse_file(path)
    except OSError as e:
        logger.warning("Cannot read %s: %s", path, e)
        return None
    except ValueError as e:
        logger.warning("Skipping %s: %s", path, e)
        return None

    diagnostics: List[Diagnostic] = []
    analyzer.run(file, diagnostics.append)
    return FileReport(file=file, diagnostics=diagnostics)


def analyze_paths(
    paths: Iterable[Path],
    config: Optional[Config] = None,
    new_from_rev: Optional[str] = None,
) -> List[FileReport]:
    """
    Analyze every Go file under paths.

    With new_from_rev, only files changed since that revision are
    analyzed; this raises ValueError outside a Git work tree.
    """
    paths = [Path(p) for p in paths]
    files = discover_go_files(paths)

    if new_from_rev is not None:
        changed = set()
        for path in paths:
            base = path if path.is_dir() else path.parent
            changed |= changed_go_files(str(base), new_from_rev)
        files = [f for f in files if f.resolve() in changed]

    logger.debug("Analyzing %d Go file(s)", len(files))

    analyzer = Analyzer(config)
    reports = []
    for file_path in files:
        report = analyze_file(file_path, analyzer)
        if report is not None:
            reports.append(report)
    return reports
