"""
Changed-file selection from Git.

Lists Go files that differ from a given revision, so a run can be
limited to new code. Uses the git CLI through subprocess.
"""
import logging
import subprocess
from pathlib import Path
from typing import List, Set, Tuple

logger = logging.getLogger(__name__)


class GitChanges:
    """Answers which files of a work tree changed since a revision."""

    def __init__(self, repo_path: str):
        self.repo_path = Path(repo_path).resolve()

        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=self.repo_path,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if result.returncode != 0:
            raise ValueError(f"Not a Git repository: {repo_path}")
        self.top_level = Path(result.stdout.strip()).resolve()

    def _run_git(self, args: List[str], check: bool = True) -> Tuple[int, str, str]:
        result = subprocess.run(
            ["git", "-c", "core.quotepath=off"] + args,
            cwd=self.top_level,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        if check and result.returncode != 0:
            raise RuntimeError(
                f"Git command failed: {' '.join(args)}\n{result.stderr}"
            )
        return result.returncode, result.stdout, result.stderr

    def changed_files(self, rev: str) -> Set[Path]:
        """
        Files changed between rev and the work tree, plus untracked files.

        Deleted files are left out. Paths are absolute.
        """
        _, diff_out, _ = self._run_git(
            ["diff", "--name-only", "--diff-filter=d", rev, "--"]
        )
        _, untracked_out, _ = self._run_git(
            ["ls-files", "--others", "--exclude-standard"]
        )

        changed = set()
        for line in diff_out.splitlines() + untracked_out.splitlines():
            if line:
                changed.add((self.top_level / line).resolve())

        logger.debug("%d file(s) changed since %s", len(changed), rev)
        return changed


def changed_go_files(repo_path: str, rev: str) -> Set[Path]:
    changes = GitChanges(repo_path)
    return {p for p in changes.changed_files(rev) if p.suffix == ".go"}
