"""
Linter configuration.

Config is immutable and passed explicitly to the Analyzer, so several
analyzers with different settings can run side by side.
"""
from dataclasses import dataclass
from typing import Iterable, Tuple

# Import paths of the logging libraries whose calls are checked
SLOG_PACKAGE = "log/slog"
ZAP_PACKAGE  = "go.uber.org/zap"

LOGGER_PACKAGES = frozenset({SLOG_PACKAGE, ZAP_PACKAGE})

LOG_METHODS = frozenset({"Info", "Debug", "Warn", "Error", "Fatal"})

DEFAULT_SENSITIVE_PATTERNS: Tuple[str, ...] = (
    "token",
    "password",
    "passwd",
    "secret",
    "apikey",
    "credential",
    "auth",
    "private",
)


@dataclass(frozen=True)
class Config:
    """
    Sensitive patterns are matched case-insensitively, so they are
    stored stripped and lower-cased. Blank entries are dropped, and a
    config left with no pattern falls back to the defaults; a non-empty
    set replaces them in full.
    """
    sensitive_patterns: Tuple[str, ...] = DEFAULT_SENSITIVE_PATTERNS

    def __post_init__(self):
        cleaned = tuple(p.strip().lower() for p in self.sensitive_patterns if p.strip())
        # Frozen dataclass, normalize in place
        object.__setattr__(self, "sensitive_patterns", cleaned or DEFAULT_SENSITIVE_PATTERNS)

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "Config":
        """Build a config from user-supplied patterns (any iterable)."""
        return cls(sensitive_patterns=tuple(patterns))
