"""
Analyzer - the lint pass.

Visits each call expression of a file once, in source order. The
classifier gates; the checks run independently on every logging call
and their diagnostics go straight to the host's reporter.
"""
from typing import List, Optional

from .binding import TypeInfo
from .config import Config
from .detectors import CHECKS, is_linted
from .diagnostics import Diagnostic, Reporter
from .syntax import CallExpr, File

NAME = "loglinter"
DOC  = "loglinter checks for common logging issues"


class Analyzer:
    """
    Holds the configuration and nothing else, so one instance can serve
    any number of files, concurrently if the host wants to.
    """

    name = NAME
    doc = DOC

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config is not None else Config()

    def check_call(self, call: CallExpr, type_info: TypeInfo) -> List[Diagnostic]:
        if not is_linted(call, type_info):
            return []

        diagnostics = []
        for check in CHECKS:
            diagnostics.extend(check(call, self.config))
        return diagnostics

    def run(self, file: File, report: Reporter) -> None:
        for call in file.calls:
            for diagnostic in self.check_call(call, file.type_info):
                report(diagnostic)
