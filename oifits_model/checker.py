from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .base import Table
    from .file import OIFitsFile

log = logging.getLogger(__name__)


class Severity(IntEnum):
    INFO = 0
    WARNING = 1
    SEVERE = 2


@dataclass(frozen=True)
class Diagnostic:
    """One finding of the checker, located by table and keyword/column name."""

    severity: Severity
    message: str
    ext_number: Optional[int] = None
    ext_name: Optional[str] = None
    name: Optional[str] = None

    def __str__(self) -> str:
        where = ""
        if self.ext_name is not None:
            where = f"[{self.ext_name}#{self.ext_number}] "
        if self.name is not None:
            where += f"{self.name}: "
        return f"{self.severity.name}\t{where}{self.message}"


class OIFitsChecker:
    """Accumulates diagnostics of a syntactic and referential file check.

    Nothing raised here aborts a check: every table is always visited and
    the diagnostics keep their insertion order.
    """

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []

    def clear(self) -> None:
        self.diagnostics = []

    def add(self, severity: Severity, message: str, table: Optional["Table"] = None,
            name: Optional[str] = None) -> Diagnostic:
        diag = Diagnostic(
            severity,
            message,
            ext_number=table.ext_number if table is not None else None,
            ext_name=table.ext_name if table is not None else None,
            name=name,
        )
        self.diagnostics.append(diag)
        log.debug("%s", diag)
        return diag

    def info(self, message: str, table: Optional["Table"] = None, name: Optional[str] = None) -> Diagnostic:
        return self.add(Severity.INFO, message, table, name)

    def warning(self, message: str, table: Optional["Table"] = None, name: Optional[str] = None) -> Diagnostic:
        return self.add(Severity.WARNING, message, table, name)

    def severe(self, message: str, table: Optional["Table"] = None, name: Optional[str] = None) -> Diagnostic:
        return self.add(Severity.SEVERE, message, table, name)

    @property
    def n_warnings(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.WARNING)

    @property
    def n_severe(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity is Severity.SEVERE)

    def run(self, oifits: "OIFitsFile") -> "OIFitsChecker":
        """Check ``oifits`` from scratch; previous diagnostics are dropped."""
        self.clear()
        self.info("Analysing values and references")
        oifits.check(self)
        log.info("Checked %s: %d warning(s), %d severe(s)",
                 oifits.absolute_path or "<memory>", self.n_warnings, self.n_severe)
        return self

    def get_report(self) -> str:
        return "\n".join(str(d) for d in self.diagnostics)

    def __repr__(self) -> str:
        return f"OIFitsChecker(warnings={self.n_warnings}, severe={self.n_severe})"
