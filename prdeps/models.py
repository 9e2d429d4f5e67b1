"""Typed records decoded from the npm tooling output and built by the report."""

from dataclasses import dataclass, field

SEVERITIES = ("low", "moderate", "high", "critical")


@dataclass(frozen=True)
class Advisory:
    """One vulnerability disclosure reported by ``npm audit``."""

    module_name: str
    path: str
    severity: str
    title: str


@dataclass(frozen=True)
class AuditReport:
    """Decoded ``npm audit --json`` document.

    ``advisories`` keeps the key order of the tool's advisory mapping.
    """

    total_dependencies: int
    vulnerabilities: dict[str, int]
    advisories: tuple[Advisory, ...] = ()

    @property
    def total_vulnerabilities(self) -> int:
        """Sum of the per-severity counts, independent of the advisory list."""
        return sum(self.vulnerabilities.values())


@dataclass(frozen=True)
class OutdatedPackage:
    name: str
    current: str
    wanted: str
    latest: str


@dataclass(frozen=True)
class OutdatedReport:
    """Decoded ``npm outdated --json`` document, in the tool's key order."""

    packages: tuple[OutdatedPackage, ...] = ()

    @property
    def count(self) -> int:
        return len(self.packages)


@dataclass(frozen=True)
class HygieneReport:
    """Decoded ``depcheck --json`` document (unused and missing packages)."""

    unused_production: frozenset[str] = frozenset()
    unused_development: frozenset[str] = frozenset()
    missing: frozenset[str] = frozenset()


@dataclass(frozen=True)
class SectionResult:
    """Rendered markdown fragment plus the gating signal derived from it.

    ``signal`` is None for sections that never gate the run.
    """

    fragment: str
    signal: int | None = None


@dataclass
class ReportOutcome:
    """Everything one pipeline run produced."""

    body: str
    vulnerability_count: int
    outdated_count: int
    sections: list[str] = field(default_factory=list)
    comment_posted: bool = False
