"""Decode the JSON documents printed by npm audit, npm outdated and depcheck.

Every decoder checks the shape it relies on and raises ParseError naming the
offending location, rather than letting a KeyError or TypeError escape from
deep inside the renderer.
"""

import json
from typing import Any

from prdeps.errors import ExternalToolError, ParseError
from prdeps.models import SEVERITIES, Advisory, AuditReport, HygieneReport, OutdatedPackage, OutdatedReport

AUDIT_TOOL = "npm audit"
OUTDATED_TOOL = "npm outdated"
DEPCHECK_TOOL = "depcheck"

_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    type(None): "null",
}


def _type_name(value: Any) -> str:
    return _TYPE_NAMES.get(type(value), type(value).__name__)


def _load(tool: str, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        snippet = text.strip()[:80] or "<empty output>"
        raise ParseError(tool, "$", "a JSON document", f"invalid JSON ({e.msg}): {snippet!r}") from e


def _expect(tool: str, path: str, value: Any, kind: type, expected: str) -> Any:
    # bool is an int subclass; a count of True is still a shape error
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ParseError(tool, path, expected, _type_name(value))
    return value


def _field(tool: str, path: str, mapping: dict, key: str, kind: type, expected: str) -> Any:
    location = f"{path}.{key}" if path else key
    if key not in mapping:
        raise ParseError(tool, location, expected, "missing")
    return _expect(tool, location, mapping[key], kind, expected)


def _raise_tool_error(tool: str, document: Any) -> None:
    """npm reports its own failures as ``{"error": {"code", "summary"}}``."""
    if isinstance(document, dict) and isinstance(document.get("error"), dict):
        err = document["error"]
        code = err.get("code") or "unknown"
        summary = err.get("summary") or err.get("detail") or "no details"
        raise ExternalToolError(f"{tool} failed ({code}): {summary}", tool=tool)


def parse_audit_report(text: str) -> AuditReport:
    """Decode ``npm audit --json`` output.

    Expected shape::

        {"advisories": {id: {"module_name", "findings": [{"paths": [...]}],
                             "severity", "title"}},
         "metadata": {"totalDependencies": int,
                      "vulnerabilities": {"low", "moderate", "high", "critical"}}}
    """
    document = _load(AUDIT_TOOL, text)
    _raise_tool_error(AUDIT_TOOL, document)
    _expect(AUDIT_TOOL, "$", document, dict, "object")

    metadata = _field(AUDIT_TOOL, "", document, "metadata", dict, "object")
    total_dependencies = _field(AUDIT_TOOL, "metadata", metadata, "totalDependencies", int, "integer")
    counts = _field(AUDIT_TOOL, "metadata", metadata, "vulnerabilities", dict, "object")
    vulnerabilities = {
        severity: _field(AUDIT_TOOL, "metadata.vulnerabilities", counts, severity, int, "integer")
        for severity in SEVERITIES
    }

    advisories = []
    raw_advisories = _field(AUDIT_TOOL, "", document, "advisories", dict, "object")
    for advisory_id, raw in raw_advisories.items():
        path = f"advisories.{advisory_id}"
        _expect(AUDIT_TOOL, path, raw, dict, "object")
        findings = _field(AUDIT_TOOL, path, raw, "findings", list, "array")
        if not findings:
            raise ParseError(AUDIT_TOOL, f"{path}.findings", "non-empty array", "empty array")
        first = _expect(AUDIT_TOOL, f"{path}.findings[0]", findings[0], dict, "object")
        paths = _field(AUDIT_TOOL, f"{path}.findings[0]", first, "paths", list, "array")
        if not paths:
            raise ParseError(AUDIT_TOOL, f"{path}.findings[0].paths", "non-empty array", "empty array")
        advisories.append(
            Advisory(
                module_name=_field(AUDIT_TOOL, path, raw, "module_name", str, "string"),
                path=_expect(AUDIT_TOOL, f"{path}.findings[0].paths[0]", paths[0], str, "string"),
                severity=_field(AUDIT_TOOL, path, raw, "severity", str, "string"),
                title=_field(AUDIT_TOOL, path, raw, "title", str, "string"),
            )
        )

    return AuditReport(
        total_dependencies=total_dependencies,
        vulnerabilities=vulnerabilities,
        advisories=tuple(advisories),
    )


def parse_outdated_report(text: str, returncode: int = 0) -> OutdatedReport:
    """Decode ``npm outdated --json`` output: ``{name: {current, wanted, latest}}``.

    npm prints nothing at all, and exits 0, when every package is up to date.
    Empty output with a non-zero exit status is a failed run and is decoded
    (and rejected) like any other malformed document.
    """
    if not text.strip() and returncode == 0:
        return OutdatedReport()

    document = _load(OUTDATED_TOOL, text)
    _raise_tool_error(OUTDATED_TOOL, document)
    _expect(OUTDATED_TOOL, "$", document, dict, "object")

    packages = []
    for name, raw in document.items():
        _expect(OUTDATED_TOOL, name, raw, dict, "object")
        versions = {}
        for key in ("current", "wanted", "latest"):
            # "current" is absent for packages that are declared but not installed
            value = raw.get(key, "MISSING")
            versions[key] = _expect(OUTDATED_TOOL, f"{name}.{key}", value, str, "string")
        packages.append(OutdatedPackage(name=name, **versions))

    return OutdatedReport(packages=tuple(packages))


def _name_list(document: dict, key: str) -> frozenset[str]:
    value = _field(DEPCHECK_TOOL, "", document, key, list, "array of package names")
    for index, item in enumerate(value):
        _expect(DEPCHECK_TOOL, f"{key}[{index}]", item, str, "string")
    return frozenset(value)


def parse_hygiene_report(text: str) -> HygieneReport:
    """Decode ``depcheck --json`` output.

    ``dependencies`` and ``devDependencies`` are arrays of unused names;
    ``missing`` maps each missing name to the files that import it.
    """
    document = _load(DEPCHECK_TOOL, text)
    _expect(DEPCHECK_TOOL, "$", document, dict, "object")

    missing = _field(DEPCHECK_TOOL, "", document, "missing", dict, "object")

    return HygieneReport(
        unused_production=_name_list(document, "dependencies"),
        unused_development=_name_list(document, "devDependencies"),
        missing=frozenset(missing),
    )
