"""Report section builders.

Each builder runs one external tool through the command runner, decodes its
JSON output and renders a markdown fragment. The gating signal of a section is
taken from the same decoded report that was rendered, so the number in the
summary line and the number used by the gate can never drift apart.
"""

from prdeps import markdown
from prdeps.actions import ActionOutputs
from prdeps.config import ReportConfig
from prdeps.errors import ExternalToolError
from prdeps.models import AuditReport, HygieneReport, OutdatedReport, SectionResult
from prdeps.parsers import parse_audit_report, parse_hygiene_report, parse_outdated_report
from prdeps.runner import CommandResult, CommandRunner, run_command
from prdeps.utils.logging import logger

AUDIT_COMMAND = ("npm", ["audit", "--json"])
OUTDATED_COMMAND = ("npm", ["outdated", "--json"])
DEPCHECK_COMMAND = ("npx", ["depcheck", "--json"])

DEPCHECK_HINT = "to generate this list locally, run `npx depcheck`"

STDERR_TAIL_LINES = 5


def _limit(items: tuple, elide: int) -> tuple:
    return items[:elide] if elide > 0 else items


# ---------------------------------------------------------------------------
# Rendering (pure)
# ---------------------------------------------------------------------------


def render_audit(report: AuditReport, elide: int = 0) -> str:
    """Render the dependency count line and the vulnerabilities block."""
    total = report.total_vulnerabilities
    out = f"Total Dependencies: **{report.total_dependencies}**\n"

    if not report.advisories:
        body = "No vulnerability disclosures found :smile:\n"
    else:
        shown = _limit(report.advisories, elide)
        body = markdown.table(
            ["Root Cause", "Path", "Severity", "Vulnerability"],
            [(a.module_name, a.path, a.severity, a.title) for a in shown],
        )
        body += markdown.elided(len(report.advisories), len(shown))
        body += markdown.hint("to observe and fix vulnerabilities, run `npm audit`")

    return out + markdown.details(f"Vulnerabilities: {total}", body)


def render_outdated(report: OutdatedReport, elide: int = 0) -> str:
    """Render the outdated packages block."""
    if not report.packages:
        body = "No outdated packages found :smile:\n"
    else:
        shown = _limit(report.packages, elide)
        body = markdown.table(
            ["Package", "Current", "Wanted", "Latest"],
            [(p.name, p.current, p.wanted, p.latest) for p in shown],
        )
        body += markdown.elided(report.count, len(shown))
        body += markdown.hint("to observe and update outdated packages, run `npm outdated`")

    return markdown.details(f"Outdated Packages: {report.count}", body)


def _render_name_block(title: str, names: frozenset[str], empty_message: str) -> str:
    if not names:
        body = f"{empty_message}\n"
    else:
        # Sorting is presentation only; counts come from the unsorted set
        body = markdown.bullet_list(sorted(names))
        body += markdown.hint(DEPCHECK_HINT)
    return markdown.details(f"{title}: {len(names)}", body)


def render_hygiene(report: HygieneReport) -> str:
    """Render unused production, unused development and missing blocks."""
    return (
        _render_name_block(
            "Unused Production Dependencies",
            report.unused_production,
            "No unused packages in production :smile:",
        )
        + _render_name_block(
            "Unused Dev Dependencies",
            report.unused_development,
            "No unused packages in development :smile:",
        )
        + _render_name_block(
            "Missing Dependencies",
            report.missing,
            "No missing packages :smile:",
        )
    )


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _stderr_tail(stderr: str) -> str:
    lines = [line.strip() for line in stderr.strip().splitlines() if line.strip()]
    return " | ".join(lines[-STDERR_TAIL_LINES:])


def _decode(result: CommandResult, decode):
    """Apply ``decode`` to a finished command, blaming the tool when it failed.

    A decode failure after a non-zero exit carries the exit status and the
    tail of stderr, where npm and npx print the actual cause.
    """
    label = " ".join(result.command)
    tail = _stderr_tail(result.stderr)
    if result.returncode != 0 and tail:
        logger.warning(f"{label} exited {result.returncode}; stderr: {tail}")

    try:
        return decode(result)
    except ExternalToolError as e:
        if result.returncode == 0:
            raise
        raise ExternalToolError(
            f"{e} ({label} exited {result.returncode}; stderr: {tail or '<empty>'})",
            tool=e.tool,
        ) from e


async def build_audit_section(
    config: ReportConfig,
    outputs: ActionOutputs,
    runner: CommandRunner = run_command,
) -> SectionResult:
    """Run ``npm audit --json`` and render the vulnerabilities section.

    Also emits the ``total-dependencies`` and ``total-vulnerabilities``
    step outputs for later workflow steps.
    """
    command, args = AUDIT_COMMAND
    result = await runner(command, args, cwd=config.working_directory, timeout=config.command_timeout)
    report = _decode(result, lambda r: parse_audit_report(r.stdout))

    outputs.set_output("total-dependencies", report.total_dependencies)
    outputs.set_output("total-vulnerabilities", report.total_vulnerabilities)
    logger.info(
        f"Audit: {report.total_dependencies} dependencies, "
        f"{report.total_vulnerabilities} vulnerabilities, {len(report.advisories)} advisories"
    )

    return SectionResult(
        fragment=render_audit(report, config.elide),
        signal=report.total_vulnerabilities,
    )


async def build_outdated_section(
    config: ReportConfig,
    runner: CommandRunner = run_command,
) -> SectionResult:
    """Run ``npm outdated --json`` and render the outdated packages section."""
    command, args = OUTDATED_COMMAND
    result = await runner(command, args, cwd=config.working_directory, timeout=config.command_timeout)
    report = _decode(result, lambda r: parse_outdated_report(r.stdout, r.returncode))
    logger.info(f"Outdated: {report.count} packages")

    return SectionResult(fragment=render_outdated(report, config.elide), signal=report.count)


async def build_hygiene_section(
    config: ReportConfig,
    runner: CommandRunner = run_command,
) -> SectionResult:
    """Run ``npx depcheck --json`` and render unused/missing dependency lists.

    Contributes no gating signal.
    """
    command, args = DEPCHECK_COMMAND
    result = await runner(command, args, cwd=config.working_directory, timeout=config.command_timeout)
    report = _decode(result, lambda r: parse_hygiene_report(r.stdout))
    logger.info(
        f"Depcheck: {len(report.unused_production)} unused, "
        f"{len(report.unused_development)} unused dev, {len(report.missing)} missing"
    )

    return SectionResult(fragment=render_hygiene(report))
