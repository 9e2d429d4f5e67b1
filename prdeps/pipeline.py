"""Report pipeline: audit -> outdated -> depcheck -> compose -> comment -> gates.

Section builders run strictly one after another; the report body is the
concatenation of their fragments in that fixed order. The comment is posted
before the gates are evaluated, so a failing pull request still receives its
report.
"""

import asyncio
from collections.abc import Callable
from typing import TextIO

from prdeps.actions import ActionOutputs, set_failed
from prdeps.config import ReportConfig
from prdeps.errors import GateFailure, PrDepsError
from prdeps.github import GitHubClient, read_pull_request_number
from prdeps.models import ReportOutcome
from prdeps.runner import CommandRunner, run_command
from prdeps.sections import build_audit_section, build_hygiene_section, build_outdated_section
from prdeps.utils.exit_codes import ExitCodes
from prdeps.utils.logging import logger
from prdeps.validation import validate_context

ClientFactory = Callable[[ReportConfig], GitHubClient]


def attribution_footer(sha: str | None) -> str:
    """Right-aligned footer crediting prdeps and naming the commit."""
    commit = f"`{sha}`" if sha else "an unknown commit"
    return (
        "\n"
        '<p align="right">\n'
        f"Generated by :robot: <b>prdeps</b> against {commit}\n"
        "</p>\n"
    )


async def build_report(
    config: ReportConfig,
    outputs: ActionOutputs,
    runner: CommandRunner = run_command,
) -> ReportOutcome:
    """Run every section builder in order and assemble the report body."""
    audit = await build_audit_section(config, outputs, runner)
    outdated = await build_outdated_section(config, runner)
    sections = [audit.fragment, outdated.fragment]

    if config.run_depcheck:
        hygiene = await build_hygiene_section(config, runner)
        sections.append(hygiene.fragment)
    else:
        logger.info("Depcheck disabled; skipping unused/missing dependency section")

    body = "".join(sections)
    if not config.elide_attribution:
        body += attribution_footer(config.sha)

    return ReportOutcome(
        body=body,
        vulnerability_count=audit.signal,
        outdated_count=outdated.signal,
        sections=sections,
    )


def evaluate_gates(config: ReportConfig, outcome: ReportOutcome) -> None:
    """Raise GateFailure for the first configured threshold that is exceeded.

    The outdated gate is checked before the vulnerability gate.
    """
    if config.fail_on_outdated and outcome.outdated_count > 0:
        raise GateFailure(f"{outcome.outdated_count} package(s) are outdated")
    if config.fail_on_vulnerability and outcome.vulnerability_count > 0:
        raise GateFailure(
            f"{outcome.vulnerability_count} vulnerabilitie(s) were found in this project's dependencies"
        )


def default_client_factory(config: ReportConfig) -> GitHubClient:
    return GitHubClient(config.token, api_url=config.api_url)


async def post_comment(config: ReportConfig, body: str, client_factory: ClientFactory) -> None:
    owner, repo = config.split_repository()
    pr_number = read_pull_request_number(config.event_path)
    async with client_factory(config) as client:
        await client.create_comment(owner, repo, pr_number, body)


async def run_pipeline(
    config: ReportConfig,
    *,
    outputs: ActionOutputs | None = None,
    runner: CommandRunner = run_command,
    client_factory: ClientFactory = default_client_factory,
) -> ReportOutcome:
    """Validate, build, optionally comment, then gate.

    Raises:
        PrDepsError: Any validation, tool, transport or gate failure
    """
    validate_context(config)
    outputs = outputs if outputs is not None else ActionOutputs(config.output_path)

    outcome = await build_report(config, outputs, runner)

    if config.comment_on_pr:
        await post_comment(config, outcome.body, client_factory)
        outcome.comment_posted = True

    evaluate_gates(config, outcome)
    return outcome


def run(
    config: ReportConfig,
    *,
    outputs: ActionOutputs | None = None,
    runner: CommandRunner = run_command,
    client_factory: ClientFactory = default_client_factory,
    stream: TextIO | None = None,
) -> int:
    """Run the pipeline and turn any failure into one message and exit code 1.

    Every failure kind exits the same way; the log line says which kind it was.
    """
    try:
        asyncio.run(
            run_pipeline(config, outputs=outputs, runner=runner, client_factory=client_factory)
        )
    except GateFailure as e:
        logger.error(f"[GATE] {e}")
        set_failed(str(e), stream)
        return ExitCodes.FAILURE
    except PrDepsError as e:
        logger.opt(exception=True).debug("Pipeline aborted")
        logger.error(f"[{e.kind.upper()}] {e}")
        set_failed(str(e), stream)
        return ExitCodes.FAILURE
    except Exception as e:
        logger.opt(exception=True).error(f"Unexpected {type(e).__name__}: {e}")
        set_failed(f"{type(e).__name__}: {e}", stream)
        return ExitCodes.FAILURE

    logger.info("Dependency report complete")
    return ExitCodes.SUCCESS
