"""Run the pull-request dependency report (the Action entry point)."""

import click

from prdeps.config import load_config
from prdeps.errors import ConfigurationError


@click.command("run")
@click.option(
    "--comment-pr/--no-comment-pr",
    "comment_on_pr",
    default=None,
    help="Post the report as a pull request comment",
)
@click.option(
    "--elide-attribution/--no-elide-attribution",
    default=None,
    help="Leave out the 'Generated by' footer",
)
@click.option(
    "--fail-on-outdated/--no-fail-on-outdated",
    default=None,
    help="Fail when any package is outdated",
)
@click.option(
    "--fail-on-vulnerability/--no-fail-on-vulnerability",
    default=None,
    help="Fail when any vulnerability is reported",
)
@click.option("--elide", type=click.IntRange(min=0), default=None, help="Max rows per table (0 = all)")
@click.option("--depcheck/--no-depcheck", "run_depcheck", default=None, help="Include unused/missing dependencies")
@click.option("--timeout", "command_timeout", type=float, default=None, help="Seconds allowed per external command")
@click.option("--root", "working_directory", default=None, help="Directory containing package.json")
def run(comment_on_pr, elide_attribution, fail_on_outdated, fail_on_vulnerability, elide, run_depcheck,
        command_timeout, working_directory):
    """Build the dependency report for a pull request, comment, and gate.

    Options not given on the command line are read from the Action inputs
    (INPUT_COMMENT-PR, INPUT_FAIL-ON-OUTDATED, ...). The GitHub context comes
    from GITHUB_EVENT_NAME, GITHUB_REPOSITORY, GITHUB_TOKEN, GITHUB_SHA and
    GITHUB_EVENT_PATH.

    \b
    Exit Codes:
      0 = Report built, all enabled gates passed
      1 = Validation failure, gate failure, or tool/transport error
    """
    from prdeps.actions import set_failed
    from prdeps.pipeline import run as run_pipeline
    from prdeps.utils.logging import logger

    try:
        config = load_config(
            comment_on_pr=comment_on_pr,
            elide_attribution=elide_attribution,
            fail_on_outdated=fail_on_outdated,
            fail_on_vulnerability=fail_on_vulnerability,
            elide=elide,
            run_depcheck=run_depcheck,
            command_timeout=command_timeout,
            working_directory=working_directory,
        )
    except ConfigurationError as e:
        logger.error(f"[CONFIGURATION] {e}")
        set_failed(str(e))
        raise SystemExit(1) from e

    raise SystemExit(run_pipeline(config))
