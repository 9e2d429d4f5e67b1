"""Checks on the trigger context, run before any child process is spawned."""

from prdeps.config import ReportConfig
from prdeps.errors import ConfigurationError

PULL_REQUEST_EVENT = "pull_request"


def validate_context(config: ReportConfig) -> None:
    """Fail fast when the run cannot produce a pull-request report.

    The access token is only required when the report will be posted as a
    comment; a report-only run works without one.

    Raises:
        ConfigurationError: The first problem found
    """
    if config.event_name != PULL_REQUEST_EVENT:
        raise ConfigurationError(
            "this action can only run in response to pull request events; "
            f"GITHUB_EVENT_NAME is {config.event_name!r}, expected {PULL_REQUEST_EVENT!r}"
        )
    if not config.repository:
        raise ConfigurationError(
            "action was not run in the context of a github repository; "
            "GITHUB_REPOSITORY env not provided"
        )
    if config.comment_on_pr:
        if not config.token:
            raise ConfigurationError("GITHUB_TOKEN not found; it is required to comment on the pull request")
        # Surfaces a malformed owner/name before any work is done
        config.split_repository()
