"""Configuration for one prdeps run.

Built once at startup by ``load_config`` and passed by parameter to every
stage; nothing downstream reads the process environment.

Config priority (highest to lowest):
1. Explicit overrides (CLI options)
2. Action inputs (INPUT_<NAME> environment variables set by the runner)
3. Built-in defaults
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from prdeps.errors import ConfigurationError
from prdeps.utils.logging import logger

DEFAULT_API_URL = "https://api.github.com"

# input name -> (field name, default). Aliases share a field; the name listed
# first is the primary one and wins when both are set.
INPUTS = {
    "comment-pr": ("comment_on_pr", False),
    "comment-on-pr": ("comment_on_pr", False),
    "elide-attribution": ("elide_attribution", False),
    "fail-on-outdated": ("fail_on_outdated", False),
    "fail-on-vulnerability": ("fail_on_vulnerability", False),
    "elide": ("elide", 0),
    "depcheck": ("run_depcheck", True),
    "command-timeout": ("command_timeout", 600.0),
    "working-directory": ("working_directory", "."),
    "github-token": ("token", None),
}

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


@dataclass(frozen=True)
class ReportConfig:
    """Options and trigger context for a run."""

    comment_on_pr: bool = False
    elide_attribution: bool = False
    fail_on_outdated: bool = False
    fail_on_vulnerability: bool = False
    elide: int = 0
    run_depcheck: bool = True
    command_timeout: float = 600.0
    working_directory: str = "."

    event_name: str | None = None
    repository: str | None = None
    token: str | None = None
    sha: str | None = None
    event_path: str | None = None
    api_url: str = DEFAULT_API_URL
    output_path: str | None = None

    def split_repository(self) -> tuple[str, str]:
        """Split ``owner/name``; raises ConfigurationError if malformed."""
        owner, sep, repo = (self.repository or "").partition("/")
        if not sep or not owner or not repo:
            raise ConfigurationError(
                f"GITHUB_REPOSITORY must look like 'owner/name', got {self.repository!r}"
            )
        return owner, repo


def parse_bool(name: str, value: Any) -> bool:
    """Parse an Action-style boolean input."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigurationError(f"input '{name}' must be true or false, got {value!r}")


def _coerce(name: str, default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        return parse_bool(name, value)
    if isinstance(default, int):
        try:
            number = int(str(value).strip())
        except ValueError as e:
            raise ConfigurationError(f"input '{name}' must be an integer, got {value!r}") from e
        if number < 0:
            raise ConfigurationError(f"input '{name}' must not be negative, got {number}")
        return number
    if isinstance(default, float):
        try:
            number = float(str(value).strip())
        except ValueError as e:
            raise ConfigurationError(f"input '{name}' must be a number, got {value!r}") from e
        if number <= 0:
            raise ConfigurationError(f"input '{name}' must be positive, got {number:g}")
        return number
    text = str(value).strip()
    return text or default


def input_env_name(name: str) -> str:
    """Environment variable the Actions runner uses for input ``name``."""
    return "INPUT_" + name.replace(" ", "_").upper()


def load_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> ReportConfig:
    """Build a ReportConfig from Action inputs, the GitHub context, and overrides.

    Args:
        environ: Environment mapping (defaults to os.environ)
        **overrides: ReportConfig field values; None means "not given"

    Returns:
        Frozen configuration for the run

    Raises:
        ConfigurationError: An input could not be parsed
    """
    env = os.environ if environ is None else environ

    values: dict[str, Any] = {}
    for name, (field_name, default) in INPUTS.items():
        raw = env.get(input_env_name(name))
        # The runner exports declared-but-unset inputs as empty strings
        if raw is None or not raw.strip():
            continue
        if field_name in values:
            logger.warning(f"Input '{name}' ignored; an earlier alias for {field_name} is already set")
            continue
        coerced = _coerce(name, default, raw)
        if coerced is not None:
            values[field_name] = coerced

    values.setdefault("token", env.get("GITHUB_TOKEN") or None)
    values["event_name"] = env.get("GITHUB_EVENT_NAME") or None
    values["repository"] = env.get("GITHUB_REPOSITORY") or None
    values["sha"] = env.get("GITHUB_SHA") or None
    values["event_path"] = env.get("GITHUB_EVENT_PATH") or None
    values["api_url"] = (env.get("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
    values["output_path"] = env.get("GITHUB_OUTPUT") or None

    for field_name, value in overrides.items():
        if value is None:
            continue
        default = next((d for f, d in INPUTS.values() if f == field_name), None)
        values[field_name] = _coerce(field_name, default, value) if default is not None else value

    return ReportConfig(**values)
