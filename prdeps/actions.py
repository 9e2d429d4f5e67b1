"""GitHub Actions workflow-command plumbing: step outputs and failure annotations."""

import sys
from pathlib import Path
from typing import TextIO

from prdeps.utils.logging import logger


class ActionOutputs:
    """Step outputs for downstream workflow steps.

    Values are appended to the ``$GITHUB_OUTPUT`` file when the runner
    provides one, and always kept in ``values`` for the caller.
    """

    def __init__(self, output_path: str | None = None):
        self.output_path = Path(output_path) if output_path else None
        self.values: dict[str, str] = {}

    def set_output(self, name: str, value: object) -> None:
        text = str(value)
        if "\n" in text:
            raise ValueError(f"output '{name}' must be a single line")
        self.values[name] = text

        if self.output_path is None:
            logger.debug(f"No GITHUB_OUTPUT file; output {name}={text} not exported")
            return

        with open(self.output_path, "a", encoding="utf-8") as f:
            f.write(f"{name}={text}\n")
        logger.debug(f"Output {name}={text}")


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_failed(message: str, stream: TextIO | None = None) -> None:
    """Emit an ``::error::`` annotation so the failure shows on the run page."""
    out = stream if stream is not None else sys.stdout
    out.write(f"::error::{_escape_data(message)}\n")
    out.flush()
