"""Centralized logging configuration using Loguru.

Usage:
    from prdeps.utils.logging import logger
    logger.info("Message")
    logger.debug("Debug message")  # Only shows if PRDEPS_LOG_LEVEL=DEBUG

Environment Variables:
    PRDEPS_LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
    PRDEPS_LOG_JSON: 0|1 (default: 0, human-readable)
    RUNNER_DEBUG: set to 1 by GitHub when step debug logging is enabled
"""

import json
import os
import sys

from loguru import logger

# Remove default handler
logger.remove()

_log_level = os.environ.get("PRDEPS_LOG_LEVEL", "INFO").upper()
if os.environ.get("RUNNER_DEBUG") == "1":
    _log_level = "DEBUG"
_json_mode = os.environ.get("PRDEPS_LOG_JSON", "0") == "1"


def json_sink(message):
    """Write one JSON object per log record to stderr.

    Stdout is left alone: it carries the report and workflow commands.
    """
    record = message.record

    entry = {
        "level": record["level"].name,
        "time": record["time"].isoformat(),
        "msg": record["message"],
        "module": record["name"],
    }
    for key, value in record["extra"].items():
        entry[key] = value

    if record["exception"]:
        entry["err"] = {
            "type": record["exception"].type.__name__ if record["exception"].type else "Error",
            "message": str(record["exception"].value) if record["exception"].value else "",
        }

    # Never call logger.* inside a sink - causes infinite recursion
    sys.stderr.write(json.dumps(entry, default=str) + "\n")
    sys.stderr.flush()


_human_format = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - "
    "<level>{message}</level>"
)

logger.level("DEBUG", color="<blue>")
logger.level("INFO", color="<white>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")

if _json_mode:
    logger.add(json_sink, level=_log_level, colorize=False)
else:
    logger.add(
        sys.stderr,
        level=_log_level,
        format=_human_format,
        colorize=None,  # Auto-detect: colors if TTY, plain if piped
    )


__all__ = [
    "logger",
]
