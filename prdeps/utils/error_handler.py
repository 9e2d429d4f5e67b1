"""Error handler for the interactive prdeps commands."""

from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from prdeps.errors import PrDepsError
from prdeps.utils.logging import logger


def handle_exceptions(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn prdeps failures into a one-line ClickException (exit code 1)."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except PrDepsError as e:
            logger.opt(exception=True).debug(
                "Command '{cmd}' failed: {err}",
                cmd=func.__name__,
                err=str(e),
            )
            raise click.ClickException(f"{type(e).__name__}: {e}") from e

    return wrapper
