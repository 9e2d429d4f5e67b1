"""Small GitHub-flavoured markdown builders used by the report sections.

All helpers are pure: identical input gives byte-identical output.
"""

from collections.abc import Iterable, Sequence


def _cell(value: str) -> str:
    # A literal pipe would end the cell early
    return str(value).replace("|", "\\|").replace("\n", " ")


def table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a pipe table with one line per row."""
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "--|" * len(headers),
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(value) for value in row) + " |")
    return "\n".join(lines) + "\n"


def bullet_list(names: Iterable[str]) -> str:
    """Render names as a bulleted list of inline-code items."""
    return "".join(f"* `{name}`\n" for name in names)


def hint(text: str) -> str:
    """Render a one-line blockquote hint."""
    return f"> {text}\n"


def details(summary: str, body: str) -> str:
    """Wrap ``body`` in a collapsible <details> block titled ``summary``."""
    return f"<details>\n<summary>{summary}</summary>\n\n{body}</details>\n"


def elided(total: int, shown: int) -> str:
    """Line noting rows left out of a truncated table, or "" if none were."""
    hidden = total - shown
    if hidden <= 0:
        return ""
    return f"_... and {hidden} more_\n"
