"""Exception hierarchy for prdeps.

Every failure propagates unrecovered to the top-level handler in
``prdeps.pipeline.run``, which turns it into a single failure message and a
non-zero exit status.
"""


class PrDepsError(Exception):
    """Base class for all prdeps failures."""

    kind = "error"


class ConfigurationError(PrDepsError):
    """Missing or invalid trigger context, input, or credential."""

    kind = "configuration"


class ExternalToolError(PrDepsError):
    """An external CLI could not be run or produced unusable output.

    Attributes:
        tool: Short name of the tool (e.g. "npm audit")
    """

    kind = "external-tool"

    def __init__(self, message: str, tool: str | None = None):
        super().__init__(message)
        self.tool = tool


class CommandTimeoutError(ExternalToolError):
    """A child process ran past its timeout and was killed."""

    def __init__(self, tool: str, timeout: float):
        super().__init__(f"{tool} timed out after {timeout:g}s", tool=tool)
        self.timeout = timeout


class ParseError(ExternalToolError):
    """Tool output did not match the JSON shape we decode.

    Attributes:
        path: Location inside the document, e.g. "metadata.vulnerabilities.low"
        expected: Description of the expected shape
        actual: Type name (or description) of what was found
    """

    def __init__(self, tool: str, path: str, expected: str, actual: str):
        super().__init__(
            f"{tool}: unexpected JSON at '{path}': expected {expected}, got {actual}",
            tool=tool,
        )
        self.path = path
        self.expected = expected
        self.actual = actual


class GateFailure(PrDepsError):
    """A configured threshold was exceeded. A designed failure path, not a bug."""

    kind = "gate"


class TransportError(PrDepsError):
    """The pull-request comment could not be posted.

    Attributes:
        status_code: HTTP status when a response was received, else None
    """

    kind = "transport"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
