"""Centralized exit codes for prdeps."""


class ExitCodes:
    """Exit codes reported to the workflow runner."""

    SUCCESS = 0

    # Validation, gate, tool and transport failures all share this code;
    # the Actions runner only distinguishes zero from non-zero.
    FAILURE = 1
