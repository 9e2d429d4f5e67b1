"""Pytest configuration and fixtures."""

import json

import pytest

from prdeps.runner import CommandResult


class FakeRunner:
    """Stands in for prdeps.runner.run_command; replays canned output per command.

    A response is either stdout (exit status 0) or a ``(stdout, stderr, returncode)`` tuple.
    """

    def __init__(self, responses: dict[str, str | tuple[str, str, int]] | None = None):
        self.responses = responses or {}
        self.calls: list[tuple[str, ...]] = []

    async def __call__(self, command, args, *, cwd=None, timeout=600):
        argv = (command, *args)
        self.calls.append(argv)
        key = " ".join(argv)
        if key not in self.responses:
            raise AssertionError(f"unexpected command: {key}")
        response = self.responses[key]
        stdout, stderr, returncode = response if isinstance(response, tuple) else (response, "", 0)
        return CommandResult(command=argv, stdout=stdout, stderr=stderr, returncode=returncode, elapsed=0.0)


def audit_json(total_dependencies=120, low=0, moderate=0, high=0, critical=0, advisories=None) -> str:
    return json.dumps({
        "advisories": advisories or {},
        "metadata": {
            "totalDependencies": total_dependencies,
            "vulnerabilities": {
                "info": 0,
                "low": low,
                "moderate": moderate,
                "high": high,
                "critical": critical,
            },
        },
    })


LODASH_ADVISORY = {
    "1523": {
        "module_name": "lodash",
        "findings": [{"version": "4.17.15", "paths": ["lodash"]}],
        "severity": "high",
        "title": "Prototype Pollution",
    }
}


def depcheck_json(dependencies=(), dev_dependencies=(), missing=None) -> str:
    return json.dumps({
        "dependencies": list(dependencies),
        "devDependencies": list(dev_dependencies),
        "missing": missing or {},
    })


@pytest.fixture
def fake_runner():
    """Runner whose three tools report a clean project."""
    return FakeRunner({
        "npm audit --json": audit_json(),
        "npm outdated --json": "{}",
        "npx depcheck --json": depcheck_json(),
    })
