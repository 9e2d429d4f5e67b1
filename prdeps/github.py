"""Pull-request comment collaborator for the GitHub REST API."""

import json
from pathlib import Path
from typing import Any

import httpx

from prdeps import __version__
from prdeps.errors import ConfigurationError, TransportError
from prdeps.utils.logging import logger

DEFAULT_TIMEOUT = 30.0


def read_pull_request_number(event_path: str | None) -> int:
    """Return ``pull_request.number`` from the triggering event payload.

    Raises:
        ConfigurationError: No payload, unreadable payload, or no PR number
    """
    if not event_path:
        raise ConfigurationError("GITHUB_EVENT_PATH not provided; cannot find the pull request number")

    path = Path(event_path)
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"could not read event payload {path}: {e}") from e

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    if not isinstance(number, int) or isinstance(number, bool):
        raise ConfigurationError(f"event payload {path} has no pull_request.number")
    return number


class GitHubClient:
    """Minimal async client for the issues API.

    Args:
        token: Access token sent as a bearer credential
        api_url: REST API root (GITHUB_API_URL on Enterprise Server)
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.api_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"prdeps/{__version__}",
            },
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str) -> dict[str, Any]:
        """Post ``body`` as a new comment on the issue or pull request.

        Raises:
            TransportError: Network failure or non-2xx response
        """
        url = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"
        logger.debug(f"POST {self.api_url}{url} ({len(body)} chars)")
        try:
            resp = await self._client.post(url, json={"body": body})
        except httpx.HTTPError as e:
            raise TransportError(f"could not post comment to {owner}/{repo}#{issue_number}: {e}") from e

        if resp.is_error:
            raise TransportError(
                f"GitHub rejected comment on {owner}/{repo}#{issue_number}: "
                f"HTTP {resp.status_code} {resp.text[:200]}",
                status_code=resp.status_code,
            )

        logger.info(f"Posted report to {owner}/{repo}#{issue_number}")
        return resp.json()
