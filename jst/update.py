"""Release check against the GitHub releases API."""

import logging
import re
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
_REQUEST_TIMEOUT = 10.0
_LEADING_DIGITS = re.compile(r"\d+")


class UpdateError(Exception):
    """Raised when the latest release cannot be determined."""


@dataclass
class UpdateStatus:
    """Outcome of a release check.

    Attributes:
        current: Installed version, without a leading ``v``.
        latest: Newest published version, without a leading ``v``.
        update_available: Whether *latest* is newer than *current*.
        comparable: False when *current* has no numeric version (for
            example ``"unknown"`` from an uninstalled checkout).
    """

    current: str
    latest: str
    update_available: bool
    comparable: bool = True


def fetch_latest_version(
    repo: str,
    *,
    api_url: str = DEFAULT_API_URL,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Return the tag of the latest release of *repo*, minus any ``v`` prefix.

    Args:
        repo: GitHub repository as ``owner/name``.
        api_url: Base URL of the GitHub REST API.
        transport: Optional ``httpx`` transport (used by tests).

    Raises:
        UpdateError: On transport failure, a non-2xx status, or a response
            without a ``tag_name``.
    """
    url = f"{api_url.rstrip('/')}/repos/{repo}/releases/latest"
    logger.debug("Fetching %s", url)

    try:
        with httpx.Client(timeout=_REQUEST_TIMEOUT, transport=transport) as client:
            response = client.get(
                url, headers={"Accept": "application/vnd.github+json"}
            )
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPStatusError as exc:
        raise UpdateError(
            f"Release lookup for {repo} returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.HTTPError as exc:
        raise UpdateError(f"Release lookup for {repo} failed: {exc}") from exc
    except ValueError as exc:
        raise UpdateError(f"Release lookup for {repo} returned invalid JSON") from exc

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not tag:
        raise UpdateError(f"No tag_name in latest release of {repo}")
    return str(tag).removeprefix("v")


def parse_version(version: str) -> tuple[int, ...]:
    """Turn ``"v1.2.3-rc1"`` into ``(1, 2, 3)`` for ordering.

    Each dot-separated part contributes its leading digits; parsing stops
    at the first part that has none.
    """
    parts: list[int] = []
    for part in version.removeprefix("v").split("."):
        match = _LEADING_DIGITS.match(part)
        if match is None:
            break
        parts.append(int(match.group()))
    return tuple(parts)


def check_for_update(
    current: str,
    repo: str,
    *,
    api_url: str = DEFAULT_API_URL,
    transport: httpx.BaseTransport | None = None,
) -> UpdateStatus:
    """Compare the installed *current* version with the latest release.

    Raises:
        UpdateError: If the latest release cannot be fetched.
    """
    latest = fetch_latest_version(repo, api_url=api_url, transport=transport)
    current = current.removeprefix("v")
    installed = parse_version(current)
    if not installed:
        logger.debug("Installed version %r is not comparable", current)
        return UpdateStatus(
            current=current, latest=latest, update_available=False, comparable=False
        )
    return UpdateStatus(
        current=current,
        latest=latest,
        update_available=parse_version(latest) > installed,
    )
