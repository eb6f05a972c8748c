"""HTTPX-based helpers shared by the artifact backends."""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

import httpx

from prebin.domain.exceptions import FetchError

logger = logging.getLogger(__name__)

# Status codes that mean "no such artifact" rather than a backend failure
_NOT_FOUND_STATUSES = frozenset({403, 404, 410})


async def remote_exists(client: httpx.AsyncClient, url: str) -> bool:
    """Check whether a URL points at a downloadable file.

    Args:
        client: Shared async HTTP client.
        url: URL to probe with a HEAD request (redirects are followed).

    Returns:
        True for a 2xx response, False for 403/404/410.

    Raises:
        FetchError: For network failures and any other status code.
    """
    logger.debug(f"Checking for artifact at {url}")
    try:
        response = await client.head(url, follow_redirects=True)
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to check {url}: {e}", url=url, original_error=e) from e

    if response.is_success:
        return True
    if response.status_code in _NOT_FOUND_STATUSES:
        return False
    raise FetchError(
        f"Unexpected status {response.status_code} checking {url}", url=url
    )


async def download_to_file(client: httpx.AsyncClient, url: str, path: Path) -> str:
    """Stream a URL to a local file.

    Args:
        client: Shared async HTTP client.
        url: URL to download (redirects are followed).
        path: Destination file. Parent directories are created.

    Returns:
        SHA256 hex digest of the downloaded content.

    Raises:
        FetchError: For network failures and HTTP errors (4xx, 5xx).
        OSError: For filesystem errors.
    """
    logger.debug(f"Downloading {url} to {path}")
    path.parent.mkdir(parents=True, exist_ok=True)
    digest = hashlib.sha256()
    size = 0
    try:
        async with client.stream("GET", url, follow_redirects=True) as response:
            response.raise_for_status()
            with path.open("wb") as f:
                async for chunk in response.aiter_bytes():
                    f.write(chunk)
                    digest.update(chunk)
                    size += len(chunk)
    except httpx.HTTPError as e:
        raise FetchError(
            f"Failed to download {url}: {e}", url=url, original_error=e
        ) from e

    checksum = digest.hexdigest()
    logger.debug(f"Downloaded {size} bytes from {url} (sha256 {checksum[:16]}...)")
    return checksum
