"""Pytest configuration for core adapter unit tests."""

from __future__ import annotations

import io
import tarfile

import httpx
import pytest


class ArtifactServer:
    """In-memory HTTP server for adapter tests.

    Routes are registered per URL; unknown URLs answer 404. Every request
    is recorded as a (method, url) tuple.
    """

    def __init__(self) -> None:
        self._routes: dict[str, tuple[int, bytes | dict]] = {}
        self._errors: dict[str, Exception] = {}
        self.requests: list[tuple[str, str]] = []

    def add(self, url: str, body: bytes | dict = b"", status: int = 200) -> None:
        """Serve body (bytes or JSON) with the given status at url."""
        self._routes[url] = (status, body)

    def fail(self, url: str, error: Exception) -> None:
        """Raise error from the transport for requests to url."""
        self._errors[url] = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requests.append((request.method, url))
        if url in self._errors:
            raise self._errors[url]
        if url not in self._routes:
            return httpx.Response(404)
        status, body = self._routes[url]
        if isinstance(body, dict):
            return httpx.Response(status, json=body)
        if request.method == "HEAD":
            return httpx.Response(status)
        return httpx.Response(status, content=body)

    def client(self) -> httpx.AsyncClient:
        """Create an async client backed by this server."""
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def make_tar_gz(files: dict[str, bytes]) -> bytes:
    """Build a gzip tarball in memory from {member name: content}."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def artifact_server() -> ArtifactServer:
    """Provide an ArtifactServer for HTTP adapter tests.

    Example:
        def test_probe(artifact_server):
            artifact_server.add("https://example.com/a.tgz", b"data")
            client = artifact_server.client()
    """
    return ArtifactServer()


@pytest.fixture
def tar_gz_factory():
    """Provide make_tar_gz for building archive fixtures."""
    return make_tar_gz
