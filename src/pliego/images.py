"""Image resolution: local paths and remote downloads.

Image destinations are looked up in this order:

1. The destination as a local path
2. The destination joined onto ``base_url`` (a directory or a URL)
3. A download over HTTP(S) into a per-resolver temporary directory

Failures are not errors. ``resolve`` returns None and the renderer records a
diagnostic and moves on. Downloads get one attempt with the configured
timeout and are never retried.

Usage:
    with ImageResolver(base_url="https://example.org/docs", timeout=5) as images:
        path = images.resolve("img/logo.png")

Thread Safety:
    Not thread-safe. Each renderer owns its resolver.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

import httpx

from pliego.utils.logger import get_logger
from pliego.utils.urls import is_remote, resolve_destination

logger = get_logger(__name__)


class ImageResolver:
    """Turn image destinations into local file paths."""

    __slots__ = ("base_url", "timeout", "_client", "_owns_client", "_temp_dir", "_downloads")

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            base_url: Base directory or URL for relative destinations
            timeout: Seconds allowed per download
            client: HTTP client to download with; created on first use
                (and closed by ``close()``) when not given
        """
        self.base_url = base_url
        self.timeout = timeout
        self._client: httpx.Client | None = client
        self._owns_client = client is None
        self._temp_dir: Path | None = None
        self._downloads = 0

    def resolve(self, destination: str) -> str | None:
        """Return a local path for ``destination``, or None if unavailable."""
        if not destination:
            return None
        if not is_remote(destination) and Path(destination).is_file():
            return destination

        source = resolve_destination(destination, self.base_url)
        if is_remote(source):
            return self._download(source)
        if Path(source).is_file():
            return source
        logger.debug("Image not found: %s", destination)
        return None

    def _download(self, url: str) -> str | None:
        if self._client is None:
            self._client = httpx.Client(
                follow_redirects=True, timeout=httpx.Timeout(self.timeout)
            )
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Image download failed: %s (%s: %s)", url, type(e).__name__, e)
            return None

        target = self._target_path(url)
        try:
            target.write_bytes(response.content)
        except OSError as e:
            logger.warning("Could not store downloaded image %s: %s", url, e)
            return None
        logger.debug("Downloaded image %s to %s", url, target)
        return str(target)

    def _target_path(self, url: str) -> Path:
        if self._temp_dir is None:
            self._temp_dir = Path(tempfile.mkdtemp(prefix="pliego-"))
        self._downloads += 1
        name = PurePosixPath(urlsplit(url).path).name or "image"
        return self._temp_dir / f"{self._downloads:03d}-{name}"

    @property
    def temp_dir(self) -> Path | None:
        """Directory holding downloads, once the first one happened."""
        return self._temp_dir

    def close(self) -> None:
        """Close the HTTP client and delete downloaded files."""
        if self._client is not None and self._owns_client:
            self._client.close()
            self._client = None
        if self._temp_dir is not None:
            shutil.rmtree(self._temp_dir, ignore_errors=True)
            self._temp_dir = None

    def __enter__(self) -> ImageResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
