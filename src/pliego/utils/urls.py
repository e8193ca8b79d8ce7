"""Link destination helpers."""

from __future__ import annotations

from urllib.parse import urlsplit


def is_relative(destination: str) -> bool:
    """True if ``destination`` has no URL scheme and is not a fragment.

    Example:
        >>> is_relative("docs/intro.md"), is_relative("#usage"), is_relative("https://x.org")
        (True, False, False)
    """
    if not destination or destination.startswith("#"):
        return False
    return not urlsplit(destination).scheme


def resolve_destination(destination: str, base_url: str | None) -> str:
    """Join a relative destination onto ``base_url``.

    One leading ``./`` is dropped. Absolute URLs, fragments and everything
    when no base is configured come back unchanged.

    Example:
        >>> resolve_destination("./img/a.png", "https://example.org/docs/")
        'https://example.org/docs/img/a.png'
    """
    if not base_url or not is_relative(destination):
        return destination
    path = destination.removeprefix("./")
    return f"{base_url.rstrip('/')}/{path}"


def is_remote(destination: str) -> bool:
    """True for http(s) URLs."""
    return urlsplit(destination).scheme in ("http", "https")
