"""Logging helpers for pliego.

Every module logs through ``get_logger(__name__)``, so all records land under
the ``pliego`` logger. pliego configures no handlers of its own.

Render traces:
    ``PdfRenderer`` logs one DEBUG record per visited node in the form
    ``"<dashes>[<source>] <message>"``. ``trace_to_file`` attaches a handler
    that writes exactly those lines, one per record.

Example:
    >>> from pliego.utils.logger import stop_trace, trace_to_file
    >>> handler = trace_to_file("trace.log")
    >>> ...  # render
    >>> stop_trace(handler)
"""

from __future__ import annotations

import logging
from os import PathLike

ROOT_LOGGER = "pliego"


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name`` inside the pliego namespace.

    Args:
        name: Logger name (typically __name__)

    Example:
        >>> get_logger("mymodule").name
        'pliego.mymodule'
    """
    if not (name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def trace_to_file(path: str | PathLike[str]) -> logging.FileHandler:
    """Write render traces to ``path``.

    Attaches a bare-message FileHandler to the ``pliego`` logger and lowers
    the logger to DEBUG. Detach it with ``stop_trace``.
    """
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger(ROOT_LOGGER)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler


def stop_trace(handler: logging.Handler) -> None:
    """Detach and close a handler returned by ``trace_to_file``."""
    logging.getLogger(ROOT_LOGGER).removeHandler(handler)
    handler.close()
