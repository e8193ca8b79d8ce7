"""Utility modules for pliego.

Provides:
- logger: get_logger, trace_to_file and stop_trace
- text: latin-1 transliteration and source normalization
- urls: link destination resolution
"""

from pliego.utils.logger import get_logger, stop_trace, trace_to_file
from pliego.utils.text import normalize_source, to_latin1
from pliego.utils.urls import is_relative, is_remote, resolve_destination

__all__ = [
    "get_logger",
    "is_relative",
    "is_remote",
    "normalize_source",
    "resolve_destination",
    "stop_trace",
    "to_latin1",
    "trace_to_file",
]
