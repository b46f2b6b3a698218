"""
Logging setup and the debug channel.

{% debug(...) %} tags never write to the render output; their text goes to a
debug sink, a plain callable taking one line of text.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable

DebugSink = Callable[[str], None]

_LOG = logging.getLogger("sauce")
_DEBUG_LOG = logging.getLogger("sauce.debug")

DEBUG_STREAMS = ("log", "stderr")


def setup_logging(verbose: bool = False) -> None:
    """
    Attaches a single stream handler to the package logger.

    Level is DEBUG when verbose or when SAUCE_DEBUG is set, INFO otherwise.
    Safe to call repeatedly: the handler is added once.
    """
    level = logging.DEBUG if verbose or os.environ.get("SAUCE_DEBUG") else logging.INFO
    _LOG.setLevel(level)
    if getattr(setup_logging, "_inited", False):
        return
    setup_logging._inited = True  # type: ignore[attr-defined]
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


def log_sink(text: str) -> None:
    """Default sink: INFO record on the 'sauce.debug' logger."""
    _DEBUG_LOG.info("%s", text)


def stderr_sink(text: str) -> None:
    sys.stderr.write(text.rstrip("\n") + "\n")


def resolve_debug_sink(stream: str) -> DebugSink:
    """
    Maps a configured debug stream name to its sink.

    Raises:
        ValueError: Unknown stream name
    """
    if stream == "log":
        return log_sink
    if stream == "stderr":
        return stderr_sink
    raise ValueError(f"Unknown debug stream '{stream}'. Expected one of: {', '.join(DEBUG_STREAMS)}")


__all__ = [
    "DebugSink",
    "DEBUG_STREAMS",
    "setup_logging",
    "log_sink",
    "stderr_sink",
    "resolve_debug_sink",
]
