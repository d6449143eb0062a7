"""Utility helpers for litestar-webpack."""

import os
import sys


def node_path_list(value: "str | None" = None, *, platform: "str | None" = None) -> list[str]:
    """Parse the ``NODE_PATH`` environment variable into module search paths.

    Args:
        value: Raw variable value. Reads ``NODE_PATH`` when not given.
        platform: Platform name used to pick the separator. Defaults to ``sys.platform``.

    Returns:
        The non-empty search paths, in declaration order.
    """
    raw = os.getenv("NODE_PATH", "") if value is None else value
    separator = ";" if (platform or sys.platform) == "win32" else ":"
    return [entry for entry in raw.split(separator) if entry]
