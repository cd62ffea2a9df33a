"""Formatting helpers shared by the stepper and the CLI.

Plain-text helpers live at module level; rich renderables are built in
``toolbot.cli.formatting``.
"""

from __future__ import annotations

import json
from typing import Any


def remove_zeros(value: Any) -> Any:
    """Return a copy of a JSON value without zero counters or empty objects.

    Usage payloads carry many ``0`` detail counters
    (``audio_tokens``, ``rejected_prediction_tokens``...); dropping them
    keeps the usage log line readable.  Objects left empty after removal are
    dropped too.  Floats and booleans are kept as is.
    """
    if isinstance(value, dict):
        cleaned: dict[str, Any] = {}
        for key, item in value.items():
            item = remove_zeros(item)
            if type(item) is int and item == 0:
                continue
            if isinstance(item, dict) and not item:
                continue
            cleaned[key] = item
        return cleaned
    if isinstance(value, list):
        return [remove_zeros(item) for item in value]
    return value


def display_usage(usage: dict) -> str:
    """Compact one-line rendering of a usage dict."""
    return json.dumps(remove_zeros(usage), separators=(",", ":"))
