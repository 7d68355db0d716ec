"""Rendering of untyped payloads for error details."""

from __future__ import annotations

import sys

from rich.pretty import pretty_repr

__all__ = ["inspect_value"]


def inspect_value(value: object) -> str:
    """Render a response body or validation report on a single line.

    Depth, container length and string length are unbounded so nothing the
    service sent back is elided from the error details.
    """
    return pretty_repr(value, max_width=sys.maxsize)
