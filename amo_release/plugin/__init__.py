"""Lifecycle functions consumed by the release host."""

from .context import Branch, LastRelease, NextRelease, ReleaseContext
from .prepare import prepare
from .publish import PublishedRelease, publish
from .verify import verify_conditions

__all__ = [
    "Branch",
    "LastRelease",
    "NextRelease",
    "PublishedRelease",
    "ReleaseContext",
    "prepare",
    "publish",
    "verify_conditions",
]
