from __future__ import annotations

from typing import TypeVar

from amo_release.core.errors import PluginError, PluginFailure
from amo_release.core.result import Err, Result
from amo_release.plugin.context import NextRelease, ReleaseContext


T = TypeVar("T")


def require(result: Result[T, PluginError]) -> T:
    """Unwrap a result at the lifecycle boundary, raising on error."""
    if isinstance(result, Err):
        raise PluginFailure(result.error)
    return result.value


def require_next_release(context: ReleaseContext, step: str) -> NextRelease:
    if context.next_release is None:
        raise ValueError(f"{step} requires context.next_release")
    return context.next_release
