"""Release plugin that publishes browser extensions to addons.mozilla.org.

The host calls the three lifecycle functions in order: ``verify_conditions``,
``prepare`` and ``publish``.
"""

from amo_release.core.errors import PluginError, PluginFailure, PluginFailures
from amo_release.plugin import (
    Branch,
    LastRelease,
    NextRelease,
    PublishedRelease,
    ReleaseContext,
    prepare,
    publish,
    verify_conditions,
)

__version__ = "0.1.0"

__all__ = [
    "Branch",
    "LastRelease",
    "NextRelease",
    "PluginError",
    "PluginFailure",
    "PluginFailures",
    "PublishedRelease",
    "ReleaseContext",
    "prepare",
    "publish",
    "verify_conditions",
]
