"""Error taxonomy for the plugin.

Internal layers return ``Err(PluginError)``. The lifecycle functions turn
errors into ``PluginFailure`` (one error) or ``PluginFailures`` (the
aggregated pre-flight report) so the host sees a coded failure with a short
message and a details blob suitable for logging.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

__all__ = [
    "PluginErrorKind",
    "PluginError",
    "PluginFailure",
    "PluginFailures",
]

PluginErrorKind = Literal[
    "invalid_plugin_config",
    "invalid_env",
    "addon_dir_not_found",
    "manifest_not_found",
    "invalid_manifest",
    "archive_failed",
    "bad_response",
    "validation_failure",
    "validation_timeout",
    "transport",
]

_CODES: dict[str, str] = {
    "invalid_plugin_config": "EINVALIDPLUGINCONFIG",
    "invalid_env": "EINVALIDENV",
    "addon_dir_not_found": "EADDONDIRNOTFOUND",
    "manifest_not_found": "EMANIFESTJSONNOTFOUND",
    "invalid_manifest": "EINVALIDMANIFEST",
    "archive_failed": "EARCHIVEFAILED",
    "bad_response": "EBADRESPONSE",
    "validation_failure": "EVALIDATIONFAILURE",
    "validation_timeout": "EVALIDATIONTIMEOUT",
    "transport": "ETRANSPORT",
}


@dataclass(frozen=True, slots=True)
class PluginError:
    """Canonical plugin error payload.

    Attributes:
        kind: Discriminant of the error taxonomy.
        message: Short human-readable message.
        details: Optional diagnostic blob (response body, validation report).
    """

    kind: PluginErrorKind
    message: str
    details: str | None = None

    @property
    def code(self) -> str:
        """Stable machine-readable code reported to the host."""
        return _CODES[self.kind]


class PluginFailure(Exception):
    """Raised by a lifecycle function when it cannot complete."""

    def __init__(self, error: PluginError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def details(self) -> str | None:
        return self.error.details


class PluginFailures(Exception):
    """Raised by ``verify_conditions`` with every pre-flight problem at once."""

    def __init__(self, errors: Sequence[PluginError]) -> None:
        self.errors = tuple(errors)
        summary = "; ".join(f"{e.code}: {e.message}" for e in self.errors)
        super().__init__(summary)

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(e.code for e in self.errors)
