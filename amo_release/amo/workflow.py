"""Upload an add-on package and turn it into a new AMO version.

The sequence is strictly ordered and fails fast: create upload, wait for
automated validation, create the version, then optionally attach the source
archive. A version is never created from an upload that is not both
processed and valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from time import monotonic, sleep

from amo_release.amo.api import AmoApi
from amo_release.amo.model import Application, Channel, Upload, Version, VersionRequest
from amo_release.amo.timeouts import (
    VALIDATION_POLL_INTERVAL_SECONDS,
    VALIDATION_TIMEOUT_SECONDS,
)
from amo_release.core.errors import PluginError
from amo_release.core.result import Err, Ok, Result
from amo_release.output.console import ConsoleProtocol
from amo_release.output.pretty import inspect_value

__all__ = ["UpdateAddonParams", "await_validation", "update_addon"]


@dataclass(frozen=True, slots=True)
class UpdateAddonParams:
    addon_id: str
    addon_zip_path: Path
    channel: Channel
    compatibility: tuple[Application, ...]
    approval_notes: str | None = None
    release_notes: str | None = None
    source_zip_path: Path | None = None


def _validation_timeout() -> PluginError:
    return PluginError(kind="validation_timeout", message="Validation timed out.")


def await_validation(api: AmoApi, uuid: str) -> Result[Upload, PluginError]:
    """Poll an upload until AMO has processed it.

    Ticks are sequential and one poll interval apart. The timeout budget
    starts with the first poll and covers the whole wait; once it has
    elapsed the outcome is a timeout, even if a late tick reports success,
    and no further poll is issued.
    """
    deadline = monotonic() + VALIDATION_TIMEOUT_SECONDS

    while True:
        result = api.get_upload(uuid)
        if monotonic() >= deadline:
            return Err(_validation_timeout())
        if isinstance(result, Err):
            return result

        upload = result.value
        if upload.processed:
            if upload.valid:
                return Ok(upload)
            return Err(
                PluginError(
                    kind="validation_failure",
                    message="Validation failed.",
                    details=inspect_value(upload.validation),
                )
            )

        remaining = deadline - monotonic()
        if remaining <= VALIDATION_POLL_INTERVAL_SECONDS:
            sleep(max(remaining, 0.0))
            return Err(_validation_timeout())
        sleep(VALIDATION_POLL_INTERVAL_SECONDS)


def update_addon(
    *,
    api: AmoApi,
    params: UpdateAddonParams,
    console: ConsoleProtocol,
) -> Result[Version, PluginError]:
    console.log("Uploading the add-on...")
    created = api.create_upload(params.addon_zip_path, params.channel)
    if isinstance(created, Err):
        return created
    upload_id = created.value.uuid

    console.log("Waiting for validation...")
    validated = await_validation(api, upload_id)
    if isinstance(validated, Err):
        return validated

    console.log("Creating a version...")
    version = api.create_version(
        params.addon_id,
        VersionRequest(
            upload=upload_id,
            compatibility=params.compatibility,
            approval_notes=params.approval_notes,
            release_notes=params.release_notes,
        ),
    )
    if isinstance(version, Err):
        return version

    if params.source_zip_path is not None:
        console.log("Uploading the source code...")
        patched = api.patch_version(params.addon_id, version.value.id, params.source_zip_path)
        if isinstance(patched, Err):
            return patched

    return version
