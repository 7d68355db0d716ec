"""Authenticated access to the AMO add-ons API.

Only the four calls the upload workflow needs are covered. Every call signs
a fresh token, performs one HTTP exchange and checks the response shape;
there are no retries at this level.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import cast
from urllib.parse import quote, urljoin

from amo_release.amo.auth import authorization_header
from amo_release.amo.model import Channel, Credentials, Upload, Version, VersionRequest
from amo_release.amo.schema import UPLOAD_SHAPE, VERSION_SHAPE, Shape
from amo_release.core.errors import PluginError
from amo_release.core.result import Err, Ok, Result
from amo_release.core.structured import StrDict
from amo_release.output.pretty import inspect_value
from amo_release.tools.http import HttpClient, HttpRequest
from amo_release.tools.multipart import FieldPart, FilePart, MultipartBody

__all__ = ["API_PREFIX", "AmoApi", "bad_response"]

API_PREFIX = "/api/v5/addons/"

ZIP_CONTENT_TYPE = "application/zip"


def bad_response(url: str, status: int, body: object) -> PluginError:
    return PluginError(
        kind="bad_response",
        message=f"A bad response was received from {url} with status {status}.",
        details=inspect_value(body),
    )


def _segment(value: str) -> str:
    return quote(value, safe="@")


@dataclass(frozen=True, slots=True)
class AmoApi:
    credentials: Credentials
    base_url: str
    http: HttpClient

    def url(self, path: str) -> str:
        return urljoin(self.base_url, API_PREFIX + path)

    def fetch(
        self,
        method: str,
        path: str,
        body: StrDict | MultipartBody | None,
        shape: Shape,
    ) -> Result[StrDict, PluginError]:
        """Send one signed request and validate the response against shape."""
        headers = {"Authorization": authorization_header(self.credentials)}
        payload: bytes | MultipartBody | None
        if body is None or isinstance(body, MultipartBody):
            payload = body
        else:
            headers["Content-Type"] = "application/json"
            payload = json.dumps(body).encode("utf-8")

        url = self.url(path)
        sent = self.http.send(HttpRequest(method=method, url=url, headers=headers, body=payload))
        if isinstance(sent, Err):
            return Err(PluginError(kind="transport", message=sent.error.message, details=url))

        response = sent.value
        decoded = response.decoded()
        if not response.ok:
            return Err(bad_response(response.url, response.status, decoded))

        # A malformed body is indistinguishable from a bad status for callers.
        checked = shape.check(decoded)
        if isinstance(checked, Err):
            return Err(bad_response(response.url, response.status, decoded))
        return Ok(checked.value)

    def create_upload(self, upload_path: Path, channel: Channel) -> Result[Upload, PluginError]:
        form = MultipartBody.of(
            FilePart("upload", upload_path, ZIP_CONTENT_TYPE),
            FieldPart("channel", channel),
        )
        return self.fetch("POST", "upload/", form, UPLOAD_SHAPE).map(_to_upload)

    def get_upload(self, uuid: str) -> Result[Upload, PluginError]:
        return self.fetch("GET", f"upload/{_segment(uuid)}/", None, UPLOAD_SHAPE).map(_to_upload)

    def create_version(
        self, addon_id: str, request: VersionRequest
    ) -> Result[Version, PluginError]:
        return self.fetch(
            "POST",
            f"addon/{_segment(addon_id)}/versions/",
            request.to_json(),
            VERSION_SHAPE,
        ).map(_to_version)

    def patch_version(
        self, addon_id: str, version_id: int, source_path: Path
    ) -> Result[Version, PluginError]:
        form = MultipartBody.of(FilePart("source", source_path, ZIP_CONTENT_TYPE))
        return self.fetch(
            "PATCH",
            f"addon/{_segment(addon_id)}/versions/{version_id}/",
            form,
            VERSION_SHAPE,
        ).map(_to_version)


def _to_upload(data: StrDict) -> Upload:
    return Upload(
        uuid=cast(str, data["uuid"]),
        processed=cast(bool, data["processed"]),
        valid=cast(bool, data["valid"]),
        validation=cast(dict[str, object] | None, data["validation"]),
    )


def _to_version(data: StrDict) -> Version:
    return Version(id=cast(int, data["id"]))
