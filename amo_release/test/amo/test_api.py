"""Tests for amo/api.py - signed requests and response classification."""

from __future__ import annotations

from pathlib import Path

import jwt

from amo_release.amo.model import Version, VersionRequest
from amo_release.core.result import Err, Ok
from amo_release.test._requests import form_part, json_body
from amo_release.tools.http import HttpError, HttpResponse, MockHttpClient
from amo_release.tools.multipart import FieldPart, FilePart, MultipartBody

from ._fakes import API, make_api, upload_payload


def test_url_uses_versioned_prefix() -> None:
    api = make_api(MockHttpClient())
    assert api.url("upload/") == "https://amo.test/api/v5/addons/upload/"


def test_base_url_path_is_replaced_by_prefix() -> None:
    http = MockHttpClient()
    api = make_api(http)
    other = type(api)(credentials=api.credentials, base_url="https://amo.test/some/path/", http=http)
    assert other.url("upload/") == "https://amo.test/api/v5/addons/upload/"


def test_every_request_gets_a_fresh_token() -> None:
    http = MockHttpClient()
    http.add_json("GET", f"{API}upload/u1/", upload_payload())
    api = make_api(http)

    api.get_upload("u1")
    api.get_upload("u1")

    tokens = [r.headers["Authorization"] for r in http.requests]
    assert all(t.startswith("JWT ") for t in tokens)
    assert tokens[0] != tokens[1]
    claims = jwt.decode(tokens[0][4:], options={"verify_signature": False})
    assert claims["iss"] == "user:1:2"


def test_create_upload_sends_multipart_form(tmp_path: Path) -> None:
    archive = tmp_path / "1.0.0.zip"
    archive.write_bytes(b"zip")
    http = MockHttpClient()
    http.add_json("POST", f"{API}upload/", upload_payload("u1"))

    result = make_api(http).create_upload(archive, "unlisted")

    assert isinstance(result, Ok)
    assert result.value.uuid == "u1"
    assert result.value.processed is False
    body = http.requests[0].body
    assert isinstance(body, MultipartBody)
    assert form_part(body, "upload") == FilePart("upload", archive, "application/zip")
    assert form_part(body, "channel") == FieldPart("channel", "unlisted")
    assert "Content-Type" not in http.requests[0].headers


def test_create_version_sends_json() -> None:
    http = MockHttpClient()
    http.add_json("POST", f"{API}addon/my-addon/versions/", {"id": 42})

    result = make_api(http).create_version(
        "my-addon",
        VersionRequest(upload="u1", compatibility=("firefox",), approval_notes="hi", release_notes="<b>x</b>"),
    )

    assert result == Ok(Version(id=42))
    request = http.requests[0]
    assert request.headers["Content-Type"] == "application/json"
    assert json_body(request) == {
        "upload": "u1",
        "approval_notes": "hi",
        "compatibility": ["firefox"],
        "release_notes": {"en-US": "<b>x</b>"},
    }


def test_create_version_omits_absent_optionals() -> None:
    http = MockHttpClient()
    http.add_json("POST", f"{API}addon/my-addon/versions/", {"id": 7})

    make_api(http).create_version("my-addon", VersionRequest(upload="u1", compatibility=("firefox",)))

    assert json_body(http.requests[0]) == {"upload": "u1", "compatibility": ["firefox"]}


def test_fractional_version_id_is_bad_response() -> None:
    http = MockHttpClient()
    http.add_json("POST", f"{API}addon/my-addon/versions/", {"id": 42.5})

    result = make_api(http).create_version("my-addon", VersionRequest(upload="u1", compatibility=("firefox",)))

    assert isinstance(result, Err)
    assert result.error.kind == "bad_response"


def test_addon_guid_is_encoded_in_path() -> None:
    http = MockHttpClient()
    url = f"{API}addon/%7Babc-123%7D/versions/"
    http.add_json("POST", url, {"id": 1})

    result = make_api(http).create_version("{abc-123}", VersionRequest(upload="u1", compatibility=()))

    assert isinstance(result, Ok)
    assert http.requests[0].url == url


def test_email_style_addon_id_keeps_at_sign() -> None:
    http = MockHttpClient()
    http.add_json("POST", f"{API}addon/addon@example.com/versions/", {"id": 1})
    result = make_api(http).create_version("addon@example.com", VersionRequest(upload="u1", compatibility=()))
    assert isinstance(result, Ok)


def test_patch_version_sends_source(tmp_path: Path) -> None:
    source = tmp_path / "1.0.0-src.zip"
    source.write_bytes(b"src")
    http = MockHttpClient()
    http.add_json("PATCH", f"{API}addon/my-addon/versions/42/", {"id": 42})

    result = make_api(http).patch_version("my-addon", 42, source)

    assert result == Ok(Version(id=42))
    body = http.requests[0].body
    assert isinstance(body, MultipartBody)
    assert form_part(body, "source") == FilePart("source", source, "application/zip")


def test_error_status_is_bad_response_with_body() -> None:
    http = MockHttpClient()
    http.add_json("GET", f"{API}upload/u1/", {"error": "server"}, status=500)

    result = make_api(http).get_upload("u1")

    assert isinstance(result, Err)
    error = result.error
    assert error.kind == "bad_response"
    assert error.code == "EBADRESPONSE"
    assert "500" in error.message
    assert f"{API}upload/u1/" in error.message
    assert error.details is not None and "server" in error.details


def test_text_error_body_is_kept() -> None:
    http = MockHttpClient()
    url = f"{API}upload/u1/"
    http.add("GET", url, HttpResponse(url=url, status=503, content_type="text/html", body=b"<h1>down</h1>"))

    result = make_api(http).get_upload("u1")

    assert isinstance(result, Err)
    assert result.error.details == "'<h1>down</h1>'"


def test_shape_mismatch_is_reported_like_bad_status() -> None:
    http = MockHttpClient()
    http.add_json("GET", f"{API}upload/u1/", {"uuid": "u1", "processed": "yes"})

    result = make_api(http).get_upload("u1")

    assert isinstance(result, Err)
    assert result.error.kind == "bad_response"
    assert "status 200" in result.error.message
    assert result.error.details is not None and "'yes'" in result.error.details


def test_non_json_success_is_bad_response() -> None:
    http = MockHttpClient()
    url = f"{API}addon/a/versions/"
    http.add("POST", url, HttpResponse(url=url, status=201, content_type="text/plain", body=b"created"))

    result = make_api(http).create_version("a", VersionRequest(upload="u1", compatibility=()))

    assert isinstance(result, Err)
    assert result.error.kind == "bad_response"


def test_transport_error_is_not_reclassified() -> None:
    http = MockHttpClient()
    url = f"{API}upload/u1/"
    http.add("GET", url, HttpError(url=url, message="Connection reset by peer"))

    result = make_api(http).get_upload("u1")

    assert isinstance(result, Err)
    assert result.error.kind == "transport"
    assert result.error.message == "Connection reset by peer"
