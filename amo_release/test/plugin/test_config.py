"""Tests for plugin/config.py - options, environment and path templates."""

from __future__ import annotations

from pathlib import Path

import pytest

from amo_release.core.result import Err, Ok
from amo_release.output.console import MockConsole
from amo_release.plugin.config import (
    DEFAULT_BASE_URL,
    AmoEnv,
    PluginConfig,
    parse_env,
    parse_plugin_config,
    render_path,
)
from amo_release.plugin.context import Branch, LastRelease, NextRelease, ReleaseContext


class TestParsePluginConfig:
    def test_defaults(self) -> None:
        result = parse_plugin_config({"addonId": "my-addon", "addonDirPath": "dist"})
        assert result == Ok(PluginConfig(addon_id="my-addon", addon_dir_path="dist"))
        assert isinstance(result, Ok)
        config = result.value
        assert config.channel == "listed"
        assert config.compatibility == ("firefox",)
        assert config.approval_notes is None
        assert config.submit_release_notes is False
        assert config.submit_source is False
        assert config.addon_zip_path == "./amo-release/${nextRelease.version}.zip"
        assert config.source_zip_path == "./amo-release/${nextRelease.version}-src.zip"

    def test_all_options(self) -> None:
        result = parse_plugin_config(
            {
                "addonId": "a",
                "addonDirPath": "d",
                "addonZipPath": "out/a.zip",
                "channel": "unlisted",
                "approvalNotes": "notes",
                "compatibility": ["android", "firefox"],
                "submitReleaseNotes": True,
                "submitSource": True,
                "sourceZipPath": "out/src.zip",
                "somethingElse": 1,
            }
        )
        assert result == Ok(
            PluginConfig(
                addon_id="a",
                addon_dir_path="d",
                addon_zip_path="out/a.zip",
                channel="unlisted",
                approval_notes="notes",
                compatibility=("android", "firefox"),
                submit_release_notes=True,
                submit_source=True,
                source_zip_path="out/src.zip",
            )
        )

    def test_null_approval_notes(self) -> None:
        result = parse_plugin_config({"addonId": "a", "addonDirPath": "d", "approvalNotes": None})
        assert isinstance(result, Ok)
        assert result.value.approval_notes is None

    def test_reports_every_problem(self) -> None:
        result = parse_plugin_config(
            {
                "addonDirPath": 3,
                "channel": "beta",
                "compatibility": ["firefox", "chrome"],
                "submitSource": "yes",
            }
        )
        assert isinstance(result, Err)
        error = result.error
        assert error.code == "EINVALIDPLUGINCONFIG"
        assert error.details is not None
        lines = error.details.splitlines()
        assert "addonId must be a string (was missing)" in lines
        assert "addonDirPath must be a string (was number)" in lines
        assert any(line.startswith("channel must be") for line in lines)
        assert any(line.startswith("compatibility must be") for line in lines)
        assert "submitSource must be a boolean (was string)" in lines

    def test_null_is_not_a_default(self) -> None:
        result = parse_plugin_config({"addonId": "a", "addonDirPath": "d", "addonZipPath": None})
        assert isinstance(result, Err)


class TestParseEnv:
    def test_required_and_default_base_url(self) -> None:
        result = parse_env({"AMO_API_KEY": "k", "AMO_API_SECRET": "s"})
        assert result == Ok(AmoEnv(api_key="k", api_secret="s", base_url=DEFAULT_BASE_URL))

    def test_custom_base_url(self) -> None:
        result = parse_env({"AMO_API_KEY": "k", "AMO_API_SECRET": "s", "AMO_BASE_URL": "https://addons-dev.allizom.org/"})
        assert isinstance(result, Ok)
        assert result.value.base_url == "https://addons-dev.allizom.org/"
        assert result.value.credentials.api_key == "k"

    def test_missing_values(self) -> None:
        result = parse_env({"AMO_API_KEY": "", "AMO_BASE_URL": "ftp://nope"})
        assert isinstance(result, Err)
        assert result.error.code == "EINVALIDENV"
        assert result.error.details is not None
        assert "AMO_API_KEY" in result.error.details
        assert "AMO_API_SECRET" in result.error.details
        assert "AMO_BASE_URL" in result.error.details


class TestRenderPath:
    def _context(self, tmp_path: Path) -> ReleaseContext:
        return ReleaseContext(
            env={},
            console=MockConsole(),
            cwd=tmp_path,
            branch=Branch(name="main"),
            last_release=LastRelease(version="1.1.0", git_tag="v1.1.0"),
            next_release=NextRelease(version="1.2.0", git_tag="v1.2.0", channel="beta"),
        )

    def test_substitutes_release_values(self, tmp_path: Path) -> None:
        result = render_path(
            "./out/${branch.name}/${nextRelease.gitTag}-${lastRelease.version}-${nextRelease.version}.zip",
            self._context(tmp_path),
        )
        assert result == Ok(tmp_path / "out/main/v1.2.0-1.1.0-1.2.0.zip")

    def test_absolute_template_ignores_cwd(self, tmp_path: Path) -> None:
        target = tmp_path / "abs" / "${nextRelease.version}.zip"
        result = render_path(str(target), self._context(Path("/elsewhere")))
        assert result == Ok(tmp_path / "abs" / "1.2.0.zip")

    def test_first_release_renders_missing_values_empty(self, tmp_path: Path) -> None:
        context = ReleaseContext(
            env={},
            console=MockConsole(),
            cwd=tmp_path,
            next_release=NextRelease(version="1.0.0", git_tag="v1.0.0"),
        )
        result = render_path("./out/${lastRelease.version}-${nextRelease.channel}-${nextRelease.version}.zip", context)
        assert result == Ok(tmp_path / "out/--1.0.0.zip")

    def test_unknown_placeholder(self, tmp_path: Path) -> None:
        result = render_path("${nextRelease.name}.zip", self._context(tmp_path))
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_plugin_config"
        assert "nextRelease.name" in result.error.message

    @pytest.mark.parametrize("template", ["${", "cost$.zip"])
    def test_malformed_template(self, tmp_path: Path, template: str) -> None:
        result = render_path(template, self._context(tmp_path))
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_plugin_config"
