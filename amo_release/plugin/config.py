"""Typed plugin configuration and environment.

The host passes plugin options as an untyped mapping with camelCase keys
and the process environment as a string mapping. Both are validated in one
pass so every problem is reported together; unknown option keys are
ignored.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from string import Template
from typing import cast
from urllib.parse import urlparse

from amo_release.amo.model import APPLICATIONS, CHANNELS, Application, Channel, Credentials
from amo_release.core.errors import PluginError
from amo_release.core.result import Err, Ok, Result
from amo_release.core.structured import is_obj_list, type_name
from amo_release.plugin.context import ReleaseContext

__all__ = [
    "AmoEnv",
    "PluginConfig",
    "parse_env",
    "parse_plugin_config",
    "render_path",
]

DEFAULT_ADDON_ZIP_PATH = "./amo-release/${nextRelease.version}.zip"
DEFAULT_SOURCE_ZIP_PATH = "./amo-release/${nextRelease.version}-src.zip"
DEFAULT_BASE_URL = "https://addons.mozilla.org/"


@dataclass(frozen=True, slots=True)
class PluginConfig:
    """Plugin options with defaults applied."""

    addon_id: str
    addon_dir_path: str
    addon_zip_path: str = DEFAULT_ADDON_ZIP_PATH
    channel: Channel = "listed"
    approval_notes: str | None = None
    compatibility: tuple[Application, ...] = ("firefox",)
    submit_release_notes: bool = False
    submit_source: bool = False
    source_zip_path: str = DEFAULT_SOURCE_ZIP_PATH


@dataclass(frozen=True, slots=True)
class AmoEnv:
    api_key: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL

    @property
    def credentials(self) -> Credentials:
        return Credentials(api_key=self.api_key, api_secret=self.api_secret)


class _Problems:
    """Collects field problems while reading an untyped mapping."""

    def __init__(self, data: Mapping[str, object]) -> None:
        self.data = data
        self.items: list[str] = []

    def _bad(self, key: str, expected: str) -> None:
        value = self.data[key] if key in self.data else None
        was = "missing" if key not in self.data else type_name(value)
        self.items.append(f"{key} must be {expected} (was {was})")

    def string(self, key: str, default: str | None = None) -> str:
        value = self.data.get(key)
        if isinstance(value, str):
            return value
        if key not in self.data and default is not None:
            return default
        self._bad(key, "a string")
        return ""

    def nullable_string(self, key: str) -> str | None:
        value = self.data.get(key)
        if value is None or isinstance(value, str):
            return value
        self._bad(key, "a string or null")
        return None

    def boolean(self, key: str, default: bool) -> bool:
        if key not in self.data:
            return default
        value = self.data[key]
        if isinstance(value, bool):
            return value
        self._bad(key, "a boolean")
        return default

    def choice(self, key: str, choices: tuple[str, ...], default: str) -> str:
        if key not in self.data:
            return default
        value = self.data[key]
        if isinstance(value, str) and value in choices:
            return value
        self._bad(key, " | ".join(repr(c) for c in choices))
        return default

    def choices(self, key: str, choices: tuple[str, ...], default: tuple[str, ...]) -> tuple[str, ...]:
        if key not in self.data:
            return default
        value = self.data[key]
        if is_obj_list(value) and all(isinstance(v, str) and v in choices for v in value):
            return tuple(cast(list[str], value))
        self._bad(key, "an array of " + " | ".join(repr(c) for c in choices))
        return default


def parse_plugin_config(raw: Mapping[str, object]) -> Result[PluginConfig, PluginError]:
    p = _Problems(raw)
    config = PluginConfig(
        addon_id=p.string("addonId"),
        addon_dir_path=p.string("addonDirPath"),
        addon_zip_path=p.string("addonZipPath", DEFAULT_ADDON_ZIP_PATH),
        channel=cast(Channel, p.choice("channel", CHANNELS, "listed")),
        approval_notes=p.nullable_string("approvalNotes"),
        compatibility=cast(
            tuple[Application, ...], p.choices("compatibility", APPLICATIONS, ("firefox",))
        ),
        submit_release_notes=p.boolean("submitReleaseNotes", False),
        submit_source=p.boolean("submitSource", False),
        source_zip_path=p.string("sourceZipPath", DEFAULT_SOURCE_ZIP_PATH),
    )
    if p.items:
        return Err(
            PluginError(
                kind="invalid_plugin_config",
                message="The plugin configuration is invalid.",
                details="\n".join(p.items),
            )
        )
    return Ok(config)


def parse_env(env: Mapping[str, str]) -> Result[AmoEnv, PluginError]:
    problems: list[str] = []

    api_key = env.get("AMO_API_KEY") or ""
    if not api_key:
        problems.append("AMO_API_KEY must be a non-empty string")
    api_secret = env.get("AMO_API_SECRET") or ""
    if not api_secret:
        problems.append("AMO_API_SECRET must be a non-empty string")

    base_url = env.get("AMO_BASE_URL") or DEFAULT_BASE_URL
    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        problems.append(f"AMO_BASE_URL must be an http(s) URL (was {base_url!r})")

    if problems:
        return Err(
            PluginError(
                kind="invalid_env",
                message="The environment variables are invalid.",
                details="\n".join(problems),
            )
        )
    return Ok(AmoEnv(api_key=api_key, api_secret=api_secret, base_url=base_url))


class _PathTemplate(Template):
    braceidpattern = r"[a-z_][a-z0-9_]*(?:\.[a-z_][a-z0-9_]*)*"


def render_path(template: str, context: ReleaseContext) -> Result[Path, PluginError]:
    """Substitute ``${nextRelease.version}``-style placeholders.

    Relative results are resolved against the release working directory.
    """
    try:
        rendered = _PathTemplate(template).substitute(context.placeholders())
    except KeyError as e:
        return Err(
            PluginError(
                kind="invalid_plugin_config",
                message=f"Unknown placeholder {e.args[0]!r} in path template.",
                details=template,
            )
        )
    except ValueError as e:
        return Err(
            PluginError(
                kind="invalid_plugin_config",
                message=f"Invalid path template: {e}",
                details=template,
            )
        )
    return Ok(context.cwd / rendered)
