from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, urljoin

from amo_release.amo.api import AmoApi
from amo_release.amo.workflow import UpdateAddonParams, update_addon
from amo_release.plugin._helpers import require, require_next_release
from amo_release.plugin.config import parse_env, parse_plugin_config, render_path
from amo_release.plugin.context import ReleaseContext
from amo_release.plugin.notes import format_release_notes
from amo_release.tools.http import HttpClient, RealHttpClient

PUBLISHED_NAME = "Firefox Add-ons"


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    name: str
    url: str


def listing_url(base_url: str, addon_id: str) -> str:
    return urljoin(base_url, f"/en-US/firefox/addon/{quote(addon_id, safe='@')}/")


def publish(
    plugin_config: Mapping[str, object],
    context: ReleaseContext,
    *,
    http: HttpClient | None = None,
) -> PublishedRelease:
    """Upload the prepared archive to AMO and create the new version.

    Raises:
        PluginFailure: With the first error of the upload workflow.
    """
    next_release = require_next_release(context, "publish")
    config = require(parse_plugin_config(plugin_config))
    env = require(parse_env(context.env))
    addon_zip_path = require(render_path(config.addon_zip_path, context))
    source_zip_path = require(render_path(config.source_zip_path, context))
    console = context.console

    release_notes: str | None = None
    if config.submit_release_notes:
        if next_release.notes:
            release_notes = format_release_notes(next_release.notes)
        else:
            console.warn("Release notes are empty. Skipping submission of release notes.")

    api = AmoApi(
        credentials=env.credentials,
        base_url=env.base_url,
        http=http if http is not None else RealHttpClient(),
    )
    version = require(
        update_addon(
            api=api,
            params=UpdateAddonParams(
                addon_id=config.addon_id,
                addon_zip_path=addon_zip_path,
                channel=config.channel,
                compatibility=config.compatibility,
                approval_notes=config.approval_notes or None,
                release_notes=release_notes,
                source_zip_path=source_zip_path if config.submit_source else None,
            ),
            console=console,
        )
    )
    console.success(f"Published version {version.id} of {config.addon_id}.")

    return PublishedRelease(name=PUBLISHED_NAME, url=listing_url(env.base_url, config.addon_id))
