from __future__ import annotations

from collections.abc import Mapping

from amo_release.plugin._helpers import require, require_next_release
from amo_release.plugin.archive import git_archive, zip_directory
from amo_release.plugin.config import parse_plugin_config, render_path
from amo_release.plugin.context import ReleaseContext
from amo_release.plugin.manifest import manifest_path, stamp_version


def prepare(plugin_config: Mapping[str, object], context: ReleaseContext) -> None:
    """Stamp the release version into manifest.json and build the archives.

    Raises:
        PluginFailure: On an invalid config or manifest, or if archiving fails.
    """
    next_release = require_next_release(context, "prepare")
    config = require(parse_plugin_config(plugin_config))
    addon_zip_path = require(render_path(config.addon_zip_path, context))
    source_zip_path = require(render_path(config.source_zip_path, context))
    addon_dir = context.cwd / config.addon_dir_path
    console = context.console

    console.log("Updating manifest.json...")
    require(stamp_version(manifest_path(addon_dir), next_release.version))

    console.log("Archiving the add-on...")
    require(zip_directory(addon_dir, addon_zip_path))

    if config.submit_source:
        console.log("Archiving the source code...")
        require(git_archive(context.cwd, source_zip_path))
