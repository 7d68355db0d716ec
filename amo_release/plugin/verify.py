from __future__ import annotations

from collections.abc import Mapping

from amo_release.core.errors import PluginError, PluginFailures
from amo_release.core.result import Err
from amo_release.plugin.config import parse_env, parse_plugin_config
from amo_release.plugin.context import ReleaseContext
from amo_release.plugin.manifest import manifest_path


def verify_conditions(plugin_config: Mapping[str, object], context: ReleaseContext) -> None:
    """Check options, add-on directory and environment before any release step.

    Problems are collected, not short-circuited, so one run reports all of
    them.

    Raises:
        PluginFailures: If anything is wrong.
    """
    errors: list[PluginError] = []

    config = parse_plugin_config(plugin_config)
    if isinstance(config, Err):
        errors.append(config.error)
    else:
        addon_dir = context.cwd / config.value.addon_dir_path
        manifest = manifest_path(addon_dir)
        if not addon_dir.exists():
            errors.append(
                PluginError(
                    kind="addon_dir_not_found",
                    message=f"The add-on directory is not found at {addon_dir}.",
                )
            )
        elif not manifest.exists():
            errors.append(
                PluginError(
                    kind="manifest_not_found",
                    message=f"manifest.json is not found at {manifest}.",
                )
            )

    env = parse_env(context.env)
    if isinstance(env, Err):
        errors.append(env.error)

    if errors:
        for error in errors:
            context.console.error(f"{error.code}: {error.message}")
        raise PluginFailures(errors)
