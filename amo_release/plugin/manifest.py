from __future__ import annotations

import json
from pathlib import Path

from amo_release.core.errors import PluginError
from amo_release.core.result import Err, Ok, Result
from amo_release.core.structured import as_str_dict
from amo_release.platform.files import atomic_write_text

MANIFEST_FILENAME = "manifest.json"


def manifest_path(addon_dir: Path) -> Path:
    return addon_dir / MANIFEST_FILENAME


def stamp_version(path: Path, version: str) -> Result[None, PluginError]:
    """Overwrite the ``version`` field of a WebExtension manifest in place.

    Every other key keeps its value and position.
    """
    try:
        text = path.read_text(encoding="utf-8")
        manifest = as_str_dict(json.loads(text))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        manifest = None
    if manifest is None:
        return Err(
            PluginError(
                kind="invalid_manifest",
                message=f"An invalid manifest was read from {path}.",
            )
        )

    manifest["version"] = version
    atomic_write_text(path, json.dumps(manifest, indent=2, ensure_ascii=False) + "\n")
    return Ok(None)
