from __future__ import annotations

import pytest

from ._gate import require_arch_checks_enabled
from ._utils import iter_source_files, matches_prefix, package_root, parse_imports

# Third-party and low-level modules, and the only files allowed to import them.
_OWNERS: dict[str, set[str]] = {
    "rich": {"output/console.py", "output/pretty.py"},
    "jwt": {"amo/auth.py"},
    "mistune": {"plugin/notes.py"},
    "urllib.request": {"tools/http.py"},
    "subprocess": {"platform/process.py"},
}


@pytest.mark.parametrize("module", sorted(_OWNERS))
def test_direct_imports_are_limited_to_owning_modules(module: str) -> None:
    require_arch_checks_enabled()

    root = package_root()
    allowlist = _OWNERS[module]
    offenders: list[str] = []
    for file_path in iter_source_files():
        rel = file_path.relative_to(root).as_posix()
        if rel in allowlist:
            continue
        for item in parse_imports(file_path):
            if matches_prefix(item.module, module):
                offenders.append(f"{rel}:{item.line}: direct import '{item.module}'")

    assert not offenders, f"{module} usage policy violations:\n" + "\n".join(offenders)


def test_amo_layer_does_not_depend_on_plugin_adapter() -> None:
    require_arch_checks_enabled()

    root = package_root()
    offenders: list[str] = []
    for file_path in sorted((root / "amo").rglob("*.py")):
        for item in parse_imports(file_path):
            if matches_prefix(item.module, "amo_release.plugin"):
                offenders.append(f"{file_path.relative_to(root)}:{item.line}: '{item.module}'")

    assert not offenders, "amo -> plugin dependency violations:\n" + "\n".join(offenders)
