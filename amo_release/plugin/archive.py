from __future__ import annotations

from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from amo_release.core.errors import PluginError
from amo_release.core.result import Err, Ok, Result
from amo_release.platform.process import run as run_process

GIT_ARCHIVE_TIMEOUT_SECONDS = 5 * 60.0


def _collect_dir(base_dir: Path, *, exclude: Path | None = None) -> list[tuple[Path, str]]:
    out: list[tuple[Path, str]] = []
    for p in sorted(base_dir.rglob("*")):
        if p.is_dir():
            continue
        if exclude is not None and p.resolve() == exclude.resolve():
            continue
        out.append((p, p.relative_to(base_dir).as_posix()))
    return out


def zip_directory(src_dir: Path, zip_path: Path) -> Result[Path, PluginError]:
    """Archive the contents of src_dir (not the directory itself) to zip_path."""
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    # The archive may be configured to land inside the add-on directory.
    files = _collect_dir(src_dir, exclude=zip_path)
    try:
        # Checkouts can carry mtimes before 1980, which ZIP cannot represent.
        with ZipFile(zip_path, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
            for src, arc in files:
                zf.write(src, arcname=arc)
    except OSError as e:
        return Err(
            PluginError(
                kind="archive_failed",
                message=f"Failed to archive the add-on to {zip_path}.",
                details=str(e),
            )
        )
    return Ok(zip_path)


def git_archive(repo_dir: Path, zip_path: Path) -> Result[Path, PluginError]:
    """Archive the committed tree at HEAD, which is what reviewers rebuild from."""
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    result = run_process(
        ["git", "archive", "--format=zip", "-o", str(zip_path), "HEAD"],
        cwd=repo_dir,
        timeout=GIT_ARCHIVE_TIMEOUT_SECONDS,
    )
    if isinstance(result, Err):
        e = result.error
        return Err(
            PluginError(
                kind="archive_failed",
                message=f"Failed to archive the source code to {zip_path}.",
                details=e.stderr.strip() or str(e),
            )
        )
    return Ok(zip_path)
