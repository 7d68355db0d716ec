"""Release context handed to the lifecycle functions by the host."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from amo_release.output.console import ConsoleProtocol


@dataclass(frozen=True, slots=True)
class Branch:
    name: str


@dataclass(frozen=True, slots=True)
class LastRelease:
    version: str | None = None
    git_tag: str | None = None


@dataclass(frozen=True, slots=True)
class NextRelease:
    version: str
    git_tag: str = ""
    channel: str | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything the host knows about the release being made.

    ``next_release`` is only meaningful for ``prepare`` and ``publish``;
    ``verify_conditions`` reads ``env``, ``cwd`` and ``console``.
    """

    env: Mapping[str, str]
    console: ConsoleProtocol
    cwd: Path = field(default_factory=Path.cwd)
    branch: Branch = field(default_factory=lambda: Branch(name="main"))
    last_release: LastRelease = field(default_factory=LastRelease)
    next_release: NextRelease | None = None

    def placeholders(self) -> dict[str, str]:
        """Values available to ``${...}`` path templates.

        Values the host did not provide, such as the last release on a first
        release, render as empty strings.
        """
        values = {
            "branch.name": self.branch.name,
            "lastRelease.version": self.last_release.version or "",
            "lastRelease.gitTag": self.last_release.git_tag or "",
        }
        if self.next_release is not None:
            values["nextRelease.version"] = self.next_release.version
            values["nextRelease.gitTag"] = self.next_release.git_tag
            values["nextRelease.channel"] = self.next_release.channel or ""
        return values
