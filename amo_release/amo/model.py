from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Channel = Literal["unlisted", "listed"]
Application = Literal["android", "firefox"]

CHANNELS: tuple[Channel, ...] = ("unlisted", "listed")
APPLICATIONS: tuple[Application, ...] = ("android", "firefox")

RELEASE_NOTES_LOCALE = "en-US"


@dataclass(frozen=True, slots=True)
class Credentials:
    api_key: str
    api_secret: str

    def __repr__(self) -> str:
        return f"Credentials(api_key={self.api_key!r}, api_secret='***')"


@dataclass(frozen=True, slots=True)
class Upload:
    """A submitted package as last reported by AMO."""

    uuid: str
    processed: bool
    valid: bool
    validation: dict[str, object] | None


@dataclass(frozen=True, slots=True)
class Version:
    id: int


@dataclass(frozen=True, slots=True)
class VersionRequest:
    upload: str
    compatibility: tuple[Application, ...]
    approval_notes: str | None = None
    release_notes: str | None = None

    def to_json(self) -> dict[str, object]:
        body: dict[str, object] = {"upload": self.upload}
        if self.approval_notes is not None:
            body["approval_notes"] = self.approval_notes
        body["compatibility"] = list(self.compatibility)
        if self.release_notes is not None:
            body["release_notes"] = {RELEASE_NOTES_LOCALE: self.release_notes}
        return body
