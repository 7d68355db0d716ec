"""Expected shapes of AMO responses.

A shape lists the fields a response object must carry and the JSON type of
each. Checking is fail-closed: nothing is coerced or repaired, extra fields
are ignored, and any mismatch is reported as a list of problems.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from amo_release.core.result import Err, Ok, Result
from amo_release.core.structured import StrDict, as_str_dict, is_str_dict, type_name

__all__ = ["Field", "Shape", "UPLOAD_SHAPE", "VERSION_SHAPE"]

FieldKind = Literal["string", "boolean", "integer", "object"]


def _matches(kind: FieldKind, value: object) -> bool:
    match kind:
        case "string":
            return isinstance(value, str)
        case "boolean":
            return isinstance(value, bool)
        case "integer":
            return isinstance(value, int) and not isinstance(value, bool)
        case "object":
            return is_str_dict(value)


@dataclass(frozen=True, slots=True)
class Field:
    name: str
    kind: FieldKind
    nullable: bool = False

    def describe(self) -> str:
        return f"{self.kind} | null" if self.nullable else self.kind

    def problem(self, data: StrDict) -> str | None:
        if self.name not in data:
            return f"{self.name} must be {self.describe()} (was missing)"
        value = data[self.name]
        if value is None and self.nullable:
            return None
        if not _matches(self.kind, value):
            return f"{self.name} must be {self.describe()} (was {type_name(value)})"
        return None


@dataclass(frozen=True, slots=True)
class Shape:
    name: str
    fields: tuple[Field, ...]

    def check(self, body: object) -> Result[StrDict, tuple[str, ...]]:
        data = as_str_dict(body)
        if data is None:
            return Err((f"{self.name} must be an object (was {type_name(body)})",))

        problems = tuple(p for f in self.fields if (p := f.problem(data)) is not None)
        if problems:
            return Err(problems)
        return Ok(data)


UPLOAD_SHAPE = Shape(
    name="upload",
    fields=(
        Field("uuid", "string"),
        Field("processed", "boolean"),
        Field("valid", "boolean"),
        Field("validation", "object", nullable=True),
    ),
)

VERSION_SHAPE = Shape(
    name="version",
    fields=(Field("id", "integer"),),
)
