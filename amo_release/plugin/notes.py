"""Release notes conversion for AMO.

AMO shows release notes as limited HTML, so changelog markdown is rendered
with mistune. Headings are not allowed there and become bold lines.
"""

from __future__ import annotations

from typing import Any, cast

import mistune


class _ReleaseNotesRenderer(mistune.HTMLRenderer):
    def heading(self, text: str, level: int, **attrs: Any) -> str:
        return f"\n<b>{text}</b>\n"


_render = mistune.create_markdown(renderer=_ReleaseNotesRenderer(escape=False))


def format_release_notes(markdown: str) -> str:
    """Render changelog markdown as AMO release notes HTML."""
    return cast(str, _render(markdown)).strip()
