"""Split assistant replies into prose and fenced code segments."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "UNSPECIFIED_LANGUAGE",
    "Segment",
    "SegmentKind",
    "code_segments",
    "language_color",
    "parse",
]

UNSPECIFIED_LANGUAGE = "unspecified"

# Opening fence, optional same-line tag, optional newline, lazy interior, closing fence.
# Tags are ASCII word characters only; anything else starts the body.
_CODE_BLOCK_RE = re.compile(r"```(\w+)?\n?(.*?)```", re.DOTALL | re.ASCII)

_LANGUAGE_COLORS: dict[str, str] = {
    "javascript": "yellow",
    "typescript": "blue",
    "python": "green",
    "java": "dark_orange",
    "cpp": "purple",
    "c": "grey50",
    "html": "red",
    "css": "hot_pink",
    "json": "slate_blue1",
    "sql": "dark_cyan",
    "php": "violet",
    "ruby": "red3",
    "go": "cyan",
    "rust": "orange3",
    "swift": "orange1",
    "kotlin": "medium_purple",
    "bash": "grey35",
    "shell": "grey35",
}
_DEFAULT_COLOR = "light_slate_grey"


class SegmentKind:
    PROSE = "prose"
    CODE = "code"


@dataclass(frozen=True)
class Segment:
    kind: str
    content: str
    language: str | None = None

    @property
    def is_code(self) -> bool:
        return self.kind == SegmentKind.CODE

    @property
    def display_language(self) -> str:
        """Language label shown to the user; untagged blocks read as plain text."""
        if self.language is None or self.language == UNSPECIFIED_LANGUAGE:
            return "text"
        return self.language


def parse(text: str) -> list[Segment]:
    """Parse reply text into ordered prose and code segments.

    An opening fence without a closing one is left as prose. The result always
    holds at least one segment, so an empty message still renders.
    """
    segments: list[Segment] = []
    last_index = 0

    for match in _CODE_BLOCK_RE.finditer(text):
        if match.start() > last_index:
            segments.append(Segment(SegmentKind.PROSE, text[last_index:match.start()]))

        tag = (match.group(1) or "").lower()
        segments.append(
            Segment(
                SegmentKind.CODE,
                match.group(2).strip(),
                language=tag or UNSPECIFIED_LANGUAGE,
            )
        )
        last_index = match.end()

    if last_index < len(text):
        segments.append(Segment(SegmentKind.PROSE, text[last_index:]))

    if not segments:
        return [Segment(SegmentKind.PROSE, text)]
    return segments


def code_segments(text: str) -> list[Segment]:
    return [segment for segment in parse(text) if segment.is_code]


def language_color(language: str) -> str:
    return _LANGUAGE_COLORS.get(language.lower(), _DEFAULT_COLOR)
