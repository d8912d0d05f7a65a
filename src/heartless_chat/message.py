from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime


class Role:
    USER = "user"
    ASSISTANT = "assistant"


_ROLES = frozenset({Role.USER, Role.ASSISTANT})


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Message:
    id: str
    role: str
    content: str
    timestamp: datetime = field(default_factory=_utc_now)

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise ValueError(f"Unknown message role: {self.role!r}")

    def to_wire(self) -> dict:
        return {"role": self.role, "content": self.content}


class MessageIdFactory:
    """Hands out increasing string ids, unique for the life of one session."""

    def __init__(self, start: int = 1):
        self._counter = itertools.count(start)

    def next_id(self) -> str:
        return str(next(self._counter))
