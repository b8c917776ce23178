"""Plain result record handed back to the host process on quit."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class SessionResult:
    depth: int
    node_id: str | None = None
    value: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
