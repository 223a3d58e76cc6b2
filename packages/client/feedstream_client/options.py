from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class FeedPagination:
    limit: int | None = None
    offset: int | None = None
    id_gt: str | None = None
    id_gte: str | None = None
    id_lt: str | None = None
    id_lte: str | None = None

    def __post_init__(self) -> None:
        if self.limit is not None and int(self.limit) < 0:
            raise ValueError("limit must be >= 0")
        if self.offset is not None and int(self.offset) < 0:
            raise ValueError("offset must be >= 0")

    def __add__(self, other: "FeedPagination") -> "FeedPagination":
        merged = {
            f.name: getattr(other, f.name)
            if getattr(other, f.name) is not None
            else getattr(self, f.name)
            for f in fields(self)
        }
        return FeedPagination(**merged)

    def to_params(self) -> dict[str, str]:
        out: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = str(value)
        return out


@dataclass(frozen=True)
class ReactionsOptions:
    """Which reaction views the service should attach to returned activities."""

    own: bool = False
    recent: bool = False
    counts: bool = False
    recent_limit: int | None = None

    @classmethod
    def all(cls, *, recent_limit: int | None = None) -> "ReactionsOptions":
        return cls(own=True, recent=True, counts=True, recent_limit=recent_limit)

    def to_params(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.own:
            out["withOwnReactions"] = "true"
        if self.recent:
            out["withRecentReactions"] = "true"
        if self.counts:
            out["withReactionCounts"] = "true"
        if self.recent_limit is not None:
            out["recentReactionsLimit"] = str(max(0, int(self.recent_limit)))
        return out
