from __future__ import annotations

import re
from dataclasses import dataclass

_PART_RE = re.compile(r"^[\w-]+$")


def _validate_part(value: str, *, name: str) -> str:
    raw = str(value or "").strip()
    if not raw:
        raise ValueError(f"empty feed {name}")
    if not _PART_RE.match(raw):
        raise ValueError(f"invalid feed {name}: {raw!r}")
    return raw


@dataclass(frozen=True)
class FeedId:
    slug: str
    user_id: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "slug", _validate_part(self.slug, name="slug"))
        object.__setattr__(
            self, "user_id", _validate_part(self.user_id, name="user_id")
        )

    def __str__(self) -> str:
        return f"{self.slug}:{self.user_id}"

    @property
    def path(self) -> str:
        return f"{self.slug}/{self.user_id}"

    @classmethod
    def parse(cls, value: "FeedId | str") -> "FeedId":
        if isinstance(value, FeedId):
            return value
        slug, sep, user_id = str(value or "").strip().partition(":")
        if not sep:
            raise ValueError(f"feed id must look like 'slug:user_id' (got {value!r})")
        return cls(slug=slug, user_id=user_id)
