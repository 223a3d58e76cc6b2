from __future__ import annotations

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from feedstream_core.models import Reaction, ReactionKind
from feedstream_core.reactionable import ReactionableModel

_REACTION_VIEWS = {"user_own_reactions", "latest_reactions", "reaction_counts"}


class Activity(ReactionableModel):
    """A feed activity.

    ``actor`` and ``object`` are reference strings, or dicts when the enrich
    endpoints expand user and collection references. For a repost, ``object``
    is the decoded activity being reposted. Reactions on a repost belong to the
    reposted activity.
    """

    id: str | None = None
    actor: str | dict[str, Any]
    verb: str
    object: Activity | str | dict[str, Any] = Field(union_mode="left_to_right")
    foreign_id: str | None = None
    time: datetime | None = None
    target: str | None = None
    to: list[str] = Field(default_factory=list)
    origin: str | None = None

    def original(self) -> Self:
        if isinstance(self.object, Activity):
            return self.object  # type: ignore[return-value]
        return self

    @property
    def is_repost(self) -> bool:
        return isinstance(self.object, Activity)

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(exclude=_REACTION_VIEWS, exclude_none=True)
        if isinstance(self.object, Activity):
            payload["object"] = self.object.to_payload()
        if not payload.get("to"):
            payload.pop("to", None)
        return payload


class FeedPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[Activity] = Field(default_factory=list)
    next: str | None = None
    duration: str | None = None

    @property
    def has_next(self) -> bool:
        return bool(str(self.next or "").strip())


class ActivitiesResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[Activity] = Field(default_factory=list)
    duration: str | None = None


class RemovedResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    removed: str | None = None
    duration: str | None = None


__all__ = [
    "ActivitiesResponse",
    "Activity",
    "FeedPage",
    "Reaction",
    "ReactionKind",
    "RemovedResponse",
]
