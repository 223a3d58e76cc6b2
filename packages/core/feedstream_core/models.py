from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ReactionKind = str


class Reaction(BaseModel):
    """One social reaction (like, comment, ...) to an activity.

    Only ``id`` and ``kind`` take part in aggregation; the remaining fields are
    carried through as received from the service.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    kind: ReactionKind
    activity_id: str | None = None
    user_id: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    parent: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    children_counts: dict[ReactionKind, int] = Field(default_factory=dict)
    latest_children: dict[ReactionKind, list["Reaction"]] = Field(default_factory=dict)
    own_children: dict[ReactionKind, list["Reaction"]] = Field(default_factory=dict)
