from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from feedstream_client.canonical import stream_time
from feedstream_client.ids import FeedId
from feedstream_client.options import FeedPagination, ReactionsOptions

HttpMethod = Literal["GET", "POST", "DELETE"]

MAX_ACTIVITY_COPY_LIMIT = 1000


@dataclass(frozen=True)
class Endpoint:
    method: HttpMethod
    path: str
    params: dict[str, str] = field(default_factory=dict)
    json: Any = None


def _clamp_copy_limit(limit: int) -> int:
    return max(0, min(MAX_ACTIVITY_COPY_LIMIT, int(limit)))


def _set_unset(
    *, set: Mapping[str, Any] | None, unset: Sequence[str] | None
) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if set is not None:
        out["set"] = dict(set)
    if unset is not None:
        out["unset"] = [str(name) for name in unset]
    return out


# Feeds


def add_activity(feed_id: FeedId, *, activity: dict[str, Any]) -> Endpoint:
    return Endpoint("POST", f"feed/{feed_id.path}/", json=activity)


def delete_activity_by_id(feed_id: FeedId, *, activity_id: str) -> Endpoint:
    aid = str(activity_id or "").strip().lower()
    if not aid:
        raise ValueError("empty activity_id")
    return Endpoint("DELETE", f"feed/{feed_id.path}/{aid}/")


def delete_activity_by_foreign_id(feed_id: FeedId, *, foreign_id: str) -> Endpoint:
    fid = str(foreign_id or "").strip()
    if not fid:
        raise ValueError("empty foreign_id")
    return Endpoint(
        "DELETE", f"feed/{feed_id.path}/{fid}/", params={"foreign_id": "1"}
    )


def get_feed(
    feed_id: FeedId,
    *,
    pagination: FeedPagination | None = None,
    reactions: ReactionsOptions | None = None,
) -> Endpoint:
    params: dict[str, str] = {}
    if pagination is not None:
        params.update(pagination.to_params())
    if reactions is not None:
        params.update(reactions.to_params())
    return Endpoint("GET", f"enrich/feed/{feed_id.path}/", params=params)


def follow(feed_id: FeedId, *, target: FeedId, activity_copy_limit: int) -> Endpoint:
    return Endpoint(
        "POST",
        f"feed/{feed_id.path}/follows/",
        json={
            "target": str(target),
            "activity_copy_limit": _clamp_copy_limit(activity_copy_limit),
        },
    )


def unfollow(feed_id: FeedId, *, target: FeedId, keep_history: bool = False) -> Endpoint:
    params = {"keep_history": "1"} if keep_history else {}
    return Endpoint(
        "DELETE", f"feed/{feed_id.path}/follows/{target}/", params=params
    )


# Activities


def get_activities(activity_ids: Sequence[str]) -> Endpoint:
    ids = [str(aid or "").strip().lower() for aid in activity_ids]
    ids = [aid for aid in ids if aid]
    if not ids:
        raise ValueError("activity_ids must not be empty")
    return Endpoint("GET", "activities/", params={"ids": ",".join(ids)})


def get_activities_by_foreign_ids(
    foreign_ids: Sequence[str], times: Sequence[datetime]
) -> Endpoint:
    if not foreign_ids:
        raise ValueError("foreign_ids must not be empty")
    if len(foreign_ids) != len(times):
        raise ValueError(
            f"foreign_ids and times must have the same length ({len(foreign_ids)} != {len(times)})"
        )
    return Endpoint(
        "GET",
        "activities/",
        params={
            "foreign_ids": ",".join(str(fid) for fid in foreign_ids),
            "timestamps": ",".join(stream_time(t) for t in times),
        },
    )


def update_activities(activities: Sequence[dict[str, Any]]) -> Endpoint:
    return Endpoint("POST", "activities/", json={"activities": list(activities)})


def update_activity_by_id(
    activity_id: str,
    *,
    set: Mapping[str, Any] | None = None,
    unset: Sequence[str] | None = None,
) -> Endpoint:
    aid = str(activity_id or "").strip().lower()
    if not aid:
        raise ValueError("empty activity_id")
    body: dict[str, Any] = {"id": aid}
    body.update(_set_unset(set=set, unset=unset))
    return Endpoint("POST", "activity/", json=body)


def update_activity(
    foreign_id: str,
    time: datetime,
    *,
    set: Mapping[str, Any] | None = None,
    unset: Sequence[str] | None = None,
) -> Endpoint:
    body: dict[str, Any] = {"foreign_id": str(foreign_id), "time": stream_time(time)}
    body.update(_set_unset(set=set, unset=unset))
    return Endpoint("POST", "activity/", json=body)


# Reactions


def add_reaction(
    *,
    kind: str,
    activity_id: str,
    data: Mapping[str, Any] | None = None,
    parent: str | None = None,
    target_feeds: Sequence[FeedId] | None = None,
) -> Endpoint:
    kind = str(kind or "").strip()
    if not kind:
        raise ValueError("empty reaction kind")
    aid = str(activity_id or "").strip()
    if not aid:
        raise ValueError("empty activity_id")
    body: dict[str, Any] = {"kind": kind, "activity_id": aid}
    if data:
        body["data"] = dict(data)
    if parent:
        body["parent"] = str(parent)
    if target_feeds:
        body["target_feeds"] = [str(feed) for feed in target_feeds]
    return Endpoint("POST", "reaction/", json=body)


def get_reaction(reaction_id: str) -> Endpoint:
    rid = str(reaction_id or "").strip()
    if not rid:
        raise ValueError("empty reaction_id")
    return Endpoint("GET", f"reaction/{rid}/")


def delete_reaction(reaction_id: str) -> Endpoint:
    rid = str(reaction_id or "").strip()
    if not rid:
        raise ValueError("empty reaction_id")
    return Endpoint("DELETE", f"reaction/{rid}/")
