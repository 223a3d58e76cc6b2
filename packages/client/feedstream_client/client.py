from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any

import httpx
import orjson

from feedstream_client import endpoints
from feedstream_client.canonical import json_bytes
from feedstream_client.core.config import Settings
from feedstream_client.decoding import decode_model
from feedstream_client.endpoints import Endpoint
from feedstream_client.errors import FeedApiError, ResponseDecodeError
from feedstream_client.feed import Feed
from feedstream_client.ids import FeedId
from feedstream_client.logs import log_json
from feedstream_client.models import ActivitiesResponse, Activity
from feedstream_core.models import Reaction
from feedstream_core.reactionable import (
    Reactionable,
    add_user_own_reaction,
    remove_user_own_reaction,
)


def _activity_id(record: Reactionable) -> str | None:
    return getattr(record.original(), "id", None)


class FeedClient:
    def __init__(
        self, *, settings: Settings | None = None, http: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=self.settings.api_base_url,
            timeout=self.settings.timeout_sec,
            headers={"User-Agent": self.settings.user_agent},
        )

    def __enter__(self) -> "FeedClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # Transport

    def send(self, endpoint: Endpoint) -> httpx.Response:
        params = dict(endpoint.params)
        if self.settings.api_key:
            params["api_key"] = self.settings.api_key
        headers: dict[str, str] = {}
        content: bytes | None = None
        if endpoint.json is not None:
            content = json_bytes(endpoint.json)
            headers["Content-Type"] = "application/json"

        start = time.perf_counter()
        try:
            resp = self._http.request(
                endpoint.method,
                endpoint.path,
                params=params,
                content=content,
                headers=headers,
            )
        except httpx.TransportError as exc:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log_json(
                {
                    "level": "error",
                    "method": endpoint.method,
                    "path": endpoint.path,
                    "error": str(exc)[:300],
                    "duration_ms": round(duration_ms, 2),
                },
                settings=self.settings,
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000.0
        ok = 200 <= resp.status_code < 300
        log_json(
            {
                "level": "info" if ok else "error",
                "request_id": resp.headers.get("x-request-id"),
                "method": endpoint.method,
                "path": endpoint.path,
                "status": resp.status_code,
                "duration_ms": round(duration_ms, 2),
            },
            settings=self.settings,
        )
        if not ok:
            raise FeedApiError.from_response(resp)
        return resp

    def request(self, endpoint: Endpoint) -> Any:
        resp = self.send(endpoint)
        if not resp.content:
            return None
        try:
            return orjson.loads(resp.content)
        except orjson.JSONDecodeError as exc:
            raise ResponseDecodeError(
                f"invalid JSON from {endpoint.method} {endpoint.path}"
            ) from exc

    # Feeds

    def feed(self, feed_id: FeedId | str, user_id: str | None = None) -> Feed:
        if user_id is not None:
            return Feed(FeedId(slug=str(feed_id), user_id=user_id), client=self)
        return Feed(FeedId.parse(feed_id), client=self)

    # Activities

    def get_activities(self, activity_ids: Sequence[str]) -> list[Activity]:
        data = self.request(endpoints.get_activities(activity_ids))
        return decode_model(ActivitiesResponse, data).results

    def get_activities_by_foreign_ids(
        self, foreign_ids: Sequence[str], times: Sequence[datetime]
    ) -> list[Activity]:
        data = self.request(endpoints.get_activities_by_foreign_ids(foreign_ids, times))
        return decode_model(ActivitiesResponse, data).results

    def update_activities(self, activities: Sequence[Activity]) -> None:
        self.request(
            endpoints.update_activities([a.to_payload() for a in activities])
        )

    def update_activity_by_id(
        self,
        activity_id: str,
        *,
        set: Mapping[str, Any] | None = None,
        unset: Sequence[str] | None = None,
    ) -> Activity:
        data = self.request(
            endpoints.update_activity_by_id(activity_id, set=set, unset=unset)
        )
        return decode_model(Activity, data)

    def update_activity(
        self,
        foreign_id: str,
        time: datetime,
        *,
        set: Mapping[str, Any] | None = None,
        unset: Sequence[str] | None = None,
    ) -> Activity:
        data = self.request(
            endpoints.update_activity(foreign_id, time, set=set, unset=unset)
        )
        return decode_model(Activity, data)

    # Reactions

    def get_reaction(self, reaction_id: str) -> Reaction:
        return decode_model(Reaction, self.request(endpoints.get_reaction(reaction_id)))

    def add_reaction(
        self,
        kind: str,
        activity: Reactionable,
        *,
        data: Mapping[str, Any] | None = None,
        parent: str | None = None,
        target_feeds: Sequence[FeedId] | None = None,
    ) -> Reaction:
        activity_id = _activity_id(activity)
        if not activity_id:
            raise ValueError("activity has no id; add it to a feed first")
        body = self.request(
            endpoints.add_reaction(
                kind=kind,
                activity_id=activity_id,
                data=data,
                parent=parent,
                target_feeds=target_feeds,
            )
        )
        reaction = decode_model(Reaction, body)
        # Child reactions do not count toward the activity's own views.
        if parent is None:
            add_user_own_reaction(activity, reaction)
            log_json(
                {
                    "level": "info",
                    "event": "reaction_added",
                    "kind": reaction.kind,
                    "reaction_id": reaction.id,
                    "activity_id": activity_id,
                },
                settings=self.settings,
            )
        return reaction

    def delete_reaction(
        self, reaction: Reaction, *, activity: Reactionable | None = None
    ) -> None:
        self.request(endpoints.delete_reaction(reaction.id))
        if activity is None:
            return
        removed = remove_user_own_reaction(activity, reaction)
        log_json(
            {
                "level": "info",
                "event": "reaction_removed" if removed else "reaction_remove_skipped",
                "kind": reaction.kind,
                "reaction_id": reaction.id,
                "activity_id": _activity_id(activity),
            },
            settings=self.settings,
        )
