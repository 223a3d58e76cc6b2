from __future__ import annotations

from typing import TYPE_CHECKING

from feedstream_client import endpoints
from feedstream_client.decoding import decode_model
from feedstream_client.ids import FeedId
from feedstream_client.models import Activity, FeedPage, RemovedResponse
from feedstream_client.options import FeedPagination, ReactionsOptions

if TYPE_CHECKING:
    from feedstream_client.client import FeedClient


class Feed:
    """Operations scoped to one feed, e.g. ``user:eric``."""

    def __init__(self, feed_id: FeedId, *, client: "FeedClient") -> None:
        self.feed_id = feed_id
        self._client = client

    def __str__(self) -> str:
        return str(self.feed_id)

    def __repr__(self) -> str:
        return f"Feed({str(self.feed_id)!r})"

    def add(self, activity: Activity) -> Activity:
        data = self._client.request(
            endpoints.add_activity(self.feed_id, activity=activity.to_payload())
        )
        return decode_model(Activity, data)

    def remove_by_id(self, activity_id: str) -> str | None:
        data = self._client.request(
            endpoints.delete_activity_by_id(self.feed_id, activity_id=activity_id)
        )
        return decode_model(RemovedResponse, data or {}).removed

    def remove_by_foreign_id(self, foreign_id: str) -> str | None:
        data = self._client.request(
            endpoints.delete_activity_by_foreign_id(self.feed_id, foreign_id=foreign_id)
        )
        return decode_model(RemovedResponse, data or {}).removed

    def get(
        self,
        *,
        pagination: FeedPagination | None = None,
        reactions: ReactionsOptions | None = None,
    ) -> FeedPage:
        settings = self._client.settings
        if (
            reactions is not None
            and reactions.recent
            and reactions.recent_limit is None
            and settings.recent_reactions_limit is not None
        ):
            reactions = ReactionsOptions(
                own=reactions.own,
                recent=reactions.recent,
                counts=reactions.counts,
                recent_limit=settings.recent_reactions_limit,
            )
        data = self._client.request(
            endpoints.get_feed(self.feed_id, pagination=pagination, reactions=reactions)
        )
        return decode_model(FeedPage, data)

    def follow(
        self, target: FeedId | str, *, activity_copy_limit: int | None = None
    ) -> int:
        """Follow ``target``; returns the HTTP status code."""
        limit = (
            self._client.settings.activity_copy_limit
            if activity_copy_limit is None
            else activity_copy_limit
        )
        resp = self._client.send(
            endpoints.follow(
                self.feed_id, target=FeedId.parse(target), activity_copy_limit=limit
            )
        )
        return resp.status_code

    def unfollow(self, target: FeedId | str, *, keep_history: bool = False) -> int:
        resp = self._client.send(
            endpoints.unfollow(
                self.feed_id, target=FeedId.parse(target), keep_history=keep_history
            )
        )
        return resp.status_code
