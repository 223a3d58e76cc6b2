from __future__ import annotations

import httpx
import orjson
import pytest

from feedstream_client.core.config import Settings
from feedstream_client.errors import FeedApiError, ResponseDecodeError
from feedstream_client.models import Activity
from feedstream_client.options import FeedPagination, ReactionsOptions
from feedstream_core.models import Reaction


def test_feed_get_decodes_page(feed_client, mock_api, activity_json) -> None:
    activity_json["reaction_counts"] = {"like": 2}
    mock_api.add(
        "GET",
        "enrich/feed/user/eric/",
        body={"results": [activity_json], "next": "", "duration": "15.73ms"},
    )

    page = feed_client.feed("user", "eric").get(
        pagination=FeedPagination(limit=10), reactions=ReactionsOptions(counts=True)
    )

    assert [a.id for a in page.results] == [activity_json["id"]]
    assert page.results[0].reaction_counts == {"like": 2}
    params = dict(mock_api.last.url.params)
    assert params == {"limit": "10", "withReactionCounts": "true", "api_key": "test-key"}


def test_feed_add_and_remove(feed_client, mock_api, activity_json) -> None:
    mock_api.add("POST", "feed/user/eric/", body=activity_json)
    mock_api.add(
        "DELETE",
        f"feed/user/eric/{activity_json['id']}/",
        body={"removed": activity_json["id"], "duration": "1ms"},
    )

    feed = feed_client.feed("user:eric")
    created = feed.add(Activity(actor="eric", verb="tweet", object="Hello world 3"))
    assert created.id == activity_json["id"]
    assert mock_api.last_json() == {"actor": "eric", "verb": "tweet", "object": "Hello world 3"}
    assert mock_api.last.headers["content-type"] == "application/json"

    assert feed.remove_by_id(created.id) == activity_json["id"]


def test_follow_uses_configured_copy_limit(feed_client, mock_api) -> None:
    mock_api.add("POST", "feed/timeline/eric/follows/", status=201, body={"duration": "1ms"})
    mock_api.add("DELETE", "feed/timeline/eric/follows/user:jessica/", body={"duration": "1ms"})

    feed = feed_client.feed("timeline", "eric")
    assert feed.follow("user:jessica") == 201
    assert mock_api.last_json() == {"target": "user:jessica", "activity_copy_limit": 100}

    assert feed.unfollow("user:jessica", keep_history=True) == 200
    assert mock_api.last.url.params.get("keep_history") == "1"


def test_add_reaction_updates_activity(feed_client, mock_api, activity_json) -> None:
    activity = Activity.model_validate(activity_json)
    mock_api.add(
        "POST",
        "reaction/",
        status=201,
        body={
            "id": "r1",
            "kind": "like",
            "activity_id": activity.id,
            "user_id": "eric",
            "data": {},
        },
    )

    reaction = feed_client.add_reaction("like", activity)

    assert reaction.id == "r1"
    assert mock_api.last_json() == {"kind": "like", "activity_id": activity.id}
    assert activity.user_own_reaction("like") is reaction
    assert activity.reaction_counts == {"like": 1}


def test_add_reaction_to_repost_targets_original(feed_client, mock_api, activity_json) -> None:
    repost = Activity(actor="jessica", verb="repost", object=Activity.model_validate(activity_json))
    mock_api.add("POST", "reaction/", body={"id": "r1", "kind": "like"})

    feed_client.add_reaction("like", repost)

    assert mock_api.last_json()["activity_id"] == activity_json["id"]
    assert repost.original().reaction_count("like") == 1
    assert repost.reaction_counts is None


def test_child_reaction_does_not_touch_activity_views(feed_client, mock_api, activity_json) -> None:
    activity = Activity.model_validate(activity_json)
    mock_api.add("POST", "reaction/", body={"id": "c2", "kind": "comment", "parent": "c1"})

    feed_client.add_reaction("comment", activity, data={"text": "+1"}, parent="c1")

    assert mock_api.last_json()["parent"] == "c1"
    assert activity.user_own_reactions is None
    assert activity.reaction_counts is None


def test_add_reaction_requires_activity_id(feed_client, mock_api) -> None:
    with pytest.raises(ValueError):
        feed_client.add_reaction("like", Activity(actor="eric", verb="tweet", object="x"))
    assert mock_api.calls == []


def test_delete_reaction_updates_activity(feed_client, mock_api, activity_json) -> None:
    activity = Activity.model_validate(activity_json)
    reaction = Reaction(id="r1", kind="like")
    activity.add_user_own_reaction(reaction)
    mock_api.add("DELETE", "reaction/r1/", body={"duration": "1ms"})

    feed_client.delete_reaction(reaction, activity=activity)

    assert activity.has_user_own_reaction("like") is False
    assert activity.reaction_counts == {"like": 0}


def test_failed_delete_leaves_activity_untouched(feed_client, mock_api, activity_json) -> None:
    activity = Activity.model_validate(activity_json)
    reaction = Reaction(id="r1", kind="like")
    activity.add_user_own_reaction(reaction)
    mock_api.add(
        "DELETE",
        "reaction/r1/",
        status=404,
        body={"detail": "reaction not found", "exception": "DoesNotExistException"},
        headers={"x-request-id": "req_1"},
    )

    with pytest.raises(FeedApiError) as excinfo:
        feed_client.delete_reaction(reaction, activity=activity)

    assert excinfo.value.status_code == 404
    assert excinfo.value.detail == "reaction not found"
    assert excinfo.value.exception == "DoesNotExistException"
    assert excinfo.value.request_id == "req_1"
    assert activity.user_own_reactions_count("like") == 1


def test_activities_get_and_partial_update(feed_client, mock_api, activity_json) -> None:
    mock_api.add("GET", "activities/", body={"results": [activity_json], "duration": "1ms"})
    updated = dict(activity_json, popularity=2)
    mock_api.add("POST", "activity/", body=updated)

    found = feed_client.get_activities([activity_json["id"].upper()])
    assert found[0].foreign_id == "tweet:1"
    assert mock_api.last.url.params["ids"] == activity_json["id"]

    result = feed_client.update_activity_by_id(activity_json["id"], set={"popularity": 2})
    assert result.model_extra == {"popularity": 2}
    assert mock_api.last_json() == {"id": activity_json["id"], "set": {"popularity": 2}}


def test_invalid_json_raises_decode_error(feed_client, mock_api) -> None:
    mock_api.routes[("GET", "reaction/r1/")] = lambda _: httpx.Response(200, content=b"<html>")
    with pytest.raises(ResponseDecodeError):
        feed_client.get_reaction("r1")


def test_request_log_lines(mock_api, capsys) -> None:
    from feedstream_client.client import FeedClient

    mock_api.add("GET", "reaction/r1/", body={"id": "r1", "kind": "like"}, headers={"x-request-id": "req_9"})
    http = httpx.Client(
        base_url="https://api.feedstream.test/api/v1.0/",
        transport=httpx.MockTransport(mock_api.handler),
    )
    client = FeedClient(settings=Settings(log_json=True), http=http)

    assert client.get_reaction("r1").kind == "like"

    lines = [orjson.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert lines[-1]["method"] == "GET"
    assert lines[-1]["path"] == "reaction/r1/"
    assert lines[-1]["status"] == 200
    assert lines[-1]["request_id"] == "req_9"


def test_settings_normalize_base_url(monkeypatch) -> None:
    monkeypatch.setenv("FEEDSTREAM_API_BASE_URL", "https://example.test/api/v1.0")
    monkeypatch.setenv("FEEDSTREAM_API_KEY", "  ")
    settings = Settings()
    assert settings.api_base_url == "https://example.test/api/v1.0/"
    assert settings.api_key is None

    with pytest.raises(ValueError):
        Settings(timeout_sec=0)


def test_feed_get_uses_configured_recent_limit(mock_api, activity_json) -> None:
    from feedstream_client.client import FeedClient

    mock_api.add("GET", "enrich/feed/user/eric/", body={"results": [activity_json], "next": ""})
    http = httpx.Client(
        base_url="https://api.feedstream.test/api/v1.0/",
        transport=httpx.MockTransport(mock_api.handler),
    )
    client = FeedClient(settings=Settings(recent_reactions_limit=5), http=http)

    client.feed("user", "eric").get(reactions=ReactionsOptions(recent=True))
    assert mock_api.last.url.params["withRecentReactions"] == "true"
    assert mock_api.last.url.params["recentReactionsLimit"] == "5"

    client.feed("user", "eric").get(reactions=ReactionsOptions(recent=True, recent_limit=2))
    assert mock_api.last.url.params["recentReactionsLimit"] == "2"


def test_feed_remove_by_foreign_id(feed_client, mock_api) -> None:
    mock_api.add(
        "DELETE",
        "feed/user/eric/tweet:1/",
        body={"removed": "tweet:1", "duration": "1ms"},
    )

    removed = feed_client.feed("user", "eric").remove_by_foreign_id("tweet:1")

    assert removed == "tweet:1"
    assert mock_api.last.method == "DELETE"
    assert mock_api.last.url.params["foreign_id"] == "1"


def test_log_json_requires_settings_and_respects_switch(capsys) -> None:
    from feedstream_client.logs import log_json

    log_json({"event": "x"}, settings=Settings(log_json=False))
    assert capsys.readouterr().out == ""

    log_json({"event": "x"}, settings=Settings(log_json=True))
    assert orjson.loads(capsys.readouterr().out) == {"event": "x"}

    with pytest.raises(TypeError):
        log_json({"event": "x"})  # type: ignore[call-arg]
