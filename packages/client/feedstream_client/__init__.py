__all__ = [
    "Activity",
    "Feed",
    "FeedApiError",
    "FeedClient",
    "FeedClientError",
    "FeedId",
    "FeedPage",
    "FeedPagination",
    "Reaction",
    "ReactionsOptions",
    "ResponseDecodeError",
    "Settings",
]

from feedstream_client.client import FeedClient
from feedstream_client.core.config import Settings
from feedstream_client.errors import FeedApiError, FeedClientError, ResponseDecodeError
from feedstream_client.feed import Feed
from feedstream_client.ids import FeedId
from feedstream_client.models import Activity, FeedPage, Reaction
from feedstream_client.options import FeedPagination, ReactionsOptions
