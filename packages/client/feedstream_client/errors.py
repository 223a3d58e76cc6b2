from __future__ import annotations

import httpx
import orjson


class FeedClientError(RuntimeError):
    pass


class ResponseDecodeError(FeedClientError):
    pass


class FeedApiError(FeedClientError):
    def __init__(
        self,
        *,
        status_code: int,
        detail: str,
        exception: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail
        self.exception = exception
        self.request_id = request_id

    @classmethod
    def from_response(cls, resp: httpx.Response) -> "FeedApiError":
        detail = resp.text[:400]
        exception: str | None = None
        try:
            body = orjson.loads(resp.content)
        except orjson.JSONDecodeError:
            body = None
        if isinstance(body, dict):
            detail = str(body.get("detail") or detail)[:400]
            exception = str(body.get("exception") or "") or None
        return cls(
            status_code=resp.status_code,
            detail=detail or resp.reason_phrase,
            exception=exception,
            request_id=resp.headers.get("x-request-id"),
        )
