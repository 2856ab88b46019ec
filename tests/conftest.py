import types
from typing import Any

import pytest
from googleapiclient.errors import HttpError

from shared.config import settings


@pytest.fixture(autouse=True)
def channel_settings(monkeypatch: pytest.MonkeyPatch):
    """Populate credentials so the app's startup check passes."""
    monkeypatch.setattr(settings, "YOUTUBE_CLIENT_ID", "client-id.apps.googleusercontent.com")
    monkeypatch.setattr(settings, "YOUTUBE_CLIENT_SECRET", "client-secret")
    monkeypatch.setattr(settings, "YOUTUBE_REDIRECT_URL", "http://localhost:8080/auth")
    monkeypatch.setattr(settings, "YOUTUBE_REFRESH_TOKEN", "refresh-token")
    monkeypatch.setattr(settings, "BROADCAST_SECRET", "sekrit")
    return settings


def http_error(status: int = 500, message: str = "Backend Error") -> HttpError:
    resp = types.SimpleNamespace(status=status, reason=message)
    content = ('{"error": {"code": %d, "message": "%s"}}' % (status, message)).encode()
    return HttpError(resp, content)


class _Call:
    def __init__(self, fake: "FakeYouTube", name: str, kwargs: dict[str, Any], response: Any):
        self.fake = fake
        self.name = name
        self.kwargs = kwargs
        self.response = response

    def execute(self) -> Any:
        self.fake.calls.append((self.name, self.kwargs))
        if self.name in self.fake.fail_on:
            raise http_error()
        return self.response


class _Resource:
    def __init__(self, fake: "FakeYouTube", prefix: str):
        self.fake = fake
        self.prefix = prefix

    def __getattr__(self, method: str):
        def _call(**kwargs: Any) -> _Call:
            name = f"{self.prefix}.{method}"
            return _Call(self.fake, name, kwargs, self.fake.respond(name, kwargs))

        return _call


class FakeYouTube:
    """Records calls made against the YouTube Data API resource."""

    def __init__(self, fail_on: tuple[str, ...] = ()):
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on = set(fail_on)

    def liveBroadcasts(self) -> _Resource:
        return _Resource(self, "liveBroadcasts")

    def liveStreams(self) -> _Resource:
        return _Resource(self, "liveStreams")

    def thumbnails(self) -> _Resource:
        return _Resource(self, "thumbnails")

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def respond(self, name: str, kwargs: dict[str, Any]) -> Any:
        if name == "liveBroadcasts.insert":
            return {"id": "bcast123", **kwargs["body"]}
        if name == "liveStreams.insert":
            return {"id": "stream456", **kwargs["body"]}
        if name == "liveBroadcasts.bind":
            return {"id": kwargs["id"], "contentDetails": {"boundStreamId": kwargs["streamId"]}}
        if name == "liveStreams.list":
            return {
                "items": [
                    {
                        "id": kwargs["id"],
                        "cdn": {
                            "ingestionInfo": {
                                "streamName": "abcd-efgh-ijkl",
                                "ingestionAddress": "rtmp://a.rtmp.youtube.com/live2",
                            }
                        },
                    }
                ]
            }
        if name == "thumbnails.set":
            return {"items": [{"default": {"url": "https://i.ytimg.com/vi/bcast123/default.jpg"}}]}
        raise AssertionError(f"unexpected call {name}")


@pytest.fixture
def fake_youtube() -> FakeYouTube:
    return FakeYouTube()
