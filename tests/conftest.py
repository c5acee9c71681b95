"""Shared test fixtures for pitch_site."""

import asyncio
import json

import httpx
import pytest

from startups.content_client import ContentClient


AUTHOR = {"_id": "author-1", "name": "Ada Lovelace", "username": "ada", "image": "https://img/ada.png", "bio": "Engines"}

STARTUP_ABC = {
    "_id": "abc",
    "_createdAt": "2025-01-05T10:00:00Z",
    "title": "Mechanic",
    "slug": {"current": "mechanic"},
    "category": "Software",
    "description": "Fix cars from your phone",
    "image": "https://img/mechanic.png",
    "author": AUTHOR,
    "views": 41,
    "pitch": "# Big idea\n\nWe fix **cars**.",
}

POST_2 = {"_id": "post2", "_createdAt": "2025-02-01T00:00:00Z", "title": "Rocket", "author": AUTHOR, "views": 3}
POST_3 = {"_id": "post3", "_createdAt": "2025-03-01T00:00:00Z", "title": "Garden", "author": None, "views": 0}

PLAYLIST = {"_id": "pl-1", "title": "Startup of the Day", "slug": {"current": "startup-of-the-day"}, "select": [POST_2, POST_3]}


class FakeContentClient:
    """
    Stand-in for ContentClient: answers by query text, with optional per-query delays
    and failures, and records every call.
    """

    def __init__(self, startups=None, playlist=PLAYLIST, *, delays=None, failures=None):
        self.startups = {"abc": STARTUP_ABC} if startups is None else startups
        self.playlist = playlist
        self.delays = delays or {}
        self.failures = failures or {}
        self.calls: list[tuple[str, dict]] = []

    @staticmethod
    def kind(query: str) -> str:
        if '_type == "playlist"' in query:
            return "playlist"
        if '_type == "startup"' in query:
            return "startup"
        return "other"

    async def fetch(self, query, params=None, *, cdn=None):
        kind = self.kind(query)
        self.calls.append((kind, dict(params or {})))
        await asyncio.sleep(self.delays.get(kind, 0))
        if kind in self.failures:
            raise self.failures[kind]
        if kind == "playlist":
            return self.playlist
        return self.startups.get((params or {}).get("id"))


@pytest.fixture
def fake_client():
    return FakeContentClient()


@pytest.fixture(autouse=True)
def content_settings(settings):
    settings.SANITY_PROJECT_ID = "testproj"
    settings.SANITY_DATASET = "production"
    settings.SANITY_API_VERSION = "2024-10-01"
    settings.SANITY_USE_CDN = False
    settings.SANITY_WRITE_TOKEN = "write-token"
    settings.EDITOR_PICKS_PLAYLIST = "startup-of-the-day"
    return settings


class ContentStore:
    """In-memory content store served through httpx.MockTransport."""

    def __init__(self):
        self.startups = {"abc": dict(STARTUP_ABC)}
        self.authors = {AUTHOR["_id"]: AUTHOR}
        self.playlists = {"startup-of-the-day": PLAYLIST}
        self.down = False
        self.requests: list[httpx.Request] = []
        self.mutations: list[dict] = []

    def _result(self, query: str, params: dict):
        if '_type == "playlist"' in query:
            return self.playlists.get(params.get("slug"))
        if '_type == "author"' in query:
            return self.authors.get(params.get("id"))
        if "author._ref == $id" in query:
            return [s for s in self.startups.values() if (s.get("author") or {}).get("_id") == params.get("id")]
        if "_id == $id" in query:
            return self.startups.get(params.get("id"))
        search = (params.get("search") or "").strip("*").lower()
        return [
            s for s in self.startups.values()
            if not search or search in (s.get("title") or "").lower() or search in (s.get("category") or "").lower()
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.down:
            return httpx.Response(503, text="unavailable")
        if "/data/mutate/" in request.url.path:
            body = json.loads(request.content)
            self.mutations.append(body)
            return httpx.Response(200, json={"transactionId": "tx-1", "results": []})
        query = request.url.params["query"]
        params = {k[1:]: json.loads(v) for k, v in request.url.params.items() if k.startswith("$")}
        return httpx.Response(200, json={"ms": 1, "query": query, "result": self._result(query, params)})

    def client(self, **kwargs) -> ContentClient:
        return ContentClient("testproj", "production", transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def content_store(monkeypatch):
    store = ContentStore()
    monkeypatch.setattr(ContentClient, "from_settings", classmethod(lambda cls, **kw: store.client(token="write-token")))
    return store
