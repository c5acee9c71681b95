"""
Data loading for the startup pages.

Every loader takes the request's `ContentClient` and `FetchCache`; lookups that
several parts of one page need (the startup document, a playlist) go through the
cache so they hit the content store once per request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from django.conf import settings
from django.http import Http404

from .content_client import ContentClient, ContentStoreError
from .documents import Author, Playlist, Startup, StartupCard, cards_from_documents, to_count
from .fetch_cache import FetchCache, MemoizedFetch, MissingIdentifier
from .queries import (
    AUTHOR_BY_ID_QUERY,
    PLAYLIST_BY_SLUG_QUERY,
    STARTUP_BY_ID_QUERY,
    STARTUP_VIEWS_QUERY,
    STARTUPS_BY_AUTHOR_QUERY,
    STARTUPS_QUERY,
)


logger = logging.getLogger(__name__)


class StartupNotFound(Http404):
    pass


class AuthorNotFound(Http404):
    pass


@dataclass(frozen=True)
class DetailView:
    startup: Startup
    editor_picks: list[StartupCard] = field(default_factory=list)


@dataclass(frozen=True)
class ProfileView:
    author: Author
    startups: list[StartupCard] = field(default_factory=list)


def startup_fetch(cache: FetchCache, client: ContentClient) -> MemoizedFetch:
    async def fetch_startup(startup_id: str) -> Optional[Startup]:
        doc = await client.fetch(STARTUP_BY_ID_QUERY, {"id": startup_id})
        return Startup.from_document(doc)

    return cache.memoize("startup", fetch_startup)


def playlist_fetch(cache: FetchCache, client: ContentClient) -> MemoizedFetch:
    async def fetch_playlist(slug: str) -> Optional[Playlist]:
        doc = await client.fetch(PLAYLIST_BY_SLUG_QUERY, {"slug": slug})
        return Playlist.from_document(doc)

    return cache.memoize("playlist", fetch_playlist)


async def get_startup(startup_id: str, *, client: ContentClient, cache: FetchCache) -> Optional[Startup]:
    return await startup_fetch(cache, client).get_or_fetch(startup_id)


async def load_detail_view(
    startup_id: str,
    *,
    client: ContentClient,
    cache: FetchCache,
    playlist_slug: str | None = None,
) -> DetailView:
    """
    Load the startup and the editor's picks for the detail page.

    Both queries are started before either is awaited. The startup is awaited
    first: if it does not exist the page is a 404 and the playlist result is
    ignored. A missing playlist means no picks.
    """
    if not startup_id:
        raise MissingIdentifier("Missing startup id")
    slug = playlist_slug or settings.EDITOR_PICKS_PLAYLIST

    startup_pending = startup_fetch(cache, client).get_or_fetch(startup_id)
    playlist_pending = playlist_fetch(cache, client).get_or_fetch(slug)

    startup = await startup_pending
    if startup is None:
        logger.info("startup not found: %s", startup_id)
        raise StartupNotFound(startup_id)

    playlist = await playlist_pending
    picks = playlist.select if playlist else []
    return DetailView(startup=startup, editor_picks=picks)


async def load_startups(query: str | None, *, client: ContentClient) -> list[StartupCard]:
    search = f"*{query.strip()}*" if query and query.strip() else None
    docs = await client.fetch(STARTUPS_QUERY, {"search": search})
    return cards_from_documents(docs)


async def load_profile_view(author_id: str, *, client: ContentClient) -> ProfileView:
    if not author_id:
        raise MissingIdentifier("Missing author id")
    author = Author.from_document(await client.fetch(AUTHOR_BY_ID_QUERY, {"id": author_id}))
    if author is None:
        raise AuthorNotFound(author_id)
    docs = await client.fetch(STARTUPS_BY_AUTHOR_QUERY, {"id": author_id})
    return ProfileView(author=author, startups=cards_from_documents(docs))


async def record_view(startup_id: str, *, client: ContentClient) -> int:
    """
    Return the current view count of a startup and bump the stored counter.

    The count is read from the API host (not the CDN) so it is fresh. The bump is
    best-effort: a failed write is logged and the page still shows the count.
    """
    if not startup_id:
        raise MissingIdentifier("Missing startup id")
    doc = await client.fetch(STARTUP_VIEWS_QUERY, {"id": startup_id}, cdn=False)
    if not doc:
        raise StartupNotFound(startup_id)
    views = to_count(doc.get("views"))
    try:
        await client.increment_views(startup_id)
    except ContentStoreError as e:
        logger.warning("Could not record view for %s: %s", startup_id, e)
    return views
