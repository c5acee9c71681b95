import logging

from asgiref.sync import sync_to_async
from django.http import HttpResponseBadRequest
from django.shortcuts import render
from django.views.decorators.cache import cache_control

from .content_client import ContentClient, ContentStoreError
from .fetch_cache import FetchCache, MissingIdentifier
from .forms import StartupSearchForm
from .loaders import (
    AuthorNotFound,
    StartupNotFound,
    load_detail_view,
    load_profile_view,
    load_startups,
    record_view,
)
from .models import AuthorAccount


logger = logging.getLogger(__name__)

HOME_PAGE_CACHE_SECONDS = 60


async def _render(request, template_name: str, context: dict | None = None, *, status: int = 200):
    # Context processors touch the session/ORM, which must run outside the event loop.
    return await sync_to_async(render)(request, template_name, context or {}, status=status)


async def _not_found(request):
    return await _render(request, "startups/not_found.html", status=404)


async def _unavailable(request, exc: Exception):
    logger.error("Content store unavailable for %s: %s", request.path, exc)
    return await _render(request, "startups/unavailable.html", status=502)


async def _current_author_id(request) -> str:
    user = await request.auser()
    author_id = ""
    if user.is_authenticated:
        author_id = (
            await AuthorAccount.objects.filter(user=user).values_list("author_id", flat=True).afirst() or ""
        )
    # Reused by the `author_account` context processor.
    request._current_author_id = author_id
    return author_id


@cache_control(private=True, max_age=HOME_PAGE_CACHE_SECONDS)
async def home(request):
    form = StartupSearchForm(request.GET or None)
    query = form.cleaned_data["query"] if form.is_valid() else ""
    try:
        async with ContentClient.from_settings() as client:
            posts = await load_startups(query, client=client)
    except ContentStoreError as e:
        return await _unavailable(request, e)
    return await _render(request, "startups/home.html", {"form": form, "query": query, "posts": posts})


async def startup_detail(request, startup_id: str):
    try:
        async with ContentClient.from_settings() as client, FetchCache() as cache:
            view = await load_detail_view(startup_id, client=client, cache=cache)
    except MissingIdentifier:
        return HttpResponseBadRequest("Missing startup id")
    except StartupNotFound:
        return await _not_found(request)
    except ContentStoreError as e:
        return await _unavailable(request, e)
    return await _render(
        request,
        "startups/startup_detail.html",
        {"startup": view.startup, "editor_picks": view.editor_picks},
    )


async def startup_views(request, startup_id: str):
    """Fragment with the live view counter; loaded after the detail page renders."""
    try:
        async with ContentClient.from_settings() as client:
            views = await record_view(startup_id, client=client)
    except MissingIdentifier:
        return HttpResponseBadRequest("Missing startup id")
    except StartupNotFound:
        return await _render(request, "startups/partials/view_count.html", {"views": 0}, status=404)
    except ContentStoreError as e:
        logger.warning("View counter unavailable for %s: %s", startup_id, e)
        return await _render(request, "startups/partials/view_count.html", {"views": None}, status=502)
    return await _render(request, "startups/partials/view_count.html", {"views": views})


async def user_profile(request, author_id: str):
    try:
        async with ContentClient.from_settings() as client:
            profile = await load_profile_view(author_id, client=client)
    except MissingIdentifier:
        return HttpResponseBadRequest("Missing author id")
    except AuthorNotFound:
        return await _not_found(request)
    except ContentStoreError as e:
        return await _unavailable(request, e)

    current_author_id = await _current_author_id(request)
    return await _render(
        request,
        "startups/user_profile.html",
        {
            "author": profile.author,
            "startups": profile.startups,
            "is_own_profile": bool(current_author_id) and current_author_id == author_id,
        },
    )
