from __future__ import annotations

import asyncio

from django.core.management.base import BaseCommand, CommandError

from startups.content_client import ContentClient, ContentStoreError
from startups.fetch_cache import FetchCache, MissingIdentifier
from startups.loaders import StartupNotFound, load_detail_view


async def _load(startup_id: str, playlist: str):
    async with ContentClient.from_settings() as client, FetchCache() as cache:
        return await load_detail_view(startup_id, client=client, cache=cache, playlist_slug=playlist or None)


class Command(BaseCommand):
    help = "Load a startup and the editor's picks from the content store, as the detail page does."

    def add_arguments(self, parser):
        parser.add_argument("startup_id", help="ID of the startup document.")
        parser.add_argument(
            "--playlist",
            dest="playlist",
            default="",
            help="Playlist slug for the editor's picks. Default: EDITOR_PICKS_PLAYLIST",
        )

    def handle(self, *args, **options):
        startup_id = (options["startup_id"] or "").strip()
        try:
            view = asyncio.run(_load(startup_id, (options["playlist"] or "").strip()))
        except MissingIdentifier as e:
            raise CommandError(str(e))
        except StartupNotFound:
            raise CommandError(f"Startup not found: {startup_id}")
        except ContentStoreError as e:
            raise CommandError(f"Content store unavailable: {e}")

        startup = view.startup
        author = startup.author.name if startup.author else "-"
        self.stdout.write(self.style.SUCCESS(f"{startup.title} ({startup.id})"))
        self.stdout.write(f"  Author:   {author}")
        self.stdout.write(f"  Category: {startup.category or '-'}")
        self.stdout.write(f"  Views:    {startup.views}")
        if view.editor_picks:
            self.stdout.write(f"Editor's picks ({len(view.editor_picks)}):")
            for card in view.editor_picks:
                self.stdout.write(f"  - {card.title} ({card.id})")
        else:
            self.stdout.write(self.style.WARNING("No editor's picks."))
