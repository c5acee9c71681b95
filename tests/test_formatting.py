"""Tests for the template filters and document parsing."""

from datetime import datetime, timezone

import pytest

from startups.documents import Playlist, Startup, StartupCard
from startups.templatetags.formatting import format_date, format_views, markdown

from .conftest import PLAYLIST, STARTUP_ABC


class TestFormatDate:
    def test_iso_string(self):
        assert format_date("2025-01-05T10:00:00Z") == "January 5, 2025"

    def test_datetime(self):
        assert format_date(datetime(2024, 12, 31, tzinfo=timezone.utc)) == "December 31, 2024"

    def test_uses_local_day(self, settings):
        settings.TIME_ZONE = "America/New_York"
        assert format_date("2025-01-06T02:00:00Z") == "January 5, 2025"

    @pytest.mark.parametrize("value", [None, "", "not a date"])
    def test_empty_or_invalid(self, value):
        assert format_date(value) == ""


class TestFormatViews:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "0 views"),
            (1, "1 view"),
            (999, "999 views"),
            (1000, "1K views"),
            (1500, "1.5K views"),
            (2_000_000, "2M views"),
            (3_400_000_000, "3.4B views"),
            (None, "0 views"),
            ("abc", "0 views"),
        ],
    )
    def test_values(self, value, expected):
        assert format_views(value) == expected


class TestMarkdown:
    def test_renders_markdown(self):
        html = markdown("# Title\n\nSome **bold** text")
        assert "<h1>Title</h1>" in html
        assert "<strong>bold</strong>" in html

    def test_raw_html_is_escaped(self):
        html = markdown("<script>alert(1)</script>")
        assert "<script>" not in html

    def test_blank(self):
        assert markdown("") == ""
        assert markdown(None) == ""


class TestDocuments:
    def test_startup_from_document(self):
        startup = Startup.from_document(STARTUP_ABC)
        assert startup.id == "abc"
        assert startup.slug == "mechanic"
        assert startup.created_at.year == 2025
        assert startup.author.username == "ada"
        assert startup.views == 41
        assert startup.pitch.startswith("# Big idea")

    def test_non_numeric_views_become_zero(self):
        card = StartupCard.from_document({**STARTUP_ABC, "views": "n/a"})
        assert card.views == 0
        assert StartupCard.from_document({**STARTUP_ABC, "views": None}).views == 0

    def test_empty_document_is_none(self):
        assert Startup.from_document(None) is None
        assert StartupCard.from_document({}) is None
        assert Playlist.from_document(None) is None

    def test_playlist_skips_dangling_references(self):
        playlist = Playlist.from_document({**PLAYLIST, "select": [PLAYLIST["select"][0], None]})
        assert [c.id for c in playlist.select] == ["post2"]
        assert playlist.slug == "startup-of-the-day"
