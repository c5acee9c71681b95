from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from django.utils.dateparse import parse_datetime


def _slug(value) -> str:
    if isinstance(value, dict):
        return value.get("current") or ""
    return value or ""


def to_count(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _parse_created(value) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if not value:
        return None
    try:
        return parse_datetime(str(value))
    except ValueError:
        return None


@dataclass(frozen=True)
class Author:
    id: str
    name: str = ""
    username: str = ""
    email: str = ""
    image: str = ""
    bio: str = ""

    @classmethod
    def from_document(cls, doc: dict | None) -> Optional["Author"]:
        if not doc or not doc.get("_id"):
            return None
        return cls(
            id=doc["_id"],
            name=doc.get("name") or "",
            username=doc.get("username") or "",
            email=doc.get("email") or "",
            image=doc.get("image") or "",
            bio=doc.get("bio") or "",
        )


@dataclass(frozen=True)
class StartupCard:
    id: str
    created_at: Optional[datetime] = None
    title: str = ""
    slug: str = ""
    category: str = ""
    description: str = ""
    image: str = ""
    author: Optional[Author] = None
    views: int = 0

    @classmethod
    def _fields(cls, doc: dict) -> dict:
        return {
            "id": doc["_id"],
            "created_at": _parse_created(doc.get("_createdAt")),
            "title": doc.get("title") or "",
            "slug": _slug(doc.get("slug")),
            "category": doc.get("category") or "",
            "description": doc.get("description") or "",
            "image": doc.get("image") or "",
            "author": Author.from_document(doc.get("author")),
            "views": to_count(doc.get("views")),
        }

    @classmethod
    def from_document(cls, doc: dict | None):
        if not doc or not doc.get("_id"):
            return None
        return cls(**cls._fields(doc))


@dataclass(frozen=True)
class Startup(StartupCard):
    pitch: str = ""

    @classmethod
    def _fields(cls, doc: dict) -> dict:
        fields = super()._fields(doc)
        fields["pitch"] = doc.get("pitch") or ""
        return fields


@dataclass(frozen=True)
class Playlist:
    id: str
    title: str = ""
    slug: str = ""
    select: list[StartupCard] = field(default_factory=list)

    @classmethod
    def from_document(cls, doc: dict | None) -> Optional["Playlist"]:
        if not doc or not doc.get("_id"):
            return None
        cards = [StartupCard.from_document(d) for d in (doc.get("select") or [])]
        return cls(
            id=doc["_id"],
            title=doc.get("title") or "",
            slug=_slug(doc.get("slug")),
            select=[c for c in cards if c is not None],
        )


def cards_from_documents(docs) -> list[StartupCard]:
    cards = [StartupCard.from_document(d) for d in (docs or [])]
    return [c for c in cards if c is not None]
