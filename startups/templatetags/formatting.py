from __future__ import annotations

from datetime import date, datetime

from django import template
from django.utils import dateformat, timezone
from django.utils.safestring import mark_safe
from markdown_it import MarkdownIt

register = template.Library()

_md = MarkdownIt("commonmark", {"html": False})


@register.filter
def format_date(value) -> str:
    """`2025-01-05T10:00:00Z` -> `January 5, 2025`."""
    if isinstance(value, str):
        from django.utils.dateparse import parse_datetime

        try:
            value = parse_datetime(value)
        except ValueError:
            return ""
    if not isinstance(value, (date, datetime)):
        return ""
    if isinstance(value, datetime) and timezone.is_aware(value):
        value = timezone.localtime(value)
    return dateformat.format(value, "F j, Y")


def _compact(num: float, divisor: int, suffix: str) -> str:
    text = f"{num / divisor:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + suffix


@register.filter
def format_views(value) -> str:
    try:
        num = float(value)
    except (TypeError, ValueError):
        num = 0
    if num != num:  # NaN
        num = 0

    if num >= 1_000_000_000:
        formatted = _compact(num, 1_000_000_000, "B")
    elif num >= 1_000_000:
        formatted = _compact(num, 1_000_000, "M")
    elif num >= 1_000:
        formatted = _compact(num, 1_000, "K")
    else:
        formatted = str(int(num)) if num == int(num) else str(num)

    label = "view" if num == 1 else "views"
    return f"{formatted} {label}"


@register.filter
def markdown(value: str) -> str:
    text = str(value or "")
    if not text.strip():
        return ""
    return mark_safe(_md.render(text))
