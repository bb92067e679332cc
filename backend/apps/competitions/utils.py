from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime
from typing import Optional, Union

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")

RO_MONTHS = [
    "ianuarie",
    "februarie",
    "martie",
    "aprilie",
    "mai",
    "iunie",
    "iulie",
    "august",
    "septembrie",
    "octombrie",
    "noiembrie",
    "decembrie",
]

DateLike = Union[date, datetime, str, None]


def generate_slug(title: str) -> str:
    """
    URL-safe slug from a title: "Concurs Poștal ÎȚ" -> "concurs-postal-it".
    Applying it to its own output returns the same value.
    """
    value = (title or "").lower()
    value = unicodedata.normalize("NFD", value)
    value = _COMBINING_MARKS.sub("", value)
    value = _DISALLOWED.sub("", value)
    value = _WHITESPACE.sub("-", value)
    value = _HYPHENS.sub("-", value)
    return value.strip("-")


def parse_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def format_date_ro(value: DateLike) -> str:
    """dd-mm-yyyy, "-" when empty; unparseable strings are returned unchanged."""
    if value is None or value == "":
        return "-"
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%d-%m-%Y")


def format_date_long_ro(value: DateLike) -> str:
    if value is None or value == "":
        return "-"
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return f"{parsed.day} {RO_MONTHS[parsed.month - 1]} {parsed.year}"
