"""Slug, excerpt and tag helpers for posts."""

from __future__ import annotations

import re
from typing import Iterable

EXCERPT_LENGTH = 200

_TAG_RE = re.compile(r"<[^>]*>")


def generate_slug(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()


def make_excerpt(html: str | None, length: int = EXCERPT_LENGTH) -> str:
    if not html:
        return ""
    return _TAG_RE.sub("", html)[:length]


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    if raw is None:
        return []
    items = raw.split(",") if isinstance(raw, str) else raw
    return [tag.strip() for tag in items if tag and tag.strip()]
