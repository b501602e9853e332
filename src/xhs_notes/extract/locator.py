from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from bs4 import Tag

Matcher = Callable[[Tag], "Tag | None"]


def css(selector: str) -> Matcher:
    def _match(root: Tag) -> Tag | None:
        return root.select_one(selector)

    _match.__name__ = f"css({selector!r})"
    return _match


# Most specific known page variant first, generic fallbacks last. New
# variants may be inserted, but the relative order here is the precedence.
TITLE_MATCHERS: tuple[Matcher, ...] = (
    css("#detail-title"),
    css(".note-detail .title"),
    css(".note-content .title"),
    css(".title"),
    css("h1"),
)

BODY_MATCHERS: tuple[Matcher, ...] = (
    css("#detail-desc .note-text"),
    css(".note-content .content"),
    css(".note-detail .content"),
    css("#detail-desc"),
    css(".content"),
    css(".note-desc"),
)


def first_match(root: Tag, matchers: Iterable[Matcher]) -> Tag | None:
    for matcher in matchers:
        node = matcher(root)
        if node is not None:
            return node
    return None


@dataclass(frozen=True)
class LocatedContent:
    title: Tag
    body: Tag


def locate_content(
    document: Tag,
    *,
    title_matchers: Iterable[Matcher] = TITLE_MATCHERS,
    body_matchers: Iterable[Matcher] = BODY_MATCHERS,
) -> LocatedContent | None:
    """Find the note title and body elements, or ``None`` if either is absent."""

    title = first_match(document, title_matchers)
    if title is None:
        return None
    body = first_match(document, body_matchers)
    if body is None:
        return None
    return LocatedContent(title=title, body=body)
