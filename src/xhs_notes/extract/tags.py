from __future__ import annotations

from typing import Final

from bs4 import Tag

TAG_MARKER: Final = "#"

# Full-width variant shows up in user-typed topics.
_MARKER_CHARS: Final = ("#", "＃")

# Suffix the site appends to rendered topic links, e.g. "#旅行[话题]#".
_TOPIC_SUFFIXES: Final = ("[话题]",)

_TOPIC_CLASSES: Final = frozenset({"topic", "tag-item"})
_TAG_IDS: Final = frozenset({"hash-tag"})
_TAG_PATH_SEGMENTS: Final = ("/tag/", "/page/topics/")


def _attr_text(val: object) -> str:
    if isinstance(val, list):
        return " ".join(str(v) for v in val)
    return str(val or "")


def is_tag_link(link: Tag) -> bool:
    classes = link.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    if _TOPIC_CLASSES.intersection(classes):
        return True
    if _attr_text(link.get("id")) in _TAG_IDS:
        return True
    href = _attr_text(link.get("href"))
    if any(seg in href for seg in _TAG_PATH_SEGMENTS):
        return True
    text = link.get_text().strip()
    return text.startswith(_MARKER_CHARS)


def canonical_tag(text: str) -> str:
    """Return ``#label`` for any marker/suffix decoration of ``label``."""

    label = text
    for suffix in _TOPIC_SUFFIXES:
        label = label.replace(suffix, "")
    for marker in _MARKER_CHARS:
        label = label.replace(marker, "")
    return TAG_MARKER + label.strip()


def extract_tags(subtree: Tag) -> list[str]:
    """Canonical topic tags of ``subtree`` in document order.

    Read-only: the subtree is not modified. Repeated tags are kept.
    """

    tags: list[str] = []
    for link in subtree.find_all("a"):
        if not is_tag_link(link):
            continue
        tag = canonical_tag(link.get_text())
        if tag == TAG_MARKER:
            continue
        tags.append(tag)
    return tags
