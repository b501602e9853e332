from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, replace
from typing import Final, Union

from bs4 import Tag

from ..normalize import normalize_text
from ..records import Record, utc_iso
from ..urls import normalize_url
from .locator import locate_content
from .metrics import extract_metrics
from .tags import extract_tags

logger = logging.getLogger(__name__)

# UI chrome and tag links inside the body; removed before reading its text.
CHROME_SELECTORS: Final[tuple[str, ...]] = (
    "a",
    "button",
    ".interact-item",
    ".location-info",
    ".ip-location",
    "script",
    "style",
)


class _NotFound:
    _instance: _NotFound | None = None

    def __new__(cls) -> _NotFound:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND: Final = _NotFound()


@dataclass(frozen=True)
class ExtractionFailed:
    message: str

    def __bool__(self) -> bool:
        return False


@dataclass(frozen=True)
class Extraction:
    """A successful extraction.

    ``plain_body`` is the body without the tag block, so the record can be
    rebuilt for a different retain-tags choice without touching the page.
    """

    record: Record
    tags: tuple[str, ...]
    plain_body: str

    def retagged(self, retain_tags: bool, *, captured_at: str | None = None) -> Extraction:
        body = compose_body(self.plain_body, self.tags, retain_tags=retain_tags)
        record = replace(
            self.record,
            body=body,
            captured_at=captured_at or utc_iso(),
        )
        return replace(self, record=record)


ExtractionResult = Union[Extraction, _NotFound, ExtractionFailed]


def compose_body(plain_body: str, tags: tuple[str, ...], *, retain_tags: bool) -> str:
    if not retain_tags or not tags:
        return plain_body
    tag_block = " ".join(tags)
    if not plain_body:
        return tag_block
    return f"{plain_body}\n\n{tag_block}"


def _body_text(body: Tag) -> str:
    for br in body.find_all("br"):
        br.replace_with("\n")
    for selector in CHROME_SELECTORS:
        for node in body.select(selector):
            node.extract()
    return body.get_text()


def _extract(
    document: Tag,
    *,
    source_address: str,
    retain_tags: bool,
    captured_at: str | None,
) -> Extraction | _NotFound:
    located = locate_content(document)
    if located is None:
        logger.info("extract: no note title/body found for %s", source_address)
        return NOT_FOUND

    title = normalize_text(located.title.get_text())
    if not title:
        logger.info("extract: empty title for %s", source_address)
        return NOT_FOUND

    # Work on a detached copy; the live document keeps its links.
    body = copy.copy(located.body)
    tags = tuple(extract_tags(body))
    plain_body = normalize_text(_body_text(body))

    metrics = extract_metrics(document)

    record = Record(
        source_address=normalize_url(source_address),
        title=title,
        body=compose_body(plain_body, tags, retain_tags=retain_tags),
        likes=metrics.likes,
        favorites=metrics.favorites,
        comments=metrics.comments,
        captured_at=captured_at or utc_iso(),
    )
    return Extraction(record=record, tags=tags, plain_body=plain_body)


def extract(
    document: Tag,
    *,
    source_address: str,
    retain_tags: bool = False,
    captured_at: str | None = None,
) -> ExtractionResult:
    """Extract one note record from a rendered note page.

    Returns an :class:`Extraction`, ``NOT_FOUND`` when the page has no note
    title/body, or :class:`ExtractionFailed` for anything unexpected. The
    document itself is never modified.
    """

    try:
        return _extract(
            document,
            source_address=source_address,
            retain_tags=retain_tags,
            captured_at=captured_at,
        )
    except Exception as e:  # noqa: BLE001
        logger.exception("extract: failed for %s", source_address)
        return ExtractionFailed(message=f"{type(e).__name__}: {e}")
