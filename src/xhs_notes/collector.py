"""Glue between a host surface and the core.

A host (the CLI here, or anything embedding the package) calls
:func:`capture` once per "extract now" signal. Debouncing repeated page
change notifications is up to the host; these functions keep no state.
"""

from __future__ import annotations

import logging

from bs4 import Tag

from .extract.pipeline import Extraction, ExtractionResult, extract
from .records import Record
from .store import NoteStore

logger = logging.getLogger(__name__)


def capture(
    document: Tag,
    store: NoteStore,
    *,
    source_address: str,
    retain_tags: bool = False,
) -> ExtractionResult:
    """Extract ``document`` and upsert the record on success.

    Not-found and failure results are returned untouched and nothing is
    written.
    """

    result = extract(
        document,
        source_address=source_address,
        retain_tags=retain_tags,
    )
    if isinstance(result, Extraction):
        store.upsert(result.record)
        logger.info("capture: stored %s", result.record.source_address)
    return result


def recapture(extraction: Extraction, store: NoteStore, *, retain_tags: bool) -> Extraction:
    """Re-apply a changed retain-tags choice to a previous extraction."""

    updated = extraction.retagged(retain_tags)
    store.upsert(updated.record)
    return updated


def render_capture(record: Record) -> str:
    return (
        f"标题：\n{record.title}\n\n"
        f"正文：\n{record.body}\n\n"
        "互动数据：\n"
        f"点赞：{record.likes} | 收藏：{record.favorites} | 评论：{record.comments}"
    )
