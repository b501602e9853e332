"""Engagement counters (likes / favorites / comments).

The counters are read from the bottom engagement bar. Notes often render a
second, partial copy of the bar higher up the page, so the last matching
region wins. When every counter reads as zero, a looser pass takes the
first three positive ``.count`` values of the bottom bar in page order.

Known precision gap: a note that genuinely has zero engagement cannot be
told apart from a failed read and always goes through the looser pass.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final

from bs4 import Tag

logger = logging.getLogger(__name__)

REGION_SELECTORS: Final[tuple[str, ...]] = (
    ".engage-bar .interact-container",
    ".interact-container",
    ".engage-bar-container",
)

BOTTOM_BAR_SELECTORS: Final[tuple[str, ...]] = (
    ".engage-bar",
    ".interactions",
    ".engage-bar-container",
)

LIKES_SELECTORS: Final[tuple[str, ...]] = (
    ".like-wrapper .count",
    ".count[selected-disabled-search]",
)
FAVORITES_SELECTORS: Final[tuple[str, ...]] = (".collect-wrapper .count",)
COMMENTS_SELECTORS: Final[tuple[str, ...]] = (".chat-wrapper .count",)

_COUNT_RE: Final = re.compile(r"(\d+(?:\.\d+)?)\s*([万wW千kK]?)")

_MULTIPLIERS: Final[dict[str, int]] = {
    "": 1,
    "万": 10_000,
    "w": 10_000,
    "W": 10_000,
    "千": 1_000,
    "k": 1_000,
    "K": 1_000,
}


@dataclass(frozen=True)
class Metrics:
    likes: int = 0
    favorites: int = 0
    comments: int = 0

    def is_empty(self) -> bool:
        return self.likes == 0 and self.favorites == 0 and self.comments == 0


def parse_count(text: str) -> int:
    """Read the leading count of a counter label.

    ``"12"`` -> 12, ``"1.2万"`` -> 12000, ``"10+"`` -> 10. Placeholder labels
    (the site shows "赞" instead of 0) and anything else unreadable give 0.
    """

    m = _COUNT_RE.match(text.strip())
    if not m:
        if text.strip():
            logger.debug("metrics: unparsable count %r", text)
        return 0
    number, unit = m.groups()
    if not unit:
        return int(float(number))
    return round(float(number) * _MULTIPLIERS[unit])


def _last_match(root: Tag, selectors: tuple[str, ...]) -> Tag | None:
    for selector in selectors:
        found = root.select(selector)
        if found:
            return found[-1]
    return None


def _read_counter(region: Tag, selectors: tuple[str, ...]) -> int:
    for selector in selectors:
        node = region.select_one(selector)
        if node is not None:
            return parse_count(node.get_text())
    return 0


def _read_region(document: Tag) -> Metrics:
    region = _last_match(document, REGION_SELECTORS)
    if region is None:
        logger.debug("metrics: no engagement region found")
        return Metrics()
    return Metrics(
        likes=_read_counter(region, LIKES_SELECTORS),
        favorites=_read_counter(region, FAVORITES_SELECTORS),
        comments=_read_counter(region, COMMENTS_SELECTORS),
    )


def _read_bottom_bar(document: Tag) -> Metrics | None:
    bar = _last_match(document, BOTTOM_BAR_SELECTORS)
    if bar is None:
        return None
    values = [parse_count(node.get_text()) for node in bar.select(".count")]
    positives = [v for v in values if v > 0]
    if len(positives) < 3:
        return None
    likes, favorites, comments = positives[:3]
    return Metrics(likes=likes, favorites=favorites, comments=comments)


def extract_metrics(document: Tag) -> Metrics:
    """Engagement counters of ``document``; all zero when unreadable.

    Never raises: any failure is logged and reported as zero counts.
    """

    try:
        metrics = _read_region(document)
        if metrics.is_empty():
            recovered = _read_bottom_bar(document)
            if recovered is not None:
                logger.debug("metrics: recovered counters from bottom bar")
                return recovered
        return metrics
    except Exception as e:  # noqa: BLE001
        logger.warning("metrics: extraction failed: %s", e)
        return Metrics()
