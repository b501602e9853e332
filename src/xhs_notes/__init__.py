"""xhs-notes core library.

This package extracts XiaoHongShu note pages (title, body, topic tags and
engagement counters) into records, keeps them in a small keyed store, and
exports the collection as clipboard text or a spreadsheet-friendly CSV.

Repo rules:
- The core never fetches pages; hosts hand it an already rendered document.
- Store writes replace the whole collection; there is no partial update.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
