from __future__ import annotations

from typing import Sequence

from ..records import Record


class EmptyExportError(ValueError):
    """Raised when there is nothing captured to export."""


def require_records(records: Sequence[Record]) -> Sequence[Record]:
    if not records:
        raise EmptyExportError("no notes captured yet")
    return records
