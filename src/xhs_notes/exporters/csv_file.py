from __future__ import annotations

import csv
import io
from datetime import date
from pathlib import Path
from typing import Sequence

from ..records import Record
from .common import require_records

CSV_HEADER = (
    "address",
    "title",
    "body",
    "likes",
    "favorites",
    "comments",
    "capturedAt",
)

FILENAME_PREFIX = "小红书笔记内容"


def csv_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"{FILENAME_PREFIX}_{today.isoformat()}.csv"


def render_csv(records: Sequence[Record]) -> str:
    """Header plus one row per record, without the byte-order mark.

    Text columns are always quoted (embedded quotes doubled); counters are
    written bare.
    """

    records = require_records(records)
    buf = io.StringIO()
    buf.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for r in records:
        writer.writerow(
            [
                r.source_address,
                r.title,
                r.body,
                int(r.likes),
                int(r.favorites),
                int(r.comments),
                r.captured_at,
            ]
        )
    return buf.getvalue()


def write_csv(
    records: Sequence[Record],
    out_dir: Path,
    *,
    today: date | None = None,
) -> Path:
    """Write the CSV export into ``out_dir`` and return its path.

    Encoded as UTF-8 with a BOM so spreadsheet tools pick the right
    encoding.
    """

    text = render_csv(records)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / csv_filename(today)
    out_path.write_text(text, encoding="utf-8-sig", newline="")
    return out_path
