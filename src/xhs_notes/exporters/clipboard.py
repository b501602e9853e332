from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..records import Record
from .common import require_records

RECORD_DIVIDER = "\n\n-------------------\n\n"


def format_metrics(record: Record) -> str:
    return f"点赞 {record.likes} | 收藏 {record.favorites} | 评论 {record.comments}"


def format_record(record: Record) -> str:
    return (
        f"标题：{record.title}\n\n"
        f"正文：{record.body}\n\n"
        f"互动数据：{format_metrics(record)}"
    )


def render_clipboard_text(records: Sequence[Record]) -> str:
    """All records as one plain-text block, in capture order.

    Raises ``EmptyExportError`` when ``records`` is empty.
    """

    records = require_records(records)
    return RECORD_DIVIDER.join(format_record(r) for r in records)


def write_clipboard_text(records: Sequence[Record], out_path: Path) -> Path:
    text = render_clipboard_text(records)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8", newline="\n")
    return out_path
