"""Shared pytest fixtures.

Fixture summary
---------------
note_address: Address recorded in the saved note page.
note_page_html: Saved note page with title, body, topic links and the
    bottom engagement bar.
note_page: ``note_page_html`` parsed into a BeautifulSoup tree.
memory_store: NoteStore over an in-memory slot store.
file_store: NoteStore over a FileSlotStore in ``tmp_path``.
make_record: Factory for Record instances with sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from bs4 import BeautifulSoup

from xhs_notes.document import parse_document
from xhs_notes.records import Record
from xhs_notes.state import FileSlotStore, MemorySlotStore
from xhs_notes.store import NoteStore

NOTE_ADDRESS = "https://www.xiaohongshu.com/explore/64f0c2a1000000001e03a6b1"

NOTE_PAGE_HTML = f"""<!DOCTYPE html>
<!-- saved from url=(0061){NOTE_ADDRESS} -->
<html lang="zh-CN">
<head><title>小红书</title></head>
<body>
<div class="note-container">
  <div class="interaction-container">
    <div class="note-scroller">
      <div class="note-content">
        <div id="detail-title" class="title">周末去杭州！！</div>
        <div id="detail-desc" class="desc">
          <span class="note-text"><span>西湖边散步。。。太舒服了😀<br>推荐大家去</span>
            <a class="tag" id="hash-tag" href="/search_result?keyword=旅行">#旅行[话题]#</a>
            <a class="tag" id="hash-tag" href="/search_result?keyword=杭州">#杭州[话题]#</a>
          </span>
        </div>
        <div class="bottom-container">
          <span class="date">10-18</span>
          <span class="location-info ip-location">浙江</span>
        </div>
      </div>
    </div>
    <div class="interactions engage-bar">
      <div class="engage-bar-container">
        <div class="interact-container">
          <div class="left">
            <span class="like-wrapper"><span class="count" selected-disabled-search>1.2万</span></span>
            <span class="collect-wrapper"><span class="count">356</span></span>
            <span class="chat-wrapper"><span class="count">48</span></span>
          </div>
        </div>
      </div>
    </div>
  </div>
</div>
</body>
</html>
"""


@pytest.fixture
def note_page_html() -> str:
    return NOTE_PAGE_HTML


@pytest.fixture
def note_page() -> BeautifulSoup:
    return parse_document(NOTE_PAGE_HTML)


@pytest.fixture
def memory_store() -> NoteStore:
    return NoteStore(MemorySlotStore())


@pytest.fixture
def file_store(tmp_path: Path) -> NoteStore:
    return NoteStore(FileSlotStore(tmp_path / "state"))


@pytest.fixture
def make_record() -> Callable[..., Record]:
    def _make(address: str = NOTE_ADDRESS, **overrides: object) -> Record:
        fields: dict[str, object] = {
            "source_address": address,
            "title": "标题",
            "body": "正文",
            "likes": 1,
            "favorites": 2,
            "comments": 3,
            "captured_at": "2026-10-19T08:00:00Z",
        }
        fields.update(overrides)
        return Record(**fields)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def note_address() -> str:
    return NOTE_ADDRESS
