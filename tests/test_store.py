"""Unit tests for the note store and its slot backends."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

import pytest

from xhs_notes.records import Record
from xhs_notes.state import FileSlotStore, MemorySlotStore
from xhs_notes.store import STORAGE_KEY, NoteStore

A = "https://www.xiaohongshu.com/explore/a"
B = "https://www.xiaohongshu.com/explore/b"
C = "https://www.xiaohongshu.com/explore/c"


class TestUpsert:
    def test_insert_appends_in_order(
        self, memory_store: NoteStore, make_record: Callable[..., Record]
    ) -> None:
        memory_store.upsert(make_record(A))
        memory_store.upsert(make_record(B))
        assert [r.source_address for r in memory_store.all()] == [A, B]

    def test_update_replaces_in_place(
        self, memory_store: NoteStore, make_record: Callable[..., Record]
    ) -> None:
        memory_store.upsert(make_record(A, title="old"))
        memory_store.upsert(make_record(B))
        memory_store.upsert(make_record(C))
        updated = make_record(A, title="new", likes=99, captured_at="2026-10-20T00:00:00Z")
        memory_store.upsert(updated)

        records = memory_store.all()
        assert [r.source_address for r in records] == [A, B, C]
        assert records[0] == updated
        assert sum(1 for r in records if r.source_address == A) == 1

    def test_persisted_as_json_list(self, make_record: Callable[..., Record]) -> None:
        slots = MemorySlotStore()
        NoteStore(slots).upsert(make_record(A, body='说 "你好"'))
        data = json.loads(slots.slots[STORAGE_KEY])
        assert data == [
            {
                "url": A,
                "title": "标题",
                "content": '说 "你好"',
                "likes": 1,
                "favorites": 2,
                "comments": 3,
                "timestamp": "2026-10-19T08:00:00Z",
            }
        ]

    def test_custom_key(self, make_record: Callable[..., Record]) -> None:
        slots = MemorySlotStore()
        store = NoteStore(slots, key="other")
        store.upsert(make_record(A))
        assert list(slots.slots) == ["other"]
        assert NoteStore(slots).all() == []


class TestResetAndCount:
    def test_reset_empties(
        self, memory_store: NoteStore, make_record: Callable[..., Record]
    ) -> None:
        memory_store.upsert(make_record(A))
        memory_store.upsert(make_record(B))
        assert memory_store.count() == 2
        memory_store.reset()
        assert memory_store.all() == []
        assert memory_store.count() == 0

    def test_reset_when_empty(self, memory_store: NoteStore) -> None:
        memory_store.reset()
        assert memory_store.all() == []


class TestCorruption:
    def test_missing_slot_is_empty(self, memory_store: NoteStore) -> None:
        assert memory_store.all() == []

    def test_invalid_json_is_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        store = NoteStore(MemorySlotStore({STORAGE_KEY: "{not json"}))
        with caplog.at_level(logging.WARNING, logger="xhs_notes.store"):
            assert store.all() == []
        assert "not valid JSON" in caplog.text

    def test_non_list_is_empty(self) -> None:
        store = NoteStore(MemorySlotStore({STORAGE_KEY: '{"url": "x"}'}))
        assert store.all() == []

    def test_malformed_entries_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        payload = json.dumps(
            [
                {"url": A, "title": "ok", "content": "", "likes": "7"},
                "garbage",
                {"title": "no url"},
                {"url": B, "title": "bad counter", "likes": "lots"},
                {"url": C, "title": "ok too", "likes": None},
            ]
        )
        store = NoteStore(MemorySlotStore({STORAGE_KEY: payload}))
        with caplog.at_level(logging.WARNING, logger="xhs_notes.store"):
            records = store.all()
        assert [r.source_address for r in records] == [A, C]
        assert records[0].likes == 7
        assert records[1].likes == 0
        assert caplog.text.count("skipping") == 3

    def test_invalid_utf8_file_is_empty(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "xhs_scraped_notes.json").write_bytes(b'[{"url": "\xff\xfe"}]')
        store = NoteStore(FileSlotStore(tmp_path))
        with caplog.at_level(logging.WARNING, logger="xhs_notes.store"):
            assert store.all() == []
            assert store.count() == 0
        assert "not valid JSON" in caplog.text

    def test_deeply_nested_json_is_empty(self, caplog: pytest.LogCaptureFixture) -> None:
        store = NoteStore(MemorySlotStore({STORAGE_KEY: "[" * 100000}))
        with caplog.at_level(logging.WARNING, logger="xhs_notes.store"):
            assert store.all() == []
        assert "not valid JSON" in caplog.text

    def test_upsert_over_undecodable_file(
        self, tmp_path: Path, make_record: Callable[..., Record]
    ) -> None:
        (tmp_path / "xhs_scraped_notes.json").write_bytes(b"\xff")
        store = NoteStore(FileSlotStore(tmp_path))
        store.upsert(make_record(A))
        assert [r.source_address for r in store.all()] == [A]

    def test_upsert_over_corrupt_slot(self, make_record: Callable[..., Record]) -> None:
        slots = MemorySlotStore({STORAGE_KEY: "]]"})
        store = NoteStore(slots)
        store.upsert(make_record(A))
        assert [r.source_address for r in store.all()] == [A]


class TestFileSlotStore:
    def test_roundtrip_survives_new_instance(
        self, tmp_path: Path, make_record: Callable[..., Record]
    ) -> None:
        state_dir = tmp_path / "state"
        NoteStore(FileSlotStore(state_dir)).upsert(make_record(A))
        NoteStore(FileSlotStore(state_dir)).upsert(make_record(B))
        assert [r.source_address for r in NoteStore(FileSlotStore(state_dir)).all()] == [A, B]

    def test_slot_file_location(self, tmp_path: Path) -> None:
        slots = FileSlotStore(tmp_path)
        slots.set(STORAGE_KEY, "[]")
        assert (tmp_path / "xhs_scraped_notes.json").read_text(encoding="utf-8") == "[]"
        assert not list(tmp_path.glob("*.tmp"))

    def test_failed_write_leaves_no_temp_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        slots = FileSlotStore(tmp_path)
        slots.set(STORAGE_KEY, "[]")

        def _fail(*_args: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr("xhs_notes.state.os.replace", _fail)
        with pytest.raises(OSError, match="disk full"):
            slots.set(STORAGE_KEY, '[{"url": "x"}]')
        assert not list(tmp_path.glob("*.tmp"))
        assert slots.get(STORAGE_KEY) == "[]"

    def test_get_missing(self, tmp_path: Path) -> None:
        assert FileSlotStore(tmp_path).get("nope") is None

    def test_remove_is_idempotent(self, tmp_path: Path) -> None:
        slots = FileSlotStore(tmp_path)
        slots.set("k", "v")
        slots.remove("k")
        slots.remove("k")
        assert slots.get("k") is None

    def test_reset_removes_file(
        self, file_store: NoteStore, make_record: Callable[..., Record], tmp_path: Path
    ) -> None:
        file_store.upsert(make_record(A))
        assert (tmp_path / "state" / "xhs_scraped_notes.json").exists()
        file_store.reset()
        assert not (tmp_path / "state" / "xhs_scraped_notes.json").exists()
        assert file_store.all() == []
