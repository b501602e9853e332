from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from .collector import capture, render_capture
from .config import CollectorConfig
from .document import infer_source_address, looks_like_html, parse_document
from .exporters.clipboard import render_clipboard_text, write_clipboard_text
from .exporters.common import EmptyExportError
from .exporters.csv_file import write_csv
from .extract.pipeline import NOT_FOUND, Extraction, ExtractionFailed
from .state import FileSlotStore
from .store import NoteStore
from .urls import is_note_page

MSG_NOT_NOTE_PAGE = "请进入笔记页面以使用采集功能"
MSG_NOT_FOUND = "未找到内容，请确保在笔记页面使用"
MSG_FAILED = "采集失败："
MSG_EMPTY = "还没有采集任何笔记！"
MSG_CONFIRM_RESET = "确定要清空所有已采集的笔记吗？"


def _add_store_args(p: argparse.ArgumentParser, cfg: CollectorConfig) -> None:
    p.add_argument(
        "--state-dir",
        type=Path,
        default=cfg.state_dir,
        help="Directory holding the note store (env: XHS_NOTES_HOME)",
    )
    p.add_argument("--storage-key", default=cfg.storage_key)
    p.add_argument("-v", "--verbose", action="store_true")


def _open_store(args: argparse.Namespace) -> NoteStore:
    return NoteStore(FileSlotStore(args.state_dir), key=args.storage_key)


def _collect_html_paths(paths: list[Path]) -> list[Path]:
    out: list[Path] = []
    for path in paths:
        if path.is_dir():
            for html_path in sorted(path.rglob("*.html")):
                # Browser "save page" asset folders.
                rel_parts = html_path.relative_to(path).parts
                if any(part.lower().endswith("_files") for part in rel_parts):
                    continue
                out.append(html_path)
        else:
            out.append(path)
    return list(dict.fromkeys(out))


def _note_count_line(store: NoteStore) -> str:
    return f"已采集 {store.count()} 篇笔记"


def _scrape(args: argparse.Namespace, store: NoteStore) -> int:
    html_paths = _collect_html_paths(list(args.paths))
    if not html_paths:
        print("No HTML pages found", file=sys.stderr)
        return 2
    if args.url is not None and len(html_paths) > 1:
        print("--url can only be used with a single page", file=sys.stderr)
        return 2

    single = len(html_paths) == 1
    problems = 0
    iterable = html_paths if single else tqdm(html_paths, desc="Capture", unit="page")

    for html_path in iterable:
        try:
            raw = html_path.read_bytes()
        except OSError as e:
            tqdm.write(f"Failed to read page: {html_path}: {e}", file=sys.stderr)
            problems += 1
            continue

        if not looks_like_html(raw):
            tqdm.write(f"Not an HTML page; skipping: {html_path}", file=sys.stderr)
            problems += 1
            continue

        html_text = raw.decode("utf-8", errors="replace")
        soup = parse_document(html_text)
        address = args.url or infer_source_address(soup, html_text)
        if not address:
            tqdm.write(
                f"Cannot tell which note this page is; pass --url: {html_path}",
                file=sys.stderr,
            )
            problems += 1
            continue

        if not is_note_page(address):
            tqdm.write(f"{MSG_NOT_NOTE_PAGE}: {address}", file=sys.stderr)
            problems += 1
            continue

        result = capture(
            soup,
            store,
            source_address=address,
            retain_tags=bool(args.keep_topics),
        )
        if result is NOT_FOUND:
            tqdm.write(f"{MSG_NOT_FOUND}: {html_path}", file=sys.stderr)
            problems += 1
        elif isinstance(result, ExtractionFailed):
            tqdm.write(f"{MSG_FAILED}{result.message}: {html_path}", file=sys.stderr)
            problems += 1
        elif isinstance(result, Extraction) and single:
            print(render_capture(result.record))
            print()

    print(_note_count_line(store))
    return 3 if problems else 0


def main(argv: list[str] | None = None) -> int:
    cfg = CollectorConfig.from_env()

    parser = argparse.ArgumentParser(prog="xhs-notes")
    sub = parser.add_subparsers(dest="cmd", required=True)

    scrape_p = sub.add_parser(
        "scrape",
        help="Capture saved note pages (files or directories of *.html)",
    )
    scrape_p.add_argument("paths", type=Path, nargs="+")
    scrape_p.add_argument(
        "--url",
        default=None,
        help=(
            "Note address of the page. Defaults to the address recorded in "
            "the saved HTML (saved-from marker, canonical link or og:url)"
        ),
    )
    scrape_p.add_argument(
        "--keep-topics",
        action="store_true",
        default=cfg.retain_tags,
        help="Append the topic tags to the captured body",
    )
    _add_store_args(scrape_p, cfg)

    copy_p = sub.add_parser(
        "copy",
        help="Print every captured note as one text block (or write it to --out)",
    )
    copy_p.add_argument("--out", type=Path, default=None)
    _add_store_args(copy_p, cfg)

    csv_p = sub.add_parser("export-csv", help="Write captured notes to a dated CSV file")
    csv_p.add_argument("--out-dir", type=Path, default=cfg.export_dir)
    _add_store_args(csv_p, cfg)

    count_p = sub.add_parser("count", help="Show how many notes are captured")
    _add_store_args(count_p, cfg)

    reset_p = sub.add_parser("reset", help="Delete every captured note")
    reset_p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    _add_store_args(reset_p, cfg)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store = _open_store(args)
    except OSError as e:
        print(str(e), file=sys.stderr)
        return 2

    if args.cmd == "scrape":
        try:
            return _scrape(args, store)
        except OSError as e:
            print(str(e), file=sys.stderr)
            return 2

    if args.cmd == "copy":
        records = store.all()
        try:
            if args.out is not None:
                out_path = write_clipboard_text(records, args.out)
                print(f"所有笔记内容已写入 {out_path}")
            else:
                print(render_clipboard_text(records))
        except EmptyExportError:
            print(MSG_EMPTY, file=sys.stderr)
            return 1
        except OSError as e:
            print(str(e), file=sys.stderr)
            return 2
        return 0

    if args.cmd == "export-csv":
        try:
            out_path = write_csv(store.all(), args.out_dir)
        except EmptyExportError:
            print(MSG_EMPTY, file=sys.stderr)
            return 1
        except OSError as e:
            print(str(e), file=sys.stderr)
            return 2
        print(str(out_path))
        return 0

    if args.cmd == "count":
        print(_note_count_line(store))
        return 0

    if args.cmd == "reset":
        if not bool(args.yes):
            try:
                answer = input(f"{MSG_CONFIRM_RESET} [y/N] ")
            except EOFError:
                # No terminal to answer from.
                answer = ""
                print()
            if answer.strip().lower() not in {"y", "yes", "是"}:
                print("已取消")
                return 1
        try:
            store.reset()
        except OSError as e:
            print(str(e), file=sys.stderr)
            return 2
        print(_note_count_line(store))
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
