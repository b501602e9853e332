from __future__ import annotations

import re
from urllib.parse import ParseResult, parse_qsl, urlencode, urlparse, urlunparse

# Share links carry per-session tokens; the note itself is identified by
# its path.
_TRACKING_QUERY_PARAMS = {"xsec_token", "xsec_source"}

_NOTE_PATH_SEGMENTS = ("/explore/", "/discovery/")


def normalize_url(raw_url: str) -> str:
    """Normalize a note address for de-duplication.

    - Lowercases scheme + hostname.
    - Strips fragments.
    - Drops share-tracking query params that differ between visits.
    """

    parsed: ParseResult = urlparse(raw_url.strip())
    scheme = (parsed.scheme or "").lower()
    netloc = (parsed.netloc or "").lower()

    query = parsed.query
    pairs = parse_qsl(query, keep_blank_values=True)
    kept = [(k, v) for k, v in pairs if k.lower() not in _TRACKING_QUERY_PARAMS]
    # Untouched queries keep their original encoding.
    if len(kept) != len(pairs):
        query = urlencode(kept)

    parsed = parsed._replace(
        scheme=scheme,
        netloc=netloc,
        fragment="",
        query=query,
    )
    return urlunparse(parsed)


def is_note_page(url: str) -> bool:
    path = urlparse(url).path
    return any(seg in path for seg in _NOTE_PATH_SEGMENTS)


def infer_saved_from_url(html_text: str) -> str | None:
    """Return the address recorded by a browser "Save page as" snapshot."""

    m = re.search(
        r"saved\s+from\s+url=\(\d+\)(https?://[^\s>]+)",
        html_text,
        flags=re.IGNORECASE,
    )
    if not m:
        return None
    return m.group(1).strip()


def safe_filename_piece(text: str, *, max_len: int = 80) -> str:
    text = text.strip()
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"[^A-Za-z0-9._-]+", "-", text)
    text = re.sub(r"-+", "-", text).strip("-")
    if not text:
        return "untitled"
    return text[:max_len]
