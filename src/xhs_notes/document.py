from __future__ import annotations

from bs4 import BeautifulSoup

from .urls import infer_saved_from_url


def looks_like_html(data: bytes) -> bool:
    head = data[:2048].lstrip()
    if head.startswith(b"\xef\xbb\xbf"):
        head = head[3:].lstrip()
    return head.startswith(b"<") and (
        b"<html" in head.lower()
        or b"<!doctype" in head.lower()
        or b"<head" in head.lower()
        or b"<body" in head.lower()
        or b"<!-- saved from" in head.lower()
    )


def parse_document(html: str | bytes) -> BeautifulSoup:
    if isinstance(html, bytes):
        html = html.decode("utf-8", errors="replace")
    return BeautifulSoup(html, "html.parser")


def _attr_text(val: object) -> str:
    if isinstance(val, list):
        if not val:
            return ""
        return str(val[0])
    return str(val or "")


def infer_source_address(soup: BeautifulSoup, html_text: str) -> str | None:
    """Best-effort address of a saved page.

    Order: the browser "saved from url" marker, ``<link rel=canonical>``,
    then ``og:url``.
    """

    saved_from = infer_saved_from_url(html_text[:4096])
    if saved_from:
        return saved_from

    link = soup.select_one("link[rel~='canonical'][href]")
    if link is not None:
        href = _attr_text(link.get("href")).strip()
        if href:
            return href

    meta = soup.select_one("meta[property='og:url'][content]")
    if meta is not None:
        content = _attr_text(meta.get("content")).strip()
        if content:
            return content

    return None
