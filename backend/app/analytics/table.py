# File: app/analytics/table.py
"""Helpers behind the matching-documents table: labels, filtering, paging, links."""

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from settings import DashboardConfig


def format_customer_label(folder_path: Optional[str], marker: Optional[str] = None) -> str:
    """
    Origin label for a document: the folder path after `marker`
    (case-insensitive), without leading slashes. Paths without the marker
    are returned trimmed.
    """
    trimmed = (folder_path or "").strip()
    if not trimmed or not marker:
        return trimmed

    index = trimmed.lower().find(marker.lower())
    if index == -1:
        return trimmed
    return trimmed[index + len(marker):].lstrip("/")


def customer_segments(folder_path: Optional[str], marker: Optional[str] = None) -> List[str]:
    """Breadcrumb segments of the origin label."""
    return [s for s in format_customer_label(folder_path, marker).split("/") if s]


def filter_documents(
    documents: Sequence[Mapping[str, Any]],
    query: Optional[str],
    marker: Optional[str] = None,
) -> List[Mapping[str, Any]]:
    """Case-insensitive free-text filter over title, text and origin label."""
    needle = (query or "").strip().lower()
    if not needle:
        return list(documents)

    out = []
    for doc in documents:
        customer = doc.get("customer") or format_customer_label(doc.get("folder_path"), marker)
        haystack = " ".join([doc.get("title") or "", doc.get("text") or "", customer]).lower()
        if needle in haystack:
            out.append(doc)
    return out


def paginate(items: Sequence, page: int = 1, page_size: int = DashboardConfig.TABLE_PAGE_SIZE) -> Dict[str, Any]:
    """One page of `items`; the page number is clamped into range."""
    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(1, page), total_pages)
    start = (page - 1) * page_size

    return {
        "items": list(items[start:start + page_size]),
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": total_pages,
        "first_index": start + 1 if total else 0,
        "last_index": min(start + page_size, total),
    }


def build_file_link(file_link: Optional[str], base_url: str = "", open_in_web: bool = False) -> str:
    """
    Absolute link for a stored file locator. Relative locators are joined
    onto `base_url`; `open_in_web` adds web=1 so the file opens in the browser.
    """
    trimmed = (file_link or "").strip()
    if not trimmed:
        return trimmed

    if not trimmed.startswith(("http://", "https://")) and base_url:
        trimmed = base_url.rstrip("/") + "/" + trimmed.lstrip("/")

    if not open_in_web:
        return trimmed

    parts = urlsplit(trimmed)
    query = parse_qsl(parts.query, keep_blank_values=True)
    if any(key == "web" for key, _ in query):
        return trimmed
    query.append(("web", "1"))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), parts.fragment))
