"""Extraction primitives shared by every vlr.gg page parser.

Provides:
- make_soup: accept an HTML string or an already-built BeautifulSoup
- select / select_one: soupsieve selection with SelectorError on bad literals
- select_text / select_attr: defaulting text and attribute lookups ("" when absent)
- first_text / last_text / joined_text: text-node helpers on a single element
- class_token / has_class: class-token lookups (``mod-win``, ``mod-<code>``)
- parse_id_slug, parse_int, parse_float: lenient numeric parsing
- normalize_url, infer_platform: link helpers
- zip_padded, find_section_after_heading: structural scans
- report_diagnostics: log and collect sub-parser diagnostics

None of these raise for missing elements. Callers that need to tell
"absent" from "empty" check the result themselves.
"""

import logging
from typing import Iterable, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from vlr_scraper.config import VLR_BASE_URL
from vlr_scraper.exceptions import SelectorError

logger = logging.getLogger(__name__)

Node = BeautifulSoup | Tag

# host suffix -> platform name for profile social links
_PLATFORMS = (
    ("twitter.com", "twitter"),
    ("x.com", "twitter"),
    ("twitch.tv", "twitch"),
    ("youtube.com", "youtube"),
    ("youtu.be", "youtube"),
    ("instagram.com", "instagram"),
    ("facebook.com", "facebook"),
    ("tiktok.com", "tiktok"),
    ("discord.gg", "discord"),
    ("discord.com", "discord"),
    ("kick.com", "kick"),
    ("liquipedia.net", "liquipedia"),
)


def make_soup(doc: str | BeautifulSoup) -> BeautifulSoup:
    """Return a parsed document, building one with lxml from raw HTML."""
    if isinstance(doc, BeautifulSoup):
        return doc
    return BeautifulSoup(doc, "lxml")


def select(root: Node, selector: str) -> list[Tag]:
    """All descendants of ``root`` matching ``selector``, in document order.

    Raises:
        SelectorError: If ``selector`` is not a valid CSS selector.
    """
    try:
        return root.select(selector)
    except SelectorSyntaxError as exc:
        raise SelectorError(f"invalid selector {selector!r}: {exc}") from exc


def select_one(root: Node, selector: str) -> Tag | None:
    """First descendant of ``root`` matching ``selector``, or None."""
    try:
        return root.select_one(selector)
    except SelectorSyntaxError as exc:
        raise SelectorError(f"invalid selector {selector!r}: {exc}") from exc


def _clean(text: str) -> str:
    return text.strip().replace("\n", "").replace("\t", "")


def text_nodes(el: Tag | None) -> list[str]:
    """Non-empty text nodes under ``el``, trimmed, newlines and tabs removed."""
    if el is None:
        return []
    return [_clean(s) for s in el.stripped_strings if _clean(s)]


def first_text(el: Tag | None) -> str:
    nodes = text_nodes(el)
    return nodes[0] if nodes else ""


def last_text(el: Tag | None) -> str:
    nodes = text_nodes(el)
    return nodes[-1] if nodes else ""


def joined_text(el: Tag | None, sep: str = "") -> str:
    return sep.join(text_nodes(el))


def select_text(root: Node, selector: str) -> str:
    """First non-empty text node of the first element matching ``selector``.

    Returns "" when nothing matches or the element has no text.
    """
    return first_text(select_one(root, selector))


def get_attr(el: Tag | None, name: str) -> str:
    """Attribute value of ``el`` stripped, "" when absent."""
    if el is None:
        return ""
    value = el.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value).strip()
    return value.strip()


def select_attr(root: Node, selector: str, attr: str) -> str:
    """Attribute ``attr`` of the first element matching ``selector``, or ""."""
    return get_attr(select_one(root, selector), attr)


def class_tokens(el: Tag | None) -> list[str]:
    if el is None:
        return []
    return list(el.get("class") or [])


def has_class(el: Tag | None, token: str) -> bool:
    return token in class_tokens(el)


def class_token(el: Tag | None, prefix: str = "mod-") -> str | None:
    """First class token starting with ``prefix``, with the prefix stripped.

    ``<i class="flag mod-kr">`` -> ``"kr"``.
    """
    for token in class_tokens(el):
        if token.startswith(prefix) and len(token) > len(prefix):
            return token[len(prefix):]
    return None


def parse_int(text: str | None) -> int | None:
    """Lenient integer parse: strips whitespace, a leading ``+`` and commas."""
    if text is None:
        return None
    cleaned = text.strip().lstrip("+").replace(",", "")
    if not cleaned:
        return None
    try:
        return int(cleaned)
    except ValueError:
        return None


def parse_float(text: str | None) -> float | None:
    """Lenient float parse: strips whitespace, ``+`` and ``%``."""
    if text is None:
        return None
    cleaned = text.strip().lstrip("+").rstrip("%").strip()
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_id_slug(href: str, prefix: str = "/") -> tuple[int | None, str]:
    """Split a detail link into its numeric id and slug.

    ``parse_id_slug("/team/2593/fnatic", "/team/")`` -> ``(2593, "fnatic")``.
    Absolute URLs are reduced to their path first. The id is None when the
    href does not start with ``prefix`` or its first segment is not numeric.
    """
    path = href.strip()
    if path.startswith("http://") or path.startswith("https://"):
        path = urlparse(path).path
    if not path.startswith(prefix):
        return None, ""
    parts = [p for p in path[len(prefix):].split("?")[0].split("/") if p]
    if not parts:
        return None, ""
    try:
        item_id = int(parts[0])
    except ValueError:
        return None, ""
    slug = parts[1] if len(parts) > 1 else ""
    return item_id, slug


def normalize_url(src: str, base_url: str = VLR_BASE_URL) -> str:
    """Absolutize a protocol-relative or site-relative URL.

    ``"//owcdn.net/x.png"`` -> ``"https://owcdn.net/x.png"``,
    ``"/img/x.png"`` -> ``"https://www.vlr.gg/img/x.png"``; anything else
    is returned unchanged.
    """
    if src.startswith("//"):
        return "https:" + src
    if src.startswith("/"):
        return base_url.rstrip("/") + src
    return src


def infer_platform(url: str) -> str:
    """Social platform name for a profile link, "website" when unknown."""
    host = urlparse(normalize_url(url.strip())).netloc.lower()
    if host.startswith("www."):
        host = host[4:]
    for suffix, platform in _PLATFORMS:
        if host == suffix or host.endswith("." + suffix):
            return platform
    return "website"


def zip_padded(length: int, *sequences: Sequence) -> list[tuple]:
    """Positional zip of exactly ``length`` rows, padding short sequences with None."""
    return [
        tuple(seq[i] if i < len(seq) else None for seq in sequences)
        for i in range(length)
    ]


def find_section_after_heading(
    root: Node, heading_selector: str, title: str
) -> Tag | None:
    """Container that follows the first heading whose text contains ``title``.

    Walks the headings in document order and returns the next element
    sibling of the first match. None when no heading matches or the heading
    has no following element.
    """
    for heading in select(root, heading_selector):
        if title.lower() in joined_text(heading, " ").lower():
            return heading.find_next_sibling()
    return None


def report_diagnostics(
    log: logging.Logger,
    context: str,
    messages: Iterable[str],
    sink: list[str] | None = None,
) -> None:
    """Log sub-parser diagnostics and optionally hand them to the caller."""
    for message in messages:
        log.warning("%s: %s", context, message)
        if sink is not None:
            sink.append(f"{context}: {message}")
