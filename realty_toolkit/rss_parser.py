"""Pattern-based RSS 2.0 extraction.

Third-party feeds are frequently not well-formed XML, so nothing here uses an
XML parser. A handful of tag-extraction helpers are composed instead; every
``<item>`` block yields exactly one ``FeedItem`` and missing pieces fall back
to defaults. The only hard failure is a document without a ``<channel>``.
"""

from __future__ import annotations

import html
import logging
import re
from typing import List, Optional

from .exceptions import MalformedFeedError
from .models import Feed, FeedItem

DEFAULT_CATEGORY = "Market Insights"
DEFAULT_AUTHOR = "Simplifying the Market"
DESCRIPTION_LIMIT = 200

logger = logging.getLogger(__name__)

_CHANNEL_RE = re.compile(r"<channel\b[^>]*>([\s\S]*?)</channel>")
_ITEM_RE = re.compile(r"<item\b[^>]*>([\s\S]*?)</item>")
_CATEGORY_RE = re.compile(r"<category\b[^>]*>([\s\S]*?)</category>")
_CDATA_RE = re.compile(r"<!\[CDATA\[([\s\S]*?)\]\]>")
_TAG_RE = re.compile(r"<[^>]*>")
_URL_ATTR_RE = re.compile(r"""url=["']([^"']+)["']""", re.IGNORECASE)
_TYPE_ATTR_RE = re.compile(r"""type=["']([^"']+)["']""", re.IGNORECASE)
_ORIGIN_RE = re.compile(r"https?://[^/]+")
_IMAGE_EXT_RE = re.compile(r"\.(?:jpe?g|png|gif|webp)(?:[?#][^\s]*)?$", re.IGNORECASE)

_IMG_SRC_PATTERNS = (
    re.compile(r"""<img[^>]+src=["']([^"']+)["'][^>]*>""", re.IGNORECASE),
    re.compile(r"""<img[^>]*src=["']([^"']+)["']""", re.IGNORECASE),
    re.compile(r"""src=["']([^"']+\.(?:jpg|jpeg|png|gif|webp|svg))["']""", re.IGNORECASE),
)
_OG_IMAGE_RE = re.compile(
    r"""<meta[^>]+property=["']og:image["'][^>]+content=["']([^"']+)["']""", re.IGNORECASE
)
_BARE_IMAGE_URL_RE = re.compile(r"""https?://[^\s<>"']+\.(?:jpg|jpeg|png|gif|webp)""", re.IGNORECASE)

# Applied in order; &amp; goes first, so "&amp;lt;" decodes all the way to "<".
_TEXT_ENTITIES = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&nbsp;", " "),
)


def strip_cdata(text: str) -> str:
    if not text:
        return text
    return _CDATA_RE.sub(r"\1", text)


def strip_tags(markup: str) -> str:
    return _TAG_RE.sub("", markup or "")


def decode_entities(text: str) -> str:
    for entity, char in _TEXT_ENTITIES:
        text = text.replace(entity, char)
    return text


def decode_url_entities(url: str) -> str:
    """Decode every named and numeric entity, e.g. WordPress's ``&#038;``."""
    return html.unescape(url)


def extract_tag(xml: str, tag_name: str) -> Optional[str]:
    """Return the CDATA-stripped body of the first ``<tag_name>`` element.

    Namespaced names such as ``content:encoded`` are matched literally.
    Empty bodies count as missing.
    """
    name = re.escape(tag_name)
    match = re.search(rf"<{name}(?:\s[^>]*)?>([\s\S]*?)</{name}>", xml)
    if not match:
        return None
    body = match.group(1).strip()
    if not body:
        return None
    return strip_cdata(body)


def clean_description(markup: str) -> str:
    """Plain-text summary: tags stripped, entities decoded, capped at 200 chars."""
    if not markup:
        return ""
    text = strip_tags(strip_cdata(markup))
    text = decode_entities(text)
    return text.strip()[:DESCRIPTION_LIMIT]


def _usable(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    url = decode_url_entities(url.strip())
    if not url or url.lower().startswith("data:"):
        return None
    return url


def _media_url(item_xml: str, tag_name: str) -> Optional[str]:
    # Self-closing form: <media:content url="..." />
    name = re.escape(tag_name)
    match = re.search(rf"""<{name}[^>]+url=["']([^"']+)["'][^>]*/?>""", item_xml, re.IGNORECASE)
    if match:
        url = _usable(match.group(1))
        if url:
            return url
    # Wrapping form: <media:content>url="..."</media:content>
    body = extract_tag(item_xml, tag_name)
    if body:
        match = _URL_ATTR_RE.search(body)
        if match:
            return _usable(match.group(1))
    return None


def _enclosure_url(item_xml: str) -> Optional[str]:
    for tag in re.finditer(r"<enclosure\b[^>]*>", item_xml, re.IGNORECASE):
        attrs = tag.group(0)
        url_match = _URL_ATTR_RE.search(attrs)
        if not url_match:
            continue
        url = _usable(url_match.group(1))
        if not url:
            continue
        type_match = _TYPE_ATTR_RE.search(attrs)
        if type_match:
            if type_match.group(1).strip().lower().startswith("image/"):
                return url
            continue
        if _IMAGE_EXT_RE.search(url):
            return url
    return None


def extract_image_url(markup: str) -> Optional[str]:
    """Find an image reference inside an HTML fragment.

    Tries ``<img src>``, then an ``og:image`` meta tag, then any bare URL with
    an image extension.
    """
    if not markup:
        return None
    clean = strip_cdata(markup)

    for pattern in _IMG_SRC_PATTERNS:
        match = pattern.search(clean)
        if match:
            url = _usable(match.group(1))
            # Tracking pixels and truncated paths are shorter than this.
            if url and len(url) > 10:
                return url

    match = _OG_IMAGE_RE.search(clean)
    if match:
        url = _usable(match.group(1))
        if url:
            return url

    match = _BARE_IMAGE_URL_RE.search(clean)
    if match:
        return _usable(match.group(0))
    return None


def _absolutize(url: str, channel_link: str) -> str:
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("/"):
        origin = _ORIGIN_RE.match(channel_link.strip()) if channel_link else None
        if origin:
            return origin.group(0) + url
    return url


def resolve_image_url(item_xml: str, extended_content: str, channel_link: str = "") -> Optional[str]:
    image_url = (
        _media_url(item_xml, "media:content")
        or _media_url(item_xml, "media:thumbnail")
        or _enclosure_url(item_xml)
        or extract_image_url(extended_content)
        or extract_image_url(item_xml)
    )
    if not image_url:
        return None
    return _absolutize(image_url, channel_link)


def _categories(item_xml: str) -> List[str]:
    found = []
    for match in _CATEGORY_RE.finditer(item_xml):
        text = strip_cdata(match.group(1)).strip()
        if text:
            found.append(text)
    return found or [DEFAULT_CATEGORY]


def parse_item(item_xml: str, channel_link: str = "") -> FeedItem:
    title = decode_entities(extract_tag(item_xml, "title") or "")
    link = (extract_tag(item_xml, "link") or "").strip()
    description = extract_tag(item_xml, "description") or ""
    content = extract_tag(item_xml, "content:encoded") or description
    author = (extract_tag(item_xml, "dc:creator") or "").strip() or DEFAULT_AUTHOR

    image_url = resolve_image_url(item_xml, content, channel_link)
    if image_url:
        logger.debug("Resolved image for %r: %s", title, image_url)
    else:
        logger.debug("No image found for %r", title)

    return FeedItem(
        title=title,
        link=link,
        description=clean_description(description or content),
        content=content,
        categories=tuple(_categories(item_xml)),
        published_at=extract_tag(item_xml, "pubDate") or "",
        author=author,
        image_url=image_url,
    )


def parse_feed(xml_text: str) -> Feed:
    """Parse raw RSS text into a ``Feed``.

    Raises ``MalformedFeedError`` when no ``<channel>`` block is present.
    """
    match = _CHANNEL_RE.search(xml_text or "")
    if not match:
        raise MalformedFeedError("RSS feed missing channel element")
    channel = match.group(1)

    # Channel-level tags must never be picked up from inside an item.
    header = _ITEM_RE.sub("", channel)
    link = (extract_tag(header, "link") or "").strip()

    items = tuple(parse_item(m.group(1), link) for m in _ITEM_RE.finditer(channel))
    return Feed(
        title=extract_tag(header, "title") or "",
        link=link,
        description=extract_tag(header, "description") or "",
        items=items,
    )
