"""Article and news bodies written before the block editor existed.

Older records store their body as an HTML string (sometimes a JSON encoded
block list); newer ones store a block list. ``render_body`` accepts all of
them.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup  # type: ignore
from bs4.element import NavigableString, Tag  # type: ignore

from ..config import settings
from ..utils.slugs import slugify, strip_tags
from .blocks import parse_blocks
from .editor import new_block_id
from .renderer import render_blocks


logger = logging.getLogger(__name__)

EMPTY_HTML = {"", "<p><br></p>", "<p></p>"}
CONTAINER_TAGS = {"div", "section", "article", "main", "span"}
HEADING_RE = re.compile(r"^h([1-6])$")


def rewrite_cms_links(html: str, cms_url: Optional[str] = None) -> str:
    """Make absolute links to the old CMS host relative to this site."""
    base = (cms_url or settings.CMS_URL or "").rstrip("/")
    if not base:
        return html
    return html.replace(f'href="{base}/', 'href="/').replace(f'href="{base}"', 'href="/"')


def _decode_block_list(body: str) -> Optional[list]:
    text = body.strip()
    if not text.startswith("["):
        return None
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, list) else None


def render_body(body: Any, drop_cap: bool = False) -> str:
    if body is None:
        return ""
    if isinstance(body, list):
        return render_blocks(body, drop_cap=drop_cap)
    if isinstance(body, str):
        decoded = _decode_block_list(body)
        if decoded is not None:
            return render_blocks(decoded, drop_cap=drop_cap)
        return rewrite_cms_links(body)
    logger.debug("unsupported body type %s", type(body).__name__)
    return ""


def heading_anchor(text: str) -> str:
    return slugify(text, fallback="section")


def table_of_contents(body: Any) -> List[Dict[str, Any]]:
    """Headings of a block body as ``{level, text, anchor}`` entries."""
    if not isinstance(body, list):
        return []
    entries = []
    for block in parse_blocks(body):
        if block.type == "heading":
            text = strip_tags(block.content).strip()
            if text:
                entries.append({"level": block.metadata.level, "text": text, "anchor": heading_anchor(text)})
    return entries


def _block(block_type: str, content: str, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {
        "id": new_block_id(),
        "type": block_type,
        "content": content,
        "metadata": metadata or {},
    }


def _video_block(src: str) -> Dict[str, Any]:
    if "vimeo.com" in src:
        video_type = "vimeo"
    elif "youtu" in src:
        video_type = "youtube"
    else:
        video_type = "custom"
    return _block("video", src, {"videoType": video_type})


def _image_block(img: Tag, caption: str = "") -> Dict[str, Any]:
    return _block("image", img.get("src", ""), {"alt": img.get("alt", ""), "caption": caption})


def _convert(node: Any, blocks: List[Dict[str, Any]]) -> None:
    if isinstance(node, NavigableString):
        text = str(node).strip()
        if text and node.__class__ is NavigableString:
            blocks.append(_block("paragraph", text))
        return
    if not isinstance(node, Tag):
        return

    tag = node.name.lower()
    heading = HEADING_RE.match(tag)
    if heading:
        blocks.append(_block("heading", node.get_text().strip(), {"level": int(heading.group(1))}))
    elif tag == "p":
        inner = node.decode_contents().strip()
        if inner and inner != "<br/>":
            blocks.append(_block("paragraph", inner))
    elif tag in ("ul", "ol"):
        items = [li.get_text().strip() for li in node.find_all("li")]
        items = [item for item in items if item]
        if items:
            list_type = "numbered" if tag == "ol" else "bullet"
            blocks.append(_block("list", "\n".join(items), {"listType": list_type}))
    elif tag == "blockquote":
        blocks.append(_block("quote", node.get_text().strip()))
    elif tag == "figure":
        img = node.find("img")
        if img is None:
            for child in node.children:
                _convert(child, blocks)
            return
        caption_tag = node.find("figcaption")
        caption = caption_tag.get_text().strip() if caption_tag else ""
        blocks.append(_image_block(img, caption))
    elif tag == "img":
        blocks.append(_image_block(node))
    elif tag == "iframe":
        if node.get("src"):
            blocks.append(_video_block(node["src"]))
    elif tag == "video":
        source = node.get("src") or (node.find("source") or {}).get("src")
        if source:
            blocks.append(_block("video", source, {"videoType": "custom"}))
    elif tag == "pre":
        code = node.find("code")
        language = ""
        if code is not None:
            for css in code.get("class", []):
                if css.startswith("language-"):
                    language = css[len("language-"):]
        blocks.append(_block("code", node.get_text(), {"language": language or "text"}))
    elif tag == "hr":
        blocks.append(_block("divider", ""))
    elif tag in CONTAINER_TAGS:
        for child in node.children:
            _convert(child, blocks)
    else:
        html = str(node).strip()
        if node.get_text().strip():
            blocks.append(_block("paragraph", html))


def html_to_blocks(html: Optional[str]) -> List[Dict[str, Any]]:
    """Split a legacy HTML body into stored block dicts."""
    if not html or html.strip() in EMPTY_HTML:
        return []
    soup = BeautifulSoup(rewrite_cms_links(html), "html.parser")
    blocks: List[Dict[str, Any]] = []
    for node in soup.children:
        _convert(node, blocks)
    return blocks
