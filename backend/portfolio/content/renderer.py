"""Turn content blocks into the HTML fragment shown on article and project pages."""
from __future__ import annotations

import re
from html import escape
from typing import Any, Callable, Dict, Iterable, Optional

from ..utils.slugs import slugify
from .blocks import (
    AccordionBlock,
    CalloutBlock,
    CodeBlock,
    DividerBlock,
    FileBlock,
    GalleryBlock,
    HeadingBlock,
    ImageBlock,
    ListBlock,
    ParagraphBlock,
    QuoteBlock,
    SpacerBlock,
    VideoBlock,
    parse_block,
)


YOUTUBE_RE = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|shorts/|live/|watch\?v=|&v=)([^#&?/]*).*")
VIMEO_RE = re.compile(r"vimeo\.com/(?:video/)?([0-9]+)")
DIRECT_VIDEO_RE = re.compile(r"\.(mp4|webm|ogg)(\?.*)?$", re.IGNORECASE)

SPACER_HEIGHTS = {"small": "spacer--small", "medium": "spacer--medium", "large": "spacer--large"}
IMAGE_ALIGN = {"left": "align-left", "right": "align-right", "center": "align-center"}
IMAGE_SIZE = {"small": "size-small", "medium": "size-medium", "large": "size-large"}
CALLOUT_TYPES = ("info", "warning", "important", "key-concept", "success", "error")


def _e(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def youtube_id(url: str) -> Optional[str]:
    match = YOUTUBE_RE.match(url or "")
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def vimeo_id(url: str) -> Optional[str]:
    match = VIMEO_RE.search(url or "")
    return match.group(1) if match else None


def video_embed_url(url: str, video_type: str = "youtube") -> Optional[str]:
    if video_type == "custom":
        return url or None
    if video_type == "vimeo":
        vid = vimeo_id(url)
        return f"https://player.vimeo.com/video/{vid}" if vid else None
    vid = youtube_id(url)
    return f"https://www.youtube.com/embed/{vid}" if vid else None


def _paragraph(block: ParagraphBlock, drop_cap: bool) -> str:
    classes = "prose-paragraph drop-cap" if drop_cap else "prose-paragraph"
    return f'<div class="{classes}">{block.content}</div>'


def _heading(block: HeadingBlock) -> str:
    level = block.metadata.level
    anchor = slugify(block.content)
    id_attr = f' id="{anchor}"' if anchor else ""
    return f"<h{level}{id_attr}>{block.content}</h{level}>"


def _image(block: ImageBlock) -> str:
    if not block.content:
        return ""
    meta = block.metadata
    classes = " ".join(
        c for c in ("content-image", IMAGE_ALIGN.get(meta.align, ""), IMAGE_SIZE.get(meta.size, "")) if c
    )
    caption = f"<figcaption>{_e(meta.caption)}</figcaption>" if meta.caption else ""
    return (
        f'<figure class="{classes}">'
        f'<img src="{_e(block.content)}" alt="{_e(meta.alt)}" loading="lazy" />'
        f"{caption}</figure>"
    )


def _quote(block: QuoteBlock) -> str:
    author = block.metadata.author
    cite = f"<cite>{_e(author)}</cite>" if author else ""
    return f'<blockquote class="content-quote">{_e(block.content)}{cite}</blockquote>'


def _list(block: ListBlock) -> str:
    items = block.items
    if not items:
        return ""
    tag = "ol" if block.numbered else "ul"
    body = "".join(f"<li>{_e(item)}</li>" for item in items)
    return f'<{tag} class="content-list">{body}</{tag}>'


def _code(block: CodeBlock) -> str:
    language = block.metadata.language or "text"
    return (
        f'<div class="content-code"><div class="content-code__lang">{_e(language)}</div>'
        f'<pre><code class="language-{_e(language)}">{_e(block.content)}</code></pre></div>'
    )


def _gallery(block: GalleryBlock) -> str:
    meta = block.metadata
    if not meta.images:
        return ""
    figures = []
    for image in meta.images:
        caption = f"<figcaption>{_e(image.caption)}</figcaption>" if image.caption else ""
        download = (
            f'<a class="gallery__download" href="{_e(image.url)}" download>Download</a>'
            if meta.enable_download
            else ""
        )
        figures.append(
            f'<figure><img src="{_e(image.url)}" alt="{_e(image.alt or image.caption)}" loading="lazy" />'
            f"{caption}{download}</figure>"
        )
    return f'<div class="gallery gallery--{_e(meta.gallery_style)}">{"".join(figures)}</div>'


def _video(block: VideoBlock) -> str:
    meta = block.metadata
    src = video_embed_url(block.content, meta.video_type)
    if not src:
        return ""
    caption = f'<div class="content-video__caption">{_e(meta.caption)}</div>' if meta.caption else ""
    if meta.video_type == "custom" and DIRECT_VIDEO_RE.search(src):
        player = f'<video src="{_e(src)}" controls playsinline preload="metadata"></video>'
    else:
        player = (
            f'<iframe src="{_e(src)}" frameborder="0" '
            'allow="accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture" '
            "allowfullscreen></iframe>"
        )
    return f'<div class="content-video">{player}{caption}</div>'


def _spacer(block: SpacerBlock) -> str:
    height = SPACER_HEIGHTS.get(block.metadata.height, SPACER_HEIGHTS["medium"])
    return f'<div class="spacer {height}"></div>'


def _accordion(block: AccordionBlock) -> str:
    items = block.metadata.items
    if not items:
        return ""
    body = "".join(
        f"<details><summary>{_e(item.question)}</summary><div>{_e(item.answer)}</div></details>"
        for item in items
    )
    return f'<div class="accordion">{body}</div>'


def _callout(block: CalloutBlock) -> str:
    kind = block.metadata.callout_type or "info"
    css = kind if kind in CALLOUT_TYPES else "info"
    label = kind.replace("-", " ")
    return (
        f'<div class="callout callout--{css}">'
        f'<div class="callout__label">{_e(label)}</div>'
        f'<div class="callout__body">{_e(block.content)}</div></div>'
    )


def _divider(block: DividerBlock) -> str:
    return '<div class="divider"><span></span><span></span><span></span></div>'


def _file(block: FileBlock) -> str:
    if not block.content:
        return ""
    meta = block.metadata
    size = f'<span class="file-download__size">{_e(meta.file_size)}</span>' if meta.file_size else ""
    return (
        f'<a class="file-download" href="{_e(block.content)}" download>'
        f'<span class="file-download__name">{_e(meta.file_name or "Download File")}</span>{size}</a>'
    )


_RENDERERS: Dict[type, Callable[[Any], str]] = {
    HeadingBlock: _heading,
    ImageBlock: _image,
    QuoteBlock: _quote,
    ListBlock: _list,
    CodeBlock: _code,
    GalleryBlock: _gallery,
    VideoBlock: _video,
    SpacerBlock: _spacer,
    AccordionBlock: _accordion,
    CalloutBlock: _callout,
    DividerBlock: _divider,
    FileBlock: _file,
}


def render_block(raw: Any, drop_cap: bool = False) -> str:
    block = parse_block(raw)
    if block is None:
        return ""
    if isinstance(block, ParagraphBlock):
        flag = block.metadata.is_drop_cap
        return _paragraph(block, drop_cap if flag is None else flag)
    renderer = _RENDERERS.get(type(block))
    return renderer(block) if renderer else ""


def render_blocks(blocks: Optional[Iterable[Any]], drop_cap: bool = False) -> str:
    """Render blocks in order; with ``drop_cap`` the first paragraph gets a drop cap."""
    if not blocks or isinstance(blocks, (str, bytes)):
        return ""
    parts = []
    first_paragraph_seen = False
    for raw in blocks:
        block = parse_block(raw)
        if block is None:
            continue
        first = False
        if isinstance(block, ParagraphBlock) and not first_paragraph_seen:
            first_paragraph_seen = True
            first = drop_cap
        html = render_block(block, drop_cap=first)
        if html:
            parts.append(html)
    return "\n".join(parts)
