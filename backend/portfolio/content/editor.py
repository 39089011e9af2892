"""Block list operations used by the admin block editor.

All functions take a list of blocks (models or stored dicts) and return a new
list of block models; the input list is never mutated.
"""
from __future__ import annotations

import itertools
import time
from typing import Any, Dict, Iterable, List, Optional

from .blocks import BLOCK_TYPES, BaseBlock, parse_block, parse_blocks


_counter = itertools.count()

DEFAULT_METADATA: Dict[str, Dict[str, Any]] = {
    "heading": {"level": 2},
    "list": {"listType": "bullet"},
    "gallery": {"galleryStyle": "grid", "images": []},
    "spacer": {"height": "medium"},
    "accordion": {"items": []},
    "callout": {"calloutType": "info"},
}


def new_block_id(now_ms: Optional[int] = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"block-{now_ms}-{next(_counter)}"


def make_block(block_type: str, content: str = "", block_id: Optional[str] = None) -> BaseBlock:
    if block_type not in BLOCK_TYPES:
        raise ValueError(f"unknown block type: {block_type}")
    raw = {
        "id": block_id or new_block_id(),
        "type": block_type,
        "content": content,
        "metadata": dict(DEFAULT_METADATA.get(block_type, {})),
    }
    block = parse_block(raw)
    if block is None:
        raise ValueError(f"cannot build {block_type} block")
    return block


def add_block(blocks: Iterable[Any], block_type: str, content: str = "") -> List[BaseBlock]:
    return [*parse_blocks(blocks), make_block(block_type, content)]


def remove_block(blocks: Iterable[Any], block_id: str) -> List[BaseBlock]:
    return [block for block in parse_blocks(blocks) if block.id != block_id]


def find_block_index(blocks: Iterable[Any], block_id: str) -> int:
    for index, block in enumerate(parse_blocks(blocks)):
        if block.id == block_id:
            return index
    return -1


def move_block(blocks: Iterable[Any], from_index: int, to_index: int) -> List[BaseBlock]:
    items = parse_blocks(blocks)
    size = len(items)
    if not (0 <= from_index < size and 0 <= to_index < size):
        return items
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return items


def move_block_by(blocks: Iterable[Any], block_id: str, offset: int) -> List[BaseBlock]:
    """Move a block up (-1) or down (+1) relative to its current position."""
    items = parse_blocks(blocks)
    index = find_block_index(items, block_id)
    if index < 0:
        return items
    return move_block(items, index, index + offset)


def _camel_keys(values: Dict[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, value in values.items():
        if "_" in key:
            head, *rest = key.split("_")
            key = head + "".join(part[:1].upper() + part[1:] for part in rest)
        out[key] = value
    return out


def update_block(
    blocks: Iterable[Any],
    block_id: str,
    content: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> List[BaseBlock]:
    """Replace content and merge metadata into the block with ``block_id``.

    An update that produces invalid metadata keeps the block unchanged.
    """
    updated: List[BaseBlock] = []
    for block in parse_blocks(blocks):
        if block.id == block_id:
            raw = block.model_dump(by_alias=True, exclude_none=True)
            if content is not None:
                raw["content"] = content
            if metadata:
                raw["metadata"] = {**raw.get("metadata", {}), **_camel_keys(metadata)}
            block = parse_block(raw) or block
        updated.append(block)
    return updated
