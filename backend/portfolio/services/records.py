"""Helpers shared by the content services (slug allocation, payload apply)."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..content.blocks import dump_blocks, is_block_list
from ..utils.slugs import slugify


def payload_dict(data: BaseModel | Dict[str, Any]) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        values = data.model_dump(exclude_unset=True)
    else:
        values = dict(data)
    if is_block_list(values.get("content")):
        values["content"] = dump_blocks(values["content"])
    return values


def unique_slug(db: Session, model: Type[Any], wanted: str, exclude_id: Any = None) -> str:
    base = slugify(wanted)
    if not base:
        raise ValueError("slug or title is required")
    candidate = base
    n = 2
    while True:
        stmt = select(model.id).where(model.slug == candidate)
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        if db.execute(stmt).first() is None:
            return candidate
        candidate = f"{base}-{n}"
        n += 1


def apply_fields(obj: Any, values: Dict[str, Any], fields: Iterable[str]) -> None:
    for field in fields:
        if field in values:
            setattr(obj, field, values[field])


def normalize_tags(tags: Optional[Iterable[Any]]) -> List[str]:
    seen: List[str] = []
    for tag in tags or []:
        text = str(tag).strip()
        if text and text not in seen:
            seen.append(text)
    return seen


def matches_tag(tags: Optional[Iterable[Any]], tag: str) -> bool:
    wanted = tag.strip().lower()
    return any(str(t).strip().lower() == wanted or slugify(str(t)) == wanted for t in tags or [])
