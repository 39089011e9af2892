from __future__ import annotations

from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models import Collaborator
from ..schemas.taxonomy import CollaboratorIn
from .records import apply_fields, payload_dict


FIELDS = ("name", "role", "website", "image", "bio")


class CollaboratorService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self) -> List[Collaborator]:
        return list(self.db.execute(select(Collaborator).order_by(Collaborator.name.asc())).scalars().all())

    def create(self, data: CollaboratorIn | Dict[str, Any]) -> Collaborator:
        values = payload_dict(data)
        if not (values.get("name") or "").strip():
            raise ValueError("name is required")
        collaborator = Collaborator(name=values["name"].strip())
        apply_fields(collaborator, values, FIELDS[1:])
        self.db.add(collaborator)
        self.db.commit()
        self.db.refresh(collaborator)
        return collaborator

    def update(self, collaborator_id: int, data: CollaboratorIn | Dict[str, Any]) -> Collaborator:
        collaborator = self.db.get(Collaborator, collaborator_id)
        if collaborator is None:
            raise LookupError(f"collaborator {collaborator_id} not found")
        values = payload_dict(data)
        if "name" in values and not (values["name"] or "").strip():
            raise ValueError("name is required")
        apply_fields(collaborator, values, FIELDS)
        self.db.commit()
        self.db.refresh(collaborator)
        return collaborator

    def delete(self, collaborator_id: int) -> None:
        collaborator = self.db.get(Collaborator, collaborator_id)
        if collaborator is None:
            raise LookupError(f"collaborator {collaborator_id} not found")
        self.db.delete(collaborator)
        self.db.commit()
