from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple, Type

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from ..auth import require_admin
from ..content.blocks import BLOCK_TYPES, dump_blocks, parse_blocks
from ..content.editor import add_block, move_block_by, remove_block, update_block
from ..content.legacy import html_to_blocks, render_body
from ..db import get_db
from ..schemas.posts import ArticleIn, NewsIn
from ..schemas.project import ProjectIn
from ..schemas.settings import SiteSettings
from ..services.admin_service import AdminService
from ..services.article_service import ArticleService
from ..services.news_service import NewsService
from ..services.project_service import ProjectService
from ..services.settings_store import SiteSettingsStore
from ..utils.cache import invalidate_generated


logger = logging.getLogger(__name__)
router = APIRouter()

# kind -> (service class, input schema, label, editable form fields)
KINDS: Dict[str, Tuple[Any, Type[BaseModel], str, Tuple[str, ...]]] = {
    "projects": (
        ProjectService,
        ProjectIn,
        "Project",
        ("title", "slug", "category", "subcategory", "year", "venue", "client_name", "description",
         "cover_image", "card_image", "hero_image", "tags", "published", "featured"),
    ),
    "articles": (
        ArticleService,
        ArticleIn,
        "Article",
        ("title", "slug", "category", "date", "read_time", "excerpt", "cover_image", "tags",
         "published", "featured"),
    ),
    "news": (
        NewsService,
        NewsIn,
        "News item",
        ("title", "slug", "date", "category", "excerpt", "location", "link", "cover_image", "tags", "published"),
    ),
}
CHECKBOXES = ("published", "featured")
SETTINGS_TEXT_FIELDS = (
    "hero_title",
    "hero_subtitle",
    "bio_text",
    "profile_image_url",
    "intro_text",
    "about_text",
    "philosophy_text",
    "contact_email",
    "contact_phone",
    "contact_location",
    "availability_status",
    "resume_url",
    "site_title",
    "site_description",
    "footer_copyright",
    "default_theme",
)


def _kind(kind: str):
    if kind not in KINDS:
        raise HTTPException(status_code=404, detail="Unknown section")
    return KINDS[kind]


def _record(db: Session, kind: str, record_id: str):
    service_cls = _kind(kind)[0]
    record = service_cls(db).get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


def form_values(form: Dict[str, Any], fields: Tuple[str, ...]) -> Dict[str, Any]:
    """Turn submitted form strings into a service payload."""
    values: Dict[str, Any] = {}
    for field in fields:
        if field in CHECKBOXES:
            values[field] = field in form
            continue
        if field not in form:
            continue
        raw = str(form.get(field) or "").strip()
        if field == "tags":
            values[field] = [t.strip() for t in raw.split(",") if t.strip()]
        else:
            values[field] = raw or None
    return values


def _blocks_of(record: Any) -> List[Any]:
    return parse_blocks(record.content) if isinstance(record.content, list) else []


def _edit_page(request: Request, kind: str, record: Any, error: Optional[str] = None, status_code: int = 200):
    templates = request.app.state.templates
    label = _kind(kind)[2]
    return templates.TemplateResponse(
        request,
        "admin/edit.html",
        {
            "kind": kind,
            "label": label,
            "record": record,
            "fields": _kind(kind)[3],
            "blocks": _blocks_of(record) if record is not None else [],
            "legacy_html": record is not None and isinstance(record.content, str),
            "block_types": BLOCK_TYPES,
            "error": error,
        },
        status_code=status_code,
    )


@router.get("/admin")
def dashboard(request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "admin/dashboard.html",
        {"stats": AdminService(db).stats(), "kinds": KINDS},
    )


@router.get("/admin/settings")
def settings_page(request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "admin/settings.html",
        {
            "values": SiteSettingsStore(db).load(),
            "fields": SETTINGS_TEXT_FIELDS,
            "error": None,
            "saved": request.query_params.get("saved") == "1",
        },
    )


@router.post("/admin/settings")
async def save_settings(request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    form = await request.form()
    values: Dict[str, Any] = {}
    for field in SETTINGS_TEXT_FIELDS:
        if field in form:
            raw = str(form.get(field) or "").strip()
            # optional settings are cleared to None, text settings to ""
            values[field] = raw or (None if SiteSettings.model_fields[field].default is None else "")
    store = SiteSettingsStore(db)
    try:
        store.update(values)
    except ValidationError as exc:
        templates = request.app.state.templates
        return templates.TemplateResponse(
            request,
            "admin/settings.html",
            {
                "values": store.load(),
                "fields": SETTINGS_TEXT_FIELDS,
                "error": "; ".join(err["msg"] for err in exc.errors()),
                "saved": False,
            },
            status_code=400,
        )
    return RedirectResponse(url="/admin/settings?saved=1", status_code=303)


@router.get("/admin/{kind}")
def list_records(kind: str, request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    service_cls, _schema, label, _fields = _kind(kind)
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "admin/list.html",
        {"kind": kind, "label": label, "records": service_cls(db).admin_list()},
    )


@router.get("/admin/{kind}/new")
def new_record(kind: str, request: Request, _: bool = Depends(require_admin)):
    _kind(kind)
    return _edit_page(request, kind, None)


@router.post("/admin/{kind}/new")
async def create_record(kind: str, request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    service_cls, schema, _label, fields = _kind(kind)
    form = await request.form()
    try:
        record = service_cls(db).create(schema.model_validate(form_values(form, fields)))
    except ValueError as exc:
        return _edit_page(request, kind, None, error=str(exc), status_code=400)
    invalidate_generated()
    logger.info("admin created %s id=%s", kind, record.id)
    return RedirectResponse(url=f"/admin/{kind}/{record.id}", status_code=303)


@router.get("/admin/{kind}/{record_id}")
def edit_record(kind: str, record_id: str, request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    return _edit_page(request, kind, _record(db, kind, record_id))


@router.post("/admin/{kind}/{record_id}")
async def save_record(kind: str, record_id: str, request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    service_cls, schema, _label, fields = _kind(kind)
    record = _record(db, kind, record_id)
    form = await request.form()
    values = form_values(form, fields)
    if "body_html" in form and isinstance(record.content, (str, type(None))) and kind != "projects":
        values["content"] = str(form.get("body_html") or "")
    try:
        service_cls(db).update(record_id, schema.model_validate(values))
    except ValueError as exc:
        db.rollback()
        return _edit_page(request, kind, _record(db, kind, record_id), error=str(exc), status_code=400)
    invalidate_generated()
    return RedirectResponse(url=f"/admin/{kind}/{record_id}", status_code=303)


@router.post("/admin/{kind}/{record_id}/delete")
def delete_record(kind: str, record_id: str, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    service_cls = _kind(kind)[0]
    try:
        service_cls(db).delete(record_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Record not found")
    invalidate_generated()
    return RedirectResponse(url=f"/admin/{kind}", status_code=303)


def _save_blocks(db: Session, kind: str, record_id: str, blocks: List[Any]):
    _kind(kind)[0](db).update(record_id, {"content": dump_blocks(blocks)})
    invalidate_generated()
    return RedirectResponse(url=f"/admin/{kind}/{record_id}#blocks", status_code=303)


@router.post("/admin/{kind}/{record_id}/blocks/add")
def add_content_block(
    kind: str,
    record_id: str,
    block_type: str = Form(...),
    _: bool = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = _record(db, kind, record_id)
    try:
        blocks = add_block(_blocks_of(record), block_type)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return _save_blocks(db, kind, record_id, blocks)


@router.post("/admin/{kind}/{record_id}/blocks/{block_id}/remove")
def remove_content_block(kind: str, record_id: str, block_id: str, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    record = _record(db, kind, record_id)
    return _save_blocks(db, kind, record_id, remove_block(_blocks_of(record), block_id))


@router.post("/admin/{kind}/{record_id}/blocks/{block_id}/move")
def move_content_block(
    kind: str,
    record_id: str,
    block_id: str,
    offset: int = Form(...),
    _: bool = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = _record(db, kind, record_id)
    return _save_blocks(db, kind, record_id, move_block_by(_blocks_of(record), block_id, offset))


@router.post("/admin/{kind}/{record_id}/blocks/{block_id}/update")
def update_content_block(
    kind: str,
    record_id: str,
    block_id: str,
    content: str = Form(""),
    metadata: str = Form(""),
    _: bool = Depends(require_admin),
    db: Session = Depends(get_db),
):
    record = _record(db, kind, record_id)
    meta: Optional[Dict[str, Any]] = None
    if metadata.strip():
        try:
            meta = json.loads(metadata)
        except ValueError:
            raise HTTPException(status_code=400, detail="metadata must be a JSON object")
        if not isinstance(meta, dict):
            raise HTTPException(status_code=400, detail="metadata must be a JSON object")
    return _save_blocks(db, kind, record_id, update_block(_blocks_of(record), block_id, content=content, metadata=meta))


@router.post("/admin/{kind}/{record_id}/convert")
def convert_to_blocks(kind: str, record_id: str, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    """Replace a legacy HTML body with the equivalent block list."""
    record = _record(db, kind, record_id)
    if not isinstance(record.content, str):
        raise HTTPException(status_code=400, detail="Content is already a block list")
    return _save_blocks(db, kind, record_id, html_to_blocks(record.content))


@router.get("/admin/{kind}/{record_id}/preview", response_class=HTMLResponse)
def preview(kind: str, record_id: str, request: Request, _: bool = Depends(require_admin), db: Session = Depends(get_db)):
    record = _record(db, kind, record_id)
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        "admin/preview.html",
        {"record": record, "body_html": render_body(record.content, drop_cap=kind == "articles")},
    )
