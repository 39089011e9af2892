from fastapi import APIRouter, Body, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from typing import Any, List, Optional
from ..content.legacy import render_body
from ..content.renderer import render_blocks
from ..db import get_db
from ..schemas.posts import ArticleOut, NewsOut
from ..schemas.project import ProjectOut
from ..schemas.taxonomy import CategoryOut, CollaboratorOut
from ..services.article_service import ArticleService
from ..services.category_service import CategoryService
from ..services.links_service import BioLinksService
from ..services.collaborator_service import CollaboratorService
from ..services.news_service import NewsService
from ..services.project_service import ProjectService
from ..services.search_service import SearchService
from ..services.settings_store import SiteSettingsStore
from ..services.tutorial_service import TutorialService


router = APIRouter()


def _split(value: Optional[str]) -> List[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


@router.get("/projects")
def list_projects(
    category: Optional[str] = Query(default=None),
    subcategory: Optional[str] = Query(default=None),
    tag: Optional[str] = Query(default=None),
    featured: Optional[bool] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    db: Session = Depends(get_db),
):
    items = ProjectService(db).list_published(category, subcategory, tag, featured, limit)
    return [ProjectOut.model_validate(p) for p in items]


@router.get("/projects/{slug}")
def get_project(slug: str, db: Session = Depends(get_db)):
    project = ProjectService(db).get_by_slug(slug)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return ProjectOut.model_validate(project)


@router.post("/projects/{project_id}/view")
def project_view(project_id: str, db: Session = Depends(get_db)):
    try:
        return {"views": ProjectService(db).record_view(project_id)}
    except LookupError:
        raise HTTPException(status_code=404, detail="Project not found")


@router.post("/projects/{project_id}/like")
def project_like(project_id: str, db: Session = Depends(get_db)):
    try:
        return {"likes": ProjectService(db).like(project_id)}
    except LookupError:
        raise HTTPException(status_code=404, detail="Project not found")


@router.post("/projects/{project_id}/unlike")
def project_unlike(project_id: str, db: Session = Depends(get_db)):
    try:
        return {"likes": ProjectService(db).unlike(project_id)}
    except LookupError:
        raise HTTPException(status_code=404, detail="Project not found")


@router.get("/posts")
def list_posts(
    category: Optional[str] = Query(default=None),
    tag: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return [ArticleOut.model_validate(a) for a in ArticleService(db).list_published(category, tag, limit)]


@router.get("/posts/related")
def related_posts(
    category: Optional[str] = Query(default=None),
    tags: Optional[str] = Query(default=None, description="comma separated"),
    exclude: Optional[str] = Query(default=None),
    limit: int = Query(default=3, ge=1, le=12),
    db: Session = Depends(get_db),
):
    items = ArticleService(db).related(category, _split(tags), exclude_id=exclude, limit=limit)
    return [ArticleOut.model_validate(a) for a in items]


@router.get("/posts/{slug}")
def get_post(slug: str, db: Session = Depends(get_db)):
    article = ArticleService(db).get_by_slug(slug)
    if not article:
        raise HTTPException(status_code=404, detail="Article not found")
    payload = ArticleOut.model_validate(article).model_dump(mode="json")
    payload["html"] = render_body(article.content, drop_cap=True)
    return payload


@router.post("/posts/{article_id}/view")
def post_view(article_id: str, db: Session = Depends(get_db)):
    try:
        return {"views": ArticleService(db).record_view(article_id)}
    except LookupError:
        raise HTTPException(status_code=404, detail="Article not found")


@router.post("/posts/{article_id}/like")
def post_like(article_id: str, db: Session = Depends(get_db)):
    try:
        return {"likes": ArticleService(db).like(article_id)}
    except LookupError:
        raise HTTPException(status_code=404, detail="Article not found")


@router.get("/categories/{category_type}")
def list_categories(category_type: str, db: Session = Depends(get_db)):
    try:
        items = CategoryService(db).list_by_type(category_type)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return [CategoryOut.model_validate(c) for c in items]


@router.get("/news")
def list_news(limit: Optional[int] = Query(default=None, ge=1, le=200), db: Session = Depends(get_db)):
    return [NewsOut.model_validate(n) for n in NewsService(db).list_for_site(limit)]


@router.get("/news/{key}")
def get_news(key: str, db: Session = Depends(get_db)):
    item = NewsService(db).get_by_id_or_slug(key)
    if not item:
        raise HTTPException(status_code=404, detail="News item not found")
    payload = NewsOut.model_validate(item).model_dump(mode="json")
    payload["html"] = render_body(item.content)
    return payload


@router.get("/tutorials")
def list_tutorials(category: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
    return TutorialService(db).list_published(category)


@router.get("/tutorial-categories")
def tutorial_categories(db: Session = Depends(get_db)):
    return TutorialService(db).categories()


@router.get("/tutorials/{slug}")
def get_tutorial(slug: str, db: Session = Depends(get_db)):
    tutorial = TutorialService(db).get_by_slug(slug)
    if not tutorial:
        raise HTTPException(status_code=404, detail="Tutorial not found")
    return tutorial


@router.get("/collaborators")
def list_collaborators(db: Session = Depends(get_db)):
    return [CollaboratorOut.model_validate(c) for c in CollaboratorService(db).list()]


@router.get("/settings")
def get_settings(db: Session = Depends(get_db)):
    return SiteSettingsStore(db).load().model_dump(mode="json", by_alias=True)


@router.get("/links")
def list_links(db: Session = Depends(get_db)):
    return BioLinksService(db).enabled()


@router.get("/links/bio")
def bio_profile(db: Session = Depends(get_db)):
    return BioLinksService(db).profile().model_dump(mode="json", by_alias=True)


@router.get("/search")
def search(q: str = Query(default=""), limit: int = Query(default=50, ge=1, le=200), db: Session = Depends(get_db)):
    return {"query": q, "results": SearchService(db).search(q, limit)}


@router.post("/render")
def render(payload: Any = Body(...)):
    """Render a posted block list (or ``{"blocks": [...]}``) to HTML."""
    blocks = payload.get("blocks") if isinstance(payload, dict) else payload
    if not isinstance(blocks, list):
        raise HTTPException(status_code=400, detail="Expected a list of blocks")
    return {"html": render_blocks(blocks)}
