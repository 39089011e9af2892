from __future__ import annotations

import logging
from typing import Any, Callable, Dict, TypeVar

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..auth import require_admin_token
from ..db import get_db
from ..schemas.posts import ArticleIn, ArticleOut, NewsIn, NewsOut
from ..schemas.links import BioLinkIn
from ..schemas.project import ProjectIn, ProjectOut
from ..schemas.taxonomy import CATEGORY_TYPES, CategoryIn, CategoryOut, CollaboratorIn, CollaboratorOut
from ..schemas.tutorial import TutorialIn, TutorialOut
from ..services.admin_service import AdminService
from ..services.article_service import ArticleService
from ..services.auth_service import AuthService
from ..services.category_service import CategoryService
from ..services.collaborator_service import CollaboratorService
from ..services.links_service import BioLinksService
from ..services.news_service import NewsService
from ..services.project_service import ProjectService
from ..services.settings_store import SiteSettingsStore
from ..services.tutorial_service import TutorialService
from ..utils.cache import invalidate_generated


logger = logging.getLogger(__name__)

router = APIRouter()
protected = APIRouter(dependencies=[Depends(require_admin_token)])

T = TypeVar("T")


def _call(fn: Callable[..., T], *args: Any) -> T:
    """Run a service call, mapping service errors to HTTP errors."""
    try:
        return fn(*args)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


def _changed(result: T) -> T:
    invalidate_generated()
    return result


def _found(obj: T, what: str) -> T:
    if obj is None:
        raise HTTPException(status_code=404, detail=f"{what} not found")
    return obj


@router.post("/login")
def login(payload: Dict[str, Any] = Body(...)):
    auth = AuthService()
    token = auth.login(str(payload.get("password") or ""))
    if not token:
        raise HTTPException(status_code=401, detail="Invalid password")
    return {"token": token, "expiresIn": auth.ttl_seconds}


@protected.get("/stats")
def stats(db: Session = Depends(get_db)):
    return AdminService(db).stats()


# projects

@protected.get("/projects")
def admin_projects(db: Session = Depends(get_db)):
    return [ProjectOut.model_validate(p) for p in ProjectService(db).admin_list()]


@protected.get("/projects/{project_id}")
def admin_project(project_id: str, db: Session = Depends(get_db)):
    return ProjectOut.model_validate(_found(ProjectService(db).get(project_id), "project"))


@protected.post("/projects", status_code=201)
def create_project(data: ProjectIn, db: Session = Depends(get_db)):
    return ProjectOut.model_validate(_changed(_call(ProjectService(db).create, data)))


@protected.put("/projects/{project_id}")
def update_project(project_id: str, data: ProjectIn, db: Session = Depends(get_db)):
    return ProjectOut.model_validate(_changed(_call(ProjectService(db).update, project_id, data)))


@protected.delete("/projects/{project_id}")
def delete_project(project_id: str, db: Session = Depends(get_db)):
    _changed(_call(ProjectService(db).delete, project_id))
    return {"ok": True}


# articles

@protected.get("/posts")
def admin_posts(db: Session = Depends(get_db)):
    return [ArticleOut.model_validate(a) for a in ArticleService(db).admin_list()]


@protected.get("/posts/{article_id}")
def admin_post(article_id: str, db: Session = Depends(get_db)):
    return ArticleOut.model_validate(_found(ArticleService(db).get(article_id), "article"))


@protected.post("/posts", status_code=201)
def create_post(data: ArticleIn, db: Session = Depends(get_db)):
    return ArticleOut.model_validate(_changed(_call(ArticleService(db).create, data)))


@protected.put("/posts/{article_id}")
def update_post(article_id: str, data: ArticleIn, db: Session = Depends(get_db)):
    return ArticleOut.model_validate(_changed(_call(ArticleService(db).update, article_id, data)))


@protected.delete("/posts/{article_id}")
def delete_post(article_id: str, db: Session = Depends(get_db)):
    _changed(_call(ArticleService(db).delete, article_id))
    return {"ok": True}


# news

@protected.get("/news")
def admin_news(db: Session = Depends(get_db)):
    return [NewsOut.model_validate(n) for n in NewsService(db).admin_list()]


@protected.get("/news/{news_id}")
def admin_news_item(news_id: str, db: Session = Depends(get_db)):
    return NewsOut.model_validate(_found(NewsService(db).get(news_id), "news item"))


@protected.post("/news", status_code=201)
def create_news(data: NewsIn, db: Session = Depends(get_db)):
    return NewsOut.model_validate(_changed(_call(NewsService(db).create, data)))


@protected.put("/news/{news_id}")
def update_news(news_id: str, data: NewsIn, db: Session = Depends(get_db)):
    return NewsOut.model_validate(_changed(_call(NewsService(db).update, news_id, data)))


@protected.delete("/news/{news_id}")
def delete_news(news_id: str, db: Session = Depends(get_db)):
    _changed(_call(NewsService(db).delete, news_id))
    return {"ok": True}


# tutorials

@protected.get("/tutorials")
def admin_tutorials(db: Session = Depends(get_db)):
    return [TutorialOut.model_validate(t) for t in TutorialService(db).admin_list()]


@protected.post("/tutorials", status_code=201)
def create_tutorial(data: TutorialIn, db: Session = Depends(get_db)):
    return TutorialOut.model_validate(_changed(_call(TutorialService(db).create, data)))


@protected.put("/tutorials/{tutorial_id}")
def update_tutorial(tutorial_id: str, data: TutorialIn, db: Session = Depends(get_db)):
    return TutorialOut.model_validate(_changed(_call(TutorialService(db).update, tutorial_id, data)))


@protected.delete("/tutorials/{tutorial_id}")
def delete_tutorial(tutorial_id: str, db: Session = Depends(get_db)):
    _changed(_call(TutorialService(db).delete, tutorial_id))
    return {"ok": True}


# categories

@protected.get("/categories")
def admin_categories(db: Session = Depends(get_db)):
    grouped = CategoryService(db).grouped()
    return {t: [CategoryOut.model_validate(c) for c in grouped[t]] for t in CATEGORY_TYPES}


@protected.post("/categories/{category_type}", status_code=201)
def create_category(category_type: str, data: CategoryIn, db: Session = Depends(get_db)):
    return CategoryOut.model_validate(_call(CategoryService(db).create, category_type, data))


@protected.put("/categories/{category_type}/{category_id}")
def update_category(category_type: str, category_id: int, data: CategoryIn, db: Session = Depends(get_db)):
    return CategoryOut.model_validate(_call(CategoryService(db).update, category_id, data))


@protected.delete("/categories/{category_type}/{category_id}")
def delete_category(category_type: str, category_id: int, db: Session = Depends(get_db)):
    _call(CategoryService(db).delete, category_id)
    return {"ok": True}


# collaborators

@protected.get("/collaborators")
def admin_collaborators(db: Session = Depends(get_db)):
    return [CollaboratorOut.model_validate(c) for c in CollaboratorService(db).list()]


@protected.post("/collaborators", status_code=201)
def create_collaborator(data: CollaboratorIn, db: Session = Depends(get_db)):
    return CollaboratorOut.model_validate(_call(CollaboratorService(db).create, data))


@protected.put("/collaborators/{collaborator_id}")
def update_collaborator(collaborator_id: int, data: CollaboratorIn, db: Session = Depends(get_db)):
    return CollaboratorOut.model_validate(_call(CollaboratorService(db).update, collaborator_id, data))


@protected.delete("/collaborators/{collaborator_id}")
def delete_collaborator(collaborator_id: int, db: Session = Depends(get_db)):
    _call(CollaboratorService(db).delete, collaborator_id)
    return {"ok": True}


# settings

@protected.get("/settings")
def admin_settings(db: Session = Depends(get_db)):
    return SiteSettingsStore(db).load().model_dump(mode="json", by_alias=True)


@protected.put("/settings")
def update_settings(values: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    updated = _call(SiteSettingsStore(db).update, values)
    return updated.model_dump(mode="json", by_alias=True)


# link-in-bio

@protected.get("/links")
def admin_links(db: Session = Depends(get_db)):
    return BioLinksService(db).all()


@protected.post("/links", status_code=201)
def create_link(data: BioLinkIn, db: Session = Depends(get_db)):
    return _call(BioLinksService(db).add, data)


@protected.put("/links/bio")
def update_bio_profile(values: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    updated = _call(BioLinksService(db).update_profile, values)
    return updated.model_dump(mode="json", by_alias=True)


@protected.put("/links/{link_id}")
def update_link(link_id: str, data: BioLinkIn, db: Session = Depends(get_db)):
    return _call(BioLinksService(db).update, link_id, data)


@protected.delete("/links/{link_id}")
def delete_link(link_id: str, db: Session = Depends(get_db)):
    _call(BioLinksService(db).delete, link_id)
    return {"ok": True}


router.include_router(protected)
