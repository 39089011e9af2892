from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from ..content.legacy import render_body, table_of_contents
from ..content.renderer import render_blocks
from ..db import get_db
from ..navigation.routes import (
    AgencyCategory,
    Article,
    Articles,
    Home,
    NewsArticle,
    NewsList,
    NotFound,
    Portfolio,
    Project,
    Search,
    StaticPage,
    Tutorial,
    View,
    fallback_view,
    legacy_redirect,
    resolve_url,
)
from ..schemas.links import BioProfile
from ..schemas.settings import SiteSettings
from ..services.article_service import ArticleService
from ..services.category_service import CategoryService
from ..services.collaborator_service import CollaboratorService
from ..services.contact_service import ContactService
from ..services.links_service import BioLinksService
from ..services.news_service import NewsService
from ..services.project_service import ProjectService
from ..services.search_service import SearchService
from ..services.settings_store import THEME_COOKIE, SiteSettingsStore, resolve_theme
from ..services.tutorial_service import TutorialService
from ..utils.fetch import fetch_or_fallback
from ..utils.static_data import load_site_data


logger = logging.getLogger(__name__)
router = APIRouter()

T = TypeVar("T")
Rendered = Tuple[str, Dict[str, Any]]

STUDIO_PAGES = ("studio", "scenic-studio")
THEME_MAX_AGE = 60 * 60 * 24 * 365


class PageData:
    """Loads page data through the fallback policy and remembers if any load failed."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.degraded = False

    def load(self, loader: Callable[[], T], fallback: T, what: str) -> T:
        result = fetch_or_fallback(loader, fallback, what)
        if result.used_fallback:
            self.degraded = True
            self.db.rollback()
        return result.value


def _home(data: PageData, view: Home) -> Rendered:
    db = data.db
    return "pages/home.html", {
        "featured": data.load(lambda: ProjectService(db).list_published(featured=True, limit=6), [], "featured projects"),
        "articles": data.load(lambda: ArticleService(db).list_published(limit=3), [], "latest articles"),
        "news": data.load(lambda: NewsService(db).list_for_site(limit=3), [], "latest news"),
    }


def _portfolio(data: PageData, view: Portfolio) -> Rendered:
    db = data.db
    categories = data.load(lambda: CategoryService(db).list_by_type("portfolio"), [], "portfolio categories")
    category_name = None
    if view.filter:
        category_name = next((c.name for c in categories if c.slug == view.filter), view.filter)
    projects = data.load(
        lambda: ProjectService(db).list_published(category=category_name, tag=view.tag), [], "projects"
    )
    return "pages/portfolio.html", {"projects": projects, "categories": categories, "active_category": category_name}


def _project(data: PageData, view: Project) -> Optional[Rendered]:
    if not view.slug:
        return None
    service = ProjectService(data.db)
    project = data.load(lambda: service.get_by_slug(view.slug), None, f"project {view.slug}")
    if project is None:
        return None
    return "pages/project.html", {
        "project": project,
        "body_html": render_blocks(project.content),
        "related": data.load(lambda: service.related(project), [], "related projects"),
    }


def _articles(data: PageData, view: Articles) -> Rendered:
    db = data.db
    return "pages/articles.html", {
        "articles": data.load(
            lambda: ArticleService(db).list_published(category=view.category, tag=view.tag), [], "articles"
        ),
        "categories": data.load(lambda: CategoryService(db).list_by_type("articles"), [], "article categories"),
    }


def _article(data: PageData, view: Article) -> Optional[Rendered]:
    if not view.slug:
        return None
    service = ArticleService(data.db)
    article = data.load(lambda: service.get_by_slug(view.slug), None, f"article {view.slug}")
    if article is None:
        return None
    return "pages/article.html", {
        "article": article,
        "body_html": render_body(article.content, drop_cap=True),
        "toc": table_of_contents(article.content),
        "related": data.load(
            lambda: service.related(article.category, article.tags, exclude_id=article.id), [], "related articles"
        ),
    }


def _tutorial(data: PageData, view: Tutorial) -> Optional[Rendered]:
    if not view.slug:
        return None
    service = TutorialService(data.db)
    tutorial = data.load(lambda: service.get_by_slug(view.slug), None, f"tutorial {view.slug}")
    if tutorial is None:
        return None
    return "pages/tutorial.html", {
        "tutorial": tutorial,
        "body_html": render_blocks(tutorial.content),
        "related": data.load(lambda: service.related(tutorial), [], "related tutorials"),
    }


def _news_list(data: PageData, view: NewsList) -> Rendered:
    return "pages/news.html", {"news": data.load(lambda: NewsService(data.db).list_for_site(), [], "news")}


def _news_article(data: PageData, view: NewsArticle) -> Optional[Rendered]:
    if not view.slug:
        return None
    item = data.load(lambda: NewsService(data.db).get_by_id_or_slug(view.slug), None, f"news {view.slug}")
    if item is None:
        return None
    return "pages/news_article.html", {"item": item, "body_html": render_body(item.content)}


def _agency(data: PageData, view: AgencyCategory) -> Optional[Rendered]:
    service = ProjectService(data.db)
    project = None
    if view.slug:
        project = data.load(lambda: service.get_by_slug(view.slug), None, f"project {view.slug}")
        if project is None:
            return None
    projects = data.load(lambda: service.list_published(category=view.category), [], f"{view.category} projects")
    return "pages/agency.html", {
        "category": view.category,
        "projects": projects,
        "project": project,
        "body_html": render_blocks(project.content) if project else "",
    }


def _search(data: PageData, view: Search) -> Rendered:
    return "pages/search.html", {
        "query": view.query or "",
        "results": data.load(lambda: SearchService(data.db).search(view.query), [], "search results"),
    }


def _static(data: PageData, view: StaticPage) -> Rendered:
    db = data.db
    if view.name in STUDIO_PAGES:
        service = TutorialService(db)
        return "pages/studio.html", {
            "tutorials": data.load(service.list_published, [], "tutorials"),
            "tutorial_categories": data.load(service.categories, [], "tutorial categories"),
        }
    if view.name == "collaborators":
        return "pages/collaborators.html", {
            "collaborators": data.load(lambda: CollaboratorService(db).list(), [], "collaborators")
        }
    if view.name == "contact":
        return "pages/contact.html", {"contact": None, "form": {}}
    if view.name == "links":
        bio = BioLinksService(db)
        return "pages/links.html", {
            "profile": data.load(bio.profile, BioProfile(), "bio profile"),
            "links": data.load(bio.enabled, [], "bio links"),
        }
    if view.name == "cv":
        return "pages/cv.html", {}
    if view.name == "faq":
        return "pages/faq.html", {"faq": load_site_data().faq}
    return "pages/page.html", {"name": view.name}


HANDLERS: Dict[type, Callable[[PageData, Any], Optional[Rendered]]] = {
    Home: _home,
    Portfolio: _portfolio,
    Project: _project,
    Articles: _articles,
    Article: _article,
    Tutorial: _tutorial,
    NewsList: _news_list,
    NewsArticle: _news_article,
    AgencyCategory: _agency,
    Search: _search,
    StaticPage: _static,
}


def render_view(data: PageData, view: View) -> Optional[Rendered]:
    """Template and context for ``view``, or None when its record is missing."""
    handler = HANDLERS.get(type(view))
    if handler is None:
        return None
    return handler(data, view)


def base_context(request: Request, data: PageData, view: View) -> Dict[str, Any]:
    site_settings = data.load(lambda: SiteSettingsStore(data.db).load(), SiteSettings(), "site settings")
    return {
        "view": view,
        "state": view.state,
        "settings": site_settings,
        "theme": resolve_theme(request.cookies.get(THEME_COOKIE), site_settings.default_theme),
        "meta": load_site_data().page_meta(view.page),
    }


def _respond(request: Request, data: PageData, view: View, template: str, extra: Dict[str, Any], status_code: int = 200):
    templates = request.app.state.templates
    context = base_context(request, data, view)
    context.update(extra)
    context["degraded"] = data.degraded
    return templates.TemplateResponse(request, template, context, status_code=status_code)


@router.post("/theme")
def set_theme(theme: str = Form(...), next: str = Form("/")):
    target = next if next.startswith("/") and not next.startswith("//") else "/"
    response = RedirectResponse(url=target, status_code=303)
    response.set_cookie(THEME_COOKIE, resolve_theme(theme), max_age=THEME_MAX_AGE, samesite="lax")
    return response


@router.post("/contact")
def submit_contact(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    subject: str = Form(""),
    production: str = Form(""),
    message: str = Form(""),
    db: Session = Depends(get_db),
):
    form = {"name": name, "email": email, "subject": subject, "production": production, "message": message}
    result = ContactService().submit(form)
    data = PageData(db)
    return _respond(
        request,
        data,
        StaticPage("contact"),
        "pages/contact.html",
        {"contact": result, "form": {} if result.success else form},
        status_code=200 if result.success else 400,
    )


@router.get("/{path:path}")
def page(path: str, request: Request, db: Session = Depends(get_db)):
    query = request.url.query
    target = legacy_redirect(f"/{path}", query)
    if target:
        return RedirectResponse(url=target, status_code=308)
    if path == "api" or path.startswith("api/"):
        raise HTTPException(status_code=404, detail="Not found")

    view = resolve_url(f"/{path}" + (f"?{query}" if query else ""))
    data = PageData(db)
    rendered = render_view(data, view)
    if rendered is None and not isinstance(view, NotFound):
        parent = fallback_view(view)
        if parent != view:
            logger.info("nothing to show for %s, falling back to %s", view, parent)
            view = parent
            rendered = render_view(data, view)
    if rendered is None:
        return _respond(request, data, NotFound(), "pages/not_found.html", {}, status_code=404)
    template, extra = rendered
    return _respond(request, data, view, template, extra)
