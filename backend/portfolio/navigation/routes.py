"""Route model for the public site.

A route string such as ``project/my-show`` or ``portfolio?filter=scenic`` is
parsed into exactly one :class:`View` variant. Each variant carries only its
own payload, so a view can never hold two slugs at once. ``view_path`` and
``build_path`` go the other way and produce the URL that is pushed to history.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlencode


AGENCY_CATEGORIES = ("experiential-design", "rendering", "scenic-models")
ARTICLE_PREFIXES = ("scenic-insights", "articles")
TUTORIAL_PREFIXES = ("scenic-studio", "tutorial", "tutorials")

# pages rendered without any payload
STATIC_PAGES = (
    "about",
    "creative-statement",
    "cv",
    "collaborators",
    "teaching-philosophy",
    "contact",
    "studio",
    "scenic-studio",
    "scenic-vault",
    "app-studio",
    "resources",
    "architecture-scale-converter",
    "dimension-reference",
    "model-reference-scaler",
    "design-history-timeline",
    "classical-architecture-guide",
    "rosco-paint-calculator",
    "commercial-paint-finder",
    "admin",
    "links",
    "faq",
    "privacy-policy",
    "accessibility",
    "terms-of-use",
    "sitemap",
    "directory",
)

KNOWN_PAGES = frozenset(
    (
        "home",
        "portfolio",
        "news",
        "search",
        "project",
        "blog",
        "tutorial",
        "tutorials",
        *ARTICLE_PREFIXES,
        *AGENCY_CATEGORIES,
        *STATIC_PAGES,
    )
)


@dataclass(frozen=True)
class RouteState:
    """Flat projection of a view, one field per piece of router state."""

    page: str
    project_slug: Optional[str] = None
    blog_slug: Optional[str] = None
    tutorial_slug: Optional[str] = None
    news_slug: Optional[str] = None
    filter: Optional[str] = None
    tag: Optional[str] = None
    category: Optional[str] = None
    query: Optional[str] = None

    def slugs(self) -> Tuple[Optional[str], ...]:
        return (self.project_slug, self.blog_slug, self.tutorial_slug, self.news_slug)


class View:
    page: ClassVar[str] = "home"

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page)

    @property
    def slug(self) -> Optional[str]:
        return None


@dataclass(frozen=True)
class Home(View):
    page: ClassVar[str] = "home"


@dataclass(frozen=True)
class StaticPage(View):
    name: str

    @property
    def page(self) -> str:  # type: ignore[override]
        return self.name

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.name)


@dataclass(frozen=True)
class Portfolio(View):
    page: ClassVar[str] = "portfolio"
    filter: Optional[str] = None
    tag: Optional[str] = None

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page, filter=self.filter, tag=self.tag)


@dataclass(frozen=True)
class Articles(View):
    category: Optional[str] = None
    tag: Optional[str] = None
    # "articles" or the older "scenic-insights"; both show the same list
    alias: str = field(default="articles", compare=False)

    @property
    def page(self) -> str:  # type: ignore[override]
        return self.alias

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.alias, category=self.category, tag=self.tag)


@dataclass(frozen=True)
class Article(View):
    page: ClassVar[str] = "blog"
    slug: Optional[str] = None  # type: ignore[assignment]

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page, blog_slug=self.slug)


@dataclass(frozen=True)
class Tutorial(View):
    slug: Optional[str] = None  # type: ignore[assignment]
    # a bare "tutorials" route keeps its own page id
    alias: str = field(default="tutorial", compare=False)

    @property
    def page(self) -> str:  # type: ignore[override]
        return self.alias

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.alias, tutorial_slug=self.slug)


@dataclass(frozen=True)
class NewsList(View):
    page: ClassVar[str] = "news"


@dataclass(frozen=True)
class NewsArticle(View):
    page: ClassVar[str] = "news-article"
    slug: Optional[str] = None  # type: ignore[assignment]

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page, news_slug=self.slug)


@dataclass(frozen=True)
class Project(View):
    page: ClassVar[str] = "project"
    slug: Optional[str] = None  # type: ignore[assignment]

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page, project_slug=self.slug)


@dataclass(frozen=True)
class AgencyCategory(View):
    category: str
    slug: Optional[str] = None  # type: ignore[assignment]

    @property
    def page(self) -> str:  # type: ignore[override]
        return self.category

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.category, project_slug=self.slug)


@dataclass(frozen=True)
class Search(View):
    page: ClassVar[str] = "search"
    query: Optional[str] = None

    @property
    def state(self) -> RouteState:
        return RouteState(page=self.page, query=self.query)


@dataclass(frozen=True)
class NotFound(View):
    page: ClassVar[str] = "404"


def _split_query(route: str) -> Tuple[str, Dict[str, str]]:
    if "?" not in route:
        return route, {}
    base, query_string = route.split("?", 1)
    params: Dict[str, str] = {}
    for key, value in parse_qsl(query_string, keep_blank_values=True):
        params[key] = value
    return base, params


def _none_if_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value or None


def _parse_nested(base: str) -> View:
    parts = base.split("/")
    prefix = parts[0]
    slug = _none_if_blank(parts[-1])

    if prefix == "project":
        return Project(slug)
    if prefix in ARTICLE_PREFIXES:
        return Article(slug)
    if prefix in TUTORIAL_PREFIXES:
        return Tutorial(slug)
    if prefix == "studio" and len(parts) > 2 and parts[1] == "tutorial":
        return Tutorial(slug)
    if prefix == "news":
        return NewsArticle(slug)
    if prefix in AGENCY_CATEGORIES:
        return AgencyCategory(prefix, slug)
    # "about/" is the about page with a trailing slash
    if len(parts) == 2 and parts[1] == "" and prefix in KNOWN_PAGES:
        return _parse_page(prefix, {}, None)
    return NotFound()


def _parse_page(page: str, params: Dict[str, str], arg: Optional[str]) -> View:
    if page not in KNOWN_PAGES:
        return NotFound()
    if page == "home":
        return Home()
    if page == "portfolio":
        return Portfolio(
            filter=_none_if_blank(params.get("filter")) or _none_if_blank(arg),
            tag=_none_if_blank(params.get("tag")),
        )
    if page in ARTICLE_PREFIXES:
        if arg:
            return Article(arg)
        return Articles(
            category=_none_if_blank(params.get("category")),
            tag=_none_if_blank(params.get("tag")),
            alias=page,
        )
    if page == "news":
        return NewsArticle(arg) if arg else NewsList()
    if page == "search":
        return Search(_none_if_blank(params.get("q")) or _none_if_blank(arg))
    if page in AGENCY_CATEGORIES:
        return AgencyCategory(page, _none_if_blank(arg))
    if page == "project":
        return Project(None)
    if page == "blog":
        return Article(None)
    if page in ("tutorial", "tutorials"):
        return Tutorial(None, alias=page)
    return StaticPage(page)


def parse_route(route: str, arg: Optional[str] = None) -> View:
    """Map a route string (no leading slash) plus an optional argument to a view.

    ``arg`` is the second navigation argument of the site's link helpers: a
    portfolio filter, an article slug, a news slug, a search query or an
    agency project slug depending on the page.
    """
    base, params = _split_query(route or "")
    if "?" in (route or ""):
        base = base or "home"
    if not base:
        return Home()
    if "/" in base:
        return _parse_nested(base)
    return _parse_page(base, params, arg)


def resolve_url(url: str) -> View:
    """Parse a full URL path (``/portfolio?filter=x``) the way history pops do."""
    path, _, query = url.partition("?")
    route = path[1:] if path.startswith("/") else path
    if not route and not query:
        return Home()
    return parse_route(route + (f"?{query}" if query else ""))


def build_path(page: str, arg: Optional[str] = None) -> str:
    """URL pushed to history when navigating to ``page`` with ``arg``."""
    if page == "home":
        return "/"
    if arg and "?" not in page:
        if page == "portfolio":
            return f"/portfolio?filter={arg}"
        if page in ARTICLE_PREFIXES:
            return f"/articles?category={arg}"
        if page == "search":
            return f"/search?q={quote(arg, safe='')}"
        if page == "news":
            return f"/news/{arg}"
        if page in AGENCY_CATEGORIES:
            return f"/{page}/{arg}"
    return page if page.startswith("/") else f"/{page}"


def _with_query(path: str, params: Dict[str, Optional[str]]) -> str:
    clean = {k: v for k, v in params.items() if v}
    if not clean:
        return path
    return f"{path}?{urlencode(clean)}"


def view_path(view: View) -> str:
    """Canonical URL of a view."""
    if isinstance(view, Home):
        return "/"
    if isinstance(view, Portfolio):
        return _with_query("/portfolio", {"filter": view.filter, "tag": view.tag})
    if isinstance(view, Articles):
        return _with_query("/articles", {"category": view.category, "tag": view.tag})
    if isinstance(view, Article):
        return f"/articles/{quote(view.slug)}" if view.slug else "/articles"
    if isinstance(view, Tutorial):
        return f"/scenic-studio/{quote(view.slug)}" if view.slug else "/studio"
    if isinstance(view, NewsList):
        return "/news"
    if isinstance(view, NewsArticle):
        return f"/news/{quote(view.slug)}" if view.slug else "/news"
    if isinstance(view, Project):
        return f"/project/{quote(view.slug)}" if view.slug else "/portfolio"
    if isinstance(view, AgencyCategory):
        if view.slug:
            return f"/{view.category}/{quote(view.slug)}"
        return f"/{view.category}"
    if isinstance(view, Search):
        return _with_query("/search", {"q": view.query})
    if isinstance(view, StaticPage):
        return f"/{view.name}"
    return "/404"


def fallback_view(view: View) -> View:
    """The slug-less parent shown when a slug has nothing to render."""
    if isinstance(view, Project):
        return Portfolio()
    if isinstance(view, Article):
        return Articles()
    if isinstance(view, Tutorial):
        return StaticPage("studio")
    if isinstance(view, NewsArticle):
        return NewsList()
    if isinstance(view, AgencyCategory) and view.slug:
        return AgencyCategory(view.category)
    return view


def legacy_redirect(path: str, query: str = "") -> Optional[str]:
    """Location for retired URL shapes, or None when ``path`` is current."""
    suffix = f"?{query}" if query else ""
    if path.startswith("/scenic-insights"):
        return "/articles" + path[len("/scenic-insights"):] + suffix
    if path.startswith("/tag/"):
        tag_name = path[len("/tag/"):].strip("/")
        if tag_name:
            return f"/articles?tag={quote(tag_name, safe='')}"
    return None
