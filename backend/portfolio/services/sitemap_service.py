from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from email.utils import format_datetime
from typing import Any, Callable, Iterable, List, Optional
from xml.sax.saxutils import escape

from sqlalchemy.orm import Session

from ..config import settings
from ..models import Project as ProjectRow
from ..navigation.routes import Article, NewsArticle, Project, Tutorial, view_path
from ..utils.cache import IMAGE_SITEMAP_KEY, RSS_KEY, SITEMAP_KEY, VIDEO_SITEMAP_KEY, cache_get_text, cache_set_json
from .article_service import ArticleService
from .news_service import NewsService
from .project_service import ProjectService
from .tutorial_service import TutorialService


logger = logging.getLogger(__name__)

XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# (path, changefreq, priority)
STATIC_PAGES = (
    ("/", "weekly", 1.0),
    ("/portfolio", "weekly", 0.9),
    ("/about", "monthly", 0.8),
    ("/resources", "weekly", 0.9),
    ("/contact", "monthly", 0.7),
)
PORTFOLIO_FILTERS = ("scenic", "experiential", "rendering", "documentation")
RESOURCE_PAGES = (
    "/experiential-design",
    "/rendering",
    "/scenic-models",
    "/directory",
    "/articles",
    "/studio",
    "/scenic-studio",
    "/app-studio",
    "/scenic-vault",
    "/architecture-scale-converter",
    "/dimension-reference",
    "/model-reference-scaler",
    "/rosco-paint-calculator",
    "/commercial-paint-finder",
    "/classical-architecture-guide",
    "/design-history-timeline",
)
INFO_PAGES = (
    "/news",
    "/cv",
    "/collaborators",
    "/creative-statement",
    "/teaching-philosophy",
    "/faq",
    "/links",
    "/sitemap",
    "/privacy-policy",
    "/terms-of-use",
    "/accessibility",
)


def xml_escape(value: Any) -> str:
    return escape(str(value or ""), XML_ENTITIES)


@dataclass
class SitemapUrl:
    loc: str
    lastmod: Optional[str] = None
    changefreq: str = "monthly"
    priority: float = 0.5


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _image_url(item: Any) -> Optional[str]:
    if isinstance(item, dict):
        item = item.get("url") or item.get("src")
    if isinstance(item, str) and len(item) > 5:
        return item
    return None


def collect_project_images(project: ProjectRow) -> List[str]:
    """Every distinct image URL a project page shows, in display order."""
    galleries = project.galleries or {}
    candidates: List[Any] = [project.cover_image, project.card_image, project.hero_image]
    candidates += _as_list(project.production_photos)
    candidates += _as_list(project.images)
    for key in ("hero", "process", "models"):
        candidates += _as_list(galleries.get(key))
    seen: List[str] = []
    for candidate in candidates:
        url = _image_url(candidate)
        if url and url not in seen:
            seen.append(url)
    return seen


def _day(value: Any) -> Optional[str]:
    if isinstance(value, dt.datetime):
        return value.date().isoformat()
    if isinstance(value, dt.date):
        return value.isoformat()
    return None


def _rfc822(value: Any) -> str:
    if isinstance(value, dt.datetime):
        moment = value
    elif isinstance(value, dt.date):
        moment = dt.datetime(value.year, value.month, value.day)
    else:
        moment = dt.datetime.now(dt.timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return format_datetime(moment)


class SitemapService:
    def __init__(self, db: Session, site_url: Optional[str] = None) -> None:
        self.db = db
        self.site_url = (site_url or settings.SITE_URL).rstrip("/")

    def _abs(self, path: str) -> str:
        return f"{self.site_url}{path}"

    def _cached(self, key: str, build: Callable[[], str], use_cache: bool) -> str:
        if use_cache:
            hit = cache_get_text(key)
            if hit:
                return hit
        body = build()
        if use_cache:
            cache_set_json(key, body, settings.SITEMAP_CACHE_TTL_SECONDS)
        return body

    def page_urls(self) -> List[SitemapUrl]:
        today = dt.date.today().isoformat()
        urls = [SitemapUrl(self._abs(path), today, freq, prio) for path, freq, prio in STATIC_PAGES]
        urls += [SitemapUrl(self._abs(f"/portfolio?filter={f}"), today, "weekly", 0.8) for f in PORTFOLIO_FILTERS]
        urls += [SitemapUrl(self._abs(path), today, "weekly", 0.8) for path in RESOURCE_PAGES]
        urls += [SitemapUrl(self._abs(path), today, "monthly", 0.6) for path in INFO_PAGES]

        for project in ProjectService(self.db).list_published():
            urls.append(SitemapUrl(self._abs(view_path(Project(project.slug))), _day(project.updated_at), "monthly", 0.8))
        for article in ArticleService(self.db).list_published():
            urls.append(SitemapUrl(self._abs(view_path(Article(article.slug))), _day(article.updated_at), "monthly", 0.7))
        for news in NewsService(self.db).list_for_site():
            urls.append(SitemapUrl(self._abs(view_path(NewsArticle(news.slug or news.id))), _day(news.date), "yearly", 0.5))
        for tutorial in TutorialService(self.db).list_published():
            urls.append(SitemapUrl(self._abs(view_path(Tutorial(tutorial.slug))), _day(tutorial.publish_date), "monthly", 0.7))
        return urls

    def sitemap_xml(self, use_cache: bool = True) -> str:
        return self._cached(SITEMAP_KEY, self._build_sitemap, use_cache)

    def _build_sitemap(self) -> str:
        entries = []
        for url in self.page_urls():
            lastmod = f"\n    <lastmod>{url.lastmod}</lastmod>" if url.lastmod else ""
            entries.append(
                f"  <url>\n    <loc>{xml_escape(url.loc)}</loc>{lastmod}\n"
                f"    <changefreq>{url.changefreq}</changefreq>\n"
                f"    <priority>{url.priority:.1f}</priority>\n  </url>"
            )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
            + "\n".join(entries)
            + "\n</urlset>\n"
        )

    def image_sitemap_xml(self, use_cache: bool = True) -> str:
        return self._cached(IMAGE_SITEMAP_KEY, self._build_image_sitemap, use_cache)

    def _image_entry(self, loc: str, title: str, images: Iterable[str]) -> str:
        tags = "".join(
            f"\n    <image:image>\n      <image:loc>{xml_escape(img)}</image:loc>\n"
            f"      <image:title>{xml_escape(title)}</image:title>\n    </image:image>"
            for img in images
        )
        return f"  <url>\n    <loc>{xml_escape(loc)}</loc>{tags}\n  </url>"

    def _build_image_sitemap(self) -> str:
        entries = []
        for project in ProjectService(self.db).list_published():
            images = collect_project_images(project)
            if images:
                loc = self._abs(view_path(Project(project.slug)))
                entries.append(self._image_entry(loc, project.title or "Project", images))
        for tutorial in TutorialService(self.db).list_published():
            if tutorial.thumbnail:
                loc = self._abs(view_path(Tutorial(tutorial.slug)))
                entries.append(self._image_entry(loc, tutorial.title, [tutorial.thumbnail]))
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"\n'
            '  xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">\n'
            + "\n".join(entries)
            + "\n</urlset>\n"
        )

    def video_sitemap_xml(self, use_cache: bool = True) -> str:
        return self._cached(VIDEO_SITEMAP_KEY, self._build_video_sitemap, use_cache)

    def _build_video_sitemap(self) -> str:
        entries = []
        for project in ProjectService(self.db).list_published():
            videos = [url for url in project.video_urls or [] if isinstance(url, str) and len(url) > 5]
            if not videos:
                continue
            title = xml_escape(project.title or "Project Video")
            description = xml_escape(project.description or "Project video")
            tags = []
            for url in videos:
                if "youtube.com" in url or "youtu.be" in url:
                    player = f'<video:player_loc allow_embed="yes">{xml_escape(url)}</video:player_loc>'
                else:
                    player = f"<video:content_loc>{xml_escape(url)}</video:content_loc>"
                tags.append(
                    f"\n    <video:video>\n      <video:title>{title}</video:title>\n"
                    f"      <video:description>{description}</video:description>\n      {player}\n    </video:video>"
                )
            loc = self._abs(view_path(Project(project.slug)))
            entries.append(f"  <url>\n    <loc>{xml_escape(loc)}</loc>{''.join(tags)}\n  </url>")
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"\n'
            '  xmlns:video="http://www.google.com/schemas/sitemap-video/1.1">\n'
            + "\n".join(entries)
            + "\n</urlset>\n"
        )

    def rss_xml(self, use_cache: bool = True) -> str:
        return self._cached(RSS_KEY, self._build_rss, use_cache)

    def _build_rss(self, limit: int = 50) -> str:
        items = []
        for article in ArticleService(self.db).list_published():
            items.append((article.date or article.created_at, article.title, view_path(Article(article.slug)), article.excerpt, "Article"))
        for news in NewsService(self.db).list_for_site():
            items.append((news.date, news.title, view_path(NewsArticle(news.slug or news.id)), news.excerpt or f"News update: {news.title}", "News"))
        for project in ProjectService(self.db).list_published():
            items.append((project.created_at, project.title, view_path(Project(project.slug)), project.description or f"New Project: {project.title}", "Project"))

        def sort_key(item):
            moment = item[0]
            if isinstance(moment, dt.datetime):
                return moment.replace(tzinfo=None)
            if isinstance(moment, dt.date):
                return dt.datetime(moment.year, moment.month, moment.day)
            return dt.datetime.min

        items.sort(key=sort_key, reverse=True)
        rendered = []
        for moment, title, path, description, category in items[:limit]:
            link = self._abs(path)
            rendered.append(
                "    <item>\n"
                f"      <title>{xml_escape(title)}</title>\n"
                f"      <link>{xml_escape(link)}</link>\n"
                f"      <guid>{xml_escape(link)}</guid>\n"
                f"      <description>{xml_escape(description)}</description>\n"
                f"      <category>{category}</category>\n"
                f"      <pubDate>{_rfc822(moment)}</pubDate>\n"
                "    </item>"
            )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">\n'
            "  <channel>\n"
            f"    <title>{xml_escape(settings.SITE_NAME)}</title>\n"
            f"    <link>{xml_escape(self.site_url)}</link>\n"
            "    <description>Articles, news and projects</description>\n"
            f'    <atom:link href="{xml_escape(self._abs("/rss.xml"))}" rel="self" type="application/rss+xml" />\n'
            + "\n".join(rendered)
            + "\n  </channel>\n</rss>\n"
        )
