from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from .config import settings
import logging
import time
import uuid
from .content.legacy import render_body
from .schemas.settings import SiteSettings
from .services.settings_store import THEME_COOKIE, resolve_theme
from .navigation.routes import Article, NewsArticle, Project, Tutorial, build_path, view_path
from .routers.admin import router as admin_router
from .routers.admin_api import router as admin_api_router
from .routers.api import router as api_router
from .routers.auth import router as auth_router
from .routers.pages import router as pages_router
from .routers.sitemap import router as sitemap_router
from .utils.images import optimize_image, srcset
from .utils.static_data import load_site_data
from pathlib import Path


def _configure_logging() -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api") or "application/json" in request.headers.get("accept", "")


def _bare_context(request: Request, **extra):
    # error pages render without touching the database
    return {"settings": SiteSettings(), "theme": resolve_theme(request.cookies.get(THEME_COOKIE)), **extra}


def create_app() -> FastAPI:
    _configure_logging()
    app = FastAPI(title="Scenic Design Portfolio", version="0.1.0")
    logger = logging.getLogger(__name__)

    static_dir = Path(__file__).resolve().parent / "static"
    templates_dir = Path(__file__).resolve().parent / "templates"

    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    templates = Jinja2Templates(directory=str(templates_dir))
    templates.env.globals.update(
        site=load_site_data(),
        site_name=settings.SITE_NAME,
        build_path=build_path,
        view_path=view_path,
        project_url=lambda slug: view_path(Project(slug)),
        article_url=lambda slug: view_path(Article(slug)),
        news_url=lambda slug: view_path(NewsArticle(slug)),
        tutorial_url=lambda slug: view_path(Tutorial(slug)),
        optimize_image=optimize_image,
        srcset=srcset,
    )
    templates.env.filters["render_body"] = render_body
    app.state.templates = templates
    app.add_middleware(SessionMiddleware, secret_key=settings.APP_SECRET)

    @app.middleware("http")
    async def timing_middleware(request: Request, call_next):
        t0 = time.perf_counter()
        req_id = uuid.uuid4().hex[:8]
        response = await call_next(request)
        total = time.perf_counter() - t0
        response.headers["X-Process-Time"] = f"{total:.3f}"
        if request.url.path.startswith("/static/"):
            response.headers.setdefault(
                "Cache-Control", "public, max-age=31536000, immutable"
            )
        logger.debug(
            "req_timing id=%s path=%s status=%s total_ms=%.1f",
            req_id,
            request.url.path,
            response.status_code,
            total * 1000,
        )
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if _wants_json(request):
            return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None))
        if exc.status_code == 401 and request.url.path.startswith("/admin"):
            return RedirectResponse(url="/admin/login", status_code=302)
        if exc.status_code == 404:
            return templates.TemplateResponse(
                request, "pages/not_found.html", _bare_context(request), status_code=404
            )
        return templates.TemplateResponse(
            request,
            "pages/error.html",
            _bare_context(request, message=exc.detail),
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("unhandled error path=%s", request.url.path)
        if _wants_json(request):
            return JSONResponse({"detail": "Something went wrong"}, status_code=500)
        return templates.TemplateResponse(
            request,
            "pages/error.html",
            _bare_context(request, message="Something went wrong"),
            status_code=500,
        )

    @app.get("/health", include_in_schema=False)
    def healthcheck():
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(admin_api_router, prefix="/api/admin", tags=["admin"])
    app.include_router(api_router, prefix="/api", tags=["public"])
    app.include_router(sitemap_router)
    # catch-all page router goes last
    app.include_router(pages_router)

    return app


app = create_app()
