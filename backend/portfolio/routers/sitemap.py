from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..services.sitemap_service import SitemapService


router = APIRouter()

XML_HEADERS = {"Cache-Control": "public, max-age=3600"}


@router.get("/sitemap.xml", include_in_schema=False)
def sitemap(db: Session = Depends(get_db)):
    return Response(SitemapService(db).sitemap_xml(), media_type="application/xml", headers=XML_HEADERS)


@router.get("/image-sitemap.xml", include_in_schema=False)
def image_sitemap(db: Session = Depends(get_db)):
    return Response(SitemapService(db).image_sitemap_xml(), media_type="application/xml", headers=XML_HEADERS)


@router.get("/video-sitemap.xml", include_in_schema=False)
def video_sitemap(db: Session = Depends(get_db)):
    return Response(SitemapService(db).video_sitemap_xml(), media_type="application/xml", headers=XML_HEADERS)


@router.get("/rss.xml", include_in_schema=False)
def rss(db: Session = Depends(get_db)):
    return Response(SitemapService(db).rss_xml(), media_type="application/rss+xml", headers=XML_HEADERS)
