from __future__ import annotations

import argparse
from pathlib import Path

from ..db import SessionLocal
from ..services.sitemap_service import SitemapService


def write_files(out_dir: Path, service: SitemapService) -> dict[str, int]:
    out_dir.mkdir(parents=True, exist_ok=True)
    outputs = {
        "sitemap.xml": service.sitemap_xml(use_cache=False),
        "image-sitemap.xml": service.image_sitemap_xml(use_cache=False),
        "video-sitemap.xml": service.video_sitemap_xml(use_cache=False),
        "rss.xml": service.rss_xml(use_cache=False),
    }
    sizes = {}
    for name, body in outputs.items():
        (out_dir / name).write_text(body, encoding="utf-8")
        sizes[name] = len(body.encode("utf-8"))
    return sizes


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the sitemaps and rss.xml")
    parser.add_argument("--out", default="public", help="output directory")
    parser.add_argument("--site-url", default=None, help="override SITE_URL")
    args = parser.parse_args()

    with SessionLocal() as db:
        sizes = write_files(Path(args.out), SitemapService(db, site_url=args.site_url))
    for name, size in sizes.items():
        print(f"{name} bytes={size}")


if __name__ == "__main__":
    main()
