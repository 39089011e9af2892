from __future__ import annotations

import argparse

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import SessionLocal
from ..models import NewsItem, Tutorial
from ..utils.static_data import static_news, static_tutorials


TUTORIAL_FIELDS = (
    "title",
    "description",
    "category",
    "duration",
    "thumbnail",
    "video_url",
    "publish_date",
    "learning_objectives",
    "key_shortcuts",
    "common_pitfalls",
    "pro_tips",
    "resources",
    "content",
)
NEWS_FIELDS = ("title", "date", "category", "excerpt", "location", "link", "cover_image", "tags", "content")


def import_tutorials(db: Session, overwrite: bool = False) -> dict[str, int]:
    stats = {"inserted": 0, "updated": 0, "skipped": 0}
    for item in static_tutorials():
        row = db.execute(select(Tutorial).where(Tutorial.slug == item.slug)).scalar_one_or_none()
        if row is not None and not overwrite:
            stats["skipped"] += 1
            continue
        if row is None:
            row = Tutorial(slug=item.slug, title=item.title, published=True)
            db.add(row)
            stats["inserted"] += 1
        else:
            stats["updated"] += 1
        for field in TUTORIAL_FIELDS:
            value = getattr(item, field, None)
            if value is not None:
                setattr(row, field, value)
    return stats


def import_news(db: Session, overwrite: bool = False) -> dict[str, int]:
    stats = {"inserted": 0, "updated": 0, "skipped": 0}
    for item in static_news():
        row = db.execute(select(NewsItem).where(NewsItem.slug == item.slug)).scalar_one_or_none()
        if row is not None and not overwrite:
            stats["skipped"] += 1
            continue
        if row is None:
            row = NewsItem(slug=item.slug, title=item.title, published=True)
            db.add(row)
            stats["inserted"] += 1
        else:
            stats["updated"] += 1
        for field in NEWS_FIELDS:
            value = getattr(item, field, None)
            if value is not None:
                setattr(row, field, value)
    return stats


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed tutorials and news from the bundled YAML files")
    parser.add_argument("--only", choices=("tutorials", "news"), default=None)
    parser.add_argument("--overwrite", action="store_true", help="update rows that already exist")
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args()

    with SessionLocal() as db:
        if args.only in (None, "tutorials"):
            print("tutorials", import_tutorials(db, args.overwrite))
        if args.only in (None, "news"):
            print("news", import_news(db, args.overwrite))
        if args.dry_run:
            db.rollback()
            print("dry run: rolled back")
        else:
            db.commit()


if __name__ == "__main__":
    main()
