"""portfolio projects, articles, news, tutorials, taxonomy, site configuration

Revision ID: 0001_portfolio_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_portfolio_schema"
down_revision = None
branch_labels = None
depends_on = None


JSONB = postgresql.JSONB(astext_type=sa.Text())


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, JSONB, nullable=False, server_default=sa.text("'[]'::jsonb"))


def upgrade() -> None:
    op.create_table(
        "portfolio_projects",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("subcategory", sa.String(length=100), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("venue", sa.String(length=255), nullable=True),
        sa.Column("client_name", sa.String(length=255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("project_overview", sa.Text(), nullable=True),
        sa.Column("design_notes", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        sa.Column("card_image", sa.String(length=1024), nullable=True),
        sa.Column("hero_image", sa.String(length=1024), nullable=True),
        sa.Column("focal_point", JSONB, nullable=True),
        _json_list("images"),
        _json_list("production_photos"),
        sa.Column("galleries", JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        _json_list("credits"),
        _json_list("software_used"),
        _json_list("video_urls"),
        _json_list("tags"),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_portfolio_projects_slug", "portfolio_projects", ["slug"], unique=True)
    op.create_index("ix_portfolio_projects_category", "portfolio_projects", ["category"])
    op.create_index("ix_portfolio_projects_year", "portfolio_projects", ["year"])
    op.create_index("ix_portfolio_projects_published", "portfolio_projects", ["published"])

    op.create_table(
        "articles",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category", sa.String(length=150), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("read_time", sa.String(length=50), nullable=True),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        _json_list("tags"),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_articles_slug", "articles", ["slug"], unique=True)
    op.create_index("ix_articles_category", "articles", ["category"])
    op.create_index("ix_articles_date", "articles", ["date"])
    op.create_index("ix_articles_published", "articles", ["published"])

    op.create_table(
        "news",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("excerpt", sa.Text(), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("link", sa.String(length=1024), nullable=True),
        sa.Column("cover_image", sa.String(length=1024), nullable=True),
        _json_list("tags"),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_news_slug", "news", ["slug"], unique=True)
    op.create_index("ix_news_date", "news", ["date"])
    op.create_index("ix_news_published", "news", ["published"])

    op.create_table(
        "tutorials",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("duration", sa.String(length=20), nullable=True),
        sa.Column("thumbnail", sa.String(length=1024), nullable=True),
        sa.Column("video_url", sa.String(length=1024), nullable=True),
        sa.Column("publish_date", sa.Date(), nullable=True),
        _json_list("learning_objectives"),
        _json_list("key_shortcuts"),
        _json_list("common_pitfalls"),
        _json_list("pro_tips"),
        _json_list("resources"),
        sa.Column("content", JSONB, nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_tutorials_slug", "tutorials", ["slug"], unique=True)

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("slug", sa.String(length=150), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("type", "slug", name="uq_category_type_slug"),
    )
    op.create_index("ix_categories_type", "categories", ["type"])

    op.create_table(
        "collaborators",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=150), nullable=True),
        sa.Column("website", sa.String(length=1024), nullable=True),
        sa.Column("image", sa.String(length=1024), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
    )

    op.create_table(
        "site_configuration",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(length=100), nullable=False),
        sa.Column("value", JSONB, nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_site_configuration_key", "site_configuration", ["key"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_site_configuration_key", table_name="site_configuration")
    op.drop_table("site_configuration")
    op.drop_table("collaborators")
    op.drop_index("ix_categories_type", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_tutorials_slug", table_name="tutorials")
    op.drop_table("tutorials")
    for name in ("ix_news_published", "ix_news_date", "ix_news_slug"):
        op.drop_index(name, table_name="news")
    op.drop_table("news")
    for name in ("ix_articles_published", "ix_articles_date", "ix_articles_category", "ix_articles_slug"):
        op.drop_index(name, table_name="articles")
    op.drop_table("articles")
    for name in (
        "ix_portfolio_projects_published",
        "ix_portfolio_projects_year",
        "ix_portfolio_projects_category",
        "ix_portfolio_projects_slug",
    ):
        op.drop_index(name, table_name="portfolio_projects")
    op.drop_table("portfolio_projects")
