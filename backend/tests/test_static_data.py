from backend.portfolio.navigation.routes import KNOWN_PAGES
from backend.portfolio.utils.static_data import (
    load_news_data,
    load_site_data,
    load_tutorial_data,
    static_news,
    static_tutorials,
)


def test_tutorial_file_loads_with_unique_slugs():
    data = load_tutorial_data()
    assert data.categories
    slugs = [t.slug for t in data.tutorials]
    assert "camera-tool-rendering" in slugs
    assert len(slugs) == len(set(slugs))
    assert all(t.title for t in static_tutorials())


def test_news_is_sorted_newest_first():
    items = static_news()
    assert items
    dates = [n.date for n in items if n.date]
    assert dates == sorted(dates, reverse=True)
    assert len({n.slug for n in load_news_data().news}) == len(items)
    assert items[0].id == items[0].slug


def test_navigation_points_at_known_pages():
    site = load_site_data()
    pages = [item.page for item in site.navigation]
    pages += [sub.page for item in site.navigation for sub in item.submenu]
    assert pages
    assert set(pages) <= KNOWN_PAGES


def test_page_meta_defaults_to_title_case():
    site = load_site_data()
    assert site.page_meta("about").title == "About"
    assert site.page_meta("model-box-notes").title == "Model Box Notes"
