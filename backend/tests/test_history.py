from backend.portfolio.navigation.history import Navigator
from backend.portfolio.navigation.routes import Article, Articles, Home, NewsArticle, NewsList, Portfolio, Project, StaticPage, build_path


def test_initial_load_parses_url():
    nav = Navigator("/project/hamlet")
    assert nav.view == Project("hamlet")
    assert nav.entries == ["/project/hamlet"]
    assert nav.scroll_resets == 1


def test_initial_load_applies_legacy_redirect_with_replace():
    nav = Navigator("/scenic-insights/old-post")
    assert nav.view == Article("old-post")
    assert nav.entries == ["/articles/old-post"]


def test_navigate_pushes_and_resets_scroll():
    nav = Navigator("/")
    nav.navigate("portfolio", "scenic")
    assert nav.view == Portfolio(filter="scenic")
    assert nav.current_url == "/portfolio?filter=scenic"
    nav.navigate("about")
    assert nav.view == StaticPage("about")
    assert nav.entries == ["/", "/portfolio?filter=scenic", "/about"]
    assert nav.scroll_resets == 3


def test_navigate_to_current_url_does_not_push():
    nav = Navigator("/about")
    nav.navigate("about")
    assert nav.entries == ["/about"]
    assert nav.scroll_resets == 2


def test_back_and_forward_reparse_without_pushing():
    nav = Navigator("/")
    nav.navigate("portfolio")
    nav.navigate("articles", "design-philosophy")
    assert nav.view == Article("design-philosophy")
    assert nav.current_url == "/articles?category=design-philosophy"

    # the pushed URL is a category list, so popping back to it shows the list
    nav.back()
    nav.forward()
    assert isinstance(nav.view, Articles)
    assert nav.view.category == "design-philosophy"

    nav.back()
    nav.back()
    assert nav.view == Home()
    nav.back()
    assert nav.view == Home()
    assert len(nav.entries) == 3


def test_navigate_after_back_drops_forward_entries():
    nav = Navigator("/")
    nav.navigate("about")
    nav.navigate("cv")
    nav.back()
    nav.navigate("contact")
    assert nav.entries == ["/", "/about", "/contact"]


def test_navigate_with_inline_query():
    nav = Navigator("/")
    view = nav.navigate("portfolio?filter=experiential")
    assert view == Portfolio(filter="experiential")
    assert nav.current_url == build_path("portfolio?filter=experiential") == "/portfolio?filter=experiential"
    assert nav.entries == ["/", "/portfolio?filter=experiential"]


def test_navigate_to_nested_news_path():
    nav = Navigator("/news")
    assert nav.navigate("news/my-slug") == NewsArticle("my-slug")
    assert nav.current_url == "/news/my-slug"
    assert nav.back() == NewsList()
    assert nav.current_url == "/news"
