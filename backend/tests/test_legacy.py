import json

from backend.portfolio.content.legacy import (
    heading_anchor,
    html_to_blocks,
    render_body,
    rewrite_cms_links,
    table_of_contents,
)


CMS = "https://cms.example.test"


def test_render_body_handles_every_shape(monkeypatch):
    from backend.portfolio.config import settings

    monkeypatch.setattr(settings, "CMS_URL", CMS)
    assert render_body(None) == ""
    assert render_body(42) == ""
    html = '<p>See <a href="https://cms.example.test/about">about</a></p>'
    assert render_body(html) == '<p>See <a href="/about">about</a></p>'

    blocks = [{"id": "1", "type": "paragraph", "content": "Hello", "metadata": {}}]
    assert render_body(blocks) == '<div class="prose-paragraph">Hello</div>'
    assert render_body(json.dumps(blocks)) == render_body(blocks)
    assert "drop-cap" in render_body(blocks, drop_cap=True)


def test_rewrite_cms_links_root_and_missing_host():
    assert rewrite_cms_links('<a href="https://cms.example.test">home</a>', CMS) == '<a href="/">home</a>'
    assert rewrite_cms_links('<a href="https://other.test/x">x</a>', CMS) == '<a href="https://other.test/x">x</a>'


def test_bracket_text_that_is_not_json_stays_html():
    assert render_body("[draft] notes", drop_cap=False) == "[draft] notes"


def test_table_of_contents():
    body = [
        {"id": "1", "type": "heading", "content": "Research & <em>Sketches</em>", "metadata": {"level": 2}},
        {"id": "2", "type": "paragraph", "content": "x", "metadata": {}},
        {"id": "3", "type": "heading", "content": "  ", "metadata": {"level": 3}},
        {"id": "4", "type": "heading", "content": "Model", "metadata": {"level": 3}},
    ]
    toc = table_of_contents(body)
    assert toc == [
        {"level": 2, "text": "Research & Sketches", "anchor": "research-sketches"},
        {"level": 3, "text": "Model", "anchor": "model"},
    ]
    assert table_of_contents("<h2>html</h2>") == []
    assert heading_anchor("!!!") == "section"


def test_html_to_blocks_converts_common_elements():
    html = (
        "<h2>Process</h2>"
        "<p>First <strong>idea</strong></p>"
        "<p><br/></p>"
        "<ul><li>Sketch</li><li>Model</li></ul>"
        "<ol><li>Build</li></ol>"
        "<blockquote>Less is more</blockquote>"
        '<figure><img src="/m.jpg" alt="Model"><figcaption>White model</figcaption></figure>'
        '<iframe src="https://player.vimeo.com/video/1"></iframe>'
        '<pre><code class="language-python">print(1)</code></pre>'
        "<hr>"
        "<div><p>Nested</p></div>"
        "<table><tr><td>cell</td></tr></table>"
    )
    blocks = html_to_blocks(html)
    types = [b["type"] for b in blocks]
    assert types == [
        "heading",
        "paragraph",
        "list",
        "list",
        "quote",
        "image",
        "video",
        "code",
        "divider",
        "paragraph",
        "paragraph",
    ]
    assert blocks[0]["metadata"] == {"level": 2}
    assert blocks[1]["content"] == "First <strong>idea</strong>"
    assert blocks[2]["content"] == "Sketch\nModel"
    assert blocks[3]["metadata"] == {"listType": "numbered"}
    assert blocks[5]["metadata"] == {"alt": "Model", "caption": "White model"}
    assert blocks[6]["metadata"] == {"videoType": "vimeo"}
    assert blocks[7]["metadata"] == {"language": "python"}
    assert blocks[9]["content"] == "Nested"
    assert blocks[10]["content"].startswith("<table>")
    assert all(b["id"].startswith("block-") for b in blocks)


def test_html_to_blocks_empty_bodies():
    assert html_to_blocks(None) == []
    assert html_to_blocks("<p><br></p>") == []
    assert html_to_blocks("   ") == []
