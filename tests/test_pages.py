from __future__ import annotations

import datetime as dt

from mdpage.pages import build_index, build_post_block, build_posts_html, sort_posts


def make_post(title: str, date: dt.datetime, tags: list[str] | None = None) -> dict:
    return {
        "title": title,
        "author": "Ann",
        "date": date.strftime("%Y-%m-%d"),
        "date_dt": date,
        "tags": tags or [],
        "content": f"<p>{title} body</p>",
    }


def test_sort_posts_newest_first():
    old = make_post("Old", dt.datetime(2023, 1, 1))
    new = make_post("New", dt.datetime(2024, 1, 1))
    mid = make_post("Mid", dt.datetime(2023, 6, 1))
    assert [p["title"] for p in sort_posts([old, new, mid])] == ["New", "Mid", "Old"]


def test_sort_posts_ties_keep_load_order():
    day = dt.datetime(2024, 1, 1)
    posts = [make_post(name, day) for name in ("a", "b", "c")]
    posts.insert(1, make_post("newer", dt.datetime(2024, 2, 1)))
    assert [p["title"] for p in sort_posts(posts)] == ["newer", "a", "b", "c"]


def test_build_post_block_layout():
    block = build_post_block(make_post("Hello", dt.datetime(2024, 1, 1), ["x", "y"]))
    assert block.startswith("<article>")
    assert "<h2>Hello</h2>" in block
    assert "<p>By Ann on 2024-01-01</p>" in block
    assert "<p>Tags: x, y</p>" in block
    assert '<script type="application/ld+json">' in block
    assert "<section>\n<p>Hello body</p>\n    </section>" in block
    assert block.rstrip().endswith("</article>\n<hr>")
    assert block.index("application/ld+json") < block.index("<section>")


def test_build_post_block_does_not_escape_title():
    block = build_post_block(make_post("<em>Hi</em>", dt.datetime(2024, 1, 1)))
    assert "<h2><em>Hi</em></h2>" in block


def test_build_posts_html_keeps_order(capsys):
    posts = [make_post("First", dt.datetime(2024, 2, 1)), make_post("Second", dt.datetime(2024, 1, 1))]
    html_text = build_posts_html(posts)
    assert html_text.count("<article>") == 2
    assert html_text.index("First") < html_text.index("Second")
    assert "Generating HTML for all posts..." in capsys.readouterr().out


def test_build_index_skeleton():
    page = build_index([make_post("Hello", dt.datetime(2024, 1, 1))], 2031, "My Static Blog", "styles.css")
    assert page.startswith("<!DOCTYPE html>")
    assert '<meta charset="UTF-8">' in page
    assert '<meta name="viewport" content="width=device-width, initial-scale=1.0">' in page
    assert "<title>My Static Blog</title>" in page
    assert '<link rel="stylesheet" href="styles.css">' in page
    assert "<h1>My Static Blog</h1>" in page
    assert "<p>&copy; 2031 My Static Blog</p>" in page
    assert page.index("<main>") < page.index("<article>") < page.index("</main>")


def test_build_index_without_posts(capsys):
    page = build_index([], 2024, "Blog", "site.css", verbose=False)
    assert "<article>" not in page
    assert "<main>" in page
    assert capsys.readouterr().out == ""
