from __future__ import annotations

from .render import build_json_ld, render_template
from .utils import progress

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{site_name}}</title>
    <link rel="stylesheet" href="{{stylesheet}}">
</head>
<body>
    <header>
        <h1>{{site_name}}</h1>
    </header>
    <main>
{{content}}
    </main>
    <footer>
        <p>&copy; {{year}} {{site_name}}</p>
    </footer>
</body>
</html>
"""


def sort_posts(posts: list[dict]) -> list[dict]:
    """Newest first; posts with the same date keep their load order."""
    return sorted(posts, key=lambda p: p["date_dt"], reverse=True)


def build_post_block(post: dict, verbose: bool = True) -> str:
    # Title and author go in unescaped, as written in the front matter.
    tags = ", ".join(post["tags"])
    return (
        "<article>\n"
        "    <header>\n"
        f"        <h2>{post['title']}</h2>\n"
        f"        <p>By {post['author']} on {post['date']}</p>\n"
        f"        <p>Tags: {tags}</p>\n"
        "    </header>\n"
        f"    {build_json_ld(post, verbose)}\n"
        "    <section>\n"
        f"{post['content']}\n"
        "    </section>\n"
        "</article>\n"
        "<hr>\n"
    )


def build_posts_html(posts: list[dict], verbose: bool = True) -> str:
    progress("Generating HTML for all posts...", verbose)
    blocks = [build_post_block(post, verbose) for post in posts]
    progress("All posts have been converted to HTML.", verbose)
    return "\n".join(blocks)


def build_index(
    posts: list[dict],
    year: int,
    site_name: str,
    stylesheet: str,
    verbose: bool = True,
) -> str:
    posts_html = build_posts_html(posts, verbose)
    progress("Generating complete index page...", verbose)
    return render_template(
        PAGE_TEMPLATE,
        site_name=site_name,
        stylesheet=stylesheet,
        year=str(year),
        content=posts_html,
    )
