from __future__ import annotations

import json
from pathlib import Path

import markdown

from .utils import fail, progress

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]
SCHEMA_CONTEXT = "https://schema.org"
SCHEMA_TYPE = "BlogPosting"


def render_markdown(text: str) -> str:
    md = markdown.Markdown(extensions=MARKDOWN_EXTENSIONS)
    return md.convert(text)


def build_json_ld(post: dict, verbose: bool = True) -> str:
    data = {
        "@context": SCHEMA_CONTEXT,
        "@type": SCHEMA_TYPE,
        "headline": post["title"],
        "author": post["author"],
        "datePublished": post["date"],
        "keywords": ",".join(post["tags"]),
    }
    # "<" escaped so "</script>" in a title cannot end the element.
    payload = json.dumps(data, indent=2, ensure_ascii=False).replace("<", "\\u003c")
    progress(f'Generated JSON-LD for "{post["title"]}":\n{payload}', verbose)
    return f'<script type="application/ld+json">\n{payload}\n</script>'


def render_template(template: str, **context: str) -> str:
    output = template
    late_keys = {"content"}
    for key, value in context.items():
        if key in late_keys:
            continue
        output = output.replace(f"{{{{{key}}}}}", value)
    for key in late_keys:
        if key in context:
            output = output.replace(f"{{{{{key}}}}}", context[key])
    return output


def write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        fail(f"Error writing {path}: {exc}")
