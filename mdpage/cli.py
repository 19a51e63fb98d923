from __future__ import annotations

import argparse
import datetime as dt
import time
from pathlib import Path

from .config import load_config
from .content import load_documents, validate_metadata
from .pages import build_index, sort_posts
from .render import render_markdown, write_text
from .utils import parse_bool, progress

DEFAULT_CONFIG = "site.toml"
DEFAULT_POSTS = "_posts"
DEFAULT_OUTPUT = "index.html"
DEFAULT_SITE_NAME = "My Static Blog"
DEFAULT_STYLESHEET = "styles.css"


def resolve_path(value: str, project_root: Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = project_root / path
    return path


def build_site(args: argparse.Namespace, project_root: Path, year: int) -> Path:
    """Run the whole pipeline once and return the path of the written page.

    Every document is loaded and validated before the output file is touched,
    so a fatal error leaves any previous output as it was.
    """
    posts_dir = resolve_path(args.posts, project_root)
    output_path = resolve_path(args.output, project_root)
    verbose = args.verbose

    documents = load_documents(posts_dir, verbose)
    posts = [validate_metadata(name, meta, body, verbose) for name, meta, body in documents]
    for post in posts:
        post["content"] = render_markdown(post["body"])
    posts = sort_posts(posts)
    progress("All posts have been processed and sorted.", verbose)

    html_doc = build_index(posts, year, args.site_name, args.stylesheet, verbose)
    write_text(output_path, html_doc)
    progress(f"{output_path.name} has been written to the filesystem.", verbose)
    return output_path


def main(argv: list[str] | None = None) -> None:
    pre_parser = argparse.ArgumentParser(add_help=False)
    pre_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help="Path to site config file (TOML/YAML/JSON).",
    )
    pre_args, _ = pre_parser.parse_known_args(argv)
    project_root = Path.cwd()
    config = load_config(resolve_path(pre_args.config, project_root))

    def cfg_str(key: str, default: str) -> str:
        value = config.get(key)
        return default if value is None else str(value)

    def cfg_bool(key: str, default: bool) -> bool:
        value = config.get(key)
        return default if value is None else parse_bool(value)

    parser = argparse.ArgumentParser(description="Build a single-page blog from Markdown posts.")
    parser.add_argument("--config", default=pre_args.config, help="Path to site config file (TOML/YAML/JSON).")
    parser.add_argument(
        "--posts",
        default=cfg_str("posts", DEFAULT_POSTS),
        help="Directory containing Markdown posts.",
    )
    parser.add_argument(
        "--output",
        default=cfg_str("output", DEFAULT_OUTPUT),
        help="Path of the generated HTML page.",
    )
    parser.add_argument("--site-name", default=cfg_str("site_name", DEFAULT_SITE_NAME), help="Site title.")
    parser.add_argument(
        "--stylesheet",
        default=cfg_str("stylesheet", DEFAULT_STYLESHEET),
        help="Stylesheet linked from the page head.",
    )
    parser.add_argument(
        "--verbose",
        action=argparse.BooleanOptionalAction,
        default=cfg_bool("verbose", True),
        help="Print progress messages.",
    )
    args = parser.parse_args(argv)
    start = time.perf_counter()
    output_path = build_site(args, project_root, dt.date.today().year)
    elapsed = time.perf_counter() - start
    print(f"Build completed in {elapsed:.2f}s.")
    print(f"Page generated in: {output_path}")
