from __future__ import annotations

import datetime as dt
from pathlib import Path

import yaml

from .utils import fail, progress, warn

POST_SUFFIX = ".md"
REQUIRED_FIELDS = ("title", "author", "date", "tags")
MAX_TAGS = 5
DATE_FMT = "%Y-%m-%d"
DATETIME_FMT = "%Y-%m-%d %H:%M"
UNDATED = dt.datetime.min


class FrontMatterError(ValueError):
    """Raised when a front-matter block is present but is not a valid YAML mapping."""


def construct_timestamp(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> object:
    # Out-of-range values such as 2024-02-30 stay as text for parse_date.
    try:
        return yaml.SafeLoader.construct_yaml_timestamp(loader, node)
    except ValueError:
        return loader.construct_scalar(node)


class FrontMatterLoader(yaml.SafeLoader):
    pass


FrontMatterLoader.add_constructor("tag:yaml.org,2002:timestamp", construct_timestamp)


def list_post_files(posts_dir: Path) -> list[Path]:
    entries = [path for path in posts_dir.iterdir() if path.is_file() and path.suffix == POST_SUFFIX]
    return sorted(entries, key=lambda p: p.name)


def parse_front_matter(text: str) -> tuple[dict, str]:
    """Split ``text`` into its YAML front matter and Markdown body.

    Text that does not open with a ``---`` line, or never closes the block,
    has no front matter and is returned unchanged as the body.
    """
    clean_text = text.lstrip("\ufeff")
    lines = clean_text.splitlines()
    if not lines or lines[0].strip() != "---":
        return {}, clean_text

    end = None
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            end = i
            break
    if end is None:
        return {}, clean_text

    try:
        meta = yaml.load("\n".join(lines[1:end]), Loader=FrontMatterLoader)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontMatterError(f"invalid YAML front matter: {exc}") from exc
    if meta is None:
        meta = {}
    if not isinstance(meta, dict):
        raise FrontMatterError(f"front matter must be a mapping, got {type(meta).__name__}")
    body = "\n".join(lines[end + 1 :])
    return meta, body


def load_documents(posts_dir: Path, verbose: bool = True) -> list[tuple[str, dict, str]]:
    progress(f"Reading Markdown files from {posts_dir} directory...", verbose)
    try:
        post_files = list_post_files(posts_dir)
    except OSError as exc:
        fail(f"Cannot read posts directory {posts_dir}: {exc}")
    progress(f"Found {len(post_files)} Markdown file(s).", verbose)

    documents = []
    for md_file in post_files:
        progress(f"Processing file: {md_file.name}", verbose)
        try:
            raw_text = md_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            fail(f'Cannot read post "{md_file.name}": {exc}')
        try:
            meta, body = parse_front_matter(raw_text)
        except FrontMatterError as exc:
            fail(f'Post "{md_file.name}" has {exc}')
        documents.append((md_file.name, meta, body))
    return documents


def is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def normalize_tags(title: str, value: object) -> list[str]:
    if not isinstance(value, (list, tuple)):
        warn(f'Post "{title}" has invalid tags format. Expected a list. Converting to an empty list.')
        return []
    if len(value) > MAX_TAGS:
        warn(f'Post "{title}" has more than {MAX_TAGS} tags. Only the first {MAX_TAGS} will be included.')
    return [str(tag) for tag in value[:MAX_TAGS]]


def parse_date(value: object) -> tuple[str, dt.datetime | None]:
    """Return the display text and the sort key for a front-matter date.

    YAML already turns unquoted ISO dates into ``date``/``datetime`` objects;
    quoted strings are parsed here. The sort key is ``None`` when the value
    cannot be read as a date.
    """
    if isinstance(value, dt.datetime):
        if value.tzinfo is not None:
            value = value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return value.strftime(DATETIME_FMT), value
    if isinstance(value, dt.date):
        return value.strftime(DATE_FMT), dt.datetime.combine(value, dt.time())
    text = str(value).strip()
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError:
        return text, None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return text, parsed


def validate_metadata(name: str, meta: dict, body: str, verbose: bool = True) -> dict:
    missing = [field for field in REQUIRED_FIELDS if is_missing(meta.get(field))]
    if missing:
        fail(f'Post "{name}" is missing required metadata: {", ".join(missing)}.')

    title = str(meta["title"]).strip()
    author = str(meta["author"]).strip()
    tags = normalize_tags(title, meta["tags"])
    date_str, date_dt = parse_date(meta["date"])
    if date_dt is None:
        warn(f'Post "{title}" has an unrecognized date "{date_str}". It will be listed last.')
        date_dt = UNDATED

    progress(
        f'Extracted metadata: Title="{title}", Author="{author}", Date="{date_str}", Tags={tags}',
        verbose,
    )
    return {
        "title": title,
        "author": author,
        "date": date_str,
        "date_dt": date_dt,
        "tags": tags,
        "body": body,
        "content": "",
        "source": name,
    }
