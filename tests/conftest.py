from __future__ import annotations

from pathlib import Path

import pytest


def write_post(posts_dir: Path, name: str, front_matter: str, body: str = "Some *text*.") -> Path:
    posts_dir.mkdir(parents=True, exist_ok=True)
    path = posts_dir / name
    path.write_text(f"---\n{front_matter.strip()}\n---\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    path = tmp_path / "_posts"
    path.mkdir()
    return path
