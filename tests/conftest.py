"""Shared fixtures: a throwaway git working tree holding an mdBook."""

import logging
from pathlib import Path

import pytest

from mdbook_open_git_repo.app_logging import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging so caplog sees records in every test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def book_repo(tmp_path: Path) -> Path:
    """Create repo/.git and a book at repo/book with two chapter files.

    Returns the book root (repo/book).
    """
    repo = tmp_path / "repo"
    (repo / ".git").mkdir(parents=True)

    book_root = repo / "book"
    src = book_root / "src"
    (src / "chapter1").mkdir(parents=True)
    (src / "chapter1" / "intro.md").write_text("# Intro\n", encoding="utf-8")
    (src / "chapter1" / "details.md").write_text("# Details\n", encoding="utf-8")

    return book_root


def make_config(
    url="https://github.com/acme/book",
    branch="main",
    **tool_settings,
) -> dict:
    """Build a book.toml-shaped dict; pass url=None to leave the URL out."""
    html = {}
    if url is not None:
        html["git-repository-url"] = url
    if branch is not None:
        html["git-branch"] = branch

    config = {
        "book": {"src": "src", "title": "Test Book"},
        "output": {"html": html},
    }
    if tool_settings:
        config["preprocessor"] = {
            "open-git-repo": {key.replace("_", "-"): value for key, value in tool_settings.items()}
        }
    return config
