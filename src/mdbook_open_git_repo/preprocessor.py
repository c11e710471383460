"""Preprocessor orchestration: add an edit link footer to every chapter."""

import logging
from pathlib import Path

from .config import PREPROCESSOR_NAME, FooterConfig, load_footer_config
from .exceptions import ConfigurationError, RepositoryRootNotFoundError
from .footer import append_footer, build_edit_url, has_footer, render_footer
from .repository import find_repo_root, relativize_chapter_path
from .schema import Book, Chapter, PreprocessorContext

logger = logging.getLogger(__name__)


class OpenGitRepoPreprocessor:
    """Appends an "edit this file" link to each chapter of a book.

    Misconfiguration never breaks the build: the book is passed through
    unmodified and the problem is logged. Only a chapter resolving to a file
    outside the repository, which indicates a bug, raises.
    """

    name = PREPROCESSOR_NAME

    def supports_renderer(self, renderer: str) -> bool:
        """The footer is plain markdown/HTML, so every renderer is supported."""
        return True

    def run(self, ctx: PreprocessorContext, book: Book) -> Book:
        """Process the whole book in place and return it."""
        book_root = Path(ctx.root)
        logger.debug("Book root: %s", book_root)

        try:
            git_root = find_repo_root(book_root)
        except RepositoryRootNotFoundError as e:
            logger.error("%s; edit links will not be added", e)
            return book
        logger.debug("Git root: %s", git_root)

        try:
            config = load_footer_config(ctx.config)
        except ConfigurationError as e:
            logger.error("%s; edit links will not be added", e)
            return book

        if config is None:
            return book

        src_root = book_root / config.src_dir
        logger.debug("Src root: %s", src_root)

        # An exception from any chapter stops the walk; earlier chapters keep their footer
        total = 0
        added = 0
        for chapter in book.iter_chapters():
            total += 1
            content = self._process_chapter(chapter, git_root, src_root, config)
            if content is not chapter.content:
                chapter.content = content
                added += 1

        logger.info("Added edit links to %d of %d chapters", added, total)
        return book

    def _process_chapter(
        self,
        chapter: Chapter,
        git_root: Path,
        src_root: Path,
        config: FooterConfig,
    ) -> str:
        """Return the chapter content with the footer appended, if it applies."""
        if has_footer(chapter.content):
            return chapter.content

        relpath = relativize_chapter_path(git_root, src_root, chapter.path)
        if relpath is None:
            return chapter.content

        url = build_edit_url(config.repository_url, config.host, config.branch, relpath)
        logger.debug("URL: %s", url)

        footer = render_footer(url, config.link_text, config.edit_text)
        return append_footer(chapter.content, footer)
