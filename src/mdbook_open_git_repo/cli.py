"""CLI for the open-git-repo mdBook preprocessor."""

import sys
import tomllib
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .app_logging import LOG_LEVELS, setup_logging
from .config import load_footer_config
from .exceptions import OpenGitRepoError
from .footer import build_edit_url
from .preprocessor import OpenGitRepoPreprocessor
from .repository import find_repo_root, relativize_chapter_path
from .schema import dump_book, parse_input


# stdout carries the processed book, so errors go to stderr
console = Console()
err_console = Console(stderr=True, soft_wrap=True)


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mdbook-open-git-repo")
@click.option(
    '--log-level',
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default='WARNING',
    show_default=True,
    envvar='MDBOOK_OPEN_GIT_REPO_LOG',
    help='Log level for diagnostics on stderr (or set MDBOOK_OPEN_GIT_REPO_LOG)'
)
@click.pass_context
def main(ctx: click.Context, log_level: str):
    """mdBook preprocessor adding "edit this file" links to every chapter.

    Without a subcommand, reads the [context, book] JSON mdBook sends on
    stdin and writes the processed book to stdout.

    Add it to book.toml with:

        [preprocessor.open-git-repo]
    """
    setup_logging(log_level)

    if ctx.invoked_subcommand is None:
        _run_preprocessor()


def _run_preprocessor() -> None:
    """Run one preprocessor pass over stdin/stdout."""
    preprocessor = OpenGitRepoPreprocessor()

    try:
        book_ctx, book = parse_input(sys.stdin.read())
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] Could not parse mdBook input: {escape(str(e))}")
        sys.exit(1)

    try:
        book = preprocessor.run(book_ctx, book)
    except OpenGitRepoError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    click.echo(dump_book(book))


@main.command(name='supports')
@click.argument('renderer')
def supports(renderer: str):
    """Tell mdBook whether RENDERER is supported (exit status 0 if so)."""
    if not OpenGitRepoPreprocessor().supports_renderer(renderer):
        sys.exit(1)


@main.command(name='links')
@click.option(
    '--book-root',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default='.',
    show_default=True,
    help='Directory containing book.toml'
)
def links(book_root: Path):
    """Show the edit link each markdown file of the book would get.

    A dry run for checking the configuration; no file is modified.

    Example:
        mdbook-open-git-repo links --book-root ./my-book
    """
    book_toml = book_root / 'book.toml'
    if not book_toml.exists():
        err_console.print(f"[red]Error:[/red] book.toml not found in {book_root}")
        sys.exit(1)

    try:
        with open(book_toml, 'rb') as f:
            book_config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        err_console.print(f"[red]Error:[/red] Could not parse book.toml: {escape(str(e))}")
        sys.exit(1)

    try:
        git_root = find_repo_root(book_root)
        config = load_footer_config(book_config)
    except OpenGitRepoError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if config is None:
        err_console.print(
            "[yellow]Warning:[/yellow] output.html.git-repository-url is not set; "
            "no links would be added"
        )
        return

    src_root = book_root / config.src_dir
    console.print(f"\n[bold blue]{config.host.display_name}[/bold blue] {config.repository_url}")
    console.print(f"Branch: {config.branch}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Chapter", style="cyan")
    table.add_column("Edit link")

    for md_file in sorted(src_root.rglob('*.md')):
        chapter_path = md_file.relative_to(src_root).as_posix()
        try:
            relpath = relativize_chapter_path(git_root, src_root, chapter_path)
        except OpenGitRepoError as e:
            table.add_row(chapter_path, f"[red]{escape(str(e))}[/red]")
            continue
        if relpath is None:
            continue
        url = build_edit_url(config.repository_url, config.host, config.branch, relpath)
        table.add_row(chapter_path, url)

    console.print(table)
