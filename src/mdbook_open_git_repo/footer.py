"""Edit link and footer HTML generation."""

import html
from pathlib import PurePosixPath
from urllib.parse import quote

from .schema import SourceControlHost

# The id doubles as the marker for chapters that already carry a footer
FOOTER_MARKER = 'id="open-git-repo"'
FOOTER_START = f'<footer {FOOTER_MARKER}>'
FOOTER_END = '</footer>'


def build_edit_url(
    base_url: str,
    host: SourceControlHost,
    branch: str,
    relative_path: PurePosixPath,
) -> str:
    """Build the URL of the host's in-browser editor for a file.

    Format: {base_url}/{edit fragment}/{branch}/{relative_path}, e.g.
    https://github.com/acme/book/edit/main/src/intro.md
    """
    return f"{base_url}/{host.edit_fragment}/{branch}/{quote(relative_path.as_posix())}"


def render_footer(url: str, link_text: str, edit_text: str) -> str:
    """Render the footer element.

    link_text and edit_text are inserted as-is so they can carry inline HTML.
    """
    link = f'<a href="{html.escape(url, quote=True)}">{link_text}</a>'
    return f"{FOOTER_START}{edit_text}{link}{FOOTER_END}"


def has_footer(content: str) -> bool:
    """Check whether a previous run already added the footer."""
    return FOOTER_MARKER in content


def append_footer(content: str, footer: str) -> str:
    return f"{content}\n{footer}"
