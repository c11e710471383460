"""Typed configuration read from the book's book.toml."""

import logging
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .host import resolve_host
from .schema import SourceControlHost

logger = logging.getLogger(__name__)

PREPROCESSOR_NAME = 'open-git-repo'

DEFAULT_BRANCH = 'main'
DEFAULT_EDIT_TEXT = 'Found a bug? '
DEFAULT_LINK_TEXT_TEMPLATE = 'Edit this file on {host}.'
DEFAULT_SRC_DIR = 'src'


class PreprocessorTable(BaseModel):
    """The [preprocessor.open-git-repo] table.

    mdBook's own keys (command, renderers, before, after) are ignored.
    """

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    source_control_host: Optional[str] = Field(None, alias='source-control-host')
    link_text: Optional[str] = Field(None, alias='link-text')
    edit_text: str = Field(DEFAULT_EDIT_TEXT, alias='edit-text')


class HtmlOutputTable(BaseModel):
    """The parts of [output.html] this preprocessor reads besides the URL."""

    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    git_branch: str = Field(DEFAULT_BRANCH, alias='git-branch')


class BookTable(BaseModel):
    """The parts of [book] this preprocessor reads."""

    model_config = ConfigDict(extra='ignore')

    src: str = DEFAULT_SRC_DIR


class FooterConfig(BaseModel):
    """Resolved settings for one preprocessor run."""

    model_config = ConfigDict(frozen=True)

    repository_url: str
    host: SourceControlHost
    branch: str = DEFAULT_BRANCH
    link_text: str
    edit_text: str = DEFAULT_EDIT_TEXT
    src_dir: str = DEFAULT_SRC_DIR

    @field_validator('repository_url')
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip('/')


def _table(config: Mapping[str, Any], *keys: str) -> Mapping[str, Any]:
    """Walk nested tables, returning an empty one for anything missing."""
    table: Any = config
    for key in keys:
        table = table.get(key) if isinstance(table, Mapping) else None
    return table if isinstance(table, Mapping) else {}


def load_footer_config(book_config: Mapping[str, Any]) -> Optional[FooterConfig]:
    """Validate the book configuration once and resolve the host.

    Returns None when output.html.git-repository-url is absent or not a
    string, in which case the preprocessor has nothing to do. Raises
    ConfigurationError for any other invalid setting.
    """
    html = _table(book_config, 'output', 'html')

    repository_url = html.get('git-repository-url')
    if not isinstance(repository_url, str):
        logger.debug("No usable output.html.git-repository-url configured: %r", repository_url)
        return None
    logger.debug("Repository URL: %s", repository_url)

    try:
        html_table = HtmlOutputTable.model_validate(html)
        tool_table = PreprocessorTable.model_validate(
            _table(book_config, 'preprocessor', PREPROCESSOR_NAME)
        )
        book_table = BookTable.model_validate(_table(book_config, 'book'))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    host = resolve_host(tool_table.source_control_host, repository_url)
    logger.debug("Source control host: %s", host.value)

    link_text = tool_table.link_text
    if link_text is None:
        link_text = DEFAULT_LINK_TEXT_TEMPLATE.format(host=host.display_name)

    config = FooterConfig(
        repository_url=repository_url,
        host=host,
        branch=html_table.git_branch,
        link_text=link_text,
        edit_text=tool_table.edit_text,
        src_dir=book_table.src,
    )
    logger.debug("Link text: %s", config.link_text)
    logger.debug("Edit text: %s", config.edit_text)
    logger.debug("Git branch: %s", config.branch)
    return config
