"""Pydantic models for the mdBook preprocessor JSON protocol."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


class HostConventions(NamedTuple):
    """URL conventions of a source control hosting provider."""
    domain: str
    edit_fragment: str
    display_name: str


class SourceControlHost(str, Enum):
    """Supported source control hosts."""
    # Declaration order is the URL detection order
    GITHUB = "github"
    GITLAB = "gitlab"

    @property
    def conventions(self) -> HostConventions:
        return _HOST_CONVENTIONS[self]

    @property
    def domain(self) -> str:
        """Domain searched for in the repository URL."""
        return self.conventions.domain

    @property
    def edit_fragment(self) -> str:
        """Path segment of the host's edit-in-browser view."""
        return self.conventions.edit_fragment

    @property
    def display_name(self) -> str:
        return self.conventions.display_name


_HOST_CONVENTIONS = {
    SourceControlHost.GITHUB: HostConventions("github.com", "edit", "GitHub"),
    SourceControlHost.GITLAB: HostConventions("gitlab.com", "-/edit", "GitLab"),
}


class Chapter(BaseModel):
    """A single chapter of the book."""

    model_config = ConfigDict(extra='allow')

    name: str = Field(..., description="Chapter title")
    content: str = Field(default="", description="Raw markdown content")
    number: Optional[list[int]] = Field(None, description="Section number, e.g. [1, 2]")
    sub_items: list["BookItem"] = Field(default_factory=list)
    path: Optional[str] = Field(
        None, description="Path relative to the src directory; None for draft chapters"
    )
    source_path: Optional[str] = None
    parent_names: list[str] = Field(default_factory=list)


class BookItem(BaseModel):
    """One entry of the book's summary: a chapter, a separator or a part title.

    mdBook encodes these as an externally tagged enum, i.e. ``{"Chapter": {...}}``,
    ``"Separator"`` or ``{"PartTitle": "..."}``.
    """

    chapter: Optional[Chapter] = None
    part_title: Optional[str] = None
    separator: bool = False

    @model_validator(mode='before')
    @classmethod
    def _from_tagged(cls, data: Any) -> Any:
        if data == "Separator":
            return {'separator': True}
        if isinstance(data, dict):
            if "Chapter" in data:
                return {'chapter': data["Chapter"]}
            if "PartTitle" in data:
                return {'part_title': data["PartTitle"]}
        return data

    @model_validator(mode='after')
    def _check_single_variant(self) -> "BookItem":
        variants = [self.chapter is not None, self.part_title is not None, self.separator]
        if sum(variants) != 1:
            raise ValueError("book item must be exactly one of Chapter, PartTitle or Separator")
        return self

    @model_serializer
    def _to_tagged(self) -> Any:
        if self.chapter is not None:
            return {"Chapter": self.chapter.model_dump(mode='json')}
        if self.part_title is not None:
            return {"PartTitle": self.part_title}
        return "Separator"


Chapter.model_rebuild()


class Book(BaseModel):
    """The whole book as handed over by mdBook."""

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    sections: list[BookItem] = Field(default_factory=list)
    non_exhaustive: Any = Field(default=None, alias="__non_exhaustive")

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter once, in display order (parents before sub-chapters)."""
        yield from _walk(self.sections)


def _walk(items: list[BookItem]) -> Iterator[Chapter]:
    for item in items:
        if item.chapter is not None:
            yield item.chapter
            yield from _walk(item.chapter.sub_items)


class PreprocessorContext(BaseModel):
    """Build context mdBook passes to every preprocessor."""

    model_config = ConfigDict(extra='allow')

    root: Path = Field(..., description="Directory containing book.toml")
    config: dict[str, Any] = Field(default_factory=dict, description="Parsed book.toml")
    renderer: str = "html"
    mdbook_version: str = ""


def parse_input(raw: str) -> tuple[PreprocessorContext, Book]:
    """Parse the ``[context, book]`` JSON array mdBook writes to stdin.

    Raises ValueError for malformed JSON and pydantic's ValidationError
    (itself a ValueError) for payloads of the wrong shape.
    """
    data = json.loads(raw)
    if not isinstance(data, list) or len(data) != 2:
        raise ValueError("expected a JSON array of [context, book]")

    ctx = PreprocessorContext.model_validate(data[0])
    book = Book.model_validate(data[1])
    return ctx, book


def dump_book(book: Book) -> str:
    """Serialize the book back into the JSON mdBook expects on stdout."""
    return json.dumps(book.model_dump(mode='json', by_alias=True), ensure_ascii=False)
