"""mdBook preprocessor adding "edit this file" links to chapters."""

from .preprocessor import OpenGitRepoPreprocessor
from .schema import Book, BookItem, Chapter, PreprocessorContext, SourceControlHost

__version__ = "0.1.0"

__all__ = [
    "OpenGitRepoPreprocessor",
    "Book",
    "BookItem",
    "Chapter",
    "PreprocessorContext",
    "SourceControlHost",
]
