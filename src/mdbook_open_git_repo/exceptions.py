"""
Custom exceptions for the preprocessor.
"""
from pathlib import Path


class OpenGitRepoError(Exception):
    """Base exception for the open-git-repo preprocessor."""
    pass


class ConfigurationError(OpenGitRepoError):
    """Raised when book.toml settings are missing the right types or values."""
    pass


class InvalidHostConfigError(ConfigurationError):
    """Raised when source-control-host names an unknown host."""
    def __init__(self, host: str):
        self.host = host
        super().__init__(
            f"Invalid source control host {host!r}. "
            "Valid values for source-control-host are 'github' and 'gitlab'"
        )


class UnresolvedHostError(ConfigurationError):
    """Raised when the host cannot be inferred from the repository URL."""
    def __init__(self, repository_url: str):
        self.repository_url = repository_url
        super().__init__(
            f"Failed to determine source control host from URL {repository_url!r}. "
            "Please specify source-control-host in your configuration"
        )


class RepositoryRootNotFoundError(OpenGitRepoError):
    """Raised when no .git marker exists in any parent of the book root."""
    def __init__(self, start_path: Path):
        self.start_path = start_path
        super().__init__(f"No git repository found at or above {start_path}")


class PathOutsideRepositoryError(OpenGitRepoError):
    """Raised when a chapter resolves to a file outside the repository root."""
    def __init__(self, path: Path, repo_root: Path):
        self.path = path
        self.repo_root = repo_root
        super().__init__(f"Chapter file {path} is not inside the git repository at {repo_root}")
