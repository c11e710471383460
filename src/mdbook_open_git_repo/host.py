"""Source control host resolution."""

from typing import Optional

from .exceptions import InvalidHostConfigError, UnresolvedHostError
from .schema import SourceControlHost


def host_from_url(repository_url: str) -> Optional[SourceControlHost]:
    """Guess the host from the domain contained in the repository URL."""
    for host in SourceControlHost:
        if host.domain in repository_url:
            return host
    return None


def resolve_host(explicit_host: Optional[str], repository_url: str) -> SourceControlHost:
    """Decide which host's URL conventions apply.

    An explicitly configured host always wins, since the repository URL may
    point at a proxy or mirror. Only when none is configured is the URL
    inspected.
    """
    if explicit_host is not None:
        try:
            return SourceControlHost(explicit_host)
        except ValueError:
            raise InvalidHostConfigError(explicit_host) from None

    host = host_from_url(repository_url)
    if host is None:
        raise UnresolvedHostError(repository_url)
    return host
