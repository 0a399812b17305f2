"""
Locator helpers for the ``azure-blob://`` scheme.

A locator addresses a blob through the multi-storage layer only; it is not a
fetchable HTTP URL. The host component is the container name and the path
component is the blob name:

    azure-blob://<container>/<segment>[/<segment>...]

Empty path segments are dropped everywhere, since the blob service rejects
names with repeated slashes.
"""

from typing import Optional
from urllib.parse import urlparse

SCHEME = "azure-blob"
SEPARATOR = "://"


def clean_path(path: str) -> str:
    """Collapse leading, trailing and repeated slashes."""
    return "/".join(segment for segment in path.split("/") if segment)


def build_locator(path: str, container: str) -> str:
    return f"{SCHEME}{SEPARATOR}{container}/{clean_path(path)}"


def container_from_locator(locator: str) -> Optional[str]:
    """Return the container of ``locator``, or None if it is not a locator."""
    if SEPARATOR not in locator:
        return None
    return urlparse(locator).netloc


def path_from_locator(locator: str) -> Optional[str]:
    """Return the blob name of ``locator``, or None if it is not a locator."""
    if SEPARATOR not in locator:
        return None
    return clean_path(urlparse(locator).path)
