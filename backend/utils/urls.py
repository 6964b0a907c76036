"""URL helpers for page-scan requests."""

from urllib.parse import urlparse


def domain_from_url(url: str, default: str = "unknown") -> str:
    """Return the lower-cased host of a page URL, the way the extension records ``location.hostname``."""
    return urlparse(url).hostname or default
