"""
Start URL normalization and domain policy.

Resolves a W3C manifest's ``start_url`` against the hosted site's URL and
rejects start URLs that leave the site's domain. A start URL on a subdomain
is accepted when its last two labels equal the site's hostname
(``shop.example.com`` for ``example.com``). This is an approximation of the
registrable domain; multi-label public suffixes such as ``co.uk`` are not
recognized.

This module is part of MANIFOLD_ENGINE - Web App Manifest Engine.
"""

import logging
import re
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit

from ..constants import BASE_MANIFEST_FORMAT, DEFAULT_START_URL
from ..core.types import ManifestInfo
from ..exceptions import (DomainMismatchError, ManifestFormatError,
                          StartUrlError)

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")
_SITE_SCHEMES = ("http", "https")


def is_url(value: Any) -> bool:
    """Return True if ``value`` parses as a URL reference (absolute or relative)."""
    if not isinstance(value, str) or not value or _WHITESPACE.search(value):
        return False
    try:
        parts = urlsplit(value)
        # Accessing port validates it
        parts.port
    except ValueError:
        return False
    return True


def _is_site_url(value: Any) -> bool:
    if not is_url(value):
        return False
    parts = urlsplit(value)
    return parts.scheme.lower() in _SITE_SCHEMES and bool(parts.hostname)


def _registrable_domain(hostname: str) -> Optional[str]:
    labels = hostname.split(".")
    if len(labels) < 2 or not all(labels[-2:]):
        return None
    return ".".join(labels[-2:])


def is_same_site(site_hostname: str, start_hostname: str) -> bool:
    """
    Apply the domain policy to two hostnames.

    Args:
        site_hostname: Hostname of the hosted site
        start_hostname: Hostname of the resolved start URL

    Returns:
        True if the hostnames are equal, or the start hostname reduced to its
        last two labels equals the site hostname (case-insensitive)
    """
    site = site_hostname.lower()
    start = start_hostname.lower()
    if site == start:
        return True
    return _registrable_domain(start) == site


def get_default_short_name(site_url: str) -> str:
    """
    Derive a short name from a site URL.

    Example:
        >>> get_default_short_name("https://www.contoso.com/app")
        'Contoso'
    """
    hostname = urlsplit(site_url).hostname or ""
    if hostname.startswith("www."):
        hostname = hostname[len("www."):]
    return hostname.split(".")[0].capitalize()


def validate_and_normalize_start_url(
    site_url: Optional[str], manifest_info: ManifestInfo
) -> ManifestInfo:
    """
    Validate a W3C manifest's start_url and resolve it against the site URL.

    The manifest content is modified in place: a missing start_url becomes
    ``"/"`` and, when a site URL is given, start_url becomes absolute and
    ``manifest_info.default`` receives a short name derived from the site.

    Args:
        site_url: URL of the hosted site, or None to skip resolution
        manifest_info: Manifest in W3C format

    Returns:
        ``manifest_info``

    Raises:
        ManifestFormatError: If the manifest is not in W3C format
        StartUrlError: If start_url or the site URL is not a valid URL
        DomainMismatchError: If the start URL is outside the site's domain
    """
    if manifest_info.format != BASE_MANIFEST_FORMAT or manifest_info.content is None:
        raise ManifestFormatError(
            "The manifest found is not a W3C manifest.", manifest_format=manifest_info.format
        )

    content = manifest_info.content
    start_url = content.get("start_url")
    if start_url:
        if not is_url(start_url):
            raise StartUrlError(
                f"The manifest's start_url member is not a valid URL: '{start_url}'"
            )
    else:
        start_url = content["start_url"] = DEFAULT_START_URL

    if not site_url:
        return manifest_info

    if not _is_site_url(site_url):
        raise StartUrlError(f"The site URL is not a valid URL: '{site_url}'")

    site_hostname = urlsplit(site_url).hostname
    start_hostname = urlsplit(start_url).hostname
    if start_hostname and not is_same_site(site_hostname, start_hostname):
        raise DomainMismatchError(
            f"The domain of the hosted site ({site_hostname}) does not match "
            f"the domain of the manifest's start_url member ({start_hostname})",
            site_hostname=site_hostname,
            start_hostname=start_hostname,
        )

    content["start_url"] = urljoin(site_url, start_url)
    manifest_info.default = {"short_name": get_default_short_name(site_url)}
    logger.debug(f"Resolved start_url to '{content['start_url']}'")

    return manifest_info
