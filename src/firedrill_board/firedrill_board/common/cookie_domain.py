from __future__ import annotations

import logging
from typing import Optional

logger = logging.getLogger(__name__)


def get_cookie_domain(host: Optional[str], *, production: bool) -> Optional[str]:
    """Session cookie domain shared across sibling subdomains.

    "firedrill.example.org" -> ".example.org". Only applies in production.
    """

    if not production:
        return None

    host = (host or "").strip()
    if not host:
        logger.warning("SITE_HOST not set - cookies will not be shared across subdomains")
        return None

    parts = host.split(".")
    if len(parts) < 2:
        logger.warning("Invalid host format: %s - expected subdomain.domain.tld", host)
        return None

    return "." + ".".join(parts[-2:])
