"""
Remote fetcher — blocking HTTP GET returning the raw body.
"""

from __future__ import annotations

import logging
import os
import urllib.error
import urllib.request

from dotstrap.core.errors import FetchError

logger = logging.getLogger(__name__)

USER_AGENT = "dotstrap/0.1"

# Seconds to wait for a single HTTP request
HTTP_TIMEOUT = float(os.environ.get("DOTSTRAP_HTTP_TIMEOUT", "30"))


def download(url: str, headers: dict[str, str] | None = None) -> bytes:
    """Fetch ``url`` and return the response body.

    Raises:
        FetchError: On any transport error or non-2xx status.
    """
    logger.debug("GET %s", url)
    req = urllib.request.Request(
        url,
        headers={"User-Agent": USER_AGENT, **(headers or {})},
    )
    try:
        with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT) as resp:
            return resp.read()
    except urllib.error.HTTPError as e:
        raise FetchError(url, f"HTTP {e.code} {e.reason}") from e
    except (urllib.error.URLError, OSError) as e:
        raise FetchError(url, str(getattr(e, "reason", e))) from e
