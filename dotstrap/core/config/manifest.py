"""
Manifest decoder — TOML bytes into plain Python data.
"""

from __future__ import annotations

import logging
import tomllib
from typing import Any

from dotstrap.core.errors import ManifestError

logger = logging.getLogger(__name__)


def decode_manifest(raw: bytes, source: str) -> dict[str, Any]:
    """Decode a TOML manifest.

    Args:
        raw: Body as fetched.
        source: Where it came from, for error messages.

    Raises:
        ManifestError: If the body is not UTF-8 or not valid TOML.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ManifestError(f"{source} is not valid UTF-8: {e}") from e

    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid TOML in {source}: {e}") from e

    logger.debug("Decoded %s (%d top-level keys)", source, len(data))
    return data
