from __future__ import annotations

import hashlib


DEFAULT_TTL_SECONDS = 60 * 10

CATALOG_KEY = "wr_catalog"


def source_text_key(location: str) -> str:
    # locations may be long URLs
    digest = hashlib.sha1(location.encode("utf-8")).hexdigest()
    return f"wr_source:{digest}"
