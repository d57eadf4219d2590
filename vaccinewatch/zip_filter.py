from __future__ import annotations

import json
import logging

logger = logging.getLogger(__name__)


def load_zip_filter(path: str | None) -> frozenset[str]:
    """Read a JSON array of zip codes. Any problem means "no filter".

    Entries are matched exactly against postal codes, so a list holding only
    blank strings still filters everything out.
    """
    if not path:
        return frozenset()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        logger.warning("Failed to read zip list %s (%s: %s); considering all zip codes", path, type(e).__name__, e)
        return frozenset()
    except ValueError as e:
        # JSONDecodeError and UnicodeDecodeError
        logger.warning("Zip list %s is not valid JSON (%s); considering all zip codes", path, e)
        return frozenset()

    if not isinstance(raw, list) or not all(isinstance(z, str) for z in raw):
        logger.warning("Zip list %s must be a JSON array of strings; considering all zip codes", path)
        return frozenset()

    zips = frozenset(raw)
    logger.info("Loaded %d zip codes from %s", len(zips), path)
    return zips
