"""Query-to-label matching.

Queries are regular expressions searched anywhere in a label. An empty query
matches everything. A query that does not compile, or any query when regex
mode is off, is matched as a literal substring.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

logger = logging.getLogger(__name__)

MATCH_ALL = ".*"
_PATTERN_CACHE: dict[tuple[str, bool], re.Pattern[str]] = {}
_PATTERN_CACHE_MAX = 256


def clear_pattern_cache() -> None:
    _PATTERN_CACHE.clear()


def compile_query(query: str, regex: bool = True) -> re.Pattern[str]:
    """Return the compiled pattern for ``query``, memoized per mode."""
    key = (query, regex)
    cached = _PATTERN_CACHE.get(key)
    if cached is not None:
        return cached

    if not query:
        pattern = re.compile(MATCH_ALL)
    elif not regex:
        pattern = re.compile(re.escape(query))
    else:
        try:
            pattern = re.compile(query)
        except re.error as exc:
            logger.debug("query %r is not a valid pattern (%s); matching literally", query, exc)
            pattern = re.compile(re.escape(query))

    if len(_PATTERN_CACHE) >= _PATTERN_CACHE_MAX:
        _PATTERN_CACHE.clear()
    _PATTERN_CACHE[key] = pattern
    return pattern


def match_labels(query: str, labels: Iterable[str], regex: bool = True) -> list[str]:
    """Return labels matching ``query``, preserving input order."""
    pattern = compile_query(query, regex=regex)
    return [label for label in labels if pattern.search(label) is not None]
