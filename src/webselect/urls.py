"""Normalization of user-supplied target URLs.

Total and side-effect free: any string goes in, a string comes out. Whether
the result is actually fetchable is only discovered by the fetcher.
"""

from __future__ import annotations

import re

_SCHEME_SLASHES_RE = re.compile(r"(https?):/+", re.MULTILINE)


def normalize_url(raw: str) -> str:
    """Canonicalize ``raw`` into an absolute http(s) URL.

    Collapses any run of slashes after ``http:``/``https:`` to exactly two,
    then prepends ``https://`` when the result does not start with ``http``.
    """
    url = _SCHEME_SLASHES_RE.sub(r"\1://", raw)

    if not url.startswith("http"):
        return "https://" + url

    return url
