"""
Decides from configuration alone whether the remote backend should be used.
"""

from __future__ import annotations

from typing import Optional

from portfolio.config import PLACEHOLDER_REMOTE_KEY, PLACEHOLDER_REMOTE_URL

# Values shipped as defaults here and by older `.env` templates.
PLACEHOLDER_REMOTE_URLS = frozenset(
    {PLACEHOLDER_REMOTE_URL, "https://placeholder.supabase.co"}
)
PLACEHOLDER_REMOTE_KEYS = frozenset({PLACEHOLDER_REMOTE_KEY})


def is_remote_available(url: Optional[str], key: Optional[str]) -> bool:
    """
    True when both values are set, non-blank and not placeholders.

    No connection is attempted, so a True result can still be followed by
    network failures; those are handled by the remote store as fallbacks.
    """
    url = (url or "").strip()
    key = (key or "").strip()
    if not url or not key:
        return False
    return url not in PLACEHOLDER_REMOTE_URLS and key not in PLACEHOLDER_REMOTE_KEYS
