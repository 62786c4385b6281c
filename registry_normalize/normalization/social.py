# ==============================================
# Social Handles
# ==============================================
#
# PURPOSE:
#   Reduce whatever a user typed into their github / twitter
#   profile fields down to the bare handle. We build the URLs
#   ourselves, so only the handle is kept.
#
# PARSERS:
# --------
#   Each parser takes the raw string and returns the handle or None.
#   normalize_github / normalize_twitter try them in order and the
#   first one that returns a handle wins.
#
#   github:  try_github_url_pattern  -> try_github_bare_handle
#   twitter: try_twitter_at_handle   -> try_twitter_url_pattern
#                                    -> try_twitter_bare_handle
#
# ==============================================

import re
from typing import Callable, Optional, Sequence

Parser = Callable[[str], Optional[str]]

_GITHUB_URL = re.compile(r"github\.com/([^/]+)/?", re.IGNORECASE)
_GITHUB_PREFIX = re.compile(r"^(?:https?://)?(?:www\.)?github\.com/", re.IGNORECASE)

_TWITTER_URL = re.compile(r"twitter\.com/[#!@/]*([^/]+)/?", re.IGNORECASE)
_TWITTER_PREFIX = re.compile(r"^(?:https?://)?twitter\.com/", re.IGNORECASE)


def try_github_url_pattern(value: str) -> Optional[str]:
    match = _GITHUB_URL.search(value)
    return match.group(1) if match else None


def try_github_bare_handle(value: str) -> Optional[str]:
    return _GITHUB_PREFIX.sub("", value.strip())


def try_twitter_at_handle(value: str) -> Optional[str]:
    return value[1:] if value.startswith("@") else None


def try_twitter_url_pattern(value: str) -> Optional[str]:
    match = _TWITTER_URL.search(value)
    return match.group(1) if match else None


def try_twitter_bare_handle(value: str) -> Optional[str]:
    return _TWITTER_PREFIX.sub("", value.strip().lstrip("@"))


GITHUB_PARSERS: Sequence[Parser] = (try_github_url_pattern, try_github_bare_handle)
TWITTER_PARSERS: Sequence[Parser] = (
    try_twitter_at_handle,
    try_twitter_url_pattern,
    try_twitter_bare_handle,
)


def first_match(value: str, parsers: Sequence[Parser]) -> Optional[str]:
    for parser in parsers:
        handle = parser(value)
        if handle is not None:
            return handle
    return None


def normalize_github(value: str) -> Optional[str]:
    return first_match(value, GITHUB_PARSERS) or None


def normalize_twitter(value: str) -> Optional[str]:
    return first_match(value, TWITTER_PARSERS) or None
