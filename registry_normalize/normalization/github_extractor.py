# ==============================================
# Github Extraction
# ==============================================
#
# PURPOSE:
#   Find the github "<user>/<repo>" a package record points at.
#   Publishers put this in many places and in many shapes, so
#   every candidate field is inspected in a fixed order and the
#   first usable match wins.
#
# CANDIDATE FIELDS (in order):
# ----------------------------
#   github, repository, repositories, homepage, bugs, url
#
#   Each may be a string, a mapping with a "url" key, or (for
#   repository / repositories) a list of those.
#
# ACCEPTED SHAPES:
# ----------------
#   https://github.com/user/repo
#   git+https://github.com/user/repo.git
#   git://github.com/user/repo.git
#   git@github.com:user/repo.git
#   github:user/repo
#   user/repo                (github / repository fields only)
#   https://user.github.io/repo
#
# ==============================================

import re
from typing import Any, Iterator, Optional

from .type_detector import TypeDetector

_CANDIDATE_FIELDS = ("github", "repository", "repositories", "homepage", "bugs", "url")
_SHORTHAND_FIELDS = {"github", "repository", "repositories"}

_GITHUB_URL = re.compile(r"github\.com[:/]+([^/\s:]+)/([^/#?\s]+)", re.IGNORECASE)
_GITHUB_PREFIX = re.compile(r"^github:([^/\s]+)/([^/#?\s]+)", re.IGNORECASE)
_GITHUB_PAGES = re.compile(r"^(?:https?://)?([^./\s]+)\.github\.io/([^/#?\s]+)", re.IGNORECASE)
_SHORTHAND = re.compile(r"^([A-Za-z0-9][A-Za-z0-9-]*)/([A-Za-z0-9._-]+)$")


def _format(user: str, repo: str) -> Optional[str]:
    if repo.lower().endswith(".git"):
        repo = repo[:-4]
    if not user or not repo:
        return None
    return f"{user}/{repo}"


def _candidates(value: Any) -> Iterator[str]:
    if TypeDetector.is_string(value):
        yield value.strip()
    elif TypeDetector.is_object(value):
        url = value.get("url")
        if TypeDetector.is_string(url):
            yield url.strip()
    elif TypeDetector.is_array(value):
        for item in value:
            yield from _candidates(item)


def parse_github_url(value: str, allow_shorthand: bool = False) -> Optional[str]:
    """
    Extract "<user>/<repo>" from a single URL-ish string.

    Args:
        value: A URL, git remote or shorthand reference
        allow_shorthand: Accept a bare "user/repo" string

    Returns:
        The canonical identifier, or None if the string does not point at github
    """
    for pattern in (_GITHUB_URL, _GITHUB_PREFIX, _GITHUB_PAGES):
        match = pattern.search(value)
        if match:
            return _format(match.group(1), match.group(2))

    if allow_shorthand:
        match = _SHORTHAND.match(value)
        if match:
            return _format(match.group(1), match.group(2))

    return None


def extract_github(record: Any) -> Optional[str]:
    if not TypeDetector.is_object(record):
        return None

    for key in _CANDIDATE_FIELDS:
        for candidate in _candidates(record.get(key)):
            found = parse_github_url(candidate, allow_shorthand=key in _SHORTHAND_FIELDS)
            if found:
                return found

    return None
