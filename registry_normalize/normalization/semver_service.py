# ==============================================
# Semver Service
# ==============================================
#
# PURPOSE:
#   Thin adapter over the `semver` library with the contract the
#   release resolver expects from a version parser:
#
#     - is_valid(version, loose) never raises
#     - compare(a, b) orders two valid versions by precedence
#
# LOOSE MODE:
#   Registry documents carry keys such as "v1.2.3", "=1.2.3",
#   " 1.2.3 " or "1.2.3beta". Loose mode accepts those the way
#   registry clients do: surrounding whitespace and leading "v"/"="
#   are dropped, and a pre-release tag glued to the patch number
#   gets its hyphen back. Strict mode parses the string as given.
#
# ==============================================

import logging
import re
from functools import cmp_to_key
from typing import Iterable, List, Optional

import semver

logger = logging.getLogger(__name__)

# Same cap registry clients apply before even trying to parse.
MAX_LENGTH = 256

_LOOSE_PREFIX = re.compile(r"^[v=\s]+")
_GLUED_PRERELEASE = re.compile(r"^(\d+\.\d+\.\d+)([A-Za-z][0-9A-Za-z.-]*)((?:\+.*)?)$")


def _clean(version: str, loose: bool) -> str:
    if not loose:
        return version
    cleaned = _LOOSE_PREFIX.sub("", version.strip())
    glued = _GLUED_PRERELEASE.match(cleaned)
    if glued:
        cleaned = f"{glued.group(1)}-{glued.group(2)}{glued.group(3)}"
    return cleaned


def parse(version: str, loose: bool = True) -> Optional[semver.Version]:
    """Parse a version string, returning None when it is not valid semver."""
    if not isinstance(version, str) or len(version) > MAX_LENGTH:
        return None
    try:
        return semver.Version.parse(_clean(version, loose))
    except (ValueError, TypeError) as e:
        logger.debug("Rejected version %r: %s", version, e)
        return None


def is_valid(version: str, loose: bool = True) -> bool:
    return parse(version, loose) is not None


def compare(a: str, b: str, loose: bool = True) -> int:
    """
    Compare two version strings by semver precedence.

    Build metadata does not take part in precedence, so
    "1.0.0+a" and "1.0.0+b" compare equal.

    Raises:
        ValueError: If either string is not a valid version
    """
    left = parse(a, loose)
    right = parse(b, loose)
    if left is None or right is None:
        raise ValueError(f"Cannot compare invalid versions {a!r} and {b!r}")
    return left.compare(right)


def sort_descending(versions: Iterable[str], loose: bool = True) -> List[str]:
    """Sort valid versions greatest first; equal versions keep their input order."""
    return sorted(versions, key=cmp_to_key(lambda a, b: compare(b, a, loose)))
