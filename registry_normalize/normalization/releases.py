# ==============================================
# ReleaseResolver
# ==============================================
#
# PURPOSE:
#   Work out the release history of a package and which release
#   is "latest".
#
# WHY THIS CLASS EXISTS:
#   Registry documents list their versions in two places
#   (`versions` and `time`), neither is guaranteed to be present,
#   and both carry keys that are not versions at all ("modified",
#   "created", "unpublished", garbage from old publishers).
#   `dist-tags` may be missing or not even a mapping.
#
# CLASS: ReleaseResolver
# ----------------------
#   - resolve(record: dict) -> ReleaseSet
#       1. Collect candidate keys from `versions` then `time`
#       2. Keep only valid semver keys
#       3. Sort greatest first (stable for equal precedence)
#       4. Repair `dist-tags`, default `latest` to the greatest release
#       5. Look up the payload of the latest release
#
# ==============================================

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from . import semver_service
from .type_detector import TypeDetector

logger = logging.getLogger(__name__)


@dataclass
class ReleaseSet:
    """Output of release resolution."""
    releases: List[str] = field(default_factory=list)
    dist_tags: Dict[str, Any] = field(default_factory=dict)
    latest: Dict[str, Any] = field(default_factory=dict)

    @property
    def newest(self):
        return self.releases[0] if self.releases else None

    @property
    def oldest(self):
        return self.releases[-1] if self.releases else None


class ReleaseResolver:
    def __init__(self, loose: bool = True):
        self.loose = loose

    def resolve(self, record: Dict[str, Any]) -> ReleaseSet:
        versions = record.get("versions")
        versions = versions if TypeDetector.is_object(versions) else {}

        releases = semver_service.sort_descending(
            [candidate for candidate in self._candidates(record) if self._is_release(candidate)],
            loose=self.loose,
        )

        dist_tags = record.get("dist-tags")
        if TypeDetector.is_object(dist_tags):
            dist_tags = dict(dist_tags)
        else:
            if dist_tags is not None:
                logger.debug("Discarding dist-tags of type %s", TypeDetector.detect(dist_tags).value)
            dist_tags = {}

        if "latest" not in dist_tags and releases:
            dist_tags["latest"] = releases[0]

        tag = dist_tags.get("latest")
        latest = versions.get(tag) if TypeDetector.is_string(tag) else None
        if not TypeDetector.is_object(latest):
            latest = {}

        return ReleaseSet(releases=releases, dist_tags=dist_tags, latest=latest)

    def _candidates(self, record: Dict[str, Any]) -> List[str]:
        seen: Dict[str, None] = {}
        for source in ("versions", "time"):
            mapping = record.get(source)
            if TypeDetector.is_object(mapping):
                for key in mapping:
                    seen.setdefault(key, None)
        return list(seen)

    def _is_release(self, candidate: Any) -> bool:
        try:
            return semver_service.is_valid(candidate, self.loose)
        except Exception:
            # A broken version string must never abort resolution
            logger.debug("Version validation failed for %r", candidate, exc_info=True)
            return False
