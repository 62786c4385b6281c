import re
from typing import Any, Dict, Mapping

from .type_detector import TypeDetector

# The registry fills in this text when a package ships without a README.
_PLACEHOLDER_README = re.compile(r"no readme data found", re.IGNORECASE)


class CleanupPass:
    """
    Final pass over a normalized package.

    Derives `starred` and `unpublished` and drops fields that are
    noise (empty readme, attachments, orphaned readme file paths).
    """

    def apply(self, record: Dict[str, Any], latest: Mapping[str, Any]) -> Dict[str, Any]:
        # `users` is who starred the package, not its maintainers
        users = record.get("users")
        if not TypeDetector.is_object(users):
            users = latest.get("users")
        record["starred"] = list(users) if TypeDetector.is_object(users) else []

        if not record.get("readmeFilename"):
            record.pop("readmeFile", None)

        record.pop("_attachments", None)

        readme = record.get("readme")
        if not readme or (TypeDetector.is_string(readme) and _PLACEHOLDER_README.search(readme)):
            record.pop("readme", None)

        time = record.get("time")
        record["unpublished"] = record.get("_deleted") is True or (
            TypeDetector.is_object(time) and "unpublished" in time
        )

        return record
