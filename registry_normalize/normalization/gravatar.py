import hashlib
from typing import Any, List

from ..config import GRAVATAR_BASE_URL
from .type_detector import TypeDetector


def gravatar(data: Any, base_url: str = GRAVATAR_BASE_URL) -> Any:
    """
    Create a gravatar for the email on the given object.

    Args:
        data: Object that may carry an `email` field
        base_url: Prefix the hex digest is appended to

    Returns:
        A copy of `data` with `gravatar` set, or `data` itself when there
        is no usable email or it already carries a parameterised gravatar
    """
    if not TypeDetector.is_object(data):
        return data

    email = data.get("email")
    email = (email if TypeDetector.is_string(email) else "").lower().strip()

    current = data.get("gravatar")
    if not email or (TypeDetector.is_string(current) and "?" in current):
        return data

    # md5 for compatibility with gravatar addressing, not for security
    digest = hashlib.md5(email.encode("utf-8")).hexdigest()
    enriched = dict(data)
    enriched["gravatar"] = base_url + digest
    return enriched


class GravatarEnricher:
    """Gravatar enrichment exposed as a field-level step."""

    def __init__(self, base_url: str = GRAVATAR_BASE_URL):
        self.base_url = base_url

    def apply_once(self, value: Any) -> Any:
        return gravatar(value, self.base_url)

    def apply_to_each(self, values: List[Any]) -> List[Any]:
        return [gravatar(value, self.base_url) for value in values]
