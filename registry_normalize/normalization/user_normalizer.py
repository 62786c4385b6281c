import copy
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..config import NormalizerConfig, get_config
from .gravatar import GravatarEnricher
from .social import normalize_github, normalize_twitter
from .type_detector import TypeDetector

logger = logging.getLogger(__name__)


class UserNormalizer:
    """
    Normalizes user profile records.

    People can put anything in their profile fields, so we decide on
    the internal structure and not the users: social fields are reduced
    to bare handles and fields that are not strings are removed.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        self.config = config or NormalizerConfig()
        self.gravatar = GravatarEnricher(self.config.gravatar_base_url)

    def normalize(self, raw_record: Any) -> Dict[str, Any]:
        if not TypeDetector.is_object(raw_record):
            logger.debug("Ignoring user record of type %s", TypeDetector.detect(raw_record).value)
            return {}

        record = copy.deepcopy(dict(raw_record))

        self._normalize_handle(record, "github", normalize_github)
        self._normalize_handle(record, "twitter", normalize_twitter)

        if "email" in record:
            record = self.gravatar.apply_once(record)

        return record

    def normalize_batch(self, records: Iterable[Any]) -> List[Dict[str, Any]]:
        return [self.normalize(record) for record in records]

    def _normalize_handle(
        self,
        record: Dict[str, Any],
        key: str,
        parse: Callable[[str], Optional[str]],
    ) -> None:
        if key not in record:
            return

        value = record[key]
        handle = parse(value) if TypeDetector.is_string(value) else None

        if handle is None:
            logger.debug("Removing unusable %s handle %r", key, value)
            del record[key]
        else:
            record[key] = handle


def users(record: Any, config: Optional[NormalizerConfig] = None) -> Dict[str, Any]:
    """
    Normalize user profile information.

    Args:
        record: The profile data
        config: Normalizer settings; get_config().normalizer when omitted

    Returns:
        The cleaned up profile, or {} for anything that is not a mapping
    """
    return UserNormalizer(config or get_config().normalizer).normalize(record)


normalize_user = users


def normalize_users(records: Iterable[Any], config: Optional[NormalizerConfig] = None) -> List[Dict[str, Any]]:
    return UserNormalizer(config or get_config().normalizer).normalize_batch(records)
