import copy
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..config import NormalizerConfig, get_config
from .cleanup import CleanupPass
from .dates import DateReconciler
from .field_defaults import GRAVATAR, FieldDefaulter, finalize_keywords
from .github_extractor import extract_github
from .gravatar import GravatarEnricher
from .releases import ReleaseResolver
from .type_detector import TypeDetector

logger = logging.getLogger(__name__)


class PackageNormalizer:
    def __init__(self, config: Optional[NormalizerConfig] = None):
        self.config = config or NormalizerConfig()
        self.release_resolver = ReleaseResolver(loose=self.config.loose_semver)
        self.field_defaulter = FieldDefaulter(
            enrichers={GRAVATAR: GravatarEnricher(self.config.gravatar_base_url)}
        )
        self.date_reconciler = DateReconciler(self.config.epoch)
        self.cleanup = CleanupPass()

    def normalize(self, raw_record: Any) -> Dict[str, Any]:
        if not TypeDetector.is_object(raw_record):
            logger.debug("Ignoring package record of type %s", TypeDetector.detect(raw_record).value)
            return {}

        record = copy.deepcopy(dict(raw_record))

        release_set = self.release_resolver.resolve(record)
        latest = release_set.latest

        record["dist-tags"] = release_set.dist_tags
        self._set_identity(record, latest)
        self._set_optional(record, "github", extract_github(record))
        record["releases"] = release_set.releases
        record["latest"] = latest

        record.update(self.field_defaulter.apply(record, latest))
        finalize_keywords(record)

        record.update(self.date_reconciler.reconcile(record, release_set.releases))

        return self.cleanup.apply(record, latest)

    def normalize_batch(self, records: Iterable[Any]) -> List[Dict[str, Any]]:
        return [self.normalize(record) for record in records]

    def _set_identity(self, record: Dict[str, Any], latest: Dict[str, Any]) -> None:
        identity = None
        for source, key in ((record, "name"), (record, "_id"), (latest, "name"), (latest, "_id")):
            candidate = source.get(key)
            if TypeDetector.is_string(candidate) and candidate:
                identity = candidate
                break

        self._set_optional(record, "_id", identity)
        self._set_optional(record, "name", identity)

    @staticmethod
    def _set_optional(record: Dict[str, Any], key: str, value: Any) -> None:
        if value is None:
            record.pop(key, None)
        else:
            record[key] = value


_default_normalizer: Optional[PackageNormalizer] = None


def packages(record: Any, config: Optional[NormalizerConfig] = None) -> Dict[str, Any]:
    """
    Normalize package data.

    Args:
        record: Raw package document, trusted for nothing
        config: Normalizer settings; get_config().normalizer when omitted

    Returns:
        The cleaned up package, or {} for anything that is not a mapping

    Raises:
        ValueError: If config is omitted and the environment holds a bad value
    """
    global _default_normalizer

    if config is not None:
        return PackageNormalizer(config).normalize(record)

    # Rebuilt whenever reset_config() produced a new configuration
    config = get_config().normalizer
    if _default_normalizer is None or _default_normalizer.config is not config:
        _default_normalizer = PackageNormalizer(config)
    return _default_normalizer.normalize(record)


normalize_package = packages


def normalize_packages(records: Iterable[Any], config: Optional[NormalizerConfig] = None) -> List[Dict[str, Any]]:
    return PackageNormalizer(config or get_config().normalizer).normalize_batch(records)
