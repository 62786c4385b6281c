# ==============================================
# Field Defaulting
# ==============================================
#
# PURPOSE:
#   Guarantee that a fixed set of package fields is present and of
#   the expected type, whatever the publisher sent us.
#
# HOW:
#   PACKAGE_FIELDS is an immutable table of FieldSpec entries. For
#   each entry, in order:
#
#     1. value = latest release's field
#                 -> top-level field
#                 -> fresh copy of the default
#        (empty scalars count as unset, containers do not)
#     2. optional coerce step (e.g. split keyword strings)
#     3. if the detected type differs from the default's type,
#        the default replaces the value
#     4. optional enrichment: applied to each element of a list,
#        or once to anything else
#
#   The input record is never modified; FieldDefaulter.apply returns
#   the resolved values and the caller merges them.
#
# ==============================================

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .gravatar import GravatarEnricher
from .type_detector import MISSING, TypeDetector, ValueType

logger = logging.getLogger(__name__)

_KEYWORD_SEPARATORS = re.compile(r"[\s|,]+")

GRAVATAR = "gravatar"


def coerce_keywords(value: Any) -> Any:
    """Split a keyword string on whitespace, comma and pipe runs."""
    if not TypeDetector.is_string(value):
        return value
    return [keyword for keyword in _KEYWORD_SEPARATORS.split(value) if keyword]


@dataclass(frozen=True)
class FieldSpec:
    key: str
    default: Callable[[], Any]
    enrich: Optional[str] = None
    coerce: Optional[Callable[[Any], Any]] = None

    def default_value(self) -> Any:
        return self.default()

    @property
    def expected_type(self) -> ValueType:
        return TypeDetector.detect(self.default())


PACKAGE_FIELDS: Tuple[FieldSpec, ...] = (
    FieldSpec("bundledDependencies", list),
    FieldSpec("dependencies", dict),
    FieldSpec("description", str),
    FieldSpec("devDependencies", dict),
    FieldSpec("engines", dict),
    FieldSpec("keywords", list, coerce=coerce_keywords),
    FieldSpec("maintainers", list, enrich=GRAVATAR),
    FieldSpec("optionalDependencies", dict),
    FieldSpec("peerDependencies", dict),
    FieldSpec("readme", str),
    FieldSpec("readmeFilename", str),
    FieldSpec("scripts", dict),
    FieldSpec("time", dict),
    FieldSpec("version", str),
    FieldSpec("versions", dict),
    FieldSpec("_npmUser", dict, enrich=GRAVATAR),
)


class FieldDefaulter:
    """
    Resolves every FieldSpec of a table against a record.

    Enrichment steps are looked up by name so the table itself stays
    free of configuration.
    """

    def __init__(
        self,
        fields: Tuple[FieldSpec, ...] = PACKAGE_FIELDS,
        enrichers: Optional[Mapping[str, Any]] = None,
    ):
        self.fields = fields
        self.enrichers = dict(enrichers) if enrichers is not None else {GRAVATAR: GravatarEnricher()}

    def apply(self, record: Mapping[str, Any], latest: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Resolve all table fields.

        Args:
            record: The top-level package record
            latest: Payload of the latest release ({} when unresolved)

        Returns:
            Mapping of field key to resolved, type-checked, enriched value
        """
        return {spec.key: self.resolve(spec, record, latest) for spec in self.fields}

    def resolve(self, spec: FieldSpec, record: Mapping[str, Any], latest: Mapping[str, Any]) -> Any:
        value = self._pick(spec, record, latest)

        if spec.coerce is not None:
            value = spec.coerce(value)

        expected = spec.expected_type
        if TypeDetector.detect(value) is not expected:
            logger.debug(
                "Field %r is %s, expected %s; using default",
                spec.key, TypeDetector.detect(value).value, expected.value,
            )
            value = spec.default_value()

        if spec.enrich is not None:
            value = self._enrich(spec, value)

        return value

    def _pick(self, spec: FieldSpec, record: Mapping[str, Any], latest: Mapping[str, Any]) -> Any:
        for source in (latest, record):
            candidate = source.get(spec.key, MISSING)
            if TypeDetector.is_set(candidate):
                return candidate
        return spec.default_value()

    def _enrich(self, spec: FieldSpec, value: Any) -> Any:
        enricher = self.enrichers.get(spec.enrich)
        if enricher is None:
            raise KeyError(f"No enricher registered for {spec.enrich!r}")

        if TypeDetector.is_array(value):
            return enricher.apply_to_each(list(value))
        return enricher.apply_once(value)


def finalize_keywords(values: Dict[str, Any]) -> Dict[str, Any]:
    """Post-table keyword pass: split strings, drop anything still not a list."""
    keywords = values.get("keywords", MISSING)
    if TypeDetector.is_string(keywords):
        keywords = coerce_keywords(keywords)
        values["keywords"] = keywords
    if not TypeDetector.is_array(keywords):
        values.pop("keywords", None)
    return values
