# ==============================================
# DateReconciler
# ==============================================
#
# PURPOSE:
#   Give every package a real `modified` and `created` datetime and
#   turn every value of the `time` mapping into a datetime.
#
# RESOLUTION ORDER (first usable value wins):
# -------------------------------------------
#   modified: modified -> mtime -> time.modified -> time[newest] -> epoch
#   created:  created  -> ctime -> time.created  -> time[oldest] -> epoch
#
#   The chains only run when one of the two fields is unset.
#   The epoch is handed in by the caller (see config.NormalizerConfig).
#
# CONVERSION (to_datetime):
# -------------------------
#   datetime       -> unchanged (naive values are taken as UTC)
#   date           -> midnight UTC
#   str            -> parsed with dateutil, naive results taken as UTC;
#                     missing parts come from 1970-01-01, never the clock
#   int / float    -> milliseconds since the unix epoch
#   {"time": ...}  -> converted from the nested value (unpublish markers)
#   anything else  -> None
#
#   `time` keeps every key: an entry that cannot be converted becomes
#   the epoch, so markers such as `time.unpublished` survive.
#
# ==============================================

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional, Sequence

from dateutil import parser as date_parser

from .type_detector import MISSING, TypeDetector, ValueType

logger = logging.getLogger(__name__)

# Fills the parts a partial date string leaves out ("March", "2019").
_PARSE_DEFAULT = datetime(1970, 1, 1)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_datetime(value: Any) -> Optional[datetime]:
    kind = TypeDetector.detect(value)

    if kind is ValueType.DATE:
        if isinstance(value, datetime):
            return _as_utc(value)
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if kind is ValueType.STRING:
        text = value.strip()
        if not text:
            return None
        try:
            return _as_utc(date_parser.parse(text, default=_PARSE_DEFAULT))
        except (ValueError, OverflowError) as e:
            logger.debug("Unparseable date %r: %s", value, e)
            return None

    if kind is ValueType.NUMBER:
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (ValueError, OverflowError, OSError) as e:
            logger.debug("Timestamp %r out of range: %s", value, e)
            return None

    if kind is ValueType.OBJECT and "time" in value:
        return to_datetime(value["time"])

    return None


class DateReconciler:
    def __init__(self, epoch: datetime):
        self.epoch = _as_utc(epoch)

    def reconcile(self, record: Mapping[str, Any], releases: Sequence[str]) -> Dict[str, Any]:
        """
        Resolve `modified`, `created` and convert the `time` mapping.

        Args:
            record: Package record whose `time` field is already a mapping
            releases: Release history, greatest first

        Returns:
            Dict with `modified`, `created` and `time` keys, all dates converted
        """
        time = record.get("time")
        time = time if TypeDetector.is_object(time) else {}

        modified = record.get("modified", MISSING)
        created = record.get("created", MISSING)

        if not TypeDetector.is_set(modified) or not TypeDetector.is_set(created):
            newest = releases[0] if releases else None
            oldest = releases[-1] if releases else None
            modified = self._first_set(
                modified, record.get("mtime"), time.get("modified"), time.get(newest) if newest else None,
            )
            created = self._first_set(
                created, record.get("ctime"), time.get("created"), time.get(oldest) if oldest else None,
            )

        return {
            "modified": self._coerce(modified, "modified"),
            "created": self._coerce(created, "created"),
            "time": self._convert_time(time),
        }

    def _first_set(self, *candidates: Any) -> Any:
        for candidate in candidates:
            if TypeDetector.is_set(candidate):
                return candidate
        return self.epoch

    def _coerce(self, value: Any, key: str) -> datetime:
        converted = to_datetime(value)
        if converted is None:
            logger.debug("Field %r holds no usable date (%r); using epoch", key, value)
            return self.epoch
        return converted

    def _convert_time(self, time: Mapping[str, Any]) -> Dict[str, datetime]:
        converted = {}
        for key, value in time.items():
            converted[key] = self._coerce(value, f"time[{key!r}]")
        return converted
