# ==============================================
# NORMALIZATION
# ==============================================
#
# This package turns untrusted registry documents into
# canonical package and user records. Everything in here
# is a pure, synchronous, in-memory transform.
#
# Modules:
# --------
# - type_detector.py      → Classify the runtime kind of any value
# - semver_service.py     → Validate / compare version strings (semver lib)
# - github_extractor.py   → Find "user/repo" in a package record
# - releases.py           → Sorted release history + latest release
# - gravatar.py           → Avatar URL from an email address
# - field_defaults.py     → Table-driven field defaulting + enrichment
# - social.py             → Github / twitter handle parsers
# - dates.py              → modified / created / time reconciliation
# - cleanup.py            → starred, unpublished, noise removal
# - package_normalizer.py → packages() entry point
# - user_normalizer.py    → users() entry point
#
# ==============================================

from .type_detector import MISSING, TypeDetector, ValueType
from .releases import ReleaseResolver, ReleaseSet
from .gravatar import GravatarEnricher, gravatar
from .field_defaults import PACKAGE_FIELDS, FieldDefaulter, FieldSpec
from .dates import DateReconciler, to_datetime
from .cleanup import CleanupPass
from .github_extractor import extract_github
from .package_normalizer import PackageNormalizer, normalize_package, normalize_packages, packages
from .user_normalizer import UserNormalizer, normalize_user, normalize_users, users

__all__ = [
    "MISSING",
    "TypeDetector",
    "ValueType",
    "ReleaseResolver",
    "ReleaseSet",
    "GravatarEnricher",
    "gravatar",
    "PACKAGE_FIELDS",
    "FieldDefaulter",
    "FieldSpec",
    "DateReconciler",
    "to_datetime",
    "CleanupPass",
    "extract_github",
    "PackageNormalizer",
    "normalize_package",
    "normalize_packages",
    "packages",
    "UserNormalizer",
    "normalize_user",
    "normalize_users",
    "users",
]
