# ==============================================
# Registry Normalize
# ==============================================
#
# Package Structure:
#
# registry_normalize/
# ├── normalization/    # Package + user record normalizers
# ├── serialization.py  # JSON-safe rendering of normalized records
# ├── config.py         # Configuration management
# └── cli.py            # Command line entry point
#
# ==============================================

from .normalization import normalize_package, normalize_user, packages, users

__version__ = "0.1.0"

__all__ = ["normalize_package", "normalize_user", "packages", "users"]
