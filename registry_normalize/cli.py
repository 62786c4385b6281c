# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Run the normalizers from a shell. The normalizers never touch
#   files or the network; this module does the reading, fetching
#   and printing around them.
#
# COMMANDS:
# ---------
# 1. Normalize a package document from a file (or stdin with "-"):
#    python -m registry_normalize.cli package express.json
#    curl -s https://registry.npmjs.org/express | python -m registry_normalize.cli package -
#
# 2. Normalize a user profile:
#    python -m registry_normalize.cli user profile.json
#
# 3. Fetch a package document from the registry and normalize it:
#    python -m registry_normalize.cli fetch express
#    python -m registry_normalize.cli --indent 0 fetch @scope/name
#
# EXIT CODES:
# -----------
#   0  success
#   1  unreadable input, bad configuration or failed fetch
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from .config import AppConfig, get_config
from .normalization import PackageNormalizer, UserNormalizer
from .serialization import dumps

logger = logging.getLogger(__name__)


class RegistryFetchError(RuntimeError):
    """A package document could not be fetched or decoded."""


def read_record(path: str) -> Any:
    """
    Load one JSON document.

    Raises:
        ValueError: If the file cannot be read or is not JSON
    """
    try:
        if path == "-":
            return json.load(sys.stdin)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"{path} is not valid JSON: {e}") from e


def fetch_package(name: str, config: AppConfig, session: Optional[requests.Session] = None) -> Any:
    """
    Fetch the registry document of a package.

    Args:
        name: Package name, scoped names included
        config: Application configuration (registry URL, timeout)
        session: Optional requests session to reuse

    Returns:
        The decoded JSON document

    Raises:
        RegistryFetchError: On HTTP errors, timeouts or non-JSON bodies
    """
    url = config.client.registry_url.rstrip("/") + "/" + quote(name, safe="@")
    http = session or requests

    logger.info("Fetching %s", url)
    try:
        response = http.get(url, timeout=config.client.timeout_seconds)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as e:
        raise RegistryFetchError(f"Fetching {name} failed: {e}") from e
    except ValueError as e:
        raise RegistryFetchError(f"Registry returned invalid JSON for {name}: {e}") from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="registry-normalize",
        description="Normalize package registry documents and user profiles.",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (0 for compact)")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")

    subcommands = parser.add_subparsers(dest="command", required=True)

    package_cmd = subcommands.add_parser("package", help="Normalize a package document")
    package_cmd.add_argument("file", nargs="?", default="-", help="JSON file, '-' for stdin")

    user_cmd = subcommands.add_parser("user", help="Normalize a user profile")
    user_cmd.add_argument("file", nargs="?", default="-", help="JSON file, '-' for stdin")

    fetch_cmd = subcommands.add_parser("fetch", help="Fetch and normalize a package from the registry")
    fetch_cmd.add_argument("name", help="Package name")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = get_config()
        logging.basicConfig(
            level=(args.log_level or config.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    except ValueError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        if args.command == "package":
            result = PackageNormalizer(config.normalizer).normalize(read_record(args.file))
        elif args.command == "user":
            result = UserNormalizer(config.normalizer).normalize(read_record(args.file))
        else:
            result = PackageNormalizer(config.normalizer).normalize(fetch_package(args.name, config))
    except (ValueError, RegistryFetchError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    print(dumps(result, indent=args.indent or None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
