# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# FIXTURES:
# ---------
# - sample_package   → A registry document with two releases,
#                      a garbage version key and the usual noise
# - sample_user      → A user profile with messy social fields
# - config_env       → Clears the config singleton and registry
#                      environment variables around each test
# ==============================================

import pytest

from registry_normalize.config import reset_config

_CONFIG_ENV_VARS = (
    "REGISTRY_EPOCH",
    "GRAVATAR_BASE_URL",
    "LOOSE_SEMVER",
    "REGISTRY_URL",
    "REGISTRY_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def config_env(monkeypatch):
    """Start every test from a clean configuration."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield monkeypatch
    reset_config()


@pytest.fixture
def sample_package():
    """A registry document as publishers actually send them."""
    return {
        "_id": "left-pad",
        "name": "left-pad",
        "dist-tags": {"latest": "1.1.0"},
        "versions": {
            "1.0.0": {
                "name": "left-pad",
                "version": "1.0.0",
                "description": "Old description",
                "dependencies": {},
            },
            "1.1.0": {
                "name": "left-pad",
                "version": "1.1.0",
                "description": "String left pad",
                "keywords": ["pad", "string"],
                "dependencies": {"lodash": "^4.0.0"},
                "maintainers": [{"name": "alice", "email": "Alice@Example.com "}],
                "_npmUser": {"name": "alice", "email": "alice@example.com"},
            },
            "not-a-version": {"name": "left-pad"},
        },
        "time": {
            "modified": "2016-03-23T21:18:15.000Z",
            "created": "2014-03-01T10:00:00.000Z",
            "1.0.0": "2014-03-01T10:00:00.000Z",
            "1.1.0": "2016-03-23T21:18:15.000Z",
        },
        "repository": {"type": "git", "url": "git+https://github.com/stevemao/left-pad.git"},
        "readme": "# left-pad",
        "readmeFilename": "README.md",
        "users": {"bob": True, "carol": True},
        "_attachments": {"left-pad-1.1.0.tgz": {"data": "..."}},
        "license": "WTFPL",
    }


@pytest.fixture
def sample_user():
    """A user profile with the usual mess in its social fields."""
    return {
        "name": "alice",
        "email": "Alice@Example.com",
        "github": "https://github.com/alice/",
        "twitter": "@alice",
        "homepage": "https://alice.example.com",
    }
