# ==============================================
# Tests for configuration loading
# ==============================================

from datetime import datetime, timedelta, timezone

import pytest

from registry_normalize.config import AppConfig, NormalizerConfig, get_config, reset_config


class TestDefaults:

    def test_defaults(self):
        config = get_config()
        assert isinstance(config, AppConfig)
        assert config.normalizer.registry_epoch == "2010-01-14T01:41:08-08:00"
        assert config.normalizer.gravatar_base_url == "https://secure.gravatar.com/avatar/"
        assert config.normalizer.loose_semver is True
        assert config.client.registry_url == "https://registry.npmjs.org/"
        assert config.client.timeout_seconds == 10.0
        assert config.log_level == "WARNING"

    def test_epoch_is_aware(self):
        epoch = NormalizerConfig().epoch
        assert epoch == datetime(2010, 1, 14, 1, 41, 8, tzinfo=timezone(timedelta(hours=-8)))

    def test_singleton(self):
        assert get_config() is get_config()

    def test_frozen(self):
        with pytest.raises(AttributeError):
            NormalizerConfig().loose_semver = False


class TestEnvironment:

    def test_overrides(self, config_env):
        config_env.setenv("REGISTRY_EPOCH", "2000-01-01T00:00:00Z")
        config_env.setenv("GRAVATAR_BASE_URL", "https://cdn/")
        config_env.setenv("LOOSE_SEMVER", "no")
        config_env.setenv("REGISTRY_URL", "https://mirror.example/")
        config_env.setenv("REGISTRY_TIMEOUT", "2.5")
        config_env.setenv("LOG_LEVEL", "debug")

        config = get_config()
        assert config.normalizer.epoch == datetime(2000, 1, 1, tzinfo=timezone.utc)
        assert config.normalizer.gravatar_base_url == "https://cdn/"
        assert config.normalizer.loose_semver is False
        assert config.client.registry_url == "https://mirror.example/"
        assert config.client.timeout_seconds == 2.5
        assert config.log_level == "DEBUG"

    def test_reset_reloads(self, config_env):
        first = get_config()
        reset_config()
        config_env.setenv("LOG_LEVEL", "INFO")
        assert get_config() is not first
        assert get_config().log_level == "INFO"

    @pytest.mark.parametrize("name, value", [
        ("REGISTRY_EPOCH", "whenever"),
        ("REGISTRY_EPOCH", "2010-01-14T01:41:08"),
        ("LOOSE_SEMVER", "maybe"),
        ("REGISTRY_TIMEOUT", "soon"),
    ])
    def test_invalid_values(self, config_env, name, value):
        config_env.setenv(name, value)
        with pytest.raises(ValueError):
            get_config()
