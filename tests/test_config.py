"""
Tests for configuration loading and host resolution
"""
import pytest

from core_algolia.config import (
    AlgoliaConfig, ConfigLoader, default_host_resolver, get_algolia_config
)
from core_algolia.exceptions import (
    ConfigurationError, MissingAPIKeyError, MissingApplicationIDError
)
from core_algolia.types import Mode


class TestAlgoliaConfig:
    """Test the config dataclass"""

    def test_repr_hides_api_key(self):
        """Test that the API key never shows in repr"""
        config = AlgoliaConfig(application_id="foo", api_key="secret")

        assert "secret" not in repr(config)
        assert "foo" in repr(config)

    def test_config_is_immutable(self):
        """Test that the config cannot be changed after creation"""
        config = AlgoliaConfig(application_id="foo", api_key="secret")

        with pytest.raises(AttributeError):
            config.api_key = "other"

    def test_missing_application_id(self):
        with pytest.raises(MissingApplicationIDError):
            AlgoliaConfig(application_id="", api_key="secret")

    def test_missing_api_key(self):
        with pytest.raises(MissingAPIKeyError):
            AlgoliaConfig(application_id="foo", api_key=None)

    def test_default_resolver(self):
        config = AlgoliaConfig(application_id="foo", api_key="secret")
        assert config.host_resolver is default_host_resolver


class TestDefaultHostResolver:
    """Test host selection per attempt"""

    def test_primary_hosts_per_mode(self):
        assert default_host_resolver(Mode.READ, "APP", 0) == "APP-dsn.algolia.net"
        assert default_host_resolver(Mode.WRITE, "APP", 0) == "APP.algolia.net"

    @pytest.mark.parametrize("mode", [Mode.READ, Mode.WRITE])
    def test_fallback_hosts_differ_from_primary(self, mode):
        primary = default_host_resolver(mode, "APP", 0)
        fallbacks = [default_host_resolver(mode, "APP", retry) for retry in (1, 2, 3)]

        assert primary not in fallbacks
        assert len(set(fallbacks)) == 3

    def test_fallback_hosts_are_deterministic(self):
        assert default_host_resolver(Mode.READ, "APP", 2) == "APP-2.algolianet.com"
        assert default_host_resolver(Mode.WRITE, "APP", 2) == "APP-2.algolianet.com"
        assert default_host_resolver(Mode.READ, "APP", 3) == default_host_resolver(Mode.READ, "APP", 3)

    def test_no_host_past_retry_bound(self):
        with pytest.raises(ValueError):
            default_host_resolver(Mode.READ, "APP", 4)


class TestConfigLoader:
    """Test loading configuration from the environment and params"""

    def test_from_environment(self, clean_env):
        clean_env.setenv("ALGOLIA_APPLICATION_ID", "ENVAPP")
        clean_env.setenv("ALGOLIA_API_KEY", "env-key")

        config = ConfigLoader.from_environment(load_env_file=False)

        assert config.application_id == "ENVAPP"
        assert config.api_key == "env-key"

    def test_from_environment_missing_application_id(self, clean_env):
        clean_env.setenv("ALGOLIA_API_KEY", "env-key")

        with pytest.raises(MissingApplicationIDError):
            ConfigLoader.from_environment(load_env_file=False)

    def test_from_environment_missing_api_key(self, clean_env):
        clean_env.setenv("ALGOLIA_APPLICATION_ID", "ENVAPP")

        with pytest.raises(MissingAPIKeyError) as exc_info:
            ConfigLoader.from_environment(load_env_file=False)

        assert isinstance(exc_info.value, ConfigurationError)
        assert "ALGOLIA_API_KEY" in str(exc_info.value)

    def test_from_environment_reads_env_file(self, clean_env, tmp_path):
        """Test that a .env file in the working directory is loaded"""
        (tmp_path / ".env").write_text(
            "ALGOLIA_APPLICATION_ID=DOTENVAPP\nALGOLIA_API_KEY=dotenv-key\n"
        )
        clean_env.chdir(tmp_path)

        config = ConfigLoader.from_environment()

        assert config.application_id == "DOTENVAPP"

    def test_from_params_falls_back_to_environment(self, clean_env):
        clean_env.setenv("ALGOLIA_API_KEY", "env-key")

        config = ConfigLoader.from_params(application_id="PARAMAPP")

        assert config.application_id == "PARAMAPP"
        assert config.api_key == "env-key"

    def test_from_params_reads_env_file(self, clean_env, tmp_path):
        """Test that a value left out of the params is read from .env"""
        (tmp_path / ".env").write_text("ALGOLIA_API_KEY=dotenv-key\n")
        clean_env.chdir(tmp_path)

        config = get_algolia_config(application_id="PARAMAPP")

        assert config.application_id == "PARAMAPP"
        assert config.api_key == "dotenv-key"

    def test_custom_host_resolver(self):
        def resolver(mode, application_id, retry):
            return f"{application_id}-{mode.value}-{retry}.example.com"

        config = get_algolia_config(application_id="APP", api_key="key", host_resolver=resolver)

        assert config.host_resolver(Mode.READ, "APP", 1) == "APP-read-1.example.com"

    def test_get_algolia_config_from_environment(self, clean_env):
        clean_env.setenv("ALGOLIA_APPLICATION_ID", "ENVAPP")
        clean_env.setenv("ALGOLIA_API_KEY", "env-key")

        config = get_algolia_config(load_env_file=False)

        assert config.application_id == "ENVAPP"
