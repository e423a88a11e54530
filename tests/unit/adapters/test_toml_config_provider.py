"""Unit tests for TomlConfigProvider adapter."""

from pathlib import Path
from unittest.mock import patch

import pytest

from openat.adapters.config.toml_config_provider import TomlConfigProvider
from openat.domain.config import OpenAtConfig


@pytest.fixture
def provider() -> TomlConfigProvider:
    """Create a TomlConfigProvider instance."""
    return TomlConfigProvider()


@pytest.fixture
def global_config(tmp_path: Path):
    """Point the global config path at a writable temporary file."""
    global_path = tmp_path / "global" / "config.toml"
    global_path.parent.mkdir()
    with patch(
        "openat.adapters.config.toml_config_provider.get_global_config_path",
        return_value=global_path,
    ):
        yield global_path


class TestLoadDefaults:
    """Tests for loading without any config files."""

    def test_defaults_without_files(self, provider: TomlConfigProvider, no_global_config) -> None:
        assert provider.load() == OpenAtConfig.default()

    def test_missing_explicit_file_warns(
        self,
        provider: TomlConfigProvider,
        no_global_config,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        result = provider.load(tmp_path / "missing.toml")

        assert result == OpenAtConfig.default()
        assert "does not exist" in caplog.text


class TestLoadValidConfig:
    """Tests for loading valid configurations."""

    def test_load_explicit_config(
        self, provider: TomlConfigProvider, no_global_config, tmp_path: Path
    ) -> None:
        config_file = tmp_path / "openat.toml"
        config_file.write_text(
            """
[instance]
enabled = false
socket_path = "/run/custom.sock"

[output]
format = "json"
"""
        )

        result = provider.load(config_file)

        assert isinstance(result, OpenAtConfig)
        assert result.instance.enabled is False
        assert result.instance.socket_path == "/run/custom.sock"
        assert result.output.format == "json"

    def test_load_global_config(self, provider: TomlConfigProvider, global_config: Path) -> None:
        global_config.write_text('[output]\nformat = "json"\n')

        assert provider.load().output.format == "json"


class TestConfigCascade:
    """Tests for global and explicit config merging."""

    def test_explicit_overrides_global(
        self, provider: TomlConfigProvider, global_config: Path, tmp_path: Path
    ) -> None:
        global_config.write_text('[output]\nformat = "json"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('[output]\nformat = "text"\n')

        assert provider.load(explicit).output.format == "text"

    def test_sections_merge_key_by_key(
        self, provider: TomlConfigProvider, global_config: Path, tmp_path: Path
    ) -> None:
        """Test keys missing from the explicit section keep the global value."""
        global_config.write_text('[instance]\nenabled = false\nsocket_path = "/g.sock"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('[instance]\nsocket_path = "/e.sock"\n')

        result = provider.load(explicit)

        assert result.instance.enabled is False
        assert result.instance.socket_path == "/e.sock"


class TestInvalidConfig:
    """Tests for graceful handling of broken configs."""

    def test_malformed_toml_is_ignored(
        self,
        provider: TomlConfigProvider,
        no_global_config,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[output\nformat = ")

        assert provider.load(config_file) == OpenAtConfig.default()
        assert "Failed to parse config" in caplog.text

    def test_invalid_values_are_ignored(
        self, provider: TomlConfigProvider, no_global_config, tmp_path: Path
    ) -> None:
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[output]\nformat = "yaml"\n')

        assert provider.load(config_file) == OpenAtConfig.default()

    def test_quoted_enabled_is_rejected(
        self, provider: TomlConfigProvider, no_global_config, tmp_path: Path
    ) -> None:
        """Test that enabled = "false" does not silently count as true."""
        config_file = tmp_path / "bad.toml"
        config_file.write_text('[instance]\nenabled = "false"\n')

        assert provider.load(config_file) == OpenAtConfig.default()

    def test_invalid_explicit_layer_keeps_global(
        self, provider: TomlConfigProvider, global_config: Path, tmp_path: Path
    ) -> None:
        global_config.write_text('[output]\nformat = "json"\n')
        explicit = tmp_path / "bad.toml"
        explicit.write_text("[instance]\nsocket_path = 5\n")

        assert provider.load(explicit).output.format == "json"

    def test_invalid_global_layer_is_ignored(
        self,
        provider: TomlConfigProvider,
        global_config: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        global_config.write_text("[instance]\nunknown_key = 1\n")

        assert provider.load() == OpenAtConfig.default()
        assert "global config" in caplog.text
