"""Tests for generation settings."""

from pathlib import Path

import pytest

from tessera.settings import (
    DEFAULT_CONFIG_PATH,
    ConfigError,
    GenerationConfig,
    load_config,
)


class TestGenerationConfig:
    """Test the settings model."""

    def test_defaults(self):
        """Model defaults should be usable as is."""
        config = GenerationConfig()
        assert config.radius == 2
        assert config.seed == 0
        assert config.max_retries == 0
        assert config.data_dir == Path("data")

    def test_radius_must_be_positive(self):
        """Radius 0 is rejected."""
        with pytest.raises(ValueError):
            GenerationConfig(radius=0)

    def test_with_overrides_skips_none(self):
        """None means "not given" and leaves the value alone."""
        config = GenerationConfig(seed=3)
        updated = config.with_overrides(seed=None, width=10)
        assert updated.seed == 3
        assert updated.width == 10
        assert config.width == 32

    def test_with_overrides_validates(self):
        """Overrides go through validation."""
        with pytest.raises(ConfigError):
            GenerationConfig().with_overrides(height=0)

    def test_frozen(self):
        """Settings can't be changed in place."""
        config = GenerationConfig()
        with pytest.raises(ValueError):
            config.seed = 1


class TestLoadConfig:
    """Test loading settings files."""

    def test_packaged_defaults(self):
        """The packaged file loads and matches its documented values."""
        assert DEFAULT_CONFIG_PATH.exists()
        config = load_config(environ={})
        assert config.radius == 2
        assert config.width == 32
        assert config.max_retries == 3

    def test_top_level_mapping(self, temp_data_dir):
        """Settings may sit at the top level of the file."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("radius: 3\nseed: 99\n", encoding="utf-8")
        config = load_config(path, environ={})
        assert config.radius == 3
        assert config.seed == 99

    def test_generation_section(self, temp_data_dir):
        """Settings may sit under a generation key."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("generation:\n  width: 12\n", encoding="utf-8")
        assert load_config(path, environ={}).width == 12

    def test_environment_overrides_file(self, temp_data_dir):
        """TESSERA_* variables win over the file."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("seed: 1\n", encoding="utf-8")
        config = load_config(path, environ={"TESSERA_SEED": "77", "TESSERA_WIDTH": ""})
        assert config.seed == 77
        assert config.width == 32

    def test_missing_file(self, temp_data_dir):
        """A missing file is a config error."""
        with pytest.raises(ConfigError):
            load_config(temp_data_dir / "missing.yaml", environ={})

    def test_invalid_yaml(self, temp_data_dir):
        """Unparseable YAML is a config error."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("radius: [\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_invalid_value(self, temp_data_dir):
        """Out-of-range values are config errors."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("radius: 0\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, environ={})

    def test_invalid_environment_value(self, temp_data_dir):
        """Bad environment values are config errors too."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("{}\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, environ={"TESSERA_RADIUS": "wide"})

    def test_not_a_mapping(self, temp_data_dir):
        """A list is not a settings file."""
        path = temp_data_dir / "settings.yaml"
        path.write_text("- 1\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path, environ={})
