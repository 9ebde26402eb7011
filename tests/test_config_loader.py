"""
Tests for configuration models and loading.
"""

import json
from pathlib import Path

import pytest
import yaml

from bootwire.core.exceptions import ConfigurationError
from bootwire.infrastructure.config.loader import ConfigLoader
from bootwire.infrastructure.config.models import BootwireConfig, LoggingConfig, WiringConfig


class TestBootwireConfig:
    """Test cases for the configuration models."""

    def test_defaults(self) -> None:
        config = BootwireConfig()

        assert config.wiring.patterns == ['**/*.wire.py']
        assert config.wiring.entrypoint == 'wire'
        assert config.wiring.boot_timeout is None
        assert config.logging.level == 'INFO'
        assert config.context == {}

    def test_level_is_normalized(self) -> None:
        config = BootwireConfig(logging=LoggingConfig(level='debug'))

        assert config.logging.level == 'DEBUG'

    def test_invalid_level(self) -> None:
        with pytest.raises(ConfigurationError, match="Log level"):
            BootwireConfig(logging=LoggingConfig(level='LOUD'))

    def test_invalid_entrypoint(self) -> None:
        with pytest.raises(ConfigurationError, match="entrypoint"):
            BootwireConfig(wiring=WiringConfig(entrypoint='not valid'))

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="timeout"):
            BootwireConfig(wiring=WiringConfig(boot_timeout=0))

    def test_from_dict(self) -> None:
        config = BootwireConfig.from_dict({
            'name': 'todos',
            'wiring': {'patterns': ['*.wire.py'], 'boot_timeout': 5},
            'context': {'config': {'port': 80}},
        })

        assert config.name == 'todos'
        assert config.wiring.patterns == ['*.wire.py']
        assert config.wiring.boot_timeout == 5
        assert config.context == {'config': {'port': 80}}

    def test_from_dict_unknown_field(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid configuration section"):
            BootwireConfig.from_dict({'wiring': {'unknown': True}})

    def test_from_dict_context_must_be_mapping(self) -> None:
        with pytest.raises(ConfigurationError, match="'context' must be a mapping"):
            BootwireConfig.from_dict({'context': ['a']})


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ('DEBUG', 'ENVIRONMENT', 'LOG_LEVEL', 'LOG_DIR', 'LOG_FILE_ENABLED',
                     'WIRE_PATTERNS', 'ENTRYPOINT', 'BOOT_TIMEOUT'):
            monkeypatch.delenv(f"BOOTWIRE_{name}", raising=False)

    def test_load_without_file(self) -> None:
        config = ConfigLoader().load_config()

        assert config.config_file_path is None
        assert config.wiring.entrypoint == 'wire'

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bootwire.yaml"
        path.write_text(
            "name: todos\n"
            "logging:\n"
            "  level: debug\n"
            "wiring:\n"
            "  entrypoint: setup\n"
            "context:\n"
            "  config:\n"
            "    port: 8080\n"
        )

        config = ConfigLoader().load_config(str(path))

        assert config.name == 'todos'
        assert config.logging.level == 'DEBUG'
        assert config.wiring.entrypoint == 'setup'
        assert config.context == {'config': {'port': 8080}}
        assert config.config_file_path == str(path)

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("")

        config = ConfigLoader().load_config(str(path))

        assert config.name == 'bootwire'

    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bootwire.json"
        path.write_text(json.dumps({'debug': True, 'wiring': {'patterns': ['a/*.py']}}))

        config = ConfigLoader().load_config(str(path))

        assert config.debug is True
        assert config.wiring.patterns == ['a/*.py']

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load_config(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, tmp_path: Path) -> None:
        path = tmp_path / "bootwire.ini"
        path.write_text("[bootwire]\n")

        with pytest.raises(ConfigurationError, match="Unsupported configuration file format"):
            ConfigLoader().load_config(str(path))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("wiring: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigLoader().load_config(str(path))

    def test_non_mapping_content(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ConfigLoader().load_config(str(path))

    def test_environment_overrides(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "bootwire.yaml"
        path.write_text("wiring:\n  entrypoint: setup\n  patterns: ['*.py']\n")
        monkeypatch.setenv("BOOTWIRE_DEBUG", "yes")
        monkeypatch.setenv("BOOTWIRE_LOG_LEVEL", "warning")
        monkeypatch.setenv("BOOTWIRE_WIRE_PATTERNS", "**/*.wire.py, boot/*.py")
        monkeypatch.setenv("BOOTWIRE_BOOT_TIMEOUT", "2.5")

        config = ConfigLoader().load_config(str(path))

        assert config.debug is True
        assert config.logging.level == 'WARNING'
        assert config.wiring.entrypoint == 'setup'
        assert config.wiring.patterns == ['**/*.wire.py', 'boot/*.py']
        assert config.wiring.boot_timeout == 2.5

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BOOTWIRE_BOOT_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="BOOTWIRE_BOOT_TIMEOUT"):
            ConfigLoader().load_config()

    def test_save_and_reload_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "saved.yaml"
        config = BootwireConfig(name='saved', context={'answer': 42})

        ConfigLoader().save_config(config, str(path))

        data = yaml.safe_load(path.read_text())
        assert data['name'] == 'saved'
        assert 'config_file_path' not in data
        assert ConfigLoader().load_config(str(path)).context == {'answer': 42}

    def test_save_json(self, tmp_path: Path) -> None:
        path = tmp_path / "saved.json"

        ConfigLoader().save_config(BootwireConfig(), str(path), format="json")

        assert json.loads(path.read_text())['wiring']['entrypoint'] == 'wire'

    def test_save_unsupported_format(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported format"):
            ConfigLoader().save_config(BootwireConfig(), str(tmp_path / "x.toml"), format="toml")
