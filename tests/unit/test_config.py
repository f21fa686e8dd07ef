"""Unit tests for configuration system."""

import pytest
import yaml

from leakguard.utils.config import Config, init_config, DEFAULT_EXCLUDED_DIRS
from leakguard.utils.exceptions import ConfigError, InvalidConfigError, MissingConfigError


def test_default_config():
    """Test default configuration values."""
    config = Config()

    assert config.scan.excluded_dirs == DEFAULT_EXCLUDED_DIRS
    assert "node_modules" in config.scan.excluded_dirs
    assert "deprecated-insecure" in config.scan.excluded_dirs
    assert "package-lock.json" in config.scan.excluded_files
    assert config.scan.max_workers == 1
    assert config.output.format == "console"
    assert config.output.max_content_chars == 100


def test_defaults_are_not_shared():
    first = Config()
    first.scan.excluded_dirs.append("vendor")

    assert "vendor" not in Config().scan.excluded_dirs


def test_config_validation():
    """Test configuration validation."""
    config = Config()
    config.validate()

    config.scan.max_workers = 0
    with pytest.raises(InvalidConfigError):
        config.validate()


def test_validation_rejects_paths_as_exclusions():
    config = Config()
    config.scan.excluded_dirs = ["src/vendor"]

    with pytest.raises(InvalidConfigError) as exc_info:
        config.validate()

    assert "plain base names" in str(exc_info.value)


def test_scalar_exclusions_are_rejected(tmp_path):
    config_file = tmp_path / "custom.yml"
    config_file.write_text("scan:\n  excluded_dirs: node_modules\n")

    with pytest.raises(InvalidConfigError) as exc_info:
        init_config(config_file)

    assert "must be a list" in str(exc_info.value)


def test_validation_rejects_unknown_format():
    config = Config()
    config.output.format = "html"

    with pytest.raises(InvalidConfigError):
        config.validate()


def test_config_from_file(tmp_path):
    """Test loading configuration from file."""
    config_file = tmp_path / "custom.yml"
    config_file.write_text(yaml.dump({
        "scan": {"excluded_dirs": ["vendor"], "max_workers": 4},
        "output": {"format": "json", "show_remediation": False},
    }))

    config = init_config(config_file)

    assert config.scan.excluded_dirs == ["vendor"]
    assert config.scan.max_workers == 4
    assert config.output.format == "json"
    assert config.output.show_remediation is False


def test_missing_config_file(tmp_path):
    with pytest.raises(MissingConfigError):
        init_config(tmp_path / "nope.yml")


def test_broken_config_file(tmp_path):
    config_file = tmp_path / "broken.yml"
    config_file.write_text("scan: [unclosed")

    with pytest.raises(ConfigError):
        init_config(config_file)


def test_project_config_is_discovered(tmp_path, monkeypatch):
    (tmp_path / ".leakguard.yml").write_text(yaml.dump({"scan": {"max_workers": 3}}))
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert Config().scan.max_workers == 3


def test_env_overrides_files(tmp_path, monkeypatch):
    (tmp_path / ".leakguard.yml").write_text(yaml.dump({"output": {"format": "json"}}))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LEAKGUARD_OUTPUT_FORMAT", "sarif")
    monkeypatch.setenv("LEAKGUARD_VERBOSE", "yes")

    config = Config()

    assert config.output.format == "sarif"
    assert config.output.verbose is True


def test_invalid_env_value_is_ignored(monkeypatch):
    monkeypatch.setenv("LEAKGUARD_MAX_WORKERS", "many")

    assert Config().scan.max_workers == 1


def test_load_files_false_ignores_sources(tmp_path, monkeypatch):
    (tmp_path / ".leakguard.yml").write_text(yaml.dump({"scan": {"max_workers": 9}}))
    monkeypatch.chdir(tmp_path)

    assert Config(load_files=False).scan.max_workers == 1


def test_config_get():
    """Test configuration get method."""
    config = Config()

    assert config.get("scan.max_workers") == 1
    assert config.get("output.format") == "console"
    assert config.get("invalid.key", "default") == "default"

    with pytest.raises(InvalidConfigError):
        config.get("scan")


def test_config_to_dict():
    """Test configuration export to dictionary."""
    config_dict = Config().to_dict()

    assert set(config_dict) == {"scan", "output"}
    assert config_dict["scan"]["max_workers"] == 1


def test_create_user_config(isolated_config):
    path = Config.create_user_config()

    assert path == isolated_config / ".leakguard" / "config.yml"
    assert yaml.safe_load(path.read_text())["output"]["format"] == "console"

    with pytest.raises(ConfigError):
        Config.create_user_config()

    assert Config.create_user_config(overwrite=True) == path
