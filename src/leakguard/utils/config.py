"""Configuration management with multiple sources."""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, List
from dataclasses import dataclass, field

from .logger import get_logger
from .exceptions import ConfigError, InvalidConfigError, MissingConfigError

logger = get_logger(__name__)


DEFAULT_EXCLUDED_DIRS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    ".vscode",
    "deprecated-insecure",
]

DEFAULT_EXCLUDED_FILES = [
    "package-lock.json",
    "SECURITY.md",
    "security-audit.js",
    "test-queuepal-fixed.ts",
    "verify-all-fixes.ts",
    "SECURITY_REMEDIATION_COMPLETE.md",  # Documents the removed credentials
]

OUTPUT_FORMATS = ("console", "json", "sarif")


def _to_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _name_list(key: str, value: Any) -> List[str]:
    """Exclusion names must be given as a YAML list."""
    if not isinstance(value, list):
        raise InvalidConfigError(
            f"{key} must be a list of names, got {type(value).__name__}",
            suggestion=f"Write {key} as a YAML list, e.g. [node_modules, dist]"
        )
    return [str(name) for name in value]


@dataclass
class ScanConfig:
    """Scan configuration options."""
    excluded_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS))
    excluded_files: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_FILES))
    max_workers: int = 1


@dataclass
class OutputConfig:
    """Output configuration."""
    format: str = "console"
    verbose: bool = False
    max_content_chars: int = 100
    show_remediation: bool = True


class Config:
    """
    Configuration manager.

    Priority (highest to lowest):
    1. Explicit config file (``init_config``)
    2. Environment variables
    3. Project config (.leakguard.yml)
    4. User config (~/.leakguard/config.yml)
    5. Default values
    """

    CONFIG_FILENAME = ".leakguard.yml"
    USER_CONFIG_DIR = Path.home() / ".leakguard"
    USER_CONFIG_FILE = USER_CONFIG_DIR / "config.yml"

    def __init__(self, load_files: bool = True):
        """
        Initialize configuration manager.

        Args:
            load_files: Read user/project files and the environment.
                Disable to get pure defaults.
        """
        self.scan = ScanConfig()
        self.output = OutputConfig()

        if load_files:
            self._load_user_config()
            self._load_project_config()
            self._load_env_config()

        logger.debug("Configuration initialized")

    def _load_user_config(self) -> None:
        """Load user-level configuration."""
        if not self.USER_CONFIG_FILE.exists():
            logger.debug("No user config found")
            return

        try:
            with open(self.USER_CONFIG_FILE) as f:
                config = yaml.safe_load(f)

            if config:
                self._apply_config(config)
                logger.info(f"Loaded user config: {self.USER_CONFIG_FILE}")

        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            logger.warning(f"Failed to load user config: {e}")

    def _load_project_config(self) -> None:
        """Load project-level configuration."""
        # Look for config in current directory and parents
        current = Path.cwd()

        for parent in [current] + list(current.parents):
            config_file = parent / self.CONFIG_FILENAME

            if config_file.exists():
                try:
                    with open(config_file) as f:
                        config = yaml.safe_load(f)

                    if config:
                        self._apply_config(config)
                        logger.info(f"Loaded project config: {config_file}")
                    return

                except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
                    logger.warning(f"Failed to load project config: {e}")
                    return

        logger.debug("No project config found")

    def _load_env_config(self) -> None:
        """Load configuration from environment variables."""
        env_mappings = {
            "LEAKGUARD_MAX_WORKERS": ("scan", "max_workers", int),
            "LEAKGUARD_OUTPUT_FORMAT": ("output", "format", str),
            "LEAKGUARD_VERBOSE": ("output", "verbose", _to_bool),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    converted = converter(value)
                    setattr(getattr(self, section), key, converted)
                    logger.debug(f"Loaded from env: {env_var}={converted}")
                except ValueError as e:
                    logger.warning(f"Invalid env var {env_var}={value}: {e}")

    def _apply_config(self, config: Dict[str, Any]) -> None:
        """Apply configuration dictionary."""
        if "scan" in config:
            scan_conf = config["scan"] or {}
            if "excluded_dirs" in scan_conf:
                self.scan.excluded_dirs = _name_list("scan.excluded_dirs", scan_conf["excluded_dirs"])
            if "excluded_files" in scan_conf:
                self.scan.excluded_files = _name_list("scan.excluded_files", scan_conf["excluded_files"])
            if "max_workers" in scan_conf:
                self.scan.max_workers = int(scan_conf["max_workers"])

        if "output" in config:
            out_conf = config["output"] or {}
            if "format" in out_conf:
                self.output.format = str(out_conf["format"])
            if "verbose" in out_conf:
                self.output.verbose = bool(out_conf["verbose"])
            if "max_content_chars" in out_conf:
                self.output.max_content_chars = int(out_conf["max_content_chars"])
            if "show_remediation" in out_conf:
                self.output.show_remediation = bool(out_conf["show_remediation"])

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dot-notation key."""
        parts = key.split(".")

        if len(parts) != 2:
            raise InvalidConfigError(
                f"Invalid config key: {key}",
                suggestion="Use format: section.key (e.g., scan.max_workers)"
            )

        section, attr = parts

        if section not in ("scan", "output"):
            return default

        section_obj = getattr(self, section)
        return getattr(section_obj, attr, default)

    def validate(self) -> None:
        """Validate configuration values."""
        errors = []

        if self.scan.max_workers < 1:
            errors.append("scan.max_workers must be >= 1")

        for name in self.scan.excluded_dirs + self.scan.excluded_files:
            if not name or "/" in name or "\\" in name:
                errors.append(f"Exclusions must be plain base names, got: {name!r}")

        if self.output.format not in OUTPUT_FORMATS:
            errors.append(f"Invalid output.format: {self.output.format}")

        if self.output.max_content_chars < 1:
            errors.append("output.max_content_chars must be >= 1")

        if errors:
            raise InvalidConfigError(
                "Configuration validation failed",
                details={"errors": errors},
                suggestion=f"Check your {self.CONFIG_FILENAME} file"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "scan": {
                "excluded_dirs": list(self.scan.excluded_dirs),
                "excluded_files": list(self.scan.excluded_files),
                "max_workers": self.scan.max_workers,
            },
            "output": {
                "format": self.output.format,
                "verbose": self.output.verbose,
                "max_content_chars": self.output.max_content_chars,
                "show_remediation": self.output.show_remediation,
            },
        }

    @classmethod
    def create_user_config(cls, overwrite: bool = False) -> Path:
        """Create default user configuration file."""
        if cls.USER_CONFIG_FILE.exists() and not overwrite:
            raise ConfigError(
                f"User config already exists: {cls.USER_CONFIG_FILE}",
                suggestion="Use --overwrite to replace it"
            )

        cls.USER_CONFIG_DIR.mkdir(parents=True, exist_ok=True)

        default_config = Config(load_files=False)

        with open(cls.USER_CONFIG_FILE, "w") as f:
            yaml.dump(default_config.to_dict(), f, default_flow_style=False, sort_keys=False)

        logger.info(f"Created user config: {cls.USER_CONFIG_FILE}")
        return cls.USER_CONFIG_FILE


def init_config(config_path: Optional[Path] = None) -> Config:
    """
    Initialize configuration.

    Args:
        config_path: Optional explicit config file path

    Returns:
        Initialized Config object
    """
    config = Config()

    if config_path:
        if not config_path.exists():
            raise MissingConfigError(
                f"Config file not found: {config_path}",
                suggestion="Check the file path or create a new config"
            )

        try:
            with open(config_path) as f:
                explicit_config = yaml.safe_load(f)

            if explicit_config:
                config._apply_config(explicit_config)
                logger.info(f"Loaded explicit config: {config_path}")

        except (OSError, yaml.YAMLError, TypeError, ValueError) as e:
            raise ConfigError(
                f"Failed to load config: {config_path}",
                details={"error": str(e)}
            )

    config.validate()

    return config
