"""
Configuration for Mookuauhau.

Sources, highest priority first:
1. MOOKU_* environment variables (a .env file is read if present)
2. YAML config file (path in MOOKU_CONFIG_FILE when served over HTTP)
3. Defaults below
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from mookuauhau.utils.exceptions import ConfigurationError

DATASET_FORMATS = ("json", "yaml")
TRUTHY = ("true", "1", "yes", "on")
CONFIG_FILE_VARIABLE = "MOOKU_CONFIG_FILE"


class DatasetConfig(BaseModel):
    """Dataset loading configuration."""

    path: str = "data/people.yaml"
    format: str | None = None  # json, yaml; None = detect from suffix
    repair_relationships: bool = True
    validate_lineage: bool = True

    @field_validator("format")
    @classmethod
    def check_format(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.lower()
        if value == "yml":
            value = "yaml"
        if value not in DATASET_FORMATS:
            raise ValueError(f"Unsupported dataset format: {value}")
        return value


class SearchConfig(BaseModel):
    """Search index configuration."""

    prefix_matching: bool = True


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class LoggingConfig(BaseModel):
    """Loguru sinks: console always, rotating file optionally."""

    level: str = "INFO"
    log_to_file: bool = True
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True  # JSON lines in the log file


# Config section -> field -> environment variable
ENV_VARIABLES: dict[str, dict[str, str]] = {
    "dataset": {
        "path": "MOOKU_DATASET_PATH",
        "format": "MOOKU_DATASET_FORMAT",
        "repair_relationships": "MOOKU_DATASET_REPAIR_RELATIONSHIPS",
        "validate_lineage": "MOOKU_DATASET_VALIDATE_LINEAGE",
    },
    "search": {
        "prefix_matching": "MOOKU_SEARCH_PREFIX_MATCHING",
    },
    "server": {
        "host": "MOOKU_SERVER_HOST",
        "port": "MOOKU_SERVER_PORT",
        "reload": "MOOKU_SERVER_RELOAD",
    },
    "logging": {
        "level": "MOOKU_LOG_LEVEL",
        "log_to_file": "MOOKU_LOG_TO_FILE",
        "log_dir": "MOOKU_LOG_DIR",
        "file_rotation": "MOOKU_LOG_FILE_ROTATION",
        "file_retention": "MOOKU_LOG_FILE_RETENTION",
        "compression": "MOOKU_LOG_COMPRESSION",
        "serialize": "MOOKU_LOG_SERIALIZE",
    },
}


def _read_env(key: str, default: Any) -> Any:
    """Read one variable, converted to the type of its default. Unset or empty -> default."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    if isinstance(default, bool):
        return value.strip().lower() in TRUTHY
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError as e:
            raise ConfigurationError(
                f"{key} must be an integer, got {value!r}", context={"variable": key}
            ) from e
    return value


def _load_env_file(env_file: str | Path | None) -> None:
    """Load a .env file into os.environ without overriding variables already set."""
    if env_file:
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv()


class Config(BaseModel):
    """Main configuration."""

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Build configuration from MOOKU_* environment variables.

        Args:
            env_file: Optional .env file; ./.env is used when present and no
                file is given. Variables already set in the environment win.

        Returns:
            Config instance

        Raises:
            ConfigurationError: If a variable cannot be converted or fails validation

        See ENV_VARIABLES for the full variable list.
        """
        _load_env_file(env_file)

        sections: dict[str, BaseModel] = {}
        for section, variables in ENV_VARIABLES.items():
            model = cls.model_fields[section].annotation
            defaults = model()
            values = {
                field: _read_env(key, getattr(defaults, field)) for field, key in variables.items()
            }
            try:
                sections[section] = model(**values)
            except ValueError as e:
                raise ConfigurationError(
                    f"Invalid {section} configuration: {e}", context={"section": section}
                ) from e

        return cls(**sections)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Build configuration from a YAML file with one mapping per section.

        An empty file gives the defaults.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigurationError: If a section fails validation
        """
        path = Path(yaml_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        try:
            return cls.model_validate(data)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid configuration in {path}: {e}", context={"path": str(path)}
            ) from e

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Layer the environment over a YAML file over the defaults.

        Merging is per field: every MOOKU_* variable that is set replaces
        just its own field, and fields it does not name keep their YAML value
        (or default). A missing YAML path is ignored.

        Raises:
            ConfigurationError: If a variable cannot be converted or the
                merged configuration fails validation
        """
        data: Any = {}
        if yaml_path and Path(yaml_path).exists():
            data = yaml.safe_load(Path(yaml_path).read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Config file {yaml_path} must contain a mapping", context={"path": str(yaml_path)}
            )

        _load_env_file(env_file)
        defaults = cls()
        for section, variables in ENV_VARIABLES.items():
            section_defaults = getattr(defaults, section)
            for field, key in variables.items():
                if os.getenv(key) in (None, ""):
                    continue
                section_values = data.get(section) or {}
                if not isinstance(section_values, dict):
                    raise ConfigurationError(
                        f"Config section {section} must be a mapping", context={"section": section}
                    )
                data[section] = {
                    **section_values,
                    field: _read_env(key, getattr(section_defaults, field)),
                }

        try:
            return cls.model_validate(data)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e


def load_config() -> Config:
    """
    Configuration for the server process.

    Reads the YAML file named by MOOKU_CONFIG_FILE, if set, and overlays the
    other MOOKU_* variables.

    Raises:
        ConfigurationError: If MOOKU_CONFIG_FILE names a missing file
    """
    yaml_path = os.getenv(CONFIG_FILE_VARIABLE)
    if yaml_path and not Path(yaml_path).is_file():
        raise ConfigurationError(
            f"{CONFIG_FILE_VARIABLE} points to a missing file: {yaml_path}",
            context={"variable": CONFIG_FILE_VARIABLE, "path": yaml_path},
        )
    return Config.from_env_or_yaml(yaml_path=yaml_path)
