"""Project configuration file I/O.

The config.toml file names the grouping object that records each apply's
inventory. It is validated with Pydantic and written atomically.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from prunectl.core.paths import ensure_config_dir, get_config_path

DEFAULT_INVENTORY_NAME = "inventory"
DEFAULT_INVENTORY_NAMESPACE = "default"


class ConfigError(Exception):
    """Base exception for config-related errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the config content is invalid."""


class InventoryConfig(BaseModel):
    """Location and label of the grouping object.

    Attributes:
        namespace: Namespace the grouping object is stored in.
        name: Name of the grouping object.
        inventory_id: Value of the inventory label.
    """

    model_config = ConfigDict(extra="forbid")

    namespace: Annotated[str, Field(description="Grouping object namespace")] = (
        DEFAULT_INVENTORY_NAMESPACE
    )
    name: Annotated[str, Field(description="Grouping object name")] = DEFAULT_INVENTORY_NAME
    inventory_id: Annotated[str, Field(description="Inventory label value")] = (
        DEFAULT_INVENTORY_NAME
    )

    @field_validator("name", "inventory_id")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject blank names and ids."""
        v = v.strip()
        if not v:
            msg = "must not be empty"
            raise ValueError(msg)
        return v


class ProjectConfig(BaseModel):
    """Complete prunectl configuration."""

    model_config = ConfigDict(extra="forbid")

    inventory: Annotated[
        InventoryConfig,
        Field(default_factory=InventoryConfig, description="Grouping object settings"),
    ]


def load_config(path: Path | None = None) -> ProjectConfig:
    """Load and validate the config from a TOML file.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated ProjectConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return ProjectConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> ProjectConfig:
    """Load the config, falling back to defaults if no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return ProjectConfig()


def save_config(config: ProjectConfig, path: Path | None = None) -> Path:
    """Save the config to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace().

    Args:
        config: The ProjectConfig to save.
        path: Path to save to. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise ConfigError(str(e)) from e
        config_path = get_config_path()
    else:
        config_path = path
        config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_exists(path: Path | None = None) -> bool:
    """Check if a config file exists."""
    config_path = path or get_config_path()
    return config_path.exists()
