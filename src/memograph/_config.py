"""Configuration loading from pyproject.toml."""

import tomllib
from pathlib import Path
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, ValidationError

from ._errors import ConfigError

PYPROJECT_FILENAME = "pyproject.toml"

LogLevel: TypeAlias = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class MemographConfig(BaseModel):
    """Settings read from the ``[tool.memograph]`` table.

    Attributes:
        log_level: Level for the handler installed by ``configure_logging``.
        show_path: Show the emitting module path in log lines.
        rich_tracebacks: Render exceptions with rich tracebacks.

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    log_level: LogLevel = "WARNING"
    show_path: bool = False
    rich_tracebacks: bool = True


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Get the nearest pyproject.toml at or above ``start_dir`` (default: cwd)."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / PYPROJECT_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(pyproject_path: Path) -> MemographConfig:
    """Load and validate [tool.memograph] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed MemographConfig (defaults if the section is missing)

    Raises:
        ConfigError: If the file is not valid TOML or the section is invalid

    """
    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        msg = f"Invalid [tool] in {pyproject_path}: expected a table"
        raise ConfigError(msg)

    section = tool.get("memograph", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.memograph] configuration: expected a table"
        raise ConfigError(msg)

    try:
        return MemographConfig.model_validate(section)
    except ValidationError as e:
        msg = f"Invalid [tool.memograph] configuration in {pyproject_path}:\n{e}"
        raise ConfigError(msg) from e


def get_config() -> MemographConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        MemographConfig (defaults if no pyproject.toml or no [tool.memograph] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return MemographConfig()
    return load_config(pyproject_path)
