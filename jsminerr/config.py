"""minErr pass configuration ([tool.jsminerr] in pyproject.toml)."""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

PYPROJECT_NAME = "pyproject.toml"

# JavaScript identifier, ASCII subset
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class ConfigError(Exception):
    pass


@dataclass
class MinerrConfig:
    factory_name: str = "minErr"
    suffix: str = "MinErr"
    substitution: Optional[str] = None
    substitution_path: Optional[str] = None

    def validate(self) -> None:
        if not IDENTIFIER_PATTERN.match(self.factory_name):
            raise ConfigError(f"Invalid factory_name '{self.factory_name}'. Must be a JavaScript identifier.")
        if not IDENTIFIER_PATTERN.match(self.suffix):
            raise ConfigError(f"Invalid suffix '{self.suffix}'. Must be a non-empty JavaScript identifier part.")
        if self.substitution is not None and self.substitution_path is not None:
            raise ConfigError("Set either substitution or substitution_path, not both")

    def replacement_source(self, base: Path | None = None) -> Optional[str]:
        """Replacement text for the factory declaration, if one is configured.

        `substitution_path` is resolved against `base` (default: cwd).
        """
        if self.substitution is not None:
            return self.substitution
        if self.substitution_path is None:
            return None
        path = Path(self.substitution_path)
        if not path.is_absolute():
            path = (base or Path.cwd()) / path
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read substitution file {path}: {e.strerror}") from e


def load_config(directory: Path | None = None) -> MinerrConfig:
    """Load [tool.jsminerr] from pyproject.toml in `directory` (default: cwd).

    A missing file or table gives the defaults.
    """
    if directory is None:
        directory = Path.cwd()
    pyproject = directory / PYPROJECT_NAME
    if not pyproject.exists():
        return MinerrConfig()
    with open(pyproject, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid {PYPROJECT_NAME} in {directory}: {e}") from e
    return _parse_config(data)


def load_config_from_string(text: str) -> MinerrConfig:
    """Load configuration from TOML text (a pyproject.toml document)."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e
    return _parse_config(data)


def _parse_config(data: dict) -> MinerrConfig:
    table = data.get("tool", {}).get("jsminerr", {})
    if not isinstance(table, dict):
        raise ConfigError("[tool.jsminerr] must be a table")
    known = {f.name for f in fields(MinerrConfig)}
    unknown = sorted(set(table) - known)
    if unknown:
        raise ConfigError(f"Unknown key(s) in [tool.jsminerr]: {', '.join(unknown)}")
    for key, value in table.items():
        if not isinstance(value, str):
            raise ConfigError(f"[tool.jsminerr] {key} must be a string")
    config = MinerrConfig(**table)
    config.validate()
    return config
