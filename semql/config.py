"""Configuration file format for semql."""

import json
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

CONFIG_FILE_NAMES = ("semql.yaml", "semql.yml", "semql.json")


class FormatConfig(BaseModel):
    """Pretty printer settings."""

    indent: int = Field(default=2, ge=0, description="Spaces per indentation level")
    max_text_width: int = Field(default=100, gt=0, description="Soft wrap column")
    leading_comma: bool = Field(default=False, description="Put commas at the start of SELECT items")


class SemqlConfig(BaseModel):
    """semql configuration file format.

    Can be saved as semql.yaml or semql.json.

    Example YAML:
        dialect: postgres
        schemas_dir: ./schemas
        models_dir: ./models
        format:
          indent: 2
          max_text_width: 100
    """

    dialect: str = Field(default="duckdb", description="Destination dialect (duckdb, mysql, oracle, postgresql)")
    schemas_dir: str = Field(default=".", description="Directory containing semantic model schema files")
    models_dir: str | None = Field(default=None, description="Directory containing SQL model files for ref()")
    format: FormatConfig = Field(default_factory=FormatConfig, description="Pretty printer settings")

    @field_validator("dialect")
    @classmethod
    def check_dialect(cls, value: str) -> str:
        from semql.db import get_adapter

        return get_adapter(value).name

    def resolve_paths(self, base_dir: Path | None = None) -> "SemqlConfig":
        """Copy of this config with schemas_dir and models_dir made absolute against base_dir (or the cwd)."""
        base = base_dir or Path.cwd()

        def resolve(path: str) -> str:
            return str((base / path).resolve())

        return self.model_copy(
            update={
                "schemas_dir": resolve(self.schemas_dir),
                "models_dir": resolve(self.models_dir) if self.models_dir else None,
            }
        )


def _read_yaml(text: str):
    return yaml.safe_load(text)


def _read_json(text: str):
    return json.loads(text) if text.strip() else None


_READERS = {
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".json": _read_json,
}


def load_config(config_path: Path) -> SemqlConfig:
    """Read a semql.yaml, semql.yml or semql.json file.

    Relative directories in the file are taken relative to the file itself.

    Raises:
        FileNotFoundError: If the file is missing
        ValueError: If the extension is not .yaml, .yml or .json, or the
            settings are invalid
    """
    config_path = Path(config_path)
    reader = _READERS.get(config_path.suffix.lower())
    if not config_path.is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    if reader is None:
        raise ValueError(f"Unsupported config format: {config_path.suffix}. Expected one of {', '.join(_READERS)}")

    data = reader(config_path.read_text())
    return SemqlConfig.model_validate(data or {}).resolve_paths(config_path.parent)


def find_config(start_dir: Path | None = None) -> Path | None:
    """Locate the nearest config file in ``start_dir`` or one of its parents.

    Returns:
        Path of the first match, or None
    """
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        for name in CONFIG_FILE_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None
