"""Tests for configuration files."""

import json

import pytest
from pydantic import ValidationError

from semql import SemanticSqlConverter
from semql.config import SemqlConfig, find_config, load_config


def test_defaults():
    config = SemqlConfig()

    assert config.dialect == "duckdb"
    assert config.schemas_dir == "."
    assert config.models_dir is None
    assert config.format.indent == 2
    assert config.format.max_text_width == 100
    assert config.format.leading_comma is False


def test_dialect_is_normalized():
    assert SemqlConfig(dialect="postgres").dialect == "postgresql"
    assert SemqlConfig(dialect="MySQL").dialect == "mysql"


def test_unknown_dialect():
    with pytest.raises(ValidationError, match="Unsupported dialect"):
        SemqlConfig(dialect="sqlserver")


def test_invalid_format_settings():
    with pytest.raises(ValidationError):
        SemqlConfig(format={"indent": -1})


def test_load_yaml_config(tmp_path):
    config_path = tmp_path / "semql.yaml"
    config_path.write_text(
        "dialect: oracle\nschemas_dir: schemas\nmodels_dir: models\nformat:\n  indent: 4\n  leading_comma: true\n"
    )

    config = load_config(config_path)

    assert config.dialect == "oracle"
    assert config.schemas_dir == str((tmp_path / "schemas").resolve())
    assert config.models_dir == str((tmp_path / "models").resolve())
    assert config.format.indent == 4
    assert config.format.leading_comma is True


def test_load_json_config(tmp_path):
    config_path = tmp_path / "semql.json"
    config_path.write_text(json.dumps({"dialect": "mysql"}))

    config = load_config(config_path)

    assert config.dialect == "mysql"
    assert config.schemas_dir == str(tmp_path.resolve())


def test_load_empty_config(tmp_path):
    config_path = tmp_path / "semql.yml"
    config_path.write_text("")

    assert load_config(config_path).dialect == "duckdb"


def test_load_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "semql.yaml")


def test_load_unsupported_format(tmp_path):
    config_path = tmp_path / "semql.toml"
    config_path.write_text("dialect = 'duckdb'")

    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(config_path)


def test_find_config_searches_parents(tmp_path):
    (tmp_path / "semql.yaml").write_text("dialect: duckdb\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config(nested) == (tmp_path / "semql.yaml").resolve()


def test_find_config_missing(tmp_path):
    assert find_config(tmp_path) is None


def test_converter_from_config(tmp_path):
    schemas = tmp_path / "schemas"
    schemas.mkdir()
    (schemas / "orders.yaml").write_text(
        "semantic_models:\n  - name: orders\n    model: SELECT id, amount FROM raw_orders\n"
    )
    config_path = tmp_path / "semql.yaml"
    config_path.write_text("dialect: postgres\nschemas_dir: schemas\nformat:\n  indent: 4\n")

    converter = SemanticSqlConverter.from_config(load_config(config_path))

    assert converter.adapter.name == "postgresql"
    assert converter.registry.names == ["orders"]
    assert converter.convert("SELECT * FROM orders").startswith('WITH "orders" AS (')
    assert converter.convert_format("SELECT * FROM orders").splitlines()[1] == "    SELECT"
