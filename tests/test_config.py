"""Tests for contextgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextgen.config import (
    DEFAULT_MAX_FILES,
    ConfigError,
    ContextGenConfig,
    IngestionSettings,
    OutputSettings,
    load_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ContextGenConfig)
    assert config.root == tmp_path.resolve()
    assert config.ingestion == IngestionSettings()
    assert config.output == OutputSettings()
    assert config.project_name is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".contextgen.yml"
    config_file.write_text(
        """
project:
  name: "acme-site"
ingestion:
  max_files: 250
  max_file_bytes: 4096
  max_total_bytes: 100000
  workers: 2
  timeout: 7.5
  exclude_paths:
    - "fixtures/"
exclude_paths:
  - "sandbox/"
output:
  format: "markdown"
  strict: false
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.project_name == "acme-site"
    assert config.ingestion.max_files == 250
    assert config.ingestion.max_file_bytes == 4096
    assert config.ingestion.max_total_bytes == 100000
    assert config.ingestion.workers == 2
    assert config.ingestion.timeout == pytest.approx(7.5)
    assert config.ingestion.exclude_paths == ("sandbox/", "fixtures/")
    assert config.output.format == "markdown"
    assert config.output.strict is False


def test_load_config_accepts_project_directory(tmp_path: Path) -> None:
    (tmp_path / ".contextgen.yml").write_text("output:\n  format: summary\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.output.format == "summary"
    assert config.ingestion.max_files == DEFAULT_MAX_FILES


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".contextgen.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.output == OutputSettings()


def test_unknown_output_format_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".contextgen.yml").write_text("output:\n  format: html\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="html"):
        load_config(tmp_path)


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / ".contextgen.yml").write_text("output: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / ".contextgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)
