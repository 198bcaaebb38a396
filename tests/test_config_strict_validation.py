from __future__ import annotations

from pathlib import Path

import pytest

from rules.config import DEFAULT_PLATFORM_NAMESPACES, ConfigError, load_config


def _write_config(repo_root: Path, toml_content: str) -> None:
    (repo_root / "restmap.toml").write_text(toml_content, encoding="utf-8")


def test_unknown_top_level_key_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_unknown_extraction_key_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[extraction]
parse_modles = false
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_blank_response_tag_rejected(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
[extraction]
response_tags = ["HTTP", " "]
""".strip(),
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    _write_config(tmp_path, "exclude = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_valid_extraction_config_accepted(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        """
exclude = [".venv/**"]

[extraction]
parse_models = false
response_tags = ["status"]
opaque_types = ["shop.Money"]
excluded_markers = ["Context", "Suspended"]
""".strip(),
    )

    config = load_config(tmp_path)

    assert config.exclude == [".venv/**"]
    assert config.extraction.parse_models is False
    assert config.extraction.response_tags == ["status"]
    assert config.extraction.opaque_types == ["shop.Money"]
    assert config.extraction.excluded_markers == ["Context", "Suspended"]
    assert config.extraction.platform_namespaces == DEFAULT_PLATFORM_NAMESPACES


def test_empty_config_accepted(tmp_path: Path) -> None:
    _write_config(tmp_path, "")

    config = load_config(tmp_path)

    assert config.output_dir == ".restmap"
    assert config.include == []
    assert config.exclude == []
    assert config.extraction.response_tags == ["HTTP", "errorResponse"]
    assert config.extraction.excluded_markers == ["Context"]


def test_missing_config_uses_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert config.nested_gitignore is False
    assert config.extraction.parse_models is True
