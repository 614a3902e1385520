"""Unit tests for config.py"""

import pytest
from pydantic import ValidationError

from drafthtml.config import Settings, load_config


def test_load_config_defaults():
    """Settings defaults apply when no drafthtml.yaml, env var, or override exists."""
    settings = load_config()
    assert settings == Settings()
    assert settings.pretty_print is False
    assert settings.indent_width == 2
    assert settings.default_block_tag == "p"


def test_load_config_reads_yaml(tmp_path):
    """Values in drafthtml.yaml are applied."""
    (tmp_path / "drafthtml.yaml").write_text("pretty_print: true\nmax_depth: 2\n")
    settings = load_config()
    assert settings.pretty_print is True
    assert settings.max_depth == 2


def test_load_config_env_overrides_yaml(tmp_path, monkeypatch):
    """DRAFTHTML_INDENT_WIDTH takes precedence over drafthtml.yaml."""
    (tmp_path / "drafthtml.yaml").write_text("indent_width: 4\n")
    monkeypatch.setenv("DRAFTHTML_INDENT_WIDTH", "8")
    settings = load_config()
    assert settings.indent_width == 8


def test_load_config_env_bool(monkeypatch):
    """DRAFTHTML_PRETTY_PRINT env var is coerced to bool."""
    monkeypatch.setenv("DRAFTHTML_PRETTY_PRINT", "true")
    assert load_config().pretty_print is True


def test_load_config_overrides_beat_env(monkeypatch):
    """A non-None override beats the env var; None overrides are ignored."""
    monkeypatch.setenv("DRAFTHTML_DEFAULT_BLOCK_TAG", "div")
    assert load_config(overrides={"default_block_tag": "section"}).default_block_tag == "section"
    assert load_config(overrides={"default_block_tag": None}).default_block_tag == "div"


def test_load_config_invalid_yaml(tmp_path):
    """load_config raises ValueError when drafthtml.yaml contains invalid YAML."""
    (tmp_path / "drafthtml.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid drafthtml.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path):
    """A YAML document that is not a mapping is rejected."""
    (tmp_path / "drafthtml.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_bad_offset_unit(monkeypatch):
    """offset_unit must be codepoint or utf16."""
    monkeypatch.setenv("DRAFTHTML_OFFSET_UNIT", "bytes")
    with pytest.raises(ValidationError):
        load_config()


def test_settings_negative_indent_rejected():
    """indent_width must be >= 0."""
    with pytest.raises(ValidationError):
        Settings(indent_width=-1)
