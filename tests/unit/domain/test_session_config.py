from __future__ import annotations

"""
Unit tests for the session configuration domain.

Verifies:
1. Default configuration generation.
2. Resilience against missing or corrupted config files.
3. Persistence (Save/Load) without touching real user data.
"""

import json
from unittest.mock import patch

from inodefs.domain.config import get_config_path, get_default_config, load_config, save_config
from inodefs.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_PROMPT


def test_default_config_values():
    cfg = get_default_config()
    assert cfg["prompt"] == DEFAULT_PROMPT
    assert cfg["show_prompt"] is True
    assert cfg["echo_mode"] == "auto"


def test_config_path_uses_user_data_dir(tmp_path):
    with patch("inodefs.domain.config.get_user_data_dir", return_value=str(tmp_path)):
        assert get_config_path() == str(tmp_path / "config.json")


def test_load_missing_file_returns_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.json")) == get_default_config()


def test_load_corrupted_file_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{ incomplete json ", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_load_non_dict_returns_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(path)) == get_default_config()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    cfg = get_default_config()
    cfg["prompt"] = "vfs> "

    save_config(cfg, str(path))

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["version"] == CURRENT_CONFIG_VERSION

    loaded = load_config(str(path))
    assert loaded["prompt"] == "vfs> "
    assert "version" not in loaded


def test_load_merges_partial_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"echo_mode": "never"}), encoding="utf-8")

    loaded = load_config(str(path))
    assert loaded["echo_mode"] == "never"
    assert loaded["prompt"] == DEFAULT_PROMPT
