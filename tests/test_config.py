"""Tests for configuration loading and saving."""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from wordlist_trainer.config import DEFAULTS, Settings, load_settings, save_settings, validate_setting


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.translator_provider == "dictionary"
        assert s.source_language == "en"
        assert s.target_language == "tr"
        assert s.filler_words == []
        assert s.include_context_questions is False

    def test_to_dict(self):
        d = Settings().to_dict()
        assert d == DEFAULTS
        assert len(d) == 9  # all fields present

    def test_to_dict_roundtrip(self):
        s = Settings(translator_provider="ollama", filler_words=["kapı", "masa"])
        s2 = Settings(**s.to_dict())
        assert s2.translator_provider == "ollama"
        assert s2.filler_words == ["kapı", "masa"]

    def test_filler_words_not_shared(self):
        a, b = Settings(), Settings()
        a.filler_words.append("kapı")
        assert b.filler_words == []

    def test_db_full_path(self):
        s = Settings(db_path="custom.db")
        assert s.db_full_path.name == "custom.db"
        assert s.db_full_path.parent == s.project_root


class TestLoadSaveSettings:
    def test_load_from_file(self, tmp_path):
        config = {"translator_provider": "openai", "include_context_questions": True}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("wordlist_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.translator_provider == "openai"
        assert s.include_context_questions is True
        # Defaults for unspecified fields
        assert s.target_language == "tr"

    def test_load_missing_file(self, tmp_path):
        config_path = tmp_path / "nonexistent.json"
        with patch("wordlist_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.translator_provider == "dictionary"  # all defaults

    def test_save_creates_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        with patch("wordlist_trainer.config.CONFIG_PATH", config_path):
            save_settings(Settings(translator_provider="anthropic"))

        data = json.loads(config_path.read_text())
        assert data["translator_provider"] == "anthropic"
        assert data["filler_words"] == []

    def test_unknown_keys_ignored(self, tmp_path):
        config = {"translator_provider": "ollama", "tts_provider": "edge-tts"}
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps(config))

        with patch("wordlist_trainer.config.CONFIG_PATH", config_path):
            s = load_settings()
        assert s.translator_provider == "ollama"
        assert not hasattr(s, "tts_provider")


class TestValidateSetting:
    @pytest.mark.parametrize("key,value", [
        ("filler_words", ["kapı", "masa"]),
        ("include_context_questions", True),
        ("log_level", "debug"),
        ("translator_provider", "ollama"),
        ("target_language", "de"),
    ])
    def test_valid(self, key, value):
        assert validate_setting(key, value) is None

    @pytest.mark.parametrize("key,value", [
        ("filler_words", "abc"),
        ("filler_words", ["ok", 3]),
        ("include_context_questions", "yes"),
        ("log_level", "LOUD"),
        ("log_level", 10),
        ("translator_provider", "babelfish"),
        ("tts_provider", "edge-tts"),
    ])
    def test_invalid(self, key, value):
        assert validate_setting(key, value)
