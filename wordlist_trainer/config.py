from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "db_path": "wordlists.db",
    "translator_provider": "dictionary",
    "translator_model": "qwen3:8b",
    "ollama_url": "http://localhost:11434",
    "source_language": "en",
    "target_language": "tr",
    "filler_words": [],
    "include_context_questions": False,
    "log_level": "INFO",
}


@dataclass
class Settings:
    db_path: str = DEFAULTS["db_path"]
    translator_provider: str = DEFAULTS["translator_provider"]
    translator_model: str = DEFAULTS["translator_model"]
    ollama_url: str = DEFAULTS["ollama_url"]
    source_language: str = DEFAULTS["source_language"]
    target_language: str = DEFAULTS["target_language"]
    filler_words: list[str] = field(default_factory=lambda: list(DEFAULTS["filler_words"]))
    include_context_questions: bool = DEFAULTS["include_context_questions"]
    log_level: str = DEFAULTS["log_level"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    def to_dict(self) -> dict:
        return {
            "db_path": self.db_path,
            "translator_provider": self.translator_provider,
            "translator_model": self.translator_model,
            "ollama_url": self.ollama_url,
            "source_language": self.source_language,
            "target_language": self.target_language,
            "filler_words": self.filler_words,
            "include_context_questions": self.include_context_questions,
            "log_level": self.log_level,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRANSLATOR_PROVIDERS = ("dictionary", "ollama", "anthropic", "openai")


def validate_setting(key: str, value) -> str | None:
    """Return ``None`` if *value* is acceptable for setting *key*, else the reason."""
    if key not in DEFAULTS:
        return f"unknown setting {key!r}"
    default = DEFAULTS[key]
    if isinstance(default, list):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            return f"{key} must be a list of strings"
    elif not isinstance(value, type(default)):
        return f"{key} must be a {type(default).__name__}"
    if key == "log_level" and value.upper() not in LOG_LEVELS:
        return f"log_level must be one of {', '.join(LOG_LEVELS)}"
    if key == "translator_provider" and value not in TRANSLATOR_PROVIDERS:
        return f"translator_provider must be one of {', '.join(TRANSLATOR_PROVIDERS)}"
    return None
