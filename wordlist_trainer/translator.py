"""Dictionary-backed translator with optional LLM fallback."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from wordlist_trainer.models import TranslationResult
from wordlist_trainer.prompts import format_examples

if TYPE_CHECKING:
    from wordlist_trainer.config import Settings
    from wordlist_trainer.db import Database
    from wordlist_trainer.providers.base import TranslationProvider

_log = logging.getLogger("wordlist_trainer.translator")

DICTIONARY = {
    "hello": "merhaba",
    "world": "dünya",
    "book": "kitap",
    "car": "araba",
    "house": "ev",
    "computer": "bilgisayar",
    "phone": "telefon",
    "table": "masa",
    "chair": "sandalye",
    "door": "kapı",
    "window": "pencere",
    "tree": "ağaç",
    "flower": "çiçek",
    "sun": "güneş",
    "moon": "ay",
    "star": "yıldız",
    "water": "su",
    "fire": "ateş",
    "earth": "dünya",
    "air": "hava",
    "pencil": "kalem",
    "pen": "tükenmez kalem",
    "paper": "kağıt",
    "notebook": "defter",
    "school": "okul",
    "student": "öğrenci",
    "teacher": "öğretmen",
    "class": "sınıf",
    "lesson": "ders",
    "homework": "ev ödevi",
    "exam": "sınav",
    "apple": "elma",
    "red": "kırmızı",
    "summer": "yaz",
    "winter": "kış",
    "stone": "taş",
    "good morning": "günaydın",
    "good night": "iyi geceler",
    "thank you": "teşekkür ederim",
    "how are you": "nasılsın",
    "i need a t-shirt": "tişörte ihtiyacım var",
}

EXAMPLE_PAIRS = [
    ("hello", "merhaba"),
    ("book", "kitap"),
    ("car", "araba"),
    ("house", "ev"),
    ("computer", "bilgisayar"),
    ("phone", "telefon"),
]

NOT_FOUND_MESSAGE = "No translation found. Some example translations:\n\n"

# Shorter words are too ambiguous for substring matching ("a" is in everything).
MIN_PARTIAL_MATCH = 3


def _lookup_word(word: str) -> str | None:
    if word in DICTIONARY:
        return DICTIONARY[word]
    if len(word) < MIN_PARTIAL_MATCH:
        return None
    for key, value in DICTIONARY.items():
        if key in word or word in key:
            return value
    return None


def translate_word_by_word(text: str) -> str:
    """Translate each word separately; unknown words are kept as they are."""
    return " ".join(_lookup_word(w) or w for w in text.split())


async def translate_text(
    text: str,
    provider: TranslationProvider | None = None,
    source_language: str = "en",
    target_language: str = "tr",
) -> TranslationResult:
    """Translate *text*: dictionary first, then *provider*, then word by word."""
    normalized = text.strip().lower()
    if not normalized:
        raise ValueError("Nothing to translate")

    if normalized in DICTIONARY:
        return TranslationResult(text, DICTIONARY[normalized], source_language, 0.9)

    if provider is not None:
        try:
            translated = await provider.translate(normalized, source_language, target_language)
            if translated:
                return TranslationResult(text, translated, source_language, None)
        except Exception as e:
            _log.warning("Translator %s failed, using dictionary: %s", provider.name(), e)

    translated = translate_word_by_word(normalized)
    if translated == " ".join(normalized.split()):
        translated = NOT_FOUND_MESSAGE + format_examples(EXAMPLE_PAIRS)
        return TranslationResult(text, translated, source_language, 0.0)
    return TranslationResult(text, translated, source_language, 0.5)


def save_to_word_list(db: Database, history_id: str, list_id: str) -> dict | None:
    """Add a translation from the history to a word list as a new word.

    Returns the created word, or None if the history entry or list is missing.
    """
    entry = db.get_translation(history_id)
    if entry is None or db.get_word_list(list_id) is None:
        return None
    word = db.add_word(list_id, {
        "original": entry["original_text"],
        "translation": entry["translated_text"],
    })
    db.mark_translation_saved(history_id)
    _log.info("Saved translation %r to list %s", entry["original_text"], list_id)
    return word


def get_translator(settings: Settings) -> TranslationProvider | None:
    """Build the configured LLM backend; None means dictionary only."""
    if settings.translator_provider == "dictionary":
        return None
    elif settings.translator_provider == "ollama":
        from wordlist_trainer.providers.llm_ollama import OllamaTranslator
        return OllamaTranslator(base_url=settings.ollama_url, model=settings.translator_model)
    elif settings.translator_provider == "anthropic":
        from wordlist_trainer.providers.llm_anthropic import AnthropicTranslator
        return AnthropicTranslator()
    elif settings.translator_provider == "openai":
        from wordlist_trainer.providers.llm_openai import OpenAITranslator
        return OpenAITranslator()
    raise ValueError(f"Unknown translator provider: {settings.translator_provider}")
