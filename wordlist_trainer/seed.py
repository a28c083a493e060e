"""Sample word lists for a fresh database."""
from __future__ import annotations

import logging

from wordlist_trainer.db import Database

_log = logging.getLogger("auto-seed")

DEFAULT_USER = "demo"

SEED_LISTS = [
    {
        "name": "English Basics",
        "description": "The most common everyday English words",
        "language": "en",
        "words": [
            {"original": "hello", "translation": "merhaba", "context": "Hello, how are you?", "mastery_level": 4},
            {"original": "world", "translation": "dünya", "context": "Hello world!", "mastery_level": 3},
            {"original": "book", "translation": "kitap", "context": "I read a book yesterday.", "mastery_level": 5},
            {"original": "car", "translation": "araba", "context": "I drive a car to work.", "mastery_level": 2},
            {"original": "house", "translation": "ev", "context": "My house is big.", "mastery_level": 4},
        ],
    },
    {
        "name": "German Travel",
        "description": "Words that help on a trip to Germany",
        "language": "de",
        "words": [
            {"original": "hallo", "translation": "merhaba", "context": "Hallo, wie geht es dir?", "mastery_level": 3},
            {"original": "bitte", "translation": "lütfen", "context": "Bitte schön!", "mastery_level": 2},
            {"original": "danke", "translation": "teşekkürler", "context": "Vielen Danke!", "mastery_level": 4},
            {"original": "entschuldigung", "translation": "özür dilerim",
             "context": "Entschuldigung, wo ist der Bahnhof?", "mastery_level": 1},
        ],
    },
    {
        "name": "Spanish Business Terms",
        "description": "Terms used at work",
        "language": "es",
        "words": [
            {"original": "hola", "translation": "merhaba", "context": "¡Hola, cómo estás?", "mastery_level": 2},
            {"original": "trabajo", "translation": "iş", "context": "Me gusta mi trabajo.", "mastery_level": 1},
            {"original": "reunión", "translation": "toplantı", "context": "Tenemos una reunión mañana.", "mastery_level": 0},
        ],
    },
]


def seed_database(db: Database, user_id: str = DEFAULT_USER) -> list[dict]:
    """Create the sample lists for *user_id*. Returns the created lists."""
    created = []
    for sample in SEED_LISTS:
        word_list = db.create_word_list(
            name=sample["name"],
            user_id=user_id,
            description=sample["description"],
            language=sample["language"],
        )
        db.add_words(word_list["id"], sample["words"])
        created.append(db.get_word_list(word_list["id"]))
    return created


def seed_if_empty(db: Database, user_id: str = DEFAULT_USER) -> int:
    """Seed the sample lists when the database has no lists yet."""
    if db.get_list_count() > 0:
        return 0
    created = seed_database(db, user_id)
    for word_list in created:
        _log.info("Seeded %s (%d words)", word_list["name"], word_list["word_count"])
    return len(created)
