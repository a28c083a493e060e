"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from wordlist_trainer.db import Database
from wordlist_trainer.errors import StorageError
from wordlist_trainer.models import Word
from wordlist_trainer.providers.base import WordStore


class FakeStore(WordStore):
    """In-memory word store with switchable failures."""

    def __init__(self, lists: dict[str, list[Word]] | None = None):
        self.lists = lists or {}
        self.persisted: list[Word] = []
        self.fail_fetch = False
        self.fail_persist = False

    async def fetch_words(self, list_id: str) -> list[Word]:
        if self.fail_fetch:
            raise StorageError("network down")
        if list_id not in self.lists:
            raise StorageError(f"Word list {list_id} not found")
        return list(self.lists[list_id])

    async def persist_word_mastery(self, word: Word) -> Word:
        if self.fail_persist:
            raise StorageError("write failed")
        self.persisted.append(word)
        words = self.lists.get(word.list_id, [])
        for i, w in enumerate(words):
            if w.id == word.id:
                words[i] = word
        return word

    def name(self) -> str:
        return "fake"

    def word(self, list_id: str, original: str) -> Word:
        return next(w for w in self.lists[list_id] if w.original == original)


def make_words(n: int, list_id: str = "list-1") -> list[Word]:
    return [
        Word(f"w{i}", list_id, f"word{i}", f"kelime{i}", context=f"This is word{i} here.")
        for i in range(n)
    ]


@pytest.fixture
def word_factory():
    return make_words


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_words():
    """The four-word list used by the practice scenarios."""
    return [
        Word("w-hello", "list-1", "hello", "merhaba", context="Hello, how are you?"),
        Word("w-book", "list-1", "book", "kitap", context="I read a book yesterday."),
        Word("w-car", "list-1", "car", "araba", context="I drive a car to work."),
        Word("w-house", "list-1", "house", "ev", context="My house is big."),
    ]


@pytest.fixture
def fake_store(sample_words):
    return FakeStore({
        "list-1": sample_words,
        "empty": [],
        "pair": sample_words[:2],
    })


@pytest.fixture
def tmp_db(tmp_path):
    """Create a fresh temporary database."""
    db = Database(tmp_path / "test.db")
    yield db
    db.close()


@pytest.fixture
def populated_db(tmp_db):
    """A database with one four-word list; returns (db, list_id)."""
    word_list = tmp_db.create_word_list("English Basics", "user-1", "Everyday words")
    tmp_db.add_words(word_list["id"], [
        {"original": "hello", "translation": "merhaba", "context": "Hello, how are you?"},
        {"original": "book", "translation": "kitap", "context": "I read a book yesterday.", "mastery_level": 5},
        {"original": "car", "translation": "araba", "notes": "vehicles"},
        {"original": "house", "translation": "ev", "mastery_level": 3},
    ])
    return tmp_db, word_list["id"]


@pytest.fixture
def word_table_md():
    """Minimal markdown word table for parser testing."""
    return """\
# English Basics

## Greetings

| Original | Translation | Context |
|----------|-------------|---------|
| **hello** | merhaba | *Hello, how are you?* |
| **good night** | iyi geceler | |

---

## Things

| Original | Translation |
|----------|-------------|
| **book** | kitap |
| **car** | araba |
"""


@pytest.fixture
def store_factory():
    return FakeStore
