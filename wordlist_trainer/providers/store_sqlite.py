from __future__ import annotations

import sqlite3
from pathlib import Path

from wordlist_trainer.db import Database
from wordlist_trainer.errors import StorageError
from wordlist_trainer.models import Word
from wordlist_trainer.providers.base import WordStore


class SqliteWordStore(WordStore):
    def __init__(self, db: Database):
        self.db = db

    async def fetch_words(self, list_id: str) -> list[Word]:
        try:
            if self.db.get_word_list(list_id) is None:
                raise StorageError(f"Word list {list_id} not found")
            rows = self.db.get_words(list_id)
        except sqlite3.Error as e:
            raise StorageError(f"Could not fetch words for list {list_id}: {e}") from e
        return [Word.from_row(r) for r in rows]

    async def persist_word_mastery(self, word: Word) -> Word:
        try:
            row = self.db.update_word_mastery(word.id, word.mastery_level)
        except sqlite3.Error as e:
            raise StorageError(f"Could not update word {word.id}: {e}") from e
        if row is None:
            raise StorageError(f"Word {word.id} not found")
        return Word.from_row(row)

    def name(self) -> str:
        return f"sqlite/{Path(self.db.db_path).name}"
