from __future__ import annotations

from abc import ABC, abstractmethod

from wordlist_trainer.models import Word


class WordStore(ABC):
    """Storage the learning engine reads words from and writes mastery to."""

    @abstractmethod
    async def fetch_words(self, list_id: str) -> list[Word]:
        """Words of *list_id*; empty if the list has none.

        Raises StorageError if the list does not exist or the call fails.
        """
        ...

    @abstractmethod
    async def persist_word_mastery(self, word: Word) -> Word:
        """Store ``word.mastery_level`` and return the stored word."""
        ...

    @abstractmethod
    def name(self) -> str:
        ...


class TranslationProvider(ABC):
    @abstractmethod
    async def translate(self, text: str, source_language: str = "en", target_language: str = "tr") -> str:
        ...

    @abstractmethod
    def name(self) -> str:
        ...
