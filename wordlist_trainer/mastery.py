"""Per-word mastery scoring."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from wordlist_trainer.models import MAX_MASTERY, Word, clamp_mastery

if TYPE_CHECKING:
    from wordlist_trainer.providers.base import WordStore


def next_mastery_level(level: int, is_correct: bool) -> int:
    """One step up for a correct answer, one down for a wrong one, kept in 0-5."""
    return clamp_mastery(level + (1 if is_correct else -1))


def update_mastery(word: Word, is_correct: bool) -> Word:
    """Return a copy of *word* with its mastery level adjusted."""
    return replace(word, mastery_level=next_mastery_level(word.mastery_level, is_correct))


async def record_mastery(store: WordStore, word: Word, is_correct: bool) -> Word:
    """Compute the new mastery level and persist it through *store*.

    Storage failures propagate to the caller.
    """
    return await store.persist_word_mastery(update_mastery(word, is_correct))


def list_progress(words: Sequence[Word] | Sequence[int]) -> float:
    """Average mastery of a list as a fraction of the maximum (0.0-1.0).

    Accepts words or bare mastery levels.
    """
    if not words:
        return 0.0
    levels = [w.mastery_level if isinstance(w, Word) else int(w or 0) for w in words]
    return sum(levels) / (len(levels) * MAX_MASTERY)
