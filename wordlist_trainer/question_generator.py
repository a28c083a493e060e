"""Build shuffled multiple-choice questions from a word list."""
from __future__ import annotations

import logging
import random
import uuid
from collections.abc import Iterable, Sequence
from typing import TypeVar

from wordlist_trainer.errors import InvariantViolation, NoContentError
from wordlist_trainer.models import Question, Word
from wordlist_trainer.prompts import (
    BLANK,
    CONTEXT_QUESTION,
    ORIGINAL_QUESTION,
    TRANSLATION_QUESTION,
)

_log = logging.getLogger("wordlist_trainer.qgen")

T = TypeVar("T")

OPTION_COUNT = 4
DISTRACTOR_COUNT = OPTION_COUNT - 1

# Padding for lists too small to supply three real distractors.
FILLER_WORDS = (
    "konaklama",
    "ağaç",
    "kırmızı",
    "sürmek",
    "elma",
    "buzdolabı",
    "yaz",
    "kış",
    "numara",
    "koşmak",
    "izlemek",
    "çalışmak",
    "ağlamak",
    "karlı hava",
    "üflemek",
    "taş",
)

# Case suffixes used to pad context questions (ev -> eve, evda, evdan)
CONTEXT_SUFFIXES = ("e", "da", "dan")

# direction -> (asked field, answer field, question type, template)
DIRECTIONS = {
    "original": ("original", "translation", "multiple_choice", ORIGINAL_QUESTION),
    "translation": ("translation", "original", "translation", TRANSLATION_QUESTION),
}


def generate_id() -> str:
    return str(uuid.uuid4())


def shuffled(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of *items*; the input is left alone."""
    out = list(items)
    (rng or random).shuffle(out)
    return out


def random_items(items: Sequence[T], count: int, rng: random.Random | None = None) -> list[T]:
    """Draw *count* items without replacement (all of them if there are fewer)."""
    pool = list(items)
    return (rng or random).sample(pool, min(count, len(pool)))


class DistractorStrategy:
    """Choose the wrong options for a question.

    Real candidates come from the other words of the list. Values equal to
    the correct answer and repeated values are dropped first. With three or
    more left, three are sampled at random; otherwise all of them are used
    and :meth:`padding` supplies the remainder.
    """

    def pick(
        self,
        correct: str,
        candidates: Iterable[str],
        rng: random.Random | None = None,
    ) -> list[str]:
        pool = [c for c in dict.fromkeys(candidates) if c != correct]
        if len(pool) >= DISTRACTOR_COUNT:
            return random_items(pool, DISTRACTOR_COUNT, rng)
        needed = DISTRACTOR_COUNT - len(pool)
        return pool + self.padding(correct, needed, exclude={correct, *pool})

    def padding(self, correct: str, needed: int, exclude: set[str]) -> list[str]:
        return []


class FillerDistractorStrategy(DistractorStrategy):
    """Pad with words from a filler vocabulary, in order.

    Custom filler words come first; the built-in list tops them up when
    there are too few.
    """

    def __init__(self, filler_words: Iterable[str] = FILLER_WORDS):
        self.filler_words = tuple(filler_words) or FILLER_WORDS

    def padding(self, correct: str, needed: int, exclude: set[str]) -> list[str]:
        forms = dict.fromkeys((*self.filler_words, *FILLER_WORDS))
        return [w for w in forms if w not in exclude][:needed]


class SuffixDistractorStrategy(DistractorStrategy):
    """Pad with suffixed forms of the answer, then with filler words."""

    def __init__(self, suffixes: Iterable[str] = CONTEXT_SUFFIXES):
        self.suffixes = tuple(suffixes)

    def padding(self, correct: str, needed: int, exclude: set[str]) -> list[str]:
        forms = [correct + s for s in self.suffixes] + list(FILLER_WORDS)
        return [f for f in dict.fromkeys(forms) if f not in exclude][:needed]


DEFAULT_STRATEGY = FillerDistractorStrategy()
CONTEXT_STRATEGY = SuffixDistractorStrategy()


def validate_options(options: Sequence[str], correct_answer: str) -> str | None:
    """Return ``None`` when *options* are well-formed, else the reason."""
    if len(options) != OPTION_COUNT:
        return f"expected {OPTION_COUNT} options (got {len(options)})"
    if len(set(options)) != OPTION_COUNT:
        dupes = {o for o in options if options.count(o) > 1}
        return f"duplicate options: {dupes}"
    if correct_answer not in options:
        return f"correct answer {correct_answer!r} missing from options"
    return None


def _assemble_options(
    correct: str,
    distractors: list[str],
    rng: random.Random | None,
    strict: bool,
) -> tuple[str, ...]:
    options = shuffled([correct, *distractors], rng)
    reason = validate_options(options, correct)
    if reason:
        if strict:
            raise InvariantViolation(reason)
        _log.warning("Question for %r has bad options: %s", correct, reason)
    return tuple(options)


def create_multiple_choice_question(
    word: Word,
    all_words: Sequence[Word],
    direction: str = "original",
    rng: random.Random | None = None,
    strategy: DistractorStrategy | None = None,
    strict: bool = False,
) -> Question:
    """Ask for one side of *word*, drawing distractors from *all_words*.

    ``direction="original"`` shows the original and asks for its
    translation; ``direction="translation"`` asks the reverse. The type
    tells the two apart: ``multiple_choice`` for the first and
    ``translation`` for the reverse, so clients can label reverse questions.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"Unknown direction: {direction}")
    asked, answer_field, qtype, template = DIRECTIONS[direction]

    correct = getattr(word, answer_field)
    others = [getattr(w, answer_field) for w in all_words if w.id != word.id]
    distractors = (strategy or DEFAULT_STRATEGY).pick(correct, others, rng)

    return Question(
        id=generate_id(),
        word_id=word.id,
        type=qtype,
        question_text=template.format(**{asked: getattr(word, asked)}),
        options=_assemble_options(correct, distractors, rng, strict),
        correct_answer=correct,
        word=word,
    )


def create_context_question(
    word: Word,
    all_words: Sequence[Word],
    rng: random.Random | None = None,
    strategy: DistractorStrategy | None = None,
    strict: bool = False,
) -> Question | None:
    """Fill-in-the-blank question built from ``word.context``.

    Returns ``None`` when the word has no context or the context does not
    contain ``word.original`` verbatim.
    """
    if not word.context or word.original not in word.context:
        _log.debug("No usable context for %r", word.original)
        return None

    blanked = word.context.replace(word.original, BLANK, 1)
    correct = word.original
    others = [w.original for w in all_words if w.id != word.id]
    distractors = (strategy or CONTEXT_STRATEGY).pick(correct, others, rng)

    return Question(
        id=generate_id(),
        word_id=word.id,
        type="context",
        question_text=CONTEXT_QUESTION.format(context=blanked),
        options=_assemble_options(correct, distractors, rng, strict),
        correct_answer=correct,
        word=word,
    )


def generate_questions(
    words: Sequence[Word],
    rng: random.Random | None = None,
    strategy: DistractorStrategy | None = None,
    include_context: bool = False,
    strict: bool = False,
) -> list[Question]:
    """One original -> translation question per word, in random order.

    With *include_context*, words whose context contains the original also
    get a fill-in-the-blank question.
    """
    if not words:
        raise NoContentError()

    questions = [
        create_multiple_choice_question(w, words, "original", rng, strategy, strict)
        for w in words
    ]
    if include_context:
        for w in words:
            q = create_context_question(w, words, rng, strict=strict)
            if q is not None:
                questions.append(q)

    _log.info("Generated %d questions from %d words", len(questions), len(words))
    return shuffled(questions, rng)
