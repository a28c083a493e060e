from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

MIN_MASTERY = 0
MAX_MASTERY = 5


def clamp_mastery(level: int | None) -> int:
    return max(MIN_MASTERY, min(MAX_MASTERY, int(level or 0)))


@dataclass
class Word:
    id: str
    list_id: str
    original: str
    translation: str
    context: str | None = None
    notes: str | None = None
    created_at: str = ""
    mastery_level: int = 0

    def __post_init__(self):
        self.mastery_level = clamp_mastery(self.mastery_level)

    @classmethod
    def from_row(cls, row: dict) -> Word:
        return cls(
            id=row["id"],
            list_id=row["list_id"],
            original=row["original"],
            translation=row["translation"],
            context=row.get("context"),
            notes=row.get("notes"),
            created_at=row.get("created_at") or "",
            mastery_level=row.get("mastery_level") or 0,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "list_id": self.list_id,
            "original": self.original,
            "translation": self.translation,
            "context": self.context,
            "notes": self.notes,
            "created_at": self.created_at,
            "mastery_level": self.mastery_level,
        }


@dataclass
class WordList:
    id: str
    name: str
    description: str
    user_id: str
    created_at: str = ""
    word_count: int = 0
    progress: float = 0.0
    language: str = "en"


@dataclass(frozen=True)
class Question:
    id: str
    word_id: str
    type: str  # multiple_choice | translation | context
    question_text: str
    options: tuple[str, ...]
    correct_answer: str
    word: Word

    def to_dict(self) -> dict:
        """Client view of the question; the answer is not included."""
        return {
            "id": self.id,
            "word_id": self.word_id,
            "type": self.type,
            "question_text": self.question_text,
            "options": list(self.options),
        }


@dataclass
class LearningSession:
    list_id: str
    questions: list[Question]
    id: str = ""
    current_question_index: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    graded: dict[str, bool] = field(default_factory=dict)
    mastery: dict[str, int] = field(default_factory=dict)  # word_id -> level after last grading


@dataclass
class SessionSummary:
    list_id: str
    total: int
    correct: int
    incorrect: int
    duration_minutes: int
    duration_seconds: float

    @property
    def accuracy(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total

    def to_dict(self) -> dict:
        return {
            "list_id": self.list_id,
            "total": self.total,
            "correct": self.correct,
            "incorrect": self.incorrect,
            "duration_minutes": self.duration_minutes,
            "duration_seconds": round(self.duration_seconds, 1),
            "accuracy": round(self.accuracy, 4),
        }


@dataclass
class TranslationResult:
    original_text: str
    translated_text: str
    detected_language: str | None = None
    confidence: float | None = None


@dataclass
class TranslationHistory:
    id: str
    original_text: str
    translated_text: str
    timestamp: str
    saved_to_word_list: bool = False
