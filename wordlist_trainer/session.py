"""Learning-session state machine.

A session is created by :func:`start_session`, graded with
:func:`submit_answer`, moved forward with :func:`advance` and summarized by
:func:`complete_session`. Sessions are plain objects owned by one caller;
none of these functions keep state of their own.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from wordlist_trainer.errors import NoContentError, SessionCompletedError, SessionStateError
from wordlist_trainer.mastery import record_mastery
from wordlist_trainer.models import LearningSession, Question, SessionSummary
from wordlist_trainer.question_generator import (
    DistractorStrategy,
    generate_id,
    generate_questions,
)

if TYPE_CHECKING:
    from wordlist_trainer.providers.base import WordStore

_log = logging.getLogger("wordlist_trainer.session")


async def start_session(
    store: WordStore,
    list_id: str,
    rng: random.Random | None = None,
    strategy: DistractorStrategy | None = None,
    include_context: bool = False,
) -> LearningSession:
    """Fetch the list's words and build a freshly shuffled session.

    Raises NoContentError for a list without words; storage errors
    propagate unchanged.
    """
    words = await store.fetch_words(list_id)
    if not words:
        _log.info("List %s has no words, nothing to practice", list_id)
        raise NoContentError(list_id)

    questions = generate_questions(
        words, rng=rng, strategy=strategy, include_context=include_context,
    )
    session = LearningSession(list_id=list_id, questions=questions, id=generate_id())
    _log.info("Session %s started: %d questions from list %s",
              session.id, len(questions), list_id)
    return session


async def restart(
    store: WordStore,
    list_id: str,
    rng: random.Random | None = None,
    strategy: DistractorStrategy | None = None,
    include_context: bool = False,
) -> LearningSession:
    """Start over with a new shuffle and zeroed counters.

    The previous session object is not touched.
    """
    return await start_session(
        store, list_id, rng=rng, strategy=strategy, include_context=include_context,
    )


def is_complete(session: LearningSession) -> bool:
    return session.current_question_index >= len(session.questions)


def current_question(session: LearningSession) -> Question:
    if is_complete(session):
        raise SessionCompletedError("Session is complete, no question to serve")
    return session.questions[session.current_question_index]


def check_answer(question: Question, selected: str) -> bool:
    return selected == question.correct_answer


async def submit_answer(
    store: WordStore,
    session: LearningSession,
    question: Question,
    selected: str,
) -> dict:
    """Grade *selected* against the current question and update mastery.

    Only the current question may be graded. The mastery update is persisted
    before the counters move, so a storage failure leaves the session as it
    was. Submitting again before advancing returns the first result.
    """
    current = current_question(session)
    if question.id != current.id:
        raise SessionStateError(
            f"Question {question.id} is not the current question ({current.id})"
        )

    if question.id in session.graded:
        return {
            "is_correct": session.graded[question.id],
            "correct_answer": question.correct_answer,
            "mastery_level": None,
            "already_graded": True,
        }

    is_correct = check_answer(question, selected)
    word = question.word
    if word.id in session.mastery:
        # Asked before in this session; build on the level recorded then
        word = replace(word, mastery_level=session.mastery[word.id])
    updated = await record_mastery(store, word, is_correct)
    session.mastery[word.id] = updated.mastery_level

    if is_correct:
        session.correct_answers += 1
    else:
        session.incorrect_answers += 1
    session.graded[question.id] = is_correct

    _log.debug("Session %s: %r -> %s (mastery %d)", session.id,
               question.word.original, "correct" if is_correct else "wrong",
               updated.mastery_level)
    return {
        "is_correct": is_correct,
        "correct_answer": question.correct_answer,
        "mastery_level": updated.mastery_level,
        "already_graded": False,
    }


def advance(session: LearningSession) -> LearningSession:
    """Move to the next question; the session is complete after the last one."""
    if is_complete(session):
        raise SessionCompletedError("Session is already complete")
    session.current_question_index += 1
    if is_complete(session):
        _log.info("Session %s: all %d questions answered", session.id, len(session.questions))
    return session


def complete_session(session: LearningSession, now: datetime | None = None) -> SessionSummary:
    """Report the session's results. Nothing is written to storage."""
    end = now or datetime.now(timezone.utc)
    elapsed = max(0.0, (end - session.start_time).total_seconds())
    summary = SessionSummary(
        list_id=session.list_id,
        total=len(session.questions),
        correct=session.correct_answers,
        incorrect=session.incorrect_answers,
        duration_minutes=int(elapsed // 60),
        duration_seconds=elapsed,
    )
    _log.info("Learning session completed in %d minutes", summary.duration_minutes)
    _log.info("Correct answers: %d", summary.correct)
    _log.info("Incorrect answers: %d", summary.incorrect)
    return summary
