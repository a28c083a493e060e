"""Tests for the learning-session state machine."""
from __future__ import annotations

from datetime import timedelta

import pytest

from wordlist_trainer import session as engine
from wordlist_trainer.errors import (
    NoContentError,
    SessionCompletedError,
    SessionStateError,
    StorageError,
)
from wordlist_trainer.models import Word
from wordlist_trainer.question_generator import FILLER_WORDS


async def _answer_all(store, session, correct=True):
    while not engine.is_complete(session):
        q = engine.current_question(session)
        answer = q.correct_answer if correct else next(o for o in q.options if o != q.correct_answer)
        await engine.submit_answer(store, session, q, answer)
        engine.advance(session)


class TestStartSession:
    @pytest.mark.asyncio
    async def test_scenario_all_correct(self, fake_store, rng):
        session = await engine.start_session(fake_store, "list-1", rng=rng)
        assert len(session.questions) == 4
        assert session.current_question_index == 0

        await _answer_all(fake_store, session)

        assert session.correct_answers == 4
        assert session.incorrect_answers == 0
        for original in ("hello", "book", "car", "house"):
            assert fake_store.word("list-1", original).mastery_level == 1

    @pytest.mark.asyncio
    async def test_two_word_list_padded(self, fake_store, rng):
        session = await engine.start_session(fake_store, "pair", rng=rng)
        for q in session.questions:
            assert len(q.options) == 4
            assert len([o for o in q.options if o in FILLER_WORDS]) == 2

    @pytest.mark.asyncio
    async def test_empty_list(self, fake_store):
        with pytest.raises(NoContentError):
            await engine.start_session(fake_store, "empty")

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, fake_store):
        fake_store.fail_fetch = True
        with pytest.raises(StorageError):
            await engine.start_session(fake_store, "list-1")

    @pytest.mark.asyncio
    async def test_unknown_list(self, fake_store):
        with pytest.raises(StorageError):
            await engine.start_session(fake_store, "missing")

    @pytest.mark.asyncio
    async def test_fresh_counters(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        assert session.correct_answers == 0
        assert session.incorrect_answers == 0
        assert session.graded == {}
        assert session.id


class TestGrading:
    @pytest.mark.asyncio
    async def test_check_answer_has_no_side_effects(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(session)
        assert engine.check_answer(q, q.correct_answer) is True
        assert engine.check_answer(q, q.correct_answer) is True
        assert engine.check_answer(q, "nonsense") is False
        assert session.correct_answers == 0
        assert fake_store.persisted == []

    @pytest.mark.asyncio
    async def test_wrong_answer(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(session)
        wrong = next(o for o in q.options if o != q.correct_answer)
        result = await engine.submit_answer(fake_store, session, q, wrong)
        assert result["is_correct"] is False
        assert result["correct_answer"] == q.correct_answer
        assert result["mastery_level"] == 0
        assert session.incorrect_answers == 1

    @pytest.mark.asyncio
    async def test_double_submit_counts_once(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(session)
        first = await engine.submit_answer(fake_store, session, q, q.correct_answer)
        second = await engine.submit_answer(fake_store, session, q, q.correct_answer)
        assert first["already_graded"] is False
        assert second["already_graded"] is True
        assert second["is_correct"] is True
        assert session.correct_answers == 1
        assert session.incorrect_answers == 0
        assert len(fake_store.persisted) == 1

    @pytest.mark.asyncio
    async def test_resubmit_different_answer_keeps_first(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(session)
        await engine.submit_answer(fake_store, session, q, q.correct_answer)
        wrong = next(o for o in q.options if o != q.correct_answer)
        result = await engine.submit_answer(fake_store, session, q, wrong)
        assert result["is_correct"] is True
        assert session.incorrect_answers == 0

    @pytest.mark.asyncio
    async def test_only_current_question(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        later = session.questions[2]
        with pytest.raises(SessionStateError):
            await engine.submit_answer(fake_store, session, later, later.correct_answer)
        assert session.correct_answers == 0

    @pytest.mark.asyncio
    async def test_persist_failure_leaves_counters(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(session)
        fake_store.fail_persist = True
        with pytest.raises(StorageError):
            await engine.submit_answer(fake_store, session, q, q.correct_answer)
        assert session.correct_answers == 0
        assert q.id not in session.graded

        fake_store.fail_persist = False
        result = await engine.submit_answer(fake_store, session, q, q.correct_answer)
        assert result["already_graded"] is False
        assert session.correct_answers == 1

    @pytest.mark.asyncio
    async def test_mastery_capped(self, fake_store):
        fake_store.lists["list-1"][0].mastery_level = 5
        session = await engine.start_session(fake_store, "list-1")
        await _answer_all(fake_store, session)
        assert fake_store.word("list-1", "hello").mastery_level == 5


class TestProgress:
    @pytest.mark.asyncio
    async def test_complete_after_k_advances(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        k = len(session.questions)
        for _ in range(k):
            assert not engine.is_complete(session)
            engine.advance(session)
        assert engine.is_complete(session)
        assert session.current_question_index == k
        with pytest.raises(SessionCompletedError):
            engine.current_question(session)

    @pytest.mark.asyncio
    async def test_advance_past_end(self, fake_store):
        session = await engine.start_session(fake_store, "pair")
        engine.advance(session)
        engine.advance(session)
        with pytest.raises(SessionCompletedError):
            engine.advance(session)
        assert session.current_question_index == 2

    @pytest.mark.asyncio
    async def test_questions_fixed(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        order = [q.id for q in session.questions]
        await _answer_all(fake_store, session, correct=False)
        assert [q.id for q in session.questions] == order
        assert session.incorrect_answers == 4


class TestCompleteAndRestart:
    @pytest.mark.asyncio
    async def test_summary(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        await _answer_all(fake_store, session)
        summary = engine.complete_session(session, now=session.start_time + timedelta(minutes=3, seconds=50))
        assert summary.total == 4
        assert summary.correct == 4
        assert summary.incorrect == 0
        assert summary.duration_minutes == 3
        assert summary.accuracy == 1.0
        assert summary.to_dict()["duration_seconds"] == 230.0

    @pytest.mark.asyncio
    async def test_summary_does_not_write(self, fake_store):
        session = await engine.start_session(fake_store, "list-1")
        engine.complete_session(session)
        assert fake_store.persisted == []

    @pytest.mark.asyncio
    async def test_restart_is_independent(self, fake_store):
        old = await engine.start_session(fake_store, "list-1")
        q = engine.current_question(old)
        await engine.submit_answer(fake_store, old, q, q.correct_answer)
        engine.advance(old)

        new = await engine.restart(fake_store, "list-1")
        assert new is not old
        assert new.id != old.id
        assert new.current_question_index == 0
        assert new.correct_answers == 0
        assert {q.id for q in new.questions}.isdisjoint({q.id for q in old.questions})
        # The old session is untouched
        assert old.current_question_index == 1
        assert old.correct_answers == 1


class TestRepeatedWord:
    @pytest.fixture
    def solo_store(self, store_factory):
        return store_factory({"solo": [Word("w-book", "solo", "book", "kitap", context="I read a book.", mastery_level=3)]})

    @pytest.mark.asyncio
    async def test_two_correct_answers_add_two(self, solo_store, rng):
        session = await engine.start_session(solo_store, "solo", rng=rng, include_context=True)
        assert len(session.questions) == 2
        await _answer_all(solo_store, session)
        assert session.correct_answers == 2
        assert solo_store.word("solo", "book").mastery_level == 5

    @pytest.mark.asyncio
    async def test_wrong_then_right_cancels_out(self, solo_store, rng):
        session = await engine.start_session(solo_store, "solo", rng=rng, include_context=True)
        q = engine.current_question(session)
        wrong = next(o for o in q.options if o != q.correct_answer)
        first = await engine.submit_answer(solo_store, session, q, wrong)
        engine.advance(session)
        q = engine.current_question(session)
        second = await engine.submit_answer(solo_store, session, q, q.correct_answer)
        assert first["mastery_level"] == 2
        assert second["mastery_level"] == 3
        assert solo_store.word("solo", "book").mastery_level == 3
