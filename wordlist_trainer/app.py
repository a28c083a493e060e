"""FastAPI application with all routes."""
from __future__ import annotations

import logging
import os

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from wordlist_trainer import session as engine
from wordlist_trainer.config import Settings, load_settings, save_settings, validate_setting
from wordlist_trainer.db import LIST_FIELDS, WORD_FIELDS, Database
from wordlist_trainer.errors import NoContentError, SessionStateError, StorageError
from wordlist_trainer.models import LearningSession
from wordlist_trainer.parsers.word_table_parser import parse_word_table
from wordlist_trainer.providers.store_sqlite import SqliteWordStore
from wordlist_trainer.question_generator import FillerDistractorStrategy
from wordlist_trainer.seed import seed_if_empty
from wordlist_trainer.translator import get_translator, save_to_word_list, translate_text

app = FastAPI(title="Wordlist Trainer")

_log = logging.getLogger("wordlist_trainer.app")

# Global state (initialized in startup)
_db: Database | None = None
_settings: Settings | None = None
_active_sessions: dict[str, LearningSession] = {}  # session_id -> session

NO_CONTENT_MESSAGE = "Nothing to practice yet, add words first."
STORAGE_MESSAGE = "Could not load or save data."


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def get_store() -> SqliteWordStore:
    return SqliteWordStore(get_db())


def _get_strategy() -> FillerDistractorStrategy:
    return FillerDistractorStrategy(get_settings().filler_words)


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    logging.getLogger("wordlist_trainer").setLevel(_settings.log_level.upper())
    _db = Database(_settings.db_full_path)
    if not os.environ.get("WORDLIST_TRAINER_NO_AUTO_SEED"):
        seed_if_empty(_db)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


# ── Error mapping ─────────────────────────────────────────────────────────

@app.exception_handler(NoContentError)
async def _no_content(request: Request, exc: NoContentError):
    return JSONResponse(status_code=422, content={"error": NO_CONTENT_MESSAGE})


@app.exception_handler(StorageError)
async def _storage_error(request: Request, exc: StorageError):
    _log.warning("Storage error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=503, content={"error": STORAGE_MESSAGE})


@app.exception_handler(SessionStateError)
async def _session_state(request: Request, exc: SessionStateError):
    return JSONResponse(status_code=409, content={"error": str(exc)})


async def _body(request: Request) -> dict:
    return await request.json() if await request.body() else {}


# ── API: Stats & settings ─────────────────────────────────────────────────

@app.get("/api/stats")
async def api_stats():
    stats = get_db().get_stats()
    stats["active_sessions"] = len(_active_sessions)
    return stats


@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await _body(request)
    updates = {k: v for k, v in body.items() if k in Settings.__dataclass_fields__ and k != "db_path"}
    for key, value in updates.items():
        reason = validate_setting(key, value)
        if reason:
            raise HTTPException(400, reason)
    s = get_settings()
    for key, value in updates.items():
        setattr(s, key, value)
    if "log_level" in updates:
        logging.getLogger("wordlist_trainer").setLevel(s.log_level.upper())
    save_settings(s)
    return s.to_dict()


# ── API: Word lists ───────────────────────────────────────────────────────

def _require_list(list_id: str) -> dict:
    word_list = get_db().get_word_list(list_id)
    if word_list is None:
        raise HTTPException(404, "Word list not found")
    return word_list


@app.get("/api/lists")
async def api_lists(user_id: str = ""):
    if not user_id:
        raise HTTPException(400, "No user_id provided")
    return get_db().get_word_lists(user_id)


@app.post("/api/lists")
async def api_create_list(request: Request):
    body = await _body(request)
    name = (body.get("name") or "").strip()
    user_id = body.get("user_id") or ""
    if not name or not user_id:
        raise HTTPException(400, "name and user_id are required")
    return get_db().create_word_list(
        name=name,
        user_id=user_id,
        description=body.get("description", ""),
        language=body.get("language", "en"),
    )


@app.get("/api/lists/{list_id}")
async def api_get_list(list_id: str):
    return _require_list(list_id)


@app.put("/api/lists/{list_id}")
async def api_update_list(list_id: str, request: Request):
    _require_list(list_id)
    body = await _body(request)
    fields = {k: v for k, v in body.items() if k in LIST_FIELDS}
    return get_db().update_word_list(list_id, **fields)


@app.delete("/api/lists/{list_id}")
async def api_delete_list(list_id: str):
    if not get_db().delete_word_list(list_id):
        raise HTTPException(404, "Word list not found")
    return {"deleted": list_id}


# ── API: Words ────────────────────────────────────────────────────────────

@app.get("/api/lists/{list_id}/words")
async def api_list_words(list_id: str):
    _require_list(list_id)
    return get_db().get_words(list_id)


@app.post("/api/lists/{list_id}/words")
async def api_add_word(list_id: str, request: Request):
    _require_list(list_id)
    body = await _body(request)
    if not (body.get("original") or "").strip() or not (body.get("translation") or "").strip():
        raise HTTPException(400, "original and translation are required")
    return get_db().add_word(list_id, body)


@app.post("/api/lists/{list_id}/import")
async def api_import_words(list_id: str, request: Request):
    _require_list(list_id)
    body = await _body(request)
    words = parse_word_table(body.get("markdown", ""))
    db = get_db()
    n = db.add_words(list_id, words)
    return {"imported": n, "word_count": db.get_word_list(list_id)["word_count"]}


@app.put("/api/words/{word_id}")
async def api_update_word(word_id: str, request: Request):
    body = await _body(request)
    fields = {k: v for k, v in body.items() if k in WORD_FIELDS}
    for key in ("original", "translation"):
        if key in fields and not (isinstance(fields[key], str) and fields[key].strip()):
            raise HTTPException(400, f"{key} must not be empty")
    word = get_db().update_word(word_id, **fields)
    if word is None:
        raise HTTPException(404, "Word not found")
    return word


@app.delete("/api/words/{word_id}")
async def api_delete_word(word_id: str):
    if not get_db().delete_word(word_id):
        raise HTTPException(404, "Word not found")
    return {"deleted": word_id}


@app.get("/api/search")
async def api_search(user_id: str = "", q: str = ""):
    if not user_id:
        raise HTTPException(400, "No user_id provided")
    if not q.strip():
        return {"lists": [], "words": []}
    db = get_db()
    return {
        "lists": db.search_word_lists(user_id, q),
        "words": db.search_words(user_id, q),
    }


# ── API: Learning sessions ────────────────────────────────────────────────

def _get_session(session_id: str) -> LearningSession:
    session = _active_sessions.get(session_id)
    if session is None:
        raise HTTPException(404, "Session not found")
    return session


def _session_state(session: LearningSession) -> dict:
    complete = engine.is_complete(session)
    return {
        "session_id": session.id,
        "list_id": session.list_id,
        "total": len(session.questions),
        "index": session.current_question_index,
        "correct_answers": session.correct_answers,
        "incorrect_answers": session.incorrect_answers,
        "session_complete": complete,
        "question": None if complete else engine.current_question(session).to_dict(),
    }


async def _new_session(list_id: str) -> LearningSession:
    _require_list(list_id)
    session = await engine.start_session(
        get_store(),
        list_id,
        strategy=_get_strategy(),
        include_context=get_settings().include_context_questions,
    )
    _active_sessions[session.id] = session
    return session


@app.post("/api/session/start")
async def api_session_start(request: Request):
    body = await _body(request)
    list_id = body.get("list_id")
    if not list_id:
        raise HTTPException(400, "No list_id provided")
    session = await _new_session(list_id)
    return _session_state(session)


@app.get("/api/session/{session_id}")
async def api_session_get(session_id: str):
    return _session_state(_get_session(session_id))


@app.get("/api/session/{session_id}/question")
async def api_session_question(session_id: str):
    return engine.current_question(_get_session(session_id)).to_dict()


@app.post("/api/session/{session_id}/answer")
async def api_session_answer(session_id: str, request: Request):
    session = _get_session(session_id)
    body = await _body(request)
    answer = body.get("answer")
    if answer is None:
        raise HTTPException(400, "No answer provided")

    current = engine.current_question(session)
    question_id = body.get("question_id", current.id)
    question = next((q for q in session.questions if q.id == question_id), None)
    if question is None:
        raise HTTPException(404, "Question not found in this session")

    result = await engine.submit_answer(get_store(), session, question, answer)
    result["correct_answers"] = session.correct_answers
    result["incorrect_answers"] = session.incorrect_answers
    return result


@app.post("/api/session/{session_id}/next")
async def api_session_next(session_id: str):
    session = _get_session(session_id)
    engine.advance(session)
    return _session_state(session)


@app.post("/api/session/{session_id}/complete")
async def api_session_complete(session_id: str):
    session = _active_sessions.pop(session_id, None)
    if session is None:
        raise HTTPException(404, "Session not found")
    return engine.complete_session(session).to_dict()


@app.post("/api/session/{session_id}/restart")
async def api_session_restart(session_id: str):
    old = _get_session(session_id)
    session = await _new_session(old.list_id)
    _active_sessions.pop(session_id, None)
    return _session_state(session)


# ── API: Translator ───────────────────────────────────────────────────────

@app.post("/api/translate")
async def api_translate(request: Request):
    body = await _body(request)
    text = (body.get("text") or "").strip()
    if not text:
        raise HTTPException(400, "No text provided")
    s = get_settings()
    result = await translate_text(
        text,
        provider=get_translator(s),
        source_language=s.source_language,
        target_language=s.target_language,
    )
    return get_db().save_translation(result)


@app.get("/api/translate/history")
async def api_translate_history(limit: int = 50):
    return get_db().get_translation_history(limit=limit)


@app.post("/api/translate/{history_id}/save")
async def api_translate_save(history_id: str, request: Request):
    body = await _body(request)
    list_id = body.get("list_id")
    if not list_id:
        raise HTTPException(400, "No list_id provided")
    word = save_to_word_list(get_db(), history_id, list_id)
    if word is None:
        raise HTTPException(404, "Translation or word list not found")
    return word
