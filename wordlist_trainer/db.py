from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path

from wordlist_trainer.mastery import list_progress
from wordlist_trainer.models import TranslationResult, clamp_mastery

_log = logging.getLogger("wordlist_trainer.db")

SCHEMA = """
CREATE TABLE IF NOT EXISTS word_lists (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT DEFAULT '',
    user_id TEXT NOT NULL,
    created_at TEXT NOT NULL,
    word_count INTEGER DEFAULT 0,
    progress REAL DEFAULT 0,
    language TEXT DEFAULT 'en'
);

CREATE TABLE IF NOT EXISTS words (
    id TEXT PRIMARY KEY,
    list_id TEXT NOT NULL REFERENCES word_lists(id) ON DELETE CASCADE,
    original TEXT NOT NULL,
    translation TEXT NOT NULL,
    context TEXT,
    notes TEXT,
    mastery_level INTEGER DEFAULT 0,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_words_list ON words(list_id);

CREATE TABLE IF NOT EXISTS translation_history (
    id TEXT PRIMARY KEY,
    original_text TEXT NOT NULL,
    translated_text TEXT NOT NULL,
    detected_language TEXT,
    confidence REAL,
    timestamp TEXT NOT NULL,
    saved_to_word_list INTEGER DEFAULT 0
);
"""

LIST_FIELDS = ("name", "description", "language")
WORD_FIELDS = ("original", "translation", "context", "notes", "mastery_level")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return str(uuid.uuid4())


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA foreign_keys=ON")
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    # ── Word lists ────────────────────────────────────────────────────────

    def create_word_list(
        self,
        name: str,
        user_id: str,
        description: str = "",
        language: str = "en",
    ) -> dict:
        list_id = _new_id()
        self.conn.execute(
            "INSERT INTO word_lists (id, name, description, user_id, created_at, language) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (list_id, name, description, user_id, _now(), language),
        )
        self.conn.commit()
        return self.get_word_list(list_id)

    def get_word_list(self, list_id: str) -> dict | None:
        row = self.conn.execute(
            "SELECT * FROM word_lists WHERE id = ?", (list_id,)
        ).fetchone()
        return dict(row) if row else None

    def get_word_lists(self, user_id: str) -> list[dict]:
        rows = self.conn.execute(
            "SELECT * FROM word_lists WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        ).fetchall()
        return [dict(r) for r in rows]

    def get_list_count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM word_lists").fetchone()
        return row[0]

    def update_word_list(self, list_id: str, **fields) -> dict | None:
        """Update name / description / language; other keys are ignored."""
        updates = {k: v for k, v in fields.items() if k in LIST_FIELDS}
        if updates:
            assignments = ", ".join(f"{k} = ?" for k in updates)
            self.conn.execute(
                f"UPDATE word_lists SET {assignments} WHERE id = ?",
                (*updates.values(), list_id),
            )
            self.conn.commit()
        return self.get_word_list(list_id)

    def delete_word_list(self, list_id: str) -> bool:
        """Delete a list and its words. Returns False if it did not exist."""
        words = self.conn.execute("DELETE FROM words WHERE list_id = ?", (list_id,))
        cur = self.conn.execute("DELETE FROM word_lists WHERE id = ?", (list_id,))
        self.conn.commit()
        if cur.rowcount:
            _log.info("Deleted list %s (%d words)", list_id, words.rowcount)
        return cur.rowcount > 0

    def update_list_word_count(self, list_id: str) -> None:
        """Recompute a list's word count and average-mastery progress."""
        levels = [
            row[0]
            for row in self.conn.execute(
                "SELECT mastery_level FROM words WHERE list_id = ?", (list_id,)
            ).fetchall()
        ]
        self.conn.execute(
            "UPDATE word_lists SET word_count = ?, progress = ? WHERE id = ?",
            (len(levels), list_progress(levels), list_id),
        )
        self.conn.commit()

    # ── Words ─────────────────────────────────────────────────────────────

    def get_words(self, list_id: str) -> list[dict]:
        rows = self.conn.execute(
            "SELECT * FROM words WHERE list_id = ? ORDER BY original", (list_id,)
        ).fetchall()
        return [dict(r) for r in rows]

    def get_word(self, word_id: str) -> dict | None:
        row = self.conn.execute("SELECT * FROM words WHERE id = ?", (word_id,)).fetchone()
        return dict(row) if row else None

    def get_word_count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM words").fetchone()
        return row[0]

    def _insert_word(self, list_id: str, word: dict) -> str:
        word_id = _new_id()
        self.conn.execute(
            "INSERT INTO words (id, list_id, original, translation, context, notes, "
            "mastery_level, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                word_id,
                list_id,
                word["original"].strip(),
                word["translation"].strip(),
                word.get("context") or None,
                word.get("notes") or None,
                clamp_mastery(word.get("mastery_level")),
                _now(),
            ),
        )
        return word_id

    def add_word(self, list_id: str, word: dict) -> dict:
        word_id = self._insert_word(list_id, word)
        self.conn.commit()
        self.update_list_word_count(list_id)
        return self.get_word(word_id)

    def add_words(self, list_id: str, words: list[dict]) -> int:
        if not words:
            return 0
        for w in words:
            self._insert_word(list_id, w)
        self.conn.commit()
        self.update_list_word_count(list_id)
        return len(words)

    def update_word(self, word_id: str, **fields) -> dict | None:
        updates = {k: v for k, v in fields.items() if k in WORD_FIELDS}
        for key in ("original", "translation"):
            if key in updates:
                updates[key] = str(updates[key] or "").strip()
                if not updates[key]:
                    raise ValueError(f"{key} must not be empty")
        if "mastery_level" in updates:
            updates["mastery_level"] = clamp_mastery(updates["mastery_level"])
        existing = self.get_word(word_id)
        if existing is None:
            return None
        if updates:
            assignments = ", ".join(f"{k} = ?" for k in updates)
            self.conn.execute(
                f"UPDATE words SET {assignments} WHERE id = ?",
                (*updates.values(), word_id),
            )
            self.conn.commit()
            if "mastery_level" in updates:
                self.update_list_word_count(existing["list_id"])
        return self.get_word(word_id)

    def update_word_mastery(self, word_id: str, mastery_level: int) -> dict | None:
        return self.update_word(word_id, mastery_level=mastery_level)

    def delete_word(self, word_id: str) -> bool:
        existing = self.get_word(word_id)
        if existing is None:
            return False
        self.conn.execute("DELETE FROM words WHERE id = ?", (word_id,))
        self.conn.commit()
        self.update_list_word_count(existing["list_id"])
        return True

    # ── Search ────────────────────────────────────────────────────────────

    def search_word_lists(self, user_id: str, query: str) -> list[dict]:
        pattern = f"%{query.strip()}%"
        rows = self.conn.execute(
            "SELECT * FROM word_lists WHERE user_id = ? "
            "AND (name LIKE ? OR description LIKE ?) ORDER BY created_at DESC",
            (user_id, pattern, pattern),
        ).fetchall()
        return [dict(r) for r in rows]

    def search_words(self, user_id: str, query: str) -> list[dict]:
        pattern = f"%{query.strip()}%"
        rows = self.conn.execute(
            """
            SELECT w.* FROM words w
            JOIN word_lists l ON w.list_id = l.id
            WHERE l.user_id = ?
              AND (w.original LIKE ? OR w.translation LIKE ?
                   OR w.context LIKE ? OR w.notes LIKE ?)
            ORDER BY w.original
            """,
            (user_id, pattern, pattern, pattern, pattern),
        ).fetchall()
        return [dict(r) for r in rows]

    # ── Translation history ───────────────────────────────────────────────

    def save_translation(self, result: TranslationResult) -> dict:
        history_id = _new_id()
        self.conn.execute(
            "INSERT INTO translation_history "
            "(id, original_text, translated_text, detected_language, confidence, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            (
                history_id,
                result.original_text,
                result.translated_text,
                result.detected_language,
                result.confidence,
                _now(),
            ),
        )
        self.conn.commit()
        return self.get_translation(history_id)

    def get_translation(self, history_id: str) -> dict | None:
        row = self.conn.execute(
            "SELECT * FROM translation_history WHERE id = ?", (history_id,)
        ).fetchone()
        if row is None:
            return None
        d = dict(row)
        d["saved_to_word_list"] = bool(d["saved_to_word_list"])
        return d

    def get_translation_history(self, limit: int = 50) -> list[dict]:
        rows = self.conn.execute(
            "SELECT id FROM translation_history ORDER BY timestamp DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [self.get_translation(r["id"]) for r in rows]

    def mark_translation_saved(self, history_id: str) -> None:
        self.conn.execute(
            "UPDATE translation_history SET saved_to_word_list = 1 WHERE id = ?",
            (history_id,),
        )
        self.conn.commit()

    # ── Stats ─────────────────────────────────────────────────────────────

    def get_stats(self) -> dict:
        row = self.conn.execute(
            "SELECT COUNT(*), COALESCE(AVG(mastery_level), 0), "
            "COALESCE(SUM(CASE WHEN mastery_level >= 5 THEN 1 ELSE 0 END), 0) "
            "FROM words"
        ).fetchone()
        return {
            "total_lists": self.get_list_count(),
            "total_words": row[0],
            "average_mastery": round(row[1], 2),
            "mastered_words": row[2],
        }
