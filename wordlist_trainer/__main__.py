"""CLI entry point for wordlist-trainer.

Usage:
  python -m wordlist_trainer serve [--port PORT] [--host HOST]
  python -m wordlist_trainer stop
  python -m wordlist_trainer restart [--port PORT]
  python -m wordlist_trainer status
  python -m wordlist_trainer seed [--user USER]
  python -m wordlist_trainer import FILE --list LIST_ID
  python -m wordlist_trainer lists [--user USER]
  python -m wordlist_trainer practice LIST_ID
  python -m wordlist_trainer translate TEXT...
"""
from __future__ import annotations

import asyncio
import os
import signal
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"

DEFAULT_USER = "demo"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "restart":
        _restart(args[1:])
    elif command == "status":
        _status()
    elif command == "seed":
        _seed(args[1:])
    elif command == "import":
        _import_words(args[1:])
    elif command == "lists":
        _lists(args[1:])
    elif command == "practice":
        _practice(args[1:])
    elif command == "translate":
        _translate(args[1:])
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, restart, status, seed, import, lists, practice, translate")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _open_db():
    from wordlist_trainer.config import load_settings
    from wordlist_trainer.db import Database

    settings = load_settings()
    return settings, Database(settings.db_full_path)


def _server_pid() -> int | None:
    """PID of the running server, or None. A stale PID file is removed."""
    try:
        pid = int(PID_FILE.read_text().strip())
    except (FileNotFoundError, ValueError):
        PID_FILE.unlink(missing_ok=True)
        return None
    try:
        os.kill(pid, 0)
    except (ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None
    return pid


def _stop() -> bool:
    pid = _server_pid()
    if pid is None:
        print("No server running.")
        return False
    PID_FILE.unlink(missing_ok=True)
    try:
        os.kill(pid, signal.SIGTERM)
    except ProcessLookupError:
        print(f"Server {pid} already exited.")
        return False
    print(f"Sent SIGTERM to server {pid}.")
    return True


def _status():
    pid = _server_pid()
    print("No server running." if pid is None else f"Server running, PID {pid}.")


def _restart(args: list[str]):
    import time

    if _stop():
        time.sleep(1)
    _serve(args)


def _serve(args: list[str]):
    import uvicorn

    pid = _server_pid()
    if pid is not None:
        print(f"Server {pid} is already running; use 'stop' or 'restart'.")
        sys.exit(1)

    host = _parse_flag(args, "--host", "127.0.0.1")
    port = int(_parse_flag(args, "--port", "8765"))
    PID_FILE.write_text(str(os.getpid()))
    print(f"Wordlist Trainer listening on http://{host}:{port} (Ctrl+C stops it)\n")
    try:
        uvicorn.run("wordlist_trainer.app:app", host=host, port=port, timeout_graceful_shutdown=5)
    finally:
        PID_FILE.unlink(missing_ok=True)


def _seed(args: list[str]):
    from wordlist_trainer.seed import seed_database

    user_id = _parse_flag(args, "--user", DEFAULT_USER)
    _, db = _open_db()
    for word_list in seed_database(db, user_id):
        print(f"  {word_list['name']}: {word_list['word_count']} words ({word_list['id']})")
    db.close()


def _import_words(args: list[str]):
    from wordlist_trainer.parsers.word_table_parser import parse_word_table_file

    list_id = _parse_flag(args, "--list", "")
    files = [a for a in args if not a.startswith("--") and a != list_id]
    if not files or not list_id:
        print("Usage: import FILE --list LIST_ID")
        sys.exit(1)

    _, db = _open_db()
    if db.get_word_list(list_id) is None:
        print(f"No word list with id {list_id}.")
        db.close()
        sys.exit(1)

    total = 0
    for f in files:
        path = Path(f)
        if not path.exists():
            print(f"  Skipping (not found): {path}")
            continue
        words = parse_word_table_file(path)
        total += db.add_words(list_id, words)
        print(f"  {path.name}: {len(words)} words")

    print(f"\nImported {total} words, list now has {db.get_word_list(list_id)['word_count']}")
    db.close()


def _lists(args: list[str]):
    user_id = _parse_flag(args, "--user", DEFAULT_USER)
    _, db = _open_db()
    lists = db.get_word_lists(user_id)
    if not lists:
        print(f"No word lists for {user_id}. Run 'seed' to create sample lists.")
    for wl in lists:
        print(f"  {wl['id']}  {wl['name']:<30} {wl['word_count']:>4} words  "
              f"{wl['progress'] * 100:5.1f}% mastered")
    db.close()


async def _run_practice(store, list_id: str, strategy, include_context: bool = False) -> None:
    from wordlist_trainer import session as engine
    from wordlist_trainer.errors import NoContentError

    try:
        session = await engine.start_session(
            store, list_id, strategy=strategy, include_context=include_context,
        )
    except NoContentError:
        print("Nothing to practice yet, add words first.")
        return

    while not engine.is_complete(session):
        q = engine.current_question(session)
        print(f"\n[{session.current_question_index + 1}/{len(session.questions)}] {q.question_text}")
        for i, option in enumerate(q.options, 1):
            print(f"  {i}. {option}")
        choice = ""
        while not (choice.isdigit() and 1 <= int(choice) <= len(q.options)):
            choice = input("> ").strip()
        result = await engine.submit_answer(store, session, q, q.options[int(choice) - 1])
        if result["is_correct"]:
            print("Correct!")
        else:
            print(f"Wrong, the answer is: {result['correct_answer']}")
        engine.advance(session)

    summary = engine.complete_session(session)
    print(f"\nDone: {summary.correct}/{summary.total} correct "
          f"in {summary.duration_minutes} minutes.")


def _practice(args: list[str]):
    from wordlist_trainer.errors import StorageError
    from wordlist_trainer.providers.store_sqlite import SqliteWordStore
    from wordlist_trainer.question_generator import FillerDistractorStrategy

    if not args:
        print("Usage: practice LIST_ID")
        sys.exit(1)

    settings, db = _open_db()
    store = SqliteWordStore(db)
    try:
        asyncio.run(_run_practice(
            store, args[0], FillerDistractorStrategy(settings.filler_words),
            settings.include_context_questions,
        ))
    except StorageError as e:
        print(f"Could not load or save data: {e}")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print("\nSession abandoned.")
    finally:
        db.close()


def _translate(args: list[str]):
    from wordlist_trainer.translator import get_translator, translate_text

    text = " ".join(args).strip()
    if not text:
        print("Usage: translate TEXT")
        sys.exit(1)

    settings, db = _open_db()

    result = asyncio.run(translate_text(
        text, get_translator(settings), settings.source_language, settings.target_language,
    ))
    db.save_translation(result)
    print(result.translated_text)
    db.close()


if __name__ == "__main__":
    main()
