"""Parse markdown word tables into word drafts for bulk import.

Handles two table schemas:
  | Original | Translation | Context |   (with an example sentence)
  | Original | Translation |             (pairs only)

The original must be bold (``**hello**``); header and separator rows are
skipped that way. ``## Heading`` lines become the ``notes`` of the rows
below them.
"""
from __future__ import annotations

import re
from pathlib import Path

ROW_RE = re.compile(r"^\|\s*\*\*(.+?)\*\*\s*\|\s*(.+?)\s*\|(?:\s*(.*?)\s*\|)?")


def _clean(cell: str | None) -> str | None:
    if cell is None:
        return None
    cell = cell.strip().strip("*").strip()
    return cell or None


def parse_word_table(text: str) -> list[dict]:
    words: list[dict] = []
    current_section: str | None = None

    for line in text.splitlines():
        m = re.match(r"^## (.+)", line)
        if m:
            current_section = m.group(1).strip()
            continue

        if not line.startswith("|"):
            continue

        m = ROW_RE.match(line)
        if m:
            original = m.group(1).strip()
            translation = _clean(m.group(2))
            if not original or not translation:
                continue
            words.append({
                "original": original,
                "translation": translation,
                "context": _clean(m.group(3)),
                "notes": current_section,
            })

    return words


def parse_word_table_file(path: Path) -> list[dict]:
    return parse_word_table(path.read_text())
