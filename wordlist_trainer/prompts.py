"""Question wording and translator prompt templates."""
from __future__ import annotations

ORIGINAL_QUESTION = 'What does "{original}" mean?'

TRANSLATION_QUESTION = 'Which word translates as "{translation}"?'

CONTEXT_QUESTION = 'Which word fills the blank?\n\n"{context}"'

BLANK = "________"

TRANSLATE_PROMPT = """\
You are a dictionary. Translate the following text from {source_language} \
to {target_language}.

Text: {text}

Respond with ONLY the translation, no quotes, no explanation."""


def format_examples(pairs: list[tuple[str, str]]) -> str:
    """Render example pairs shown when a translation could not be found."""
    return "\n".join(f"{original} = {translation}" for original, translation in pairs)
