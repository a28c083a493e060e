from __future__ import annotations

import os

from wordlist_trainer.prompts import TRANSLATE_PROMPT
from wordlist_trainer.providers.base import TranslationProvider


class AnthropicTranslator(TranslationProvider):
    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        import anthropic
        self.client = anthropic.AsyncAnthropic(
            api_key=os.environ.get("ANTHROPIC_API_KEY", ""),
        )
        self.model = model

    async def translate(self, text: str, source_language: str = "en", target_language: str = "tr") -> str:
        prompt = TRANSLATE_PROMPT.format(
            text=text,
            source_language=source_language,
            target_language=target_language,
        )
        message = await self.client.messages.create(
            model=self.model,
            max_tokens=256,
            temperature=0.2,
            messages=[{"role": "user", "content": prompt}],
        )
        return message.content[0].text.strip()

    def name(self) -> str:
        return f"anthropic/{self.model}"
