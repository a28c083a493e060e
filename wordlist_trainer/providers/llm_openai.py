from __future__ import annotations

import os

from wordlist_trainer.prompts import TRANSLATE_PROMPT
from wordlist_trainer.providers.base import TranslationProvider


class OpenAITranslator(TranslationProvider):
    def __init__(self, model: str = "gpt-4o-mini"):
        import openai
        self.client = openai.AsyncOpenAI(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
        )
        self.model = model

    async def translate(self, text: str, source_language: str = "en", target_language: str = "tr") -> str:
        resp = await self.client.chat.completions.create(
            model=self.model,
            temperature=0.2,
            messages=[{
                "role": "user",
                "content": TRANSLATE_PROMPT.format(
                    text=text,
                    source_language=source_language,
                    target_language=target_language,
                ),
            }],
        )
        return (resp.choices[0].message.content or "").strip()

    def name(self) -> str:
        return f"openai/{self.model}"
