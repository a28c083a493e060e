from __future__ import annotations

import logging
import time

import httpx

from wordlist_trainer.prompts import TRANSLATE_PROMPT
from wordlist_trainer.providers.base import TranslationProvider

log = logging.getLogger("wordlist_trainer.llm")


class OllamaTranslator(TranslationProvider):
    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "qwen3:8b",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self._transport = transport

    async def translate(self, text: str, source_language: str = "en", target_language: str = "tr") -> str:
        prompt = TRANSLATE_PROMPT.format(
            text=text,
            source_language=source_language,
            target_language=target_language,
        )
        log.info("── TRANSLATE (%s) ── %s", self.model, text)
        t0 = time.monotonic()
        async with httpx.AsyncClient(timeout=60.0, transport=self._transport) as client:
            resp = await client.post(
                f"{self.base_url}/api/generate",
                json={
                    "model": self.model,
                    "prompt": prompt,
                    "temperature": 0.2,
                    "stream": False,
                    "think": False,
                },
            )
            resp.raise_for_status()
            data = resp.json()
        response = data["response"].strip()
        log.info("── RESPONSE (%.1fs) ── %s", time.monotonic() - t0, response)
        return response

    def name(self) -> str:
        return f"ollama/{self.model}"
