# services/itinerary_generator.py
from __future__ import annotations

import logging
import time
from typing import Optional

from openai import AsyncOpenAI

from config import Settings
from logging_config import get_request_id

log = logging.getLogger("llm")

PROMPT_TEMPLATE = (
    "You are a world-class travel agent. "
    "Create a detailed, day-by-day itinerary for a {duration}-day trip to {city}. "
    "The itinerary must be formatted using **Markdown** for readability. "
    "Include suggested activities for morning, afternoon, and evening for each day."
)


class GenerationError(RuntimeError):
    """The model could not be called or returned nothing usable."""


def build_prompt(city: str, duration: int) -> str:
    return PROMPT_TEMPLATE.format(city=city, duration=duration)


def build_client(settings: Settings) -> Optional[AsyncOpenAI]:
    """Returns an AsyncOpenAI client pointed at Gemini if an api key is configured."""
    if not settings.GEMINI_API_KEY:
        log.warning("GEMINI_API_KEY not set; itinerary requests will fail until it is configured")
        return None
    # One attempt per request (SDK default is two retries)
    return AsyncOpenAI(
        api_key=settings.GEMINI_API_KEY,
        base_url=settings.GEMINI_BASE_URL,
        max_retries=0,
    )


class ItineraryGenerator:
    """
    Turns (city, duration) into a markdown itinerary via a single model call.

    The client is created once at startup and shared across requests; nothing
    here mutates it. No retry, timeout or streaming; a failed call propagates
    to the caller.
    """

    def __init__(self, client: Optional[AsyncOpenAI], model: str):
        self._client = client
        self.model = model

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def generate(self, city: str, duration: int) -> str:
        if self._client is None:
            raise GenerationError("Gemini API key not configured.")

        rid = get_request_id()
        prompt = build_prompt(city, duration)
        start = time.perf_counter()
        log.debug("Calling model", extra={"request_id": rid, "model": self.model, "prompt_chars": len(prompt)})

        chat = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
        )

        if not chat.choices:
            raise GenerationError("Model returned no choices.")
        text = chat.choices[0].message.content
        if text is None:
            raise GenerationError("Model returned no itinerary text.")

        dur_ms = int((time.perf_counter() - start) * 1000)
        log.info(
            f"LLM call ok ({self.model}) in {dur_ms}ms",
            extra={"request_id": rid, "model": self.model, "duration_ms": dur_ms, "chars": len(text)},
        )
        return text
