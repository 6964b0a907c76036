"""Remote rephrasing through Google Gemini."""

from __future__ import annotations

import asyncio

import google.generativeai as genai

from services.classification import ContentType
from services.rephrasers.base import RephraseError, build_prompt
from utils.logging import get_logger

logger = get_logger(__name__)

SYSTEM_INSTRUCTION = (
    "You rewrite short passages of web page text. Return only the rewritten passage, "
    "with no preamble, quotes, or explanation."
)


class GeminiRephraser:
    """Rephrase via a Gemini generative model; the blocking SDK call runs in a worker thread."""

    name = "gemini"

    def __init__(self, api_key: str, model_name: str):
        if not api_key:
            raise ValueError("GEMINI_API_KEY is required for Gemini rephrasing")

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name,
            system_instruction=SYSTEM_INSTRUCTION,
            generation_config={
                "temperature": 0.4,
                "top_p": 0.95,
                "max_output_tokens": 256,
            },
        )

    async def rephrase(self, text: str, content_type: ContentType) -> str:
        try:
            response = await asyncio.to_thread(self.model.generate_content, build_prompt(text, content_type))
            # .text raises ValueError when the candidate was blocked or empty
            generated = response.text
        except ValueError as e:
            raise RephraseError(f"Gemini returned no text: {e}", self.name) from e

        if not generated or not generated.strip():
            raise RephraseError("Gemini returned an empty rephrasing", self.name)

        logger.debug("Gemini rephrase completed", content_type=ContentType(content_type).value, output_length=len(generated))
        return generated.strip()
