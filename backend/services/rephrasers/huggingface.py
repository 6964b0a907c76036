"""Remote rephrasing through the HuggingFace Inference API."""

from __future__ import annotations

from typing import Any, Optional

import aiohttp

from services.classification import ContentType
from services.rephrasers.base import RephraseError, build_prompt
from utils.logging import get_logger

logger = get_logger(__name__)


def extract_generated_text(payload: Any) -> Optional[str]:
    """Pull the generated string out of an inference payload (list-first or single object)."""
    item = payload[0] if isinstance(payload, list) and payload else payload
    if not isinstance(item, dict):
        return None
    text = item.get("generated_text") or item.get("summary_text")
    return text if isinstance(text, str) else None


class HuggingFaceRephraser:
    """Rephrase via a hosted text-generation model."""

    name = "huggingface"

    def __init__(self, api_key: str, model_url: str, timeout_seconds: float = 15.0):
        if not api_key:
            raise ValueError("HUGGINGFACE_API_KEY is required for HuggingFace rephrasing")
        self.api_key = api_key
        self.model_url = model_url
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async def rephrase(self, text: str, content_type: ContentType) -> str:
        body = {
            "inputs": build_prompt(text, content_type),
            "parameters": {"max_length": 150, "min_length": 30},
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(self.model_url, json=body, headers=headers) as response:
                    if response.status < 200 or response.status >= 300:
                        raise RephraseError(f"HuggingFace API error: HTTP {response.status} {response.reason}", self.name)
                    payload = await response.json(content_type=None)
        except aiohttp.ClientError as e:
            raise RephraseError(f"HuggingFace request failed: {e}", self.name) from e
        except ValueError as e:
            raise RephraseError("HuggingFace returned a non-JSON payload", self.name) from e

        generated = extract_generated_text(payload)
        if not generated or not generated.strip():
            raise RephraseError("HuggingFace payload has no generated text", self.name)

        logger.debug("HuggingFace rephrase completed", content_type=ContentType(content_type).value, output_length=len(generated))
        return generated.strip()
