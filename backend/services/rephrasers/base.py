"""
Shared interface and prompts for rephrasing strategies.
"""

from __future__ import annotations

from typing import Protocol

from services.classification import ContentType

PROMPT_TEMPLATES = {
    ContentType.warning: (
        "Rephrase the following text to remove offensive language and make it more respectful, "
        'while preserving the core message: "{text}"'
    ),
    ContentType.negative: (
        "Rephrase the following highly negative text to be more constructive and balanced, "
        'while preserving the core message: "{text}"'
    ),
    ContentType.info: 'Rephrase the following potentially misleading information to be more accurate and neutral: "{text}"',
}


class RephraseError(Exception):
    """A remote rephrasing attempt produced no usable text."""

    def __init__(self, message: str, provider: str = "remote"):
        super().__init__(message)
        self.provider = provider


def build_prompt(text: str, content_type: ContentType) -> str:
    return PROMPT_TEMPLATES[ContentType(content_type)].format(text=text)


class RemoteRephraserProtocol(Protocol):
    name: str

    async def rephrase(self, text: str, content_type: ContentType) -> str: ...
