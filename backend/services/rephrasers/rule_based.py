"""Deterministic rule-based rephrasing; always available and the fallback for remote strategies."""

import re
from typing import Mapping, Sequence, Tuple

from services.classification import ContentType
from services.lexicons import MISINFO_PHRASE_REPLACEMENTS, NEGATIVE_PHRASE_REPLACEMENTS, OFFENSIVE_REPLACEMENTS

# Negative-sentiment text shorter than this (after substitution) gets the balancing wrapper
BALANCE_WRAP_MAX_LENGTH = 100

BALANCE_TEMPLATE = "While there are challenges with {text}, there may also be opportunities for improvement."
SOURCING_TEMPLATE = "This perspective is one viewpoint: {text}. Consider consulting multiple sources."

Substitutions = Sequence[Tuple[re.Pattern, str]]


def _compile(replacements: Mapping[str, str]) -> Substitutions:
    return tuple(
        (re.compile(rf"\b{re.escape(phrase)}\b", re.IGNORECASE | re.ASCII), replacement)
        for phrase, replacement in replacements.items()
    )


_OFFENSIVE = _compile(OFFENSIVE_REPLACEMENTS)
_NEGATIVE = _compile(NEGATIVE_PHRASE_REPLACEMENTS)
_MISINFO = _compile(MISINFO_PHRASE_REPLACEMENTS)


def _substitute(text: str, substitutions: Substitutions) -> str:
    for pattern, replacement in substitutions:
        # Lambda keeps replacement text literal (no backreference expansion)
        text = pattern.sub(lambda _match, value=replacement: value, text)
    return text


class RuleBasedRephraser:
    """Word and phrase substitution keyed by content type."""

    name = "rules"

    def rephrase(self, text: str, content_type: ContentType) -> str:
        content_type = ContentType(content_type)

        if content_type is ContentType.warning:
            return _substitute(text, _OFFENSIVE)

        if content_type is ContentType.negative:
            rephrased = _substitute(_substitute(text, _NEGATIVE), _OFFENSIVE)
            if len(rephrased) < BALANCE_WRAP_MAX_LENGTH:
                rephrased = BALANCE_TEMPLATE.format(text=rephrased)
            return rephrased

        return SOURCING_TEMPLATE.format(text=_substitute(text, _MISINFO))
