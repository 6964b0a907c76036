"""Rephrasing strategies: remote generative rewrites and the deterministic rule engine."""

from services.rephrasers.base import RephraseError, RemoteRephraserProtocol, build_prompt
from services.rephrasers.rule_based import RuleBasedRephraser

__all__ = [
    "RephraseError",
    "RemoteRephraserProtocol",
    "RuleBasedRephraser",
    "build_prompt",
]
