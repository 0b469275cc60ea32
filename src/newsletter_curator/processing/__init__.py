"""Candidate selection, LLM story extraction, merging and scoring."""

__all__ = [
    "dedupe",
    "extractor",
    "llm_client",
    "parsing",
    "pipeline",
    "sampling",
    "scheduler",
    "scoring",
    "types",
]
