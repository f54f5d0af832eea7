"""Renderer registry."""

from __future__ import annotations

from typing import Any, List

from errors import ConfigurationError
from models import MarkdownDocument, SurveyRecord, VerticalSchema

from .base import BaseRenderer


def _normalized(name: str) -> str:
    return (name or "").strip().lower()


def get_renderer(name: str, **kwargs: Any) -> BaseRenderer:
    normalized = _normalized(name)
    if normalized in {"deterministic", "local"}:
        from .deterministic import DeterministicBriefRenderer

        return DeterministicBriefRenderer()
    if normalized in {"generation", "openai"}:
        from .generation import GenerationBriefRenderer

        return GenerationBriefRenderer(**kwargs)
    raise ConfigurationError(f"Unknown renderer '{name}'")


def available_renderers() -> List[str]:
    return ["deterministic", "generation"]


def render(record: SurveyRecord, schema: VerticalSchema) -> MarkdownDocument:
    """Render a brief with the deterministic renderer."""
    from .deterministic import render as _render

    return _render(record, schema)


__all__ = ["BaseRenderer", "available_renderers", "get_renderer", "render"]
