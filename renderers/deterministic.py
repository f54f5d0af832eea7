"""Reference brief renderer: pure function of (record, schema)."""

from __future__ import annotations

import logging

from models import MarkdownDocument, SurveyRecord, VerticalSchema

from .base import BaseRenderer
from .sections import render_section
from .templates import render_document

logger = logging.getLogger(__name__)


class DeterministicBriefRenderer(BaseRenderer):
    """Render every schema section in order, dropping sections with no valid content."""

    name = "deterministic"

    def render(self, record: SurveyRecord, schema: VerticalSchema) -> MarkdownDocument:
        schema = self._require_inputs(record, schema)
        blocks = tuple(
            block
            for block in (render_section(rule, record, schema) for rule in schema.sections)
            if block is not None
        )
        logger.debug(
            "Rendered %s brief: %d of %d sections", schema.key, len(blocks), len(schema.sections)
        )
        return MarkdownDocument(
            survey_type=schema.survey_type,
            text=render_document(schema.title, blocks),
            blocks=blocks,
        )


def render(record: SurveyRecord, schema: VerticalSchema) -> MarkdownDocument:
    """Module-level entry point for the reference renderer."""
    return DeterministicBriefRenderer().render(record, schema)
