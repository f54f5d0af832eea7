"""Base class shared by the deterministic and the delegated brief renderers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from errors import ConfigurationError, MalformedSubmissionError
from models import MarkdownDocument, SurveyRecord, VerticalSchema


class BaseRenderer(ABC):
    """Shared interface: one survey record plus its vertical schema in, one brief out."""

    name: str = "base"

    @abstractmethod
    def render(self, record: SurveyRecord, schema: VerticalSchema) -> MarkdownDocument:
        """Render the record into a Markdown brief following the schema."""

    @staticmethod
    def _require_inputs(record: Any, schema: Any) -> VerticalSchema:
        if not isinstance(schema, VerticalSchema):
            raise ConfigurationError(
                "Brief schema is unresolved; resolve the survey id through the schema registry first."
            )
        if not isinstance(record, Mapping):
            raise MalformedSubmissionError(f"Survey record must be a mapping, got {type(record).__name__}")
        return schema
