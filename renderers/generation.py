"""
Delegated brief renderer backed by the OpenAI Responses API.

Each vertical schema names a stored prompt (``prompt_id``) that carries the
section layout; the submission is sent as indented JSON in a single user
message and the returned text is used verbatim as the brief.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI, OpenAIError

from config import BriefConfig
from errors import ConfigurationError, GenerationError
from models import MarkdownDocument, SurveyRecord, VerticalSchema

from .base import BaseRenderer

logger = logging.getLogger(__name__)


def build_user_message(record: SurveyRecord, schema: VerticalSchema) -> str:
    instruction = BriefConfig.GENERATION_INSTRUCTION.format(survey_type=schema.survey_type)
    payload = json.dumps(dict(record), indent=2, default=str)
    return f"{instruction} {payload}"


class GenerationBriefRenderer(BaseRenderer):
    name = "generation"

    def __init__(self, client: Any = None, model: Optional[str] = None, api_key: Optional[str] = None):
        self.model = model or BriefConfig.MODEL
        self.api_key = api_key or BriefConfig.OPENAI_API_KEY
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("OPENAI_API_KEY is not set; the generation renderer cannot run")
            client_params: Dict[str, Any] = {
                "api_key": self.api_key,
                "timeout": BriefConfig.OPENAI_TIMEOUT,
            }
            if BriefConfig.OPENAI_ORGANIZATION:
                client_params["organization"] = BriefConfig.OPENAI_ORGANIZATION
            self._client = OpenAI(**client_params)
            logger.debug("OpenAI client initialized (timeout: %ss)", BriefConfig.OPENAI_TIMEOUT)
        return self._client

    def render(self, record: SurveyRecord, schema: VerticalSchema) -> MarkdownDocument:
        schema = self._require_inputs(record, schema)
        if not schema.prompt_id:
            raise ConfigurationError(f"Vertical '{schema.key}' has no prompt id for the generation renderer")

        logger.info("Requesting %s brief from %s (prompt %s)", schema.survey_type, self.model, schema.prompt_id)
        try:
            response = self.client.responses.create(
                model=self.model,
                prompt={"id": schema.prompt_id},
                input=[{"role": "user", "content": build_user_message(record, schema)}],
            )
        except OpenAIError as exc:
            raise GenerationError(f"Generation request failed for {schema.survey_type}: {exc}") from exc

        text = (getattr(response, "output_text", None) or "").strip()
        if not text:
            raise GenerationError(f"Generation service returned an empty {schema.survey_type} brief")
        return MarkdownDocument(survey_type=schema.survey_type, text=text + "\n", generated=True)
