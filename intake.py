"""
Intake Handler

One webhook submission in, one emailed DOCX brief out:
resolve the vertical, annotate a copy with the coupon count, render, convert,
send. Collaborators are injected so tests can swap any of them.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from config import BriefConfig
from coupons import count_coupons
from docx_converter import PandocConverter
from errors import MalformedSubmissionError
from field_validity import DEFAULT_SENTINEL, is_valid
from mailer import BriefMailer
from models import VerticalSchema
from renderers import BaseRenderer, get_renderer
from schema_registry import SchemaRegistry, default_registry

logger = logging.getLogger(__name__)

COMPANY_FIELDS = ("companyName", "practiceName")


@dataclass(frozen=True)
class IntakeResult:
    survey_type: str
    company: str
    total_coupons: int
    attachment_name: str
    markdown: str


def company_name(record: Mapping[str, Any], sentinel: Optional[str] = DEFAULT_SENTINEL) -> str:
    for field in COMPANY_FIELDS:
        value = record.get(field)
        if is_valid(value, sentinel):
            return str(value).strip()
    return BriefConfig.UNKNOWN_COMPANY


def attachment_name(schema: VerticalSchema) -> str:
    return f"{schema.safe_type}_Brief.docx"


def annotate(record: Mapping[str, Any], schema: VerticalSchema) -> Dict[str, Any]:
    """Copy of the submission with ``totalCoupons`` added; the original is untouched."""
    annotated = dict(record)
    annotated["totalCoupons"] = str(count_coupons(record, schema.offer_groups, schema.null_sentinel))
    return annotated


class IntakeHandler:
    def __init__(
        self,
        registry: Optional[SchemaRegistry] = None,
        renderer: Optional[BaseRenderer] = None,
        converter: Optional[Callable[..., bytes]] = None,
        mailer: Optional[BriefMailer] = None,
    ):
        self.registry = registry or default_registry()
        self.renderer = renderer or get_renderer(BriefConfig.RENDERER)
        self.converter = converter or PandocConverter()
        self.mailer = mailer or BriefMailer()

    def prepare(self, payload: Any):
        """Validate and resolve a payload; returns (schema, annotated record, company)."""
        if not isinstance(payload, Mapping):
            raise MalformedSubmissionError(
                f"Submission body must be a JSON object, got {type(payload).__name__}"
            )
        schema = self.registry.resolve(payload.get("survey_id"))
        return schema, annotate(payload, schema), company_name(payload, schema.null_sentinel)

    def handle(self, payload: Any) -> IntakeResult:
        start = time.time()
        schema, record, company = self.prepare(payload)
        logger.info("Received %s survey for %s", schema.survey_type, company)

        document = self.renderer.render(record, schema)
        docx = self.converter(document.text, stem=f"{schema.safe_type}_Brief")
        filename = attachment_name(schema)
        self.mailer.send(BriefConfig.subject_for(schema.survey_type, company), docx, filename)

        logger.info(
            "Delivered %s for %s in %.2fs (%s coupons, renderer=%s)",
            filename, company, time.time() - start, record["totalCoupons"], self.renderer.name,
        )
        return IntakeResult(
            survey_type=schema.survey_type,
            company=company,
            total_coupons=int(record["totalCoupons"]),
            attachment_name=filename,
            markdown=document.text,
        )
