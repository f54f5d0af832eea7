from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# One webhook submission. Treated as read-only by everything downstream of intake.
SurveyRecord = Mapping[str, Any]


class FormatName(str, Enum):
    """Formatting strategies a field directive can select."""
    IDENTITY = "identity"
    PHONE = "phone"
    DOMAIN_TITLE_CASE = "domain_title_case"
    CSV_TO_BULLETS = "csv_to_bullets"
    CONDITIONAL_LITERAL = "conditional_literal"
    KEYED_IMAGE_MAP = "keyed_image_map"


class SectionKind(str, Enum):
    TEXT = "text"
    LINKS = "links"
    TABLE = "table"


class FieldDirective(BaseModel):
    """How one survey field is pulled, validated and formatted into a section."""
    model_config = ConfigDict(frozen=True)

    field: str = Field(description="Dotted path into the survey record")
    label: Optional[str] = Field(default=None, description="Fixed label printed before the value")
    format: FormatName = FormatName.IDENTITY
    link_label: Optional[str] = Field(default=None, description="Fixed hyperlink text for link fields")
    when: str = Field(default="true", description="Sentinel a conditional literal must match")
    text: Optional[str] = Field(default=None, description="Sentence emitted by a conditional literal")
    image_map: Dict[str, str] = Field(default_factory=dict, description="Value → image URL lookup")

    @field_validator("field")
    def validate_field_path(cls, v: str) -> str:
        v = (v or "").strip()
        if not v or any(not part for part in v.split(".")):
            raise ValueError(f"Invalid field path: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_format_options(self) -> "FieldDirective":
        if self.format == FormatName.CONDITIONAL_LITERAL and not (self.text or "").strip():
            raise ValueError(f"conditional_literal directive for '{self.field}' needs text")
        if self.format == FormatName.KEYED_IMAGE_MAP and not self.image_map:
            raise ValueError(f"keyed_image_map directive for '{self.field}' needs an image_map")
        return self


class OfferGroup(BaseModel):
    """A named cluster of coupon/disclaimer slots inside a submission."""
    model_config = ConfigDict(frozen=True)

    name: str
    label: Optional[str] = None


class SectionRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    kind: SectionKind = SectionKind.TEXT
    directives: Tuple[FieldDirective, ...] = ()

    @model_validator(mode="after")
    def validate_directives(self) -> "SectionRule":
        if not self.title.strip():
            raise ValueError("Section title cannot be empty")
        if self.kind == SectionKind.TABLE and self.directives:
            raise ValueError(f"Table section '{self.title}' renders offer groups and takes no directives")
        if self.kind != SectionKind.TABLE and not self.directives:
            raise ValueError(f"Section '{self.title}' declares no field directives")
        if self.kind == SectionKind.LINKS:
            for directive in self.directives:
                if not directive.link_label:
                    raise ValueError(f"Link directive '{directive.field}' in '{self.title}' needs a link_label")
        return self


class VerticalSchema(BaseModel):
    """Static brief layout for one vertical (HVAC, Auto, Roofing, ...)."""
    model_config = ConfigDict(frozen=True)

    key: str
    survey_type: str = Field(description="Display name, e.g. 'General Business'")
    survey_ids: Tuple[str, ...] = Field(default=(), description="Survey ids routed to this vertical")
    prompt_id: Optional[str] = Field(default=None, description="Stored prompt used by the generation renderer")
    title: str
    version: str = "1"
    null_sentinel: str = "null"
    offer_groups: Tuple[OfferGroup, ...] = ()
    sections: Tuple[SectionRule, ...]

    @field_validator("survey_ids", mode="before")
    def coerce_survey_ids(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(str(item).strip() for item in v)
        return v

    @model_validator(mode="after")
    def validate_layout(self) -> "VerticalSchema":
        if not self.sections:
            raise ValueError(f"Schema '{self.key}' has no sections")
        has_table = any(section.kind == SectionKind.TABLE for section in self.sections)
        if has_table and not self.offer_groups:
            raise ValueError(f"Schema '{self.key}' renders a coupon table but declares no offer groups")
        names = [group.name for group in self.offer_groups]
        if len(names) != len(set(names)):
            raise ValueError(f"Schema '{self.key}' lists an offer group twice")
        return self

    @property
    def safe_type(self) -> str:
        return re.sub(r"\s+", "_", self.survey_type.strip())


@dataclass(frozen=True)
class CouponPair:
    """One coupon/disclaimer row synthesized from an offer group."""

    coupon: str
    disclaimer: str
    group: str
    label: Optional[str] = None

    @property
    def coupon_cell(self) -> str:
        return f"{self.label} {self.coupon}" if self.label else self.coupon


@dataclass(frozen=True)
class SectionBlock:
    heading: str
    kind: SectionKind
    markdown: str


@dataclass(frozen=True)
class MarkdownDocument:
    """Rendered brief. Generated documents carry no blocks, only the service text."""

    survey_type: str
    text: str
    blocks: Tuple[SectionBlock, ...] = ()
    generated: bool = False

    @property
    def headings(self) -> Tuple[str, ...]:
        return tuple(block.heading for block in self.blocks)

    def __str__(self) -> str:
        return self.text
