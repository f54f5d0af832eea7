"""Turn one SectionRule plus a survey record into at most one rendered block."""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from coupons import aggregate_coupons
from field_validity import is_valid, resolve_field
from formatters import apply_format
from models import SectionBlock, SectionKind, SectionRule, SurveyRecord, VerticalSchema

from .templates import render_link_section, render_table_section, render_text_section

logger = logging.getLogger(__name__)


def iter_url_candidates(value: Any) -> List[Any]:
    """Flatten a URL field: one string, a list, or a mapping of upload slots."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return list(value.values())
    return []


def normalize_url(candidate: Any, sentinel: Optional[str]) -> Optional[str]:
    """Return a link-safe absolute http(s) URL, or None when unusable."""
    if not isinstance(candidate, str) or not is_valid(candidate, sentinel):
        return None
    url = candidate.strip()
    if any(ch.isspace() for ch in url):
        return None
    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if parts.scheme.lower() not in {"http", "https"} or not parts.netloc:
        return None
    return url.replace("(", "%28").replace(")", "%29")


def _text_section(rule: SectionRule, record: SurveyRecord, sentinel: Optional[str]) -> Optional[str]:
    entries: List[str] = []
    for directive in rule.directives:
        value = resolve_field(record, directive.field)
        if not is_valid(value, sentinel):
            continue
        lines = apply_format(directive, value)
        if lines:
            entries.append("\n".join(lines))
    if not entries:
        return None
    return render_text_section(rule.title, entries)


def _link_section(rule: SectionRule, record: SurveyRecord, sentinel: Optional[str]) -> Optional[str]:
    links: List[Tuple[str, str]] = []
    for directive in rule.directives:
        value = resolve_field(record, directive.field)
        if not is_valid(value, sentinel):
            continue
        for candidate in iter_url_candidates(value):
            url = normalize_url(candidate, sentinel)
            if url is None:
                if is_valid(candidate, sentinel):
                    logger.debug("Skipping malformed URL in '%s': %r", directive.field, candidate)
                continue
            links.append((directive.link_label or "", url))
    if not links:
        return None
    return render_link_section(rule.title, links)


def _table_section(rule: SectionRule, record: SurveyRecord, schema: VerticalSchema) -> Optional[str]:
    pairs = aggregate_coupons(record, schema.offer_groups, schema.null_sentinel)
    if not pairs:
        return None
    return render_table_section(rule.title, pairs)


def render_section(rule: SectionRule, record: SurveyRecord, schema: VerticalSchema) -> Optional[SectionBlock]:
    """Render a section, or None when nothing in it survives validity filtering."""
    sentinel = schema.null_sentinel
    if rule.kind == SectionKind.TABLE:
        markdown = _table_section(rule, record, schema)
    elif rule.kind == SectionKind.LINKS:
        markdown = _link_section(rule, record, sentinel)
    else:
        markdown = _text_section(rule, record, sentinel)
    if markdown is None:
        logger.debug("Section '%s' has no valid content; omitted", rule.title)
        return None
    return SectionBlock(heading=rule.title, kind=rule.kind, markdown=markdown)
