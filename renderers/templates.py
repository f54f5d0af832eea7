"""Templating utilities for brief sections."""

from __future__ import annotations

import re
from typing import Iterable, Sequence, Tuple

from jinja2 import BaseLoader, Environment

from config import BriefConfig
from models import CouponPair, SectionBlock

_WHITESPACE = re.compile(r"\s+")


def table_cell(value: object) -> str:
    """Keep a table cell on one line, escape pipes, never return an empty cell."""
    text = _WHITESPACE.sub(" ", str(value if value is not None else "")).strip()
    text = text.replace("|", r"\|")
    return text or BriefConfig.COUPON_PLACEHOLDER


ENV = Environment(
    loader=BaseLoader(),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    variable_start_string="[[",
    variable_end_string="]]",
)
ENV.filters["cell"] = table_cell

TEXT_SECTION_TEMPLATE = ENV.from_string(
    """**[[ heading ]]**

{% for entry in entries %}
[[ entry ]]
{% if not loop.last %}

{% endif %}
{% endfor %}
"""
)

LINK_SECTION_TEMPLATE = ENV.from_string(
    """**[[ heading ]]**

{% for link in links %}
- [[ "[" + link[0] + "](" + link[1] + ")" ]]
{% endfor %}
"""
)

TABLE_SECTION_TEMPLATE = ENV.from_string(
    """**[[ heading ]]**

| [[ headers[0] | cell ]] | [[ headers[1] | cell ]] |
|---|---|
{% for pair in pairs %}
| [[ pair.coupon_cell | cell ]] | [[ pair.disclaimer | cell ]] |
{% endfor %}
"""
)

DOCUMENT_TEMPLATE = ENV.from_string(
    """# [[ title ]]
{% for block in blocks %}

[[ block.markdown ]]
{% endfor %}
"""
)


def render_text_section(heading: str, entries: Sequence[str]) -> str:
    return TEXT_SECTION_TEMPLATE.render(heading=heading, entries=entries).rstrip()


def render_link_section(heading: str, links: Iterable[Tuple[str, str]]) -> str:
    return LINK_SECTION_TEMPLATE.render(heading=heading, links=list(links)).rstrip()


def render_table_section(heading: str, pairs: Sequence[CouponPair]) -> str:
    return TABLE_SECTION_TEMPLATE.render(
        heading=heading,
        headers=BriefConfig.COUPON_TABLE_HEADERS,
        pairs=pairs,
    ).rstrip()


def render_document(title: str, blocks: Sequence[SectionBlock]) -> str:
    return DOCUMENT_TEMPLATE.render(title=title, blocks=blocks).rstrip() + "\n"
