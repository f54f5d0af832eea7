"""Named formatting strategies selected per field directive.

Every strategy returns the Markdown lines for one entry. An empty list means
"emit nothing". Strategies raise ``MalformedFieldError`` when a value does not
fit; ``apply_format`` turns that into a pass-through so cosmetic fields never
fail a submission.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

from errors import MalformedFieldError
from field_validity import flag_matches, is_valid
from models import FieldDirective, FormatName

logger = logging.getLogger(__name__)

_NON_DIGITS = re.compile(r"\D")
_LABEL_PARTS = re.compile(r"[a-z]+|[0-9]+|[^a-z0-9]+")

# Words seen in trade business domains. Used only to place capitals, so a
# miss degrades to a single capital on the unknown run.
DOMAIN_VOCABULARY = frozenset({
    "ac", "air", "all", "american", "and", "appliance", "auto", "automotive",
    "best", "body", "brothers", "bros", "builders", "business", "car", "care",
    "cars", "center", "city", "clean", "clinic", "collision", "comfort",
    "company", "conditioning", "construction", "contracting", "contractors",
    "cool", "cooling", "county", "dental", "dentist", "dentistry", "direct",
    "drain", "ducts", "electric", "electrical", "electrician", "electricians",
    "elite", "energy", "exteriors", "express", "family", "first", "fix",
    "furnace", "garage", "general", "group", "gutters", "heat", "heating",
    "health", "home", "homes", "hvac", "local", "mechanical", "motor",
    "motors", "my", "now", "ortho", "orthodontics", "pediatric", "plumber",
    "plumbers", "plumbing", "plus", "power", "premier", "pro", "pros",
    "quality", "repair", "repairs", "restoration", "roof", "roofer",
    "roofers", "roofing", "rooter", "service", "services", "shop", "siding",
    "smile", "smiles", "solar", "solutions", "sons", "star", "storm",
    "supply", "systems", "tech", "the", "tire", "tires", "today", "total",
    "town", "usa", "valley", "water", "wiring", "your",
})
_MAX_WORD = max(len(word) for word in DOMAIN_VOCABULARY)


def _labelled(directive: FieldDirective, text: str) -> List[str]:
    if directive.label:
        return [f"**{directive.label}:** {text}"]
    return [text]


def identity(value: Any, field: str = "") -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        items = [identity(item, field) for item in value if is_valid(item)]
        if not items:
            raise MalformedFieldError(field, value, "list holds no usable items")
        return ", ".join(items)
    raise MalformedFieldError(field, value, f"cannot print a {type(value).__name__} value")


def format_phone(value: Any, field: str = "") -> str:
    """Reformat a 10-digit number as NNN-NNN-NNNN."""
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise MalformedFieldError(field, value, "phone must be a string")
    digits = _NON_DIGITS.sub("", str(value))
    if len(digits) != 10:
        raise MalformedFieldError(field, value, f"expected 10 digits, found {len(digits)}")
    return f"{digits[:3]}-{digits[3:6]}-{digits[6:]}"


def _segment_word_run(run: str) -> List[str]:
    """Split a lowercase alphabetic run into vocabulary words.

    Only a split that vocabulary words cover end to end is used, with the
    fewest words winning; anything else stays one run with a single capital.
    """
    n = len(run)
    best: List[Optional[List[str]]] = [None] * (n + 1)
    best[0] = []
    for i in range(n):
        if best[i] is None:
            continue
        for j in range(i + 1, min(n, i + _MAX_WORD) + 1):
            piece = run[i:j]
            if piece not in DOMAIN_VOCABULARY:
                continue
            current = best[j]
            if current is None or len(best[i]) + 1 < len(current):
                best[j] = best[i] + [piece]
    return best[n] or [run]


def _title_case_label(label: str) -> str:
    parts: List[str] = []
    for part in _LABEL_PARTS.findall(label):
        if part.isalpha():
            parts.extend(segment[:1].upper() + segment[1:] for segment in _segment_word_run(part))
        else:
            parts.append(part)
    return "".join(parts)


def format_domain(value: Any, field: str = "") -> str:
    """Best-effort ``https://heatingandairtoday.com`` → ``HeatingAndAirToday.com``.

    Lossy heuristic: capitals land on vocabulary word boundaries only, and the
    result depends only on the lowercased host, so reapplying it is a no-op.
    Answers that are not a dotted host name (``N/A``, free text) are rejected.
    """
    if not isinstance(value, str):
        raise MalformedFieldError(field, value, "domain must be a string")
    raw = value.strip()
    if any(ch.isspace() for ch in raw):
        raise MalformedFieldError(field, value, "contains whitespace")
    if "://" not in raw:
        raw = "//" + raw.lstrip("/")
    try:
        host = urlsplit(raw).hostname or ""
    except ValueError as exc:
        raise MalformedFieldError(field, value, f"unparseable URL ({exc})")
    host = host.strip(".")
    if host.startswith("www."):
        host = host[4:]
    labels = [label for label in host.split(".") if label]
    if len(labels) < 2:
        raise MalformedFieldError(field, value, "not a dotted host name")
    return ".".join([_title_case_label(label) for label in labels[:-1]] + [labels[-1]])


def split_csv(value: Any, field: str = "") -> List[str]:
    if isinstance(value, str):
        tokens = [token.strip() for token in value.split(",")]
    elif isinstance(value, (list, tuple)):
        tokens = [identity(item, field).strip() for item in value if is_valid(item)]
    else:
        raise MalformedFieldError(field, value, "expected comma-separated text")
    return [token for token in tokens if token]


def format_bullets(directive: FieldDirective, value: Any) -> List[str]:
    bullets = [f"- {token}" for token in split_csv(value, directive.field)]
    if not bullets:
        return []
    if directive.label:
        # Pandoc needs a blank line between a paragraph and a list.
        return [f"**{directive.label}:**", ""] + bullets
    return bullets


def format_conditional(directive: FieldDirective, value: Any) -> List[str]:
    if not flag_matches(value, directive.when):
        return []
    return _labelled(directive, directive.text or "")


def lookup_image(image_map: Mapping[str, str], value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    if value in image_map:
        return image_map[value]
    wanted = value.strip().casefold()
    for key, url in image_map.items():
        if key.strip().casefold() == wanted:
            return url
    return None


def format_image(directive: FieldDirective, value: Any) -> List[str]:
    url = lookup_image(directive.image_map, value)
    if url is None:
        logger.debug("No image mapped for %s=%r", directive.field, value)
        return []
    link_text = directive.link_label or identity(value, directive.field).strip()
    return _labelled(directive, f"[{link_text}]({url})")


_FORMATTERS: Dict[FormatName, Callable[[FieldDirective, Any], List[str]]] = {
    FormatName.IDENTITY: lambda d, v: _labelled(d, identity(v, d.field)),
    FormatName.PHONE: lambda d, v: _labelled(d, format_phone(v, d.field)),
    FormatName.DOMAIN_TITLE_CASE: lambda d, v: _labelled(d, format_domain(v, d.field)),
    FormatName.CSV_TO_BULLETS: format_bullets,
    FormatName.CONDITIONAL_LITERAL: format_conditional,
    FormatName.KEYED_IMAGE_MAP: format_image,
}


def apply_format(directive: FieldDirective, value: Any) -> List[str]:
    """Format an already-valid value; never raises for bad field content."""
    try:
        return _FORMATTERS[directive.format](directive, value)
    except MalformedFieldError as exc:
        logger.debug("Formatter '%s' passed value through: %s", directive.format.value, exc)
    try:
        return _labelled(directive, identity(value, directive.field))
    except MalformedFieldError as exc:
        logger.warning("Skipping field '%s': %s", directive.field, exc)
        return []


__all__ = [
    "DOMAIN_VOCABULARY",
    "apply_format",
    "format_domain",
    "format_phone",
    "identity",
    "lookup_image",
    "split_csv",
]
