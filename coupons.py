"""Coupon/disclaimer pairing across a submission's offer groups.

The rendered coupon table and the ``totalCoupons`` annotation handed to the
generation service both come from ``_iter_slots`` so they can never disagree.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple

from config import BriefConfig
from field_validity import DEFAULT_SENTINEL, is_valid
from models import CouponPair, OfferGroup

logger = logging.getLogger(__name__)


def _iter_slots(
    record: Mapping[str, Any],
    offer_groups: Sequence[OfferGroup],
    sentinel: Optional[str],
) -> Iterator[Tuple[OfferGroup, Any, Any]]:
    """Yield (group, coupon value, disclaimer value) for every slot worth a row.

    A slot is skipped when its coupon is exactly the sentinel (the client said
    "no coupon") or when neither side holds a usable value.
    """
    coupon_prefix = BriefConfig.COUPON_KEY_PREFIX
    disclaimer_prefix = BriefConfig.DISCLAIMER_KEY_PREFIX
    for group in offer_groups:
        slots = record.get(group.name)
        if slots is None:
            continue
        if not isinstance(slots, Mapping):
            logger.debug("Offer group '%s' is a %s, not a mapping; skipped", group.name, type(slots).__name__)
            continue
        for key, coupon in slots.items():
            if not isinstance(key, str) or not key.startswith(coupon_prefix):
                continue
            if key.startswith(disclaimer_prefix):
                continue
            if sentinel is not None and coupon == sentinel:
                continue
            disclaimer = slots.get(disclaimer_prefix + key[len(coupon_prefix):])
            if not is_valid(coupon, sentinel) and not is_valid(disclaimer, sentinel):
                continue
            yield group, coupon, disclaimer


def _cell(value: Any, sentinel: Optional[str]) -> str:
    if not is_valid(value, sentinel):
        return BriefConfig.COUPON_PLACEHOLDER
    return str(value).strip()


def aggregate_coupons(
    record: Mapping[str, Any],
    offer_groups: Sequence[OfferGroup],
    sentinel: Optional[str] = DEFAULT_SENTINEL,
) -> List[CouponPair]:
    """Ordered coupon pairs: groups in schema order, slots in key order."""
    return [
        CouponPair(
            coupon=_cell(coupon, sentinel),
            disclaimer=_cell(disclaimer, sentinel),
            group=group.name,
            label=group.label,
        )
        for group, coupon, disclaimer in _iter_slots(record, offer_groups, sentinel)
    ]


def count_coupons(
    record: Mapping[str, Any],
    offer_groups: Sequence[OfferGroup],
    sentinel: Optional[str] = DEFAULT_SENTINEL,
) -> int:
    return sum(1 for _ in _iter_slots(record, offer_groups, sentinel))


__all__ = ["aggregate_coupons", "count_coupons"]
