from config import BriefConfig
from coupons import aggregate_coupons, count_coupons
from models import OfferGroup

PLACEHOLDER = BriefConfig.COUPON_PLACEHOLDER

LABELLED_GROUPS = (
    OfferGroup(name="radiusOffers", label="(RADIUS OFFER)"),
    OfferGroup(name="homeownerOffers", label="(NEW HOMEOWNER OFFER)"),
)


def sample_offers():
    return {
        "radiusOffers": {
            "coupon1": "$50 off any repair",
            "disclaimer1": "Expires 12/31",
            "coupon2": "10% off",
            "disclaimer2": "",
        },
        "homeownerOffers": {
            "coupon1": "Free inspection",
            "disclaimer1": "null",
        },
    }


def test_pairs_from_every_group_in_order():
    pairs = aggregate_coupons(sample_offers(), LABELLED_GROUPS)
    assert [(p.group, p.coupon, p.disclaimer) for p in pairs] == [
        ("radiusOffers", "$50 off any repair", "Expires 12/31"),
        ("radiusOffers", "10% off", PLACEHOLDER),
        ("homeownerOffers", "Free inspection", PLACEHOLDER),
    ]
    assert pairs[0].coupon_cell == "(RADIUS OFFER) $50 off any repair"
    assert pairs[2].coupon_cell == "(NEW HOMEOWNER OFFER) Free inspection"


def test_sentinel_coupon_yields_no_rows():
    record = {"radiusOffers": {"coupon1": "null", "disclaimer1": "Valid disclaimer text"}}
    assert aggregate_coupons(record, LABELLED_GROUPS) == []
    assert count_coupons(record, LABELLED_GROUPS) == 0


def test_missing_coupon_with_valid_disclaimer_keeps_the_row():
    record = {"coupons": {"coupon1": "  ", "disclaimer1": "One per household"}}
    pairs = aggregate_coupons(record, (OfferGroup(name="coupons"),))
    assert len(pairs) == 1
    assert pairs[0].coupon == PLACEHOLDER
    assert pairs[0].coupon_cell == PLACEHOLDER
    assert pairs[0].disclaimer == "One per household"


def test_empty_slots_are_skipped():
    record = {"coupons": {"coupon1": "", "disclaimer1": None, "coupon2": "BOGO"}}
    pairs = aggregate_coupons(record, (OfferGroup(name="coupons"),))
    assert [p.coupon for p in pairs] == ["BOGO"]


def test_count_matches_pairs():
    record = sample_offers()
    record["radiusOffers"]["coupon3"] = "null"
    record["carrierOffers"] = {"coupon1": "ignored, group not declared"}
    assert count_coupons(record, LABELLED_GROUPS) == len(aggregate_coupons(record, LABELLED_GROUPS)) == 3


def test_undeclared_and_malformed_groups_are_ignored():
    record = {"radiusOffers": "not a mapping", "homeownerOffers": {"coupon1": "Free filter"}}
    pairs = aggregate_coupons(record, LABELLED_GROUPS)
    assert [p.coupon for p in pairs] == ["Free filter"]
    assert aggregate_coupons({}, LABELLED_GROUPS) == []
