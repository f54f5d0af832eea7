from models import SectionRule, VerticalSchema
from renderers.sections import normalize_url, render_section


def build_schema(sections, offer_groups=()):
    return VerticalSchema(
        key="test",
        survey_type="Test Vertical",
        survey_ids=["1"],
        title="Test Brief",
        offer_groups=offer_groups,
        sections=sections,
    )


def test_text_section_skips_invalid_fields():
    rule = SectionRule(
        title="COMPANY INFORMATION",
        directives=[
            {"field": "companyName", "label": "Company Name"},
            {"field": "email", "label": "Email"},
            {"field": "phone", "label": "Phone", "format": "phone"},
        ],
    )
    block = render_section(rule, {"companyName": "Acme", "email": "null", "phone": "5551234567"}, build_schema([rule]))
    assert block.markdown == (
        "**COMPANY INFORMATION**\n\n"
        "**Company Name:** Acme\n\n"
        "**Phone:** 555-123-4567"
    )


def test_section_with_no_valid_fields_is_suppressed():
    rule = SectionRule(title="HIGHLIGHTS", directives=[{"field": "licensed", "format": "conditional_literal", "text": "Licensed."}])
    schema = build_schema([rule])
    assert render_section(rule, {}, schema) is None
    assert render_section(rule, {"licensed": "null"}, schema) is None
    # Valid field, but its formatter emits nothing.
    assert render_section(rule, {"licensed": "false"}, schema) is None


def test_link_section_keeps_order_and_skips_bad_urls():
    rule = SectionRule(
        title="PHOTOS",
        kind="links",
        directives=[
            {"field": "logo", "link_label": "View Logo"},
            {"field": "photos", "link_label": "View Photo"},
        ],
    )
    record = {
        "logo": "https://cdn.test/logo.png",
        "photos": [
            "https://cdn.test/truck.jpg",
            "null",
            "not a url",
            "ftp://cdn.test/file.jpg",
            "https://cdn.test/van(1).jpg",
            "https://cdn.test/has space.jpg",
        ],
    }
    block = render_section(rule, record, build_schema([rule]))
    assert block.markdown.splitlines() == [
        "**PHOTOS**",
        "",
        "- [View Logo](https://cdn.test/logo.png)",
        "- [View Photo](https://cdn.test/truck.jpg)",
        "- [View Photo](https://cdn.test/van%281%29.jpg)",
    ]


def test_link_section_accepts_upload_mappings():
    rule = SectionRule(title="PHOTOS", kind="links", directives=[{"field": "photos", "link_label": "View Photo"}])
    record = {"photos": {"upload1": "https://cdn.test/a.jpg", "upload2": "https://cdn.test/b.jpg"}}
    block = render_section(rule, record, build_schema([rule]))
    assert block.markdown.count("[View Photo]") == 2
    assert render_section(rule, {"photos": ["null", ""]}, build_schema([rule])) is None


def test_normalize_url():
    assert normalize_url(" https://a.test/x ", "null") == "https://a.test/x"
    assert normalize_url("https://", "null") is None
    assert normalize_url("javascript:alert(1)", "null") is None
    assert normalize_url(42, "null") is None


def test_table_section_is_well_formed():
    rule = SectionRule(title="COUPONS", kind="table")
    schema = build_schema([rule], offer_groups=[{"name": "coupons"}])
    record = {
        "coupons": {
            "coupon1": "Buy 1 | Get 1",
            "disclaimer1": "Limit one\nper visit",
            "coupon2": "",
            "disclaimer2": "Seniors only",
        }
    }
    block = render_section(rule, record, schema)
    lines = block.markdown.splitlines()
    assert lines[:4] == ["**COUPONS**", "", "| Coupon | Disclaimer |", "|---|---|"]
    assert lines[4:] == [
        r"| Buy 1 \| Get 1 | Limit one per visit |",
        "| None entered by client | Seniors only |",
    ]
    for row in lines[2:]:
        assert row.startswith("| ") or row == "|---|---|"
        assert row.replace(r"\|", "").count("|") == 3


def test_table_section_without_pairs_is_suppressed():
    rule = SectionRule(title="COUPONS", kind="table")
    schema = build_schema([rule], offer_groups=[{"name": "coupons"}])
    assert render_section(rule, {"coupons": {"coupon1": "null"}}, schema) is None
