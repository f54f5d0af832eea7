from formatters import apply_format, format_domain, format_phone, split_csv
from models import FieldDirective


def directive(**kwargs):
    kwargs.setdefault("field", "value")
    return FieldDirective(**kwargs)


def test_phone_formats_ten_digits():
    assert format_phone("1234567890") == "123-456-7890"
    assert format_phone("(555) 123-4567") == "555-123-4567"


def test_phone_passes_other_lengths_through():
    assert apply_format(directive(format="phone"), "123-45") == ["123-45"]
    assert apply_format(directive(format="phone", label="Phone"), "+1 555 123 4567") == ["**Phone:** +1 555 123 4567"]


def test_domain_title_case():
    assert format_domain("https://heatingandairtoday.com") == "HeatingAndAirToday.com"
    assert format_domain("www.bestplumbingpros.com/about?ref=mail") == "BestPlumbingPros.com"


def test_domain_title_case_is_deterministic_and_idempotent():
    once = format_domain("https://heatingandairtoday.com/contact")
    assert format_domain("https://heatingandairtoday.com/contact") == once
    assert format_domain(once) == once


def test_domain_unparseable_passes_through():
    assert apply_format(directive(format="domain_title_case"), "://") == ["://"]


def test_non_domain_answers_print_as_written():
    website = directive(field="website", label="Website", format="domain_title_case")
    assert apply_format(website, "N/A") == ["**Website:** N/A"]
    assert apply_format(website, "n/a - facebook only") == ["**Website:** n/a - facebook only"]
    assert apply_format(website, "localhost") == ["**Website:** localhost"]


def test_partially_known_words_keep_a_single_capital():
    assert format_domain("facebook.com/acmehvac") == "Facebook.com"
    assert format_domain("https://candy.com") == "Candy.com"
    assert format_domain("http://acmehvac.net") == "Acmehvac.net"
    assert format_domain("allairpros.com") == "AllAirPros.com"


def test_csv_to_bullets_keeps_order_and_duplicates():
    assert split_csv("Install, Repair,, Maintenance ,Repair") == ["Install", "Repair", "Maintenance", "Repair"]
    assert apply_format(directive(format="csv_to_bullets"), "Install, Repair, Maintenance") == [
        "- Install",
        "- Repair",
        "- Maintenance",
    ]


def test_labelled_bullets_leave_a_blank_line_before_the_list():
    lines = apply_format(directive(format="csv_to_bullets", label="Plans"), "Delta, Cigna")
    assert lines == ["**Plans:**", "", "- Delta", "- Cigna"]


def test_conditional_literal_only_on_sentinel():
    rule = directive(format="conditional_literal", text="Financing available.")
    assert apply_format(rule, "true") == ["Financing available."]
    assert apply_format(rule, True) == ["Financing available."]
    assert apply_format(rule, "false") == []
    assert apply_format(rule, "yes") == []


def test_keyed_image_map_never_invents_urls():
    rule = directive(
        format="keyed_image_map",
        label="Brand",
        image_map={"Carrier": "https://img.test/carrier.png"},
    )
    assert apply_format(rule, "Carrier") == ["**Brand:** [Carrier](https://img.test/carrier.png)"]
    assert apply_format(rule, " carrier ") == ["**Brand:** [carrier](https://img.test/carrier.png)"]
    assert apply_format(rule, "Acme Cooling") == []


def test_identity_and_unprintable_values():
    assert apply_format(directive(label="Years"), 12) == ["**Years:** 12"]
    assert apply_format(directive(), ["a", "null", "b"]) == ["a, b"]
    assert apply_format(directive(), {"nested": "value"}) == []
