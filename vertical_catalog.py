"""
Built-in brief layouts, one per supported vertical.

Layouts are plain data validated into ``VerticalSchema`` models by the schema
registry. A JSON file with the same shape (a list of these dictionaries) can
replace the whole catalog through ``BRIEF_SCHEMA_FILE``. Brand logo links
are only built when ``BRIEF_LOGO_BASE_URL`` names where the logos are hosted.
"""

from typing import Any, Dict, List, Sequence

RADIUS_OFFERS = {"name": "radiusOffers", "label": "(RADIUS OFFER)"}
HOMEOWNER_OFFERS = {"name": "homeownerOffers", "label": "(NEW HOMEOWNER OFFER)"}
CARRIER_OFFERS = {"name": "carrierOffers", "label": "(CARRIER ROUTE OFFER)"}
RETENTION_OFFERS = {"name": "retentionOffers", "label": "(RETENTION OFFER)"}
SINGLE_COUPON_GROUP = {"name": "coupons"}


def _logo_slug(brand: str) -> str:
    return brand.lower().replace("&", "and").replace(".", "").replace(" ", "-")


def _brand_directive(field: str, label: str, brands: Sequence[str], logo_base_url: str) -> Dict[str, Any]:
    """Link the answer to its logo when logos are hosted, otherwise print it as text."""
    if not logo_base_url:
        return {"field": field, "label": label}
    base = logo_base_url.rstrip("/")
    return {
        "field": field,
        "label": label,
        "format": "keyed_image_map",
        "image_map": {brand: f"{base}/{_logo_slug(brand)}.png" for brand in brands},
    }


def _company_section(name_field: str = "companyName", name_label: str = "Company Name") -> Dict[str, Any]:
    return {
        "title": "COMPANY INFORMATION",
        "directives": [
            {"field": name_field, "label": name_label},
            {"field": "contactName", "label": "Contact"},
            {"field": "phone", "label": "Phone", "format": "phone"},
            {"field": "email", "label": "Email"},
            {"field": "website", "label": "Website", "format": "domain_title_case"},
            {"field": "address", "label": "Address"},
            {"field": "yearsInBusiness", "label": "Years in Business"},
        ],
    }


def _services_sections(extra_flags: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "title": "SERVICES",
            "directives": [{"field": "services", "format": "csv_to_bullets"}],
        },
        {
            "title": "SERVICE AREAS",
            "directives": [{"field": "serviceAreas", "format": "csv_to_bullets"}],
        },
        {
            "title": "HIGHLIGHTS",
            "directives": [
                {"field": "licensed", "format": "conditional_literal",
                 "text": "Fully licensed."},
                {"field": "insured", "format": "conditional_literal",
                 "text": "Fully insured."},
                *extra_flags,
                {"field": "uniqueSellingPoints", "label": "What Sets Us Apart"},
            ],
        },
    ]


def _closing_sections() -> List[Dict[str, Any]]:
    return [
        {
            "title": "PHOTOS",
            "kind": "links",
            "directives": [
                {"field": "logo", "link_label": "View Logo"},
                {"field": "photos", "link_label": "View Photo"},
            ],
        },
        {"title": "COUPONS", "kind": "table"},
        {
            "title": "ADDITIONAL NOTES",
            "directives": [{"field": "additionalNotes"}],
        },
    ]


def _home_service(key: str, survey_type: str, survey_id: str, prompt_id: str,
                  brand_directive: Dict[str, Any], extra_flags: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Trade verticals share one layout: radius + new homeowner mailers."""
    return {
        "key": key,
        "survey_type": survey_type,
        "survey_ids": [survey_id],
        "prompt_id": prompt_id,
        "title": f"{survey_type} Client Brief",
        "offer_groups": [RADIUS_OFFERS, HOMEOWNER_OFFERS],
        "sections": [
            _company_section(),
            *_services_sections(extra_flags),
            {
                "title": "BRANDS",
                "directives": [
                    brand_directive,
                    {"field": "brandsServiced", "label": "Brands Serviced", "format": "csv_to_bullets"},
                ],
            },
            *_closing_sections(),
        ],
    }


EMERGENCY_FLAG = {"field": "emergencyService", "format": "conditional_literal",
                  "text": "24/7 emergency service available."}
FINANCING_FLAG = {"field": "financingAvailable", "format": "conditional_literal",
                  "text": "Financing available."}
FREE_ESTIMATE_FLAG = {"field": "freeEstimates", "format": "conditional_literal",
                      "text": "Free estimates."}


def build_catalog(logo_base_url: str = "") -> List[Dict[str, Any]]:
    """Every vertical layout; brand fields link to logos only when logo_base_url is set."""
    return [
        _home_service(
            "hvac", "HVAC", "1000358733", "pmpt_689226a161dc8190b3ac61c52a055eda0f5aed1595299f08",
            _brand_directive(
                "primaryBrand", "Primary Brand",
                ("Carrier", "Trane", "Lennox", "Rheem", "Goodman", "American Standard", "Daikin", "York"),
                logo_base_url,
            ),
            [EMERGENCY_FLAG, FINANCING_FLAG,
             {"field": "maintenancePlan", "format": "conditional_literal",
              "text": "Offers a maintenance plan."}],
        ),
        {
            "key": "auto",
            "survey_type": "Auto",
            "survey_ids": ["1000379432"],
            "prompt_id": "pmpt_68adf665c1988195be6b0224591843e50f57c68ec231c47f",
            "title": "Auto Client Brief",
            "offer_groups": [RADIUS_OFFERS, CARRIER_OFFERS, RETENTION_OFFERS],
            "sections": [
                _company_section(),
                {
                    "title": "SERVICES",
                    "directives": [{"field": "services", "format": "csv_to_bullets"}],
                },
                {
                    "title": "MAKES SERVICED",
                    "directives": [
                        {"field": "makesServiced", "format": "csv_to_bullets"},
                        _brand_directive(
                            "certification", "Certification",
                            ("ASE", "AAA Approved", "NAPA AutoCare", "Bosch Car Service"),
                            logo_base_url,
                        ),
                    ],
                },
                {
                    "title": "SERVICE AREAS",
                    "directives": [{"field": "serviceAreas", "format": "csv_to_bullets"}],
                },
                {
                    "title": "HIGHLIGHTS",
                    "directives": [
                        {"field": "warranty", "label": "Warranty"},
                        {"field": "shuttleService", "format": "conditional_literal",
                         "text": "Free shuttle service."},
                        {"field": "loanerVehicles", "format": "conditional_literal",
                         "text": "Loaner vehicles available."},
                        FINANCING_FLAG,
                        {"field": "uniqueSellingPoints", "label": "What Sets Us Apart"},
                    ],
                },
                *_closing_sections(),
            ],
        },
        _home_service(
            "roofing", "Roofing", "1000388247", "pmpt_68ae0c8224a88197957bb03a23a50b620733f4b65b87c83e",
            _brand_directive(
                "primaryBrand", "Primary Brand",
                ("GAF", "Owens Corning", "CertainTeed", "Atlas", "Tamko", "Malarkey"),
                logo_base_url,
            ),
            [FREE_ESTIMATE_FLAG, FINANCING_FLAG,
             {"field": "insuranceClaims", "format": "conditional_literal",
              "text": "Helps homeowners with insurance claims."}],
        ),
        _home_service(
            "plumbing", "Plumbing", "1000388375", "pmpt_68b0502d4cb0819488dad99904ad90ea0840c0d15f6acac4",
            _brand_directive(
                "primaryBrand", "Primary Brand",
                ("Rheem", "Bradford White", "A.O. Smith", "Kohler", "Moen", "Navien", "Rinnai"),
                logo_base_url,
            ),
            [EMERGENCY_FLAG, FINANCING_FLAG, FREE_ESTIMATE_FLAG],
        ),
        _home_service(
            "electrical", "Electrical", "1000388856", "pmpt_68b05466206c8197b3922311d1b62e5804176f4fc3158400",
            _brand_directive(
                "primaryBrand", "Primary Brand",
                ("Generac", "Kohler", "Square D", "Eaton", "Siemens", "Leviton", "Tesla"),
                logo_base_url,
            ),
            [EMERGENCY_FLAG, FINANCING_FLAG,
             {"field": "generatorInstall", "format": "conditional_literal",
              "text": "Installs standby generators."}],
        ),
        {
            "key": "generalBusiness",
            "survey_type": "General Business",
            "survey_ids": ["1000388862"],
            "prompt_id": "pmpt_68b0590e6c6c8195943f8a4f0c9acc520023760ec7129d84",
            "title": "General Business Client Brief",
            "offer_groups": [SINGLE_COUPON_GROUP],
            "sections": [
                _company_section(),
                {
                    "title": "BUSINESS OVERVIEW",
                    "directives": [
                        {"field": "industry", "label": "Industry"},
                        {"field": "businessDescription", "label": "Description"},
                        {"field": "targetCustomer", "label": "Target Customer"},
                    ],
                },
                {
                    "title": "PRODUCTS & SERVICES",
                    "directives": [{"field": "services", "format": "csv_to_bullets"}],
                },
                {
                    "title": "SERVICE AREAS",
                    "directives": [{"field": "serviceAreas", "format": "csv_to_bullets"}],
                },
                {
                    "title": "HIGHLIGHTS",
                    "directives": [
                        {"field": "familyOwned", "format": "conditional_literal",
                         "text": "Family owned and operated."},
                        {"field": "onlineOrdering", "format": "conditional_literal",
                         "text": "Online ordering available."},
                        {"field": "uniqueSellingPoints", "label": "What Sets Us Apart"},
                    ],
                },
                *_closing_sections(),
            ],
        },
        {
            "key": "dental",
            "survey_type": "Dental",
            "survey_ids": ["1000388867"],
            "prompt_id": "pmpt_68b06111a8108196810f2ae75f25be28014401816a0ed215",
            "title": "Dental Client Brief",
            "offer_groups": [SINGLE_COUPON_GROUP],
            "sections": [
                _company_section(name_field="practiceName", name_label="Practice Name"),
                {
                    "title": "PROVIDERS",
                    "directives": [{"field": "doctors", "format": "csv_to_bullets"}],
                },
                {
                    "title": "SERVICES",
                    "directives": [{"field": "services", "format": "csv_to_bullets"}],
                },
                {
                    "title": "PATIENT INFORMATION",
                    "directives": [
                        {"field": "acceptingNewPatients", "format": "conditional_literal",
                         "text": "Accepting new patients."},
                        {"field": "acceptsInsurance", "format": "conditional_literal",
                         "text": "Most major insurance plans accepted."},
                        {"field": "insurancePlans", "label": "Insurance Plans", "format": "csv_to_bullets"},
                        {"field": "sedationDentistry", "format": "conditional_literal",
                         "text": "Sedation dentistry available."},
                        {"field": "officeHours", "label": "Office Hours"},
                        {"field": "uniqueSellingPoints", "label": "What Sets Us Apart"},
                    ],
                },
                *_closing_sections(),
            ],
        },
    ]
