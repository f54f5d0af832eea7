import pytest
from fastapi.testclient import TestClient

from errors import ConfigurationError, MalformedSubmissionError
from intake import IntakeHandler, company_name
from renderers.deterministic import DeterministicBriefRenderer
from schema_registry import SchemaRegistry, default_registry
from server import create_app


class RecordingConverter:
    def __init__(self):
        self.calls = []

    def __call__(self, markdown, stem="Brief"):
        self.calls.append((markdown, stem))
        return b"docx-bytes"


class RecordingMailer:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, subject, attachment, filename):
        if self.error:
            raise self.error
        self.sent.append((subject, attachment, filename))


class RecordingRenderer(DeterministicBriefRenderer):
    def __init__(self):
        self.records = []

    def render(self, record, schema):
        self.records.append(record)
        return super().render(record, schema)


def sample_submission(**overrides):
    payload = {
        "survey_id": "1000358733",
        "companyName": "Heating and Air Today",
        "phone": "5551234567",
        "services": "Install, Repair",
        "radiusOffers": {"coupon1": "$50 off", "disclaimer1": "Expires 12/31", "coupon2": "null"},
        "homeownerOffers": {"coupon1": "Free inspection"},
    }
    payload.update(overrides)
    return payload


def build_handler(mailer=None):
    return IntakeHandler(
        registry=default_registry(""),
        renderer=RecordingRenderer(),
        converter=RecordingConverter(),
        mailer=mailer or RecordingMailer(),
    )


def test_handle_renders_converts_and_mails():
    handler = build_handler()
    payload = sample_submission()

    result = handler.handle(payload)

    assert result.survey_type == "HVAC"
    assert result.company == "Heating and Air Today"
    assert result.total_coupons == 2
    assert result.attachment_name == "HVAC_Brief.docx"
    assert result.markdown.startswith("# HVAC Client Brief")
    markdown, stem = handler.converter.calls[0]
    assert markdown == result.markdown
    assert stem == "HVAC_Brief"
    assert handler.mailer.sent == [
        ("New HVAC Survey Submitted for Heating and Air Today", b"docx-bytes", "HVAC_Brief.docx")
    ]


def test_renderer_sees_an_annotated_copy():
    handler = build_handler()
    payload = sample_submission()
    handler.handle(payload)
    assert handler.renderer.records[0]["totalCoupons"] == "2"
    assert "totalCoupons" not in payload


def test_attachment_name_replaces_whitespace():
    handler = build_handler()
    result = handler.handle(sample_submission(survey_id="1000388862"))
    assert result.attachment_name == "General_Business_Brief.docx"
    assert handler.mailer.sent[0][0] == "New General Business Survey Submitted for Heating and Air Today"


def test_company_name_fallbacks():
    assert company_name({"companyName": "Acme", "practiceName": "Acme Dental"}) == "Acme"
    assert company_name({"companyName": "null", "practiceName": "Bright Smiles"}) == "Bright Smiles"
    assert company_name({}) == "Unknown Company"


def test_company_name_uses_the_vertical_sentinel():
    assert company_name({"companyName": "N/A", "practiceName": "Bright Smiles"}, "N/A") == "Bright Smiles"
    assert company_name({"companyName": "null"}, "N/A") == "null"

    registry = SchemaRegistry([{
        "key": "survey",
        "survey_type": "Survey",
        "survey_ids": ["77"],
        "title": "Survey Brief",
        "null_sentinel": "N/A",
        "sections": [{"title": "INFO", "directives": [{"field": "companyName"}]}],
    }])
    handler = IntakeHandler(registry, RecordingRenderer(), RecordingConverter(), RecordingMailer())
    result = handler.handle({"survey_id": "77", "companyName": "N/A", "practiceName": "Lakeside Dental"})
    assert result.company == "Lakeside Dental"
    assert handler.mailer.sent[0][0] == "New Survey Survey Submitted for Lakeside Dental"


def test_unknown_survey_id_stops_before_any_side_effect():
    handler = build_handler()
    with pytest.raises(ConfigurationError):
        handler.handle(sample_submission(survey_id="123"))
    assert handler.renderer.records == []
    assert handler.converter.calls == []
    assert handler.mailer.sent == []


def test_non_object_payload_is_malformed():
    handler = build_handler()
    with pytest.raises(MalformedSubmissionError):
        handler.handle(["survey_id", "1000358733"])


def test_webhook_success():
    handler = build_handler()
    client = TestClient(create_app(handler))
    response = client.post("/ss", json=sample_submission())
    assert response.status_code == 200
    assert response.text == "File processed and email sent."
    assert len(handler.mailer.sent) == 1


def test_webhook_unknown_survey_is_a_server_error():
    handler = build_handler()
    client = TestClient(create_app(handler))
    response = client.post("/ss", json=sample_submission(survey_id="42"))
    assert response.status_code == 500
    assert response.text == "Internal Server Error"
    assert handler.mailer.sent == []


def test_webhook_delivery_failure_is_a_server_error():
    from errors import DeliveryError

    handler = build_handler(mailer=RecordingMailer(error=DeliveryError("smtp down")))
    client = TestClient(create_app(handler))
    response = client.post("/ss", json=sample_submission())
    assert response.status_code == 500
    assert response.text == "Internal Server Error"


def test_webhook_rejects_malformed_bodies():
    client = TestClient(create_app(build_handler()))
    assert client.post("/ss", json=[1, 2, 3]).status_code == 400
    assert client.post("/ss", content=b"{not json", headers={"content-type": "application/json"}).status_code == 400
    assert client.post("/ss").status_code == 400


def test_healthz():
    client = TestClient(create_app(build_handler()))
    body = client.get("/healthz").json()
    assert body["ok"] is True
    assert body["renderer"] == "deterministic"
    assert "hvac" in body["verticals"]
