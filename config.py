"""
Survey Brief Configuration

Environment-driven settings for the webhook intake, brief rendering and
delivery steps. Vertical schemas are not configured here; they live in
vertical_catalog.py (or the JSON file named by BRIEF_SCHEMA_FILE).
"""

import os
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: str = "") -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class BriefConfig:
    """Process-wide settings read once at import time."""

    SERVICE_NAME = "survey-brief"
    PORT = int(os.getenv("PORT", "3001"))

    # Rendering
    RENDERER = os.getenv("BRIEF_RENDERER", "generation").strip().lower()
    SCHEMA_FILE = os.getenv("BRIEF_SCHEMA_FILE", "")
    LOGO_BASE_URL = os.getenv("BRIEF_LOGO_BASE_URL", "").strip()
    NULL_SENTINEL = "null"
    COUPON_PLACEHOLDER = "None entered by client"
    COUPON_TABLE_HEADERS = ("Coupon", "Disclaimer")
    COUPON_KEY_PREFIX = "coupon"
    DISCLAIMER_KEY_PREFIX = "disclaimer"
    UNKNOWN_COMPANY = "Unknown Company"

    # Generation service
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_ORGANIZATION = os.getenv("OPENAI_ORGANIZATION")
    MODEL = os.getenv("BRIEF_MODEL", "gpt-4.1-mini")
    OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "120"))
    GENERATION_INSTRUCTION = (
        "Use this data to create a {survey_type} client brief adhere to exact section "
        "titles and formatting in the instructions."
    )

    # Conversion
    PANDOC_BIN = os.getenv("PANDOC_BIN", "pandoc")
    PANDOC_TIMEOUT = float(os.getenv("PANDOC_TIMEOUT", "60"))

    # Delivery
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.office365.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USER = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
    SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "30"))
    SMTP_STARTTLS = os.getenv("SMTP_STARTTLS", "true").lower() != "false"
    MAIL_FROM = os.getenv("BRIEF_MAIL_FROM", "") or SMTP_USER
    RECIPIENTS = _csv_env("BRIEF_RECIPIENTS")
    BCC = _csv_env("BRIEF_BCC")
    SUBJECT_TEMPLATE = "New {survey_type} Survey Submitted for {company}"
    EMAIL_BODY = "Please see the attached document."
    DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    # Logging
    LOG_DIR = os.getenv("BRIEF_LOG_DIR", "")
    LOG_LEVEL = os.getenv("BRIEF_LOG_LEVEL", "INFO")

    @classmethod
    def subject_for(cls, survey_type: str, company: str) -> str:
        return cls.SUBJECT_TEMPLATE.format(survey_type=survey_type, company=company)
