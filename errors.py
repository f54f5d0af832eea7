"""Error taxonomy for the survey brief pipeline."""

from __future__ import annotations


class BriefError(RuntimeError):
    """Base class for every error raised by the brief pipeline."""


class ConfigurationError(BriefError):
    """Deployment configuration is missing or does not match the submission.

    Raised for unknown survey ids, unresolved schemas, invalid schema files and
    missing required settings. Never retried.
    """


class MalformedFieldError(BriefError, ValueError):
    """A present field value does not fit its formatter.

    Formatters raise this; ``formatters.apply_format`` always catches it and
    degrades to pass-through so a cosmetic field never sinks a submission.
    """

    def __init__(self, field: str, value: object, reason: str):
        super().__init__(f"{field}: {reason} (got {value!r})")
        self.field = field
        self.value = value
        self.reason = reason


class MalformedSubmissionError(BriefError, ValueError):
    """The webhook body is not a JSON object."""


class GenerationError(BriefError):
    """The generative text service failed or returned nothing usable."""


class ConversionError(BriefError):
    """Markdown could not be converted to a DOCX artifact."""


class DeliveryError(BriefError):
    """The brief email could not be sent."""


__all__ = [
    "BriefError",
    "ConfigurationError",
    "MalformedFieldError",
    "MalformedSubmissionError",
    "GenerationError",
    "ConversionError",
    "DeliveryError",
]
