"""
Error types for the plant care assistant.

Three kinds of failure reach callers:
- InputFailure: bad user input, caught before any AI call
- RequestFailure: the AI service could not be reached or returned nothing
- ParseFailure: the AI service replied, but the reply is not the expected shape
"""

from typing import Any, Dict, Optional

from fastapi import status


class PlantCareError(Exception):
    """Base class for every error the service reports to its callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "PLANT_CARE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InputFailure(PlantCareError):
    """Missing or unusable user input (no image, empty location, ...)."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "INPUT_FAILURE"


class RequestFailure(PlantCareError):
    """The AI service was unreachable, errored, or returned an empty payload."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "REQUEST_FAILURE"

    def __init__(
        self,
        message: str = "The AI service is unavailable right now. Please try again.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)


class ParseFailure(PlantCareError):
    """The AI service replied but the text does not match the expected shape.

    ``raw_text`` is kept for logging only; ``to_dict`` never includes it.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "PARSE_FAILURE"

    def __init__(self, kind: str, raw_text: str, reason: str = ""):
        self.kind = kind
        self.raw_text = raw_text
        self.reason = reason
        super().__init__("Analysis failed. Please try again with a clearer photo.")


class ConfigurationError(PlantCareError):
    """Required configuration (e.g. the AI credential) is missing."""

    error_code = "CONFIGURATION_ERROR"
