"""Request validation, error-to-status mapping and the response envelope."""
from http import HTTPStatus
from typing import Any, Dict, List, Optional

from weather_provider import (
    MalformedResponseError,
    TransientFetchError,
    UpstreamError,
    WeatherProviderError,
)

VALID_UNITS = ("metric", "imperial", "kelvin")
MIN_LOCATION_LENGTH = 2
MAX_LOCATION_LENGTH = 100


class ValidationError(ValueError):
    """Caller supplied a malformed parameter."""

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")


class APIError(Exception):
    """Error ready to be rendered in the response envelope."""

    def __init__(self, code: int, message: str, details: Optional[str] = None):
        self.code = code
        self.message = message
        self.details = details
        self.validation: List[Dict[str, Any]] = []
        super().__init__(f"API Error {code}: {message}")

    def add_validation_error(self, field: str, message: str, value: Any = None) -> None:
        entry = {"field": field, "message": message}
        if value not in (None, ""):
            entry["value"] = str(value)
        self.validation.append(entry)


def validate_location(location: Optional[str]) -> None:
    if not location:
        raise ValidationError("location", "Location is required", location)
    if len(location) < MIN_LOCATION_LENGTH:
        raise ValidationError(
            "location", f"Location must be at least {MIN_LOCATION_LENGTH} characters long", location
        )
    if len(location) > MAX_LOCATION_LENGTH:
        raise ValidationError(
            "location", f"Location must be less than {MAX_LOCATION_LENGTH} characters", location
        )


def validate_units(units: Optional[str]) -> None:
    # Empty means "use the default"
    if not units:
        return
    if units not in VALID_UNITS:
        raise ValidationError("units", f"Must be one of: {', '.join(VALID_UNITS)}", units)


def validate_days(days: int) -> None:
    if days < 1:
        raise ValidationError("days", "Must be at least 1", days)
    if days > 5:
        raise ValidationError("days", "Must be 5 or less (OpenWeatherMap limitation)", days)


def handle_weather_api_error(error: Exception) -> APIError:
    """Translate a validation or fetch failure into an APIError with an HTTP status."""
    if isinstance(error, APIError):
        return error

    if isinstance(error, ValidationError):
        api_error = APIError(HTTPStatus.BAD_REQUEST, f"Invalid {error.field} parameter")
        api_error.add_validation_error(error.field, error.message, error.value)
        return api_error

    if isinstance(error, UpstreamError):
        if error.status_code == HTTPStatus.UNAUTHORIZED:
            return APIError(
                HTTPStatus.UNAUTHORIZED, "Invalid API key", "Please check your OpenWeatherMap API key"
            )
        if error.status_code == HTTPStatus.NOT_FOUND:
            return APIError(
                HTTPStatus.NOT_FOUND, "Location not found", "The specified location could not be found"
            )
        if error.status_code == HTTPStatus.TOO_MANY_REQUESTS:
            return APIError(HTTPStatus.TOO_MANY_REQUESTS, "Rate limit exceeded", "Please try again later")
        return APIError(HTTPStatus.BAD_GATEWAY, "Weather service error", str(error))

    if isinstance(error, TransientFetchError):
        return APIError(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "Weather service temporarily unavailable",
            "Please try again later",
        )

    if isinstance(error, MalformedResponseError):
        return APIError(HTTPStatus.BAD_GATEWAY, "Unexpected response from weather service", str(error))

    if isinstance(error, WeatherProviderError):
        return APIError(HTTPStatus.BAD_GATEWAY, "Weather service error", str(error))

    return APIError(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error", str(error))


def success_response(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


def error_response(error: APIError) -> Dict[str, Any]:
    code = int(error.code)
    body: Dict[str, Any] = {
        "error": HTTPStatus(code).phrase,
        "code": code,
        "message": error.message,
    }
    if error.details:
        body["details"] = error.details
    if error.validation:
        body["validation"] = list(error.validation)
    return {"success": False, "error": body}
