"""Tests for validation, error mapping and the response envelope."""
import pytest
from api_response import (
    APIError,
    ValidationError,
    error_response,
    handle_weather_api_error,
    success_response,
    validate_days,
    validate_location,
    validate_units,
)
from weather_provider import MalformedResponseError, TransientFetchError, UpstreamError


@pytest.mark.parametrize("location", ["London", "NY", "x" * 100])
def test_valid_locations(location):
    validate_location(location)


@pytest.mark.parametrize("location", [None, "", "L", "x" * 101])
def test_invalid_locations(location):
    with pytest.raises(ValidationError):
        validate_location(location)


@pytest.mark.parametrize("units", ["", None, "metric", "imperial", "kelvin"])
def test_valid_units(units):
    validate_units(units)


def test_invalid_units_lists_choices():
    with pytest.raises(ValidationError) as exc_info:
        validate_units("celsius")
    assert "metric, imperial, kelvin" in exc_info.value.message
    assert exc_info.value.value == "celsius"


@pytest.mark.parametrize("days,valid", [(0, False), (1, True), (5, True), (6, False)])
def test_validate_days(days, valid):
    if valid:
        validate_days(days)
    else:
        with pytest.raises(ValidationError):
            validate_days(days)


@pytest.mark.parametrize("error,code,message", [
    (UpstreamError(401, "unauthorized"), 401, "Invalid API key"),
    (UpstreamError(404, "city not found"), 404, "Location not found"),
    (UpstreamError(429, "slow down"), 429, "Rate limit exceeded"),
    (UpstreamError(500, "boom"), 502, "Weather service error"),
    (TransientFetchError("Network error: timed out"), 503, "Weather service temporarily unavailable"),
    (MalformedResponseError("missing 'main' block"), 502, "Unexpected response from weather service"),
    (RuntimeError("unexpected"), 500, "Internal server error"),
])
def test_handle_weather_api_error(error, code, message):
    api_error = handle_weather_api_error(error)

    assert api_error.code == code
    assert api_error.message == message


def test_validation_error_maps_to_400():
    api_error = handle_weather_api_error(ValidationError("days", "Must be at least 1", 0))

    assert api_error.code == 400
    assert api_error.message == "Invalid days parameter"
    assert api_error.validation == [{"field": "days", "message": "Must be at least 1", "value": "0"}]


def test_api_error_passes_through():
    original = APIError(418, "Teapot")
    assert handle_weather_api_error(original) is original


def test_success_envelope():
    assert success_response({"a": 1}) == {"success": True, "data": {"a": 1}}


def test_error_envelope():
    envelope = error_response(handle_weather_api_error(UpstreamError(404, "city not found")))

    assert envelope["success"] is False
    assert "data" not in envelope
    assert envelope["error"]["code"] == 404
    assert envelope["error"]["error"] == "Not Found"
    assert envelope["error"]["message"] == "Location not found"
    assert envelope["error"]["details"] == "The specified location could not be found"


def test_error_envelope_includes_validation():
    envelope = error_response(handle_weather_api_error(ValidationError("units", "Must be one of: metric", "x")))

    assert envelope["error"]["code"] == 400
    assert envelope["error"]["error"] == "Bad Request"
    assert envelope["error"]["validation"][0]["field"] == "units"
