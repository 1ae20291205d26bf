"""Tests for API response validators"""

import pytest

from smoggytexas.validation import (
    MalformedPriceError,
    ValidationError,
    validate_price_value,
    validate_spot_price_response,
)


class TestValidateSpotPriceResponse:
    """Tests for validate_spot_price_response"""

    def test_valid_response(self):
        """Test that a well-formed response passes"""
        validate_spot_price_response({
            'SpotPriceHistory': [
                {'AvailabilityZone': 'us-east-1a', 'InstanceType': 't3.small', 'SpotPrice': '0.0104'},
            ],
            'NextToken': '',
        })

    def test_missing_history_is_valid(self):
        """Test that a response with no history list is allowed"""
        validate_spot_price_response({})

    def test_bad_price_is_not_checked_here(self):
        """Test that price values are left to validate_price_value"""
        validate_spot_price_response({
            'SpotPriceHistory': [
                {'AvailabilityZone': 'us-east-1a', 'InstanceType': 't3.small', 'SpotPrice': 'n/a'},
            ]
        })

    @pytest.mark.parametrize("response,message", [
        ([], "response type"),
        ({'SpotPriceHistory': 'nope'}, "expected list"),
        ({'SpotPriceHistory': ['nope']}, "expected dict"),
        ({'SpotPriceHistory': [{'AvailabilityZone': 'us-east-1a'}]}, "InstanceType"),
        ({'SpotPriceHistory': [{'InstanceType': 't3.small', 'AvailabilityZone': 5}]}, "AvailabilityZone"),
    ])
    def test_invalid_structure(self, response, message):
        """Test that structural problems raise ValidationError"""
        with pytest.raises(ValidationError, match=message):
            validate_spot_price_response(response)


class TestValidatePriceValue:
    """Tests for validate_price_value"""

    @pytest.mark.parametrize("value,expected", [
        ("0.0104", 0.0104),
        ("0", 0.0),
        (1, 1.0),
        (2.5, 2.5),
    ])
    def test_valid_prices(self, value, expected):
        """Test that numeric strings and numbers convert to float"""
        assert validate_price_value(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf", "-0.5", [0.1]])
    def test_malformed_prices(self, value):
        """Test that unusable values raise MalformedPriceError"""
        with pytest.raises(MalformedPriceError):
            validate_price_value(value)

    def test_large_price_accepted(self):
        """Test that a large but finite price is a valid price"""
        assert validate_price_value("12000.5") == 12000.5

    def test_context_in_message(self):
        """Test that the context describes the failing value"""
        with pytest.raises(MalformedPriceError, match="spot price for t3.small"):
            validate_price_value("abc", context="spot price for t3.small in us-east-1a")

    def test_malformed_price_is_validation_error(self):
        """Test the exception hierarchy"""
        assert issubclass(MalformedPriceError, ValidationError)
