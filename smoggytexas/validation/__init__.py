"""API response validation module"""

from smoggytexas.exceptions import MalformedPriceError, ValidationError

from .api_validators import (
    validate_spot_price_response,
    validate_price_value,
)

__all__ = [
    "ValidationError",
    "MalformedPriceError",
    "validate_spot_price_response",
    "validate_price_value",
]
