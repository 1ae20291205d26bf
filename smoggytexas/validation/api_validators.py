"""API response validators for DescribeSpotPriceHistory data"""

import math
from typing import Any

from smoggytexas.exceptions import MalformedPriceError, ValidationError


def validate_spot_price_response(response: dict) -> None:
    """
    Validate the structure of a DescribeSpotPriceHistory API response

    Price values are not checked here; a bad price only invalidates its own
    data point (see validate_price_value).

    Args:
        response: Raw response from describe_spot_price_history

    Raises:
        ValidationError: If response structure is invalid
    """
    if not isinstance(response, dict):
        raise ValidationError(
            f"Invalid spot price response type: {type(response)}"
        )

    # SpotPriceHistory field is optional (empty if no data)
    spot_history = response.get("SpotPriceHistory")
    if spot_history is not None and not isinstance(spot_history, list):
        raise ValidationError(
            f"Invalid 'SpotPriceHistory' type: {type(spot_history)} (expected list)"
        )

    for i, price_point in enumerate(spot_history or []):
        if not isinstance(price_point, dict):
            raise ValidationError(
                f"Invalid spot price point {i}: {type(price_point)} (expected dict)"
            )

        instance_type = price_point.get("InstanceType")
        if not instance_type or not isinstance(instance_type, str):
            raise ValidationError(
                f"Missing or invalid 'InstanceType' in spot price point {i}"
            )

        zone = price_point.get("AvailabilityZone")
        if not zone or not isinstance(zone, str):
            raise ValidationError(
                f"Missing or invalid 'AvailabilityZone' for {instance_type} in spot price point {i}"
            )


def validate_price_value(price: Any, context: str = "price") -> float:
    """
    Validate and convert a price value

    Args:
        price: Price value to validate (can be str, int, float)
        context: Description for error messages

    Returns:
        Validated price as float

    Raises:
        MalformedPriceError: If price is missing, not numeric, not finite
            or negative
    """
    if price is None:
        raise MalformedPriceError(f"{context} is None")

    try:
        price_float = float(price)
    except (ValueError, TypeError) as e:
        raise MalformedPriceError(
            f"Invalid {context} format: {price!r} (type: {type(price).__name__})"
        ) from e

    if not math.isfinite(price_float):
        raise MalformedPriceError(f"Non-finite {context}: {price!r}")

    if price_float < 0:
        raise MalformedPriceError(
            f"Negative {context}: {price_float}"
        )

    return price_float
