"""Builds per-region spot price history queries"""

from datetime import datetime, timezone
from typing import Callable, Iterable, Sequence

from smoggytexas.exceptions import ConfigurationError
from smoggytexas.models.spot_price import LINUX_UNIX, PriceQuery, Region

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_instance_types(value: str | None) -> list[str]:
    """
    Split a comma-separated instance type list

    Whitespace is stripped, blank entries dropped and duplicates removed
    keeping first occurrence order.

    Args:
        value: Comma-separated instance types such as "t3.small,t3.micro"

    Returns:
        List of instance types (empty if none were given)
    """
    seen = []
    for item in (value or "").split(","):
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


def build_query(
    region: Region | str,
    instance_types: Sequence[str],
    product_description: str = LINUX_UNIX,
    clock: Clock = _utc_now
) -> PriceQuery:
    """
    Build the spot price history query for one region

    All instance types go into a single multi-valued filter, and the history
    starts at the time the query is built, so AWS returns the price currently
    in effect in each availability zone.

    Args:
        region: Region (or region code) to query
        instance_types: Instance types to price
        product_description: Product class to price
        clock: Source of the current time

    Returns:
        PriceQuery for the region

    Raises:
        ConfigurationError: If instance_types is empty
    """
    if not instance_types:
        raise ConfigurationError("At least one instance type is required")

    code = region.code if isinstance(region, Region) else region
    return PriceQuery(
        region=code,
        instance_types=tuple(instance_types),
        product_description=product_description,
        start_time=clock(),
    )


def build_queries(
    regions: Iterable[Region],
    instance_types: Sequence[str],
    product_description: str = LINUX_UNIX,
    clock: Clock = _utc_now
) -> list[PriceQuery]:
    """Build one query per region"""
    return [
        build_query(region, instance_types, product_description, clock)
        for region in regions
    ]
