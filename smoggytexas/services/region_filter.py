"""Region exclusion by code prefix"""

import logging
from typing import Iterable, Sequence

from smoggytexas.models.spot_price import Region

logger = logging.getLogger("smoggytexas")


def parse_prefixes(value: str | None) -> list[str]:
    """
    Split a comma-separated prefix list from the command line or config

    Blank entries (e.g. from a trailing comma) are dropped. When nothing is
    left the result is [""], which filter_regions treats as "no exclusions".

    Args:
        value: Comma-separated prefixes such as "us-gov,cn-"

    Returns:
        List of prefixes
    """
    prefixes = [p.strip() for p in (value or "").split(",") if p.strip()]
    return prefixes or [""]


def filter_regions(regions: Iterable[Region], exclude_prefixes: Sequence[str]) -> list[Region]:
    """
    Drop regions whose code starts with any excluded prefix

    A prefix list consisting of a single empty string means no exclusions
    and returns every region unchanged.

    Args:
        regions: Candidate regions
        exclude_prefixes: Region code prefixes to skip

    Returns:
        Regions that survive the filter, in their original order
    """
    regions = list(regions)
    if len(exclude_prefixes) == 1 and exclude_prefixes[0] == "":
        return regions

    prefixes = tuple(exclude_prefixes)
    kept = []
    for region in regions:
        if region.code.startswith(prefixes):
            logger.debug(f"Excluding region {region.code}")
            continue
        kept.append(region)
    return kept
