"""Runs the full region catalog -> dispatch -> aggregate pipeline"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Sequence

from smoggytexas.config.settings import Settings
from smoggytexas.exceptions import ConfigurationError
from smoggytexas.models.spot_price import PricePoint
from smoggytexas.services.aggregator import Aggregator
from smoggytexas.services.async_aws_client import AsyncAWSClient
from smoggytexas.services.dispatch_engine import DispatchEngine, DispatchReport, ResultSink
from smoggytexas.services.query_builder import build_queries
from smoggytexas.services.region_catalog import RegionCatalog, region_descriptions
from smoggytexas.services.region_filter import filter_regions
from smoggytexas.services.spot_price_service import SpotPriceService

logger = logging.getLogger("smoggytexas")


@dataclass
class SpotPriceReport:
    """Sorted spot prices plus what is needed to display them"""
    points: list[PricePoint]
    regions: Mapping[str, str]
    dispatch: DispatchReport
    generated_at: datetime


async def build_report(
    instance_types: Sequence[str],
    exclude_prefixes: Sequence[str],
    settings: Settings,
    catalog: RegionCatalog | None = None,
    price_service: SpotPriceService | None = None
) -> SpotPriceReport:
    """
    Fetch current spot prices for instance types across all regions

    Args:
        instance_types: Instance types to price
        exclude_prefixes: Region code prefixes to skip
        settings: Resolved application settings
        catalog: Region catalog (default: EC2 DescribeRegions)
        price_service: Spot price service (default: EC2 DescribeSpotPriceHistory)

    Returns:
        SpotPriceReport with prices sorted highest first

    Raises:
        ConfigurationError: If no instance types were given
        CatalogError: If the region list cannot be fetched
    """
    if not instance_types:
        raise ConfigurationError("At least one instance type is required")

    if catalog is None or price_service is None:
        aws_client = AsyncAWSClient(
            profile=settings.aws_profile,
            connect_timeout=settings.aws_connect_timeout,
            read_timeout=settings.aws_read_timeout,
            max_pool_connections=settings.max_pool_connections
        )
        catalog = catalog or RegionCatalog(aws_client, settings.catalog_region)
        price_service = price_service or SpotPriceService(aws_client)

    logger.debug(f"Instance types: {list(instance_types)}")
    all_regions = await catalog.list_regions()
    regions = filter_regions(all_regions, exclude_prefixes)
    if not regions:
        logger.warning("No regions left to query after applying exclusions")
    logger.debug(f"Regions to search: {[region.code for region in regions]}")

    queries = build_queries(regions, instance_types, settings.product_description)
    descriptions = region_descriptions(regions)
    engine = DispatchEngine(
        price_service.query,
        max_concurrent=settings.max_concurrent,
        timeout=settings.query_timeout,
        descriptions=descriptions
    )

    sink = ResultSink()
    dispatch_report, points = await asyncio.gather(
        engine.dispatch(queries, sink),
        Aggregator().collect(sink)
    )

    return SpotPriceReport(
        points=points,
        regions=descriptions,
        dispatch=dispatch_report,
        generated_at=datetime.now().astimezone()
    )
