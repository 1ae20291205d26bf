"""Spot price report command"""

import asyncio
import logging

from smoggytexas.cli.output import get_formatter
from smoggytexas.config.settings import load_settings
from smoggytexas.exceptions import CatalogError, ConfigurationError
from smoggytexas.services.query_builder import parse_instance_types
from smoggytexas.services.region_filter import parse_prefixes
from smoggytexas.services.report_service import build_report

from .base import print_error, status

logger = logging.getLogger("smoggytexas")


def cmd_spot_prices(args) -> int:
    """Spot prices across all regions command"""
    try:
        instance_types = parse_instance_types(args.instance_types)
        if not instance_types:
            raise ConfigurationError("The --instance-types flag is required.")

        settings = load_settings(
            aws_profile=args.profile,
            exclude_region_prefixes=args.exclude_regions,
            max_concurrent=args.max_concurrent,
            query_timeout=args.timeout,
            output_format=args.format,
        )
        formatter = get_formatter(settings.output_format)
    except (ConfigurationError, ValueError) as e:
        print_error(str(e))
        status(args.usage.rstrip())
        return 1

    try:
        report = asyncio.run(build_report(
            instance_types,
            parse_prefixes(settings.exclude_region_prefixes),
            settings
        ))
    except CatalogError as e:
        print_error(str(e), debug=args.verbose, exception=e)
        return 1

    logger.debug(report.dispatch.summary())
    output = formatter.format_spot_prices(report.points, report.regions, report.generated_at)
    if output:
        print(output)
    return 0
