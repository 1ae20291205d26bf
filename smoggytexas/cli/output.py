"""Output formatters for the spot price report"""

import csv
import io
import json
from datetime import datetime
from typing import Mapping, Sequence

from tabulate import tabulate

from smoggytexas.models.spot_price import PricePoint


def format_price(price: float) -> str:
    """Format a price with thousands separators and three decimals"""
    return f"${price:,.3f}"


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as RFC 3339, using Z for a zero UTC offset"""
    stamp = moment.isoformat(timespec="seconds")
    if stamp.endswith("+00:00"):
        return stamp[:-6] + "Z"
    return stamp


class OutputFormatter:
    """Base class for report formatters"""

    def format_spot_prices(
        self,
        points: Sequence[PricePoint],
        regions: Mapping[str, str],
        generated_at: datetime
    ) -> str:
        raise NotImplementedError


class TextFormatter(OutputFormatter):
    """One line per price: price, description, region, zone, type, report time"""

    def format_spot_prices(self, points, regions, generated_at) -> str:
        stamp = format_timestamp(generated_at)
        lines = []
        for point in points:
            description = regions.get(point.region, point.region)
            lines.append(
                f"{format_price(point.price)} [{description}] {point.region} "
                f"{point.availability_zone} {point.instance_type} {stamp}"
            )
        return "\n".join(lines)


class TableFormatter(OutputFormatter):
    """Grid table output"""

    def format_spot_prices(self, points, regions, generated_at) -> str:
        if not points:
            return "No spot prices found."

        headers = ["Price", "Region", "Description", "Zone", "Instance Type", "Since"]
        rows = []
        for point in points:
            since = point.timestamp.strftime("%Y-%m-%d %H:%M") if point.timestamp else "N/A"
            rows.append([
                f"{format_price(point.price)}/hr",
                point.region,
                regions.get(point.region, point.region),
                point.availability_zone,
                point.instance_type,
                since,
            ])

        output = f"Spot prices as of {format_timestamp(generated_at)}:\n\n"
        output += tabulate(rows, headers=headers, tablefmt="grid")
        return output


class JSONFormatter(OutputFormatter):
    """JSON document output"""

    def format_spot_prices(self, points, regions, generated_at) -> str:
        prices = []
        for point in points:
            entry = point.to_dict()
            entry["region_description"] = regions.get(point.region, point.region)
            prices.append(entry)
        return json.dumps({
            "generated_at": format_timestamp(generated_at),
            "count": len(prices),
            "prices": prices,
        }, indent=2)


class CSVFormatter(OutputFormatter):
    """CSV output with a header row"""

    def format_spot_prices(self, points, regions, generated_at) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(["Price", "Region", "Description", "Zone", "Instance Type", "Timestamp"])
        for point in points:
            writer.writerow([
                point.price,
                point.region,
                regions.get(point.region, point.region),
                point.availability_zone,
                point.instance_type,
                point.timestamp.isoformat() if point.timestamp else "",
            ])
        return buffer.getvalue().rstrip("\n")


FORMATTERS = {
    "text": TextFormatter,
    "table": TableFormatter,
    "json": JSONFormatter,
    "csv": CSVFormatter,
}


def get_formatter(format_name: str) -> OutputFormatter:
    """Get a formatter instance by name

    Raises:
        ValueError: If the format is unknown
    """
    try:
        return FORMATTERS[format_name]()
    except KeyError:
        raise ValueError(
            f"Unknown output format '{format_name}'. Choose from: {', '.join(sorted(FORMATTERS))}"
        ) from None
