"""Pytest configuration and fixtures"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from smoggytexas.models.spot_price import PricePoint, PriceQuery, Region


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep user config files and SMOGGYTEXAS_* variables out of tests"""
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in list(os.environ):
        if name.startswith("SMOGGYTEXAS_"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Undo setup_logging changes so caplog keeps working between tests"""
    yield
    logger = logging.getLogger("smoggytexas")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def sample_regions():
    """Create a small region catalog"""
    return [
        Region(code="us-east-1", description="US East (N. Virginia)"),
        Region(code="eu-west-1", description="Europe (Ireland)"),
        Region(code="ap-southeast-2", description="Asia Pacific (Sydney)"),
    ]


def make_point(region: str, price: float, zone_suffix: str = "a", instance_type: str = "t3.small") -> PricePoint:
    """Build a price point for tests"""
    return PricePoint(
        availability_zone=f"{region}{zone_suffix}",
        region=region,
        instance_type=instance_type,
        price=price,
        timestamp=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
    )


def make_query(region: str, instance_types=("t3.small",)) -> PriceQuery:
    """Build a price query for tests"""
    return PriceQuery(region=region, instance_types=tuple(instance_types))


class FakeSpotPrices:
    """Stand-in for SpotPriceService.query that tracks concurrency"""

    def __init__(self, results=None, delays=None, errors=None):
        self.results = results or {}
        self.delays = delays or {}
        self.errors = errors or {}
        self.calls = []
        self.deadlines = {}
        self.in_flight = 0
        self.max_in_flight = 0

    async def query(self, query: PriceQuery, deadline: float):
        self.calls.append(query.region)
        self.deadlines[query.region] = deadline
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(query.region, 0))
            if query.region in self.errors:
                raise self.errors[query.region]
            return list(self.results.get(query.region, []))
        finally:
            self.in_flight -= 1


@pytest.fixture
def fake_spot_prices():
    """Create a fake spot price source with no results configured"""
    return FakeSpotPrices()


def mock_ec2_client_for(ec2):
    """Wrap a mock EC2 client so it works with `async with get_ec2_client(region)`"""
    ec2.__aenter__ = AsyncMock(return_value=ec2)
    ec2.__aexit__ = AsyncMock(return_value=None)
    aws_client = Mock()
    aws_client.get_ec2_client = Mock(return_value=ec2)
    return aws_client
