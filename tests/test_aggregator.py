"""Tests for result aggregation and price ordering"""

import asyncio

import pytest

from smoggytexas.services.aggregator import Aggregator, sort_by_price
from smoggytexas.services.dispatch_engine import DispatchEngine, ResultSink

from conftest import FakeSpotPrices, make_point, make_query


class TestSortByPrice:
    """Tests for sort_by_price"""

    def test_highest_price_first(self):
        """Test that the most expensive point comes first"""
        points = [
            make_point("us-east-1", 0.015),
            make_point("eu-west-1", 0.1),
            make_point("ap-southeast-2", 0.032),
        ]

        result = sort_by_price(points)

        assert [p.price for p in result] == [0.1, 0.032, 0.015]

    def test_ordering_is_non_increasing(self):
        """Test ordering with repeated prices"""
        prices = [0.5, 0.1, 0.5, 0.0, 2.25, 0.1, 1.0]
        points = [make_point("us-east-1", price, zone_suffix=str(i)) for i, price in enumerate(prices)]

        result = sort_by_price(points)

        assert all(a.price >= b.price for a, b in zip(result, result[1:]))
        assert len(result) == len(points)

    def test_resorting_is_idempotent(self):
        """Test that sorting a reversed sorted list gives the same prices"""
        points = [make_point("us-east-1", price, zone_suffix=str(i)) for i, price in enumerate([0.3, 0.7, 0.1])]

        once = sort_by_price(points)
        twice = sort_by_price(sort_by_price(list(reversed(once))))

        assert [p.price for p in twice] == [p.price for p in once]

    def test_empty_input(self):
        """Test that no points sort to an empty list"""
        assert sort_by_price([]) == []


class TestAggregator:
    """Tests for Aggregator"""

    @pytest.mark.asyncio
    async def test_collect_merges_batches(self):
        """Test that batches from every region are concatenated and sorted"""
        sink = ResultSink()
        sink.publish([make_point("us-east-1", 0.015), make_point("us-east-1", 0.032, "b")])
        sink.publish([make_point("eu-west-1", 0.02)])
        sink.close()

        result = await Aggregator().collect(sink)

        assert [p.price for p in result] == [0.032, 0.02, 0.015]

    @pytest.mark.asyncio
    async def test_two_instance_types_sorted_by_price(self):
        """Test t3.small prices 0.015 and 0.032 come out with 0.032 first"""
        fake = FakeSpotPrices(results={
            "us-east-1": [
                make_point("us-east-1", 0.015, "a", "t3.small"),
                make_point("us-east-1", 0.032, "b", "t3.small"),
            ],
        })
        engine = DispatchEngine(fake.query)
        sink = ResultSink()
        query = make_query("us-east-1", instance_types=("t3.small", "t3.micro"))

        _, result = await asyncio.gather(
            engine.dispatch([query], sink),
            Aggregator().collect(sink),
        )

        assert [(p.instance_type, p.price) for p in result] == [
            ("t3.small", 0.032),
            ("t3.small", 0.015),
        ]

    @pytest.mark.asyncio
    async def test_collect_waits_for_completion(self):
        """Test that collect keeps reading until the sink is closed"""
        sink = ResultSink()
        collector = asyncio.ensure_future(Aggregator().collect(sink))

        sink.publish([make_point("us-east-1", 0.1)])
        await asyncio.sleep(0)
        assert not collector.done()

        sink.publish([make_point("eu-west-1", 0.2)])
        sink.close()
        result = await collector

        assert [p.region for p in result] == ["eu-west-1", "us-east-1"]

    def test_finalize_before_completion_raises(self):
        """Test that results cannot be finalized while dispatch is still running"""
        sink = ResultSink()

        with pytest.raises(RuntimeError, match="before dispatch has completed"):
            Aggregator().finalize(sink)

    @pytest.mark.asyncio
    async def test_failed_regions_absent_from_results(self):
        """Test that no point carries the code of a region that failed"""
        from smoggytexas.exceptions import ThrottledError

        fake = FakeSpotPrices(
            results={
                "us-east-1": [make_point("us-east-1", 0.1)],
                "eu-west-1": [make_point("eu-west-1", 0.2)],
            },
            errors={"eu-west-1": ThrottledError("eu-west-1", "RequestLimitExceeded")},
        )
        engine = DispatchEngine(fake.query)
        sink = ResultSink()

        _, result = await asyncio.gather(
            engine.dispatch([make_query("us-east-1"), make_query("eu-west-1")], sink),
            Aggregator().collect(sink),
        )

        assert all(p.region != "eu-west-1" for p in result)
        assert len(result) == 1
