"""Spot price data models"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

LINUX_UNIX = "Linux/UNIX"


@dataclass(frozen=True)
class Region:
    """An AWS region and its display name"""
    code: str
    description: str


@dataclass(frozen=True)
class PriceQuery:
    """One DescribeSpotPriceHistory request for a single region"""
    region: str
    instance_types: tuple[str, ...]
    product_description: str = LINUX_UNIX
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_request_params(self) -> dict:
        """Render the query as DescribeSpotPriceHistory keyword arguments"""
        return {
            'Filters': [
                {'Name': 'instance-type', 'Values': list(self.instance_types)},
            ],
            'ProductDescriptions': [self.product_description],
            'StartTime': self.start_time,
        }


@dataclass(frozen=True)
class PricePoint:
    """Spot price of one instance type in one availability zone"""
    availability_zone: str
    region: str
    instance_type: str
    price: float
    timestamp: datetime | None = None

    def to_dict(self) -> dict:
        """Convert price point to a JSON-friendly dictionary"""
        return {
            "price": self.price,
            "region": self.region,
            "availability_zone": self.availability_zone,
            "instance_type": self.instance_type,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


class RegionState(str, Enum):
    """Lifecycle of a single region's query inside the dispatch engine"""
    PENDING = "pending"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (RegionState.SUCCEEDED, RegionState.FAILED, RegionState.TIMED_OUT)


_TRANSITIONS = {
    RegionState.PENDING: {RegionState.QUEUED},
    RegionState.QUEUED: {RegionState.RUNNING},
    RegionState.RUNNING: {RegionState.SUCCEEDED, RegionState.FAILED, RegionState.TIMED_OUT},
}


@dataclass
class RegionOutcome:
    """What happened to one region during a dispatch run"""
    region: str
    state: RegionState = RegionState.PENDING
    point_count: int = 0
    error: str | None = None
    elapsed: float = 0.0

    def advance(self, state: RegionState) -> None:
        """Move to the next lifecycle state.

        Raises:
            RuntimeError: If the transition is not allowed from the current state
        """
        if state not in _TRANSITIONS.get(self.state, set()):
            raise RuntimeError(
                f"Invalid state transition for {self.region}: {self.state.value} -> {state.value}"
            )
        self.state = state
