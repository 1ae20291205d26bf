"""Async AWS client wrapper using aioboto3"""

from contextlib import asynccontextmanager
from typing import Optional

import aioboto3
from botocore.config import Config


class AsyncAWSClient:
    """Async factory for per-region EC2 clients sharing one aioboto3 session"""

    def __init__(
        self,
        profile: Optional[str] = None,
        connect_timeout: int = 5,
        read_timeout: int = 5,
        max_pool_connections: int = 10
    ):
        """
        Initialize async AWS client

        Args:
            profile: Optional AWS profile name
            connect_timeout: Connection timeout in seconds (default: 5)
            read_timeout: Read timeout for AWS API calls in seconds (default: 5)
            max_pool_connections: Maximum connections in the pool (default: 10)
        """
        self.profile = profile
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.max_pool_connections = max_pool_connections
        self._session = None

    def _get_session(self) -> aioboto3.Session:
        """Get aioboto3 session (lazy initialization)"""
        if self._session is None:
            if self.profile:
                self._session = aioboto3.Session(profile_name=self.profile)
            else:
                self._session = aioboto3.Session()
        return self._session

    def _client_config(self) -> Config:
        # A failed region is final for the run, so botocore must not retry
        return Config(
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
            retries={'max_attempts': 1, 'mode': 'standard'},
            max_pool_connections=self.max_pool_connections
        )

    @asynccontextmanager
    async def get_ec2_client(self, region: str):
        """
        Get an EC2 client bound to a region

        The client and its HTTP session are closed when the block exits,
        including when the surrounding task is cancelled.

        Usage:
            async with client.get_ec2_client("eu-west-1") as ec2:
                response = await ec2.describe_spot_price_history(...)
        """
        session = self._get_session()
        async with session.client("ec2", region_name=region, config=self._client_config()) as ec2:
            yield ec2
