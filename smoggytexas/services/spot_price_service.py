"""Async EC2 spot price history service using aioboto3"""

import asyncio
import logging

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from smoggytexas.exceptions import (
    MalformedPriceError,
    MalformedResponseError,
    NetworkError,
    QueryTimeoutError,
    RegionQueryError,
    ThrottledError,
    UnauthorizedError,
    ValidationError,
)
from smoggytexas.models.spot_price import PricePoint, PriceQuery
from smoggytexas.services.async_aws_client import AsyncAWSClient
from smoggytexas.validation import validate_price_value, validate_spot_price_response

logger = logging.getLogger("smoggytexas")

AUTH_ERROR_CODES = frozenset({
    "AuthFailure",
    "UnauthorizedOperation",
    "InvalidClientTokenId",
    "UnrecognizedClientException",
    "SignatureDoesNotMatch",
    "ExpiredToken",
    "OptInRequired",
    "AccessDenied",
    "AccessDeniedException",
})

THROTTLE_ERROR_CODES = frozenset({
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
})


def classify_client_error(region: str, error: ClientError) -> RegionQueryError:
    """Map a botocore ClientError to the matching RegionQueryError"""
    error_code = error.response.get("Error", {}).get("Code", "Unknown")
    message = error.response.get("Error", {}).get("Message", str(error))
    if error_code in AUTH_ERROR_CODES:
        return UnauthorizedError(region, f"{error_code}: {message}")
    if error_code in THROTTLE_ERROR_CODES or "429" in str(error):
        return ThrottledError(region, f"{error_code}: {message}")
    return RegionQueryError(region, f"{error_code}: {message}")


class SpotPriceService:
    """Fetches current spot prices for one region at a time"""

    def __init__(self, aws_client: AsyncAWSClient):
        """
        Initialize spot price service

        Args:
            aws_client: Async AWS client wrapper
        """
        self.aws_client = aws_client

    async def query(self, query: PriceQuery, deadline: float) -> list[PricePoint]:
        """
        Run a spot price history query against the query's region

        Args:
            query: Query to run
            deadline: Absolute event loop time (loop.time()) by which the
                whole query, including every page, must finish

        Returns:
            Price points for the region (possibly empty)

        Raises:
            QueryTimeoutError: If the deadline passes first
            UnauthorizedError: If credentials are missing or rejected
            ThrottledError: If AWS rate limits the request
            NetworkError: If the endpoint cannot be reached
            MalformedResponseError: If the response has an unexpected shape
            RegionQueryError: For any other API error
        """
        region = query.region
        remaining = deadline - asyncio.get_running_loop().time()
        if remaining <= 0:
            raise QueryTimeoutError(region, "deadline passed before the query started")

        try:
            records = await asyncio.wait_for(self._fetch_history(query), timeout=remaining)
        except asyncio.TimeoutError as e:
            raise QueryTimeoutError(region, f"no response within {remaining:.1f}s") from e
        except NoCredentialsError as e:
            raise UnauthorizedError(region, "AWS credentials not found") from e
        except ClientError as e:
            raise classify_client_error(region, e) from e
        except BotoCoreError as e:
            raise NetworkError(region, str(e)) from e
        except ValidationError as e:
            raise MalformedResponseError(region, str(e)) from e

        return self._to_price_points(query, records)

    async def _fetch_history(self, query: PriceQuery) -> list[dict]:
        """Fetch every page of spot price history for a query"""
        records = []
        request_params = query.to_request_params()
        async with self.aws_client.get_ec2_client(query.region) as ec2:
            while True:
                response = await ec2.describe_spot_price_history(**request_params)
                validate_spot_price_response(response)
                records.extend(response.get('SpotPriceHistory') or [])

                next_token = response.get('NextToken')
                if not next_token:
                    break
                request_params['NextToken'] = next_token
        return records

    def _to_price_points(self, query: PriceQuery, records: list[dict]) -> list[PricePoint]:
        """Convert raw history records, skipping any with an unusable price"""
        points = []
        for record in records:
            instance_type = record['InstanceType']
            zone = record['AvailabilityZone']
            try:
                price = validate_price_value(
                    record.get('SpotPrice'),
                    context=f"spot price for {instance_type} in {zone}"
                )
            except MalformedPriceError as e:
                logger.warning(f"Skipping data point in {query.region}: {e}")
                continue

            points.append(PricePoint(
                availability_zone=zone,
                region=query.region,
                instance_type=instance_type,
                price=price,
                timestamp=record.get('Timestamp'),
            ))
        return points
