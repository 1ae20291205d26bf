"""AWS region catalog"""

import logging
from types import MappingProxyType
from typing import Iterable, Mapping

from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from smoggytexas.exceptions import CatalogError
from smoggytexas.models.region_mapping import get_region_description
from smoggytexas.models.spot_price import Region
from smoggytexas.services.async_aws_client import AsyncAWSClient

logger = logging.getLogger("smoggytexas")


class RegionCatalog:
    """Lists the regions enabled for the current AWS account"""

    def __init__(self, aws_client: AsyncAWSClient, catalog_region: str = "us-east-1"):
        """
        Args:
            aws_client: Async AWS client wrapper
            catalog_region: Region whose endpoint answers DescribeRegions
        """
        self.aws_client = aws_client
        self.catalog_region = catalog_region

    async def list_regions(self) -> list[Region]:
        """
        Get every region enabled for the account, sorted by code

        Returns:
            List of regions with display descriptions

        Raises:
            CatalogError: If the region list cannot be fetched or is empty
        """
        try:
            async with self.aws_client.get_ec2_client(self.catalog_region) as ec2:
                # Without AllRegions only opted-in regions are returned
                response = await ec2.describe_regions()
        except NoCredentialsError as e:
            logger.error("AWS credentials not found when listing regions")
            raise CatalogError(
                "AWS credentials not found. Please configure credentials using:\n"
                "  - AWS CLI: aws configure\n"
                "  - Environment variables: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY\n"
                "  - Or specify a profile with --profile"
            ) from e
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to list regions from {self.catalog_region}: {e}")
            raise CatalogError(f"Failed to list regions: {str(e)}") from e

        codes = sorted({item["RegionName"] for item in response.get("Regions", [])})
        if not codes:
            raise CatalogError(f"No regions returned by {self.catalog_region}")

        logger.debug(f"Found {len(codes)} regions")
        return [Region(code=code, description=get_region_description(code)) for code in codes]


def region_descriptions(regions: Iterable[Region]) -> Mapping[str, str]:
    """Build a read-only region code to description lookup"""
    return MappingProxyType({region.code: region.description for region in regions})
