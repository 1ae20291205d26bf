"""Custom exceptions for smoggytexas"""


class SmoggyTexasError(Exception):
    """Base exception for all smoggytexas errors"""
    pass


class ConfigurationError(SmoggyTexasError):
    """Raised when the run configuration is missing or invalid"""
    pass


class CatalogError(SmoggyTexasError):
    """Raised when the list of AWS regions cannot be fetched"""
    pass


class RegionQueryError(SmoggyTexasError):
    """Raised when the spot price query for a single region fails

    These errors are recovered by the dispatch engine: the region is logged
    and contributes no prices to the report.
    """

    def __init__(self, region: str, message: str):
        super().__init__(f"{region}: {message}")
        self.region = region
        self.reason = message


class UnauthorizedError(RegionQueryError):
    """Raised when credentials are missing, invalid or not allowed in a region"""
    pass


class ThrottledError(RegionQueryError):
    """Raised when AWS rejects a query because of rate limiting"""
    pass


class NetworkError(RegionQueryError):
    """Raised when the regional endpoint cannot be reached"""
    pass


class QueryTimeoutError(RegionQueryError):
    """Raised when a region does not answer before its deadline"""
    pass


class MalformedResponseError(RegionQueryError):
    """Raised when a region returns a response with an unexpected shape"""
    pass


class ValidationError(SmoggyTexasError):
    """Raised when API response validation fails"""
    pass


class MalformedPriceError(ValidationError):
    """Raised when a single spot price value is not a usable number"""
    pass
