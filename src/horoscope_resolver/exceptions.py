class HoroscopeResolverError(Exception):
    """Base exception for the horoscope resolver."""


class ConfigurationError(HoroscopeResolverError):
    """Raised when configuration is missing or invalid."""


class InvalidDateError(HoroscopeResolverError):
    """Raised when an explicit date override is not a valid YYYY-MM-DD date."""


class StoreError(HoroscopeResolverError):
    """Raised by content store adapters when a query fails."""
