"""Feed exceptions."""


class FeedError(Exception):
    """Base exception for upstream feed errors."""
    pass


class DataUnavailableError(FeedError):
    """Raised when round history cannot be fetched or parsed."""
    pass
