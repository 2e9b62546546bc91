# src/exceptions.py

"""Exception hierarchy for the ShopWise tracker."""


class TrackerError(Exception):
    """Base exception for every failure the tracker reports."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidObservation(TrackerError):
    """A scrape result is malformed and must not be persisted.

    Raised for an empty product id, a missing, negative or non-finite
    price, or a non-integer timestamp.
    """


class StorageUnavailable(TrackerError):
    """The key-value store could not be read, decoded or written."""


class EmptyHistory(TrackerError):
    """Trend analysis was asked to summarise zero price points."""

    def __init__(self, message: str = "History has no price points") -> None:
        super().__init__(message)


class ScrapeError(TrackerError):
    """A product page could not be fetched."""
