class HeatmapError(Exception):
    """Base class for every error raised by the mileage pipeline."""


class UpstreamUnavailable(HeatmapError):
    """The spreadsheet endpoint could not be reached or answered with an error status."""


class MalformedUpstreamPayload(HeatmapError):
    """The upstream body was not JSON, or decoded to something other than an array."""


class RowParseError(HeatmapError):
    """A single spreadsheet row could not be turned into a record. Never leaves the fetcher."""


class ClientFetchError(HeatmapError):
    """The dashboard could not load /api/data."""
