"""
Error types raised by the predictive analytics pipeline.

Statistical edge cases (short series, zero variance, no keyword hits) never
raise; they return documented neutral defaults. Only conditions that make a
complete aggregate impossible propagate to the caller:

- AuthenticationMissingError: no user identity was supplied
- UpstreamUnavailableError: the historical data source or state store failed

Routers translate these into 401 and 503 responses respectively.
"""


class PredictiveAnalyticsError(Exception):
    """Base class for failures that abort an analytics run."""


class AuthenticationMissingError(PredictiveAnalyticsError):
    """Raised when an analytics run is requested without a user identity."""

    def __init__(self, message: str = "User identity is required") -> None:
        super().__init__(message)


class UpstreamUnavailableError(PredictiveAnalyticsError):
    """Raised when an external collaborator (database, data source) fails."""
