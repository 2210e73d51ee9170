"""
Error types raised while relaying a request.

Every `RelayError` that reaches an endpoint is reported to the client as
HTTP 400 with the exception message as the `error` field.
"""

class RelayError(Exception):
    """Base class for relay failures."""

class MissingInput(RelayError):
    """A required form field or uploaded file is absent."""

class InvalidShape(RelayError):
    """The request body does not have the expected structure."""

class UpstreamFailure(RelayError):
    """The inference API call raised."""

class ExtractionFailure(RelayError):
    """No answer text could be located in an inference response."""

class ConfigurationError(RelayError):
    """The service cannot start with the current settings."""
