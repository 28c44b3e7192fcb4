from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when an activity is configured in a way the engine cannot evaluate."""


class LocationNotConfiguredError(ConfigurationError):
    """No geofence source applies to the requested slot/day."""


class InvalidLocationDataError(ConfigurationError):
    """A geofence source holds non-numeric or non-finite coordinates."""

    def __init__(self, message: str, *, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class InvalidSlotTimeError(ConfigurationError):
    """A slot start/end time is not a valid HH:MM value."""


class PersistenceFailure(DomainError):
    """Raised by a check-in gateway when a computed submission cannot be stored."""
