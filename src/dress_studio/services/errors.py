"""Custom service layer errors."""


class ServiceError(Exception):
    """Base error for service-layer failures."""

    status_code = 500


class ValidationError(ServiceError):
    """Raised when a business rule validation fails."""

    status_code = 400


class ConflictError(ServiceError):
    """Raised when a booking overlaps an existing rental of the same dress."""

    status_code = 400


class NotFoundError(ServiceError):
    """Raised when an entity is not found."""

    status_code = 404


class ReferentialGuardError(ServiceError):
    """Raised when deleting a row that dependent rentals still reference."""

    status_code = 400


class InvalidTransitionError(ServiceError):
    """Raised when a status change is not allowed from the current state."""

    status_code = 409


class StorageError(ServiceError):
    """Raised when the underlying persistence call fails."""

    status_code = 500
