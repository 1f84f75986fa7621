"""Application error taxonomy mapped to HTTP status codes."""


class StudioError(Exception):
    """Base error for workflow failures surfaced to callers."""

    status_code = 500

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class SchemaMissingError(StudioError):
    """Required tables do not exist in the backing store yet."""

    status_code = 503


class FormValidationError(StudioError):
    """A required form field is missing or malformed."""

    status_code = 422


class ConfirmationRequiredError(FormValidationError):
    """A destructive action was requested without confirmation."""

    status_code = 409


class InvalidTransitionError(StudioError):
    """A workflow was driven from a state that does not allow it."""

    status_code = 409


class PhotoNotFoundError(StudioError):
    """The photo is not present in the content cache."""

    status_code = 404


class StoreReadError(StudioError):
    """Listing records failed for a reason other than a missing schema."""

    status_code = 502


class StoreWriteError(StudioError):
    """An insert, update, delete or object upload was rejected."""

    status_code = 502


class CaptionGenerationError(StudioError):
    """The caption generator failed or returned nothing."""

    status_code = 502
