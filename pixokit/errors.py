"""Common error types shared across the platform helpers."""

DEFAULT_RECORD_NOT_FOUND_MESSAGE = "record not found"


class NotFoundError(LookupError):
    """Raised when an object of a given type does not exist."""

    def __init__(self, object_type: str) -> None:
        self.object_type = object_type
        super().__init__(f"{object_type} not found")


class RequiredError(ValueError):
    """Raised when a required field is missing."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"{field_name} is required")


def error_not_found(object_type: str) -> NotFoundError:
    """Build the error reporting that an object of ``object_type`` was not found."""
    return NotFoundError(object_type)


def error_required(field_name: str) -> RequiredError:
    """Build the error reporting that ``field_name`` is required."""
    return RequiredError(field_name)