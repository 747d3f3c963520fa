"""Mikrotik Display client errors."""

from .const import (
    ERROR_CANNOT_CONNECT,
    ERROR_INVALID_FORM,
    ERROR_INVALID_RESPONSE,
    ERROR_SAVE_FAILED,
    ERROR_UNKNOWN,
    SAVE_FAILED,
)


class MikrotikDisplayError(Exception):
    """Base Mikrotik Display error."""

    default_code = ERROR_UNKNOWN

    def __init__(  # noqa: D107
        self,
        message: str | None = None,
        error_code: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code


class CannotConnect(MikrotikDisplayError):
    """Request never reached the device or got no answer."""

    default_code = ERROR_CANNOT_CONNECT


class InvalidResponse(MikrotikDisplayError):
    """Device answered with a body that is not the expected JSON."""

    default_code = ERROR_INVALID_RESPONSE


class SaveFailed(MikrotikDisplayError):
    """Save endpoint answered with a non-success status."""

    default_code = ERROR_SAVE_FAILED

    def __init__(self, status: int | None = None) -> None:  # noqa: D107
        super().__init__(SAVE_FAILED)
        self.status = status


class FormInvalid(MikrotikDisplayError):
    """Form did not pass the page's field constraints."""

    default_code = ERROR_INVALID_FORM

    def __init__(self, section: str, errors: dict[str, str]) -> None:  # noqa: D107
        super().__init__(f"Invalid {section} form: {errors}")
        self.section = section
        self.errors = errors
